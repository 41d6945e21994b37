"""Domain-specific exceptions for sales services."""


class SalesServiceError(Exception):
    """Base exception for sales services."""
    pass


class SaleNotAllowedError(SalesServiceError):
    """Raised when the terminal, retailer or voucher type cannot sell."""
    pass


class InsufficientBalanceError(SalesServiceError):
    """Raised when a sale would take the retailer past its credit limit."""
    pass


class InvalidDateRangeError(SalesServiceError):
    """Raised when a report start date is after its end date."""
    pass
