"""Domain-specific exceptions for finance services."""


class FinanceServiceError(Exception):
    """Base exception for finance services."""
    pass


class RetailerNotFoundError(FinanceServiceError):
    """Raised when the retailer of a balance operation does not exist."""
    pass


class FeeConfigurationNotFoundError(FinanceServiceError):
    """Raised when no fee configuration exists for a deposit method."""
    pass


class InvalidDepositError(FinanceServiceError):
    """Raised when a deposit or removal cannot be applied."""
    pass


class InvalidCreditAdjustmentError(FinanceServiceError):
    """Raised when a credit limit change cannot be applied."""
    pass
