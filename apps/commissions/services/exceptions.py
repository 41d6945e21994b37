"""Domain-specific exceptions for commissions services."""


class CommissionsServiceError(Exception):
    """Base exception for commissions services."""
    pass


class CommissionGroupNotFoundError(CommissionsServiceError):
    """Raised when commission group does not exist."""
    pass


class OverrideNotFoundError(CommissionsServiceError):
    """Raised when no override matches type, amount and group."""
    pass


class InvalidCommissionError(CommissionsServiceError):
    """Raised when a commission split is not allowed."""
    pass
