"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class InvalidTokenError(AccountsServiceError):
    """Raised when reset token is invalid."""
    pass


class WeakPasswordError(AccountsServiceError):
    """Raised when a new password fails the complexity rules."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class AdminNotFoundError(UserNotFoundError):
    """Raised when no admin user matches the given id."""
    pass


class DuplicateEmailError(AccountsServiceError):
    """Raised when an account with the email already exists."""
    pass


class InsufficientPermissionsError(AccountsServiceError):
    """Raised when the acting user may not perform the operation."""
    pass


class InvalidPermissionError(AccountsServiceError):
    """Raised when a permission key is unknown."""
    pass
