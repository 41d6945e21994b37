"""Domain-specific exceptions for retailers services."""


class RetailersServiceError(Exception):
    """Base exception for retailers services."""
    pass


class RetailerNotFoundError(RetailersServiceError):
    """Raised when retailer does not exist."""
    pass


class AgentNotFoundError(RetailersServiceError):
    """Raised when agent does not exist."""
    pass


class TerminalNotFoundError(RetailersServiceError):
    """Raised when terminal does not exist."""
    pass


class MissingUserAccountError(RetailersServiceError):
    """Raised when a retailer or terminal has no login account."""
    pass


class ShortCodeGenerationError(RetailersServiceError):
    """Raised when no unused short code could be generated."""
    pass
