"""Domain-specific exceptions for vouchers services."""


class VouchersServiceError(Exception):
    """Base exception for vouchers services."""
    pass


class VoucherTypeNotFoundError(VouchersServiceError):
    """Raised when voucher type does not exist."""
    pass


class VoucherNotFoundError(VouchersServiceError):
    """Raised when an inventory row does not exist."""
    pass


class EmptyInventoryError(VouchersServiceError):
    """Raised when no inventory matches the query."""
    pass


class VoucherFileError(VouchersServiceError):
    """
    Raised when an uploaded file yields no importable vouchers.

    ``errors`` carries the per-line parse errors.
    """

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])


class InsufficientStockError(VouchersServiceError):
    """Raised when fewer vouchers are available than requested."""
    pass
