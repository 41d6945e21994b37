"""Services for vouchers business logic."""

from .exceptions import (
    VouchersServiceError,
    VoucherTypeNotFoundError,
    VoucherNotFoundError,
    EmptyInventoryError,
    VoucherFileError,
    InsufficientStockError,
)
from .file_parser import (
    ParsedVoucher,
    ParseResult,
    VOUCHER_FILE_FORMATS,
    parse_voucher_file,
    get_voucher_type_name_from_file,
)
from .voucher_types import (
    fetch_voucher_type,
    update_supplier_commission,
    fetch_voucher_types,
    fetch_voucher_types_by_network,
    fetch_voucher_types_by_network_and_category,
    fetch_voucher_types_by_network_category_and_duration,
)
from .inventory import (
    fetch_voucher_inventory,
    upload_vouchers,
    process_voucher_file,
    disable_voucher,
    reserve_available_vouchers,
)
from .summaries import (
    fetch_voucher_type_summaries,
    fetch_network_voucher_summaries,
    fetch_network_category_stats,
    fetch_network_category_duration_stats,
)

__all__ = [
    # Exceptions
    'VouchersServiceError',
    'VoucherTypeNotFoundError',
    'VoucherNotFoundError',
    'EmptyInventoryError',
    'VoucherFileError',
    'InsufficientStockError',
    # Parser
    'ParsedVoucher',
    'ParseResult',
    'VOUCHER_FILE_FORMATS',
    'parse_voucher_file',
    'get_voucher_type_name_from_file',
    # Voucher types
    'fetch_voucher_type',
    'update_supplier_commission',
    'fetch_voucher_types',
    'fetch_voucher_types_by_network',
    'fetch_voucher_types_by_network_and_category',
    'fetch_voucher_types_by_network_category_and_duration',
    # Inventory
    'fetch_voucher_inventory',
    'upload_vouchers',
    'process_voucher_file',
    'disable_voucher',
    'reserve_available_vouchers',
    # Summaries
    'fetch_voucher_type_summaries',
    'fetch_network_voucher_summaries',
    'fetch_network_category_stats',
    'fetch_network_category_duration_stats',
]
