"""Services for voucher sales and sales reporting."""

from .exceptions import (
    SalesServiceError,
    SaleNotAllowedError,
    InsufficientBalanceError,
    InvalidDateRangeError,
)
from .sales import (
    generate_ref_number,
    record_sale,
)
from .reports import (
    SalesReportQueries,
    fetch_sales_report,
    fetch_earnings_summary,
    fetch_inventory_report,
    fetch_dashboard,
)
from .exports import (
    SALES_EXPORT_HEADERS,
    sales_export_filename,
    export_sales_report_csv,
    export_sales_report_xlsx,
)

__all__ = [
    # Exceptions
    'SalesServiceError',
    'SaleNotAllowedError',
    'InsufficientBalanceError',
    'InvalidDateRangeError',
    # Sales
    'generate_ref_number',
    'record_sale',
    # Reports
    'SalesReportQueries',
    'fetch_sales_report',
    'fetch_earnings_summary',
    'fetch_inventory_report',
    'fetch_dashboard',
    # Export
    'SALES_EXPORT_HEADERS',
    'sales_export_filename',
    'export_sales_report_csv',
    'export_sales_report_xlsx',
]
