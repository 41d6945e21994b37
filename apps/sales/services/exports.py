"""CSV and Excel exports of the sales report."""

import csv
import io
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Iterator, Optional, Tuple

import openpyxl
from openpyxl.styles import Font
from django.conf import settings
from django.utils import timezone

CENT = Decimal('0.01')

SALES_EXPORT_HEADERS = [
    'Date',
    'Retailer',
    'Agent',
    'Commission Group',
    'Type',
    'Amount',
    'Supplier Commission',
    'Retailer Commission',
    'Agent Commission',
    'AV Profit',
]

# Index of the first money column (Amount)
MONEY_COLUMN = 5


def sales_export_filename(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    extension: str = 'csv',
) -> str:
    """
    Name of an exported report, derived from the date range.

    arv-sales-report-2025-01-01-to-2025-01-31.csv, -from-<start>,
    -until-<end> or -all-time when a bound is missing.
    """
    prefix = settings.SALES_EXPORT_PREFIX
    if start_date and end_date:
        return f"{prefix}-{start_date}-to-{end_date}.{extension}"
    if start_date:
        return f"{prefix}-from-{start_date}.{extension}"
    if end_date:
        return f"{prefix}-until-{end_date}.{extension}"
    return f"{prefix}-all-time.{extension}"


def _supplier_commission(row: dict) -> Decimal:
    if row.get('supplier_commission'):
        return row['supplier_commission']
    return row['amount'] * Decimal(row.get('supplier_commission_pct') or 0) / Decimal('100')


def _money(value) -> str:
    return f"{Decimal(value or 0):.2f}"


def _report_lines(rows: Iterable[dict]) -> Iterator[list]:
    """Export lines for report rows, the closing TOTAL line included."""
    totals = dict.fromkeys(('amount', 'supplier', 'retailer', 'agent', 'profit'), Decimal('0'))

    for row in rows:
        supplier = _supplier_commission(row)
        totals['amount'] += row['amount']
        totals['supplier'] += supplier
        totals['retailer'] += row.get('retailer_commission') or 0
        totals['agent'] += row.get('agent_commission') or 0
        totals['profit'] += row.get('profit') or 0

        created_at = timezone.localtime(row['created_at'])
        yield [
            created_at.strftime('%Y/%m/%d, %H:%M:%S'),
            row.get('retailer_name') or 'Unknown',
            row.get('agent_name') or '-',
            row.get('commission_group_name') or '-',
            row.get('voucher_type') or 'Unknown',
            row['amount'],
            supplier,
            row.get('retailer_commission'),
            row.get('agent_commission'),
            row.get('profit'),
        ]

    yield [
        'TOTAL', '', '', '', '',
        totals['amount'],
        totals['supplier'],
        totals['retailer'],
        totals['agent'],
        totals['profit'],
    ]


def export_sales_report_csv(
    rows: Iterable[dict],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Tuple[str, str]:
    """
    Render sales report rows as CSV with a closing TOTAL row.

    Every cell is quoted. Dates use the en-ZA layout in the project time
    zone.

    Returns:
        (filename, csv text)
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(SALES_EXPORT_HEADERS)

    for line in _report_lines(rows):
        writer.writerow(line[:MONEY_COLUMN] + [_money(value) for value in line[MONEY_COLUMN:]])

    return sales_export_filename(start_date, end_date), output.getvalue()


def export_sales_report_xlsx(
    rows: Iterable[dict],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Tuple[str, bytes]:
    """
    Render sales report rows as an Excel workbook.

    One "Sales Report" sheet with the CSV columns; money cells are numbers
    with two decimals, the header and TOTAL rows are bold.

    Returns:
        (filename, xlsx bytes)
    """
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = 'Sales Report'
    bold_font = Font(bold=True)

    sheet.append(SALES_EXPORT_HEADERS)
    for line in _report_lines(rows):
        sheet.append(
            [value or None for value in line[:MONEY_COLUMN]]
            + [Decimal(value or 0).quantize(CENT, rounding=ROUND_HALF_UP) for value in line[MONEY_COLUMN:]]
        )

    for cell in sheet[1] + sheet[sheet.max_row]:
        cell.font = bold_font
    for row in sheet.iter_rows(min_row=2, min_col=MONEY_COLUMN + 1):
        for cell in row:
            cell.number_format = '0.00'

    buffer = io.BytesIO()
    workbook.save(buffer)
    return sales_export_filename(start_date, end_date, 'xlsx'), buffer.getvalue()
