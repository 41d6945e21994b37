"""
Sales reporting queries.

All methods are read-only and return plain dictionaries and lists ready
for JSON serialization. Date filters are inclusive calendar dates in the
project time zone.
"""

from collections import OrderedDict
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from django.db.models import Count, DecimalField, Q, Sum
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from apps.retailers.models import Retailer, RetailerStatus
from apps.vouchers.models import VoucherInventory, VoucherStatus

from ..models import Sale
from .exceptions import InvalidDateRangeError

ZERO = Decimal('0.00')
MONEY = DecimalField(max_digits=14, decimal_places=2)

MONEY_FIELDS = (
    ('amount', 'sale_amount'),
    ('supplier_commission', 'supplier_commission'),
    ('retailer_commission', 'retailer_commission'),
    ('agent_commission', 'agent_commission'),
    ('profit', 'profit'),
)


def _sum(field: str, **filters) -> Coalesce:
    if filters:
        return Coalesce(Sum(field, filter=Q(**filters)), ZERO, output_field=MONEY)
    return Coalesce(Sum(field), ZERO, output_field=MONEY)


def _sales_between(start_date: Optional[date], end_date: Optional[date]):
    if start_date and end_date and start_date > end_date:
        raise InvalidDateRangeError("Start date must be before end date")

    sales = Sale.objects.all()
    if start_date:
        sales = sales.filter(created_at__date__gte=start_date)
    if end_date:
        sales = sales.filter(created_at__date__lte=end_date)
    return sales


class SalesReportQueries:
    """
    Aggregations behind the reports section and the admin dashboard.

    Methods:
        sales_report: Sales rows, bulk sales grouped by batch.
        earnings_summary: Totals per voucher type.
        inventory_report: Voucher counts per type and status.
        dashboard: Headline figures for one day and the 30 days before it.
    """

    @staticmethod
    def sales_report(start_date=None, end_date=None):
        """
        Sales between two dates, newest first.

        Sales that share a batch_id are merged into one row with quantity
        and sale_ids; money fields are summed over the batch. A sale without
        a batch is a row of quantity 1.

        Args:
            start_date (date, optional): First day included.
            end_date (date, optional): Last day included.

        Returns:
            list[dict]: Report rows with terminal, retailer, agent, commission
            group and voucher type details plus the money fields amount,
            supplier_commission, retailer_commission, agent_commission and
            profit.

        Raises:
            InvalidDateRangeError: If start_date is after end_date.
        """
        sales = (
            _sales_between(start_date, end_date)
            .select_related(
                'terminal__retailer__agent',
                'terminal__retailer__commission_group',
                'voucher_inventory__voucher_type',
            )
            .order_by('-created_at', 'id')
        )

        rows = OrderedDict()
        for sale in sales:
            key = sale.batch_id or sale.id
            row = rows.get(key)
            if row is None:
                terminal = sale.terminal
                retailer = terminal.retailer
                voucher_type = sale.voucher_inventory.voucher_type
                group = retailer.commission_group
                rows[key] = row = {
                    'id': str(sale.id),
                    'created_at': sale.created_at,
                    'terminal_name': terminal.name,
                    'terminal_short_code': terminal.short_code,
                    'retailer_name': retailer.name,
                    'retailer_short_code': retailer.short_code,
                    'agent_name': retailer.agent.get_display_name() if retailer.agent else '',
                    'commission_group_name': group.name if group else '',
                    'commission_group_id': str(group.id) if group else '',
                    'voucher_type': voucher_type.name,
                    'supplier_commission_pct': voucher_type.supplier_commission_pct,
                    'ref_number': sale.ref_number,
                    'quantity': 0,
                    'sale_ids': [],
                    'amount': ZERO,
                    'supplier_commission': ZERO,
                    'retailer_commission': ZERO,
                    'agent_commission': ZERO,
                    'profit': ZERO,
                }

            row['quantity'] += 1
            row['sale_ids'].append(str(sale.id))
            for key_name, field in MONEY_FIELDS:
                row[key_name] += getattr(sale, field)

        return list(rows.values())

    @staticmethod
    def earnings_summary(start_date=None, end_date=None):
        """
        Sales totals per voucher type.

        platform_commission is the platform's profit on the sales.

        Returns:
            list[dict]: voucher_type, total_sales, total_amount,
            retailer_commission, agent_commission, platform_commission.
        """
        rows = (
            _sales_between(start_date, end_date)
            .values('voucher_inventory__voucher_type__name')
            .annotate(
                total_sales=Count('id'),
                total_amount=_sum('sale_amount'),
                retailer_commission=_sum('retailer_commission'),
                agent_commission=_sum('agent_commission'),
                platform_commission=_sum('profit'),
            )
            .order_by('voucher_inventory__voucher_type__name')
        )

        return [
            {
                'voucher_type': row['voucher_inventory__voucher_type__name'],
                'total_sales': row['total_sales'],
                'total_amount': row['total_amount'],
                'retailer_commission': row['retailer_commission'],
                'agent_commission': row['agent_commission'],
                'platform_commission': row['platform_commission'],
            }
            for row in rows
        ]

    @staticmethod
    def inventory_report():
        """Voucher counts per type: available, sold and disabled."""
        rows = (
            VoucherInventory.objects
            .values('voucher_type__name')
            .annotate(
                available=Count('id', filter=Q(status=VoucherStatus.AVAILABLE)),
                sold=Count('id', filter=Q(status=VoucherStatus.SOLD)),
                disabled=Count('id', filter=Q(status=VoucherStatus.DISABLED)),
            )
            .order_by('voucher_type__name')
        )

        return [
            {
                'voucher_type': row['voucher_type__name'],
                'available': row['available'],
                'sold': row['sold'],
                'disabled': row['disabled'],
            }
            for row in rows
        ]

    @staticmethod
    def dashboard(today=None):
        """
        Headline figures for the admin dashboard.

        Args:
            today (date, optional): Day the figures are computed for;
                defaults to the current local date.

        Returns:
            dict: retailers (total, active), today (sales_count,
            sales_amount, platform_commission), last_30_days (sales_count,
            sales_amount, platform_commission) and daily_sales, one entry
            per day that had sales in the 30 day window.
        """
        today = today or timezone.localdate()
        window_start = today - timedelta(days=30)

        retailers = Retailer.objects.aggregate(
            total=Count('id'),
            active=Count('id', filter=Q(status=RetailerStatus.ACTIVE)),
        )

        window = _sales_between(window_start, today)
        totals = window.aggregate(
            today_count=Count('id', filter=Q(created_at__date=today)),
            today_amount=_sum('sale_amount', created_at__date=today),
            today_profit=_sum('profit', created_at__date=today),
            window_count=Count('id'),
            window_amount=_sum('sale_amount'),
            window_profit=_sum('profit'),
        )

        daily = (
            window
            .annotate(day=TruncDate('created_at'))
            .values('day')
            .annotate(sales_count=Count('id'), sales_amount=_sum('sale_amount'))
            .order_by('day')
        )

        return {
            'date': today,
            'retailers': retailers,
            'today': {
                'sales_count': totals['today_count'],
                'sales_amount': totals['today_amount'],
                'platform_commission': totals['today_profit'],
            },
            'last_30_days': {
                'sales_count': totals['window_count'],
                'sales_amount': totals['window_amount'],
                'platform_commission': totals['window_profit'],
            },
            'daily_sales': list(daily),
        }


fetch_sales_report = SalesReportQueries.sales_report
fetch_earnings_summary = SalesReportQueries.earnings_summary
fetch_inventory_report = SalesReportQueries.inventory_report
fetch_dashboard = SalesReportQueries.dashboard
