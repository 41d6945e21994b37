"""
Inventory overview aggregates.

All functions return plain dicts/lists ready for JSON responses; money
values are Decimals.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, List, Optional

from django.db.models import Count, Q, Sum, Value, DecimalField
from django.db.models.functions import Coalesce

from ..models import (
    NetworkProvider,
    VoucherCategory,
    VoucherInventory,
    VoucherStatus,
    VoucherType,
)

ZERO = Decimal('0.00')
MONEY = DecimalField(max_digits=14, decimal_places=2)


def _status_counts(queryset) -> dict:
    return queryset.aggregate(
        total=Count('id'),
        available=Count('id', filter=Q(status=VoucherStatus.AVAILABLE)),
        sold=Count('id', filter=Q(status=VoucherStatus.SOLD)),
        disabled=Count('id', filter=Q(status=VoucherStatus.DISABLED)),
        total_value=Coalesce(Sum('amount'), Value(ZERO), output_field=MONEY),
        available_value=Coalesce(
            Sum('amount', filter=Q(status=VoucherStatus.AVAILABLE)), Value(ZERO), output_field=MONEY
        ),
        sold_value=Coalesce(
            Sum('amount', filter=Q(status=VoucherStatus.SOLD)), Value(ZERO), output_field=MONEY
        ),
    )


def _type_summary(voucher_type: VoucherType) -> dict:
    inventory = VoucherInventory.objects.filter(voucher_type=voucher_type)
    counts = _status_counts(inventory)
    unique_amounts = list(
        inventory
        .filter(status=VoucherStatus.AVAILABLE)
        .order_by('amount')
        .values_list('amount', flat=True)
        .distinct()
    )

    return {
        'id': voucher_type.id,
        'name': voucher_type.name,
        'total_vouchers': counts['total'],
        'available_vouchers': counts['available'],
        'sold_vouchers': counts['sold'],
        'disabled_vouchers': counts['disabled'],
        'unique_amounts': unique_amounts,
        'total_value': counts['available_value'],
        'icon': voucher_type.icon,
        'supplier_commission_pct': voucher_type.supplier_commission_pct,
    }


def fetch_voucher_type_summaries(voucher_types: Optional[Iterable[VoucherType]] = None) -> List[dict]:
    """
    Per voucher type: counts by status, value and face values of available stock.

    ``total_value`` only counts available vouchers.
    """
    if voucher_types is None:
        voucher_types = VoucherType.objects.all()
    return [_type_summary(vt) for vt in voucher_types]


def _category_summary(voucher_type: VoucherType) -> dict:
    counts = _status_counts(VoucherInventory.objects.filter(voucher_type=voucher_type))
    return {
        'voucher_count': counts['total'],
        'total_value': counts['total_value'],
        'available_count': counts['available'],
        'sold_count': counts['sold'],
        'disabled_count': counts['disabled'],
    }


def fetch_network_voucher_summaries() -> dict:
    """
    Group active voucher types for the inventory overview.

    Returns:
        dict with:
            - networks: one entry per provider with airtime and data
              (keyed by duration) category summaries
            - other: type summaries for category 'other' or no provider
            - bill_payments: type summaries for bill payment types
    """
    voucher_types = list(VoucherType.objects.filter(is_active=True))

    by_provider = defaultdict(list)
    other, bill_payments = [], []
    for vt in voucher_types:
        if vt.network_provider in NetworkProvider.values:
            by_provider[vt.network_provider].append(vt)
        if vt.category == VoucherCategory.BILL_PAYMENT:
            bill_payments.append(vt)
        elif vt.category == VoucherCategory.OTHER or not vt.network_provider:
            other.append(vt)

    networks = []
    for provider, types in by_provider.items():
        summary = {
            'network_provider': provider,
            'name': provider.capitalize(),
            'total_vouchers': 0,
            'total_value': ZERO,
            'categories': {},
        }
        for vt in types:
            category_summary = _category_summary(vt)
            summary['total_vouchers'] += category_summary['voucher_count']
            summary['total_value'] += category_summary['total_value']

            if vt.category == VoucherCategory.AIRTIME:
                summary['categories']['airtime'] = category_summary
            elif vt.category == VoucherCategory.DATA and vt.sub_category:
                summary['categories'].setdefault('data', {})[vt.sub_category] = category_summary

        networks.append(summary)

    return {
        'networks': networks,
        'other': fetch_voucher_type_summaries(other),
        'bill_payments': fetch_voucher_type_summaries(bill_payments),
    }


def _category_stats(type_filter: dict) -> dict:
    counts = _status_counts(VoucherInventory.objects.filter(**type_filter))
    return {
        'total_vouchers': counts['total'],
        'inventory_value': counts['available_value'],
        'sold_value': counts['sold_value'],
    }


def fetch_network_category_stats(*, network_provider: str, category: str) -> dict:
    """Totals for one provider and category (all durations)."""
    return _category_stats({
        'voucher_type__network_provider': network_provider,
        'voucher_type__category': category,
    })


def fetch_network_category_duration_stats(*, network_provider: str, category: str, sub_category: str) -> dict:
    """Totals for one provider, category and duration."""
    return _category_stats({
        'voucher_type__network_provider': network_provider,
        'voucher_type__category': category,
        'voucher_type__sub_category': sub_category,
    })
