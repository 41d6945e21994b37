"""Voucher type catalogue service."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from ..models import VoucherType
from .exceptions import VoucherTypeNotFoundError

logger = logging.getLogger(__name__)


def fetch_voucher_type(*, voucher_type_id: UUID) -> VoucherType:
    """
    Return one voucher type, active or not.

    Inactive types stay reachable so that historical sales can be shown.

    Raises:
        VoucherTypeNotFoundError: If the type does not exist
    """
    try:
        return VoucherType.objects.get(id=voucher_type_id)
    except VoucherType.DoesNotExist:
        raise VoucherTypeNotFoundError(f"Voucher type not found: {voucher_type_id}")


@transaction.atomic
def update_supplier_commission(*, voucher_type_id: UUID, supplier_commission_pct: Decimal) -> VoucherType:
    """Set the supplier commission percentage of a voucher type."""
    try:
        voucher_type = VoucherType.objects.select_for_update().get(id=voucher_type_id)
    except VoucherType.DoesNotExist:
        raise VoucherTypeNotFoundError(f"Voucher type not found: {voucher_type_id}")

    previous = voucher_type.supplier_commission_pct
    voucher_type.supplier_commission_pct = supplier_commission_pct
    voucher_type.save(update_fields=['supplier_commission_pct', 'updated_at'])

    logger.info(
        "Supplier commission of %s changed from %s%% to %s%%",
        voucher_type.name, previous, supplier_commission_pct,
    )
    return voucher_type


def fetch_voucher_types(
    *,
    include_inactive: bool = False,
    network_provider: Optional[str] = None,
    category: Optional[str] = None,
    sub_category: Optional[str] = None,
) -> QuerySet:
    """
    Return voucher types, optionally narrowed by network, category and duration.

    Ordering follows the narrowest filter given: by name once the duration
    is fixed, otherwise by the remaining grouping fields first.
    """
    queryset = VoucherType.objects.all()

    if not include_inactive:
        queryset = queryset.filter(is_active=True)

    ordering = ['name']
    if network_provider:
        queryset = queryset.filter(network_provider=network_provider)
        ordering = ['category', 'sub_category', 'name']
    if category:
        queryset = queryset.filter(category=category)
        ordering = ['sub_category', 'name']
    if sub_category:
        queryset = queryset.filter(sub_category=sub_category)
        ordering = ['name']

    return queryset.order_by(*ordering)


def fetch_voucher_types_by_network(*, network_provider: str, include_inactive: bool = False) -> QuerySet:
    return fetch_voucher_types(network_provider=network_provider, include_inactive=include_inactive)


def fetch_voucher_types_by_network_and_category(
    *, network_provider: str, category: str, include_inactive: bool = False
) -> QuerySet:
    return fetch_voucher_types(
        network_provider=network_provider,
        category=category,
        include_inactive=include_inactive,
    )


def fetch_voucher_types_by_network_category_and_duration(
    *, network_provider: str, category: str, sub_category: str, include_inactive: bool = False
) -> QuerySet:
    return fetch_voucher_types(
        network_provider=network_provider,
        category=category,
        sub_category=sub_category,
        include_inactive=include_inactive,
    )
