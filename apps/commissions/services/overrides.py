"""Per face value commission overrides."""

import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.vouchers.models import VoucherInventory

from ..models import CommissionType, VoucherCommissionOverride
from .exceptions import InvalidCommissionError, OverrideNotFoundError

logger = logging.getLogger(__name__)


def _scope(queryset: QuerySet, group_id: Optional[UUID]) -> QuerySet:
    if group_id:
        return queryset.filter(commission_group_id=group_id)
    return queryset.filter(commission_group__isnull=True)


def get_voucher_commission_override(
    *, voucher_type_id: UUID, amount: Decimal, group_id: Optional[UUID] = None
) -> Optional[VoucherCommissionOverride]:
    """Return the override for the group (or the global one when group_id is None)."""
    queryset = VoucherCommissionOverride.objects.filter(
        voucher_type_id=voucher_type_id, amount=amount
    )
    return _scope(queryset, group_id).first()


@transaction.atomic
def upsert_voucher_commission_override(
    *,
    voucher_type_id: UUID,
    amount: Decimal,
    supplier_pct: Decimal,
    retailer_pct: Decimal,
    agent_pct: Decimal,
    commission_type: str = CommissionType.PERCENTAGE,
    group_id: Optional[UUID] = None,
) -> VoucherCommissionOverride:
    """
    Create or replace the override for (group, voucher type, amount).

    Percentage values must be fractions between 0 and 1.

    Raises:
        InvalidCommissionError: If a percentage value is outside 0-1 or any
            value is negative
    """
    values = (supplier_pct, retailer_pct, agent_pct)
    if any(Decimal(v) < 0 for v in values):
        raise InvalidCommissionError("Commission values cannot be negative")
    if commission_type == CommissionType.PERCENTAGE and any(Decimal(v) > 1 for v in values):
        raise InvalidCommissionError("Percentage commissions must be between 0 and 1")

    queryset = VoucherCommissionOverride.objects.select_for_update().filter(
        voucher_type_id=voucher_type_id, amount=amount
    )
    override = _scope(queryset, group_id).first()
    if override is None:
        override = VoucherCommissionOverride(
            voucher_type_id=voucher_type_id,
            amount=amount,
            commission_group_id=group_id,
        )

    override.supplier_pct = supplier_pct
    override.retailer_pct = retailer_pct
    override.agent_pct = agent_pct
    override.commission_type = commission_type
    override.save()

    logger.info(
        "Commission override for type %s R%s (group %s) set to %s %s/%s/%s",
        voucher_type_id, amount, group_id or 'global', commission_type,
        supplier_pct, retailer_pct, agent_pct,
    )
    return override


def get_voucher_commission_overrides_for_type(
    *, voucher_type_id: UUID, group_id: Optional[UUID] = None
) -> QuerySet:
    """Overrides of one type for the group (or global ones), by amount."""
    queryset = VoucherCommissionOverride.objects.filter(voucher_type_id=voucher_type_id)
    return _scope(queryset, group_id).order_by('amount')


def delete_voucher_commission_override(
    *, voucher_type_id: UUID, amount: Decimal, group_id: Optional[UUID] = None
) -> None:
    """
    Remove one override.

    Raises:
        OverrideNotFoundError: If nothing was deleted
    """
    queryset = VoucherCommissionOverride.objects.filter(
        voucher_type_id=voucher_type_id, amount=amount
    )
    deleted, _ = _scope(queryset, group_id).delete()
    if not deleted:
        raise OverrideNotFoundError("Commission override not found")


def get_voucher_amounts_for_type(*, voucher_type_id: UUID) -> List[Decimal]:
    """Distinct face values in the inventory of a type, ascending."""
    return list(
        VoucherInventory.objects
        .filter(voucher_type_id=voucher_type_id)
        .order_by('amount')
        .values_list('amount', flat=True)
        .distinct()
    )
