"""Commission group rate service."""

from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction

from apps.vouchers.models import VoucherType

from ..models import CommissionGroup, CommissionGroupRate
from .exceptions import CommissionGroupNotFoundError, InvalidCommissionError


def _check_split(retailer_pct: Decimal, agent_pct: Decimal, supplier_pct: Decimal) -> None:
    if retailer_pct + agent_pct > supplier_pct:
        raise InvalidCommissionError(
            "Retailer and agent commission cannot exceed the supplier commission"
        )


@transaction.atomic
def create_commission_rates(*, rates: Iterable[dict]) -> int:
    """
    Insert several rates at once.

    Args:
        rates: dicts with commission_group_id, voucher_type_id,
            retailer_pct, agent_pct and supplier_pct; a missing supplier_pct
            defaults to the voucher type's supplier commission

    Returns:
        Number of rates created
    """
    rates = list(rates)
    supplier_defaults = dict(
        VoucherType.objects
        .filter(id__in=[rate['voucher_type_id'] for rate in rates])
        .values_list('id', 'supplier_commission_pct')
    )

    objs = []
    for rate in rates:
        supplier_pct = rate.get('supplier_pct')
        if supplier_pct is None:
            supplier_pct = supplier_defaults[rate['voucher_type_id']]
        objs.append(CommissionGroupRate(
            commission_group_id=rate['commission_group_id'],
            voucher_type_id=rate['voucher_type_id'],
            retailer_pct=rate['retailer_pct'],
            agent_pct=rate['agent_pct'],
            supplier_pct=supplier_pct,
        ))
    CommissionGroupRate.objects.bulk_create(objs)
    return len(objs)


@transaction.atomic
def upsert_commission_rate(
    *,
    group_id: UUID,
    voucher_type_id: UUID,
    retailer_pct: Decimal,
    agent_pct: Decimal,
    supplier_pct: Optional[Decimal] = None,
    enforce_split: bool = False,
) -> CommissionGroupRate:
    """
    Create or update the rate of a voucher type inside a group.

    When supplier_pct is omitted an existing value is kept; a new rate
    takes the voucher type's supplier commission.

    Raises:
        CommissionGroupNotFoundError: If the group does not exist
        InvalidCommissionError: If enforce_split is set and retailer + agent
            exceed the supplier commission
    """
    if not CommissionGroup.objects.filter(id=group_id).exists():
        raise CommissionGroupNotFoundError(f"Commission group not found: {group_id}")

    rate = (
        CommissionGroupRate.objects
        .select_for_update()
        .filter(commission_group_id=group_id, voucher_type_id=voucher_type_id)
        .first()
    )

    if rate is None:
        if supplier_pct is None:
            supplier_pct = VoucherType.objects.get(id=voucher_type_id).supplier_commission_pct
        rate = CommissionGroupRate(
            commission_group_id=group_id,
            voucher_type_id=voucher_type_id,
        )
    if supplier_pct is not None:
        rate.supplier_pct = supplier_pct

    rate.retailer_pct = retailer_pct
    rate.agent_pct = agent_pct

    if enforce_split:
        _check_split(Decimal(retailer_pct), Decimal(agent_pct), Decimal(rate.supplier_pct))

    rate.save()
    return rate
