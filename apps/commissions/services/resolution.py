"""
Commission resolution for a single voucher sale.

The split for one voucher is looked up in this order:

1. the sale's commission group override for the face value
2. the global override for the face value
3. the commission group rate for the voucher type
4. the voucher type supplier commission (retailer and agent earn nothing)
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from apps.vouchers.models import VoucherType

from ..models import CommissionGroup, CommissionGroupRate, CommissionType
from .overrides import get_voucher_commission_override

CENT = Decimal('0.01')
HUNDRED = Decimal('100')


@dataclass(frozen=True)
class CommissionSplit:
    """Rand amounts earned on one voucher."""
    supplier: Decimal
    retailer: Decimal
    agent: Decimal
    source: str

    @property
    def profit(self) -> Decimal:
        return self.supplier - self.retailer - self.agent


def _money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _from_override(override, amount: Decimal, source: str) -> CommissionSplit:
    if override.commission_type == CommissionType.FIXED:
        return CommissionSplit(
            supplier=_money(override.supplier_pct),
            retailer=_money(override.retailer_pct),
            agent=_money(override.agent_pct),
            source=source,
        )
    return CommissionSplit(
        supplier=_money(amount * override.supplier_pct),
        retailer=_money(amount * override.retailer_pct),
        agent=_money(amount * override.agent_pct),
        source=source,
    )


def resolve_commission(
    *,
    voucher_type: VoucherType,
    amount: Decimal,
    commission_group: Optional[CommissionGroup] = None,
) -> CommissionSplit:
    """
    Return the commission split for one voucher of the given face value.

    Args:
        voucher_type: Type of the voucher sold
        amount: Face value of the voucher
        commission_group: Group of the selling retailer, if any
    """
    amount = Decimal(amount)
    group_id = commission_group.id if commission_group else None

    if group_id:
        override = get_voucher_commission_override(
            voucher_type_id=voucher_type.id, amount=amount, group_id=group_id
        )
        if override:
            return _from_override(override, amount, 'group_override')

    override = get_voucher_commission_override(voucher_type_id=voucher_type.id, amount=amount)
    if override:
        return _from_override(override, amount, 'global_override')

    if group_id:
        rate = CommissionGroupRate.objects.filter(
            commission_group_id=group_id, voucher_type_id=voucher_type.id
        ).first()
        if rate:
            return CommissionSplit(
                supplier=_money(amount * rate.supplier_pct / HUNDRED),
                retailer=_money(amount * rate.retailer_pct / HUNDRED),
                agent=_money(amount * rate.agent_pct / HUNDRED),
                source='group_rate',
            )

    return CommissionSplit(
        supplier=_money(amount * voucher_type.supplier_commission_pct / HUNDRED),
        retailer=Decimal('0.00'),
        agent=Decimal('0.00'),
        source='voucher_type',
    )
