"""
Voucher sales.

A sale locks the retailer row and the vouchers it sells, so concurrent
sales from the terminals of one retailer are serialized.
"""

import logging
import secrets
import uuid
from decimal import Decimal
from typing import List
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.commissions.services import resolve_commission
from apps.retailers.models import Retailer, RetailerStatus, Terminal, TerminalStatus
from apps.retailers.services import touch_terminal
from apps.vouchers.models import VoucherInventory, VoucherStatus, VoucherType
from apps.vouchers.services import reserve_available_vouchers

from ..models import Sale
from .exceptions import InsufficientBalanceError, SaleNotAllowedError

logger = logging.getLogger(__name__)


def generate_ref_number() -> str:
    """Receipt reference: date plus 8 random hex digits, e.g. 261019A4F09C2E."""
    return f"{timezone.localdate():%y%m%d}{secrets.token_hex(4).upper()}"


@transaction.atomic
def record_sale(
    *,
    terminal: Terminal,
    voucher_type_id: UUID,
    amount: Decimal,
    quantity: int = 1,
) -> List[Sale]:
    """
    Sell vouchers of one type and face value from a terminal.

    The oldest available vouchers are sold first. The retailer balance is
    debited with the face value of every voucher and may go negative down
    to the credit limit; the retailer's commission is credited to its
    commission balance.

    Args:
        terminal: Selling terminal
        voucher_type_id: Type of voucher
        amount: Face value of each voucher
        quantity: Number of vouchers

    Returns:
        The Sale rows, sharing a batch_id when quantity > 1

    Raises:
        SaleNotAllowedError: If the terminal, retailer or voucher type is
            not active
        InsufficientStockError: If fewer than quantity vouchers are available
        InsufficientBalanceError: If the sale exceeds the available credit
    """
    if quantity < 1:
        raise SaleNotAllowedError("Quantity must be at least 1")

    if terminal.status != TerminalStatus.ACTIVE:
        raise SaleNotAllowedError("Terminal is not active")

    try:
        voucher_type = VoucherType.objects.get(id=voucher_type_id, is_active=True)
    except VoucherType.DoesNotExist:
        raise SaleNotAllowedError("Voucher type is not available")

    retailer = (
        Retailer.objects
        .select_for_update()
        .select_related('commission_group')
        .get(id=terminal.retailer_id)
    )
    if retailer.status != RetailerStatus.ACTIVE:
        raise SaleNotAllowedError("Retailer is not active")

    amount = Decimal(amount)
    total = amount * quantity
    if retailer.balance - total < -retailer.credit_limit:
        raise InsufficientBalanceError(
            f"Insufficient balance. Available: R {retailer.available_credit:.2f}, "
            f"required: R {total:.2f}"
        )

    vouchers = reserve_available_vouchers(
        voucher_type_id=voucher_type.id, amount=amount, quantity=quantity
    )
    split = resolve_commission(
        voucher_type=voucher_type,
        amount=amount,
        commission_group=retailer.commission_group,
    )

    retailer.set_balance(retailer.balance - total)
    retailer.commission_balance += split.retailer * quantity
    retailer.save(update_fields=['balance', 'credit_used', 'commission_balance', 'updated_at'])

    VoucherInventory.objects.filter(id__in=[v.id for v in vouchers]).update(
        status=VoucherStatus.SOLD,
        updated_at=timezone.now(),
    )

    batch_id = uuid.uuid4() if quantity > 1 else None
    sales = Sale.objects.bulk_create([
        Sale(
            terminal=terminal,
            voucher_inventory=voucher,
            sale_amount=amount,
            supplier_commission=split.supplier,
            retailer_commission=split.retailer,
            agent_commission=split.agent,
            profit=split.profit,
            ref_number=generate_ref_number(),
            batch_id=batch_id,
        )
        for voucher in vouchers
    ])

    touch_terminal(terminal)

    logger.info(
        "Terminal %s sold %d x %s R%s (commission via %s); retailer %s balance now %s",
        terminal.id, quantity, voucher_type.name, amount, split.source,
        retailer.id, retailer.balance,
    )
    return sales
