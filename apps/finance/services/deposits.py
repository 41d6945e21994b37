"""
Retailer balance deposits and removals.

The balance change and its audit row are written in one transaction
with the retailer row locked.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.retailers.models import Retailer

from ..models import DepositAdjustmentType, RetailerDeposit
from .exceptions import InvalidDepositError, RetailerNotFoundError
from .fees import calculate_deposit_fee, fetch_deposit_fee_configuration

logger = logging.getLogger(__name__)


@transaction.atomic
def process_retailer_deposit(
    *,
    retailer_id: UUID,
    amount_deposited: Decimal,
    deposit_method: str,
    adjustment_type: str = DepositAdjustmentType.DEPOSIT,
    notes: Optional[str] = None,
    processed_by=None,
) -> RetailerDeposit:
    """
    Apply a deposit (or removal) to a retailer balance.

    The fee of the deposit method is deducted from the amount; the net
    amount is added to the balance for a deposit and subtracted for a
    removal.

    Args:
        retailer_id: Retailer whose balance changes
        amount_deposited: Gross amount
        deposit_method: EFT, ATM, Counter or Branch
        adjustment_type: deposit or removal
        notes: Free text for the audit trail
        processed_by: Acting admin

    Returns:
        The RetailerDeposit audit row

    Raises:
        FeeConfigurationNotFoundError: If the method has no fee configuration
        InvalidDepositError: If the fee swallows the amount, or a removal
            would take the balance past the credit limit
        RetailerNotFoundError: If the retailer does not exist
    """
    fee_config = fetch_deposit_fee_configuration(deposit_method=deposit_method)

    amount_deposited = Decimal(amount_deposited)
    fee_amount = calculate_deposit_fee(amount_deposited, fee_config.fee_type, fee_config.fee_value)
    net_amount = amount_deposited - fee_amount

    if net_amount <= 0:
        raise InvalidDepositError("Amount must be greater than the fee amount")

    try:
        retailer = Retailer.objects.select_for_update().get(id=retailer_id)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError("Retailer not found")

    balance_before = retailer.balance
    credit_limit = retailer.credit_limit or Decimal('0')

    if adjustment_type == DepositAdjustmentType.DEPOSIT:
        balance_after = balance_before + net_amount
    else:
        balance_after = balance_before - net_amount
        if balance_after < -credit_limit:
            raise InvalidDepositError(
                f"Cannot remove R {net_amount:.2f}. Would exceed credit limit. "
                f"Minimum allowed balance: -R {credit_limit:.2f} "
                f"(Current: R {balance_before:.2f})"
            )

    retailer.set_balance(balance_after)
    retailer.save(update_fields=['balance', 'credit_used', 'updated_at'])

    deposit = RetailerDeposit.objects.create(
        retailer=retailer,
        amount_deposited=amount_deposited,
        deposit_method=deposit_method,
        fee_type=fee_config.fee_type,
        fee_value=fee_config.fee_value,
        fee_amount=fee_amount,
        net_amount=net_amount,
        balance_before=balance_before,
        balance_after=balance_after,
        adjustment_type=adjustment_type,
        processed_by=processed_by,
        notes=notes or None,
    )

    logger.info(
        "%s of R%s (fee R%s) on retailer %s by %s: balance %s -> %s",
        adjustment_type.capitalize(),
        net_amount,
        fee_amount,
        retailer.id,
        getattr(processed_by, 'id', None),
        balance_before,
        balance_after,
    )
    return deposit


def fetch_retailer_deposit_history(*, retailer_id: UUID) -> QuerySet:
    """Deposits of a retailer, newest first, with the processing admin joined."""
    return (
        RetailerDeposit.objects
        .filter(retailer_id=retailer_id)
        .select_related('processed_by')
        .order_by('-created_at')
    )
