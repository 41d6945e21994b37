"""Retailer credit limit adjustments."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.retailers.models import Retailer

from ..models import CreditAdjustmentType, CreditLimitAdjustment
from .exceptions import InvalidCreditAdjustmentError, RetailerNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def process_credit_limit_adjustment(
    *,
    retailer_id: UUID,
    adjustment_type: str,
    amount: Decimal,
    notes: Optional[str] = None,
    processed_by=None,
) -> CreditLimitAdjustment:
    """
    Raise or lower the credit limit of a retailer and record the change.

    Raises:
        RetailerNotFoundError: If the retailer does not exist
        InvalidCreditAdjustmentError: If a decrease would make the limit negative
    """
    try:
        retailer = Retailer.objects.select_for_update().get(id=retailer_id)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError("Retailer not found")

    amount = Decimal(amount)
    before = retailer.credit_limit

    if adjustment_type == CreditAdjustmentType.INCREASE:
        after = before + amount
    else:
        after = before - amount
        if after < 0:
            raise InvalidCreditAdjustmentError("Credit limit cannot be negative")

    retailer.credit_limit = after
    retailer.save(update_fields=['credit_limit', 'updated_at'])

    adjustment = CreditLimitAdjustment.objects.create(
        retailer=retailer,
        adjustment_type=adjustment_type,
        amount=amount,
        credit_limit_before=before,
        credit_limit_after=after,
        notes=notes or None,
        processed_by=processed_by,
    )

    logger.info(
        "Credit limit of retailer %s changed %s -> %s by %s",
        retailer.id, before, after, getattr(processed_by, 'id', None),
    )
    return adjustment


def fetch_retailer_credit_history(*, retailer_id: UUID) -> QuerySet:
    """Credit limit changes of a retailer, newest first."""
    return (
        CreditLimitAdjustment.objects
        .filter(retailer_id=retailer_id)
        .select_related('processed_by')
        .order_by('-created_at')
    )
