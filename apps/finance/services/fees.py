"""Deposit fee configuration and fee calculation."""

import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.db.models import QuerySet

from ..models import DepositFeeConfiguration, FeeType
from .exceptions import FeeConfigurationNotFoundError

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def calculate_deposit_fee(amount: Decimal, fee_type: str, fee_value: Decimal) -> Decimal:
    """
    Fee charged on a deposit.

    A fixed fee is charged as is; a percentage fee is fee_value percent of
    the amount, rounded half up to the cent.
    """
    if fee_type == FeeType.FIXED:
        return Decimal(fee_value).quantize(CENT, rounding=ROUND_HALF_UP)
    fee = Decimal(amount) * Decimal(fee_value) / Decimal('100')
    return fee.quantize(CENT, rounding=ROUND_HALF_UP)


def fetch_deposit_fee_configurations() -> QuerySet:
    return DepositFeeConfiguration.objects.order_by('deposit_method')


def fetch_deposit_fee_configuration(*, deposit_method: str) -> DepositFeeConfiguration:
    try:
        return DepositFeeConfiguration.objects.get(deposit_method=deposit_method)
    except DepositFeeConfiguration.DoesNotExist:
        raise FeeConfigurationNotFoundError(
            f"No fee configuration for deposit method {deposit_method}"
        )


@transaction.atomic
def update_deposit_fee_configuration(
    *, deposit_method: str, fee_type: str, fee_value: Decimal
) -> DepositFeeConfiguration:
    """
    Change the fee of one deposit method.

    Raises:
        FeeConfigurationNotFoundError: If the method has no configuration
    """
    try:
        config = DepositFeeConfiguration.objects.select_for_update().get(deposit_method=deposit_method)
    except DepositFeeConfiguration.DoesNotExist:
        raise FeeConfigurationNotFoundError(
            f"No fee configuration for deposit method {deposit_method}"
        )

    config.fee_type = fee_type
    config.fee_value = fee_value
    config.save(update_fields=['fee_type', 'fee_value', 'updated_at'])

    logger.info("Deposit fee for %s set to %s (%s)", deposit_method, fee_value, fee_type)
    return config
