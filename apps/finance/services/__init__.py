"""Services for deposits, deposit fees and credit limits."""

from .exceptions import (
    FinanceServiceError,
    RetailerNotFoundError,
    FeeConfigurationNotFoundError,
    InvalidDepositError,
    InvalidCreditAdjustmentError,
)
from .fees import (
    calculate_deposit_fee,
    fetch_deposit_fee_configurations,
    fetch_deposit_fee_configuration,
    update_deposit_fee_configuration,
)
from .deposits import (
    process_retailer_deposit,
    fetch_retailer_deposit_history,
)
from .credit import (
    process_credit_limit_adjustment,
    fetch_retailer_credit_history,
)

__all__ = [
    # Exceptions
    'FinanceServiceError',
    'RetailerNotFoundError',
    'FeeConfigurationNotFoundError',
    'InvalidDepositError',
    'InvalidCreditAdjustmentError',
    # Fees
    'calculate_deposit_fee',
    'fetch_deposit_fee_configurations',
    'fetch_deposit_fee_configuration',
    'update_deposit_fee_configuration',
    # Deposits
    'process_retailer_deposit',
    'fetch_retailer_deposit_history',
    # Credit
    'process_credit_limit_adjustment',
    'fetch_retailer_credit_history',
]
