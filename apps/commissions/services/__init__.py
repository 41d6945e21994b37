"""
Commissions services.

Commission groups, their per voucher type rates, per face value
overrides and the resolution of a sale's commission split.
"""

from .exceptions import (
    CommissionsServiceError,
    CommissionGroupNotFoundError,
    OverrideNotFoundError,
    InvalidCommissionError,
)
from .groups import (
    fetch_commission_groups,
    fetch_commission_groups_with_counts,
    fetch_commission_group_by_id,
    create_commission_group,
    update_commission_group,
    archive_commission_group,
)
from .rates import (
    create_commission_rates,
    upsert_commission_rate,
)
from .overrides import (
    get_voucher_commission_override,
    upsert_voucher_commission_override,
    get_voucher_commission_overrides_for_type,
    delete_voucher_commission_override,
    get_voucher_amounts_for_type,
)
from .resolution import (
    CommissionSplit,
    resolve_commission,
)

__all__ = [
    # Exceptions
    'CommissionsServiceError',
    'CommissionGroupNotFoundError',
    'OverrideNotFoundError',
    'InvalidCommissionError',
    # Groups
    'fetch_commission_groups',
    'fetch_commission_groups_with_counts',
    'fetch_commission_group_by_id',
    'create_commission_group',
    'update_commission_group',
    'archive_commission_group',
    # Rates
    'create_commission_rates',
    'upsert_commission_rate',
    # Overrides
    'get_voucher_commission_override',
    'upsert_voucher_commission_override',
    'get_voucher_commission_overrides_for_type',
    'delete_voucher_commission_override',
    'get_voucher_amounts_for_type',
    # Resolution
    'CommissionSplit',
    'resolve_commission',
]
