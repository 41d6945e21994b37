"""Commission group service."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, QuerySet

from ..models import CommissionGroup
from .exceptions import CommissionGroupNotFoundError

logger = logging.getLogger(__name__)


def fetch_commission_groups() -> QuerySet:
    """Active groups with their rates and voucher types prefetched."""
    return (
        CommissionGroup.objects
        .filter(is_active=True)
        .prefetch_related('rates__voucher_type')
        .order_by('name')
    )


def fetch_commission_groups_with_counts(*, include_inactive: bool = False) -> QuerySet:
    """
    Groups newest first, annotated with retailer_count and agent_count.

    agent_count is the number of distinct agents that have at least one
    retailer in the group.
    """
    queryset = CommissionGroup.objects.all()
    if not include_inactive:
        queryset = queryset.filter(is_active=True)

    return (
        queryset
        .annotate(
            retailer_count=Count('retailers', distinct=True),
            agent_count=Count('retailers__agent', distinct=True),
        )
        .order_by('-created_at')
    )


def fetch_commission_group_by_id(*, group_id: UUID) -> CommissionGroup:
    """
    Return one group with its rates.

    Raises:
        CommissionGroupNotFoundError: If the group does not exist
    """
    try:
        return (
            CommissionGroup.objects
            .prefetch_related('rates__voucher_type')
            .get(id=group_id)
        )
    except CommissionGroup.DoesNotExist:
        raise CommissionGroupNotFoundError(f"Commission group not found: {group_id}")


def create_commission_group(*, name: str, description: Optional[str] = None) -> CommissionGroup:
    group = CommissionGroup.objects.create(name=name, description=description)
    logger.info("Commission group %s created (%s)", group.id, name)
    return group


@transaction.atomic
def update_commission_group(*, group_id: UUID, **fields) -> CommissionGroup:
    """Update name, description or is_active of a group."""
    try:
        group = CommissionGroup.objects.select_for_update().get(id=group_id)
    except CommissionGroup.DoesNotExist:
        raise CommissionGroupNotFoundError(f"Commission group not found: {group_id}")

    updates = {k: v for k, v in fields.items() if k in ('name', 'description', 'is_active')}
    for field, value in updates.items():
        setattr(group, field, value)
    if updates:
        group.save(update_fields=[*updates.keys(), 'updated_at'])

    return group


def archive_commission_group(*, group_id: UUID) -> CommissionGroup:
    """Soft delete: the group keeps its rates and retailers but is hidden."""
    group = update_commission_group(group_id=group_id, is_active=False)
    logger.info("Commission group %s archived", group_id)
    return group
