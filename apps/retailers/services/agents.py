"""
Agent management service.

Agents are users with role agent. They earn a share of the commission on
every sale made by the retailers assigned to them.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import (
    Count,
    DecimalField,
    OuterRef,
    QuerySet,
    Subquery,
    Sum,
    Value,
)
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.accounts.services import DuplicateEmailError
from apps.sales.models import Sale

from ..models import Retailer
from .exceptions import AgentNotFoundError, RetailerNotFoundError

User = get_user_model()
logger = logging.getLogger(__name__)

UPDATABLE_AGENT_FIELDS = ('full_name', 'email', 'phone', 'status')

MONEY = DecimalField(max_digits=14, decimal_places=2)


def _agent_sales_total(field: str, since=None) -> Coalesce:
    """Correlated sum of a Sale money field over one agent's retailers."""
    sales = Sale.objects.filter(terminal__retailer__agent=OuterRef('pk'))
    if since is not None:
        sales = sales.filter(created_at__gte=since)

    total = (
        sales
        .values('terminal__retailer__agent')
        .annotate(total=Sum(field))
        .values('total')[:1]
    )
    return Coalesce(Subquery(total, output_field=MONEY), Value(Decimal('0.00')), output_field=MONEY)


def _agent_summary_queryset() -> QuerySet:
    now = timezone.localtime()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    year_start = month_start.replace(month=1)

    return (
        User.objects
        .filter(role=User.Role.AGENT)
        .annotate(
            retailer_count=Count('agent_retailers', distinct=True),
            mtd_sales=_agent_sales_total('sale_amount', since=month_start),
            mtd_commission=_agent_sales_total('agent_commission', since=month_start),
            ytd_commission=_agent_sales_total('agent_commission', since=year_start),
            total_commission_earned=_agent_sales_total('agent_commission'),
        )
    )


def fetch_agents() -> QuerySet:
    """
    Agent summary rows, by name.

    Each row carries retailer_count, mtd_sales (sale value this month),
    mtd_commission, ytd_commission and total_commission_earned.
    """
    return _agent_summary_queryset().order_by('full_name', 'email')


def fetch_agent_by_id(*, agent_id: UUID) -> User:
    try:
        return _agent_summary_queryset().get(id=agent_id)
    except User.DoesNotExist:
        raise AgentNotFoundError(f"Agent not found: {agent_id}")


def create_agent(*, profile_data: dict, password: str) -> User:
    """
    Create an agent account.

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    email = profile_data['email']
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError(f"A user with email {email} already exists")

    agent = User.objects.create_user(
        email=email,
        password=password,
        full_name=profile_data.get('full_name', ''),
        phone=profile_data.get('phone') or '',
        role=User.Role.AGENT,
        status=profile_data.get('status') or User.Status.ACTIVE,
    )
    logger.info("Agent %s created", agent.id)
    return fetch_agent_by_id(agent_id=agent.id)


@transaction.atomic
def update_agent(*, agent_id: UUID, **fields) -> User:
    """Update full_name, email, phone or status of an agent."""
    try:
        agent = User.objects.select_for_update().get(id=agent_id, role=User.Role.AGENT)
    except User.DoesNotExist:
        raise AgentNotFoundError(f"Agent not found: {agent_id}")

    updates = {k: v for k, v in fields.items() if k in UPDATABLE_AGENT_FIELDS}

    new_email = updates.get('email')
    if new_email and User.objects.filter(email__iexact=new_email).exclude(id=agent.id).exists():
        raise DuplicateEmailError(f"A user with email {new_email} already exists")

    for field, value in updates.items():
        setattr(agent, field, value)
    if updates:
        agent.save(update_fields=[*updates.keys(), 'updated_at'])

    return fetch_agent_by_id(agent_id=agent.id)


def _get_agent(agent_id: UUID) -> User:
    try:
        return User.objects.get(id=agent_id, role=User.Role.AGENT)
    except User.DoesNotExist:
        raise AgentNotFoundError(f"Agent not found: {agent_id}")


def fetch_agent_retailers(*, agent_id: UUID) -> QuerySet:
    """Retailers assigned to an agent."""
    agent = _get_agent(agent_id)
    return (
        Retailer.objects
        .filter(agent=agent)
        .select_related('commission_group')
        .order_by('name')
    )


def fetch_unassigned_retailers() -> QuerySet:
    return (
        Retailer.objects
        .filter(agent__isnull=True)
        .select_related('commission_group')
        .order_by('name')
    )


@transaction.atomic
def assign_retailer_to_agent(*, retailer_id: UUID, agent_id: UUID) -> Retailer:
    """
    Make the agent responsible for the retailer, replacing any previous agent.

    Raises:
        AgentNotFoundError: If the agent does not exist
        RetailerNotFoundError: If the retailer does not exist
    """
    agent = _get_agent(agent_id)
    try:
        retailer = Retailer.objects.select_for_update().get(id=retailer_id)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError(f"Retailer not found: {retailer_id}")

    retailer.agent = agent
    retailer.save(update_fields=['agent', 'updated_at'])
    logger.info("Retailer %s assigned to agent %s", retailer.id, agent.id)
    return retailer


@transaction.atomic
def unassign_retailer_from_agent(*, retailer_id: UUID, agent_id: Optional[UUID] = None) -> Retailer:
    """
    Remove the agent of a retailer.

    When agent_id is given the retailer must currently belong to that agent.
    """
    queryset = Retailer.objects.select_for_update().filter(id=retailer_id)
    if agent_id:
        queryset = queryset.filter(agent_id=agent_id)

    retailer = queryset.first()
    if retailer is None:
        raise RetailerNotFoundError(f"Retailer not found: {retailer_id}")

    retailer.agent = None
    retailer.save(update_fields=['agent', 'updated_at'])
    logger.info("Retailer %s unassigned from its agent", retailer.id)
    return retailer
