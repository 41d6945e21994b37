"""
Retailer management service.

A retailer always comes with a login account of role retailer; both are
created in one transaction.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.services import (
    DuplicateEmailError,
    generate_password,
)

from ..models import Retailer, RetailerStatus
from .exceptions import (
    RetailerNotFoundError,
    MissingUserAccountError,
    ShortCodeGenerationError,
)
from .short_codes import generate_retailer_short_code

User = get_user_model()
logger = logging.getLogger(__name__)

RETAILER_FIELDS = (
    'name',
    'contact_name',
    'contact_email',
    'contact_phone',
    'location',
    'secondary_contact_name',
    'secondary_contact_phone',
    'agent_id',
    'commission_group_id',
    'credit_limit',
    'status',
)


def _retailer_queryset() -> QuerySet:
    return Retailer.objects.select_related('user', 'agent', 'commission_group')


def fetch_retailers(
    *,
    status: Optional[str] = None,
    agent_id: Optional[UUID] = None,
    commission_group_id: Optional[UUID] = None,
) -> QuerySet:
    """Retailers by name, with agent and commission group joined."""
    queryset = _retailer_queryset()
    if status:
        queryset = queryset.filter(status=status)
    if agent_id:
        queryset = queryset.filter(agent_id=agent_id)
    if commission_group_id:
        queryset = queryset.filter(commission_group_id=commission_group_id)
    return queryset.order_by('name')


def fetch_retailer_by_id(*, retailer_id: UUID) -> Retailer:
    try:
        return _retailer_queryset().get(id=retailer_id)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError(f"Retailer not found: {retailer_id}")


def fetch_my_retailer(user) -> Retailer:
    """
    Return the retailer record of a retailer-role user.

    Raises:
        RetailerNotFoundError: If the user has no retailer record
    """
    try:
        return _retailer_queryset().get(user=user)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError("No retailer profile for this account")


def create_retailer(
    *,
    profile_data: dict,
    retailer_data: dict,
    password: str,
    max_retries: int = 5,
) -> Retailer:
    """
    Create the retailer login account and the retailer record.

    Args:
        profile_data: full_name, email, optional phone
        retailer_data: retailer fields; initial_balance seeds the balance
        password: Initial password of the account
        max_retries: Attempts at generating an unused short code

    Returns:
        Created Retailer

    Raises:
        DuplicateEmailError: If the email is already registered
        ShortCodeGenerationError: If every generated short code was taken
    """
    email = profile_data['email']
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError(f"A user with email {email} already exists")

    fields = {k: v for k, v in retailer_data.items() if k in RETAILER_FIELDS}
    initial_balance = retailer_data.get('initial_balance') or Decimal('0.00')

    for attempt in range(max_retries):
        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    full_name=profile_data.get('full_name', ''),
                    phone=profile_data.get('phone') or '',
                    role=User.Role.RETAILER,
                    status=profile_data.get('status') or User.Status.ACTIVE,
                )
                fields.setdefault('contact_name', user.full_name)
                fields.setdefault('contact_email', user.email)

                retailer = Retailer.objects.create(
                    user=user,
                    balance=initial_balance,
                    credit_used=max(-initial_balance, Decimal('0.00')),
                    short_code=generate_retailer_short_code(),
                    **fields,
                )
        except IntegrityError:
            if User.objects.filter(email__iexact=email).exists():
                raise DuplicateEmailError(f"A user with email {email} already exists")
            # Short code collision
            continue

        logger.info("Retailer %s created (%s, balance %s)", retailer.id, retailer.short_code, initial_balance)
        return fetch_retailer_by_id(retailer_id=retailer.id)

    raise ShortCodeGenerationError(
        f"Failed to generate a unique short code after {max_retries} attempts"
    )


@transaction.atomic
def update_retailer(*, retailer_id: UUID, **fields) -> Retailer:
    """
    Update retailer fields.

    Keys outside the editable retailer fields are ignored. Balances are
    changed through deposits, credit adjustments or update_retailer_balance.
    """
    try:
        retailer = Retailer.objects.select_for_update().get(id=retailer_id)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError(f"Retailer not found: {retailer_id}")

    updates = {k: v for k, v in fields.items() if k in RETAILER_FIELDS}
    for field, value in updates.items():
        setattr(retailer, field, value)
    if updates:
        retailer.save(update_fields=[*updates.keys(), 'updated_at'])

    if 'status' in updates and retailer.user_id:
        # Suspended and inactive retailers cannot sign in
        user_status = User.Status.ACTIVE if retailer.status == RetailerStatus.ACTIVE else User.Status.INACTIVE
        User.objects.filter(id=retailer.user_id).update(status=user_status)

    return fetch_retailer_by_id(retailer_id=retailer.id)


@transaction.atomic
def update_retailer_balance(*, retailer_id: UUID, balance: Decimal) -> Retailer:
    """Overwrite the balance of a retailer."""
    try:
        retailer = Retailer.objects.select_for_update().get(id=retailer_id)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError(f"Retailer not found: {retailer_id}")

    previous = retailer.balance
    retailer.set_balance(Decimal(balance))
    retailer.save(update_fields=['balance', 'credit_used', 'updated_at'])

    logger.warning("Retailer %s balance set directly from %s to %s", retailer.id, previous, balance)
    return retailer


@transaction.atomic
def reset_retailer_password(*, retailer_id: UUID, password: Optional[str] = None) -> dict:
    """
    Set a new password on the retailer's login account.

    Args:
        retailer_id: Retailer whose account is reset
        password: New password; generated when omitted

    Returns:
        {'password': new password, 'short_code': retailer short code}

    Raises:
        RetailerNotFoundError: If the retailer does not exist
        MissingUserAccountError: If the retailer has no login account
    """
    try:
        retailer = Retailer.objects.select_related('user').get(id=retailer_id)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError("Retailer not found")

    if retailer.user is None:
        raise MissingUserAccountError("Retailer does not have an associated user account")

    new_password = password or generate_password()
    retailer.user.set_password(new_password)
    retailer.user.save(update_fields=['password', 'updated_at'])

    logger.info("Password reset for retailer %s", retailer.id)
    return {'password': new_password, 'short_code': retailer.short_code}
