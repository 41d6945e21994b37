"""Terminal management service."""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.services import DuplicateEmailError, generate_password

from ..models import Retailer, Terminal, TerminalStatus
from .exceptions import (
    RetailerNotFoundError,
    TerminalNotFoundError,
    MissingUserAccountError,
)
from .short_codes import terminal_short_code

User = get_user_model()
logger = logging.getLogger(__name__)

UPDATABLE_TERMINAL_FIELDS = ('name', 'status', 'serial_number', 'imei_number')


def _lock_retailer(retailer_id: UUID) -> Retailer:
    try:
        return Retailer.objects.select_for_update().get(id=retailer_id)
    except Retailer.DoesNotExist:
        raise RetailerNotFoundError(f"Retailer not found: {retailer_id}")


def _next_short_code(retailer: Retailer) -> str:
    """Lowest free -NN suffix of the retailer code."""
    taken = set(
        Terminal.objects
        .filter(short_code__startswith=f"{retailer.short_code}-")
        .values_list('short_code', flat=True)
    )
    sequence = 1
    while terminal_short_code(retailer.short_code, sequence) in taken:
        sequence += 1
    return terminal_short_code(retailer.short_code, sequence)


def fetch_terminals(*, retailer_id: UUID) -> QuerySet:
    return Terminal.objects.filter(retailer_id=retailer_id).select_related('user')


def fetch_terminal_by_id(*, terminal_id: UUID) -> Terminal:
    try:
        return Terminal.objects.select_related('retailer', 'user').get(id=terminal_id)
    except Terminal.DoesNotExist:
        raise TerminalNotFoundError(f"Terminal not found: {terminal_id}")


def fetch_my_terminal(user) -> Terminal:
    """Terminal record of a terminal-role user, with its retailer."""
    try:
        return (
            Terminal.objects
            .select_related('retailer', 'retailer__commission_group')
            .get(user=user)
        )
    except Terminal.DoesNotExist:
        raise TerminalNotFoundError("No terminal for this account")


@transaction.atomic
def create_terminal(
    *,
    retailer_id: UUID,
    name: str,
    serial_number: str = '',
    imei_number: str = '',
    user=None,
) -> Terminal:
    """Create an active terminal for a retailer."""
    retailer = _lock_retailer(retailer_id)

    terminal = Terminal.objects.create(
        retailer=retailer,
        user=user,
        name=name,
        status=TerminalStatus.ACTIVE,
        short_code=_next_short_code(retailer),
        serial_number=serial_number or '',
        imei_number=imei_number or '',
    )
    logger.info("Terminal %s (%s) created for retailer %s", terminal.id, terminal.short_code, retailer.id)
    return terminal


@transaction.atomic
def create_terminal_with_user(
    *,
    name: str,
    contact_person: str,
    retailer_id: UUID,
    email: str,
    password: str,
    serial_number: str = '',
    imei_number: str = '',
) -> Terminal:
    """
    Create a terminal login account (role terminal) and its terminal.

    Raises:
        DuplicateEmailError: If the email is already registered
        RetailerNotFoundError: If the retailer does not exist
    """
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError(f"A user with email {email} already exists")

    user = User.objects.create_user(
        email=email,
        password=password,
        full_name=contact_person,
        role=User.Role.TERMINAL,
    )
    return create_terminal(
        retailer_id=retailer_id,
        name=name,
        serial_number=serial_number,
        imei_number=imei_number,
        user=user,
    )


@transaction.atomic
def update_terminal(*, terminal_id: UUID, **fields) -> Terminal:
    """Update name, status, serial_number or imei_number of a terminal."""
    try:
        terminal = Terminal.objects.select_for_update().get(id=terminal_id)
    except Terminal.DoesNotExist:
        raise TerminalNotFoundError(f"Terminal not found: {terminal_id}")

    updates = {k: v for k, v in fields.items() if k in UPDATABLE_TERMINAL_FIELDS}
    for field, value in updates.items():
        setattr(terminal, field, value)
    if updates:
        terminal.save(update_fields=[*updates.keys(), 'updated_at'])

    if 'status' in updates and terminal.user_id:
        User.objects.filter(id=terminal.user_id).update(status=terminal.status)

    return terminal


@transaction.atomic
def reset_terminal_password(*, terminal_id: UUID, password: Optional[str] = None) -> dict:
    """
    Set a new password on the terminal's login account.

    Returns:
        {'password': new password, 'short_code': terminal short code}

    Raises:
        TerminalNotFoundError: If the terminal does not exist
        MissingUserAccountError: If the terminal has no login account
    """
    terminal = fetch_terminal_by_id(terminal_id=terminal_id)
    if terminal.user is None:
        raise MissingUserAccountError("Terminal does not have an associated user account")

    new_password = password or generate_password()
    terminal.user.set_password(new_password)
    terminal.user.save(update_fields=['password', 'updated_at'])

    logger.info("Password reset for terminal %s", terminal.id)
    return {'password': new_password, 'short_code': terminal.short_code}


def touch_terminal(terminal: Terminal) -> None:
    """Record terminal activity."""
    Terminal.objects.filter(id=terminal.id).update(last_active=timezone.now())
