"""
Sign-in for every role.

Admins and agents sign in with their email. Retailer and terminal
accounts may use the short code printed on their receipts instead.
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import Q
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()
logger = logging.getLogger(__name__)


def _lookup(email: Optional[str], short_code: Optional[str]):
    if email:
        match = Q(email__iexact=email.strip())
    else:
        code = short_code.strip()
        match = (
            Q(role=User.Role.RETAILER, retailer__short_code__iexact=code)
            | Q(role=User.Role.TERMINAL, terminal__short_code__iexact=code)
        )
    user_id = User.objects.filter(match).values_list('id', flat=True).first()
    if user_id is None:
        return None
    return User.objects.select_for_update().get(id=user_id)


@transaction.atomic
def authenticate_user(
    *,
    password: str,
    email: Optional[str] = None,
    short_code: Optional[str] = None,
) -> User:
    """
    Check credentials and stamp last_login.

    Args:
        password: Account password
        email: Account email, matched case-insensitively
        short_code: Retailer or terminal short code, used when no email is given

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If no account matches or the password is wrong
        InactiveAccountError: If the account is deactivated
    """
    if not email and not short_code:
        raise InvalidCredentialsError("Email or short code is required")

    message = "Invalid email or password" if email else "Invalid short code or password"

    user = _lookup(email, short_code)
    if user is None or not user.check_password(password):
        raise InvalidCredentialsError(message)

    if not user.is_active or user.status != User.Status.ACTIVE:
        logger.warning("Sign-in refused for inactive account %s", user.id)
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user
