"""Password reset service."""

import logging
import secrets

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction

from .exceptions import InvalidTokenError
from .passwords import validate_password_complexity

User = get_user_model()
logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If this email is registered, you will receive a password reset link shortly."
)


def _send_reset_email(email: str, token: str) -> None:
    link = f"{settings.PASSWORD_RESET_URL}?token={token}"
    send_mail(
        subject='Reset your AirVoucher password',
        message=f"Use the link below to choose a new password:\n\n{link}\n",
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[email],
    )


@transaction.atomic
def request_password_reset(*, email: str) -> str:
    """
    Issue a reset token and mail the reset link.

    The returned message is the same whether or not the address belongs
    to an active account.

    Args:
        email: Address the reset was requested for

    Returns:
        Neutral confirmation message
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=email, is_active=True)
        .first()
    )
    if user is None:
        logger.info("Password reset requested for unknown address")
        return RESET_REQUESTED_MESSAGE

    token = secrets.token_urlsafe(32)
    user.reset_token = token
    user.save(update_fields=['reset_token'])

    transaction.on_commit(lambda: _send_reset_email(user.email, token))
    logger.info("Password reset token issued for user %s", user.id)

    return RESET_REQUESTED_MESSAGE


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Reset user password with token.

    Args:
        token: Reset token
        new_password: New password

    Returns:
        User instance

    Raises:
        WeakPasswordError: If the password fails the complexity rules
        InvalidTokenError: If token is invalid or expired
    """
    validate_password_complexity(new_password)

    if not token:
        raise InvalidTokenError("Invalid or expired reset token")

    try:
        user = (
            User.objects
            .select_for_update()
            .get(reset_token=token, is_active=True)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    user.set_password(new_password)
    user.reset_token = None
    user.save(update_fields=['password', 'reset_token'])

    return user
