"""Password helpers shared by the admin-initiated reset flows."""

import re
import secrets
import string
from typing import Optional

from django.conf import settings

from .exceptions import WeakPasswordError

MIN_PASSWORD_LENGTH = 8


def generate_password(length: Optional[int] = None) -> str:
    """
    Generate a random password with at least one upper, lower and digit.

    Ambiguous characters (0/O, 1/l/I) are left out so the password can be
    read out to a retailer over the phone.
    """
    length = length or settings.GENERATED_PASSWORD_LENGTH
    length = max(length, MIN_PASSWORD_LENGTH)

    upper = ''.join(c for c in string.ascii_uppercase if c not in 'OI')
    lower = ''.join(c for c in string.ascii_lowercase if c != 'l')
    digits = '23456789'
    alphabet = upper + lower + digits

    chars = [
        secrets.choice(upper),
        secrets.choice(lower),
        secrets.choice(digits),
    ]
    chars += [secrets.choice(alphabet) for _ in range(length - len(chars))]
    secrets.SystemRandom().shuffle(chars)
    return ''.join(chars)


def validate_password_complexity(password: str) -> None:
    """
    Enforce the reset-password rules.

    Raises:
        WeakPasswordError: If the password is too short or lacks an
            uppercase letter, a lowercase letter or a digit
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    if not (
        re.search(r'[A-Z]', password)
        and re.search(r'[a-z]', password)
        and re.search(r'[0-9]', password)
    ):
        raise WeakPasswordError(
            "Password must contain at least one uppercase letter, "
            "one lowercase letter, and one number"
        )
