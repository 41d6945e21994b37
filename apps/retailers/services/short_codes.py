"""Short codes printed on receipts and used to identify retailers and terminals."""

import secrets

# Without I, O, 0 or 1
SHORT_CODE_LETTERS = 'ABCDEFGHJKLMNPQRSTUVWXYZ'
SHORT_CODE_DIGITS = '23456789'


def generate_retailer_short_code() -> str:
    """Three letters then three digits, e.g. ABC234."""
    letters = ''.join(secrets.choice(SHORT_CODE_LETTERS) for _ in range(3))
    digits = ''.join(secrets.choice(SHORT_CODE_DIGITS) for _ in range(3))
    return letters + digits


def terminal_short_code(retailer_short_code: str, sequence: int) -> str:
    """Terminal codes extend the retailer code: ABC234-01, ABC234-02, ..."""
    return f"{retailer_short_code}-{sequence:02d}"
