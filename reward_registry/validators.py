"""Field-level format rules for registry records.

Every predicate returns a boolean and never raises. Patterns are matched
against the whole value with ASCII semantics, so a trailing newline or a
non-ASCII digit never passes.
"""

import re
from typing import Final

USER_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"U\d{0,3}[A-Za-z0-9]{6,}", re.ASCII
)
NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z]{1,12}", re.ASCII)
CREDIT_CARD_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[1-9]\d{3}-\d{4}-\d{4}", re.ASCII
)
PRODUCT_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"Prod\d{5}", re.ASCII)

MIN_AGE: Final[int] = 18
MAX_AGE: Final[int] = 100


def _matches(pattern: re.Pattern[str], value: object) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_user_name_valid(value: object) -> bool:
    """Leading ``U``, up to three digits, then six or more alphanumerics."""
    return _matches(USER_NAME_PATTERN, value)


def is_name_valid(value: object) -> bool:
    """One to twelve ASCII letters."""
    return _matches(NAME_PATTERN, value)


def is_age_valid(value: object) -> bool:
    return _is_int(value) and MIN_AGE <= value <= MAX_AGE  # type: ignore[operator]


def is_credit_card_valid(value: object) -> bool:
    """``XXXX-XXXX-XXXX`` digits with a non-zero first digit."""
    return _matches(CREDIT_CARD_PATTERN, value)


def is_product_id_valid(value: object) -> bool:
    """``Prod`` followed by exactly five digits."""
    return _matches(PRODUCT_ID_PATTERN, value)


def is_product_price_valid(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


def is_product_inventory_valid(value: object) -> bool:
    return _is_int(value) and value >= 0  # type: ignore[operator]


def is_reward_points_valid(value: object) -> bool:
    """Any integer balance, including negative ones."""
    return _is_int(value)


def is_single_line(value: object) -> bool:
    """Text without line breaks, so it fits on one stanza line."""
    return isinstance(value, str) and "\n" not in value and "\r" not in value
