import random
from collections.abc import Container
from typing import Final

CUSTOMER_ID_PREFIX: Final[str] = "CustID"
TRANSACTION_ID_PREFIX: Final[str] = "TxnID"
ID_DIGITS: Final[int] = 10


def generate_id(
    prefix: str,
    used: Container[str],
    digits: int = ID_DIGITS,
    rng: random.Random | None = None,
) -> str:
    """Draw ``prefix`` + ``digits`` random digits until the ID is unused.

    The first digit is never zero, so every ID has exactly ``digits`` digits.

    Args:
        prefix: Literal ID prefix, e.g. ``CustID``.
        used: IDs that must not be returned.
        digits: Number of digits after the prefix.
        rng: Random source; the module RNG when omitted.

    Returns:
        An ID absent from ``used``.
    """
    source = rng or random
    low, high = 10 ** (digits - 1), 10**digits - 1
    while True:
        candidate = f"{prefix}{source.randint(low, high)}"
        if candidate not in used:
            return candidate
