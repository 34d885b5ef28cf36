"""
Deterministic daily randomization.

Pages that show "random" content (character of the day, featured worlds)
need the same picks for every visitor on a given day. The seed is derived
from the civil date in America/New_York, so the selection rolls over at
Eastern midnight no matter where the server runs.

The rolling hash and the LCG below must stay bit-for-bit identical to the
existing implementation, or previously shown daily picks change.
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, TypeVar
from zoneinfo import ZoneInfo

T = TypeVar("T")

DAY_SEED_TIMEZONE = ZoneInfo("America/New_York")

# LCG parameters (Numerical Recipes)
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


def _to_int32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def day_seed_from_date_string(date_string: str) -> int:
    """Fold a ``YYYY-MM-DD`` string into a non-negative 32-bit seed."""
    hash_value = 0
    for char in date_string:
        hash_value = _to_int32(_to_int32(hash_value << 5) - hash_value + ord(char))
    return abs(hash_value)


def get_day_seed(now: Optional[datetime] = None) -> int:
    """
    Seed for the current Eastern-time calendar day.

    Args:
        now: Moment to use instead of the current time. Naive values are
            taken as UTC.

    Returns:
        Integer seed, identical for every moment within the same
        America/New_York day.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    local = now.astimezone(DAY_SEED_TIMEZONE)
    return day_seed_from_date_string(local.strftime("%Y-%m-%d"))


def seeded_random(seed: int) -> Callable[[], float]:
    """
    Create an isolated LCG stream.

    Each returned function owns its state; don't share one between
    consumers that expect independent sequences.
    """
    state = seed

    def next_random() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return state / LCG_MODULUS

    return next_random


def seeded_shuffle(items: Sequence[T], seed: int) -> list[T]:
    """Fisher-Yates shuffle driven by seeded_random(seed). Returns a new list."""
    shuffled = list(items)
    random = seeded_random(seed)

    for i in range(len(shuffled) - 1, 0, -1):
        j = int(random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return shuffled


def get_random_items(
    items: Sequence[T],
    count: int,
    now: Optional[datetime] = None,
) -> list[T]:
    """
    Pick up to ``count`` items, consistently for the whole day.

    Args:
        items: Candidates; never modified
        count: How many to return. Larger than len(items) returns them all,
            zero or negative returns nothing.
        now: Moment used to derive the day seed (defaults to now)

    Returns:
        The first ``count`` items of the day's shuffle
    """
    if not items or count <= 0:
        return []

    shuffled = seeded_shuffle(items, get_day_seed(now))
    return shuffled[: min(count, len(shuffled))]
