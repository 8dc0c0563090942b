"""Domain service: human-readable order identifiers.

Format is ``ORD-<YYYYMMDD>-<NNNNN>``: the UTC calendar date plus a
five-digit number drawn uniformly from 10000..99999.  The generator does
not guarantee uniqueness; the order repository rejects duplicates and the
checkout retries with a fresh id.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import datetime, timezone

ORDER_ID_PREFIX = "ORD"
_LOW, _HIGH = 10000, 99999


def generate_order_id(now: datetime, rng: random.Random) -> str:
    """Pure function of the given instant and random source."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return f"{ORDER_ID_PREFIX}-{now:%Y%m%d}-{rng.randint(_LOW, _HIGH)}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderIdGenerator:
    """Binds a clock and random source so callers just ask for the next id."""

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self._clock = clock
        self._rng = rng or random.SystemRandom()

    def __call__(self) -> str:
        return generate_order_id(self._clock(), self._rng)
