"""Per-user serialization for checkout.

Two checkouts for the same user must not both read the same cart before
either clears it.  The registry hands out one lock per user id; checkouts
for different users never contend.  Scope is the current process.

A user's entry lives only while some checkout holds or waits on it.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from storefront.domain.exceptions import ConflictError


class _UserLock:

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class UserLockRegistry:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, _UserLock] = {}

    def __len__(self) -> int:
        """Number of users with a checkout in progress or waiting."""
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, user_id: str, timeout: float) -> Iterator[None]:
        """Hold the user's lock, waiting at most ``timeout`` seconds."""
        entry = self._checkout(user_id)
        try:
            if not entry.lock.acquire(timeout=timeout):
                raise ConflictError("Another checkout is already in progress for this user")
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._checkin(user_id)

    def _checkout(self, user_id: str) -> _UserLock:
        with self._guard:
            entry = self._locks.get(user_id)
            if entry is None:
                entry = self._locks[user_id] = _UserLock()
            entry.users += 1
            return entry

    def _checkin(self, user_id: str) -> None:
        with self._guard:
            entry = self._locks[user_id]
            entry.users -= 1
            if entry.users == 0:
                del self._locks[user_id]


# Shared by every PlaceOrderHandler that is not given its own registry.
default_registry = UserLockRegistry()
