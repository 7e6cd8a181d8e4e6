"""
Per-key async locks.

Serializes read-modify-write sequences on the same account key within
one process. Cross-process safety comes from row locks and the account
version column.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from accrual.exceptions import ConflictError


class KeyedLock:
    """
    Registry of asyncio locks, one per key.

    Locks are dropped once no coroutine holds or waits on them, so the
    registry does not grow with the number of accounts ever seen.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def acquire(self, key: str, timeout: float | None = None) -> AsyncIterator[None]:
        """
        Hold the lock for ``key``.

        Args:
            key: Account key
            timeout: Max seconds to wait; None waits forever

        Raises:
            ConflictError: If the lock is not acquired within timeout
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=timeout)
            except TimeoutError as e:
                raise ConflictError("Account is busy, retry the request") from e
            try:
                yield
            finally:
                lock.release()
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                self._locks.pop(key, None)


account_locks = KeyedLock()
