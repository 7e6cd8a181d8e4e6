"""Tests for per-key async locks."""

import asyncio

import pytest

from accrual.exceptions import ConflictError
from app.utils.locks import KeyedLock


class TestKeyedLock:
    """Tests for KeyedLock."""

    @pytest.mark.asyncio
    async def test_same_key_serialized(self) -> None:
        """Critical sections on the same key never overlap."""
        locks = KeyedLock()
        active = 0
        max_active = 0

        async def worker() -> None:
            nonlocal active, max_active
            async with locks.acquire("0xabc"):
                active += 1
                max_active = max(max_active, active)
                await asyncio.sleep(0.01)
                active -= 1

        await asyncio.gather(*(worker() for _ in range(5)))
        assert max_active == 1

    @pytest.mark.asyncio
    async def test_different_keys_concurrent(self) -> None:
        """Different keys do not block each other."""
        locks = KeyedLock()
        entered = asyncio.Event()

        async def holder() -> None:
            async with locks.acquire("a"):
                await entered.wait()

        task = asyncio.create_task(holder())
        await asyncio.sleep(0)
        async with locks.acquire("b", timeout=0.5):
            entered.set()
        await task

    @pytest.mark.asyncio
    async def test_timeout_raises_conflict(self) -> None:
        """Waiting past the timeout raises a retryable ConflictError."""
        locks = KeyedLock()
        release = asyncio.Event()

        async def holder() -> None:
            async with locks.acquire("0xabc"):
                await release.wait()

        task = asyncio.create_task(holder())
        await asyncio.sleep(0)

        with pytest.raises(ConflictError) as exc_info:
            async with locks.acquire("0xabc", timeout=0.05):
                pass
        assert exc_info.value.retryable is True

        release.set()
        await task

    @pytest.mark.asyncio
    async def test_locks_released_after_use(self) -> None:
        """Registry does not keep locks for idle keys."""
        locks = KeyedLock()
        async with locks.acquire("a"):
            assert len(locks) == 1
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_released_on_error(self) -> None:
        """Exceptions inside the block release the lock."""
        locks = KeyedLock()
        with pytest.raises(RuntimeError):
            async with locks.acquire("a"):
                raise RuntimeError("boom")

        async with locks.acquire("a", timeout=0.1):
            pass
        assert len(locks) == 0
