"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for tests: in-memory database, no external integrations
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("WORLD_ID_APP_ID", "app_staging_test")
os.environ.setdefault("RPC_URL", "")
os.environ.setdefault("CONTRACT_ADDRESS", "")
os.environ.setdefault("WALLET_PRIVATE_KEY", "")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.models import Base  # noqa: E402
from app.utils.locks import KeyedLock  # noqa: E402


class FakeClock:
    """Controllable epoch-seconds clock."""

    def __init__(self, now: int = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> int:
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    """Clock starting at a fixed timestamp."""
    return FakeClock()


@pytest.fixture
def locks():
    """Fresh per-key lock registry."""
    return KeyedLock()


@pytest.fixture
def mock_session():
    """Mock AsyncSession for tests without a database."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture
def mock_mirror():
    """Mock RewardContractMirror recording scheduled calls."""
    mirror = MagicMock()
    mirror.enabled = True
    mirror.schedule = MagicMock(return_value=None)
    mirror.close = AsyncMock()
    return mirror


@pytest.fixture
def sample_nullifier():
    """Sample World ID nullifier hash."""
    return "0x2bf8406809dcefb1a7d5f1d4c0f9e2b3a1c7d8e9f0a1b2c3d4e5f60718293a4b"


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    """Session factory bound to the in-memory engine."""
    return async_sessionmaker(
        bind=db_engine, class_=AsyncSession, expire_on_commit=False
    )


@pytest_asyncio.fixture
async def db_session(session_maker):
    """Database session for one test."""
    async with session_maker() as session:
        yield session
