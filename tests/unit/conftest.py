"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- AccrualEngine instance
- Sample account states
"""

from decimal import Decimal

import pytest

from accrual import AccountState, AccrualEngine, VerificationLevel


@pytest.fixture
def engine():
    """
    Create AccrualEngine with default rates.

    Returns:
        AccrualEngine: Engine instance for testing
    """
    return AccrualEngine()


@pytest.fixture
def orb_account():
    """Orb-verified account created at t=0 with nothing staked."""
    return AccountState(
        nullifier_hash="0xorb-account-0001",
        verification_level=VerificationLevel.ORB,
    )


@pytest.fixture
def device_account():
    """Device-verified account created at t=0 with nothing staked."""
    return AccountState(
        nullifier_hash="0xdevice-account-01",
        verification_level=VerificationLevel.DEVICE,
    )


@pytest.fixture
def staked_account():
    """
    Account with 1000 staked since t=0 and 50 spendable.

    Returns:
        AccountState: Staking position used across staking tests
    """
    return AccountState(
        nullifier_hash="0xstaker-account-01",
        verification_level=VerificationLevel.ORB,
        balance=Decimal("50"),
        total_staked=Decimal("1000"),
        total_claimed=Decimal("10"),
    )
