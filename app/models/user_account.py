"""
User account model.

One row per verified identity, keyed by the World ID nullifier hash.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from accrual.core.models import AccountState, VerificationLevel
from accrual.utils.formatters import quantize_amount
from app.models.base import Base
from app.models.types import MoneyType
from app.utils.datetime_utils import utc_now


class UserAccount(Base):
    """User account - balances and accrual clocks."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            'balance >= 0', name='check_user_balance_non_negative'
        ),
        CheckConstraint(
            'total_staked >= 0', name='check_user_total_staked_non_negative'
        ),
        CheckConstraint(
            'total_claimed >= 0', name='check_user_total_claimed_non_negative'
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Identity
    nullifier_hash: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    verification_level: Mapped[str] = mapped_column(
        String(20), nullable=False, default=VerificationLevel.DEVICE.value
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    # Balances
    balance: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )
    total_staked: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )
    total_claimed: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )

    # Accrual clocks (epoch seconds)
    last_claim_time: Mapped[int] = mapped_column(
        BigInteger, default=0, nullable=False
    )
    last_stake_time: Mapped[int] = mapped_column(
        BigInteger, default=0, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    # Optimistic concurrency: bumped on every UPDATE
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )

    __mapper_args__ = {"version_id_col": version}

    def to_state(self) -> AccountState:
        """Snapshot for the accrual engine."""
        return AccountState(
            nullifier_hash=self.nullifier_hash,
            verification_level=self.verification_level,
            balance=self.balance,
            total_staked=self.total_staked,
            total_claimed=self.total_claimed,
            last_claim_time=self.last_claim_time or 0,
            last_stake_time=self.last_stake_time or 0,
        )

    def apply_state(self, state: AccountState) -> None:
        """
        Copy engine state onto the row.

        Amounts are truncated to storage precision here.

        Args:
            state: State returned by the accrual engine
        """
        self.balance = quantize_amount(state.balance)
        self.total_staked = quantize_amount(state.total_staked)
        self.total_claimed = quantize_amount(state.total_claimed)
        self.last_claim_time = state.last_claim_time
        self.last_stake_time = state.last_stake_time

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<UserAccount(id={self.id}, level={self.verification_level}, "
            f"balance={self.balance}, staked={self.total_staked})>"
        )
