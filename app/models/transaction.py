"""
Transaction model.

Append-only log of completed accrual operations.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.enums import TransactionStatus
from app.models.types import MoneyType
from app.utils.datetime_utils import utc_now


class TransactionRecord(Base):
    """Transaction log entry. Never updated or deleted."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    nullifier_hash: Mapped[str] = mapped_column(
        String(255), index=True, nullable=False
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    tx_hash: Mapped[str | None] = mapped_column(String(66), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TransactionStatus.COMPLETED.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False, index=True
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<TransactionRecord(id={self.id}, type={self.type}, "
            f"amount={self.amount}, status={self.status})>"
        )
