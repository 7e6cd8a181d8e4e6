"""
Transaction repository.

Append-only access to the transaction log.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from accrual.utils.formatters import quantize_amount
from app.models.enums import TransactionStatus, TransactionType
from app.models.transaction import TransactionRecord
from app.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[TransactionRecord]):
    """Transaction log repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction repository."""
        super().__init__(TransactionRecord, session)

    async def record(
        self,
        nullifier_hash: str,
        type: TransactionType,
        amount: Decimal,
        status: TransactionStatus = TransactionStatus.COMPLETED,
    ) -> TransactionRecord:
        """
        Append a log entry.

        Args:
            nullifier_hash: Account key
            type: Operation type
            amount: Amount moved
            status: Entry status

        Returns:
            Created log entry
        """
        entry = TransactionRecord(
            nullifier_hash=nullifier_hash,
            type=type.value,
            amount=quantize_amount(amount),
            status=status.value,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def find_by_nullifier(
        self, nullifier_hash: str, limit: int = 50
    ) -> list[TransactionRecord]:
        """
        Get log entries for an account, newest first.

        Args:
            nullifier_hash: Account key
            limit: Max number of entries

        Returns:
            List of log entries
        """
        stmt = (
            select(TransactionRecord)
            .where(TransactionRecord.nullifier_hash == nullifier_hash)
            .order_by(TransactionRecord.created_at.desc(), TransactionRecord.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
