"""
User account repository.

Data access layer for UserAccount model.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from accrual.core.models import AccountState
from app.models.user_account import UserAccount
from app.repositories.base import BaseRepository


class UserAccountRepository(BaseRepository[UserAccount]):
    """User account repository with key-based queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user account repository."""
        super().__init__(UserAccount, session)

    async def get_by_nullifier(
        self, nullifier_hash: str, for_update: bool = False
    ) -> UserAccount | None:
        """
        Get account by nullifier hash.

        Args:
            nullifier_hash: Pseudonymous account key
            for_update: Lock the row until the transaction ends

        Returns:
            UserAccount or None
        """
        return await self.get_by(for_update=for_update, nullifier_hash=nullifier_hash)

    async def create_from_state(self, state: AccountState) -> UserAccount:
        """
        Insert a new account row from an initial engine state.

        Args:
            state: State produced by AccrualEngine.create_account

        Returns:
            Created account
        """
        return await self.create(
            nullifier_hash=state.nullifier_hash,
            verification_level=state.verification_level.value,
            is_verified=state.is_verified,
            balance=state.balance,
            total_staked=state.total_staked,
            total_claimed=state.total_claimed,
            last_claim_time=state.last_claim_time,
            last_stake_time=state.last_stake_time,
        )

    async def save_state(
        self, account: UserAccount, state: AccountState
    ) -> UserAccount:
        """
        Write engine state back to the row.

        The UPDATE is guarded by the version column; a concurrent writer
        makes the flush raise StaleDataError.

        Args:
            account: Loaded account row
            state: New state returned by the engine

        Returns:
            Updated account
        """
        account.apply_state(state)
        await self.session.flush()
        return account
