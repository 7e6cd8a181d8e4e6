"""
Reward service.

Time-based claim rewards: query and claim.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from accrual.core.models import OperationResult
from app.models.enums import TransactionType
from app.services.base_service import BaseService


class RewardService(BaseService):
    """Claim stream operations."""

    def __init__(
        self, session: AsyncSession, enforce_claim_cap: bool = False, **kwargs
    ) -> None:
        """
        Initialize reward service.

        Args:
            session: Async database session
            enforce_claim_cap: Reject claims above the server-side claimable amount
            **kwargs: BaseService options (clock, engine, mirror, locks)
        """
        super().__init__(session, **kwargs)
        self.enforce_claim_cap = enforce_claim_cap

    async def get_claimable(self, nullifier_hash: str) -> Decimal:
        """
        Get claim reward accrued since last claim. Read-only.

        Raises:
            AccountNotFoundError: If no account exists
        """
        state = await self.get_state(nullifier_hash)
        return self.engine.claimable(state, self.clock())

    async def claim(self, nullifier_hash: str, amount: Decimal) -> OperationResult:
        """
        Credit a claim reward.

        The caller-supplied amount is trusted unless enforce_claim_cap
        is set, in which case it is bounded by the claimable amount.

        Args:
            nullifier_hash: Account key
            amount: Amount to claim

        Returns:
            OperationResult with claimed amount

        Raises:
            AccountNotFoundError: If no account exists
            InvalidArgumentError: If amount is not positive (or above cap)
        """
        def operation(state, now):
            cap = self.engine.claimable(state, now) if self.enforce_claim_cap else None
            return self.engine.claim(state, now, amount, cap=cap)

        result = await self._execute(nullifier_hash, operation, TransactionType.CLAIM)
        self._mirror("claim_time_reward", nullifier_hash, result.amount)
        return result
