"""
Staking service.

Stake, unstake, compound and harvest staking interest.
"""

from decimal import Decimal

from accrual.core.models import OperationResult
from app.models.enums import TransactionType
from app.services.base_service import BaseService


class StakingService(BaseService):
    """Staking stream operations."""

    async def get_staking_reward(self, nullifier_hash: str) -> Decimal:
        """
        Get interest accrued since the last stake event. Read-only.

        Raises:
            AccountNotFoundError: If no account exists
        """
        state = await self.get_state(nullifier_hash)
        return self.engine.staking_interest(state, self.clock())

    async def stake(self, nullifier_hash: str, amount: Decimal) -> OperationResult:
        """
        Move balance into stake.

        Pending interest on existing principal is discarded, not settled.

        Raises:
            AccountNotFoundError: If no account exists
            InvalidArgumentError: If amount is not in (0, balance]
        """
        result = await self._execute(
            nullifier_hash,
            lambda state, now: self.engine.stake(state, now, amount),
            TransactionType.STAKE,
        )
        self._mirror("stake", nullifier_hash, result.amount)
        return result

    async def unstake(self, nullifier_hash: str) -> OperationResult:
        """
        Return principal plus interest to balance.

        Raises:
            AccountNotFoundError: If no account exists
            InvalidArgumentError: If nothing is staked
        """
        result = await self._execute(
            nullifier_hash, self.engine.unstake, TransactionType.UNSTAKE
        )
        self._mirror("unstake", nullifier_hash)
        return result

    async def compound(self, nullifier_hash: str) -> OperationResult:
        """
        Add accrued interest to principal. Not written to the transaction log.

        Raises:
            AccountNotFoundError: If no account exists
            InvalidArgumentError: If nothing is staked or no interest accrued
        """
        result = await self._execute(nullifier_hash, self.engine.compound, None)
        self._mirror("compound_staking_reward", nullifier_hash)
        return result

    async def claim_staking_reward(self, nullifier_hash: str) -> OperationResult:
        """
        Harvest accrued interest to balance, keeping principal staked.

        Raises:
            AccountNotFoundError: If no account exists
            InvalidArgumentError: If nothing is staked or no interest accrued
        """
        result = await self._execute(
            nullifier_hash, self.engine.claim_staking_reward, TransactionType.CLAIM_REWARD
        )
        self._mirror("claim_staking_reward", nullifier_hash)
        return result
