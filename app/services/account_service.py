"""
Account service.

Account lookup and creation on first successful identity verification.
"""

from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from accrual.core.models import VerificationLevel
from app.models.transaction import TransactionRecord
from app.models.user_account import UserAccount
from app.services.base_service import BaseService
from app.utils.db_decorators import with_rollback_on_error
from app.utils.security import mask_nullifier


class AccountService(BaseService):
    """Account lifecycle and read-only account queries."""

    @with_rollback_on_error
    async def create_account(
        self, nullifier_hash: str, verification_level: VerificationLevel | str
    ) -> UserAccount:
        """
        Create account with zero balances and the claim clock at now.

        Args:
            nullifier_hash: Pseudonymous account key
            verification_level: "device" or "orb"

        Returns:
            Created account

        Raises:
            InvalidArgumentError: If verification level is unknown
            IntegrityError: If the key already exists
        """
        state = self.engine.create_account(
            nullifier_hash, verification_level, self.clock()
        )
        account = await self.account_repo.create_from_state(state)
        await self.session.commit()

        self.logger.info(
            f"Account created for {mask_nullifier(nullifier_hash)} "
            f"(level={state.verification_level.value})"
        )
        return account

    async def register_verified(
        self, nullifier_hash: str, verification_level: VerificationLevel | str
    ) -> tuple[UserAccount, bool]:
        """
        Ensure an account exists for a freshly verified identity.

        Existing accounts are returned unchanged (including their
        verification level). A concurrent registration of the same key
        is resolved by re-reading the row that won.

        Args:
            nullifier_hash: Pseudonymous account key
            verification_level: "device" or "orb"

        Returns:
            Tuple of (account, created)
        """
        existing = await self.account_repo.get_by_nullifier(nullifier_hash)
        if existing is not None:
            return existing, False

        try:
            account = await self.create_account(nullifier_hash, verification_level)
        except IntegrityError:
            self.logger.info(
                f"Concurrent registration for {mask_nullifier(nullifier_hash)}, "
                f"using existing account"
            )
            return await self.get_account(nullifier_hash), False

        self._mirror("register_user", nullifier_hash, account.is_verified)
        return account, True

    async def list_transactions(
        self, nullifier_hash: str, limit: int = 50
    ) -> list[TransactionRecord]:
        """
        Get transaction log of an account, newest first.

        Raises:
            AccountNotFoundError: If no account exists
        """
        await self.get_account(nullifier_hash)
        return await self.tx_repo.find_by_nullifier(nullifier_hash, limit=limit)

    async def get_balance(self, nullifier_hash: str) -> Decimal:
        """Get spendable balance."""
        account = await self.get_account(nullifier_hash)
        return account.balance

    async def get_total_staked(self, nullifier_hash: str) -> Decimal:
        """Get staked principal."""
        account = await self.get_account(nullifier_hash)
        return account.total_staked
