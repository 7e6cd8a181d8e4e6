"""
Base service class.

Provides common functionality for account services: session management,
logging with bound service context, and the serialized
read-modify-write cycle shared by every accrual operation.
"""

from collections.abc import Callable

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from accrual.core.engine import AccrualEngine
from accrual.core.models import AccountState, OperationResult
from accrual.exceptions import AccountNotFoundError
from app.config.constants import ACCOUNT_LOCK_TIMEOUT
from app.models.enums import TransactionType
from app.models.user_account import UserAccount
from app.repositories.transaction_repository import TransactionRepository
from app.repositories.user_account_repository import UserAccountRepository
from app.services.blockchain_mirror import RewardContractMirror
from app.utils.datetime_utils import utc_timestamp
from app.utils.db_decorators import with_rollback_on_error
from app.utils.locks import KeyedLock, account_locks
from app.utils.security import mask_nullifier


Clock = Callable[[], int]
Operation = Callable[[AccountState, int], OperationResult]


class BaseService:
    """
    Base service class.

    Provides common functionality for all account services:
    - Session and repository wiring
    - Logging with bound service context
    - Injected clock, accrual engine, per-key locks and contract mirror
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock = utc_timestamp,
        engine: AccrualEngine | None = None,
        mirror: RewardContractMirror | None = None,
        locks: KeyedLock | None = None,
    ) -> None:
        """
        Initialize base service.

        Args:
            session: Async database session
            clock: Returns current time in epoch seconds
            engine: Accrual engine (default rates when None)
            mirror: Optional on-chain mirror
            locks: Per-key lock registry (process-wide when None)
        """
        self.session = session
        self.clock = clock
        self.engine = engine or AccrualEngine()
        self.mirror = mirror
        self.locks = locks if locks is not None else account_locks
        self.account_repo = UserAccountRepository(session)
        self.tx_repo = TransactionRepository(session)
        self.logger = logger.bind(service=self.__class__.__name__)

    async def get_account(self, nullifier_hash: str) -> UserAccount:
        """
        Load account by key.

        Raises:
            AccountNotFoundError: If no account exists
        """
        account = await self.account_repo.get_by_nullifier(nullifier_hash)
        if account is None:
            raise AccountNotFoundError()
        return account

    async def get_state(self, nullifier_hash: str) -> AccountState:
        """Load account and snapshot it for the engine."""
        account = await self.get_account(nullifier_hash)
        return account.to_state()

    async def _execute(
        self,
        nullifier_hash: str,
        operation: Operation,
        transaction_type: TransactionType | None,
    ) -> OperationResult:
        """
        Run one accrual operation as a serialized read-modify-write.

        The account row is locked, the engine computes the new state,
        the state and an optional log entry are written, and the
        transaction is committed. Nothing is written when the engine
        raises.

        Args:
            nullifier_hash: Account key
            operation: Engine call taking (state, now)
            transaction_type: Log entry type, None to skip logging

        Returns:
            Engine OperationResult
        """
        async with self.locks.acquire(nullifier_hash, timeout=ACCOUNT_LOCK_TIMEOUT):
            result = await self._apply(nullifier_hash, operation, transaction_type)

        self.logger.info(
            f"{result.kind.value} committed for {mask_nullifier(nullifier_hash)}: "
            f"{result.amount}"
        )
        return result

    @with_rollback_on_error
    async def _apply(
        self,
        nullifier_hash: str,
        operation: Operation,
        transaction_type: TransactionType | None,
    ) -> OperationResult:
        """Load, compute, write and commit. Rolled back on any error."""
        account = await self.account_repo.get_by_nullifier(
            nullifier_hash, for_update=True
        )
        if account is None:
            raise AccountNotFoundError()

        result = operation(account.to_state(), self.clock())

        await self.account_repo.save_state(account, result.account)
        if transaction_type is not None:
            await self.tx_repo.record(nullifier_hash, transaction_type, result.amount)
        await self.session.commit()
        return result

    def _mirror(self, method: str, *args) -> None:
        """Schedule a best-effort contract call after commit."""
        if self.mirror is not None:
            self.mirror.schedule(method, *args)
