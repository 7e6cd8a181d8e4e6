"""
Reward contract mirror.

Best-effort write-through of committed account operations to the
World Reward Coin contract. Database state is authoritative: mirror
calls run after commit as background tasks and their failures are
logged, never raised to the caller.
"""

import asyncio
from decimal import Decimal
from typing import Any

from aiohttp import ClientTimeout
from eth_account import Account
from loguru import logger
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.contract import AsyncContract
from web3.exceptions import ContractLogicError

from accrual.utils.formatters import to_token_units
from app.config.constants import (
    BLOCKCHAIN_TIMEOUT,
    DEFAULT_GAS_LIMIT,
    GAS_ESTIMATE_BUFFER,
)
from app.config.settings import Settings
from app.utils.exceptions import is_safe_to_ignore
from app.utils.security import mask_address, mask_nullifier, mask_tx_hash

from .constants import REWARD_CONTRACT_ABI


class RewardContractMirror:
    """
    Mirrors account operations to the reward contract.

    Features:
    - Disabled (every call is a no-op) unless RPC, contract and key are set
    - Nonce lock so parallel mirror calls do not reuse a nonce
    - Gas estimation with buffer, default limit on estimation failure
    - Fire-and-forget scheduling with tracked background tasks
    """

    def __init__(
        self,
        web3: AsyncWeb3 | None = None,
        contract: AsyncContract | None = None,
        private_key: str | None = None,
        chain_id: int | None = None,
    ) -> None:
        """
        Initialize contract mirror.

        Args:
            web3: AsyncWeb3 instance
            contract: Reward contract instance
            private_key: Signing key of the backend wallet
            chain_id: EVM chain ID for signed transactions
        """
        self.web3 = web3
        self.contract = contract
        self._private_key = private_key
        self.chain_id = chain_id
        self.sender_address: str | None = None

        if private_key:
            account = Account.from_key(private_key)
            self.sender_address = account.address
            del account

        # Nonce lock for preventing reuse across concurrent calls
        self._nonce_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()

        if self.enabled:
            logger.info(
                f"RewardContractMirror initialized: "
                f"contract={mask_address(contract.address)}, "
                f"sender={mask_address(self.sender_address)}"
            )
        else:
            logger.info("RewardContractMirror disabled: contract integration not configured")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RewardContractMirror":
        """
        Build mirror from application settings.

        Args:
            settings: Application settings

        Returns:
            Enabled mirror, or a disabled one if configuration is incomplete
        """
        if not settings.mirror_enabled:
            return cls()

        web3 = AsyncWeb3(
            AsyncHTTPProvider(
                settings.rpc_url,
                request_kwargs={"timeout": ClientTimeout(total=BLOCKCHAIN_TIMEOUT)},
            )
        )
        contract = web3.eth.contract(
            address=Web3.to_checksum_address(settings.contract_address),
            abi=REWARD_CONTRACT_ABI,
        )
        return cls(
            web3=web3,
            contract=contract,
            private_key=settings.wallet_private_key,
            chain_id=settings.chain_id,
        )

    @property
    def enabled(self) -> bool:
        """True when contract calls can be sent."""
        return bool(self.web3 and self.contract and self._private_key)

    @property
    def pending(self) -> int:
        """Number of mirror calls still in flight."""
        return len(self._tasks)

    # ------------------------------------------------------------------
    # Contract calls
    # ------------------------------------------------------------------

    async def register_user(self, nullifier_hash: str, is_verified: bool) -> str | None:
        """Register a newly verified account on-chain."""
        return await self._send("registerUser", nullifier_hash, is_verified)

    async def stake(self, nullifier_hash: str, amount: Decimal) -> str | None:
        """Mirror a stake."""
        return await self._send("stake", nullifier_hash, to_token_units(amount))

    async def unstake(self, nullifier_hash: str) -> str | None:
        """Mirror an unstake."""
        return await self._send("unstake", nullifier_hash)

    async def claim_staking_reward(self, nullifier_hash: str) -> str | None:
        """Mirror a staking reward claim."""
        return await self._send("claimStakingReward", nullifier_hash)

    async def compound_staking_reward(self, nullifier_hash: str) -> str | None:
        """Mirror a compound."""
        return await self._send("compoundStakingReward", nullifier_hash)

    async def claim_time_reward(self, nullifier_hash: str, amount: Decimal) -> str | None:
        """Mirror a time-based reward claim."""
        return await self._send("claimTimeReward", nullifier_hash, to_token_units(amount))

    async def _send(self, function_name: str, *args: Any) -> str | None:
        """
        Build, sign and send a contract transaction.

        Args:
            function_name: Contract function name
            *args: Function arguments

        Returns:
            Transaction hash (hex) or None when disabled
        """
        if not self.enabled:
            return None

        function = getattr(self.contract.functions, function_name)(*args)

        async with self._nonce_lock:
            nonce = await asyncio.wait_for(
                self.web3.eth.get_transaction_count(self.sender_address, "pending"),
                timeout=BLOCKCHAIN_TIMEOUT,
            )

            try:
                gas_estimate = await asyncio.wait_for(
                    function.estimate_gas({"from": self.sender_address}),
                    timeout=BLOCKCHAIN_TIMEOUT,
                )
                gas_limit = int(gas_estimate * GAS_ESTIMATE_BUFFER)
            except (TimeoutError, ContractLogicError) as e:
                logger.warning(f"Gas estimation failed for {function_name}, using default: {e}")
                gas_limit = DEFAULT_GAS_LIMIT

            transaction = await asyncio.wait_for(
                function.build_transaction(
                    {
                        "from": self.sender_address,
                        "nonce": nonce,
                        "gas": gas_limit,
                        "chainId": self.chain_id,
                    }
                ),
                timeout=BLOCKCHAIN_TIMEOUT,
            )

            account = None
            try:
                account = Account.from_key(self._private_key)
                signed_tx = account.sign_transaction(transaction)
            finally:
                if account:
                    del account

            tx_hash = await asyncio.wait_for(
                self.web3.eth.send_raw_transaction(signed_tx.raw_transaction),
                timeout=BLOCKCHAIN_TIMEOUT,
            )

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(
            f"Mirror {function_name} sent for {mask_nullifier(args[0] if args else None)}: "
            f"{mask_tx_hash(tx_hash_hex)}"
        )
        return tx_hash_hex

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def schedule(self, method: str, *args: Any) -> asyncio.Task | None:
        """
        Run a mirror call in the background.

        Must be called after the database commit. Errors are logged by
        the task and never reach the caller.

        Args:
            method: Name of a contract call method of this class
            *args: Method arguments

        Returns:
            The created task, or None when the mirror is disabled
        """
        if not self.enabled:
            return None

        task = asyncio.create_task(self._run(method, *args))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, method: str, *args: Any) -> str | None:
        """Execute a mirror call, logging any failure."""
        try:
            return await getattr(self, method)(*args)
        except Exception as e:
            if is_safe_to_ignore(e):
                logger.warning(f"Mirror {method} failed (ignored): {e}")
            else:
                logger.opt(exception=e).error(f"Mirror {method} failed: {e}")
            return None

    async def close(self, timeout: float = 5.0) -> None:
        """
        Wait for in-flight mirror calls.

        Args:
            timeout: Maximum time to wait in seconds
        """
        if not self._tasks:
            return
        logger.info(f"Waiting for {len(self._tasks)} mirror call(s)...")
        done, pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        for task in pending:
            task.cancel()
        if pending:
            logger.warning(f"Cancelled {len(pending)} unfinished mirror call(s)")
