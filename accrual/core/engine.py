"""
Accrual engine for claim rewards and staking interest.

This module contains standalone accrual logic without any
dependencies on database, ORM, or HTTP code. Every operation takes
the stored account state and the caller's clock and returns a new
state; the input state is never modified and nothing is applied when
a precondition fails.

Amounts that truncate to zero at settlement precision count as
nothing to act on, and no resulting balance may exceed what storage
holds.
"""

from decimal import Decimal

from accrual.constants import MAX_AMOUNT, SECONDS_PER_YEAR, STAKING_APY, get_reward_rate
from accrual.core.models import (
    AccountState,
    OperationKind,
    OperationResult,
    VerificationLevel,
)
from accrual.exceptions import InvalidArgumentError
from accrual.utils.formatters import quantize_amount

ZERO = Decimal("0")


class AccrualEngine:
    """
    Pure accrual rules for the claim stream and the staking stream.

    Two independent clocks drive the streams: ``last_claim_time`` for
    claimable rewards and ``last_stake_time`` for staking interest.
    Reading or resetting one never touches the other.
    """

    def __init__(
        self,
        staking_apy: Decimal = STAKING_APY,
        seconds_per_year: int = SECONDS_PER_YEAR,
    ) -> None:
        self.staking_apy = staking_apy
        self.seconds_per_year = seconds_per_year

    # ------------------------------------------------------------------
    # Account lifecycle
    # ------------------------------------------------------------------

    def create_account(
        self,
        nullifier_hash: str,
        verification_level: VerificationLevel | str,
        now: int,
    ) -> AccountState:
        """
        Build the initial state for a newly verified identity.

        Args:
            nullifier_hash: Pseudonymous key from the identity proof
            verification_level: "device" or "orb"
            now: Current time in epoch seconds

        Returns:
            Fresh AccountState with zero balances and both clocks at ``now``
        """
        try:
            level = VerificationLevel(verification_level)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Unknown verification level: {verification_level}"
            ) from e

        return AccountState(
            nullifier_hash=nullifier_hash,
            verification_level=level,
            last_claim_time=now,
            last_stake_time=now,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def elapsed(since: int, now: int) -> int:
        """Seconds between ``since`` and ``now``, never negative."""
        return max(0, now - since)

    @staticmethod
    def settles(amount: Decimal | None) -> bool:
        """True if ``amount`` is still positive after truncation to 8 decimals."""
        return amount is not None and quantize_amount(amount) > 0

    @staticmethod
    def _result(
        kind: OperationKind, amount: Decimal, account: AccountState
    ) -> OperationResult:
        """Wrap a new state, rejecting balances storage cannot hold."""
        if max(account.balance, account.total_staked, account.total_claimed) > MAX_AMOUNT:
            raise InvalidArgumentError("Amount is out of range")
        return OperationResult(kind=kind, amount=amount, account=account)

    def claimable(self, account: AccountState, now: int) -> Decimal:
        """
        Calculate claim reward accrued since the last claim.

        Formula: elapsed * rate

        Args:
            account: Stored account state
            now: Current time in epoch seconds

        Returns:
            Claimable amount (minimum 0)

        Example:
            >>> engine = AccrualEngine()
            >>> state = AccountState(nullifier_hash="0xabc", verification_level="orb")
            >>> engine.claimable(state, 100)
            Decimal('0.002400')
        """
        rate = get_reward_rate(account.is_verified)
        return max(ZERO, self.elapsed(account.last_claim_time, now) * rate)

    def staking_interest(self, account: AccountState, now: int) -> Decimal:
        """
        Calculate linear staking interest since the last stake event.

        Formula: total_staked * APY * elapsed / SECONDS_PER_YEAR

        Args:
            account: Stored account state
            now: Current time in epoch seconds

        Returns:
            Accrued interest (minimum 0)

        Example:
            >>> engine = AccrualEngine()
            >>> state = AccountState(nullifier_hash="0xabc", total_staked=Decimal("1000"))
            >>> engine.staking_interest(state, 31536000)
            Decimal('700.00')
        """
        if account.total_staked <= 0:
            return ZERO

        elapsed = self.elapsed(account.last_stake_time, now)
        interest = (
            account.total_staked * self.staking_apy * elapsed
        ) / self.seconds_per_year
        return max(ZERO, interest)

    # ------------------------------------------------------------------
    # Claim stream
    # ------------------------------------------------------------------

    def claim(
        self,
        account: AccountState,
        now: int,
        claim_amount: Decimal,
        cap: Decimal | None = None,
    ) -> OperationResult:
        """
        Credit a claim reward to balance and restart the claim clock.

        The amount is supplied by the caller (normally the last queried
        claimable value). It is only bounded when ``cap`` is given.

        Args:
            account: Stored account state
            now: Current time in epoch seconds
            claim_amount: Amount to credit
            cap: Optional upper bound, e.g. the server-side claimable amount

        Returns:
            OperationResult with the claimed amount

        Raises:
            InvalidArgumentError: If amount is not positive, exceeds cap, or the
                new balance exceeds storage range
        """
        if not self.settles(claim_amount):
            raise InvalidArgumentError("No claimable amount")

        if cap is not None and claim_amount > cap:
            raise InvalidArgumentError(
                f"Claim amount {claim_amount} exceeds claimable {cap}"
            )

        new_state = account.model_copy(
            update={
                "balance": account.balance + claim_amount,
                "total_claimed": account.total_claimed + claim_amount,
                "last_claim_time": max(account.last_claim_time, now),
            }
        )
        return self._result(OperationKind.CLAIM, claim_amount, new_state)

    # ------------------------------------------------------------------
    # Staking stream
    # ------------------------------------------------------------------

    def stake(
        self, account: AccountState, now: int, amount: Decimal
    ) -> OperationResult:
        """
        Move balance into staked principal.

        Pending interest on existing principal is NOT settled: the
        staking clock is reset to ``now``, so callers must compound or
        claim first if they want to keep it.

        Args:
            account: Stored account state
            now: Current time in epoch seconds
            amount: Amount to stake (0 < amount <= balance)

        Returns:
            OperationResult with the staked amount

        Raises:
            InvalidArgumentError: If amount is out of range
        """
        if not self.settles(amount) or amount > account.balance:
            raise InvalidArgumentError("Invalid amount")

        new_state = account.model_copy(
            update={
                "balance": account.balance - amount,
                "total_staked": account.total_staked + amount,
                "last_stake_time": max(account.last_stake_time, now),
            }
        )
        return self._result(OperationKind.STAKE, amount, new_state)

    def unstake(self, account: AccountState, now: int) -> OperationResult:
        """
        Settle the whole staking position into balance.

        Args:
            account: Stored account state
            now: Current time in epoch seconds

        Returns:
            OperationResult with principal plus accrued interest

        Raises:
            InvalidArgumentError: If nothing is staked or the new balance exceeds
                storage range
        """
        if account.total_staked <= 0:
            raise InvalidArgumentError("No staked amount")

        interest = self.staking_interest(account, now)
        total_amount = account.total_staked + interest

        new_state = account.model_copy(
            update={
                "balance": account.balance + total_amount,
                "total_staked": ZERO,
                "last_stake_time": max(account.last_stake_time, now),
            }
        )
        return self._result(OperationKind.UNSTAKE, total_amount, new_state)

    def compound(self, account: AccountState, now: int) -> OperationResult:
        """
        Add accrued interest to staked principal.

        Args:
            account: Stored account state
            now: Current time in epoch seconds

        Returns:
            OperationResult with the compounded interest

        Raises:
            InvalidArgumentError: If nothing is staked or no interest accrued
        """
        if account.total_staked <= 0:
            raise InvalidArgumentError("No staked amount")

        interest = self.staking_interest(account, now)
        if not self.settles(interest):
            raise InvalidArgumentError("No reward to compound")

        new_state = account.model_copy(
            update={
                "total_staked": account.total_staked + interest,
                "last_stake_time": max(account.last_stake_time, now),
            }
        )
        return self._result(OperationKind.COMPOUND, interest, new_state)

    def claim_staking_reward(
        self, account: AccountState, now: int
    ) -> OperationResult:
        """
        Harvest accrued interest into balance, leaving principal staked.

        Args:
            account: Stored account state
            now: Current time in epoch seconds

        Returns:
            OperationResult with the harvested interest

        Raises:
            InvalidArgumentError: If nothing is staked or no interest accrued
        """
        if account.total_staked <= 0:
            raise InvalidArgumentError("No staked amount")

        interest = self.staking_interest(account, now)
        if not self.settles(interest):
            raise InvalidArgumentError("No reward to claim")

        new_state = account.model_copy(
            update={
                "balance": account.balance + interest,
                "total_claimed": account.total_claimed + interest,
                "last_stake_time": max(account.last_stake_time, now),
            }
        )
        return self._result(OperationKind.CLAIM_REWARD, interest, new_state)
