"""Pydantic models for accrual engine."""

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VerificationLevel(StrEnum):
    """Identity proof tier."""

    DEVICE = "device"
    ORB = "orb"


class OperationKind(StrEnum):
    """Accrual operations that move value."""

    CLAIM = "claim"
    STAKE = "stake"
    UNSTAKE = "unstake"
    COMPOUND = "compound"
    CLAIM_REWARD = "claim_reward"


class AccountState(BaseModel):
    """Snapshot of one account as seen by the accrual engine.

    Immutable: operations return a new state instead of mutating this one.
    """

    model_config = ConfigDict(frozen=True)

    nullifier_hash: str = Field(..., min_length=1, description="Pseudonymous account key")
    verification_level: VerificationLevel = Field(
        default=VerificationLevel.DEVICE, description="Identity proof tier"
    )
    balance: Decimal = Field(default=Decimal("0"), ge=0, description="Spendable balance")
    total_staked: Decimal = Field(
        default=Decimal("0"), ge=0, description="Principal earning staking interest"
    )
    total_claimed: Decimal = Field(
        default=Decimal("0"), ge=0, description="Cumulative rewards paid to balance"
    )
    last_claim_time: int = Field(default=0, ge=0, description="Claim stream clock")
    last_stake_time: int = Field(default=0, ge=0, description="Staking stream clock")

    @property
    def is_verified(self) -> bool:
        """Orb-level proof earns the higher claim rate."""
        return self.verification_level == VerificationLevel.ORB

    @model_validator(mode="before")
    @classmethod
    def coerce_missing_amounts(cls, data):
        """Treat NULL amounts from storage as zero."""
        if isinstance(data, dict):
            data = dict(data)
            for key in ("balance", "total_staked", "total_claimed"):
                if key in data and data[key] is None:
                    data[key] = Decimal("0")
        return data


class OperationResult(BaseModel):
    """Outcome of one accrual operation."""

    model_config = ConfigDict(frozen=True)

    kind: OperationKind = Field(..., description="Operation performed")
    amount: Decimal = Field(..., ge=0, description="Amount moved by the operation")
    account: AccountState = Field(..., description="Account state after the operation")
