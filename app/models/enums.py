"""
Model enums.

Verification level is shared with the accrual engine.
"""

from enum import StrEnum

from accrual.core.models import VerificationLevel


class TransactionType(StrEnum):
    """Transaction log entry type."""

    CLAIM = "claim"
    STAKE = "stake"
    UNSTAKE = "unstake"
    CLAIM_REWARD = "claim_reward"


class TransactionStatus(StrEnum):
    """Transaction log entry status."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


__all__ = ["TransactionStatus", "TransactionType", "VerificationLevel"]
