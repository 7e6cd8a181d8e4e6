"""
Core accrual functionality.

Contains the accrual engine and its data models.
"""

from accrual.core.engine import AccrualEngine
from accrual.core.models import (
    AccountState,
    OperationKind,
    OperationResult,
    VerificationLevel,
)

__all__ = [
    "AccrualEngine",
    "AccountState",
    "OperationKind",
    "OperationResult",
    "VerificationLevel",
]
