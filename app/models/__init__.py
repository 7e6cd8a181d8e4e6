"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from app.models.base import Base
from app.models.enums import (
    TransactionStatus,
    TransactionType,
    VerificationLevel,
)
from app.models.transaction import TransactionRecord
from app.models.user_account import UserAccount


__all__ = [
    "Base",
    "UserAccount",
    "TransactionRecord",
    "TransactionStatus",
    "TransactionType",
    "VerificationLevel",
]
