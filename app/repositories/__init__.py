"""
Repositories package.

Data access layer over async SQLAlchemy sessions.
"""

from app.repositories.transaction_repository import TransactionRepository
from app.repositories.user_account_repository import UserAccountRepository


__all__ = ["TransactionRepository", "UserAccountRepository"]
