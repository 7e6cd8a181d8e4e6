"""
Exception handling utilities.

Defines categorized exception types for proper error handling, and
translation of storage errors into accrual error kinds.
"""

from aiohttp import ClientError
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.orm.exc import StaleDataError
from web3.exceptions import Web3Exception

from accrual.exceptions import AccrualError, ConflictError, UnavailableError


# Exception categories based on handling strategy

# Safe to ignore - best-effort side effects (on-chain mirror)
SAFE_TO_IGNORE = (
    Web3Exception,     # Contract reverts, RPC errors
    ClientError,       # RPC transport errors
    TimeoutError,
)


def is_safe_to_ignore(exc: Exception) -> bool:
    """
    Check if exception can be safely ignored.

    Args:
        exc: Exception to check

    Returns:
        True if exception is safe to ignore
    """
    return isinstance(exc, SAFE_TO_IGNORE)


def translate_storage_error(exc: Exception) -> AccrualError | None:
    """
    Map a SQLAlchemy error to a retryable accrual error.

    Args:
        exc: Exception raised by the session

    Returns:
        ConflictError, UnavailableError, or None if not a storage error
    """
    if isinstance(exc, StaleDataError):
        return ConflictError("Account was modified concurrently, retry the request")
    if isinstance(exc, (OperationalError, InterfaceError)):
        return UnavailableError("Database unavailable")
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return UnavailableError("Database connection lost")
    return None
