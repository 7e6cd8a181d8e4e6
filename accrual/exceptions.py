"""
Accrual error taxonomy.

Every failure carries a stable kind so the boundary layer can pick
a status code without re-deriving semantics.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Stable error kinds."""

    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


class AccrualError(Exception):
    """Base class for all accrual and account errors."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT
    retryable: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AccountNotFoundError(AccrualError):
    """Raised when no account exists for a key."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class InvalidArgumentError(AccrualError):
    """Raised for bad amounts and for operations with nothing to act on."""

    kind = ErrorKind.INVALID_ARGUMENT


class ConflictError(AccrualError):
    """Raised when storage detects a concurrent modification."""

    kind = ErrorKind.CONFLICT
    retryable = True


class UnavailableError(AccrualError):
    """Raised when storage or an external collaborator is unreachable."""

    kind = ErrorKind.UNAVAILABLE
    retryable = True
