"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def utc_timestamp() -> int:
    """
    Get current time as whole epoch seconds.

    Used as the ``now`` argument of every accrual operation.
    """
    return int(utc_now().timestamp())
