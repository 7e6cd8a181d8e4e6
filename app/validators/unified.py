"""Unified validators for request input."""
import re
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any

from accrual.constants import AMOUNT_QUANTUM, MAX_AMOUNT
from accrual.core.models import VerificationLevel
from accrual.exceptions import InvalidArgumentError

NULLIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_.:-]{1,255}$")


def validate_nullifier_hash(nullifier_hash: Any) -> tuple[bool, str | None]:
    """
    Validate pseudonymous account key.

    Args:
        nullifier_hash: Key from the identity proof

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_nullifier_hash("0x2bf8406809dcefb1a7d5")
        (True, None)
        >>> validate_nullifier_hash("")
        (False, 'nullifier_hash is required')
    """
    if not nullifier_hash or not isinstance(nullifier_hash, str):
        return False, "nullifier_hash is required"

    if not NULLIFIER_PATTERN.match(nullifier_hash.strip()):
        return False, "nullifier_hash has invalid format"

    return True, None


def validate_verification_level(level: Any) -> tuple[bool, VerificationLevel | None, str | None]:
    """
    Validate verification tier.

    Returns:
        Tuple of (is_valid, parsed_level, error_message)

    Examples:
        >>> validate_verification_level("orb")
        (True, <VerificationLevel.ORB: 'orb'>, None)
    """
    if not level or not isinstance(level, str):
        return False, None, "verification_level is required"

    try:
        return True, VerificationLevel(level.strip().lower()), None
    except ValueError:
        return False, None, f"verification_level must be one of: {', '.join(VerificationLevel)}"


def validate_amount(
    amount: Any,
    min_val: Decimal | None = None,
    max_val: Decimal | None = None,
) -> tuple[bool, Decimal | None, str | None]:
    """
    Validate and parse an amount from JSON or a query string.

    Accepts numbers and numeric strings. Values with more than 8
    fractional digits are truncated to 8.

    Args:
        amount: Raw amount (int, float, str or Decimal)
        min_val: Minimum allowed value (optional)
        max_val: Maximum allowed value (optional)

    Returns:
        Tuple of (is_valid, parsed_value, error_message)

    Examples:
        >>> validate_amount("100.50")
        (True, Decimal('100.50000000'), None)
        >>> validate_amount("abc")
        (False, None, 'Invalid amount format')
    """
    if amount is None or isinstance(amount, bool):
        return False, None, "Amount is required"

    if isinstance(amount, str):
        amount = amount.strip().replace(",", ".")
        if not amount:
            return False, None, "Amount is required"
    elif not isinstance(amount, (int, float, Decimal)):
        return False, None, "Invalid amount format"

    try:
        # str() keeps the shortest repr of floats (0.0024, not 0.00239999...)
        value = Decimal(str(amount))
    except InvalidOperation:
        return False, None, "Invalid amount format"

    if not value.is_finite():
        return False, None, "Amount must be a finite number"

    try:
        value = value.quantize(AMOUNT_QUANTUM, rounding=ROUND_DOWN)
    except InvalidOperation:
        return False, None, "Amount is out of range"

    if min_val is not None and value < min_val:
        return False, None, f"Amount must be >= {min_val}"

    if max_val is not None and value > max_val:
        return False, None, f"Amount must be <= {max_val}"

    return True, value, None


def parse_amount(amount: Any) -> Decimal:
    """
    Parse amount or raise.

    Range checks are left to the accrual engine.

    Raises:
        InvalidArgumentError: If amount is missing or malformed
    """
    is_valid, value, error = validate_amount(amount, max_val=MAX_AMOUNT)
    if not is_valid:
        raise InvalidArgumentError(error or "Invalid amount")
    return value


def parse_nullifier_hash(nullifier_hash: Any) -> str:
    """
    Validate account key or raise.

    Raises:
        InvalidArgumentError: If key is missing or malformed
    """
    is_valid, error = validate_nullifier_hash(nullifier_hash)
    if not is_valid:
        raise InvalidArgumentError(error or "Invalid nullifier_hash")
    return nullifier_hash.strip()
