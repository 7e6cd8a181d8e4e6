"""
Formatting utilities for token amounts.

Rounding happens here and at storage, never inside the engine.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from accrual.constants import AMOUNT_QUANTUM, TOKEN_DECIMALS


def quantize_amount(amount: Decimal | int | str | None) -> Decimal:
    """
    Truncate amount to settlement precision (8 decimals).

    Args:
        amount: Amount to truncate; None is treated as zero

    Returns:
        Amount rounded down to 8 fractional digits

    Example:
        >>> quantize_amount(Decimal("0.123456789"))
        Decimal('0.12345678')
    """
    if amount is None:
        return Decimal("0").quantize(AMOUNT_QUANTUM)
    return Decimal(amount).quantize(AMOUNT_QUANTUM, rounding=ROUND_DOWN)


def format_amount(amount: Decimal | int | str | None) -> str:
    """
    Format amount as a fixed-point string for JSON responses.

    Example:
        >>> format_amount(Decimal("700"))
        '700.00000000'
    """
    return f"{quantize_amount(amount):f}"


def to_token_units(amount: Decimal, decimals: int = TOKEN_DECIMALS) -> int:
    """
    Convert token amount to integer on-chain units.

    Args:
        amount: Token amount
        decimals: Token decimals (18 for WRC)

    Returns:
        Integer units, rounded down

    Raises:
        ValueError: If amount is negative or not finite

    Example:
        >>> to_token_units(Decimal("1.5"))
        1500000000000000000
    """
    try:
        finite = amount.is_finite()
    except (AttributeError, InvalidOperation) as e:
        raise ValueError(f"Invalid token amount: {amount}") from e
    if not finite or amount < 0:
        raise ValueError(f"Invalid token amount: {amount}")
    return int((amount * (Decimal(10) ** decimals)).to_integral_value(rounding=ROUND_DOWN))
