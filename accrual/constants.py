"""
Accrual constants.

Fixed rates for the time-based claim stream and the staking stream.
"""

from decimal import Decimal

# Claim stream, tokens per second
RATE_VERIFIED = Decimal("0.000024")
RATE_UNVERIFIED = Decimal("0.000012")

# Staking stream, nominal annual yield (70%)
STAKING_APY = Decimal("0.70")
SECONDS_PER_YEAR = 365 * 24 * 60 * 60  # 31_536_000

# Settlement precision, matches DECIMAL(18, 8) storage columns
AMOUNT_DECIMALS = 8
AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_DECIMALS)
# Largest value a DECIMAL(18, 8) column holds
MAX_AMOUNT = Decimal("9999999999.99999999")

TOKEN_DECIMALS = 18


def get_reward_rate(is_verified: bool) -> Decimal:
    """
    Get claim reward rate for verification status.

    Args:
        is_verified: True for orb-verified accounts

    Returns:
        Tokens accrued per second

    Example:
        >>> get_reward_rate(True)
        Decimal('0.000024')
    """
    return RATE_VERIFIED if is_verified else RATE_UNVERIFIED
