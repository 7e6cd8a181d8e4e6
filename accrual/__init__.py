"""
World Reward Coin accrual engine.

Standalone package for claim reward and staking interest accrual.

Example:
    >>> from decimal import Decimal
    >>> from accrual import AccrualEngine, AccountState
    >>>
    >>> engine = AccrualEngine()
    >>> state = AccountState(
    ...     nullifier_hash="0xabc",
    ...     total_staked=Decimal("1000"),
    ...     last_stake_time=0,
    ... )
    >>> engine.unstake(state, 31536000).amount
    Decimal('1700.00')
"""

from accrual.constants import (
    RATE_UNVERIFIED,
    RATE_VERIFIED,
    SECONDS_PER_YEAR,
    STAKING_APY,
    get_reward_rate,
)
from accrual.core.engine import AccrualEngine
from accrual.core.models import (
    AccountState,
    OperationKind,
    OperationResult,
    VerificationLevel,
)
from accrual.exceptions import (
    AccountNotFoundError,
    AccrualError,
    ConflictError,
    ErrorKind,
    InvalidArgumentError,
    UnavailableError,
)
from accrual.utils import (
    format_amount,
    quantize_amount,
    to_token_units,
)


__version__ = "1.0.0"
__all__ = [
    # Core
    "AccrualEngine",
    # Models
    "AccountState",
    "OperationKind",
    "OperationResult",
    "VerificationLevel",
    # Constants
    "RATE_VERIFIED",
    "RATE_UNVERIFIED",
    "STAKING_APY",
    "SECONDS_PER_YEAR",
    "get_reward_rate",
    # Errors
    "ErrorKind",
    "AccrualError",
    "AccountNotFoundError",
    "InvalidArgumentError",
    "ConflictError",
    "UnavailableError",
    # Formatters
    "format_amount",
    "quantize_amount",
    "to_token_units",
]
