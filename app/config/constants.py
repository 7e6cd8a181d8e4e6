"""
Application constants.

Centralized constants for the application.
"""

# ========================================================================
# HTTP API
# ========================================================================

DEFAULT_API_PORT = 3001
API_PREFIX = "/api"
DEFAULT_TRANSACTIONS_LIMIT = 50
MAX_TRANSACTIONS_LIMIT = 500

# ========================================================================
# WORLD ID
# ========================================================================

WORLD_ID_VERIFY_URL = "https://developer.worldcoin.org/api/v1/verify"
WORLD_ID_TIMEOUT = 15.0  # seconds

# ========================================================================
# BLOCKCHAIN CONSTANTS
# ========================================================================

DEFAULT_CHAIN_ID = 10  # Optimism
BLOCKCHAIN_TIMEOUT = 30.0  # Standard blockchain operations
DEFAULT_GAS_LIMIT = 300_000
GAS_ESTIMATE_BUFFER = 1.2  # +20% over estimate

# ========================================================================
# DATABASE
# ========================================================================

# Per-key lock wait before an operation is reported as a conflict
ACCOUNT_LOCK_TIMEOUT = 10.0  # seconds
