"""
Security utilities for masking sensitive data in logs.

Provides functions to safely mask sensitive information like:
- Nullifier hashes (pseudonymous account keys)
- Wallet and contract addresses
- Transaction hashes
"""


def mask_nullifier(nullifier_hash: str | None) -> str:
    """
    Mask nullifier hash for logging: 0x1234...5678

    Args:
        nullifier_hash: Account key to mask

    Returns:
        Masked key showing first 6 and last 4 characters

    Examples:
        >>> mask_nullifier("0x2bf8406809dcefb1a7d5f1d4c0f9e2b3a1c7d8e9f0a1b2c3d4e5f60718293a4b")
        '0x2bf8...3a4b'
        >>> mask_nullifier(None)
        '***'
    """
    if not nullifier_hash or len(nullifier_hash) < 10:
        return "***"
    return f"{nullifier_hash[:6]}...{nullifier_hash[-4:]}"


def mask_address(address: str | None) -> str:
    """
    Mask wallet or contract address for logging: 0x1234...5678

    Examples:
        >>> mask_address("0x1234567890abcdef1234567890abcdef12345678")
        '0x1234...5678'
    """
    return mask_nullifier(address)


def mask_tx_hash(tx_hash: str | None) -> str:
    """
    Mask transaction hash for logging.

    Args:
        tx_hash: Transaction hash to mask

    Returns:
        Masked hash showing first 10 and last 6 characters

    Examples:
        >>> mask_tx_hash("0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef")
        '0x12345678...abcdef'
    """
    if not tx_hash or len(tx_hash) < 16:
        return "***"
    return f"{tx_hash[:10]}...{tx_hash[-6:]}"
