"""
Validators package.

Provides validation functions for request input.
"""

from app.validators.unified import (
    parse_amount,
    parse_nullifier_hash,
    validate_amount,
    validate_nullifier_hash,
    validate_verification_level,
)


__all__ = [
    "parse_amount",
    "parse_nullifier_hash",
    "validate_amount",
    "validate_nullifier_hash",
    "validate_verification_level",
]
