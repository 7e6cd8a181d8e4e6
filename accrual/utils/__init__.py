"""
Utility functions for accrual.

Formatting and unit conversion helpers.
"""

from accrual.utils.formatters import (
    format_amount,
    quantize_amount,
    to_token_units,
)

__all__ = [
    "format_amount",
    "quantize_amount",
    "to_token_units",
]
