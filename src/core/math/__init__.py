"""
Core math modules для token ledger

Checked unsigned arithmetic для token amounts.
"""

from src.core.math.safe_uint import (
    # Constants
    DEFAULT_DECIMALS,
    UINT256_MAX,
    # Errors
    AmountOverflowError,
    AmountUnderflow,
    InvalidAmount,
    # Validation
    is_valid_amount,
    validate_amount,
    # Checked arithmetic
    checked_add,
    checked_sub,
    # Units
    format_units,
)

__all__ = [
    "DEFAULT_DECIMALS",
    "UINT256_MAX",
    "AmountOverflowError",
    "AmountUnderflow",
    "InvalidAmount",
    "is_valid_amount",
    "validate_amount",
    "checked_add",
    "checked_sub",
    "format_units",
]
