"""
Core math modules

Денежные примитивы на Decimal с гарантией точности.
"""

from src.core.math.money import (
    MAX_MONEY,
    MONEY_QUANTUM,
    ZERO,
    format_money,
    quantize_money,
    to_decimal,
    validate_money_amount,
)

__all__ = [
    # Constants
    "ZERO",
    "MONEY_QUANTUM",
    "MAX_MONEY",
    # Conversion
    "to_decimal",
    "quantize_money",
    "format_money",
    # Validation
    "validate_money_amount",
]
