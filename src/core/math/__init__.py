"""
Core math modules для netting

Численные примитивы с гарантией стабильности.
"""

from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_AMOUNT,
    EPS_FLOAT_COMPARE_REL,
    # NaN/Inf
    is_valid_float,
    # Epsilon comparisons
    vectors_close,
    # Summation
    stable_sum,
    # Validation
    validate_positive,
)

__all__ = [
    "EPS_AMOUNT",
    "EPS_FLOAT_COMPARE_REL",
    "is_valid_float",
    "vectors_close",
    "stable_sum",
    "validate_positive",
]
