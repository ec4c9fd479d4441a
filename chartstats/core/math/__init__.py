"""
Core math modules для chartstats

Математические примитивы с гарантией численной стабильности.
"""

from chartstats.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # NaN/Inf checks
    all_finite,
    is_valid_float,
    sanitize_float,
    # Safe division
    safe_divide,
    # Epsilon comparisons
    is_close,
    is_zero,
    # Utilities
    clamp,
    lerp,
    # Validation
    validate_finite,
    validate_non_negative,
)

__all__ = [
    "EPS_CALC",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "all_finite",
    "is_valid_float",
    "sanitize_float",
    "safe_divide",
    "is_close",
    "is_zero",
    "clamp",
    "lerp",
    "validate_finite",
    "validate_non_negative",
]
