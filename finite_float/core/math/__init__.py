"""
Core math modules for finite-float

Finiteness validation and IEEE-754 helpers shared by the value types.
"""

from finite_float.core.math.numerical_safeguards import (
    # Tolerance constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # Binary64 / binary32 limits
    F32_EPSILON,
    F32_MANTISSA_DIGITS,
    F32_MAX,
    F32_MIN_POSITIVE,
    F64_EPSILON,
    F64_MANTISSA_DIGITS,
    F64_MAX,
    F64_MIN_POSITIVE,
    # Exceptions
    NotFiniteError,
    # Finiteness checks
    classify_non_finite,
    ensure_finite,
    exact_sum,
    ieee_divide,
    ieee_pow,
    is_valid_float,
    # Canonical representation
    canonical_key,
    round_to_binary32,
    # Tolerance comparison
    is_close,
)

__all__ = [
    # Tolerance constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Binary64 / binary32 limits
    "F32_EPSILON",
    "F32_MANTISSA_DIGITS",
    "F32_MAX",
    "F32_MIN_POSITIVE",
    "F64_EPSILON",
    "F64_MANTISSA_DIGITS",
    "F64_MAX",
    "F64_MIN_POSITIVE",
    # Exceptions
    "NotFiniteError",
    # Finiteness checks
    "classify_non_finite",
    "ensure_finite",
    "exact_sum",
    "ieee_divide",
    "ieee_pow",
    "is_valid_float",
    # Canonical representation
    "canonical_key",
    "round_to_binary32",
    # Tolerance comparison
    "is_close",
]
