"""
Numerical Safeguards — Finiteness Primitives

Module provides the single validation seam for every finite-float value:
- Finiteness check and classification of non-finite values (NaN, +Inf, -Inf)
- NotFiniteError, the only error kind of the package
- Zero canonicalization shared by equality, ordering and hashing
- Rounding to IEEE-754 binary32
- Tolerance constants and tolerance comparison

CRITICAL INVARIANTS:
1. ensure_finite never returns NaN/Inf (raises NotFiniteError instead)
2. A non-finite value is never replaced by a fallback
3. canonical_key is the only place where -0.0 is folded into +0.0
4. All operations are deterministic and side-effect free (apart from logging)
"""

import logging
import math
import struct
import sys
from typing import Final

logger = logging.getLogger(__name__)

# =============================================================================
# TOLERANCE PARAMETERS
# =============================================================================

# Relative tolerance for is_close
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Absolute tolerance for is_close
EPS_FLOAT_COMPARE_ABS: Final[float] = 0.0


# =============================================================================
# BINARY64 / BINARY32 LIMITS
# =============================================================================

F64_MANTISSA_DIGITS: Final[int] = sys.float_info.mant_dig
F64_EPSILON: Final[float] = sys.float_info.epsilon
F64_MAX: Final[float] = sys.float_info.max
F64_MIN_POSITIVE: Final[float] = sys.float_info.min

F32_MANTISSA_DIGITS: Final[int] = 24
F32_EPSILON: Final[float] = 2.0**-23
F32_MAX: Final[float] = (2.0 - 2.0**-23) * 2.0**127
F32_MIN_POSITIVE: Final[float] = 2.0**-126


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NotFiniteError(ArithmeticError, ValueError):
    """
    A candidate value or a computed result is NaN or ±Infinity.

    Raised at construction and after every arithmetic operation. Carries no
    partial result: only the name of the operation and the kind of the
    non-finite value.

    Attributes:
        operation: Operation that produced the value ("construct", "add", ...)
        kind: "nan", "+inf" or "-inf"
    """

    def __init__(self, operation: str, kind: str) -> None:
        self.operation = operation
        self.kind = kind
        super().__init__(f"non-finite result of {operation}: {kind}")

    def __reduce__(self):
        return (type(self), (self.operation, self.kind))


# =============================================================================
# FINITENESS CHECKS
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True if value is finite (not NaN, not ±Inf)."""
    return math.isfinite(value)


def classify_non_finite(value: float) -> str:
    """
    Name the kind of a non-finite value.

    Args:
        value: NaN or ±Inf

    Returns:
        "nan", "+inf" or "-inf"

    Raises:
        ValueError: If value is finite
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "+inf" if value > 0 else "-inf"
    raise ValueError(f"value is finite: {value!r}")


def ensure_finite(value: float, operation: str) -> float:
    """
    Validate that a float is finite.

    Args:
        value: Candidate value or computed result
        operation: Name of the producing operation (used in the error)

    Returns:
        value, unchanged (bit pattern and sign of zero preserved)

    Raises:
        NotFiniteError: If value is NaN or ±Inf

    Examples:
        >>> ensure_finite(-0.0, "construct")
        -0.0
        >>> ensure_finite(float("inf"), "add")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        NotFiniteError: non-finite result of add: +inf
    """
    if math.isfinite(value):
        return value

    kind = classify_non_finite(value)
    logger.debug("Rejected non-finite value: operation=%s kind=%s", operation, kind)
    raise NotFiniteError(operation, kind)


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    IEEE-754 division of two finite floats.

    Python raises ZeroDivisionError for x / 0.0; this returns the value the
    standard defines instead: ±Inf for a non-zero numerator (sign is the XOR
    of both signs, including the sign of a zero denominator), NaN for 0 / 0.
    """
    if denominator != 0.0:
        return numerator / denominator

    if numerator == 0.0:
        return math.nan

    negative = math.copysign(1.0, numerator) != math.copysign(1.0, denominator)
    return -math.inf if negative else math.inf


def _is_odd_integer(value: float) -> bool:
    return value.is_integer() and math.fmod(value, 2.0) != 0.0


def ieee_pow(base: float, exponent: float) -> float:
    """
    IEEE-754 pow of two finite floats.

    math.pow raises OverflowError on overflow and ValueError on a domain
    error; this returns ±Inf or NaN instead, following C99 Annex F:
        pow(±0, y<0)            → ±Inf for odd integer y, +Inf otherwise
        pow(x<0, non-integer y) → NaN
        overflow                → -Inf for x<0 and odd integer y, +Inf otherwise
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        negative = base < 0 and _is_odd_integer(exponent)
        return -math.inf if negative else math.inf
    except ValueError:
        if base == 0.0:
            negative = math.copysign(1.0, base) < 0 and _is_odd_integer(exponent)
            return -math.inf if negative else math.inf
        return math.nan


def exact_sum(values: list[float]) -> float:
    """
    Correctly rounded sum of finite floats (math.fsum).

    fsum raises OverflowError when a partial sum overflows even if the total
    is representable. The sum is then recomputed on halved values, which
    cannot overflow, and doubled: the result is ±Inf only if the total itself
    overflows. Halving is exact for all but subnormal summands.
    """
    try:
        return math.fsum(values)
    except OverflowError:
        halved = math.fsum(v * 0.5 for v in values)
        return halved * 2.0


# =============================================================================
# CANONICAL REPRESENTATION
# =============================================================================


def canonical_key(value: float) -> float:
    """
    Canonical representative used for equality, ordering and hashing.

    The only normalization is -0.0 → +0.0, so both zeros compare equal,
    order as equal and hash identically. Every other value is returned as is.
    """
    return value + 0.0


def round_to_binary32(value: float, operation: str) -> float:
    """
    Round a finite or non-finite float to the nearest IEEE-754 binary32.

    Args:
        value: Value in binary64
        operation: Name of the producing operation (used in the error)

    Returns:
        Nearest binary32 value, widened back to a Python float

    Raises:
        NotFiniteError: If value is non-finite or rounds to ±Inf in binary32
    """
    ensure_finite(value, operation)
    try:
        (rounded,) = struct.unpack("<f", struct.pack("<f", value))
    except OverflowError:
        kind = "+inf" if value > 0 else "-inf"
        logger.debug("Rejected binary32 overflow: operation=%s kind=%s", operation, kind)
        raise NotFiniteError(operation, kind) from None
    return rounded


# =============================================================================
# TOLERANCE COMPARISON
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Compare two floats within a tolerance.

    Algorithm (math.isclose):
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Args:
        a: First value
        b: Second value
        rel_tol: Relative tolerance (default: 1e-9)
        abs_tol: Absolute tolerance (default: 0.0)

    Returns:
        True if the values are within tolerance

    Raises:
        ValueError: If a tolerance is negative

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    if rel_tol < 0 or abs_tol < 0:
        raise ValueError(f"tolerances must be non-negative, got rel_tol={rel_tol}, abs_tol={abs_tol}")
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
