"""
finite-float: floating-point values that are never NaN and never ±Infinity.

    >>> from finite_float import FiniteFloat, NotFiniteError
    >>> FiniteFloat(2.0) + FiniteFloat(3.0)
    FiniteFloat(5.0)
"""

from finite_float.core.contracts import (
    dump_finite_json,
    load_finite_json,
    validate_finite_document,
    validate_finite_float_series,
)
from finite_float.core.domain import FiniteFloat, FiniteFloat32
from finite_float.core.math import NotFiniteError

__version__ = "0.1.0"

__all__ = [
    # Value types
    "FiniteFloat",
    "FiniteFloat32",
    # Exceptions
    "NotFiniteError",
    # JSON interop
    "dump_finite_json",
    "load_finite_json",
    "validate_finite_document",
    "validate_finite_float_series",
]
