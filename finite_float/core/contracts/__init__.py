"""
Contract Validation Module

JSON Schema validation and strict JSON load/dump for finite floats.
"""

from .validators import (
    ContractValidator,
    FiniteFloatSeriesValidator,
    FiniteFloatValidator,
    FiniteNumberValidator,
    SchemaLoader,
    ValidationError,
    dump_finite_json,
    load_finite_json,
    to_plain,
    validate_finite_document,
    validate_finite_float_series,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FiniteNumberValidator",
    "FiniteFloatValidator",
    "FiniteFloatSeriesValidator",
    "ValidationError",
    # Functions
    "to_plain",
    "validate_finite_document",
    "validate_finite_float_series",
    "load_finite_json",
    "dump_finite_json",
]
