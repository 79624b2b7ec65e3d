"""
Domain value objects.

Contains the finite floating-point value types.
"""

from finite_float.core.domain.finite import FiniteFloat, FiniteFloat32

__all__ = [
    "FiniteFloat",
    "FiniteFloat32",
]
