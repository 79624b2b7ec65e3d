"""
FiniteFloat — Finite Floating-Point Value Object

Immutable value type wrapping a Python float that is guaranteed finite:
never NaN, never ±Infinity.

CRITICAL INVARIANTS:
1. Every instance holds a finite value, from construction to garbage collection
2. Every entry point validates (constructor, try_from, from_str, pickle,
   pydantic); there is no unchecked constructor
3. Every arithmetic result is validated; a non-finite result raises
   NotFiniteError and no instance is produced
4. Equality, ordering and hashing share one canonical key: -0.0 and +0.0
   are equal, order as equal and hash identically
5. value returns the wrapped float bit-exactly (sign of zero preserved)

FiniteFloat32 applies the same contract to IEEE-754 binary32: values are
rounded to the nearest binary32 and rejected if that rounding overflows.
"""

import math
import numbers
from typing import Any, ClassVar, Iterable

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from finite_float.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    F32_EPSILON,
    F32_MANTISSA_DIGITS,
    F32_MAX,
    F32_MIN_POSITIVE,
    F64_EPSILON,
    F64_MANTISSA_DIGITS,
    F64_MAX,
    F64_MIN_POSITIVE,
    canonical_key,
    ensure_finite,
    exact_sum,
    ieee_divide,
    ieee_pow,
    is_close,
    round_to_binary32,
)


# =============================================================================
# FINITE FLOAT (BINARY64)
# =============================================================================


class FiniteFloat:
    """
    Finite IEEE-754 binary64 value.

    Construction:
        FiniteFloat(x), FiniteFloat.try_from(x) and FiniteFloat.from_str(s)
        all validate. FiniteFloat() is ZERO.

    Comparison:
        Only against the same type. `FiniteFloat(1.0) == 1.0` is False and
        `FiniteFloat(1.0) < 1.0` raises TypeError; convert explicitly.
        -0.0 and +0.0 are equal and order as equal.

    Arithmetic:
        Unary -x, +x, abs(x); binary +, -, *, /, **; the named methods neg,
        pos, abs, add, sub, mul, div, pow, min, max, clamp. Results are validated;
        non-finite results (overflow, division by zero, inf - inf) raise
        NotFiniteError.

    Examples:
        >>> FiniteFloat(2.0) + FiniteFloat(3.0)
        FiniteFloat(5.0)
        >>> FiniteFloat(1.0) / FiniteFloat(0.0)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        NotFiniteError: non-finite result of div: +inf
    """

    __slots__ = ("_value",)

    _value: float

    MANTISSA_DIGITS: ClassVar[int] = F64_MANTISSA_DIGITS
    ZERO: ClassVar["FiniteFloat"]
    EPSILON: ClassVar["FiniteFloat"]
    MIN: ClassVar["FiniteFloat"]
    MAX: ClassVar["FiniteFloat"]
    MIN_POSITIVE: ClassVar["FiniteFloat"]
    MAX_NEGATIVE: ClassVar["FiniteFloat"]

    _validate = staticmethod(ensure_finite)

    def __init__(self, value: float = 0.0) -> None:
        object.__setattr__(self, "_value", self._coerce(value, "construct"))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def try_from(cls, value: float) -> "FiniteFloat":
        """
        Validating conversion from a real number.

        Args:
            value: float, int or any numbers.Real (bool is rejected);
                   a FiniteFloat of another width is converted

        Returns:
            New instance wrapping exactly float(value)

        Raises:
            NotFiniteError: If value is NaN/±Inf or does not fit in the type
            TypeError: If value is not a real number
        """
        return cls(value)

    @classmethod
    def from_str(cls, text: str) -> "FiniteFloat":
        """
        Parse text with Python float syntax.

        Raises:
            ValueError: If text is not a float literal
            NotFiniteError: If text denotes NaN/±Inf or overflows ("1e999")
        """
        if not isinstance(text, str):
            raise TypeError(f"{cls.__name__}.from_str requires str, got {type(text).__name__}")
        return cls._wrap(float(text), "parse")

    @classmethod
    def _coerce(cls, value: Any, operation: str) -> float:
        if isinstance(value, FiniteFloat):
            return cls._validate(value._value, operation)

        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(f"{cls.__name__} requires a real number, got {type(value).__name__}")

        try:
            raw = float(value)
        except OverflowError:
            # int (or Fraction) beyond the float range
            raw = math.inf if value > 0 else -math.inf

        return cls._validate(raw, operation)

    @classmethod
    def _convert(cls, value: "FiniteFloat") -> "FiniteFloat":
        return value if type(value) is cls else cls(value)

    @classmethod
    def _wrap(cls, raw: float, operation: str) -> "FiniteFloat":
        """Validate raw and build an instance without re-running _coerce."""
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_value", cls._validate(raw, operation))
        return instance

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def value(self) -> float:
        """Wrapped float, bit-exact."""
        return self._value

    @property
    def _key(self) -> float:
        return canonical_key(self._value)

    def __float__(self) -> float:
        return self._value

    def __int__(self) -> int:
        return int(self._value)

    def __trunc__(self) -> int:
        return math.trunc(self._value)

    def __floor__(self) -> int:
        return math.floor(self._value)

    def __ceil__(self) -> int:
        return math.ceil(self._value)

    def __round__(self, ndigits: int | None = None):
        if ndigits is None:
            return round(self._value)
        try:
            raw = round(self._value, ndigits)
        except OverflowError:
            raw = math.copysign(math.inf, self._value)
        return self._wrap(raw, "round")

    def __bool__(self) -> bool:
        return self._value != 0.0

    def is_zero(self) -> bool:
        return self._value == 0.0

    def is_sign_negative(self) -> bool:
        """True for negative values and -0.0."""
        return math.copysign(1.0, self._value) < 0

    def is_sign_positive(self) -> bool:
        """True for positive values and +0.0."""
        return not self.is_sign_negative()

    def is_subnormal(self) -> bool:
        return 0.0 < abs(self._value) < self.MIN_POSITIVE._value

    # -------------------------------------------------------------------------
    # Immutability
    # -------------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value,))

    def __copy__(self) -> "FiniteFloat":
        return self

    def __deepcopy__(self, memo: dict) -> "FiniteFloat":
        return self

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, format_spec: str) -> str:
        return format(self._value, format_spec)

    # -------------------------------------------------------------------------
    # Equality, ordering, hashing
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key == other._key

    def __ne__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key != other._key

    def __lt__(self, other: "FiniteFloat") -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key < other._key

    def __le__(self, other: "FiniteFloat") -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key <= other._key

    def __gt__(self, other: "FiniteFloat") -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key > other._key

    def __ge__(self, other: "FiniteFloat") -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key >= other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def cmp(self, other: "FiniteFloat") -> int:
        """
        Three-way comparison.

        Returns:
            -1 if self < other, 0 if self == other, +1 if self > other

        Raises:
            TypeError: If other is not the same type
        """
        self._require_same_type(other, "cmp")
        a, b = self._key, other._key
        return (a > b) - (a < b)

    def is_close(
        self,
        other: "FiniteFloat",
        rel_tol: float = EPS_FLOAT_COMPARE_REL,
        abs_tol: float = EPS_FLOAT_COMPARE_ABS,
    ) -> bool:
        """Tolerance comparison (math.isclose semantics)."""
        self._require_same_type(other, "is_close")
        return is_close(self._value, other._value, rel_tol=rel_tol, abs_tol=abs_tol)

    def _require_same_type(self, other: object, operation: str) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"{operation} requires {type(self).__name__}, got {type(other).__name__}"
            )

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __neg__(self) -> "FiniteFloat":
        return self._wrap(-self._value, "neg")

    def __pos__(self) -> "FiniteFloat":
        return self

    def __abs__(self) -> "FiniteFloat":
        return self._wrap(abs(self._value), "abs")

    def __add__(self, other: "FiniteFloat") -> "FiniteFloat":
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(self._value + other._value, "add")

    def __sub__(self, other: "FiniteFloat") -> "FiniteFloat":
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(self._value - other._value, "sub")

    def __mul__(self, other: "FiniteFloat") -> "FiniteFloat":
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(self._value * other._value, "mul")

    def __truediv__(self, other: "FiniteFloat") -> "FiniteFloat":
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(ieee_divide(self._value, other._value), "div")

    def __pow__(self, other: "FiniteFloat") -> "FiniteFloat":
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(ieee_pow(self._value, other._value), "pow")

    def neg(self) -> "FiniteFloat":
        return -self

    def pos(self) -> "FiniteFloat":
        return +self

    def abs(self) -> "FiniteFloat":
        return abs(self)

    def add(self, other: "FiniteFloat") -> "FiniteFloat":
        self._require_same_type(other, "add")
        return self + other

    def sub(self, other: "FiniteFloat") -> "FiniteFloat":
        self._require_same_type(other, "sub")
        return self - other

    def mul(self, other: "FiniteFloat") -> "FiniteFloat":
        self._require_same_type(other, "mul")
        return self * other

    def div(self, other: "FiniteFloat") -> "FiniteFloat":
        self._require_same_type(other, "div")
        return self / other

    def pow(self, other: "FiniteFloat") -> "FiniteFloat":
        self._require_same_type(other, "pow")
        return self**other

    def min(self, other: "FiniteFloat") -> "FiniteFloat":
        """Smaller of the two; self when equal."""
        self._require_same_type(other, "min")
        return other if other < self else self

    def max(self, other: "FiniteFloat") -> "FiniteFloat":
        """Larger of the two; self when equal."""
        self._require_same_type(other, "max")
        return other if other > self else self

    def clamp(self, lower: "FiniteFloat", upper: "FiniteFloat") -> "FiniteFloat":
        """
        Restrict self to [lower, upper].

        Raises:
            ValueError: If lower > upper
        """
        self._require_same_type(lower, "clamp")
        self._require_same_type(upper, "clamp")
        if lower > upper:
            raise ValueError(f"clamp bounds out of order: lower={lower} > upper={upper}")
        return self.max(lower).min(upper)

    @classmethod
    def fsum(cls, values: Iterable["FiniteFloat"]) -> "FiniteFloat":
        """
        Correctly rounded sum (math.fsum) of instances of this type.

        An empty iterable sums to ZERO.

        Raises:
            NotFiniteError: If the sum overflows
            TypeError: If an item is not an instance of this type
        """
        raw = []
        for item in values:
            if type(item) is not cls:
                raise TypeError(f"fsum requires {cls.__name__}, got {type(item).__name__}")
            raw.append(item._value)
        return cls._wrap(exact_sum(raw), "sum")

    # -------------------------------------------------------------------------
    # Pydantic integration
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Field support for pydantic v2 models.

        Numbers (and, in lax mode, numeric strings) are validated through the
        constructor; NotFiniteError surfaces as a pydantic ValidationError.
        Instances serialize to plain floats.
        """
        from_number = core_schema.no_info_after_validator_function(
            cls, core_schema.float_schema()
        )
        from_instance = core_schema.no_info_after_validator_function(
            cls._convert, core_schema.is_instance_schema(FiniteFloat)
        )
        return core_schema.json_or_python_schema(
            json_schema=from_number,
            python_schema=core_schema.union_schema([from_instance, from_number]),
            serialization=core_schema.plain_serializer_function_ser_schema(
                float, return_schema=core_schema.float_schema()
            ),
        )


FiniteFloat.ZERO = FiniteFloat(0.0)
FiniteFloat.EPSILON = FiniteFloat(F64_EPSILON)
FiniteFloat.MIN = FiniteFloat(-F64_MAX)
FiniteFloat.MAX = FiniteFloat(F64_MAX)
FiniteFloat.MIN_POSITIVE = FiniteFloat(F64_MIN_POSITIVE)
FiniteFloat.MAX_NEGATIVE = FiniteFloat(-F64_MIN_POSITIVE)


# =============================================================================
# FINITE FLOAT (BINARY32)
# =============================================================================


class FiniteFloat32(FiniteFloat):
    """
    Finite IEEE-754 binary32 value.

    Same contract as FiniteFloat. Inputs and arithmetic results are rounded
    to the nearest binary32; a rounding that overflows raises NotFiniteError.
    FiniteFloat32 and FiniteFloat do not compare or combine with each other
    without explicit conversion (FiniteFloat(x32) is exact).
    """

    __slots__ = ()

    MANTISSA_DIGITS: ClassVar[int] = F32_MANTISSA_DIGITS

    _validate = staticmethod(round_to_binary32)


FiniteFloat32.ZERO = FiniteFloat32(0.0)
FiniteFloat32.EPSILON = FiniteFloat32(F32_EPSILON)
FiniteFloat32.MIN = FiniteFloat32(-F32_MAX)
FiniteFloat32.MAX = FiniteFloat32(F32_MAX)
FiniteFloat32.MIN_POSITIVE = FiniteFloat32(F32_MIN_POSITIVE)
FiniteFloat32.MAX_NEGATIVE = FiniteFloat32(-F32_MIN_POSITIVE)
