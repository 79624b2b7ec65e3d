"""
Tests for FiniteFloat32

Covers:
1. Rounding to binary32 at construction and overflow rejection
2. Constants
3. Arithmetic rounded to binary32
4. Separation from FiniteFloat (no implicit mixing)
"""

import pickle
import struct

import pytest

from finite_float import FiniteFloat, FiniteFloat32, NotFiniteError


def f32(value: float) -> FiniteFloat32:
    return FiniteFloat32.try_from(value)


def _to_binary32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


class TestConstruction:
    """Rounding and rejection"""

    def test_exact_values_unchanged(self) -> None:
        assert f32(0.5).value == 0.5
        assert f32(-1024.0).value == -1024.0

    def test_rounds_to_nearest_binary32(self) -> None:
        assert f32(0.1).value == 0.10000000149011612
        assert f32(0.1) == f32(0.10000000149011612)

    def test_type(self) -> None:
        assert type(f32(1.0)) is FiniteFloat32

    def test_negative_zero_preserved(self) -> None:
        assert f32(-0.0).is_sign_negative()

    def test_underflow_to_zero(self) -> None:
        assert f32(1e-50).value == 0.0

    def test_smallest_subnormal(self) -> None:
        x = f32(1e-45)
        assert x.value == 2.0**-149
        assert x.is_subnormal()

    @pytest.mark.parametrize("value, kind", [(1e39, "+inf"), (-1e39, "-inf")])
    def test_overflow_rejected(self, value: float, kind: str) -> None:
        with pytest.raises(NotFiniteError) as exc_info:
            f32(value)

        assert exc_info.value.kind == kind
        assert exc_info.value.operation == "construct"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value: float) -> None:
        with pytest.raises(NotFiniteError):
            f32(value)

    def test_from_str(self) -> None:
        assert FiniteFloat32.from_str("0.1") == f32(0.1)
        with pytest.raises(NotFiniteError):
            FiniteFloat32.from_str("1e39")

    def test_conversion_from_binary64(self) -> None:
        assert FiniteFloat32(FiniteFloat(0.1)) == f32(0.1)
        with pytest.raises(NotFiniteError):
            FiniteFloat32(FiniteFloat.MAX)

    def test_pickle_round_trip(self) -> None:
        restored = pickle.loads(pickle.dumps(f32(0.1)))
        assert type(restored) is FiniteFloat32
        assert restored == f32(0.1)

    def test_repr(self) -> None:
        assert repr(f32(0.5)) == "FiniteFloat32(0.5)"


class TestConstants:
    """binary32 constants"""

    def test_values(self) -> None:
        assert FiniteFloat32.MANTISSA_DIGITS == 24
        assert FiniteFloat32.EPSILON.value == 2.0**-23
        assert FiniteFloat32.MAX.value == 3.4028234663852886e38
        assert FiniteFloat32.MIN.value == -3.4028234663852886e38
        assert FiniteFloat32.MIN_POSITIVE.value == 2.0**-126
        assert FiniteFloat32.MAX_NEGATIVE.value == -(2.0**-126)
        assert FiniteFloat32.ZERO.is_sign_positive()

    def test_constant_types(self) -> None:
        assert type(FiniteFloat32.MAX) is FiniteFloat32
        assert type(FiniteFloat32.ZERO) is FiniteFloat32

    def test_binary64_constants_unaffected(self) -> None:
        assert FiniteFloat.MANTISSA_DIGITS == 53
        assert type(FiniteFloat.MAX) is FiniteFloat


class TestArithmetic:
    """Results are rounded to binary32"""

    def test_exact_results(self) -> None:
        assert (f32(2.0) + f32(3.0)).value == 5.0
        assert (f32(1.0) / f32(4.0)).value == 0.25
        assert type(f32(2.0) * f32(3.0)) is FiniteFloat32

    def test_half_epsilon_rounds_away(self) -> None:
        half_epsilon = f32(2.0**-24)
        assert (f32(1.0) + half_epsilon).value == 1.0

    def test_ties_to_even(self) -> None:
        assert (f32(16777216.0) + f32(1.0)).value == 16777216.0

    def test_division_correctly_rounded(self) -> None:
        assert (f32(1.0) / f32(3.0)).value == _to_binary32(1.0 / 3.0)

    def test_overflow_in_binary32_rejected(self) -> None:
        """MAX + MAX is finite in binary64 but not in binary32"""
        with pytest.raises(NotFiniteError) as exc_info:
            FiniteFloat32.MAX + FiniteFloat32.MAX

        assert exc_info.value.kind == "+inf"
        assert exc_info.value.operation == "add"

    def test_mul_overflow_rejected(self) -> None:
        with pytest.raises(NotFiniteError) as exc_info:
            FiniteFloat32.MAX * f32(-2.0)

        assert exc_info.value.kind == "-inf"

    def test_division_by_zero_rejected(self) -> None:
        with pytest.raises(NotFiniteError) as exc_info:
            f32(1.0) / FiniteFloat32.ZERO

        assert exc_info.value.kind == "+inf"

    def test_fsum(self) -> None:
        assert FiniteFloat32.fsum([f32(0.5)] * 4) == f32(2.0)
        with pytest.raises(NotFiniteError):
            FiniteFloat32.fsum([FiniteFloat32.MAX, FiniteFloat32.MAX])


class TestSeparation:
    """FiniteFloat32 and FiniteFloat do not mix"""

    def test_not_equal(self) -> None:
        assert f32(0.5) != FiniteFloat(0.5)

    def test_ordering_rejected(self) -> None:
        with pytest.raises(TypeError):
            f32(0.5) < FiniteFloat(1.0)

    def test_arithmetic_rejected(self) -> None:
        with pytest.raises(TypeError):
            f32(0.5) + FiniteFloat(1.0)
        with pytest.raises(TypeError, match="min requires FiniteFloat32"):
            f32(0.5).min(FiniteFloat(1.0))
