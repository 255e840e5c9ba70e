import math
import sys

from hypothesis import assume, given
from hypothesis import strategies as st

from rtbuiltins.formats import F32, F64, round_f32
from rtbuiltins.mul import mul, muldf3, mulsf3

F32_MIN_NORMAL = math.ldexp(1.0, -126)


@given(
    st.floats(allow_nan=False, width=64),
    st.floats(allow_nan=False, width=64),
)
def test_muldf3_matches_native(a, b):
    expected = a * b
    result = muldf3(a, b)
    if math.isnan(expected):
        assert math.isnan(result)
        return
    assume(
        math.isinf(expected)
        or a == 0.0
        or b == 0.0
        or abs(expected) >= 2 * sys.float_info.min
    )
    assert F64.repr(result) == F64.repr(expected)


@given(
    st.floats(allow_nan=False, width=32),
    st.floats(allow_nan=False, width=32),
)
def test_mulsf3_matches_native(a, b):
    exact = a * b
    result = mulsf3(a, b)
    if math.isnan(exact):
        assert math.isnan(result)
        return
    expected = round_f32(exact)
    assume(
        math.isinf(expected)
        or a == 0.0
        or b == 0.0
        or abs(expected) >= 2 * F32_MIN_NORMAL
    )
    assert F32.repr(result) == F32.repr(expected)


@given(
    st.floats(allow_nan=False, width=64),
    st.floats(allow_nan=False, width=64),
)
def test_mul_is_commutative(a, b):
    left = mul(F64, a, b)
    right = mul(F64, b, a)
    assert math.isnan(left) == math.isnan(right)
    if not math.isnan(left):
        assert F64.repr(left) == F64.repr(right)


def test_infinity_times_zero_is_quiet_nan():
    assert F64.repr(muldf3(math.inf, 0.0)) == 0x7FF8000000000000
    assert math.isnan(mulsf3(0.0, -math.inf))


def test_nan_operand_propagates():
    assert math.isnan(muldf3(math.nan, 2.0))
    assert math.isnan(mulsf3(3.0, math.nan))


def test_signed_zero_result():
    result = muldf3(-0.0, 5.0)
    assert result == 0.0
    assert math.copysign(1.0, result) == -1.0


def test_infinity_sign():
    assert muldf3(math.inf, -2.0) == -math.inf
    assert mulsf3(-math.inf, -3.0) == math.inf


def test_overflow_to_infinity():
    assert muldf3(1e308, 10.0) == math.inf
    assert mulsf3(3e38, -10.0) == -math.inf


def test_simple_products():
    assert muldf3(1.5, 2.0) == 1.5 * 2.0
    assert mulsf3(0.5, 0.25) == 0.5 * 0.25