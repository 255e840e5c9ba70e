import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rtbuiltins.div import divdf3, divsf3
from rtbuiltins.formats import F32, F64, round_f32

_f64_magnitudes = st.floats(min_value=1e-100, max_value=1e100)
_f32_magnitudes = st.floats(min_value=1e-15, max_value=1e15, width=32)


@given(_f64_magnitudes, _f64_magnitudes, st.booleans(), st.booleans())
def test_divdf3_matches_native(a, b, neg_a, neg_b):
    a = -a if neg_a else a
    b = -b if neg_b else b
    assert F64.repr(divdf3(a, b)) == F64.repr(a / b)


@pytest.mark.parametrize("div", [divsf3, divdf3])
@pytest.mark.parametrize("value", [1.0, 3.0, -7.5, 0.125, 1024.0])
def test_self_division_is_one(div, value):
    assert div(value, value) == 1.0


@pytest.mark.parametrize(
    "a,b", [(1.0, 3.0), (2.0, 3.0), (10.0, 7.0), (-1.0, 9.0), (1.0, 1.0)]
)
def test_small_quotients_match_native(a, b):
    assert divdf3(a, b) == a / b
    assert divsf3(a, b) == round_f32(a / b)


@pytest.mark.parametrize("div,fmt", [(divsf3, F32), (divdf3, F64)])
def test_nan_operands_yield_nan(div, fmt):
    assert math.isnan(div(math.nan, 2.0))
    assert math.isnan(div(2.0, math.nan))


@pytest.mark.parametrize("div,fmt", [(divsf3, F32), (divdf3, F64)])
def test_invalid_operations_give_quiet_nan(div, fmt):
    qnan = fmt.exponent_mask | (fmt.implicit_bit >> 1)
    assert fmt.repr(div(math.inf, -math.inf)) == qnan
    assert fmt.repr(div(0.0, 0.0)) == qnan
    assert fmt.repr(div(-0.0, 0.0)) == qnan


@pytest.mark.parametrize("div", [divsf3, divdf3])
def test_infinity_and_zero_signs(div):
    assert div(math.inf, -2.0) == -math.inf
    assert div(-math.inf, -2.0) == math.inf
    assert div(5.0, 0.0) == math.inf
    assert div(5.0, -0.0) == -math.inf
    small = div(-3.0, math.inf)
    assert small == 0.0 and math.copysign(1.0, small) == -1.0
    zero = div(-0.0, 5.0)
    assert zero == 0.0 and math.copysign(1.0, zero) == -1.0
    zero = div(0.0, -5.0)
    assert math.copysign(1.0, zero) == -1.0


def test_overflow_gives_infinity():
    big = 1.7976931348623157e308
    assert divdf3(big, 0.5) == math.inf
    assert divdf3(-big, 0.5) == -math.inf
    assert divsf3(3.0e38, 1e-10) == math.inf


def test_subnormal_result_flushes_to_zero():
    smallest_normal = 2.2250738585072014e-308
    native = smallest_normal / 4.0
    assert native != 0.0
    result = divdf3(smallest_normal, 4.0)
    assert result == 0.0
    assert math.copysign(1.0, divdf3(-smallest_normal, 4.0)) == -1.0


@pytest.mark.parametrize(
    "a,b",
    [
        (5e-324, 2.0**-1000),
        (2.0**-1000, 5e-324),
        (1.5e-310, 3.0e-200),
        (7.0, 1.0e-310),
    ],
)
def test_subnormal_operands_are_normalized(a, b):
    assert F64.repr(divdf3(a, b)) == F64.repr(a / b)


def test_subnormal_operand_single_precision():
    tiny = F32.from_repr(1)
    assert divsf3(tiny, 2.0**-140) == round_f32(tiny / 2.0**-140)
    assert divsf3(2.0**-140, tiny) == round_f32(2.0**-140 / tiny)


@given(_f64_magnitudes, _f64_magnitudes)
def test_division_is_sign_symmetric(a, b):
    assert divdf3(-a, b) == -divdf3(a, b)
    assert divdf3(a, -b) == -divdf3(a, b)
    assert divdf3(-a, -b) == divdf3(a, b)