import math

from hypothesis import given
from hypothesis import strategies as st

from rtbuiltins.add import adddf3, addsf3, subdf3, subsf3
from rtbuiltins.formats import F32, F64, round_f32

f32s = st.floats(width=32, allow_nan=False)
f64s = st.floats(allow_nan=False)


def _canonical(fmt, value):
    """Bit pattern of a value, with every NaN mapped to one key."""
    if math.isnan(value):
        return "nan"
    return fmt.repr(value)


@given(f64s, f64s)
def test_adddf3_matches_hardware(a, b):
    assert _canonical(F64, adddf3(a, b)) == _canonical(F64, a + b)


@given(f64s, f64s)
def test_subdf3_matches_hardware(a, b):
    assert _canonical(F64, subdf3(a, b)) == _canonical(F64, a - b)


@given(f32s, f32s)
def test_addsf3_matches_rounded_sum(a, b):
    assert _canonical(F32, addsf3(a, b)) == _canonical(F32, round_f32(a + b))


@given(f32s, f32s)
def test_subsf3_matches_rounded_difference(a, b):
    assert _canonical(F32, subsf3(a, b)) == _canonical(F32, round_f32(a - b))


@given(f64s, f64s)
def test_addition_commutes(a, b):
    assert _canonical(F64, adddf3(a, b)) == _canonical(F64, adddf3(b, a))


def test_nan_propagates():
    assert math.isnan(adddf3(math.nan, 1.0))
    assert math.isnan(addsf3(1.0, math.nan))


def test_opposite_infinities_give_nan():
    assert math.isnan(adddf3(math.inf, -math.inf))
    assert math.isnan(subsf3(math.inf, math.inf))


def test_signed_zeros():
    assert math.copysign(1.0, adddf3(-0.0, -0.0)) == -1.0
    assert math.copysign(1.0, adddf3(-0.0, 0.0)) == 1.0
    assert math.copysign(1.0, subdf3(1.5, 1.5)) == 1.0


def test_overflow_to_infinity():
    assert adddf3(1.7976931348623157e308, 1.7976931348623157e308) == math.inf
    biggest = F32.from_repr(0x7F7FFFFF)
    assert addsf3(biggest, biggest) == math.inf


def test_subnormal_sum():
    tiny = F64.from_repr(1)
    assert F64.repr(adddf3(tiny, tiny)) == 2