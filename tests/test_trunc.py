import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rtbuiltins.formats import F32, F64, round_f32
from rtbuiltins.trunc import trunc, truncdfsf2


@given(st.floats(allow_nan=False, width=64))
def test_trunc_matches_native_rounding(value):
    assert F32.repr(truncdfsf2(value)) == F32.repr(round_f32(value))


@given(st.floats(allow_nan=False, width=32))
def test_f32_values_are_unchanged(value):
    assert F32.repr(trunc(F64, F32, value)) == F32.repr(value)


def test_nan_becomes_quiet_nan():
    result = truncdfsf2(F64.from_repr(0x7FF8000000000000))
    assert F32.repr(result) == 0x7FC00000


def test_signalling_nan_is_quieted():
    result = truncdfsf2(F64.from_repr(0x7FF0000000000001))
    assert math.isnan(result)
    assert F32.repr(result) & 0x00400000 == 0x00400000
    assert F32.repr(result) == 0x7FC00000


def test_overflow_to_infinity():
    assert truncdfsf2(1e300) == math.inf
    assert truncdfsf2(-1e300) == -math.inf


def test_tie_rounds_to_even():
    assert truncdfsf2(1.0 + math.ldexp(1.0, -24)) == 1.0


def test_tiny_value_underflows_to_signed_zero():
    result = truncdfsf2(-1e-300)
    assert result == 0.0
    assert math.copysign(1.0, result) == -1.0


def test_subnormal_result():
    assert truncdfsf2(math.ldexp(1.0, -149)) == math.ldexp(1.0, -149)


def test_rejects_widening():
    with pytest.raises(ValueError):
        trunc(F32, F64, 1.0)