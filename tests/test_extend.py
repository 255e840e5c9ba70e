import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rtbuiltins.extend import extend, extendsfdf2
from rtbuiltins.formats import F32, F64, round_f32


@given(st.integers(min_value=0, max_value=0xFFFFFFFF))
def test_extend_matches_exact_widening(bits):
    value = F32.from_repr(bits)
    result = extendsfdf2(value)
    if math.isnan(value):
        assert math.isnan(result)
    else:
        assert F64.repr(result) == F64.repr(value)


@given(st.floats(allow_nan=False, width=32))
def test_extend_round_trips_through_f32(value):
    assert F32.repr(extendsfdf2(value)) == F32.repr(value)


def test_extend_rounds_input_to_f32():
    assert extendsfdf2(0.1) == round_f32(0.1)


def test_smallest_subnormal():
    assert extendsfdf2(F32.from_repr(1)) == math.ldexp(1.0, -149)


def test_negative_zero_keeps_sign():
    result = extendsfdf2(-0.0)
    assert result == 0.0
    assert math.copysign(1.0, result) == -1.0


def test_infinities():
    assert extendsfdf2(math.inf) == math.inf
    assert extendsfdf2(-math.inf) == -math.inf


def test_nan_payload_is_kept():
    nan = F32.from_repr(0x7FC00001)
    assert F64.repr(extend(F32, F64, nan)) == 0x7FF8000020000000


def test_rejects_narrowing():
    with pytest.raises(ValueError):
        extend(F64, F32, 1.0)