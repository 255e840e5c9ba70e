"""Raising a float to an integer power by repeated squaring."""

from __future__ import annotations

import math

from .formats import F32, F64, FloatFormat


def _fit(fmt: FloatFormat, value: float) -> float:
    return fmt.from_repr(fmt.repr(value))


def _reciprocal(value: float) -> float:
    if value == 0.0:
        return math.copysign(math.inf, value)
    return 1.0 / value


def powi(fmt: FloatFormat, a: float, b: int) -> float:
    """Return ``a`` raised to the integer power ``b`` in the precision of ``fmt``."""
    a = _fit(fmt, a)
    exponent = abs(b)
    result = 1.0
    while True:
        if exponent & 1:
            result = _fit(fmt, result * a)
        exponent >>= 1
        if exponent == 0:
            break
        a = _fit(fmt, a * a)
    if b < 0:
        return _fit(fmt, _reciprocal(result))
    return result


def powisf2(a: float, b: int) -> float:
    """Single-precision integer power."""
    return powi(F32, a, b)


def powidf2(a: float, b: int) -> float:
    """Double-precision integer power."""
    return powi(F64, a, b)