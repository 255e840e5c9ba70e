"""Conversions between integers and binary32/binary64 floats, done on bit patterns."""

from __future__ import annotations

import math

from .formats import F32, F64, FloatFormat, leading_zeros

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1
_MASK128 = (1 << 128) - 1


def _check_unsigned(value: int, bits: int) -> int:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{value} does not fit in {bits} unsigned bits")
    return value


def _check_signed(value: int, bits: int) -> int:
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError(f"{value} does not fit in {bits} signed bits")
    return value


def _round_up(a: int, b: int, width: int) -> int:
    """Add one to ``a`` when the dropped bits ``b`` round up; ties go to even."""
    top = width - 1
    return a + ((b - ((b >> top) & ~a & 1)) >> top)


def u32_to_f32_bits(i: int) -> int:
    """Bit pattern of the binary32 nearest to the unsigned 32-bit ``i``."""
    _check_unsigned(i, 32)
    if i == 0:
        return 0
    n = leading_zeros(i, 32)
    shifted = (i << n) & _MASK32
    a = shifted >> 8
    b = (shifted << 24) & _MASK32
    m = _round_up(a, b, 32)
    e = 157 - n
    return ((e << 23) + m) & _MASK32


def u32_to_f64_bits(i: int) -> int:
    """Bit pattern of the binary64 equal to the unsigned 32-bit ``i``."""
    _check_unsigned(i, 32)
    if i == 0:
        return 0
    n = leading_zeros(i, 32)
    m = (i << (21 + n)) & _MASK64
    e = 1053 - n
    return ((e << 52) + m) & _MASK64


def u64_to_f32_bits(i: int) -> int:
    """Bit pattern of the binary32 nearest to the unsigned 64-bit ``i``."""
    _check_unsigned(i, 64)
    n = leading_zeros(i, 64)
    y = (i << (n % 64)) & _MASK64
    a = (y >> 40) & _MASK32
    b = ((y >> 8) | (y & 0xFFFF)) & _MASK32
    m = _round_up(a, b, 32)
    e = 0 if i == 0 else 189 - n
    return ((e << 23) + m) & _MASK32


def u64_to_f64_bits(i: int) -> int:
    """Bit pattern of the binary64 nearest to the unsigned 64-bit ``i``."""
    _check_unsigned(i, 64)
    if i == 0:
        return 0
    n = leading_zeros(i, 64)
    shifted = (i << n) & _MASK64
    a = shifted >> 11
    b = (shifted << 53) & _MASK64
    m = _round_up(a, b, 64)
    e = 1085 - n
    return ((e << 52) + m) & _MASK64


def u128_to_f32_bits(i: int) -> int:
    """Bit pattern of the binary32 nearest to the unsigned 128-bit ``i``."""
    _check_unsigned(i, 128)
    n = leading_zeros(i, 128)
    y = (i << (n % 128)) & _MASK128
    a = (y >> 104) & _MASK32
    sticky = int(((y << 32) & _MASK128) >> 32 != 0)
    b = ((y >> 72) & _MASK32) | sticky
    m = _round_up(a, b, 32)
    e = 0 if i == 0 else 253 - n
    return ((e << 23) + m) & _MASK32


def u128_to_f64_bits(i: int) -> int:
    """Bit pattern of the binary64 nearest to the unsigned 128-bit ``i``."""
    _check_unsigned(i, 128)
    n = leading_zeros(i, 128)
    y = (i << (n % 128)) & _MASK128
    a = (y >> 75) & _MASK64
    b = ((y >> 11) | (y & 0xFFFF_FFFF)) & _MASK64
    m = _round_up(a, b, 64)
    e = 0 if i == 0 else 1149 - n
    return ((e << 52) + m) & _MASK64


def floatunsisf(i: int) -> float:
    """Unsigned 32-bit integer to single precision."""
    return F32.from_repr(u32_to_f32_bits(i))


def floatunsidf(i: int) -> float:
    """Unsigned 32-bit integer to double precision."""
    return F64.from_repr(u32_to_f64_bits(i))


def floatundisf(i: int) -> float:
    """Unsigned 64-bit integer to single precision."""
    return F32.from_repr(u64_to_f32_bits(i))


def floatundidf(i: int) -> float:
    """Unsigned 64-bit integer to double precision."""
    return F64.from_repr(u64_to_f64_bits(i))


def floatuntisf(i: int) -> float:
    """Unsigned 128-bit integer to single precision."""
    return F32.from_repr(u128_to_f32_bits(i))


def floatuntidf(i: int) -> float:
    """Unsigned 128-bit integer to double precision."""
    return F64.from_repr(u128_to_f64_bits(i))


def _signed_to_float(fmt: FloatFormat, i: int, bits: int, convert) -> float:
    _check_signed(i, bits)
    sign_bit = fmt.sign_mask if i < 0 else 0
    return fmt.from_repr(convert(abs(i)) | sign_bit)


def floatsisf(i: int) -> float:
    """Signed 32-bit integer to single precision."""
    return _signed_to_float(F32, i, 32, u32_to_f32_bits)


def floatsidf(i: int) -> float:
    """Signed 32-bit integer to double precision."""
    return _signed_to_float(F64, i, 32, u32_to_f64_bits)


def floatdisf(i: int) -> float:
    """Signed 64-bit integer to single precision."""
    return _signed_to_float(F32, i, 64, u64_to_f32_bits)


def floatdidf(i: int) -> float:
    """Signed 64-bit integer to double precision."""
    return _signed_to_float(F64, i, 64, u64_to_f64_bits)


def floattisf(i: int) -> float:
    """Signed 128-bit integer to single precision."""
    return _signed_to_float(F32, i, 128, u128_to_f32_bits)


def floattidf(i: int) -> float:
    """Signed 128-bit integer to double precision."""
    return _signed_to_float(F64, i, 128, u128_to_f64_bits)


def _magnitude(fmt: FloatFormat, fbits: int, width: int) -> int:
    """Truncated integer magnitude of a finite value known to be >= 1 and in range."""
    offset = width - 1 - fmt.significand_bits
    if offset >= 0:
        placed = (fbits << offset) & ((1 << width) - 1)
    else:
        placed = (fbits >> -offset) & ((1 << width) - 1)
    m = (1 << (width - 1)) | placed
    s = fmt.exponent_bias + width - 1 - (fbits >> fmt.significand_bits)
    return m >> s


def _float_to_unsigned(fmt: FloatFormat, f: float, width: int) -> int:
    fbits = fmt.repr(f)
    sig = fmt.significand_bits
    if fbits < fmt.exponent_bias << sig:
        return 0
    if fbits < (fmt.exponent_bias + width) << sig:
        return _magnitude(fmt, fbits, width)
    if fbits <= fmt.exponent_mask:
        return (1 << width) - 1
    # Negative or NaN.
    return 0


def _float_to_signed(fmt: FloatFormat, f: float, width: int) -> int:
    fbits = fmt.repr(f) & (fmt.sign_mask - 1)
    negative = fmt.sign(f)
    sig = fmt.significand_bits
    if fbits < fmt.exponent_bias << sig:
        return 0
    if fbits < (fmt.exponent_bias + width - 1) << sig:
        u = _magnitude(fmt, fbits, width)
        return -u if negative else u
    if fbits <= fmt.exponent_mask:
        return -(1 << (width - 1)) if negative else (1 << (width - 1)) - 1
    # NaN.
    return 0


def fixunssfsi(f: float) -> int:
    """Single precision to unsigned 32-bit integer, saturating."""
    return _float_to_unsigned(F32, f, 32)


def fixunssfdi(f: float) -> int:
    """Single precision to unsigned 64-bit integer, saturating."""
    return _float_to_unsigned(F32, f, 64)


def fixunssfti(f: float) -> int:
    """Single precision to unsigned 128-bit integer, saturating."""
    return _float_to_unsigned(F32, f, 128)


def fixunsdfsi(f: float) -> int:
    """Double precision to unsigned 32-bit integer, saturating."""
    return _float_to_unsigned(F64, f, 32)


def fixunsdfdi(f: float) -> int:
    """Double precision to unsigned 64-bit integer, saturating."""
    return _float_to_unsigned(F64, f, 64)


def fixunsdfti(f: float) -> int:
    """Double precision to unsigned 128-bit integer, saturating."""
    return _float_to_unsigned(F64, f, 128)


def fixsfsi(f: float) -> int:
    """Single precision to signed 32-bit integer, saturating."""
    return _float_to_signed(F32, f, 32)


def fixsfdi(f: float) -> int:
    """Single precision to signed 64-bit integer, saturating."""
    return _float_to_signed(F32, f, 64)


def fixsfti(f: float) -> int:
    """Single precision to signed 128-bit integer, saturating."""
    return _float_to_signed(F32, f, 128)


def fixdfsi(f: float) -> int:
    """Double precision to signed 32-bit integer, saturating."""
    return _float_to_signed(F64, f, 32)


def fixdfdi(f: float) -> int:
    """Double precision to signed 64-bit integer, saturating."""
    return _float_to_signed(F64, f, 64)


def fixdfti(f: float) -> int:
    """Double precision to signed 128-bit integer, saturating."""
    return _float_to_signed(F64, f, 128)


__all__ = [name for name in dir() if not name.startswith("_") and name not in {"math", "annotations"}]