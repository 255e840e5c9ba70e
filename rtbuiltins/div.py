"""Soft-float division using a Newton-Raphson reciprocal estimate."""

from __future__ import annotations

from .formats import F32, F64, FloatFormat

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1


def _negate32(value: int) -> int:
    return -value & _MASK32


def _negate64(value: int) -> int:
    return -value & _MASK64


def _special_case(
    fmt: FloatFormat, a_rep: int, b_rep: int, quotient_sign: int
) -> float | None:
    """Handle NaN, infinity and zero operands; return None for finite non-zero ones."""
    abs_mask = fmt.sign_mask - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = fmt.implicit_bit >> 1
    qnan_rep = inf_rep | quiet_bit
    a_abs = a_rep & abs_mask
    b_abs = b_rep & abs_mask

    if a_abs > inf_rep:
        return fmt.from_repr(a_rep | quiet_bit)
    if b_abs > inf_rep:
        return fmt.from_repr(b_rep | quiet_bit)
    if a_abs == inf_rep:
        if b_abs == inf_rep:
            return fmt.from_repr(qnan_rep)
        return fmt.from_repr(a_abs | quotient_sign)
    if b_abs == inf_rep:
        return fmt.from_repr(quotient_sign)
    if a_abs == 0:
        if b_abs == 0:
            return fmt.from_repr(qnan_rep)
        return fmt.from_repr(quotient_sign)
    if b_abs == 0:
        return fmt.from_repr(inf_rep | quotient_sign)
    return None


def _unpack(fmt: FloatFormat, a: float, b: float):
    """Split operands, resolving special cases.

    Returns either a finished float, or a tuple of
    (quotient_sign, a_significand, b_significand, quotient_exponent).
    """
    mask = fmt.int_mask
    significand_bits = fmt.significand_bits
    max_exponent = fmt.exponent_max
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask

    a_rep = fmt.repr(a)
    b_rep = fmt.repr(b)
    a_exponent = (a_rep >> significand_bits) & max_exponent
    b_exponent = (b_rep >> significand_bits) & max_exponent
    quotient_sign = (a_rep ^ b_rep) & fmt.sign_mask

    a_significand = a_rep & significand_mask
    b_significand = b_rep & significand_mask
    scale = 0

    if ((a_exponent - 1) & mask) >= max_exponent - 1 or (
        (b_exponent - 1) & mask
    ) >= max_exponent - 1:
        special = _special_case(fmt, a_rep, b_rep, quotient_sign)
        if special is not None:
            return special
        abs_mask = fmt.sign_mask - 1
        if a_rep & abs_mask < implicit_bit:
            exponent, a_significand = fmt.normalize(a_significand)
            scale += exponent
        if b_rep & abs_mask < implicit_bit:
            exponent, b_significand = fmt.normalize(b_significand)
            scale -= exponent

    a_significand |= implicit_bit
    b_significand |= implicit_bit
    quotient_exponent = a_exponent - b_exponent + scale
    return quotient_sign, a_significand, b_significand, quotient_exponent


def _finish(
    fmt: FloatFormat,
    quotient: int,
    a_significand: int,
    b_significand: int,
    quotient_exponent: int,
    quotient_sign: int,
) -> float:
    """Compute the residual, then round and pack the quotient."""
    mask = fmt.int_mask
    significand_bits = fmt.significand_bits

    if quotient < fmt.implicit_bit << 1:
        quotient_exponent -= 1
        residual = (
            ((a_significand << (significand_bits + 1)) & mask)
            - (quotient * b_significand) & mask
        ) & mask
    else:
        quotient >>= 1
        residual = (
            ((a_significand << significand_bits) & mask)
            - (quotient * b_significand) & mask
        ) & mask

    written_exponent = quotient_exponent + fmt.exponent_bias

    if written_exponent >= fmt.exponent_max:
        return fmt.from_repr(fmt.exponent_mask | quotient_sign)
    if written_exponent < 1:
        # Subnormal results are flushed to zero.
        return fmt.from_repr(quotient_sign)

    round_up = int(((residual << 1) & mask) > b_significand)
    abs_result = quotient & fmt.significand_mask
    abs_result |= written_exponent << significand_bits
    abs_result = (abs_result + round_up) & mask
    return fmt.from_repr(abs_result | quotient_sign)


def _refine32(reciprocal: int, q31b: int) -> int:
    """Three Newton-Raphson steps on a Q32 reciprocal estimate."""
    for _ in range(3):
        correction = _negate32(((reciprocal * q31b) >> 32) & _MASK32)
        reciprocal = ((reciprocal * correction) >> 31) & _MASK32
    return reciprocal


def _div32(a: float, b: float) -> float:
    fmt = F32
    unpacked = _unpack(fmt, a, b)
    if isinstance(unpacked, float):
        return unpacked
    quotient_sign, a_significand, b_significand, quotient_exponent = unpacked

    q31b = (b_significand << 8) & _MASK32
    reciprocal = (0x7504F333 - q31b) & _MASK32
    reciprocal = _refine32(reciprocal, q31b)
    reciprocal = (reciprocal - 2) & _MASK32

    quotient = (((a_significand << 1) & _MASK32) * reciprocal) >> 32
    return _finish(
        fmt, quotient, a_significand, b_significand, quotient_exponent, quotient_sign
    )


def _div64(a: float, b: float) -> float:
    fmt = F64
    unpacked = _unpack(fmt, a, b)
    if isinstance(unpacked, float):
        return unpacked
    quotient_sign, a_significand, b_significand, quotient_exponent = unpacked

    q31b = (b_significand >> 21) & _MASK32
    recip32 = (0x7504F333 - q31b) & _MASK32
    recip32 = _refine32(recip32, q31b)
    # Guard against the estimate having wrapped to exactly zero.
    recip32 = (recip32 - 1) & _MASK32

    # One more step at extended precision for about 56 correct bits.
    q63blo = (b_significand << 11) & _MASK32
    correction = _negate64(
        (recip32 * q31b + ((recip32 * q63blo) >> 32)) & _MASK64
    )
    c_hi = correction >> 32
    c_lo = correction & _MASK32
    reciprocal = (recip32 * c_hi + ((recip32 * c_lo) >> 32)) & _MASK64
    reciprocal = (reciprocal - 2) & _MASK64

    quotient = (((a_significand << 2) & _MASK64) * reciprocal) >> 64
    return _finish(
        fmt, quotient, a_significand, b_significand, quotient_exponent, quotient_sign
    )


def divsf3(a: float, b: float) -> float:
    """Single-precision division (subnormal results flush to zero)."""
    return _div32(a, b)


def divdf3(a: float, b: float) -> float:
    """Double-precision division (subnormal results flush to zero)."""
    return _div64(a, b)