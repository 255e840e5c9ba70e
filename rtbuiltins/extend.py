"""Widening conversion between IEEE-754 formats."""

from __future__ import annotations

from .formats import F32, F64, FloatFormat, leading_zeros


def extend(src: FloatFormat, dst: FloatFormat, a: float) -> float:
    """Convert ``a`` from the narrower format ``src`` to the wider format ``dst``."""
    if dst.bits <= src.bits or dst.significand_bits <= src.significand_bits:
        raise ValueError(f"cannot extend {src.bits}-bit float to {dst.bits} bits")

    src_mask = src.int_mask
    dst_mask = dst.int_mask
    src_bits = src.bits
    src_min_normal = src.implicit_bit
    src_infinity = src.exponent_mask
    src_sign_mask = src.sign_mask
    src_abs_mask = src_sign_mask - 1
    src_qnan = src.significand_mask
    src_nan_code = src_qnan - 1

    dst_bits = dst.bits
    dst_sign_bits = dst.significand_bits
    dst_inf_exp = dst.exponent_max
    dst_min_normal = dst.implicit_bit

    sign_bits_delta = dst_sign_bits - src.significand_bits
    exp_bias_delta = dst.exponent_bias - src.exponent_bias

    a_rep = src.repr(a)
    a_abs = a_rep & src_abs_mask
    abs_result = 0

    if ((a_abs - src_min_normal) & src_mask) < ((src_infinity - src_min_normal) & src_mask):
        # Normal: shift into place and rebias the exponent.
        abs_result = (a_abs << sign_bits_delta) & dst_mask
        abs_result = (abs_result + ((exp_bias_delta << dst_sign_bits) & dst_mask)) & dst_mask
    elif a_abs >= src_infinity:
        # NaN or infinity: keep the payload right-aligned.
        abs_result = (dst_inf_exp << dst_sign_bits) & dst_mask
        abs_result |= ((a_abs & src_qnan) << sign_bits_delta) & dst_mask
        abs_result |= ((a_abs & src_nan_code) << sign_bits_delta) & dst_mask
    elif a_abs != 0:
        # Subnormal: renormalize and clear the leading bit.
        scale = leading_zeros(a_abs, src_bits) - leading_zeros(src_min_normal, src_bits)
        abs_result = (a_abs << (sign_bits_delta + scale)) & dst_mask
        bias = (exp_bias_delta - scale + 1) << dst_sign_bits
        abs_result = (abs_result ^ dst_min_normal) | (bias & dst_mask)

    sign_result = ((a_rep & src_sign_mask) << (dst_bits - src_bits)) & dst_mask
    return dst.from_repr(abs_result | sign_result)


def extendsfdf2(a: float) -> float:
    """Convert a single-precision value to double precision."""
    return extend(F32, F64, a)