"""Narrowing conversion between IEEE-754 formats."""

from __future__ import annotations

from .formats import F32, F64, FloatFormat


def trunc(src: FloatFormat, dst: FloatFormat, a: float) -> float:
    """Convert ``a`` from the wider format ``src`` to the narrower format ``dst``."""
    if dst.bits >= src.bits or dst.significand_bits >= src.significand_bits:
        raise ValueError(f"cannot truncate {src.bits}-bit float to {dst.bits} bits")

    src_mask = src.int_mask
    dst_mask = dst.int_mask
    src_bits = src.bits
    src_sig_bits = src.significand_bits
    dst_sig_bits = dst.significand_bits
    src_exp_bias = src.exponent_bias

    src_min_normal = src.implicit_bit
    src_significand_mask = src.significand_mask
    src_infinity = src.exponent_mask
    src_sign_mask = src.sign_mask
    src_abs_mask = src_sign_mask - 1
    sign_bits_delta = src_sig_bits - dst_sig_bits
    round_mask = (1 << sign_bits_delta) - 1
    halfway = 1 << (sign_bits_delta - 1)
    src_qnan = 1 << (src_sig_bits - 1)
    src_nan_code = src_qnan - 1

    dst_bits = dst.bits
    dst_inf_exp = dst.exponent_max
    dst_exp_bias = dst.exponent_bias

    underflow_exponent = src_exp_bias + 1 - dst_exp_bias
    overflow_exponent = src_exp_bias + dst_inf_exp - dst_exp_bias
    underflow = underflow_exponent << src_sig_bits
    overflow = overflow_exponent << src_sig_bits

    dst_qnan = 1 << (dst_sig_bits - 1)
    dst_nan_code = dst_qnan - 1

    a_rep = src.repr(a)
    a_abs = a_rep & src_abs_mask
    sign = a_rep & src_sign_mask

    if ((a_abs - underflow) & src_mask) < ((a_abs - overflow) & src_mask):
        # Within the destination's normal range: shift, rebias and round.
        abs_result = (a_abs >> sign_bits_delta) & dst_mask
        rebias = ((src_exp_bias - dst_exp_bias) << dst_sig_bits) & dst_mask
        abs_result = (abs_result - rebias) & dst_mask

        round_bits = a_abs & round_mask
        if round_bits > halfway:
            abs_result += 1
        elif round_bits == halfway:
            abs_result += abs_result & 1
    elif a_abs > src_infinity:
        # NaN: quiet it and keep the truncated payload.
        abs_result = (dst_inf_exp << dst_sig_bits) & dst_mask
        abs_result |= dst_qnan
        abs_result |= dst_nan_code & (((a_abs & src_nan_code) >> sign_bits_delta) & dst_mask)
    elif a_abs >= overflow:
        abs_result = (dst_inf_exp << dst_sig_bits) & dst_mask
    else:
        # Underflow or exact zero: the result is subnormal or zero.
        a_exp = a_abs >> src_sig_bits
        shift = src_exp_bias - dst_exp_bias - a_exp + 1
        significand = (a_rep & src_significand_mask) | src_min_normal

        if shift > src_sig_bits:
            abs_result = 0
        else:
            sticky = int((significand << (src_bits - shift)) & src_mask != 0)
            denormalized = (significand >> shift) | sticky
            abs_result = (denormalized >> sign_bits_delta) & dst_mask
            round_bits = denormalized & round_mask
            if round_bits > halfway:
                abs_result += 1
            elif round_bits == halfway:
                abs_result += abs_result & 1

    sign_result = (sign >> (src_bits - dst_bits)) & dst_mask
    return dst.from_repr((abs_result | sign_result) & dst_mask)


def truncdfsf2(a: float) -> float:
    """Convert a double-precision value to single precision."""
    return trunc(F64, F32, a)