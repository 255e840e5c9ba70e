"""Soft-float multiplication."""

from __future__ import annotations

from .formats import F32, F64, FloatFormat


def mul(fmt: FloatFormat, a: float, b: float) -> float:
    """Return ``a * b`` computed on the bit representation of ``fmt``."""
    bits = fmt.bits
    mask = fmt.int_mask
    significand_bits = fmt.significand_bits
    max_exponent = fmt.exponent_max
    exponent_bias = fmt.exponent_bias
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = implicit_bit >> 1
    qnan_rep = inf_rep | quiet_bit
    exponent_bits = fmt.exponent_bits

    a_rep = fmt.repr(a)
    b_rep = fmt.repr(b)

    a_exponent = (a_rep >> significand_bits) & max_exponent
    b_exponent = (b_rep >> significand_bits) & max_exponent
    product_sign = (a_rep ^ b_rep) & sign_bit

    a_significand = a_rep & significand_mask
    b_significand = b_rep & significand_mask
    scale = 0

    # Zero, subnormal, infinity or NaN on either side.
    if ((a_exponent - 1) & mask) >= max_exponent - 1 or (
        (b_exponent - 1) & mask
    ) >= max_exponent - 1:
        a_abs = a_rep & abs_mask
        b_abs = b_rep & abs_mask

        if a_abs > inf_rep:
            return fmt.from_repr(a_rep | quiet_bit)
        if b_abs > inf_rep:
            return fmt.from_repr(b_rep | quiet_bit)

        if a_abs == inf_rep:
            if b_abs != 0:
                return fmt.from_repr(a_abs | product_sign)
            return fmt.from_repr(qnan_rep)

        if b_abs == inf_rep:
            if a_abs != 0:
                return fmt.from_repr(b_abs | product_sign)
            return fmt.from_repr(qnan_rep)

        if a_abs == 0 or b_abs == 0:
            return fmt.from_repr(product_sign)

        if a_abs < implicit_bit:
            exponent, a_significand = fmt.normalize(a_significand)
            scale += exponent
        if b_abs < implicit_bit:
            exponent, b_significand = fmt.normalize(b_significand)
            scale += exponent

    a_significand |= implicit_bit
    b_significand |= implicit_bit

    # Left-align one operand so the product has exponent_bits + 2 integral digits.
    product = a_significand * ((b_significand << exponent_bits) & mask)
    product_low = product & mask
    product_high = product >> bits

    product_exponent = a_exponent + b_exponent + scale - exponent_bias

    if product_high & implicit_bit:
        product_exponent += 1
    else:
        product_high = ((product_high << 1) | (product_low >> (bits - 1))) & mask
        product_low = (product_low << 1) & mask

    if product_exponent >= max_exponent:
        return fmt.from_repr(inf_rep | product_sign)

    if product_exponent <= 0:
        # Denormal before rounding.
        shift = 1 - product_exponent
        if shift >= bits:
            return fmt.from_repr(product_sign)
        sticky = (product_low << (bits - shift)) & mask
        product_low = (
            ((product_high << (bits - shift)) & mask) | (product_low >> shift) | sticky
        )
        product_high >>= shift
    else:
        product_high &= significand_mask
        product_high |= product_exponent << significand_bits

    product_high |= product_sign

    # Round to nearest, ties to even.
    if product_low > sign_bit:
        product_high += 1
    if product_low == sign_bit:
        product_high += product_high & 1

    return fmt.from_repr(product_high & mask)


def mulsf3(a: float, b: float) -> float:
    """Single-precision multiplication."""
    return mul(F32, a, b)


def muldf3(a: float, b: float) -> float:
    """Double-precision multiplication."""
    return mul(F64, a, b)