"""Soft-float addition and subtraction."""

from __future__ import annotations

from .formats import F32, F64, FloatFormat, leading_zeros


def add(fmt: FloatFormat, a: float, b: float) -> float:
    """Return ``a + b`` computed on the bit representation of ``fmt``."""
    bits = fmt.bits
    mask = fmt.int_mask
    significand_bits = fmt.significand_bits
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = implicit_bit >> 1
    qnan_rep = inf_rep | quiet_bit

    a_rep = fmt.repr(a)
    b_rep = fmt.repr(b)
    a_abs = a_rep & abs_mask
    b_abs = b_rep & abs_mask

    # Zero, infinity or NaN on either side.
    if ((a_abs - 1) & mask) >= inf_rep - 1 or ((b_abs - 1) & mask) >= inf_rep - 1:
        if a_abs > inf_rep:
            return fmt.from_repr(a_abs | quiet_bit)
        if b_abs > inf_rep:
            return fmt.from_repr(b_abs | quiet_bit)
        if a_abs == inf_rep:
            if a_rep ^ b_rep == sign_bit:
                return fmt.from_repr(qnan_rep)
            return fmt.from_repr(a_rep)
        if b_abs == inf_rep:
            return fmt.from_repr(b_rep)
        if a_abs == 0:
            if b_abs == 0:
                return fmt.from_repr(a_rep & b_rep)
            return fmt.from_repr(b_rep)
        if b_abs == 0:
            return fmt.from_repr(a_rep)

    if b_abs > a_abs:
        a_rep, b_rep = b_rep, a_rep

    a_exponent = (a_rep & inf_rep) >> significand_bits
    b_exponent = (b_rep & inf_rep) >> significand_bits
    a_significand = a_rep & significand_mask
    b_significand = b_rep & significand_mask

    if a_exponent == 0:
        a_exponent, a_significand = fmt.normalize(a_significand)
    if b_exponent == 0:
        b_exponent, b_significand = fmt.normalize(b_significand)

    result_sign = a_rep & sign_bit
    subtraction = (a_rep ^ b_rep) & sign_bit != 0

    # Room for round, guard and sticky bits.
    a_significand = ((a_significand | implicit_bit) << 3) & mask
    b_significand = ((b_significand | implicit_bit) << 3) & mask

    align = a_exponent - b_exponent
    if align:
        if align < bits:
            sticky = int((b_significand << (bits - align)) & mask != 0)
            b_significand = (b_significand >> align) | sticky
        else:
            b_significand = 1

    if subtraction:
        a_significand = (a_significand - b_significand) & mask
        if a_significand == 0:
            return fmt.from_repr(0)
        if a_significand < implicit_bit << 3:
            shift = leading_zeros(a_significand, bits) - leading_zeros(
                implicit_bit << 3, bits
            )
            a_significand = (a_significand << shift) & mask
            a_exponent -= shift
    else:
        a_significand += b_significand
        if a_significand & (implicit_bit << 4):
            sticky = a_significand & 1
            a_significand = (a_significand >> 1) | sticky
            a_exponent += 1

    if a_exponent >= fmt.exponent_max:
        return fmt.from_repr(inf_rep | result_sign)

    if a_exponent <= 0:
        shift = 1 - a_exponent
        if shift < bits:
            sticky = int((a_significand << (bits - shift)) & mask != 0)
            a_significand = (a_significand >> shift) | sticky
        else:
            a_significand = int(a_significand != 0)
        a_exponent = 0

    round_guard_sticky = a_significand & 0x7
    result = (a_significand >> 3) & significand_mask
    result |= a_exponent << significand_bits
    result |= result_sign

    if round_guard_sticky > 0x4:
        result += 1
    if round_guard_sticky == 0x4:
        result += result & 1

    return fmt.from_repr(result)


def _negate(fmt: FloatFormat, value: float) -> float:
    return fmt.from_repr(fmt.repr(value) ^ fmt.sign_mask)


def addsf3(a: float, b: float) -> float:
    """Single-precision addition."""
    return add(F32, a, b)


def adddf3(a: float, b: float) -> float:
    """Double-precision addition."""
    return add(F64, a, b)


def subsf3(a: float, b: float) -> float:
    """Single-precision subtraction."""
    return addsf3(a, _negate(F32, b))


def subdf3(a: float, b: float) -> float:
    """Double-precision subtraction."""
    return adddf3(a, _negate(F64, b))