"""Soft-float comparisons with the libgcc and ARM EABI return conventions."""

from __future__ import annotations

import enum

from .formats import F32, F64, FloatFormat


class CmpResult(enum.Enum):
    """Outcome of comparing two floats."""

    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"
    UNORDERED = "unordered"

    def to_le_abi(self) -> int:
        """Encoding used by the ``le``/``eq``/``lt``/``ne`` entry points."""
        return {
            CmpResult.LESS: -1,
            CmpResult.EQUAL: 0,
            CmpResult.GREATER: 1,
            CmpResult.UNORDERED: 1,
        }[self]

    def to_ge_abi(self) -> int:
        """Encoding used by the ``ge``/``gt`` entry points."""
        return {
            CmpResult.LESS: -1,
            CmpResult.EQUAL: 0,
            CmpResult.GREATER: 1,
            CmpResult.UNORDERED: -1,
        }[self]


def _abs_reprs(fmt: FloatFormat, a: float, b: float) -> tuple[int, int]:
    abs_mask = fmt.sign_mask - 1
    return fmt.repr(a) & abs_mask, fmt.repr(b) & abs_mask


def compare(fmt: FloatFormat, a: float, b: float) -> CmpResult:
    """Compare two floats via their bit patterns."""
    inf_rep = fmt.exponent_mask
    a_abs, b_abs = _abs_reprs(fmt, a, b)

    if a_abs > inf_rep or b_abs > inf_rep:
        return CmpResult.UNORDERED
    if a_abs | b_abs == 0:
        return CmpResult.EQUAL

    a_srep = fmt.signed_repr(a)
    b_srep = fmt.signed_repr(b)

    if a_srep & b_srep >= 0:
        lower, upper = a_srep, b_srep
    else:
        # Both negative: integer order is reversed.
        lower, upper = b_srep, a_srep

    if lower < upper:
        return CmpResult.LESS
    if lower == upper:
        return CmpResult.EQUAL
    return CmpResult.GREATER


def unordered(fmt: FloatFormat, a: float, b: float) -> bool:
    """True when either operand is NaN."""
    inf_rep = fmt.exponent_mask
    a_abs, b_abs = _abs_reprs(fmt, a, b)
    return a_abs > inf_rep or b_abs > inf_rep


def lesf2(a: float, b: float) -> int:
    return compare(F32, a, b).to_le_abi()


def gesf2(a: float, b: float) -> int:
    return compare(F32, a, b).to_ge_abi()


def unordsf2(a: float, b: float) -> int:
    return int(unordered(F32, a, b))


def eqsf2(a: float, b: float) -> int:
    return compare(F32, a, b).to_le_abi()


def ltsf2(a: float, b: float) -> int:
    return compare(F32, a, b).to_le_abi()


def nesf2(a: float, b: float) -> int:
    return compare(F32, a, b).to_le_abi()


def gtsf2(a: float, b: float) -> int:
    return compare(F32, a, b).to_ge_abi()


def ledf2(a: float, b: float) -> int:
    return compare(F64, a, b).to_le_abi()


def gedf2(a: float, b: float) -> int:
    return compare(F64, a, b).to_ge_abi()


def unorddf2(a: float, b: float) -> int:
    return int(unordered(F64, a, b))


def eqdf2(a: float, b: float) -> int:
    return compare(F64, a, b).to_le_abi()


def ltdf2(a: float, b: float) -> int:
    return compare(F64, a, b).to_le_abi()


def nedf2(a: float, b: float) -> int:
    return compare(F64, a, b).to_le_abi()


def gtdf2(a: float, b: float) -> int:
    return compare(F64, a, b).to_ge_abi()


def aeabi_fcmple(a: float, b: float) -> int:
    return int(lesf2(a, b) <= 0)


def aeabi_fcmpge(a: float, b: float) -> int:
    return int(gesf2(a, b) >= 0)


def aeabi_fcmpeq(a: float, b: float) -> int:
    return int(eqsf2(a, b) == 0)


def aeabi_fcmplt(a: float, b: float) -> int:
    return int(ltsf2(a, b) < 0)


def aeabi_fcmpgt(a: float, b: float) -> int:
    return int(gtsf2(a, b) > 0)


def aeabi_dcmple(a: float, b: float) -> int:
    return int(ledf2(a, b) <= 0)


def aeabi_dcmpge(a: float, b: float) -> int:
    return int(gedf2(a, b) >= 0)


def aeabi_dcmpeq(a: float, b: float) -> int:
    return int(eqdf2(a, b) == 0)


def aeabi_dcmplt(a: float, b: float) -> int:
    return int(ltdf2(a, b) < 0)


def aeabi_dcmpgt(a: float, b: float) -> int:
    return int(gtdf2(a, b) > 0)