"""IEEE-754 binary32/binary64 layout description and bit-level helpers."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

_STRUCT_CODES = {32: ("<f", "<I"), 64: ("<d", "<Q")}
_LAYOUTS = {32: 23, 64: 52}


def leading_zeros(value: int, bits: int) -> int:
    """Count leading zero bits of an unsigned integer of the given width."""
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{value} does not fit in {bits} unsigned bits")
    return bits - value.bit_length()


def round_f32(value: float) -> float:
    """Round a Python float to the nearest binary32 value (overflowing to infinity)."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass(frozen=True)
class FloatFormat:
    """Bit layout of a binary floating-point format."""

    bits: int
    significand_bits: int

    def __post_init__(self) -> None:
        if _LAYOUTS.get(self.bits) != self.significand_bits:
            raise ValueError(
                f"unsupported format: {self.bits} bits with "
                f"{self.significand_bits} significand bits"
            )

    @property
    def int_mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def exponent_bits(self) -> int:
        return self.bits - self.significand_bits - 1

    @property
    def exponent_max(self) -> int:
        return (1 << self.exponent_bits) - 1

    @property
    def exponent_bias(self) -> int:
        return self.exponent_max >> 1

    @property
    def sign_mask(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def significand_mask(self) -> int:
        return (1 << self.significand_bits) - 1

    @property
    def implicit_bit(self) -> int:
        return 1 << self.significand_bits

    @property
    def exponent_mask(self) -> int:
        return self.int_mask & ~(self.sign_mask | self.significand_mask)

    def repr(self, value: float) -> int:
        """Return the raw bit pattern of ``value`` in this format."""
        float_code, int_code = _STRUCT_CODES[self.bits]
        value = float(value)
        if self.bits == 32:
            value = round_f32(value)
        return struct.unpack(int_code, struct.pack(float_code, value))[0]

    def from_repr(self, bits: int) -> float:
        """Return the float whose bit pattern is ``bits``."""
        if not 0 <= bits <= self.int_mask:
            raise ValueError(f"{bits:#x} is not a {self.bits}-bit pattern")
        float_code, int_code = _STRUCT_CODES[self.bits]
        return struct.unpack(float_code, struct.pack(int_code, bits))[0]

    def signed_repr(self, value: float) -> int:
        """Return the bit pattern read as a two's-complement signed integer."""
        rep = self.repr(value)
        return rep - (1 << self.bits) if rep & self.sign_mask else rep

    def eq_repr(self, a: float, b: float) -> bool:
        """Bitwise equality, except that any two NaNs compare equal."""
        if math.isnan(a) and math.isnan(b):
            return True
        return self.repr(a) == self.repr(b)

    def sign(self, value: float) -> bool:
        """True when the sign bit is set."""
        return self.signed_repr(value) < 0

    def exp(self, value: float) -> int:
        """Biased exponent field."""
        return (self.repr(value) & self.exponent_mask) >> self.significand_bits

    def frac(self, value: float) -> int:
        """Significand without the implicit bit."""
        return self.repr(value) & self.significand_mask

    def imp_frac(self, value: float) -> int:
        """Significand with the implicit bit set."""
        return self.frac(value) | self.implicit_bit

    def from_parts(self, sign: bool, exponent: int, significand: int) -> float:
        """Assemble a float from sign, biased exponent and significand bits."""
        return self.from_repr(
            (int(bool(sign)) << (self.bits - 1))
            | ((exponent << self.significand_bits) & self.exponent_mask)
            | (significand & self.significand_mask)
        )

    def normalize(self, significand: int) -> tuple[int, int]:
        """Return (normalized exponent, normalized significand) of a subnormal."""
        shift = leading_zeros(significand, self.bits) - leading_zeros(
            self.implicit_bit, self.bits
        )
        return 1 - shift, (significand << shift) & self.int_mask

    def is_subnormal(self, value: float) -> bool:
        """True when the exponent field is zero (zeros included)."""
        return self.repr(value) & self.exponent_mask == 0


F32 = FloatFormat(32, 23)
F64 = FloatFormat(64, 52)