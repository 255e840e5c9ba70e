"""Sub-word atomic operations built on a word-sized compare-and-exchange primitive."""

from __future__ import annotations

import enum
import threading
from typing import Callable

_MASKS = {1: 0xFF, 2: 0xFFFF, 4: 0xFFFFFFFF}


def _mask_for(size: int) -> int:
    try:
        return _MASKS[size]
    except KeyError:
        raise ValueError(f"unsupported operand size {size}; expected 1, 2 or 4") from None


def align_address(address: int, size: int) -> int:
    """Round ``address`` down to the word holding an element of ``size`` bytes."""
    _mask_for(size)
    ptr_mask = 3 & (4 - size)
    return address & ~ptr_mask


def shift_mask(address: int, size: int, big_endian: bool = False) -> tuple[int, int]:
    """Return (shift, mask) locating an element of ``size`` bytes within its word."""
    mask = _mask_for(size)
    endian_adjust = 4 - size if big_endian else 0
    ptr_mask = 3 & (4 - size)
    shift = ((address & ptr_mask) ^ endian_adjust) * 8
    return shift, mask


def extract_aligned(aligned: int, shift: int, mask: int) -> int:
    """Pull a value out of an aligned word."""
    return (aligned >> shift) & mask


def insert_aligned(aligned: int, val: int, shift: int, mask: int) -> int:
    """Put ``val`` into an aligned word, leaving the other bits alone."""
    return ((aligned & ~(mask << shift)) | ((val & mask) << shift)) & 0xFFFFFFFF


def _to_signed(value: int, mask: int) -> int:
    top = (mask + 1) >> 1
    return value - (mask + 1) if value & top else value


class AtomicOp(enum.Enum):
    """Read-modify-write operations on a memory element."""

    ADD = "add"
    SUB = "sub"
    AND = "and"
    OR = "or"
    XOR = "xor"
    NAND = "nand"
    MAX = "max"
    MIN = "min"
    UMAX = "umax"
    UMIN = "umin"

    @property
    def is_signed(self) -> bool:
        return self in (AtomicOp.MAX, AtomicOp.MIN)

    def apply(self, current: int, operand: int, mask: int) -> int:
        """Combine two element bit patterns, returning the new bit pattern."""
        if self is AtomicOp.ADD:
            result = current + operand
        elif self is AtomicOp.SUB:
            result = current - operand
        elif self is AtomicOp.AND:
            result = current & operand
        elif self is AtomicOp.OR:
            result = current | operand
        elif self is AtomicOp.XOR:
            result = current ^ operand
        elif self is AtomicOp.NAND:
            result = ~(current & operand)
        elif self is AtomicOp.UMAX:
            result = max(current, operand)
        elif self is AtomicOp.UMIN:
            result = min(current, operand)
        else:
            a, b = _to_signed(current, mask), _to_signed(operand, mask)
            result = max(a, b) if self is AtomicOp.MAX else min(a, b)
        return result & mask


_OP_AND_FETCH = frozenset(
    {AtomicOp.ADD, AtomicOp.SUB, AtomicOp.AND, AtomicOp.OR, AtomicOp.XOR, AtomicOp.NAND}
)


def _operand(value: int, size: int, signed: bool) -> int:
    mask = _mask_for(size)
    bits = size * 8
    low, high = (-(1 << (bits - 1)), 1 << (bits - 1)) if signed else (0, 1 << bits)
    if not low <= value < high:
        kind = "signed" if signed else "unsigned"
        raise ValueError(f"{value} does not fit in {bits} {kind} bits")
    return value & mask


class AtomicMemory:
    """Byte-addressed memory whose only atomic primitive is a word compare-exchange."""

    def __init__(self, initial, big_endian: bool = False) -> None:
        self.memory = bytearray(initial)
        if len(self.memory) % 4:
            raise ValueError("memory size must be a multiple of 4 bytes")
        self.big_endian = big_endian
        self._lock = threading.Lock()

    @property
    def _byteorder(self) -> str:
        return "big" if self.big_endian else "little"

    def _check_address(self, address: int, size: int) -> None:
        _mask_for(size)
        if address % size:
            raise ValueError(f"address {address:#x} is not aligned to {size} bytes")
        if not 0 <= address <= len(self.memory) - size:
            raise IndexError(f"address {address:#x} is outside memory")

    def load_word(self, address: int) -> int:
        """Read the aligned 32-bit word at ``address``."""
        self._check_address(address, 4)
        return int.from_bytes(self.memory[address : address + 4], self._byteorder)

    def compare_exchange_word(self, address: int, oldval: int, newval: int) -> bool:
        """Store ``newval`` at ``address`` if it holds ``oldval``; report success."""
        self._check_address(address, 4)
        oldval = _operand(oldval, 4, False)
        newval = _operand(newval, 4, False)
        with self._lock:
            current = int.from_bytes(self.memory[address : address + 4], self._byteorder)
            if current != oldval:
                return False
            self.memory[address : address + 4] = newval.to_bytes(4, self._byteorder)
            return True

    def _rmw(self, address: int, size: int, update: Callable[[int], int]) -> tuple[int, int]:
        self._check_address(address, size)
        aligned_address = align_address(address, size)
        shift, mask = shift_mask(address, size, self.big_endian)
        while True:
            current_word = self.load_word(aligned_address)
            current = extract_aligned(current_word, shift, mask)
            new = update(current) & mask
            new_word = insert_aligned(current_word, new, shift, mask)
            if self.compare_exchange_word(aligned_address, current_word, new_word):
                return current, new

    def fetch_and_op(self, address: int, size: int, op: AtomicOp, value: int) -> int:
        """Apply ``op`` atomically and return the element's previous value."""
        operand = _operand(value, size, op.is_signed)
        mask = _mask_for(size)
        old, _ = self._rmw(address, size, lambda cur: op.apply(cur, operand, mask))
        return _to_signed(old, mask) if op.is_signed else old

    def op_and_fetch(self, address: int, size: int, op: AtomicOp, value: int) -> int:
        """Apply ``op`` atomically and return the element's new value."""
        if op not in _OP_AND_FETCH:
            raise ValueError(f"{op.value} has no op-and-fetch form")
        operand = _operand(value, size, False)
        mask = _mask_for(size)
        _, new = self._rmw(address, size, lambda cur: op.apply(cur, operand, mask))
        return new

    def val_compare_and_swap(self, address: int, size: int, oldval: int, newval: int) -> int:
        """Store ``newval`` if the element equals ``oldval``; return the value seen."""
        oldval = _operand(oldval, size, False)
        newval = _operand(newval, size, False)
        self._check_address(address, size)
        aligned_address = align_address(address, size)
        shift, mask = shift_mask(address, size, self.big_endian)
        while True:
            current_word = self.load_word(aligned_address)
            current = extract_aligned(current_word, shift, mask)
            if current != oldval:
                return current
            new_word = insert_aligned(current_word, newval, shift, mask)
            if self.compare_exchange_word(aligned_address, current_word, new_word):
                return oldval

    def lock_test_and_set(self, address: int, size: int, value: int) -> int:
        """Store ``value`` atomically and return the previous value."""
        operand = _operand(value, size, False)
        old, _ = self._rmw(address, size, lambda _cur: operand)
        return old

    def synchronize(self) -> None:
        """Full memory barrier."""
        with self._lock:
            pass