# rtbuiltins

Software implementations of the low-level runtime helpers that a compiler
relies on when a target has no hardware support: IEEE-754 single and double
precision arithmetic, comparisons, width conversions, integer/float
conversions, ARM EABI memory routines and sub-word atomics emulated on a
word-wide compare-and-exchange.

Arithmetic works on the bit patterns of the values, following
round-to-nearest-even and handling signed zeros, infinities and NaNs.

## Installation

```
pip install rtbuiltins
```

For running the tests:

```
pip install "rtbuiltins[test]"
pytest
```

## Modules

- `rtbuiltins.formats`: `FloatFormat(bits, significand_bits)` describes a
  binary32 or binary64 layout (masks, bias, exponent width) and converts
  between Python floats and raw bit patterns (`repr`, `from_repr`,
  `signed_repr`, `from_parts`, `normalize`, `exp`, `frac`, `imp_frac`,
  `sign`, `is_subnormal`, `eq_repr`). `F32` and `F64` are ready-made
  instances. `leading_zeros(value, bits)` counts leading zero bits and
  `round_f32(value)` rounds a float to single precision.
- `rtbuiltins.add`: `addsf3`, `adddf3`, `subsf3`, `subdf3`, and the generic
  `add(fmt, a, b)`.
- `rtbuiltins.mul`: `mulsf3`, `muldf3`, and the generic `mul(fmt, a, b)`.
- `rtbuiltins.div`: `divsf3`, `divdf3`. Results that would be subnormal are
  flushed to a signed zero.
- `rtbuiltins.powi`: `powisf2`, `powidf2`, and `powi(fmt, a, b)`, raising a
  float to an integer power by repeated squaring.
- `rtbuiltins.cmp`: `compare(fmt, a, b)` returning a `CmpResult`
  (`LESS`, `EQUAL`, `GREATER`, `UNORDERED`, with `to_le_abi` / `to_ge_abi`
  encodings), `unordered(fmt, a, b)`, the integer-returning comparisons
  (`lesf2`, `gesf2`, `eqsf2`, `ltsf2`, `nesf2`, `gtsf2`, `unordsf2` and
  their `df2` counterparts) and the ARM EABI boolean forms
  (`aeabi_fcmple`, `aeabi_fcmpge`, `aeabi_fcmpeq`, `aeabi_fcmplt`,
  `aeabi_fcmpgt` and the `aeabi_dcmp*` counterparts).
- `rtbuiltins.extend` / `rtbuiltins.trunc`: `extendsfdf2` and `truncdfsf2`,
  plus generic `extend(src, dst, a)` and `trunc(src, dst, a)`, which raise
  `ValueError` when the formats are in the wrong order.
- `rtbuiltins.conv`: integer to float (`floatsisf`, `floatsidf`,
  `floatdisf`, `floatdidf`, `floattisf`, `floattidf` and the unsigned
  `floatun*` forms), the underlying `u32_to_f32_bits` ... `u128_to_f64_bits`
  bit-pattern functions, and saturating float to integer (`fixsfsi`,
  `fixsfdi`, `fixsfti`, `fixdfsi`, `fixdfdi`, `fixdfti` and the unsigned
  `fixuns*` forms). NaN converts to 0; integers that do not fit the stated
  width raise `ValueError`.
- `rtbuiltins.memops`: `aeabi_memcpy`, `aeabi_memmove`, `aeabi_memset`,
  `aeabi_memclr` and their 4- and 8-byte variants, operating in place on any
  writable buffer such as a `bytearray`. A negative or oversized byte count
  raises `ValueError`; a read-only destination raises `TypeError`.
- `rtbuiltins.atomics`: `AtomicMemory(initial, big_endian=False)` holds a
  byte buffer whose size is a multiple of 4 and offers `load_word`,
  `compare_exchange_word`, `fetch_and_op`, `op_and_fetch`,
  `val_compare_and_swap`, `lock_test_and_set` and `synchronize` for 1-, 2-
  and 4-byte elements, all built on the word compare-exchange. `AtomicOp`
  names the operations (`ADD`, `SUB`, `AND`, `OR`, `XOR`, `NAND`, `MAX`,
  `MIN`, `UMAX`, `UMIN`); `MAX` and `MIN` treat values as signed, and
  `op_and_fetch` accepts only the arithmetic and bitwise operations. The
  helpers `align_address`, `shift_mask`, `extract_aligned` and
  `insert_aligned` locate an element within its word.

## Example

```python
from rtbuiltins.add import adddf3
from rtbuiltins.atomics import AtomicMemory, AtomicOp
from rtbuiltins.cmp import ltdf2
from rtbuiltins.conv import fixdfsi, floatsidf

assert adddf3(0.1, 0.2) == 0.1 + 0.2
assert ltdf2(1.0, 2.0) == -1
assert fixdfsi(1e12) == 2**31 - 1   # saturates
assert floatsidf(-7) == -7.0

mem = AtomicMemory(bytes(8))
assert mem.fetch_and_op(1, 1, AtomicOp.ADD, 5) == 0
assert mem.op_and_fetch(1, 1, AtomicOp.ADD, 5) == 10
```

Single-precision functions take and return Python floats; inputs are rounded
to single precision on entry, and results are values representable as 32-bit
floats.

## What it does not do

This is a library only: there is no command-line tool. It computes results
in Python and does not install or link anything into a compiled program.
Floating-point exception flags and rounding modes other than
round-to-nearest-even are not modelled.