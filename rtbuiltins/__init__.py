"""Software floating-point arithmetic, comparisons, conversions, memory helpers and emulated atomics."""

__version__ = "0.1.0"

__all__ = [
    "add",
    "atomics",
    "cmp",
    "conv",
    "div",
    "extend",
    "formats",
    "memops",
    "mul",
    "powi",
    "trunc",
]