"""ARM EABI memory helpers: copy, move, fill and clear over writable buffers."""

from __future__ import annotations


def _byte_view(buf) -> memoryview:
    return memoryview(buf).cast("B")


def _writable_view(buf) -> memoryview:
    view = _byte_view(buf)
    if view.readonly:
        raise TypeError("destination buffer is read-only")
    return view


def _check_count(n: int, *views: memoryview) -> None:
    if n < 0:
        raise ValueError(f"byte count must not be negative, got {n}")
    for view in views:
        if n > len(view):
            raise ValueError(f"byte count {n} exceeds buffer of {len(view)} bytes")


def aeabi_memcpy(dest, src, n: int) -> None:
    """Copy ``n`` bytes from ``src`` to the start of ``dest``."""
    dst_view = _writable_view(dest)
    src_view = _byte_view(src)
    _check_count(n, dst_view, src_view)
    dst_view[:n] = src_view[:n]


def aeabi_memcpy4(dest, src, n: int) -> None:
    """Copy ``n`` bytes between buffers that are 4-byte aligned."""
    aeabi_memcpy(dest, src, n)


def aeabi_memcpy8(dest, src, n: int) -> None:
    """Copy ``n`` bytes between buffers that are 8-byte aligned."""
    aeabi_memcpy4(dest, src, n)


def aeabi_memmove(dest, src, n: int) -> None:
    """Copy ``n`` bytes from ``src`` to ``dest``; the two may overlap."""
    dst_view = _writable_view(dest)
    src_view = _byte_view(src)
    _check_count(n, dst_view, src_view)
    dst_view[:n] = bytes(src_view[:n])


def aeabi_memmove4(dest, src, n: int) -> None:
    """Overlap-safe copy between 4-byte aligned buffers."""
    aeabi_memmove(dest, src, n)


def aeabi_memmove8(dest, src, n: int) -> None:
    """Overlap-safe copy between 8-byte aligned buffers."""
    aeabi_memmove(dest, src, n)


def aeabi_memset(dest, n: int, c: int) -> None:
    """Fill the first ``n`` bytes of ``dest`` with the low byte of ``c``."""
    dst_view = _writable_view(dest)
    _check_count(n, dst_view)
    dst_view[:n] = bytes((c & 0xFF,)) * n


def aeabi_memset4(dest, n: int, c: int) -> None:
    """Fill a 4-byte aligned buffer with the low byte of ``c``."""
    aeabi_memset(dest, n, c & 0xFF)


def aeabi_memset8(dest, n: int, c: int) -> None:
    """Fill an 8-byte aligned buffer with the low byte of ``c``."""
    aeabi_memset4(dest, n, c)


def aeabi_memclr(dest, n: int) -> None:
    """Zero the first ``n`` bytes of ``dest``."""
    aeabi_memset(dest, n, 0)


def aeabi_memclr4(dest, n: int) -> None:
    """Zero the first ``n`` bytes of a 4-byte aligned buffer."""
    aeabi_memset4(dest, n, 0)


def aeabi_memclr8(dest, n: int) -> None:
    """Zero the first ``n`` bytes of an 8-byte aligned buffer."""
    aeabi_memset4(dest, n, 0)