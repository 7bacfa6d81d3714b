"""Bit-level formatting of 32-bit values."""

from __future__ import annotations

_UINT32_MASK = 0xFFFFFFFF


def uint32_to_binstr(value: int) -> str:
    """Render ``value`` as ``0b`` followed by all 32 bits, most significant first."""
    return "0b" + format(value & _UINT32_MASK, "032b")