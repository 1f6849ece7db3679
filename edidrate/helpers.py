"""Bit slicing helpers shared by the decoders and the record builder."""

from __future__ import annotations

def genmask(high: int, low: int) -> int:
    return ((1 << (high + 1)) - 1) & ~((1 << low) - 1)

def get_field_value(byte_val: int, high: int, low: int) -> int:
    mask = genmask(high, low)
    return (byte_val & mask) >> low

def set_field_value(byte_val: int, high: int, low: int, f_val: int) -> int:
    mask = genmask(high, low)
    return (byte_val & ~mask) | ((f_val << low) & mask)

def join_split_value(msb: int, lsb: int, lsb_width: int = 8) -> int:
    """Combine the MSB and LSB parts of a split field, e.g. a 12-bit
    timing value stored as a byte plus a nibble of a shared byte."""
    return (msb << lsb_width) | lsb

def split_value(value: int, lsb_width: int = 8) -> tuple[int, int]:
    """Inverse of join_split_value(), returns (msb, lsb)."""
    return value >> lsb_width, value & genmask(lsb_width - 1, 0)
