"""Detailed timing descriptor decoding.

A detailed timing descriptor (DTD) is an 18-byte record describing one video
mode. Active and blanking counts are 12-bit values split into an LSB byte and
an MSB nibble sharing a byte with another field; see _layout for the exact
bit positions.
"""

from __future__ import annotations

from dataclasses import dataclass

from ._layout import (
    DTD_SIZE,
    DTD_PIXEL_CLOCK_OFFSET,
    DTD_H_ACTIVE,
    DTD_H_BLANKING,
    DTD_V_ACTIVE,
    DTD_V_BLANKING,
    DTD_H_SYNC_OFFSET,
    DTD_H_SYNC_WIDTH,
    DTD_V_SYNC_OFFSET,
    DTD_V_SYNC_WIDTH,
    DTD_H_IMAGE_SIZE,
    DTD_V_IMAGE_SIZE,
    DTD_H_BORDER,
    DTD_V_BORDER,
    DTD_INTERLACED,
)
from .errors import DegenerateDescriptor
from .record import RecordView

__all__ = [ 'DetailedTiming', 'decode_detailed_timing', 'check_dimensions', 'mode_name' ]


def mode_name(width: int, height: int, interlaced: bool) -> str:
    return f'{width}x{height}{"i" if interlaced else ""}'


@dataclass(frozen=True)
class DetailedTiming:
    pixel_clock: int            # 10 kHz units, 0 = not a timing descriptor
    h_active: int
    h_blanking: int
    v_active: int
    v_blanking: int
    h_sync_offset: int = 0
    h_sync_width: int = 0
    v_sync_offset: int = 0
    v_sync_width: int = 0
    h_image_mm: int = 0
    v_image_mm: int = 0
    h_border: int = 0
    v_border: int = 0
    interlaced: bool = False

    @property
    def width(self) -> int:
        return self.h_active

    @property
    def height(self) -> int:
        return self.v_active

    @property
    def h_total(self) -> int:
        return self.h_active + self.h_blanking

    @property
    def v_total(self) -> int:
        return self.v_active + self.v_blanking

    @property
    def pixel_clock_khz(self) -> int:
        return self.pixel_clock * 10

    @property
    def is_active(self) -> bool:
        return self.pixel_clock != 0

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 1 or self.height <= 1

    @property
    def refresh_hz(self) -> float | None:
        """Refresh rate in Hz, or None if this is not a timing descriptor."""
        total = self.h_total * self.v_total
        if not self.is_active or total == 0:
            return None
        return (self.pixel_clock * 10000.0) / total

    @property
    def name(self) -> str:
        return mode_name(self.width, self.height, self.interlaced)


def decode_detailed_timing(source: RecordView | bytes | bytearray, offset: int = 0) -> DetailedTiming:
    """Decode the descriptor at 'offset' of 'source'.

    Raises OutOfBoundsRead if the 18 bytes do not fit in the source window.
    """
    if not isinstance(source, RecordView):
        source = RecordView(bytes(source))

    dtd = source.view(offset, DTD_SIZE)

    return DetailedTiming(
        pixel_clock=dtd.read_u16le_at(DTD_PIXEL_CLOCK_OFFSET),
        h_active=dtd.read_split_field(DTD_H_ACTIVE),
        h_blanking=dtd.read_split_field(DTD_H_BLANKING),
        v_active=dtd.read_split_field(DTD_V_ACTIVE),
        v_blanking=dtd.read_split_field(DTD_V_BLANKING),
        h_sync_offset=dtd.read_split_field(DTD_H_SYNC_OFFSET),
        h_sync_width=dtd.read_split_field(DTD_H_SYNC_WIDTH),
        v_sync_offset=dtd.read_split_field(DTD_V_SYNC_OFFSET),
        v_sync_width=dtd.read_split_field(DTD_V_SYNC_WIDTH),
        h_image_mm=dtd.read_split_field(DTD_H_IMAGE_SIZE),
        v_image_mm=dtd.read_split_field(DTD_V_IMAGE_SIZE),
        h_border=dtd.read_field(DTD_H_BORDER),
        v_border=dtd.read_field(DTD_V_BORDER),
        interlaced=bool(dtd.read_field(DTD_INTERLACED)),
    )


def check_dimensions(timing: DetailedTiming) -> None:
    """Raise DegenerateDescriptor for padding/unused descriptor slots."""
    if timing.is_degenerate:
        raise DegenerateDescriptor(f'Descriptor {timing.width}x{timing.height} is padding')
