"""
EDID + CTA extension record layout definitions.

This module defines the byte offsets and bit positions used to decode the
512-byte record: a 128-byte EDID base block followed by three 128-byte
extension slots. Multi-byte values are little-endian unless noted.
"""

from __future__ import annotations

from typing import NamedTuple


class BitField(NamedTuple):
    """A bit range inside one byte."""
    offset: int     # Byte offset relative to the containing structure
    high: int       # High bit position (MSB, inclusive)
    low: int        # Low bit position (LSB, inclusive)

    @property
    def width(self) -> int:
        return self.high - self.low + 1


class SplitField(NamedTuple):
    """A value stored as an LSB part and an MSB part in different bytes."""
    lsb: BitField
    msb: BitField


def _byte(offset: int) -> BitField:
    return BitField(offset, 7, 0)


EDID_RECORD_SIZE = 0x200
EDID_BLOCK_SIZE = 0x80
EDID_MAGIC = bytes((0x00, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0x00))

# Base block
MAGIC_OFFSET = 0x00
MANUFACTURER_ID_OFFSET = 0x08               # Big-endian, three 5-bit letters (1 = 'A')
PRODUCT_CODE_OFFSET = 0x0A
SERIAL_NUMBER_OFFSET = 0x0C                 # u32
MANUFACTURE_WEEK_OFFSET = 0x10
MANUFACTURE_YEAR_OFFSET = 0x11              # Real value is val + 1990
EDID_VERSION_OFFSET = 0x12
EDID_REVISION_OFFSET = 0x13
BASE_DTD_OFFSET = 0x36
BASE_DTD_COUNT = 2
EXTENSION_COUNT_OFFSET = 0x7E
CHECKSUM_OFFSET = 0x7F

MANUFACTURE_YEAR_BASE = 1990

# Extension slots, searched in this order. The second and third are the
# spare 'data2' and 'data3' slots.
EXTENSION_SLOT_OFFSETS = (0x80, 0x100, 0x180)

# CTA extension header, relative to the start of the extension
CTA_EXTENSION_TAG = 0x02
CTA_TAG_OFFSET = 0x00
CTA_REVISION_OFFSET = 0x01
CTA_DTD_START_OFFSET = 0x02
CTA_NATIVE_DTD_COUNT = BitField(0x03, 3, 0)
CTA_SUPPORT_FLAGS = BitField(0x03, 7, 4)    # underscan, basic audio, YCbCr 4:4:4, YCbCr 4:2:2
CTA_DATA_BLOCK_OFFSET = 0x04
CTA_MAX_DTD_COUNT = 5

# Data block header byte
DATA_BLOCK_SIZE = BitField(0x00, 4, 0)
DATA_BLOCK_TYPE = BitField(0x00, 7, 5)

# Short video descriptor byte
SVD_VIC = BitField(0x00, 6, 0)
SVD_NATIVE = BitField(0x00, 7, 7)
SVD_MAX_NATIVE_VIC = 64

# Detailed timing descriptor, relative to the start of the descriptor
DTD_SIZE = 18
DTD_PIXEL_CLOCK_OFFSET = 0x00               # u16, 10 kHz units

DTD_H_ACTIVE = SplitField(_byte(0x02), BitField(0x04, 7, 4))
DTD_H_BLANKING = SplitField(_byte(0x03), BitField(0x04, 3, 0))
DTD_V_ACTIVE = SplitField(_byte(0x05), BitField(0x07, 7, 4))
DTD_V_BLANKING = SplitField(_byte(0x06), BitField(0x07, 3, 0))
DTD_H_SYNC_OFFSET = SplitField(_byte(0x08), BitField(0x0B, 7, 6))
DTD_H_SYNC_WIDTH = SplitField(_byte(0x09), BitField(0x0B, 5, 4))
DTD_V_SYNC_OFFSET = SplitField(BitField(0x0A, 7, 4), BitField(0x0B, 3, 2))
DTD_V_SYNC_WIDTH = SplitField(BitField(0x0A, 3, 0), BitField(0x0B, 1, 0))
DTD_H_IMAGE_SIZE = SplitField(_byte(0x0C), BitField(0x0E, 7, 4))
DTD_V_IMAGE_SIZE = SplitField(_byte(0x0D), BitField(0x0E, 3, 0))
DTD_H_BORDER = _byte(0x0F)
DTD_V_BORDER = _byte(0x10)
DTD_SYNC_FLAGS = BitField(0x11, 4, 1)
DTD_STEREO = BitField(0x11, 6, 5)
DTD_INTERLACED = BitField(0x11, 7, 7)
