from __future__ import annotations

import os
from typing import BinaryIO

from ._layout import (
    BitField,
    SplitField,
    EDID_RECORD_SIZE,
    EDID_BLOCK_SIZE,
    EDID_MAGIC,
    MAGIC_OFFSET,
    MANUFACTURER_ID_OFFSET,
    PRODUCT_CODE_OFFSET,
    SERIAL_NUMBER_OFFSET,
    MANUFACTURE_WEEK_OFFSET,
    MANUFACTURE_YEAR_OFFSET,
    MANUFACTURE_YEAR_BASE,
    EDID_VERSION_OFFSET,
    EDID_REVISION_OFFSET,
    EXTENSION_COUNT_OFFSET,
    EXTENSION_SLOT_OFFSETS,
)
from .errors import MagicMismatch, OutOfBoundsRead, RecordSizeError
from .helpers import get_field_value, join_split_value

__all__ = [ 'RecordView', 'EdidRecord' ]


class RecordView:
    """Read-only window into a byte buffer.

    Offsets passed to the accessors are relative to the start of the window
    and are checked against its size, so a view over one extension slot can
    never read into the neighbouring slot.
    """

    def __init__(self, data: bytes, base: int = 0, size: int | None = None) -> None:
        if size is None:
            size = len(data) - base

        if base < 0 or size < 0 or base + size > len(data):
            raise OutOfBoundsRead(f'View 0x{base:x}+0x{size:x} exceeds buffer of 0x{len(data):x} bytes')

        self._data = data
        self.base = base
        self.size = size

    def _check(self, offset: int, length: int) -> int:
        if offset < 0 or offset + length > self.size:
            raise OutOfBoundsRead(
                f'Read of {length} byte(s) at offset 0x{offset:x} is outside '
                f'window 0x{self.base:x}-0x{self.base + self.size:x}'
            )
        return self.base + offset

    def read_u8_at(self, offset: int) -> int:
        return self._data[self._check(offset, 1)]

    def read_u16le_at(self, offset: int) -> int:
        pos = self._check(offset, 2)
        return int.from_bytes(self._data[pos:pos + 2], 'little')

    def read_u16be_at(self, offset: int) -> int:
        pos = self._check(offset, 2)
        return int.from_bytes(self._data[pos:pos + 2], 'big')

    def read_u32le_at(self, offset: int) -> int:
        pos = self._check(offset, 4)
        return int.from_bytes(self._data[pos:pos + 4], 'little')

    def read_bitfield(self, offset: int, high: int, low: int) -> int:
        return get_field_value(self.read_u8_at(offset), high, low)

    def read_field(self, field: BitField) -> int:
        return self.read_bitfield(field.offset, field.high, field.low)

    def read_split_field(self, field: SplitField) -> int:
        return join_split_value(self.read_field(field.msb), self.read_field(field.lsb), field.lsb.width)

    def read_bytes(self, offset: int, length: int) -> bytes:
        pos = self._check(offset, length)
        return self._data[pos:pos + length]

    def view(self, offset: int, size: int) -> RecordView:
        """Return a sub-window starting at 'offset' of this window."""
        pos = self._check(offset, size)
        return RecordView(self._data, pos, size)

    def __len__(self):
        return self.size

    def __bytes__(self):
        return self._data[self.base:self.base + self.size]


def _read_padded(f: BinaryIO) -> bytes:
    # Short files are zero filled, anything past the record is ignored
    data = f.read(EDID_RECORD_SIZE)
    return data.ljust(EDID_RECORD_SIZE, b'\0')


class EdidRecord(RecordView):
    """A 512-byte EDID record: base block plus three extension slots."""

    SIZE = EDID_RECORD_SIZE
    MAGIC = EDID_MAGIC

    def __init__(self, source: str | os.PathLike | bytes | bytearray | memoryview | BinaryIO) -> None:
        if isinstance(source, (str, os.PathLike)):
            with open(source, 'rb') as f:
                data = _read_padded(f)
        elif isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
            if len(data) != EDID_RECORD_SIZE:
                raise RecordSizeError(f'EDID record must be {EDID_RECORD_SIZE} bytes, got {len(data)}')
        elif hasattr(source, 'read'):
            data = _read_padded(source)
        else:
            raise TypeError(f'Unsupported source type: {type(source)}')

        super().__init__(data)

    @classmethod
    def padded(cls, data: bytes | bytearray | memoryview) -> EdidRecord:
        """Create a record from a possibly short buffer, zero filling the rest."""
        return cls(bytes(data[:EDID_RECORD_SIZE]).ljust(EDID_RECORD_SIZE, b'\0'))

    @property
    def magic(self) -> bytes:
        return self.read_bytes(MAGIC_OFFSET, len(EDID_MAGIC))

    @property
    def has_valid_magic(self) -> bool:
        return self.magic == EDID_MAGIC

    def check_magic(self) -> None:
        if not self.has_valid_magic:
            raise MagicMismatch(f'Bad EDID header pattern: {self.magic.hex(" ")}')

    @property
    def manufacturer_id(self) -> str:
        """Three letter PNP ID, stored big-endian as 5-bit values (1 = 'A')."""
        code = self.read_u16be_at(MANUFACTURER_ID_OFFSET)
        return ''.join(chr(ord('@') + get_field_value(code, high, high - 4)) for high in (14, 9, 4))

    @property
    def product_code(self) -> int:
        return self.read_u16le_at(PRODUCT_CODE_OFFSET)

    @property
    def serial_number(self) -> int:
        return self.read_u32le_at(SERIAL_NUMBER_OFFSET)

    @property
    def manufacture_week(self) -> int:
        return self.read_u8_at(MANUFACTURE_WEEK_OFFSET)

    @property
    def manufacture_year(self) -> int:
        return self.read_u8_at(MANUFACTURE_YEAR_OFFSET) + MANUFACTURE_YEAR_BASE

    @property
    def version(self) -> tuple[int, int]:
        return self.read_u8_at(EDID_VERSION_OFFSET), self.read_u8_at(EDID_REVISION_OFFSET)

    @property
    def extension_count(self) -> int:
        return self.read_u8_at(EXTENSION_COUNT_OFFSET)

    @property
    def num_slots(self) -> int:
        return len(EXTENSION_SLOT_OFFSETS)

    def slot(self, idx: int) -> RecordView:
        """Return the 128-byte window of extension slot 'idx' (0, 1 or 2)."""
        if not 0 <= idx < len(EXTENSION_SLOT_OFFSETS):
            raise IndexError(f'Extension slot {idx} out of range')
        return self.view(EXTENSION_SLOT_OFFSETS[idx], EDID_BLOCK_SIZE)
