from __future__ import annotations

from ._layout import (
    BitField,
    SplitField,
    EDID_RECORD_SIZE,
    EDID_BLOCK_SIZE,
    MAGIC_OFFSET,
    MANUFACTURER_ID_OFFSET,
    PRODUCT_CODE_OFFSET,
    SERIAL_NUMBER_OFFSET,
    MANUFACTURE_WEEK_OFFSET,
    MANUFACTURE_YEAR_OFFSET,
    MANUFACTURE_YEAR_BASE,
    EDID_VERSION_OFFSET,
    EDID_REVISION_OFFSET,
    BASE_DTD_OFFSET,
    EXTENSION_COUNT_OFFSET,
    EXTENSION_SLOT_OFFSETS,
    CTA_TAG_OFFSET,
    CTA_REVISION_OFFSET,
    CTA_DTD_START_OFFSET,
    CTA_NATIVE_DTD_COUNT,
    CTA_SUPPORT_FLAGS,
    CTA_DATA_BLOCK_OFFSET,
    DATA_BLOCK_SIZE,
    DATA_BLOCK_TYPE,
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
    DTD_SYNC_FLAGS,
    DTD_INTERLACED,
)
from .helpers import set_field_value, split_value


def _put_field(buf: bytearray, base: int, field: BitField, value: int) -> None:
    pos = base + field.offset
    buf[pos] = set_field_value(buf[pos], field.high, field.low, value)


def _put_split(buf: bytearray, base: int, field: SplitField, value: int) -> None:
    msb, lsb = split_value(value, field.lsb.width)
    _put_field(buf, base, field.lsb, lsb)
    _put_field(buf, base, field.msb, msb)


def _put_checksum(buf: bytearray, base: int) -> None:
    # All 128 bytes of a block sum to 0 mod 256
    checksum_pos = base + EDID_BLOCK_SIZE - 1
    buf[checksum_pos] = -sum(buf[base:checksum_pos]) & 0xFF


class EdidPacker:
    def __init__(self, edid):
        self.edid = edid

    @staticmethod
    def pack_detailed_timing(timing) -> bytes:
        buf = bytearray(DTD_SIZE)

        buf[DTD_PIXEL_CLOCK_OFFSET:DTD_PIXEL_CLOCK_OFFSET + 2] = timing.pixel_clock.to_bytes(2, 'little')

        _put_split(buf, 0, DTD_H_ACTIVE, timing.width)
        _put_split(buf, 0, DTD_H_BLANKING, timing.h_blanking)
        _put_split(buf, 0, DTD_V_ACTIVE, timing.height)
        _put_split(buf, 0, DTD_V_BLANKING, timing.v_blanking)
        _put_split(buf, 0, DTD_H_SYNC_OFFSET, timing.h_sync_offset)
        _put_split(buf, 0, DTD_H_SYNC_WIDTH, timing.h_sync_width)
        _put_split(buf, 0, DTD_V_SYNC_OFFSET, timing.v_sync_offset)
        _put_split(buf, 0, DTD_V_SYNC_WIDTH, timing.v_sync_width)
        _put_split(buf, 0, DTD_H_IMAGE_SIZE, timing.h_image_mm)
        _put_split(buf, 0, DTD_V_IMAGE_SIZE, timing.v_image_mm)
        _put_field(buf, 0, DTD_H_BORDER, timing.h_border)
        _put_field(buf, 0, DTD_V_BORDER, timing.v_border)
        _put_field(buf, 0, DTD_SYNC_FLAGS, timing.sync_flags)
        _put_field(buf, 0, DTD_INTERLACED, int(timing.interlaced))

        return bytes(buf)

    @staticmethod
    def pack_extension(ext) -> bytes:
        buf = bytearray(EDID_BLOCK_SIZE)

        buf[CTA_TAG_OFFSET] = ext.tag
        buf[CTA_REVISION_OFFSET] = ext.revision
        buf[CTA_DTD_START_OFFSET] = ext.dtd_start
        _put_field(buf, 0, CTA_NATIVE_DTD_COUNT, ext.native_dtd_count)
        _put_field(buf, 0, CTA_SUPPORT_FLAGS, ext.support_flags)

        offset = CTA_DATA_BLOCK_OFFSET
        for block in ext.data_blocks:
            _put_field(buf, offset, DATA_BLOCK_SIZE, len(block.payload))
            _put_field(buf, offset, DATA_BLOCK_TYPE, block.block_type)
            buf[offset + 1:offset + block.packed_size] = block.payload
            offset += block.packed_size

        for idx, timing in enumerate(ext.timings):
            pos = ext.dtd_start + DTD_SIZE * idx
            buf[pos:pos + DTD_SIZE] = EdidPacker.pack_detailed_timing(timing)

        _put_checksum(buf, 0)

        return bytes(buf)

    def _pack_base(self, buf: bytearray) -> None:
        edid = self.edid

        buf[MAGIC_OFFSET:MAGIC_OFFSET + len(edid.magic)] = edid.magic

        code = 0
        for c in edid.manufacturer_id:
            code = (code << 5) | (ord(c) - ord('@'))
        buf[MANUFACTURER_ID_OFFSET:MANUFACTURER_ID_OFFSET + 2] = code.to_bytes(2, 'big')

        buf[PRODUCT_CODE_OFFSET:PRODUCT_CODE_OFFSET + 2] = edid.product_code.to_bytes(2, 'little')
        buf[SERIAL_NUMBER_OFFSET:SERIAL_NUMBER_OFFSET + 4] = edid.serial_number.to_bytes(4, 'little')
        buf[MANUFACTURE_WEEK_OFFSET] = edid.manufacture_week
        buf[MANUFACTURE_YEAR_OFFSET] = edid.manufacture_year - MANUFACTURE_YEAR_BASE
        buf[EDID_VERSION_OFFSET], buf[EDID_REVISION_OFFSET] = edid.version

        for idx, timing in enumerate(edid.timings):
            pos = BASE_DTD_OFFSET + DTD_SIZE * idx
            buf[pos:pos + DTD_SIZE] = self.pack_detailed_timing(timing)

        buf[EXTENSION_COUNT_OFFSET] = edid.extension_count

        _put_checksum(buf, 0)

    def pack(self) -> bytes:
        buf = bytearray(EDID_RECORD_SIZE)

        self._pack_base(buf)

        for idx, ext in enumerate(self.edid.extensions):
            if ext is None:
                continue

            base = EXTENSION_SLOT_OFFSETS[idx]
            data = ext if isinstance(ext, (bytes, bytearray)) else self.pack_extension(ext)
            buf[base:base + EDID_BLOCK_SIZE] = data

        return bytes(buf)
