from __future__ import annotations

import io
from typing import Sequence

from ._layout import (
    EDID_BLOCK_SIZE,
    EDID_MAGIC,
    CTA_EXTENSION_TAG,
    CTA_DATA_BLOCK_OFFSET,
    CTA_MAX_DTD_COUNT,
    BASE_DTD_COUNT,
    DTD_SIZE,
    EXTENSION_SLOT_OFFSETS,
    MANUFACTURE_YEAR_BASE,
    SVD_MAX_NATIVE_VIC,
)
from ._packer import EdidPacker
from .enums import BlockType


# Custom exception classes for validation errors
class EdidGenValidationError(ValueError):
    """Base class for EDID generation validation errors."""
    pass


class TimingValidationError(EdidGenValidationError):
    """Raised when a detailed timing definition is invalid."""
    pass


class DataBlockValidationError(EdidGenValidationError):
    """Raised when a CTA data block definition is invalid."""
    pass


class ExtensionValidationError(EdidGenValidationError):
    """Raised when a CTA extension definition is invalid."""
    pass


class EdidValidationError(EdidGenValidationError):
    """Raised when an EDID record definition is invalid."""
    pass


def _check_uint(error: type[EdidGenValidationError], what: str, name: str, value: int, bits: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise error(f"{what}: {name} must be an integer, got {type(value).__name__}")

    max_value = (1 << bits) - 1
    if not 0 <= value <= max_value:
        raise error(f"{what}: {name} must be in range 0-{max_value}, got {value}")


class UnpackedDetailedTiming:
    # field name -> width in bits
    _FIELD_BITS = {
        'width': 12,
        'height': 12,
        'h_blanking': 12,
        'v_blanking': 12,
        'pixel_clock': 16,
        'h_sync_offset': 10,
        'h_sync_width': 10,
        'v_sync_offset': 6,
        'v_sync_width': 6,
        'h_image_mm': 12,
        'v_image_mm': 12,
        'h_border': 8,
        'v_border': 8,
        'sync_flags': 4,
    }

    def __init__(self, width: int, height: int, h_blanking: int, v_blanking: int, pixel_clock: int,
                 interlaced: bool = False, h_sync_offset: int = 0, h_sync_width: int = 0,
                 v_sync_offset: int = 0, v_sync_width: int = 0, h_image_mm: int = 0, v_image_mm: int = 0,
                 h_border: int = 0, v_border: int = 0, sync_flags: int = 0xF) -> None:
        self.width = width
        self.height = height
        self.h_blanking = h_blanking
        self.v_blanking = v_blanking
        self.pixel_clock = pixel_clock
        self.interlaced = interlaced
        self.h_sync_offset = h_sync_offset
        self.h_sync_width = h_sync_width
        self.v_sync_offset = v_sync_offset
        self.v_sync_width = v_sync_width
        self.h_image_mm = h_image_mm
        self.v_image_mm = v_image_mm
        self.h_border = h_border
        self.v_border = v_border
        self.sync_flags = sync_flags
        self._validate_inputs()

    def _validate_inputs(self) -> None:
        """Validate timing inputs and raise descriptive errors."""
        what = f'Timing {self.width}x{self.height}'

        for name, bits in self._FIELD_BITS.items():
            _check_uint(TimingValidationError, what, name, getattr(self, name), bits)

        if not isinstance(self.interlaced, bool):
            raise TimingValidationError(f"{what}: interlaced must be a bool, got {type(self.interlaced).__name__}")

        if self.h_sync_offset + self.h_sync_width > self.h_blanking:
            raise TimingValidationError(
                f"{what}: horizontal sync ({self.h_sync_offset} + {self.h_sync_width}) exceeds blanking ({self.h_blanking})"
            )

        if self.v_sync_offset + self.v_sync_width > self.v_blanking:
            raise TimingValidationError(
                f"{what}: vertical sync ({self.v_sync_offset} + {self.v_sync_width}) exceeds blanking ({self.v_blanking})"
            )

    def pack(self) -> bytes:
        return EdidPacker.pack_detailed_timing(self)


class UnpackedDataBlock:
    MAX_PAYLOAD = 0x1F

    def __init__(self, block_type: BlockType | int, payload: bytes = b'') -> None:
        self._validate_inputs(block_type, payload)
        self.block_type = block_type.value if isinstance(block_type, BlockType) else block_type
        self.payload = bytes(payload)

    def _validate_inputs(self, block_type: BlockType | int, payload: bytes) -> None:
        """Validate data block inputs and raise descriptive errors."""
        if not isinstance(block_type, BlockType):
            _check_uint(DataBlockValidationError, 'Data block', 'block_type', block_type, 3)

        if not isinstance(payload, (bytes, bytearray)):
            raise DataBlockValidationError(f"Data block: payload must be bytes, got {type(payload).__name__}")

        if len(payload) > self.MAX_PAYLOAD:
            raise DataBlockValidationError(
                f"Data block: payload of {len(payload)} bytes exceeds maximum ({self.MAX_PAYLOAD})"
            )

    @property
    def packed_size(self) -> int:
        return 1 + len(self.payload)


class UnpackedVideoBlock(UnpackedDataBlock):
    """Video Data Block built from VICs.

    Each entry is either a raw SVD byte or a (vic, native) tuple. The native
    flag can only be set for VICs 1-64.
    """

    def __init__(self, svds: Sequence[int | tuple[int, bool]]) -> None:
        payload = bytes(self._encode_svd(svd) for svd in svds)
        super().__init__(BlockType.Video, payload)

    @staticmethod
    def _encode_svd(svd: int | tuple[int, bool]) -> int:
        if isinstance(svd, tuple):
            vic, native = svd
        else:
            vic, native = svd, False

        _check_uint(DataBlockValidationError, 'Video block', 'SVD', vic, 8)

        if native:
            if vic > SVD_MAX_NATIVE_VIC:
                raise DataBlockValidationError(f"Video block: VIC {vic} cannot carry the native flag")
            return vic | 0x80

        return vic


class UnpackedCtaExtension:
    def __init__(self, data_blocks: Sequence[UnpackedDataBlock] = (),
                 timings: Sequence[UnpackedDetailedTiming] = (), revision: int = 3,
                 native_dtd_count: int = 0, support_flags: int = 0, dtd_start: int | None = None,
                 tag: int = CTA_EXTENSION_TAG) -> None:
        self.data_blocks = list(data_blocks)
        self.timings = list(timings)
        self.revision = revision
        self.native_dtd_count = native_dtd_count
        self.support_flags = support_flags
        self.tag = tag

        self.data_blocks_end = CTA_DATA_BLOCK_OFFSET + sum(b.packed_size for b in self.data_blocks)
        self.dtd_start = self.data_blocks_end if dtd_start is None else dtd_start

        self._validate_inputs()

    def _validate_inputs(self) -> None:
        """Validate extension inputs and raise descriptive errors."""
        what = 'CTA extension'

        _check_uint(ExtensionValidationError, what, 'tag', self.tag, 8)
        _check_uint(ExtensionValidationError, what, 'revision', self.revision, 8)
        _check_uint(ExtensionValidationError, what, 'dtd_start', self.dtd_start, 8)
        _check_uint(ExtensionValidationError, what, 'native_dtd_count', self.native_dtd_count, 4)
        _check_uint(ExtensionValidationError, what, 'support_flags', self.support_flags, 4)

        for b in self.data_blocks:
            if not isinstance(b, UnpackedDataBlock):
                raise ExtensionValidationError(f"{what}: data blocks must be UnpackedDataBlock, got {type(b).__name__}")

        for t in self.timings:
            if not isinstance(t, UnpackedDetailedTiming):
                raise ExtensionValidationError(f"{what}: timings must be UnpackedDetailedTiming, got {type(t).__name__}")

        if len(self.timings) > CTA_MAX_DTD_COUNT:
            raise ExtensionValidationError(f"{what}: {len(self.timings)} timings exceeds maximum ({CTA_MAX_DTD_COUNT})")

        # The last byte of the block is the checksum
        if self.data_blocks_end > EDID_BLOCK_SIZE - 1:
            raise ExtensionValidationError(f"{what}: data blocks end at 0x{self.data_blocks_end:x}, past the block")

        if self.timings:
            if self.dtd_start < self.data_blocks_end:
                raise ExtensionValidationError(
                    f"{what}: dtd_start 0x{self.dtd_start:x} overlaps data blocks ending at 0x{self.data_blocks_end:x}"
                )

            timings_end = self.dtd_start + DTD_SIZE * len(self.timings)
            if timings_end > EDID_BLOCK_SIZE - 1:
                raise ExtensionValidationError(f"{what}: timings end at 0x{timings_end:x}, past the block")

    def pack(self) -> bytes:
        return EdidPacker.pack_extension(self)


class UnpackedEdid:
    def __init__(self, timings: Sequence[UnpackedDetailedTiming] = (),
                 extensions: Sequence[UnpackedCtaExtension | bytes | None] = (),
                 extension_count: int | None = None, manufacturer_id: str = 'EDR', product_code: int = 0,
                 serial_number: int = 0, manufacture_week: int = 0, manufacture_year: int = 2020,
                 version: tuple[int, int] = (1, 3), magic: bytes = EDID_MAGIC) -> None:
        self.timings = list(timings)
        self.extensions = list(extensions)
        self.extension_count = (sum(1 for e in self.extensions if e is not None)
                                if extension_count is None else extension_count)
        self.manufacturer_id = manufacturer_id
        self.product_code = product_code
        self.serial_number = serial_number
        self.manufacture_week = manufacture_week
        self.manufacture_year = manufacture_year
        self.version = version
        self.magic = bytes(magic)
        self._validate_inputs()

    def _validate_inputs(self) -> None:
        """Validate record inputs and raise descriptive errors."""
        what = 'EDID'

        if len(self.timings) > BASE_DTD_COUNT:
            raise EdidValidationError(f"{what}: {len(self.timings)} base timings exceeds maximum ({BASE_DTD_COUNT})")

        for t in self.timings:
            if not isinstance(t, UnpackedDetailedTiming):
                raise EdidValidationError(f"{what}: timings must be UnpackedDetailedTiming, got {type(t).__name__}")

        if len(self.extensions) > len(EXTENSION_SLOT_OFFSETS):
            raise EdidValidationError(
                f"{what}: {len(self.extensions)} extensions exceeds slot count ({len(EXTENSION_SLOT_OFFSETS)})"
            )

        for ext in self.extensions:
            if ext is None or isinstance(ext, UnpackedCtaExtension):
                continue
            if not isinstance(ext, (bytes, bytearray)) or len(ext) != EDID_BLOCK_SIZE:
                raise EdidValidationError(f"{what}: raw extension slots must be {EDID_BLOCK_SIZE} bytes")

        _check_uint(EdidValidationError, what, 'extension_count', self.extension_count, 8)
        _check_uint(EdidValidationError, what, 'product_code', self.product_code, 16)
        _check_uint(EdidValidationError, what, 'serial_number', self.serial_number, 32)
        _check_uint(EdidValidationError, what, 'manufacture_week', self.manufacture_week, 8)
        _check_uint(EdidValidationError, what, 'manufacture_year - 1990',
                    self.manufacture_year - MANUFACTURE_YEAR_BASE, 8)

        if (not isinstance(self.manufacturer_id, str) or len(self.manufacturer_id) != 3
                or not all('A' <= c <= 'Z' for c in self.manufacturer_id)):
            raise EdidValidationError(f"{what}: manufacturer_id must be three letters A-Z, got {self.manufacturer_id!r}")

        if len(self.version) != 2:
            raise EdidValidationError(f"{what}: version must be a (version, revision) tuple")
        for v in self.version:
            _check_uint(EdidValidationError, what, 'version', v, 8)

        if len(self.magic) != len(EDID_MAGIC):
            raise EdidValidationError(f"{what}: magic must be {len(EDID_MAGIC)} bytes, got {len(self.magic)}")

    def pack(self) -> bytes:
        return EdidPacker(self).pack()

    def pack_to(self, out: io.IOBase):
        out.write(self.pack())
