"""CTA-861 extension block decoding.

The CTA extension lives in one of the record's three extension slots. After
its 4-byte header comes a collection of variable-length data blocks, which
ends at 'dtd_start', followed by up to five detailed timing descriptors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from ._layout import (
    EDID_BLOCK_SIZE,
    CTA_EXTENSION_TAG,
    CTA_TAG_OFFSET,
    CTA_REVISION_OFFSET,
    CTA_DTD_START_OFFSET,
    CTA_NATIVE_DTD_COUNT,
    CTA_SUPPORT_FLAGS,
    CTA_DATA_BLOCK_OFFSET,
    CTA_MAX_DTD_COUNT,
    DATA_BLOCK_SIZE,
    DATA_BLOCK_TYPE,
    DTD_SIZE,
    SVD_VIC,
    SVD_NATIVE,
    SVD_MAX_NATIVE_VIC,
)
from .enums import BlockType
from .errors import ExtensionNotFound, InvalidVicIndex, NoExtension, NoVideoDataBlock, UnknownVic
from .helpers import get_field_value
from .record import EdidRecord, RecordView
from .timing import DetailedTiming, decode_detailed_timing
from .vics import CanonicalTiming, find_vic

__all__ = [
    'CtaExtension', 'DataBlock', 'ShortVideoDescriptor', 'locate_cta_extension',
    'iter_data_blocks', 'find_video_block', 'short_video_descriptors',
    'resolve_svd', 'extension_timings',
]

logger = logging.getLogger(__name__)


class CtaExtension:
    """A CTA extension found in extension slot 'slot' of a record."""

    def __init__(self, record: EdidRecord, slot: int) -> None:
        self.record = record
        self.slot = slot
        self.view = record.slot(slot)

    @property
    def offset(self) -> int:
        """Absolute offset of the extension within the record."""
        return self.view.base

    @property
    def tag(self) -> int:
        return self.view.read_u8_at(CTA_TAG_OFFSET)

    @property
    def revision(self) -> int:
        return self.view.read_u8_at(CTA_REVISION_OFFSET)

    @property
    def dtd_start(self) -> int:
        return self.view.read_u8_at(CTA_DTD_START_OFFSET)

    @property
    def native_dtd_count(self) -> int:
        return self.view.read_field(CTA_NATIVE_DTD_COUNT)

    @property
    def support_flags(self) -> int:
        return self.view.read_field(CTA_SUPPORT_FLAGS)


class DataBlock:
    def __init__(self, view: RecordView, offset: int) -> None:
        self.view = view
        self.offset = offset
        self.size = view.read_field(DATA_BLOCK_SIZE._replace(offset=offset))
        self.block_type = view.read_field(DATA_BLOCK_TYPE._replace(offset=offset))

    @property
    def kind(self) -> BlockType | None:
        try:
            return BlockType(self.block_type)
        except ValueError:
            return None

    @property
    def name(self) -> str:
        kind = self.kind
        return kind.name if kind else f'Reserved({self.block_type})'

    @property
    def payload(self) -> bytes:
        return self.view.read_bytes(self.offset + 1, self.size)


@dataclass(frozen=True)
class ShortVideoDescriptor:
    raw: int
    vic: int
    native: bool

    @classmethod
    def decode(cls, raw: int) -> ShortVideoDescriptor:
        vic = get_field_value(raw, SVD_VIC.high, SVD_VIC.low)
        native = bool(get_field_value(raw, SVD_NATIVE.high, SVD_NATIVE.low))

        # VICs above 64 are stored as the whole byte, without a native flag
        if vic > SVD_MAX_NATIVE_VIC:
            vic = raw
            native = False

        return cls(raw, vic, native)


def locate_cta_extension(record: EdidRecord, log: logging.Logger | None = None) -> CtaExtension:
    """Find the CTA extension in the primary slot or the two spare slots.

    Raises NoExtension if the base block declares no extensions, and
    ExtensionNotFound if none of the slots carries the CTA tag.
    """
    log = log or logger

    if record.extension_count == 0:
        raise NoExtension('Base block declares no extension blocks')

    for slot in range(record.num_slots):
        ext = CtaExtension(record, slot)
        if ext.tag == CTA_EXTENSION_TAG:
            log.debug('CTA extension in slot %d at 0x%x, revision %d, dtd_start 0x%x, native DTDs %d',
                      slot, ext.offset, ext.revision, ext.dtd_start, ext.native_dtd_count)
            return ext

        log.debug('Slot %d at 0x%x has tag 0x%02x, not a CTA extension', slot, ext.offset, ext.tag)

    raise ExtensionNotFound(f'No valid extension type detected in any of the {record.num_slots} extension slots')


def iter_data_blocks(ext: CtaExtension) -> Iterator[DataBlock]:
    """Iterate the data block collection, which ends at 'dtd_start'."""
    end = min(ext.dtd_start, EDID_BLOCK_SIZE)
    offset = CTA_DATA_BLOCK_OFFSET

    while offset < end:
        block = DataBlock(ext.view, offset)
        yield block
        offset += 1 + block.size


def find_video_block(ext: CtaExtension, log: logging.Logger | None = None) -> DataBlock:
    log = log or logger

    for block in iter_data_blocks(ext):
        if block.kind == BlockType.Video:
            log.debug('Video data block at 0x%x, %d SVDs', block.offset, block.size)
            return block

        log.debug('Skipping %s data block at 0x%x (%d bytes)', block.name, block.offset, block.size)

    raise NoVideoDataBlock(f'No Video Data Block before dtd_start 0x{ext.dtd_start:x}')


def short_video_descriptors(block: DataBlock) -> Iterator[ShortVideoDescriptor]:
    """Decode the SVDs of a Video Data Block one at a time.

    Raises OutOfBoundsRead when the declared size runs past the extension.
    """
    for idx in range(block.size):
        yield ShortVideoDescriptor.decode(block.view.read_u8_at(block.offset + 1 + idx))


def resolve_svd(svd: ShortVideoDescriptor) -> CanonicalTiming:
    if svd.vic == 0:
        raise InvalidVicIndex(f'Wrong VIC index 0 in SVD 0x{svd.raw:02x}')

    timing = find_vic(svd.vic)
    if timing is None:
        raise UnknownVic(f'No timing known for VIC {svd.vic}')

    return timing


def extension_timings(ext: CtaExtension) -> list[DetailedTiming]:
    """Decode the detailed timing descriptors starting at 'dtd_start'.

    At most five descriptors are read; descriptors that do not fit in the
    extension are not read.
    """
    timings = []

    for idx in range(CTA_MAX_DTD_COUNT):
        offset = ext.dtd_start + DTD_SIZE * idx
        if offset + DTD_SIZE > len(ext.view):
            break
        timings.append(decode_detailed_timing(ext.view, offset))

    return timings
