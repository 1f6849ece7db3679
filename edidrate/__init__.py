from __future__ import annotations

from .cta import (
    CtaExtension,
    DataBlock,
    ShortVideoDescriptor,
    extension_timings,
    find_video_block,
    iter_data_blocks,
    locate_cta_extension,
    resolve_svd,
    short_video_descriptors,
)
from .enums import BlockType, TimingSource
from .errors import *
from .record import EdidRecord, RecordView
from .refresh import DEFAULT_REFRESH_RATE, ScanResult, ScannedTiming, highest_refresh_rate, scan_timings
from .timing import DetailedTiming, decode_detailed_timing
from .vics import VIC_TIMINGS, CanonicalTiming, find_vic
