"""Highest progressive refresh rate detection.

The scan visits, in order, the two base block detailed timings, the Short
Video Descriptors of the CTA Video Data Block and the CTA extension's
detailed timings. Only the CTA sources are folded into the result; the base
block timings are reported but do not count. Interlaced timings never count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ._layout import BASE_DTD_OFFSET, BASE_DTD_COUNT, DTD_SIZE
from .cta import (
    CtaExtension,
    extension_timings,
    find_video_block,
    locate_cta_extension,
    resolve_svd,
    short_video_descriptors,
)
from .enums import TimingSource
from .errors import (
    DegenerateDescriptor,
    EdidDecodeError,
    ExtensionNotFound,
    InvalidVicIndex,
    MagicMismatch,
    NoExtension,
    NoVideoDataBlock,
    OutOfBoundsRead,
    UnknownVic,
)
from .record import EdidRecord
from .timing import DetailedTiming, check_dimensions, decode_detailed_timing

__all__ = [ 'DEFAULT_REFRESH_RATE', 'ScannedTiming', 'ScanResult', 'scan_timings', 'highest_refresh_rate' ]

DEFAULT_REFRESH_RATE = 60.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScannedTiming:
    source: TimingSource
    index: int
    width: int
    height: int
    interlaced: bool
    refresh_hz: float | None
    vic: int | None = None
    native: bool = False
    counted: bool = False
    note: str = ''


@dataclass
class ScanResult:
    highest: float = DEFAULT_REFRESH_RATE
    timings: list[ScannedTiming] = field(default_factory=list)
    extension: CtaExtension | None = None
    # Set when the scan ended early and the default rate was returned
    error: EdidDecodeError | None = None

    @property
    def is_default(self) -> bool:
        return self.error is not None

    def add(self, entry: ScannedTiming) -> None:
        self.timings.append(entry)
        if entry.counted and entry.refresh_hz is not None:
            self.highest = max(self.highest, entry.refresh_hz)


def _dtd_entry(source: TimingSource, idx: int, timing: DetailedTiming, counted: bool, note: str = '') -> ScannedTiming:
    return ScannedTiming(source, idx, timing.width, timing.height, timing.interlaced,
                         timing.refresh_hz, counted=counted, note=note)


def _scan_base_timings(record: EdidRecord, result: ScanResult, log: logging.Logger) -> None:
    for idx in range(BASE_DTD_COUNT):
        timing = decode_detailed_timing(record, BASE_DTD_OFFSET + DTD_SIZE * idx)

        if not timing.is_active:
            result.add(_dtd_entry(TimingSource.BaseDescriptor, idx, timing, False, 'pixel clock 0'))
            continue

        if timing.refresh_hz is None:
            result.add(_dtd_entry(TimingSource.BaseDescriptor, idx, timing, False, 'zero size'))
            continue

        log.debug('Res: %s, pixel clock: %d kHz, refresh rate: %.4f',
                  timing.name, timing.pixel_clock_khz, timing.refresh_hz)

        # TODO: confirm whether base block timings should count towards the maximum
        result.add(_dtd_entry(TimingSource.BaseDescriptor, idx, timing, False, 'base block'))


def _scan_svds(ext: CtaExtension, result: ScanResult, log: logging.Logger) -> None:
    try:
        block = find_video_block(ext, log)
    except NoVideoDataBlock as e:
        log.debug('%s', e)
        return

    try:
        for idx, svd in enumerate(short_video_descriptors(block)):
            try:
                timing = resolve_svd(svd)
            except (InvalidVicIndex, UnknownVic) as e:
                log.debug('%s', e)
                result.add(ScannedTiming(TimingSource.ShortVideoDescriptor, idx, 0, 0, False, None,
                                         vic=svd.vic, native=svd.native, note=str(e)))
                continue

            refresh = timing.refresh_hz
            log.debug('VIC: %u%s, Res: %dx%d%s, refresh rate: %.4f', svd.vic, ' (native)' if svd.native else '',
                      timing.h_active, timing.v_active, 'i' if timing.interlaced else '', refresh)

            result.add(ScannedTiming(TimingSource.ShortVideoDescriptor, idx, timing.h_active, timing.v_active,
                                     timing.interlaced, refresh, vic=svd.vic, native=svd.native,
                                     counted=not timing.interlaced, note='interlaced' if timing.interlaced else ''))
    except OutOfBoundsRead as e:
        log.debug('Video data block truncated: %s', e)


def _scan_extension_timings(ext: CtaExtension, result: ScanResult, log: logging.Logger) -> None:
    for idx, timing in enumerate(extension_timings(ext)):
        try:
            check_dimensions(timing)
        except DegenerateDescriptor as e:
            log.debug('%s', e)
            result.add(_dtd_entry(TimingSource.ExtensionDescriptor, idx, timing, False, 'padding'))
            continue

        if not timing.is_active:
            result.add(_dtd_entry(TimingSource.ExtensionDescriptor, idx, timing, False, 'pixel clock 0'))
            continue

        log.debug('Res: %s, pixel clock: %d kHz, refresh rate: %.4f',
                  timing.name, timing.pixel_clock_khz, timing.refresh_hz)

        result.add(_dtd_entry(TimingSource.ExtensionDescriptor, idx, timing, not timing.interlaced,
                              'interlaced' if timing.interlaced else ''))


def scan_timings(record: EdidRecord, log: logging.Logger | None = None) -> ScanResult:
    """Scan every timing source of 'record' and collect the highest
    non-interlaced refresh rate.

    Decoding problems never propagate: a bad header or a missing CTA
    extension ends the scan with the default rate and sets 'error', while
    bad individual timings are skipped and noted in the report.
    """
    log = log or logger
    result = ScanResult()

    try:
        record.check_magic()
    except MagicMismatch as e:
        log.info('%s', e)
        result.error = e
        return result

    _scan_base_timings(record, result, log)

    try:
        ext = locate_cta_extension(record, log)
    except (NoExtension, ExtensionNotFound) as e:
        log.info('%s', e)
        result.error = e
        return result

    result.extension = ext

    if ext.dtd_start == 0:
        log.debug('CTA extension has no data blocks or detailed timings')
        return result

    _scan_svds(ext, result, log)
    _scan_extension_timings(ext, result, log)

    log.debug('Highest progressive refresh rate: %.4f', result.highest)

    return result


def highest_refresh_rate(source: EdidRecord | bytes | bytearray | memoryview,
                         log: logging.Logger | None = None) -> float:
    """Return the highest progressive refresh rate advertised by a 512-byte
    EDID record, or 60.0 if nothing better can be determined."""
    record = source if isinstance(source, EdidRecord) else EdidRecord(source)
    return scan_timings(record, log).highest
