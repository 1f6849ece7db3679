"""Command-line interface for edidrate."""

from __future__ import annotations

import argparse
import logging
import sys

import tabulate

from .record import EdidRecord
from .refresh import ScanResult, scan_timings
from .timing import mode_name


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='edidrate',
        description='Detect the highest progressive refresh rate advertised by an EDID dump',
    )
    parser.add_argument('file', nargs='?', help='Binary EDID file (base block plus extensions, up to 512 bytes)')
    parser.add_argument('-l', '--list', action='store_true', help='List all scanned timings')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log verbosity (-v info, -vv decode trace)')

    return parser.parse_args(argv)


def setup_logging(verbose: int):
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format='%(levelname)s: %(name)s: %(message)s')


def format_summary(record: EdidRecord, result: ScanResult) -> str:
    if not record.has_valid_magic:
        return 'EDID: invalid header'

    version, revision = record.version
    slot = result.extension.slot if result.extension else '-'

    return (f'EDID {record.manufacturer_id}:{record.product_code:04x} version {version}.{revision}, '
            f'extensions {record.extension_count}, CTA slot {slot}')


def format_timings(result: ScanResult) -> str:
    table = []

    for t in result.timings:
        mode = mode_name(t.width, t.height, t.interlaced) if t.width else ''
        table.append(( t.source.value, t.index, mode,
                       t.vic,
                       'yes' if t.native else '',
                       t.refresh_hz,
                       'yes' if t.counted else '',
                       t.note ))

    return tabulate.tabulate(table, ['Source', 'Index', 'Mode', 'VIC', 'Native', 'Refresh', 'Counted', 'Note'],
                             floatfmt='.4f', colalign=('left', 'right', 'left', 'right', 'left', 'right', 'left', 'left'))


def main(argv: list[str] | None = None):
    args = parse_args(argv)

    if not args.file:
        print('Error: no file path provided', file=sys.stderr)
        sys.exit(1)

    setup_logging(args.verbose)

    try:
        record = EdidRecord(args.file)
    except OSError as e:
        print(f'Error: cannot read {args.file!r}: {e.strerror or e}', file=sys.stderr)
        sys.exit(1)

    result = scan_timings(record)

    if args.list:
        print(format_summary(record, result))
        print()
        if result.timings:
            print(format_timings(result))
            print()

    print(f'Detected highest progressive refresh rate: {result.highest:.4f} Hz')
