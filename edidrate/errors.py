"""Decode error taxonomy.

Every error raised while decoding a record derives from EdidDecodeError.
Apart from RecordSizeError, all of them are recoverable: the refresh rate
scan catches them at the step they belong to and falls back to a less
complete result.
"""

from __future__ import annotations

__all__ = [
    'EdidDecodeError', 'RecordSizeError', 'OutOfBoundsRead', 'MagicMismatch',
    'NoExtension', 'ExtensionNotFound', 'NoVideoDataBlock', 'InvalidVicIndex',
    'UnknownVic', 'DegenerateDescriptor',
]


class EdidDecodeError(ValueError):
    """Base class for EDID decoding errors."""
    pass


class RecordSizeError(EdidDecodeError):
    """Raised when a record buffer is not exactly 512 bytes."""
    pass


class OutOfBoundsRead(EdidDecodeError):
    """Raised when an accessor offset falls outside its window."""
    pass


class MagicMismatch(EdidDecodeError):
    """Raised when bytes 0-7 are not the fixed EDID header pattern."""
    pass


class NoExtension(EdidDecodeError):
    """Raised when the base block declares no extension blocks."""
    pass


class ExtensionNotFound(EdidDecodeError):
    """Raised when none of the extension slots holds a CTA extension."""
    pass


class NoVideoDataBlock(EdidDecodeError):
    """Raised when the data block collection has no Video Data Block."""
    pass


class InvalidVicIndex(EdidDecodeError):
    """Raised for a short video descriptor whose VIC index is 0."""
    pass


class UnknownVic(EdidDecodeError):
    """Raised when the VIC timing table has no entry for an index."""
    pass


class DegenerateDescriptor(EdidDecodeError):
    """Raised for a detailed timing descriptor with width or height <= 1."""
    pass
