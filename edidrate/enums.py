from __future__ import annotations

from enum import Enum

__all__ = [ 'BlockType', 'TimingSource', ]


class BlockType(Enum):
    Audio = 1
    Video = 2
    VendorSpecific = 3
    Speaker = 4
    VesaDisplayTransferCharacteristic = 5
    Extended = 7


class TimingSource(Enum):
    BaseDescriptor = 'base'
    ShortVideoDescriptor = 'svd'
    ExtensionDescriptor = 'ext'
