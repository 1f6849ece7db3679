"""CTA-861 Video Identification Code timing table.

Timings are the progressive/interlaced format timings of CTA-861-G tables 1
and 2. Vertical porch and sync values of interlaced formats are per field.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [ 'CanonicalTiming', 'VIC_TIMINGS', 'find_vic' ]


@dataclass(frozen=True)
class CanonicalTiming:
    h_active: int
    v_active: int
    interlaced: bool
    pixel_clock_khz: int
    h_fp: int
    h_sync: int
    h_bp: int
    v_fp: int
    v_sync: int
    v_bp: int

    @property
    def h_total(self) -> int:
        return self.h_active + self.h_fp + self.h_sync + self.h_bp

    @property
    def v_total(self) -> int:
        """Lines per field, half the active lines for interlaced formats."""
        return self.v_active // (2 if self.interlaced else 1) + self.v_fp + self.v_sync + self.v_bp

    @property
    def refresh_hz(self) -> float:
        return (self.pixel_clock_khz * 1000.0) / (self.h_total * self.v_total)


# vic: (hact, vact, interlaced, pixclk_khz, hfp, hsync, hbp, vfp, vsync, vbp)
_VIC_TABLE = {
    1: (640, 480, False, 25175, 16, 96, 48, 10, 2, 33),
    2: (720, 480, False, 27000, 16, 62, 60, 9, 6, 30),
    3: (720, 480, False, 27000, 16, 62, 60, 9, 6, 30),
    4: (1280, 720, False, 74250, 110, 40, 220, 5, 5, 20),
    5: (1920, 1080, True, 74250, 88, 44, 148, 2, 5, 15),
    6: (1440, 480, True, 27000, 38, 124, 114, 4, 3, 15),
    7: (1440, 480, True, 27000, 38, 124, 114, 4, 3, 15),
    8: (1440, 240, False, 27000, 38, 124, 114, 4, 3, 15),
    9: (1440, 240, False, 27000, 38, 124, 114, 4, 3, 15),
    10: (2880, 480, True, 54000, 76, 248, 228, 4, 3, 15),
    11: (2880, 480, True, 54000, 76, 248, 228, 4, 3, 15),
    12: (2880, 240, False, 54000, 76, 248, 228, 4, 3, 15),
    13: (2880, 240, False, 54000, 76, 248, 228, 4, 3, 15),
    14: (1440, 480, False, 54000, 32, 124, 120, 9, 6, 30),
    15: (1440, 480, False, 54000, 32, 124, 120, 9, 6, 30),
    16: (1920, 1080, False, 148500, 88, 44, 148, 4, 5, 36),
    17: (720, 576, False, 27000, 12, 64, 68, 5, 5, 39),
    18: (720, 576, False, 27000, 12, 64, 68, 5, 5, 39),
    19: (1280, 720, False, 74250, 440, 40, 220, 5, 5, 20),
    20: (1920, 1080, True, 74250, 528, 44, 148, 2, 5, 15),
    21: (1440, 576, True, 27000, 24, 126, 138, 2, 3, 19),
    22: (1440, 576, True, 27000, 24, 126, 138, 2, 3, 19),
    23: (1440, 288, False, 27000, 24, 126, 138, 2, 3, 19),
    24: (1440, 288, False, 27000, 24, 126, 138, 2, 3, 19),
    25: (2880, 576, True, 54000, 48, 252, 276, 2, 3, 19),
    26: (2880, 576, True, 54000, 48, 252, 276, 2, 3, 19),
    27: (2880, 288, False, 54000, 48, 252, 276, 2, 3, 19),
    28: (2880, 288, False, 54000, 48, 252, 276, 2, 3, 19),
    29: (1440, 576, False, 54000, 24, 128, 136, 5, 5, 39),
    30: (1440, 576, False, 54000, 24, 128, 136, 5, 5, 39),
    31: (1920, 1080, False, 148500, 528, 44, 148, 4, 5, 36),
    32: (1920, 1080, False, 74250, 638, 44, 148, 4, 5, 36),
    33: (1920, 1080, False, 74250, 528, 44, 148, 4, 5, 36),
    34: (1920, 1080, False, 74250, 88, 44, 148, 4, 5, 36),
    35: (2880, 480, False, 108000, 64, 248, 240, 9, 6, 30),
    36: (2880, 480, False, 108000, 64, 248, 240, 9, 6, 30),
    37: (2880, 576, False, 108000, 48, 256, 272, 5, 5, 39),
    38: (2880, 576, False, 108000, 48, 256, 272, 5, 5, 39),
    39: (1920, 1080, True, 72000, 32, 168, 184, 23, 5, 57),
    40: (1920, 1080, True, 148500, 528, 44, 148, 2, 5, 15),
    41: (1280, 720, False, 148500, 440, 40, 220, 5, 5, 20),
    42: (720, 576, False, 54000, 12, 64, 68, 5, 5, 39),
    43: (720, 576, False, 54000, 12, 64, 68, 5, 5, 39),
    44: (1440, 576, True, 54000, 24, 126, 138, 2, 3, 19),
    45: (1440, 576, True, 54000, 24, 126, 138, 2, 3, 19),
    46: (1920, 1080, True, 148500, 88, 44, 148, 2, 5, 15),
    47: (1280, 720, False, 148500, 110, 40, 220, 5, 5, 20),
    48: (720, 480, False, 54000, 16, 62, 60, 9, 6, 30),
    49: (720, 480, False, 54000, 16, 62, 60, 9, 6, 30),
    50: (1440, 480, True, 54000, 38, 124, 114, 4, 3, 15),
    51: (1440, 480, True, 54000, 38, 124, 114, 4, 3, 15),
    52: (720, 576, False, 108000, 12, 64, 68, 5, 5, 39),
    53: (720, 576, False, 108000, 12, 64, 68, 5, 5, 39),
    54: (1440, 576, True, 108000, 24, 126, 138, 2, 3, 19),
    55: (1440, 576, True, 108000, 24, 126, 138, 2, 3, 19),
    56: (720, 480, False, 108000, 16, 62, 60, 9, 6, 30),
    57: (720, 480, False, 108000, 16, 62, 60, 9, 6, 30),
    58: (1440, 480, True, 108000, 38, 124, 114, 4, 3, 15),
    59: (1440, 480, True, 108000, 38, 124, 114, 4, 3, 15),
    60: (1280, 720, False, 59400, 1760, 40, 220, 5, 5, 20),
    61: (1280, 720, False, 74250, 2420, 40, 220, 5, 5, 20),
    62: (1280, 720, False, 74250, 1760, 40, 220, 5, 5, 20),
    63: (1920, 1080, False, 297000, 88, 44, 148, 4, 5, 36),
    64: (1920, 1080, False, 297000, 528, 44, 148, 4, 5, 36),
    65: (1280, 720, False, 59400, 1760, 40, 220, 5, 5, 20),
    66: (1280, 720, False, 74250, 2420, 40, 220, 5, 5, 20),
    67: (1280, 720, False, 74250, 1760, 40, 220, 5, 5, 20),
    68: (1280, 720, False, 74250, 440, 40, 220, 5, 5, 20),
    69: (1280, 720, False, 74250, 110, 40, 220, 5, 5, 20),
    70: (1280, 720, False, 148500, 440, 40, 220, 5, 5, 20),
    71: (1280, 720, False, 148500, 110, 40, 220, 5, 5, 20),
    72: (1920, 1080, False, 74250, 638, 44, 148, 4, 5, 36),
    73: (1920, 1080, False, 74250, 528, 44, 148, 4, 5, 36),
    74: (1920, 1080, False, 74250, 88, 44, 148, 4, 5, 36),
    75: (1920, 1080, False, 148500, 528, 44, 148, 4, 5, 36),
    76: (1920, 1080, False, 148500, 88, 44, 148, 4, 5, 36),
    77: (1920, 1080, False, 297000, 528, 44, 148, 4, 5, 36),
    78: (1920, 1080, False, 297000, 88, 44, 148, 4, 5, 36),
    79: (1680, 720, False, 59400, 1360, 40, 220, 5, 5, 20),
    80: (1680, 720, False, 59400, 1228, 40, 220, 5, 5, 20),
    81: (1680, 720, False, 59400, 700, 40, 220, 5, 5, 20),
    82: (1680, 720, False, 82500, 260, 40, 220, 5, 5, 20),
    83: (1680, 720, False, 99000, 260, 40, 220, 5, 5, 20),
    84: (1680, 720, False, 165000, 60, 40, 220, 5, 5, 95),
    85: (1680, 720, False, 198000, 60, 40, 220, 5, 5, 95),
    86: (2560, 1080, False, 99000, 998, 44, 148, 4, 5, 11),
    87: (2560, 1080, False, 90000, 448, 44, 148, 4, 5, 36),
    88: (2560, 1080, False, 118800, 768, 44, 148, 4, 5, 36),
    89: (2560, 1080, False, 185625, 548, 44, 148, 4, 5, 36),
    90: (2560, 1080, False, 198000, 248, 44, 148, 4, 5, 11),
    91: (2560, 1080, False, 371250, 218, 44, 148, 4, 5, 161),
    92: (2560, 1080, False, 495000, 548, 44, 148, 4, 5, 161),
    93: (3840, 2160, False, 297000, 1276, 88, 296, 8, 10, 72),
    94: (3840, 2160, False, 297000, 1056, 88, 296, 8, 10, 72),
    95: (3840, 2160, False, 297000, 176, 88, 296, 8, 10, 72),
    96: (3840, 2160, False, 594000, 1056, 88, 296, 8, 10, 72),
    97: (3840, 2160, False, 594000, 176, 88, 296, 8, 10, 72),
    98: (4096, 2160, False, 297000, 1020, 88, 296, 8, 10, 72),
    99: (4096, 2160, False, 297000, 968, 88, 128, 8, 10, 72),
    100: (4096, 2160, False, 297000, 88, 88, 128, 8, 10, 72),
    101: (4096, 2160, False, 594000, 968, 88, 128, 8, 10, 72),
    102: (4096, 2160, False, 594000, 88, 88, 128, 8, 10, 72),
    103: (3840, 2160, False, 297000, 1276, 88, 296, 8, 10, 72),
    104: (3840, 2160, False, 297000, 1056, 88, 296, 8, 10, 72),
    105: (3840, 2160, False, 297000, 176, 88, 296, 8, 10, 72),
    106: (3840, 2160, False, 594000, 1056, 88, 296, 8, 10, 72),
    107: (3840, 2160, False, 594000, 176, 88, 296, 8, 10, 72),
    108: (1280, 720, False, 90000, 960, 40, 220, 5, 5, 20),
    109: (1280, 720, False, 90000, 960, 40, 220, 5, 5, 20),
    110: (1680, 720, False, 99000, 810, 40, 220, 5, 5, 20),
    111: (1920, 1080, False, 148500, 638, 44, 148, 4, 5, 36),
    112: (1920, 1080, False, 148500, 638, 44, 148, 4, 5, 36),
    113: (2560, 1080, False, 198000, 998, 44, 148, 4, 5, 11),
    114: (3840, 2160, False, 594000, 1276, 88, 296, 8, 10, 72),
    115: (4096, 2160, False, 594000, 1020, 88, 296, 8, 10, 72),
    116: (3840, 2160, False, 594000, 1276, 88, 296, 8, 10, 72),
    117: (3840, 2160, False, 1188000, 1056, 88, 296, 8, 10, 72),
    118: (3840, 2160, False, 1188000, 176, 88, 296, 8, 10, 72),
    119: (3840, 2160, False, 1188000, 1056, 88, 296, 8, 10, 72),
    120: (3840, 2160, False, 1188000, 176, 88, 296, 8, 10, 72),
    121: (5120, 2160, False, 396000, 1996, 88, 296, 8, 10, 22),
    122: (5120, 2160, False, 396000, 1696, 88, 296, 8, 10, 22),
    123: (5120, 2160, False, 396000, 664, 88, 128, 8, 10, 22),
    124: (5120, 2160, False, 742500, 746, 88, 296, 8, 10, 297),
    125: (5120, 2160, False, 742500, 1096, 88, 296, 8, 10, 72),
    126: (5120, 2160, False, 742500, 164, 88, 128, 8, 10, 72),
    127: (5120, 2160, False, 1485000, 1096, 88, 296, 8, 10, 72),
    193: (5120, 2160, False, 1485000, 164, 88, 128, 8, 10, 72),
    194: (7680, 4320, False, 1188000, 2552, 176, 592, 16, 20, 144),
    195: (7680, 4320, False, 1188000, 2352, 176, 592, 16, 20, 44),
    196: (7680, 4320, False, 1188000, 552, 176, 592, 16, 20, 44),
    197: (7680, 4320, False, 2376000, 2552, 176, 592, 16, 20, 144),
    198: (7680, 4320, False, 2376000, 2352, 176, 592, 16, 20, 44),
    199: (7680, 4320, False, 2376000, 552, 176, 592, 16, 20, 44),
    200: (7680, 4320, False, 4752000, 2112, 176, 592, 16, 20, 144),
    201: (7680, 4320, False, 4752000, 352, 176, 592, 16, 20, 144),
    202: (7680, 4320, False, 1188000, 2552, 176, 592, 16, 20, 144),
    203: (7680, 4320, False, 1188000, 2352, 176, 592, 16, 20, 44),
    204: (7680, 4320, False, 1188000, 552, 176, 592, 16, 20, 44),
    205: (7680, 4320, False, 2376000, 2552, 176, 592, 16, 20, 144),
    206: (7680, 4320, False, 2376000, 2352, 176, 592, 16, 20, 44),
    207: (7680, 4320, False, 2376000, 552, 176, 592, 16, 20, 44),
    208: (7680, 4320, False, 4752000, 2112, 176, 592, 16, 20, 144),
    209: (7680, 4320, False, 4752000, 352, 176, 592, 16, 20, 144),
    210: (10240, 4320, False, 1485000, 1492, 176, 592, 16, 20, 594),
    211: (10240, 4320, False, 1485000, 2492, 176, 592, 16, 20, 44),
    212: (10240, 4320, False, 1485000, 288, 176, 296, 16, 20, 144),
    213: (10240, 4320, False, 2970000, 1492, 176, 592, 16, 20, 594),
    214: (10240, 4320, False, 2970000, 2492, 176, 592, 16, 20, 44),
    215: (10240, 4320, False, 2970000, 288, 176, 296, 16, 20, 144),
    216: (10240, 4320, False, 5940000, 2192, 176, 592, 16, 20, 144),
    217: (10240, 4320, False, 5940000, 288, 176, 296, 16, 20, 144),
    218: (4096, 2160, False, 1188000, 800, 88, 296, 8, 10, 72),
    219: (4096, 2160, False, 1188000, 88, 88, 128, 8, 10, 72),
}

VIC_TIMINGS: dict[int, CanonicalTiming] = {vic: CanonicalTiming(*row) for vic, row in _VIC_TABLE.items()}


def find_vic(index: int) -> CanonicalTiming | None:
    return VIC_TIMINGS.get(index)
