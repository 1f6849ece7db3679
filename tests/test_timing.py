#!/usr/bin/env python3

import unittest

import edidrate as er
from edidrate.gen import UnpackedDetailedTiming
from edidrate.timing import check_dimensions, mode_name
from tests.samples import DTD_1080I, DTD_1080P, DTD_1152X864, DTD_720P, dtd_refresh


class DetailedTimingDecodeTests(unittest.TestCase):
    def test_1080p(self):
        t = er.decode_detailed_timing(DTD_1080P)

        self.assertEqual(t.pixel_clock, 14850)
        self.assertEqual(t.pixel_clock_khz, 148500)
        self.assertEqual((t.width, t.height), (1920, 1080))
        self.assertEqual((t.h_blanking, t.v_blanking), (280, 45))
        self.assertEqual((t.h_total, t.v_total), (2200, 1125))
        self.assertEqual((t.h_sync_offset, t.h_sync_width), (88, 44))
        self.assertEqual((t.v_sync_offset, t.v_sync_width), (4, 5))
        self.assertEqual((t.h_image_mm, t.v_image_mm), (708, 398))
        self.assertEqual((t.h_border, t.v_border), (0, 0))
        self.assertFalse(t.interlaced)
        self.assertAlmostEqual(t.refresh_hz, 60.0, places=6)
        self.assertEqual(t.name, '1920x1080')

    def test_720p(self):
        t = er.decode_detailed_timing(DTD_720P)

        self.assertEqual(t.pixel_clock, 7425)
        self.assertEqual((t.width, t.height), (1280, 720))
        self.assertEqual((t.h_blanking, t.v_blanking), (370, 30))
        self.assertEqual((t.h_sync_offset, t.h_sync_width), (110, 40))
        self.assertEqual((t.v_sync_offset, t.v_sync_width), (5, 5))
        self.assertAlmostEqual(t.refresh_hz, 60.0, places=6)

    def test_1080i(self):
        t = er.decode_detailed_timing(DTD_1080I)

        self.assertTrue(t.interlaced)
        self.assertEqual((t.width, t.height), (1920, 540))
        self.assertEqual(t.v_blanking, 22)
        self.assertAlmostEqual(t.refresh_hz, dtd_refresh(7425, 2200, 562), places=6)
        self.assertEqual(t.name, '1920x540i')

    def test_sync_msb_bits(self):
        t = er.decode_detailed_timing(DTD_1152X864)

        self.assertEqual(t.pixel_clock, 6975)
        self.assertEqual((t.width, t.height), (1152, 864))
        self.assertEqual((t.h_blanking, t.v_blanking), (160, 25))
        self.assertEqual((t.h_sync_offset, t.h_sync_width), (48, 32))
        self.assertEqual((t.v_sync_offset, t.v_sync_width), (3, 4))
        self.assertAlmostEqual(t.refresh_hz, dtd_refresh(6975, 1312, 889), places=6)

        # Every MSB pair of byte 11 set
        data = bytearray(DTD_1152X864)
        data[11] = 0b10_01_11_01
        t = er.decode_detailed_timing(data)
        self.assertEqual(t.h_sync_offset, (2 << 8) | 48)
        self.assertEqual(t.h_sync_width, (1 << 8) | 32)
        self.assertEqual(t.v_sync_offset, (3 << 4) | 3)
        self.assertEqual(t.v_sync_width, (1 << 4) | 4)

    def test_pixel_clock_zero(self):
        data = bytearray(DTD_1080P)
        data[0:2] = b'\0\0'
        t = er.decode_detailed_timing(data)

        self.assertFalse(t.is_active)
        self.assertIsNone(t.refresh_hz)
        # Resolution is still decoded
        self.assertEqual((t.width, t.height), (1920, 1080))

    def test_zero_totals(self):
        data = bytearray(18)
        data[0:2] = (100).to_bytes(2, 'little')
        t = er.decode_detailed_timing(data)
        self.assertTrue(t.is_active)
        self.assertIsNone(t.refresh_hz)

    def test_offset_and_bounds(self):
        view = er.RecordView(bytes(4) + DTD_720P)
        t = er.decode_detailed_timing(view, 4)
        self.assertEqual((t.width, t.height), (1280, 720))

        with self.assertRaises(er.OutOfBoundsRead):
            er.decode_detailed_timing(view, 5)

    def test_degenerate(self):
        t = er.DetailedTiming(pixel_clock=100, h_active=1, h_blanking=0, v_active=1080, v_blanking=0)
        self.assertTrue(t.is_degenerate)
        with self.assertRaises(er.DegenerateDescriptor):
            check_dimensions(t)

        t = er.decode_detailed_timing(DTD_720P)
        self.assertFalse(t.is_degenerate)
        check_dimensions(t)

    def test_mode_name(self):
        self.assertEqual(mode_name(1280, 720, False), '1280x720')
        self.assertEqual(mode_name(1920, 540, True), '1920x540i')


class DetailedTimingRoundTripTests(unittest.TestCase):
    def test_refresh_from_generated_descriptors(self):
        cases = [
            (1920, 1080, 280, 45, 14850),
            (2560, 1440, 160, 41, 24150),
            (3840, 2160, 560, 90, 59400),
            (4095, 4095, 4095, 4095, 65535),
            (640, 480, 160, 45, 2518),
        ]

        for width, height, h_blank, v_blank, pixel_clock in cases:
            with self.subTest(width=width, height=height):
                packed = UnpackedDetailedTiming(width, height, h_blank, v_blank, pixel_clock).pack()
                t = er.decode_detailed_timing(packed)

                self.assertEqual((t.width, t.height), (width, height))
                self.assertEqual((t.h_blanking, t.v_blanking), (h_blank, v_blank))
                self.assertEqual(t.pixel_clock, pixel_clock)
                self.assertAlmostEqual(t.refresh_hz, dtd_refresh(pixel_clock, width + h_blank, height + v_blank),
                                       delta=1e-3)

    def test_generated_matches_reference_bytes(self):
        ut = UnpackedDetailedTiming(1920, 1080, 280, 45, 14850, h_sync_offset=88, h_sync_width=44,
                                    v_sync_offset=4, v_sync_width=5, h_image_mm=708, v_image_mm=398)
        self.assertEqual(ut.pack(), DTD_1080P)

        ut = UnpackedDetailedTiming(1920, 540, 280, 22, 7425, interlaced=True, h_sync_offset=88,
                                    h_sync_width=44, v_sync_offset=2, v_sync_width=5,
                                    h_image_mm=708, v_image_mm=398)
        self.assertEqual(ut.pack(), DTD_1080I)


if __name__ == '__main__':
    unittest.main()
