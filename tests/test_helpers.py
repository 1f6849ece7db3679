#!/usr/bin/env python3

import unittest

from edidrate.helpers import genmask, get_field_value, join_split_value, set_field_value, split_value


class HelperTests(unittest.TestCase):
    def test_genmask(self):
        self.assertEqual(genmask(7, 0), 0xFF)
        self.assertEqual(genmask(7, 4), 0xF0)
        self.assertEqual(genmask(3, 0), 0x0F)
        self.assertEqual(genmask(7, 7), 0x80)

    def test_get_field_value(self):
        # Shared MSB byte of a detailed timing: active nibble high, blanking nibble low
        self.assertEqual(get_field_value(0x71, 7, 4), 0x7)
        self.assertEqual(get_field_value(0x71, 3, 0), 0x1)
        self.assertEqual(get_field_value(0x9E, 7, 7), 1)
        self.assertEqual(get_field_value(0x1E, 7, 7), 0)

    def test_set_field_value(self):
        self.assertEqual(set_field_value(0x00, 7, 7, 1), 0x80)
        self.assertEqual(set_field_value(0x71, 3, 0, 0xA), 0x7A)
        # Values wider than the field are masked
        self.assertEqual(set_field_value(0x00, 1, 0, 0x7), 0x3)

    def test_split_values(self):
        self.assertEqual(join_split_value(0x7, 0x80), 1920)
        self.assertEqual(split_value(1920), (0x7, 0x80))
        self.assertEqual(join_split_value(0x3, 0xF, 4), 0x3F)
        self.assertEqual(split_value(0x3F, 4), (0x3, 0xF))


if __name__ == '__main__':
    unittest.main()
