#!/usr/bin/env python3

import contextlib
import io
import os
import subprocess
import sys
import tempfile
import unittest

import edidrate as er
import edidrate.gen as gen
from edidrate import cli

ROOT_PATH = os.path.dirname(os.path.abspath(__file__)) + '/..'


def sample_edid() -> bytes:
    ext = gen.UnpackedCtaExtension(
        data_blocks=[gen.UnpackedVideoBlock([(16, True), 4, 63, 0])],
        timings=[gen.UnpackedDetailedTiming(1280, 720, 370, 30, 7425)],
    )
    return gen.UnpackedEdid(timings=[gen.UnpackedDetailedTiming(1920, 1080, 280, 45, 14850)],
                            extensions=[ext], manufacturer_id='ABC', product_code=0x1234,
                            version=(1, 3)).pack()


class EdidrateTestBase(unittest.TestCase):
    def setUp(self):
        fd, self.edid_path = tempfile.mkstemp(suffix='.bin')
        with os.fdopen(fd, 'wb') as f:
            f.write(sample_edid())

    def tearDown(self):
        os.unlink(self.edid_path)

    def run_cmd(self, opts):
        env = dict(os.environ)
        env['PYTHONPATH'] = ROOT_PATH + os.pathsep + env.get('PYTHONPATH', '')

        return subprocess.run([sys.executable, '-m', 'edidrate', *opts],
                              capture_output=True, encoding='ASCII', check=False, env=env)

    def assertOutput(self, opts, expected):
        res = self.run_cmd(opts)

        self.assertEqual(res.returncode, 0, res)
        self.assertEqual(res.stdout, expected, res)


class EdidrateCmdTests(EdidrateTestBase):
    def test_rate(self):
        self.assertOutput([self.edid_path], 'Detected highest progressive refresh rate: 120.0000 Hz\n')

    def test_short_file(self):
        with open(self.edid_path, 'wb') as f:
            f.write(sample_edid()[:128])

        # The extension is cut off, so the default rate is reported
        self.assertOutput([self.edid_path], 'Detected highest progressive refresh rate: 60.0000 Hz\n')

    def test_missing_argument(self):
        res = self.run_cmd([])
        self.assertEqual(res.returncode, 1, res)
        self.assertEqual(res.stdout, '')
        self.assertIn('no file path provided', res.stderr)

    def test_missing_file(self):
        res = self.run_cmd([self.edid_path + '.missing'])
        self.assertEqual(res.returncode, 1, res)
        self.assertEqual(res.stdout, '')
        self.assertIn('cannot read', res.stderr)

    def test_list(self):
        res = self.run_cmd(['--list', self.edid_path])
        self.assertEqual(res.returncode, 0, res)

        lines = res.stdout.splitlines()
        self.assertEqual(lines[0], 'EDID ABC:1234 version 1.3, extensions 1, CTA slot 0')
        self.assertEqual(lines[-1], 'Detected highest progressive refresh rate: 120.0000 Hz')
        self.assertIn('Source', res.stdout)
        self.assertIn('1920x1080', res.stdout)
        self.assertIn('120.0000', res.stdout)
        self.assertIn('Wrong VIC index 0', res.stdout)

    def test_verbose(self):
        res = self.run_cmd(['-vv', self.edid_path])
        self.assertEqual(res.returncode, 0, res)
        self.assertIn('VIC: 63', res.stderr)
        self.assertEqual(res.stdout, 'Detected highest progressive refresh rate: 120.0000 Hz\n')


class FormatTests(unittest.TestCase):
    def test_summary(self):
        rec = er.EdidRecord(sample_edid())
        result = er.scan_timings(rec)
        self.assertEqual(cli.format_summary(rec, result), 'EDID ABC:1234 version 1.3, extensions 1, CTA slot 0')

        rec = er.EdidRecord(bytes(512))
        result = er.scan_timings(rec)
        self.assertEqual(cli.format_summary(rec, result), 'EDID: invalid header')

        rec = er.EdidRecord(gen.UnpackedEdid().pack())
        result = er.scan_timings(rec)
        self.assertTrue(cli.format_summary(rec, result).endswith('CTA slot -'))

    def test_timings_table(self):
        result = er.scan_timings(er.EdidRecord(sample_edid()))
        table = cli.format_timings(result).splitlines()

        self.assertEqual(table[0].split(), ['Source', 'Index', 'Mode', 'VIC', 'Native', 'Refresh', 'Counted',
                                            'Note'])
        # base x2, svd x4, ext x5
        self.assertEqual(len(table), 2 + 11)

        svd63 = [line for line in table if line.startswith('svd') and ' 63 ' in line]
        self.assertEqual(len(svd63), 1)
        self.assertIn('120.0000', svd63[0])
        self.assertIn('yes', svd63[0])

    def test_main_in_process(self):
        fd, path = tempfile.mkstemp(suffix='.bin')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(sample_edid())

            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                cli.main([path])

            self.assertEqual(out.getvalue(), 'Detected highest progressive refresh rate: 120.0000 Hz\n')
        finally:
            os.unlink(path)

        err = io.StringIO()
        with contextlib.redirect_stderr(err), self.assertRaises(SystemExit) as cm:
            cli.main([])

        self.assertEqual(cm.exception.code, 1)


if __name__ == '__main__':
    unittest.main()
