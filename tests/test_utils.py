# tests/test_utils.py
import unittest
import random
import sys
import os

# This adds the project's root directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from focus import utils

class TestUtils(unittest.TestCase):
    """Test suite for functions in utils.py."""

    def test_colorize(self):
        """Color codes become ANSI sequences."""
        self.assertEqual(utils.colorize("<r>hot<x>"), "\x1b[1;31mhot\x1b[0m")
        self.assertEqual(utils.colorize("plain"), "plain")

    def test_parse_input(self):
        """Verbs are lowercased, arguments are kept as typed."""
        self.assertEqual(utils.parse_input("  SCAN 10.0.0.1  "), ("scan", "10.0.0.1"))
        self.assertEqual(utils.parse_input("stim   Coffee"), ("stim", "Coffee"))
        self.assertEqual(utils.parse_input("ls"), ("ls", ""))
        self.assertEqual(utils.parse_input("   "), ("", ""))

    def test_focus_color_bands(self):
        self.assertEqual(utils.focus_color(95), "<g>")
        self.assertEqual(utils.focus_color(80), "<y>")
        self.assertEqual(utils.focus_color(50), "<Y>")
        self.assertEqual(utils.focus_color(40), "<r>")

    def test_focus_bar(self):
        """The filled part takes the focus band color, the rest is dimmed."""
        self.assertEqual(utils.focus_bar(50, width=10), "[<Y>#####<K>-----<x>]")
        self.assertEqual(utils.focus_bar(150, width=4), "[<g>####<K><x>]")
        self.assertEqual(utils.focus_bar(-5, width=4), "[<r><K>----<x>]")

    def test_format_duration(self):
        self.assertEqual(utils.format_duration(12500), "12s")
        self.assertEqual(utils.format_duration(65000), "1m05s")
        self.assertEqual(utils.format_duration(-10), "0s")

    def test_format_credits(self):
        self.assertEqual(utils.format_credits(1000), "1,000 cr")
        self.assertEqual(utils.format_credits(50), "50 cr")

    def test_distort_output(self):
        """Severity 0 leaves text alone, higher severities garble it but keep spacing."""
        text = "open ports found on target host\r\nsecond line"
        self.assertEqual(utils.distort_output(text, 0, random.Random(3)), text)

        distorted = utils.distort_output(text * 20, 10, random.Random(3))
        self.assertNotEqual(distorted, text * 20)
        self.assertEqual(len(distorted), len(text * 20))
        for original, changed in zip(text * 20, distorted):
            if original in " \r\n":
                self.assertEqual(original, changed)
            elif original != changed:
                self.assertIn(changed, utils.GLITCH_GLYPHS)

if __name__ == '__main__':
    unittest.main()
