import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from tiltgrid_renderer.colorspace import interp_angle
from tiltgrid_renderer.errors import EmptyTable, InvalidColorFormat
from tiltgrid_renderer.gradient import GradientTable
from tiltgrid_renderer.models import Color


COOL_SKY = [("#2980B9", 0.0), ("#6DD5FA", 0.5), ("#FFFFFF", 1.0)]


class ColorParsingTests(unittest.TestCase):
    def test_hex_with_and_without_hash(self):
        self.assertEqual(Color.from_hex("#ffffff"), Color(1.0, 1.0, 1.0))
        self.assertEqual(Color.from_hex("000000"), Color(0.0, 0.0, 0.0))
        self.assertEqual(Color.from_hex("#36d1dc").hex(), "#36d1dc")

    def test_malformed_hex_rejected(self):
        for bad in ("#ZZZZZZ", "12345", "#1234567", "#fff", "#ffffff\n", " #ffffff", "", None):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidColorFormat):
                    GradientTable([(bad, 0.0)])

    def test_invalid_colour_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Color.from_hex("#ZZZZZZ")


class GradientTableTests(unittest.TestCase):
    def test_empty_table_rejected(self):
        with self.assertRaises(EmptyTable):
            GradientTable([])

    def test_keypoint_positions_return_keypoint_colours_exactly(self):
        table = GradientTable(COOL_SKY)
        for source, position in COOL_SKY:
            with self.subTest(position=position):
                self.assertEqual(table.interpolate(position), Color.from_hex(source))

    def test_at_or_beyond_last_keypoint_returns_last_colour(self):
        table = GradientTable(COOL_SKY)
        white = Color.from_hex("#FFFFFF")
        self.assertEqual(table.interpolate(1.0), white)
        self.assertEqual(table.interpolate(1.25), white)
        self.assertEqual(table.interpolate(42.0), white)

    def test_below_first_keypoint_also_returns_last_colour(self):
        # No pair brackets t, so the scan falls through to the last keypoint, not the first.
        table = GradientTable([("#000000", 0.0), ("#ffffff", 1.0)])
        self.assertEqual(table.interpolate(-0.5), Color(1.0, 1.0, 1.0))
        self.assertNotEqual(table.interpolate(-0.5), table.interpolate(0.0))

    def test_single_keypoint_is_flat(self):
        table = GradientTable([("#f12711", 0.3)])
        for t in (-1.0, 0.0, 0.3, 0.9, 3.0):
            self.assertEqual(table.interpolate(t), Color.from_hex("#f12711"))

    def test_blend_lies_on_hcl_segment(self):
        table = GradientTable([("#36d1dc", 0.0), ("#5b86e5", 1.0)])
        start, end = (k.color for k in table.keypoints)
        h1, c1, l1 = start.to_hcl()
        h2, c2, l2 = end.to_hcl()

        blended = start.blend_hcl(end, 0.25)
        hue, chroma, luminance = blended.to_hcl()
        self.assertAlmostEqual(luminance, l1 + 0.25 * (l2 - l1), places=6)
        self.assertAlmostEqual(chroma, c1 + 0.25 * (c2 - c1), places=6)
        self.assertAlmostEqual(hue, interp_angle(h1, h2, 0.25), places=6)
        self.assertEqual(table.interpolate(0.25), blended.clamped())

    def test_midpoints_match_reference_hcl_blend(self):
        expected = {
            ("#f12711", "#f5af19"): (246, 120, 0),
            ("#FF0099", "#493240"): (158, 54, 113),
            ("#005AA7", "#FFFDE4"): (83, 182, 178),
            ("#36d1dc", "#5b86e5"): (0, 177, 239),
        }
        for (start, end), rgb in expected.items():
            mid = GradientTable([(start, 0.0), (end, 1.0)]).interpolate(0.5).rgba8()[:3]
            with self.subTest(start=start, end=end):
                for got, want in zip(mid, rgb):
                    self.assertLessEqual(abs(got - want), 1)

    def test_mono_midpoint_is_mid_grey(self):
        table = GradientTable([("#000000", 0.0), ("#ffffff", 1.0)])
        mid = table.interpolate(0.5)
        self.assertAlmostEqual(mid.r, mid.g, places=4)
        self.assertAlmostEqual(mid.g, mid.b, places=4)
        self.assertAlmostEqual(mid.to_hcl()[2], 50.0, places=3)

    def test_luminance_increases_across_mono(self):
        table = GradientTable([("#000000", 0.0), ("#ffffff", 1.0)])
        values = [table.interpolate(i / 10).to_hcl()[2] for i in range(11)]
        self.assertEqual(values, sorted(values))

    def test_results_stay_in_gamut(self):
        table = GradientTable([("#12c2e9", 0.0), ("#c471ed", 0.5), ("#f64f59", 1.0)])
        for i in range(21):
            c = table.interpolate(i / 20)
            for channel in (c.r, c.g, c.b):
                self.assertGreaterEqual(channel, 0.0)
                self.assertLessEqual(channel, 1.0)

    def test_zero_width_segment_returns_upper_colour(self):
        table = GradientTable([("#000000", 0.5), ("#ffffff", 0.5)])
        self.assertEqual(table.interpolate(0.5), Color(1.0, 1.0, 1.0))

    def test_accepts_colour_instances(self):
        red = Color(1.0, 0.0, 0.0)
        table = GradientTable([(red, 0.0), ("#0000ff", 1.0)])
        self.assertIs(table.interpolate(0.0), red)


if __name__ == "__main__":
    unittest.main()
