import sys
import unittest
from dataclasses import FrozenInstanceError
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from tiltgrid_renderer.errors import InvalidRenderConfig
from tiltgrid_renderer.models import RenderConfig


class RenderConfigTests(unittest.TestCase):
    def test_default_geometry(self):
        cfg = RenderConfig(columns=12, rows=24, canvas_width=4096, canvas_height=4096, padding=0)
        self.assertEqual(cfg.cell_size, 151)
        self.assertEqual(cfg.offset_x, 17)

    def test_wide_canvas_is_limited_by_width(self):
        cfg = RenderConfig(columns=4, rows=2, canvas_width=600, canvas_height=1000)
        self.assertEqual(cfg.cell_size, 100)
        self.assertEqual(cfg.offset_x, 0)

    def test_output_name(self):
        self.assertEqual(RenderConfig(theme="flare").output_name(), "flare_4096x4096_020.png")
        self.assertEqual(RenderConfig(fill_alpha=0.05).output_name(), "mono_4096x4096_005.png")
        self.assertEqual(RenderConfig(fill_alpha=1.0, canvas_width=800, canvas_height=600).output_name(), "mono_800x600_100.png")

    def test_invalid_shapes_rejected(self):
        bad = [
            {"columns": 0},
            {"rows": -1},
            {"canvas_width": 10, "canvas_height": 10},
            {"padding": 80},
            {"fill_alpha": 1.5},
            {"max_rotation_degrees": -1.0},
            {"background": "grey"},
        ]
        for kwargs in bad:
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidRenderConfig):
                    RenderConfig(**kwargs)

    def test_frozen(self):
        cfg = RenderConfig()
        with self.assertRaises(FrozenInstanceError):
            cfg.rows = 3  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
