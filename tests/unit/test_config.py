import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from tiltgrid_core.config import (
    AppConfig,
    RenderSettings,
    apply_overrides,
    apply_preset,
    list_presets,
    load_config,
    save_config,
)
from tiltgrid_renderer import RenderConfig


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.render.columns, 12)
            self.assertEqual(cfg.render.rows, 24)
            self.assertEqual(cfg.render.theme, "mono")
            self.assertTrue(cfg.render.include_signature)
            self.assertEqual(cfg.output.directory, "img")

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.render.theme = "flare"
            cfg.render.fill_alpha = 0.35
            cfg.preset = "exponential"
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.render.theme, "flare")
            self.assertEqual(reloaded.render.fill_alpha, 0.35)
            self.assertEqual(reloaded.preset, "exponential")

    def test_partial_and_out_of_range_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "preset": "psychedelic",
                "render": {"fill_alpha": 3, "background": "grey", "rows": 0, "unknown_key": 1},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.render.fill_alpha, 1.0)
            self.assertEqual(cfg.render.background, "black")
            self.assertEqual(cfg.render.rows, 1)
            self.assertEqual(cfg.render.columns, 12)
            self.assertIsNone(cfg.preset)

    def test_unreadable_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_wrongly_typed_values_fall_back_to_defaults(self):
        cases = [
            {"render": {"columns": "twelve"}},
            {"render": []},
            {"render": {"theme": 5}},
            {"diagnostics": {"keep_log_files": None}},
            {"output": {"directory": 3}},
            {"preset": ["paper"]},
            [],
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            for raw in cases:
                with self.subTest(raw=raw):
                    path.write_text(json.dumps(raw), encoding="utf-8")
                    self.assertEqual(load_config(path), AppConfig())


class PresetTests(unittest.TestCase):
    def test_presets_listed(self):
        self.assertEqual(list_presets(), ["classic", "exponential", "paper", "unsigned"])

    def test_apply_preset(self):
        paper = apply_preset(RenderSettings(), "paper")
        self.assertEqual(paper.background, "white")
        self.assertEqual(paper.theme, "black")
        self.assertTrue(apply_preset(RenderSettings(), "exponential").use_exponential_row_scale)
        self.assertFalse(apply_preset(RenderSettings(), "unsigned").include_signature)
        self.assertEqual(apply_preset(RenderSettings(), "classic"), RenderSettings())

    def test_unknown_preset(self):
        with self.assertRaises(ValueError):
            apply_preset(RenderSettings(), "nope")

    def test_overrides_skip_none(self):
        settings = apply_overrides(RenderSettings(), {"rows": 8, "theme": None, "seed": 4})
        self.assertEqual(settings.rows, 8)
        self.assertEqual(settings.theme, "mono")

    def test_to_render_config(self):
        cfg = RenderSettings(theme="harvey").to_render_config(seed=42)
        self.assertIsInstance(cfg, RenderConfig)
        self.assertEqual(cfg.theme, "harvey")
        self.assertEqual(cfg.seed, 42)


if __name__ == "__main__":
    unittest.main()
