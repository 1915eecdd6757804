"""Persistent render settings, presets, and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from tiltgrid_renderer import DEFAULT_THEME_NAME, RenderConfig
from tiltgrid_renderer.models import BACKGROUNDS


CONFIG_VERSION = 1

logger = logging.getLogger("tiltgrid.config")


@dataclass
class RenderSettings:
    columns: int = 12
    rows: int = 24
    canvas_width: int = 4096
    canvas_height: int = 4096
    padding: int = 0
    stroke_width: float = 1.0
    max_rotation_degrees: float = 90.0
    max_offset_fraction: float = 1.0
    fill_alpha: float = 0.2
    theme: str = DEFAULT_THEME_NAME
    use_exponential_row_scale: bool = False
    include_signature: bool = True
    background: str = "black"
    font_path: str = "Go-Mono.ttf"
    font_size: float = 18.0
    signature_suffix: str = "// @BillGlover"

    def to_render_config(self, seed: int | None = None) -> RenderConfig:
        return RenderConfig(seed=seed, **asdict(self))


@dataclass
class OutputConfig:
    directory: str = "img"


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    console_logging: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    preset: str | None = None
    render: RenderSettings = field(default_factory=RenderSettings)
    output: OutputConfig = field(default_factory=OutputConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


# The historical renderer variants, expressed as overrides on RenderSettings.
PRESETS: dict[str, dict[str, Any]] = {
    "classic": {},
    "exponential": {"use_exponential_row_scale": True},
    "paper": {"background": "white", "theme": "black"},
    "unsigned": {"include_signature": False},
}


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "tiltgrid" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "tiltgrid" / "config.json"
    return Path.home() / ".config" / "tiltgrid" / "config.json"


def list_presets() -> list[str]:
    return sorted(PRESETS.keys())


def apply_preset(settings: RenderSettings, name: str) -> RenderSettings:
    try:
        overrides = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown preset: {name} (known: {', '.join(list_presets())})") from None
    return replace(settings, **overrides)


def apply_overrides(settings: RenderSettings, overrides: dict[str, Any]) -> RenderSettings:
    """Replace fields of ``settings`` with every non-None value in ``overrides``."""
    known = {f.name for f in fields(RenderSettings)}
    changes = {k: v for k, v in overrides.items() if k in known and v is not None}
    return replace(settings, **changes)


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_render(cfg: AppConfig) -> None:
    render = cfg.render
    render.columns = max(1, int(render.columns))
    render.rows = max(1, int(render.rows))
    render.canvas_width = max(1, int(render.canvas_width))
    render.canvas_height = max(1, int(render.canvas_height))
    render.padding = max(0, int(render.padding))
    render.stroke_width = float(max(0.0, render.stroke_width))
    render.max_rotation_degrees = float(abs(render.max_rotation_degrees))
    render.fill_alpha = float(max(0.0, min(1.0, render.fill_alpha)))
    render.max_offset_fraction = float(render.max_offset_fraction)
    render.font_size = float(render.font_size)
    render.use_exponential_row_scale = bool(render.use_exponential_row_scale)
    render.include_signature = bool(render.include_signature)
    for name in ("theme", "font_path", "signature_suffix"):
        if not isinstance(getattr(render, name), str):
            raise TypeError(f"render.{name} must be a string")
    if render.background not in BACKGROUNDS:
        render.background = "black"


def _normalize_diagnostics(cfg: AppConfig) -> None:
    cfg.diagnostics.keep_log_files = max(2, int(cfg.diagnostics.keep_log_files))
    cfg.diagnostics.console_logging = bool(cfg.diagnostics.console_logging)


def _normalize_output(cfg: AppConfig) -> None:
    if not isinstance(cfg.output.directory, str):
        raise TypeError("output.directory must be a string")


def _normalize_preset(cfg: AppConfig) -> None:
    if cfg.preset is not None and cfg.preset not in PRESETS:
        logger.warning(f"ignoring unknown preset {cfg.preset!r} in settings", extra={"event": "preset_ignored"})
        cfg.preset = None


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning(f"unreadable settings at {path}: {exc}", extra={"event": "config_unreadable"})
        return AppConfig()

    try:
        cfg = AppConfig(
            config_version=int(data.get("config_version", CONFIG_VERSION)),
            preset=data.get("preset"),
            render=_merge(RenderSettings, data.get("render", {})),
            output=_merge(OutputConfig, data.get("output", {})),
            diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
        )
        _normalize_render(cfg)
        _normalize_diagnostics(cfg)
        _normalize_output(cfg)
        _normalize_preset(cfg)
    except (AttributeError, TypeError, ValueError) as exc:
        logger.warning(f"malformed settings at {path}: {exc}", extra={"event": "config_unreadable"})
        return AppConfig()
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
