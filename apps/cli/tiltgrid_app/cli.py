"""CLI entrypoints for rendering tiltgrid images and inspecting themes, presets and settings."""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import asdict
from pathlib import Path

from tiltgrid_core import (
    AppConfig,
    apply_overrides,
    apply_preset,
    configure_logging,
    get_logger,
    list_presets,
    load_config,
    save_config,
)
from tiltgrid_core.config import PRESETS, config_path
from tiltgrid_renderer import RenderError, default_registry, render_to_file
from tiltgrid_renderer.models import BACKGROUNDS

# argparse dest -> RenderSettings field
_RENDER_FLAGS = (
    "columns",
    "rows",
    "canvas_width",
    "canvas_height",
    "padding",
    "stroke_width",
    "max_rotation_degrees",
    "max_offset_fraction",
    "fill_alpha",
    "theme",
    "use_exponential_row_scale",
    "include_signature",
    "background",
    "font_path",
    "font_size",
)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _load(args: argparse.Namespace) -> AppConfig:
    return load_config(Path(args.config).expanduser() if args.config else None)


def cmd_render(args: argparse.Namespace) -> int:
    cfg = _load(args)
    settings = cfg.render
    preset = args.preset or cfg.preset
    if preset:
        settings = apply_preset(settings, preset)
    settings = apply_overrides(settings, {name: getattr(args, name) for name in _RENDER_FLAGS})

    seed = args.seed if args.seed is not None else time.time_ns()
    render_config = settings.to_render_config(seed=seed)
    gradient = default_registry().get(render_config.theme)
    out_dir = Path(args.out_dir or cfg.output.directory).expanduser()

    path = render_to_file(render_config, gradient, out_dir)
    _print_json(
        {
            "success": True,
            "path": str(path),
            "seed": seed,
            "preset": preset,
            "theme": render_config.theme,
            "grid": f"{render_config.columns}x{render_config.rows}",
            "cell_size": render_config.cell_size,
        }
    )
    return 0


def cmd_themes(_args: argparse.Namespace) -> int:
    registry = default_registry()
    _print_json(
        {
            name: [{"color": k.color.hex(), "position": k.position} for k in registry.get(name).keypoints]
            for name in registry.names()
        }
    )
    return 0


def cmd_presets(_args: argparse.Namespace) -> int:
    _print_json({name: PRESETS[name] for name in list_presets()})
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    cfg = _load(args)
    _print_json({"path": str(args.config or config_path()), "config": asdict(cfg)})
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    target = Path(args.config).expanduser() if args.config else None
    path = save_config(AppConfig(), target)
    _print_json({"success": True, "path": str(path)})
    return 0


def _add_render_flags(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--columns", type=int, default=None, help="Number of columns in the grid (default 12)")
    cmd.add_argument("--rows", type=int, default=None, help="Number of rows in the grid (default 24)")
    cmd.add_argument("--width", dest="canvas_width", type=int, default=None, help="Image width in pixels (default 4096)")
    cmd.add_argument("--height", dest="canvas_height", type=int, default=None, help="Image height in pixels (default 4096)")
    cmd.add_argument("--padding", type=int, default=None, help="Padding between squares in pixels (default 0)")
    cmd.add_argument("--stroke-width", type=float, default=None, help="Outline width in pixels (default 1)")
    cmd.add_argument(
        "--max-rotation", dest="max_rotation_degrees", type=float, default=None, help="Maximum rotation in degrees (default 90)"
    )
    cmd.add_argument(
        "--max-offset",
        dest="max_offset_fraction",
        type=float,
        default=None,
        help="Maximum horizontal offset as a fraction of square size (default 1)",
    )
    cmd.add_argument("--alpha", dest="fill_alpha", type=float, default=None, help="Fill alpha for squares (default 0.2)")
    cmd.add_argument("--theme", default=None, help="Colour theme to use (default mono)")
    cmd.add_argument(
        "--exponential",
        dest="use_exponential_row_scale",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use an exponential scale for rotation and offset down the rows",
    )
    cmd.add_argument(
        "--sign",
        dest="include_signature",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Stamp a content hash signature below the grid (default on)",
    )
    cmd.add_argument("--background", choices=list(BACKGROUNDS), default=None)
    cmd.add_argument("--font", dest="font_path", default=None, help="TrueType font for the signature (default Go-Mono.ttf)")
    cmd.add_argument("--font-size", type=float, default=None)
    cmd.add_argument("--seed", type=int, default=None, help="Random seed; omitted means a fresh seed each run")
    cmd.add_argument("--preset", choices=list_presets(), default=None)
    cmd.add_argument("--out-dir", default=None, help="Output directory (default img)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tiltgrid", description="Generative grids of tilted gradient squares")
    parser.add_argument("--config", default=None, help="Settings file (default: per-user config path)")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render one image")
    _add_render_flags(render_cmd)
    render_cmd.set_defaults(func=cmd_render)

    themes_cmd = sub.add_parser("themes", help="List colour themes")
    themes_cmd.set_defaults(func=cmd_themes)

    presets_cmd = sub.add_parser("presets", help="List render presets")
    presets_cmd.set_defaults(func=cmd_presets)

    config_cmd = sub.add_parser("config", help="Inspect or create the settings file")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print effective settings")
    show_cmd.set_defaults(func=cmd_config_show)
    init_cmd = config_sub.add_parser("init", help="Write default settings")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = _load(args)
        configure_logging(keep_files=cfg.diagnostics.keep_log_files, console=cfg.diagnostics.console_logging)
        return int(args.func(args))
    except (RenderError, ValueError) as exc:
        get_logger().error(f"{args.command} failed: {exc}", exc_info=True, extra={"event": "command_failed"})
        print(f"tiltgrid: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
