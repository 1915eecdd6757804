"""Core services for tiltgrid: persistent settings, presets, and logging."""

from .config import (
    AppConfig,
    RenderSettings,
    apply_overrides,
    apply_preset,
    list_presets,
    load_config,
    save_config,
)
from .logging_setup import configure_logging, get_logger, install_crash_hooks

__all__ = [
    "AppConfig",
    "RenderSettings",
    "apply_overrides",
    "apply_preset",
    "configure_logging",
    "get_logger",
    "install_crash_hooks",
    "list_presets",
    "load_config",
    "save_config",
]
