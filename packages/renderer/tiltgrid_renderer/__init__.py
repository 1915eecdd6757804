"""Renderer package for tiltgrid images: gradients, themes, canvas and grid drawing."""

from .canvas import Canvas, new_canvas
from .errors import (
    EmptyTable,
    FontLoadFailure,
    ImageWriteFailure,
    InvalidColorFormat,
    InvalidRenderConfig,
    RenderError,
    UnknownTheme,
)
from .gradient import GradientTable
from .grid import GridRenderer, exponential_row_fraction, linear_row_fraction, render_to_file
from .models import Cell, Color, ColorKeypoint, RenderConfig
from .themes import DEFAULT_THEME_NAME, ThemeRegistry, default_registry, list_themes

__all__ = [
    "Canvas",
    "Cell",
    "Color",
    "ColorKeypoint",
    "DEFAULT_THEME_NAME",
    "EmptyTable",
    "FontLoadFailure",
    "GradientTable",
    "GridRenderer",
    "ImageWriteFailure",
    "InvalidColorFormat",
    "InvalidRenderConfig",
    "RenderConfig",
    "RenderError",
    "ThemeRegistry",
    "UnknownTheme",
    "default_registry",
    "exponential_row_fraction",
    "linear_row_fraction",
    "list_themes",
    "new_canvas",
    "render_to_file",
]
