"""Typed renderer models."""

from __future__ import annotations

import re
from dataclasses import dataclass

import numpy as np

from .colorspace import hcl_to_rgb, interp_angle, rgb_to_hcl
from .errors import InvalidColorFormat, InvalidRenderConfig

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{6})")

# Below this chroma a colour has no meaningful hue.
ACHROMATIC_CHROMA = 1e-2

BACKGROUNDS = ("black", "white")


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: object) -> Color:
        match = _HEX_RE.fullmatch(value) if isinstance(value, str) else None
        if match is None:
            raise InvalidColorFormat(value)
        digits = match.group(1)
        r, g, b = (int(digits[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
        return cls(r, g, b)

    @classmethod
    def from_hcl(cls, hue: float, chroma: float, luminance: float) -> Color:
        r, g, b = hcl_to_rgb(np.array([hue, chroma, luminance]))[0]
        return cls(float(r), float(g), float(b))

    def hex(self) -> str:
        r, g, b = self.rgba8()[:3]
        return f"#{r:02x}{g:02x}{b:02x}"

    def to_hcl(self) -> tuple[float, float, float]:
        hue, chroma, luminance = rgb_to_hcl(np.array([self.r, self.g, self.b]))[0]
        return float(hue), float(chroma), float(luminance)

    def clamped(self) -> Color:
        r, g, b = np.clip([self.r, self.g, self.b], 0.0, 1.0)
        return Color(float(r), float(g), float(b))

    def blend_hcl(self, other: Color, t: float) -> Color:
        """Blend towards ``other`` in HCL space. The result may be out of gamut."""
        h1, c1, l1 = self.to_hcl()
        h2, c2, l2 = other.to_hcl()

        # greys borrow the hue of the other end so the blend does not swing through unrelated hues
        if c1 <= ACHROMATIC_CHROMA and c2 > ACHROMATIC_CHROMA:
            h1 = h2
        if c2 <= ACHROMATIC_CHROMA and c1 > ACHROMATIC_CHROMA:
            h2 = h1

        return Color.from_hcl(interp_angle(h1, h2, t), c1 + t * (c2 - c1), l1 + t * (l2 - l1))

    def rgba8(self, alpha: float = 1.0) -> tuple[int, int, int, int]:
        channels = np.clip([self.r, self.g, self.b, alpha], 0.0, 1.0)
        return tuple(int(round(c * 255)) for c in channels)  # type: ignore[return-value]


@dataclass(frozen=True)
class ColorKeypoint:
    color: Color
    position: float


@dataclass(frozen=True)
class RenderConfig:
    columns: int = 12
    rows: int = 24
    canvas_width: int = 4096
    canvas_height: int = 4096
    padding: int = 0
    stroke_width: float = 1.0
    max_rotation_degrees: float = 90.0
    max_offset_fraction: float = 1.0
    fill_alpha: float = 0.2
    theme: str = "mono"
    use_exponential_row_scale: bool = False
    include_signature: bool = True
    background: str = "black"
    seed: int | None = None
    font_path: str = "Go-Mono.ttf"
    font_size: float = 18.0
    signature_suffix: str = "// @BillGlover"

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise InvalidRenderConfig(f"Grid must have positive shape, got {self.columns}x{self.rows}")
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise InvalidRenderConfig(f"Canvas must have positive size, got {self.canvas_width}x{self.canvas_height}")
        if self.cell_size <= 0:
            raise InvalidRenderConfig("Canvas is too small for the requested grid")
        if self.padding < 0 or self.cell_size - 2 * self.padding <= 0:
            raise InvalidRenderConfig(f"Padding {self.padding} leaves no room in a {self.cell_size}px cell")
        if not 0.0 <= self.fill_alpha <= 1.0:
            raise InvalidRenderConfig(f"fill_alpha must be within [0, 1], got {self.fill_alpha}")
        if self.max_rotation_degrees < 0:
            raise InvalidRenderConfig("max_rotation_degrees must not be negative")
        if self.stroke_width < 0:
            raise InvalidRenderConfig("stroke_width must not be negative")
        if self.background not in BACKGROUNDS:
            raise InvalidRenderConfig(f"Unknown background: {self.background}")

    @property
    def cell_size(self) -> int:
        return min(self.canvas_width // (self.columns + 2), self.canvas_height // (self.rows + 3))

    @property
    def offset_x(self) -> int:
        return (self.canvas_width - (self.columns + 2) * self.cell_size) // 2

    def output_name(self) -> str:
        return f"{self.theme}_{self.canvas_width}x{self.canvas_height}_{self.fill_alpha * 100:03.0f}.png"


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    top_left: tuple[int, int]
    size: int
    padding: int
    center: tuple[float, float]
    rotation_degrees: float
    horizontal_offset: float
    color: Color
    fill_alpha: float

    @property
    def side(self) -> int:
        return self.size - 2 * self.padding

    @property
    def rect(self) -> tuple[float, float, float, float]:
        x, y = self.top_left
        return (x + self.padding + self.horizontal_offset, float(y + self.padding), float(self.side), float(self.side))
