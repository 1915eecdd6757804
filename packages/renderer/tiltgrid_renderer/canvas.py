"""Pillow-backed drawing surface with a save/restore affine transform stack."""

from __future__ import annotations

import math
import os
import tempfile
from contextlib import contextmanager
from io import BytesIO
from pathlib import Path
from typing import Iterator

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .errors import FontLoadFailure, ImageWriteFailure

Point = tuple[float, float]


def _translation(x: float, y: float) -> np.ndarray:
    return np.array([[1.0, 0.0, x], [0.0, 1.0, y], [0.0, 0.0, 1.0]])


def _rotation(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


class Canvas:
    """Path-based drawing in the spirit of a 2D vector context.

    Shapes are added to the current path with ``draw_rectangle`` and then
    committed with ``stroke`` or ``fill``. Coordinates pass through the current
    transform, which ``push``/``pop`` (or the ``checkpoint`` context manager)
    save and restore together with the colour and line width.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.image = Image.new("RGB", (width, height), (0, 0, 0))
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self._matrix = np.identity(3)
        self._stack: list[tuple[np.ndarray, tuple[int, int, int, int], float]] = []
        self._color = (0, 0, 0, 255)
        self._line_width = 1.0
        self._path: list[list[Point]] = []
        self._font: ImageFont.FreeTypeFont | None = None

    @property
    def depth(self) -> int:
        return len(self._stack)

    def push(self) -> None:
        self._stack.append((self._matrix.copy(), self._color, self._line_width))

    def pop(self) -> None:
        if not self._stack:
            raise RuntimeError("pop() without matching push()")
        self._matrix, self._color, self._line_width = self._stack.pop()

    @contextmanager
    def checkpoint(self) -> Iterator[Canvas]:
        self.push()
        try:
            yield self
        finally:
            self.pop()

    def translate(self, x: float, y: float) -> None:
        self._matrix = self._matrix @ _translation(x, y)

    def rotate(self, angle: float) -> None:
        self._matrix = self._matrix @ _rotation(angle)

    def rotate_about(self, angle: float, cx: float, cy: float) -> None:
        """Rotate by ``angle`` radians about ``(cx, cy)``; positive is clockwise on screen."""
        self.translate(cx, cy)
        self.rotate(angle)
        self.translate(-cx, -cy)

    def transform_point(self, x: float, y: float) -> Point:
        px, py, _ = self._matrix @ np.array([x, y, 1.0])
        return float(px), float(py)

    def set_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        channels = np.clip([r, g, b, a], 0.0, 1.0)
        self._color = tuple(int(round(c * 255)) for c in channels)  # type: ignore[assignment]

    def set_line_width(self, width: float) -> None:
        self._line_width = float(width)

    def draw_rectangle(self, x: float, y: float, w: float, h: float) -> None:
        corners = ((x, y), (x + w, y), (x + w, y + h), (x, y + h))
        self._path.append([self.transform_point(cx, cy) for cx, cy in corners])

    def stroke(self) -> None:
        """Outline the current path. Widths round to whole pixels; any positive width draws at least 1px."""
        width = max(1, int(round(self._line_width))) if self._line_width > 0 else 0
        if width > 0 and self._color[3] > 0:
            for polygon in self._path:
                self._draw.line(polygon + polygon[:1], fill=self._color, width=width, joint="curve")
        self._path = []

    def fill(self) -> None:
        if self._color[3] > 0:
            for polygon in self._path:
                self._draw.polygon(polygon, fill=self._color)
        self._path = []

    def load_font_face(self, path: str | os.PathLike[str], size: float) -> None:
        try:
            self._font = ImageFont.truetype(str(path), size)
        except OSError as exc:
            raise FontLoadFailure(str(path), exc) from exc

    def set_font(self, font: ImageFont.FreeTypeFont) -> None:
        self._font = font

    def _require_font(self) -> ImageFont.FreeTypeFont:
        if self._font is None:
            raise RuntimeError("No font face loaded")
        return self._font

    def measure_text(self, text: str) -> tuple[float, float]:
        """Return ``(advance_width, line_height)`` of ``text`` in pixels."""
        font = self._require_font()
        width = self._draw.textlength(text, font=font)
        ascent, descent = font.getmetrics()
        return float(width), float(ascent + descent)

    def draw_text(self, text: str, x: float, y: float) -> None:
        """Draw ``text`` with its baseline starting at ``(x, y)``.

        The position goes through the current transform; glyphs are not rotated.
        """
        font = self._require_font()
        self._draw.text(self.transform_point(x, y), text, font=font, fill=self._color, anchor="ls")

    def encode_png(self) -> bytes:
        buf = BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()

    def save_png(self, path: str | os.PathLike[str]) -> Path:
        """Write the canvas to ``path`` atomically: the file is either complete or absent."""
        target = Path(path)
        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=target.parent, prefix=f".{target.stem}-", suffix=".png", delete=False
            ) as handle:
                tmp_name = handle.name
                self.image.save(handle, format="PNG")
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ImageWriteFailure(str(target), exc) from exc
        return target


def new_canvas(width: int, height: int) -> Canvas:
    return Canvas(width, height)
