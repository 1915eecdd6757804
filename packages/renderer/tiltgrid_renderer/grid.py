"""Grid of rotated, gradient-coloured squares."""

from __future__ import annotations

import hashlib
import logging
import math
import random
from pathlib import Path
from typing import Callable, Iterator

from .canvas import Canvas, new_canvas
from .gradient import GradientTable
from .models import Cell, RenderConfig

logger = logging.getLogger("tiltgrid.renderer")

BACKGROUND_COLORS = {
    "black": (0.0, 0.0, 0.0),
    "white": (1.0, 1.0, 1.0),
}

SIGNATURE_RGBA = (0.5, 0.5, 0.5, 0.5)


def linear_row_fraction(row: int, rows: int) -> float:
    return row / rows


def exponential_row_fraction(row: int, rows: int) -> float:
    """``1 - log(rows - row) / log(rows)``: rises slowly at the top, quickly at the bottom.

    The formula diverges to +inf once ``row`` reaches ``rows``; that is clamped to 1.0.
    A single-row grid has no progression and stays at 0.0.
    """
    if rows - row <= 0:
        return 1.0
    if rows == 1:
        return 0.0
    return 1.0 - math.log(rows - row) / math.log(rows)


class GridRenderer:
    """Draws ``config.rows`` x ``config.columns`` jittered squares onto a canvas."""

    def __init__(
        self,
        config: RenderConfig,
        gradient: GradientTable,
        rng: random.Random | None = None,
        canvas_factory: Callable[[int, int], Canvas] = new_canvas,
    ) -> None:
        self.config = config
        self.gradient = gradient
        self.rng = rng if rng is not None else random.Random(config.seed)
        self._canvas_factory = canvas_factory

    def row_fraction(self, row: int) -> float:
        if self.config.use_exponential_row_scale:
            return exponential_row_fraction(row, self.config.rows)
        return linear_row_fraction(row, self.config.rows)

    def cells(self) -> Iterator[Cell]:
        """Yield every cell, rows outer and columns inner. Consumes two random draws per cell."""
        cfg = self.config
        size = cfg.cell_size
        side = size - 2 * cfg.padding

        for row in range(cfg.rows):
            fraction = self.row_fraction(row)
            # colour always follows the linear fraction, even when geometry is exponential
            color = self.gradient.interpolate(linear_row_fraction(row, cfg.rows))

            for col in range(cfg.columns):
                x = (col + 1) * size + cfg.offset_x
                y = (row + 1) * size
                rotation = fraction * (self.rng.random() * cfg.max_rotation_degrees * 2.0 - cfg.max_rotation_degrees)
                offset = cfg.max_offset_fraction * fraction * (self.rng.random() * size * 2 - size)
                yield Cell(
                    row=row,
                    col=col,
                    top_left=(x, y),
                    size=size,
                    padding=cfg.padding,
                    center=(x + cfg.padding + side / 2.0, y + cfg.padding + side / 2.0),
                    rotation_degrees=rotation,
                    horizontal_offset=offset,
                    color=color,
                    fill_alpha=cfg.fill_alpha,
                )

    def draw_cell(self, canvas: Canvas, cell: Cell) -> None:
        c = cell.color
        with canvas.checkpoint():
            canvas.rotate_about(math.radians(cell.rotation_degrees), *cell.center)

            canvas.set_color(c.r, c.g, c.b, 1.0)
            canvas.set_line_width(self.config.stroke_width)
            canvas.draw_rectangle(*cell.rect)
            canvas.stroke()

            canvas.set_color(c.r, c.g, c.b, cell.fill_alpha)
            canvas.draw_rectangle(*cell.rect)
            canvas.fill()

    def paint_background(self, canvas: Canvas) -> None:
        canvas.set_color(*BACKGROUND_COLORS[self.config.background], 1.0)
        canvas.draw_rectangle(0, 0, canvas.width, canvas.height)
        canvas.fill()

    def signature(self, canvas: Canvas) -> str:
        digest = hashlib.sha256(canvas.encode_png()).hexdigest()
        return f"{digest} {self.config.signature_suffix}".rstrip()

    def draw_signature(self, canvas: Canvas) -> str:
        """Stamp a caption derived from the PNG bytes of the canvas as drawn so far."""
        cfg = self.config
        canvas.load_font_face(cfg.font_path, cfg.font_size)

        caption = self.signature(canvas)
        width, height = canvas.measure_text(caption)
        grid_width = cfg.columns * cfg.cell_size
        left = (cfg.canvas_width - grid_width) // 2
        x = grid_width + left - width
        y = (cfg.rows + 2.5) * cfg.cell_size - height

        canvas.set_color(*SIGNATURE_RGBA)
        canvas.draw_text(caption, x, y)
        return caption

    def render(self) -> Canvas:
        cfg = self.config
        canvas = self._canvas_factory(cfg.canvas_width, cfg.canvas_height)
        self.paint_background(canvas)

        count = 0
        for cell in self.cells():
            self.draw_cell(canvas, cell)
            count += 1
        logger.info(
            f"drew {count} cells theme={cfg.theme} cell_size={cfg.cell_size}",
            extra={
                "event": "grid_drawn",
                "theme": cfg.theme,
                "seed": cfg.seed,
                "cells": count,
                "cell_size": cfg.cell_size,
            },
        )

        if cfg.include_signature:
            caption = self.draw_signature(canvas)
            logger.info(f"signed {caption}", extra={"event": "signature_drawn", "digest": caption.split(" ", 1)[0]})
        return canvas


def render_to_file(
    config: RenderConfig, gradient: GradientTable, output_dir: str | Path, rng: random.Random | None = None
) -> Path:
    """Render ``config`` and write it to ``output_dir`` under its conventional file name."""
    canvas = GridRenderer(config, gradient, rng=rng).render()
    path = canvas.save_png(Path(output_dir) / config.output_name())
    logger.info(f"saved {path}", extra={"event": "image_saved", "path": str(path), "seed": config.seed})
    return path
