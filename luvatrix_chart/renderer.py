from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from .geometry import Rect
from .raster import draw_hline, draw_polyline, draw_segment, draw_text, draw_vline, fill_rect, new_canvas, text_size
from .raster.canvas import RGBA


class Renderer(Protocol):
    """Drawing capability the chart elements paint through.

    Coordinates are absolute pixels of the drawing surface, y grows downward.
    """

    def fill_rect(self, rect: Rect, color: RGBA) -> None:
        ...

    def stroke_rect(self, rect: Rect, color: RGBA, width: float = 1.0) -> None:
        ...

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: float = 1.0) -> None:
        ...

    def draw_polyline(self, xs: Sequence[float], ys: Sequence[float], color: RGBA, width: float = 1.0) -> None:
        ...

    def draw_text(self, x: float, y: float, text: str, color: RGBA, font_size_px: float) -> None:
        ...

    def text_size(self, text: str, font_size_px: float) -> tuple[int, int]:
        ...


class RasterRenderer:
    """Renderer backed by an RGBA numpy canvas."""

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 255)) -> None:
        self._canvas = new_canvas(width, height, color=background)

    @property
    def width(self) -> int:
        return int(self._canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self._canvas.shape[0])

    def to_rgba(self) -> np.ndarray:
        return self._canvas.copy()

    def fill_rect(self, rect: Rect, color: RGBA) -> None:
        fill_rect(
            self._canvas,
            int(round(rect.x)),
            int(round(rect.y)),
            int(round(rect.right)),
            int(round(rect.bottom)),
            color,
        )

    def stroke_rect(self, rect: Rect, color: RGBA, width: float = 1.0) -> None:
        if width <= 0 or rect.width <= 0 or rect.height <= 0:
            return
        x0 = int(round(rect.x))
        y0 = int(round(rect.y))
        x1 = int(round(rect.right)) - 1
        y1 = int(round(rect.bottom)) - 1
        draw_hline(self._canvas, x0, x1, y0, color)
        draw_hline(self._canvas, x0, x1, y1, color)
        draw_vline(self._canvas, x0, y0 + 1, y1 - 1, color)
        draw_vline(self._canvas, x1, y0 + 1, y1 - 1, color)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: float = 1.0) -> None:
        draw_segment(self._canvas, x0, y0, x1, y1, color=color, width=max(1, int(round(width))))

    def draw_polyline(self, xs: Sequence[float], ys: Sequence[float], color: RGBA, width: float = 1.0) -> None:
        draw_polyline(self._canvas, xs, ys, color, width=max(1, int(round(width))))

    def draw_text(self, x: float, y: float, text: str, color: RGBA, font_size_px: float) -> None:
        draw_text(self._canvas, int(round(x)), int(round(y)), text, color, font_size_px=font_size_px)

    def text_size(self, text: str, font_size_px: float) -> tuple[int, int]:
        return text_size(text, font_size_px=font_size_px)
