from __future__ import annotations

from typing import Sequence

from luvatrix_chart.raster.canvas import RGBA, draw_pixel


def draw_polyline(dst, xs: Sequence[float], ys: Sequence[float], color: RGBA, width: int = 1) -> None:
    if len(xs) < 2:
        return
    for i in range(len(xs) - 1):
        draw_segment(dst, xs[i], ys[i], xs[i + 1], ys[i + 1], color=color, width=width)


def draw_segment(dst, xa: float, ya: float, xb: float, yb: float, *, color: RGBA, width: int = 1) -> None:
    # Bresenham over rounded endpoints with a square brush.
    x0, y0, x1, y1 = int(round(xa)), int(round(ya)), int(round(xb)), int(round(yb))
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    radius = max(0, width // 2)
    while True:
        for yy in range(y0 - radius, y0 + radius + 1):
            for xx in range(x0 - radius, x0 + radius + 1):
                draw_pixel(dst, xx, yy, color)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
