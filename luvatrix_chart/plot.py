from __future__ import annotations

from typing import TYPE_CHECKING

from .appearance import Appearance, default_appearance, parse_color
from .geometry import Rect
from .renderer import Renderer

if TYPE_CHECKING:
    from .area import Area

GRID_COLOR = parse_color("#2C3542")


class Plot:
    """Interior of an area: grid, series, lines and stickers."""

    def __init__(self, area: "Area", appearance: Appearance | None = None) -> None:
        self._area = area
        self.appearance = appearance if appearance is not None else default_appearance("plot")
        self.bounds = Rect()

    def set_bounds(self, x: float, y: float, width: float, height: float) -> None:
        self.bounds = Rect(float(x), float(y), float(width), float(height))

    def draw(self, renderer: Renderer, origin: tuple[float, float] = (0.0, 0.0)) -> None:
        rect = self.bounds.offset(*origin)
        if rect.width <= 0 or rect.height <= 0:
            return
        area = self._area
        renderer.fill_rect(rect, self.appearance.fill_rgba)
        self._draw_grid(renderer, rect)
        inner = (rect.x, rect.y)
        for series in area.series:
            if series.visible:
                series.draw(area, renderer, inner)
        for line in area.lines:
            line.draw(area, renderer, inner)
        for sticker in area.stickers:
            sticker.draw(area, renderer, inner)
        renderer.stroke_rect(rect, self.appearance.outline_rgba, self.appearance.outline_width)

    def _draw_grid(self, renderer: Renderer, rect: Rect) -> None:
        area = self._area
        x_axis = area.vertical_grid_axis
        if area.vertical_grid_visible and x_axis is not None and x_axis.is_horizontal():
            for value in x_axis.tick_values().tolist():
                x = rect.x + x_axis.get_coordinate(value)
                renderer.draw_line(x, rect.y, x, rect.bottom - 1, GRID_COLOR)
        y_axis = area.horizontal_grid_axis
        if area.horizontal_grid_visible and y_axis is not None and y_axis.is_vertical():
            for value in y_axis.tick_values().tolist():
                y = rect.y + y_axis.get_coordinate(value)
                renderer.draw_line(rect.x, y, rect.right - 1, y, GRID_COLOR)
