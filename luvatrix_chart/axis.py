from __future__ import annotations

from typing import Any, Callable, Literal

import numpy as np

from .appearance import Appearance, default_appearance
from .axis_range import AxisRange
from .errors import ChartDocumentError
from .geometry import Rect
from .renderer import Renderer
from .schema import field_path, require_bool, require_float, require_obj, require_str
from .ticks import format_ticks_for_axis, generate_nice_ticks

AxisSide = Literal["left", "right", "top", "bottom"]
AXIS_SIDES: tuple[str, ...] = ("left", "right", "top", "bottom")

DEFAULT_AXIS_SIZE = 50.0
TICK_MARK_LEN = 4
TICK_LABEL_PAD = 3
HORIZONTAL_TICK_SPACING_PX = 90
VERTICAL_TICK_SPACING_PX = 45


class Axis:
    """One scale of an area: a side, a thickness, and a value range.

    Coordinates returned by :meth:`get_coordinate` are measured along the axis
    from its own origin; vertical axes are flipped so larger values sit higher.
    """

    def __init__(
        self,
        side: str,
        *,
        size: float = DEFAULT_AXIS_SIZE,
        visible: bool = True,
        axis_range: AxisRange | None = None,
        appearance: Appearance | None = None,
    ) -> None:
        if side not in AXIS_SIDES:
            raise ValueError(f"unknown axis side: {side}")
        if size < 0:
            raise ValueError("axis size must be >= 0")
        self.side: AxisSide = side  # type: ignore[assignment]
        self.size = float(size)
        self.visible = bool(visible)
        self.axis_range = axis_range if axis_range is not None else AxisRange()
        self.appearance = appearance if appearance is not None else default_appearance("axis")
        self.bounds = Rect()
        self.use_global_range = True
        self.global_axis_range: AxisRange | None = None
        self.label_formatter: Callable[[float], str] | None = None

    def is_horizontal(self) -> bool:
        return self.side in ("top", "bottom")

    def is_vertical(self) -> bool:
        return self.side in ("left", "right")

    def set_bounds(self, x: float, y: float, width: float, height: float) -> None:
        self.bounds = Rect(float(x), float(y), float(width), float(height))

    def get_size_or_invisible_size(self) -> float:
        return self.size if self.visible else 0.0

    def get_axis_range_or_global_axis_range(self) -> AxisRange:
        if self.use_global_range and self.global_axis_range is not None:
            return self.global_axis_range
        return self.axis_range

    def length(self) -> float:
        return self.bounds.width if self.is_horizontal() else self.bounds.height

    def get_coordinate(self, value: float) -> float:
        lo, hi = self.get_axis_range_or_global_axis_range().view_bounds()
        length = self.length()
        if length <= 0:
            return 0.0
        offset = (value - lo) * length / (hi - lo)
        return offset if self.is_horizontal() else length - offset

    def get_value_by_coordinate(self, coordinate: float, is_absolute: bool = False) -> float:
        lo, hi = self.get_axis_range_or_global_axis_range().view_bounds()
        if is_absolute:
            coordinate -= self.bounds.x if self.is_horizontal() else self.bounds.y
        length = self.length()
        if length <= 0:
            return lo
        offset = coordinate if self.is_horizontal() else length - coordinate
        return lo + offset * (hi - lo) / length

    def tick_values(self) -> np.ndarray:
        lo, hi = self.get_axis_range_or_global_axis_range().view_bounds()
        spacing = HORIZONTAL_TICK_SPACING_PX if self.is_horizontal() else VERTICAL_TICK_SPACING_PX
        target = max(2, int(self.length() // spacing))
        return generate_nice_ticks(lo, hi, target)

    def tick_labels(self, ticks: np.ndarray) -> list[str]:
        if self.label_formatter is not None:
            return [self.label_formatter(float(v)) for v in ticks]
        return format_ticks_for_axis(ticks)

    def draw(self, renderer: Renderer, origin: tuple[float, float] = (0.0, 0.0)) -> None:
        rect = self.bounds.offset(*origin)
        if rect.width <= 0 or rect.height <= 0:
            return
        look = self.appearance
        renderer.fill_rect(rect, look.fill_rgba)
        color = look.outline_rgba
        font = look.font_size_px
        if self.side == "left":
            renderer.draw_line(rect.right - 1, rect.y, rect.right - 1, rect.bottom - 1, color, look.outline_width)
        elif self.side == "right":
            renderer.draw_line(rect.x, rect.y, rect.x, rect.bottom - 1, color, look.outline_width)
        elif self.side == "top":
            renderer.draw_line(rect.x, rect.bottom - 1, rect.right - 1, rect.bottom - 1, color, look.outline_width)
        else:
            renderer.draw_line(rect.x, rect.y, rect.right - 1, rect.y, color, look.outline_width)

        ticks = self.tick_values()
        for value, label in zip(ticks.tolist(), self.tick_labels(ticks), strict=True):
            c = self.get_coordinate(value)
            tw, th = renderer.text_size(label, font)
            if self.is_horizontal():
                x = rect.x + c
                if self.side == "bottom":
                    renderer.draw_line(x, rect.y, x, rect.y + TICK_MARK_LEN, color)
                    ty = rect.y + TICK_MARK_LEN + TICK_LABEL_PAD
                else:
                    renderer.draw_line(x, rect.bottom - 1 - TICK_MARK_LEN, x, rect.bottom - 1, color)
                    ty = rect.bottom - 1 - TICK_MARK_LEN - TICK_LABEL_PAD - th
                renderer.draw_text(x - tw / 2.0, ty, label, look.text_rgba, font)
            else:
                y = rect.y + c
                if self.side == "left":
                    renderer.draw_line(rect.right - 1 - TICK_MARK_LEN, y, rect.right - 1, y, color)
                    tx = rect.right - 1 - TICK_MARK_LEN - TICK_LABEL_PAD - tw
                else:
                    renderer.draw_line(rect.x, y, rect.x + TICK_MARK_LEN, y, color)
                    tx = rect.x + TICK_MARK_LEN + TICK_LABEL_PAD
                renderer.draw_text(tx, y - th / 2.0, label, look.text_rgba, font)

    def to_dict(self) -> dict[str, Any]:
        return {
            "side": self.side,
            "visible": self.visible,
            "size": float(self.size),
            "useGlobalRange": self.use_global_range,
            "range": self.axis_range.to_dict(),
            "appearance": self.appearance.to_dict(),
        }

    @classmethod
    def from_dict(cls, doc: dict[str, Any], path: str) -> "Axis":
        side = require_str(doc, "side", path, choices=AXIS_SIDES)
        size = require_float(doc, "size", path)
        if size < 0:
            raise ChartDocumentError("must be >= 0", path=field_path(path, "size"))
        axis = cls(
            side,
            size=size,
            visible=require_bool(doc, "visible", path),
            axis_range=AxisRange.from_dict(require_obj(doc, "range", path), field_path(path, "range")),
            appearance=Appearance.from_dict(require_obj(doc, "appearance", path), field_path(path, "appearance")),
        )
        axis.use_global_range = require_bool(doc, "useGlobalRange", path)
        return axis
