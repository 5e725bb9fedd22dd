from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, ClassVar, Sequence

import numpy as np

from .appearance import Appearance, default_appearance
from .axis import AXIS_SIDES
from .errors import ChartDocumentError
from .geometry import Rect
from .renderer import Renderer
from .schema import (
    field_path,
    optional_int,
    require_bool,
    require_float_list,
    require_int,
    require_obj,
    require_str,
)

if TYPE_CHECKING:
    from .area import Area


class SeriesBase:
    """Data series drawn in an area, addressed by integer scale index along X.

    Point ``i`` sits at scale index ``index_offset + i``.
    """

    type_id: ClassVar[str] = ""

    def __init__(
        self,
        name: str = "",
        *,
        visible: bool = True,
        x_axis_side: str = "bottom",
        y_axis_side: str = "right",
        x_axis_virtual_id: int | None = None,
        y_axis_virtual_id: int | None = None,
        index_offset: int = 0,
        appearance: Appearance | None = None,
    ) -> None:
        for label, side in (("x_axis_side", x_axis_side), ("y_axis_side", y_axis_side)):
            if side not in AXIS_SIDES:
                raise ValueError(f"{label} must be one of {', '.join(AXIS_SIDES)}")
        self.name = name
        self.visible = visible
        self.x_axis_side = x_axis_side
        self.y_axis_side = y_axis_side
        self.x_axis_virtual_id = x_axis_virtual_id
        self.y_axis_virtual_id = y_axis_virtual_id
        self.index_offset = int(index_offset)
        self.appearance = appearance if appearance is not None else default_appearance("series")

    def point_count(self) -> int:
        raise NotImplementedError

    def has_points(self) -> bool:
        return self.point_count() > 0

    def get_first_scale_index(self) -> int:
        return self.index_offset

    def get_last_scale_index(self) -> int:
        return self.index_offset + self.point_count() - 1

    def _window(self, max_x: float | None, min_x: float | None) -> slice | None:
        count = self.point_count()
        if count == 0:
            return None
        if min_x is not None and max_x is not None and min_x > max_x:
            min_x, max_x = max_x, min_x
        lo = 0
        hi = count - 1
        if min_x is not None and math.isfinite(min_x):
            lo = max(lo, math.ceil(min_x) - self.index_offset)
        if max_x is not None and math.isfinite(max_x):
            hi = min(hi, math.floor(max_x) - self.index_offset)
        if hi < lo:
            return None
        return slice(lo, hi + 1)

    def _extrema(self) -> tuple[np.ndarray, np.ndarray]:
        """Per-point (high, low) arrays used for the price range query."""
        raise NotImplementedError

    def get_max_min_price(self, max_x: float | None, min_x: float | None) -> tuple[float, float] | None:
        window = self._window(max_x, min_x)
        if window is None:
            return None
        highs, lows = self._extrema()
        highs = highs[window]
        lows = lows[window]
        highs = highs[np.isfinite(highs)]
        lows = lows[np.isfinite(lows)]
        if highs.size == 0 or lows.size == 0:
            return None
        return (float(np.max(highs)), float(np.min(lows)))

    def draw(self, area: "Area", renderer: Renderer, origin: tuple[float, float]) -> None:
        raise NotImplementedError

    def _axes_for(self, area: "Area"):
        x_axis = area.get_axis(self.x_axis_side, self.x_axis_virtual_id)
        y_axis = area.get_axis(self.y_axis_side, self.y_axis_virtual_id)
        return x_axis, y_axis

    def _common_to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "visible": self.visible,
            "xAxisSide": self.x_axis_side,
            "yAxisSide": self.y_axis_side,
            "xAxisVirtualId": self.x_axis_virtual_id,
            "yAxisVirtualId": self.y_axis_virtual_id,
            "indexOffset": self.index_offset,
            "appearance": self.appearance.to_dict(),
        }

    @staticmethod
    def _common_from_dict(doc: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "name": require_str(doc, "name", path),
            "visible": require_bool(doc, "visible", path),
            "x_axis_side": require_str(doc, "xAxisSide", path, choices=AXIS_SIDES),
            "y_axis_side": require_str(doc, "yAxisSide", path, choices=AXIS_SIDES),
            "x_axis_virtual_id": optional_int(doc, "xAxisVirtualId", path),
            "y_axis_virtual_id": optional_int(doc, "yAxisVirtualId", path),
            "index_offset": require_int(doc, "indexOffset", path),
            "appearance": Appearance.from_dict(require_obj(doc, "appearance", path), field_path(path, "appearance")),
        }

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


class LinearSeries(SeriesBase):
    """One value per scale index, drawn as a polyline."""

    type_id: ClassVar[str] = "linear"

    def __init__(self, name: str = "", values: Sequence[float] = (), **kwargs: Any) -> None:
        super().__init__(name, **kwargs)
        self.values = np.asarray(values, dtype=np.float64)

    def point_count(self) -> int:
        return int(self.values.size)

    def append(self, value: float) -> None:
        self.values = np.append(self.values, float(value))

    def _extrema(self) -> tuple[np.ndarray, np.ndarray]:
        return self.values, self.values

    def draw(self, area: "Area", renderer: Renderer, origin: tuple[float, float]) -> None:
        x_axis, y_axis = self._axes_for(area)
        if x_axis is None or y_axis is None or not self.has_points():
            return
        ox, oy = origin
        xs: list[float] = []
        ys: list[float] = []
        for i, value in enumerate(self.values.tolist()):
            if not math.isfinite(value):
                # Gap: flush the current run.
                renderer.draw_polyline(xs, ys, self.appearance.outline_rgba, self.appearance.outline_width)
                xs, ys = [], []
                continue
            xs.append(ox + x_axis.get_coordinate(self.index_offset + i))
            ys.append(oy + y_axis.get_coordinate(value))
        renderer.draw_polyline(xs, ys, self.appearance.outline_rgba, self.appearance.outline_width)

    def to_dict(self) -> dict[str, Any]:
        out = self._common_to_dict()
        out["values"] = [float(v) for v in self.values.tolist()]
        return out

    @classmethod
    def from_dict(cls, doc: dict[str, Any], path: str) -> "LinearSeries":
        common = cls._common_from_dict(doc, path)
        return cls(values=require_float_list(doc, "values", path), **common)


class StockSeries(SeriesBase):
    """Open/high/low/close candles."""

    type_id: ClassVar[str] = "stock"

    def __init__(
        self,
        name: str = "",
        opens: Sequence[float] = (),
        highs: Sequence[float] = (),
        lows: Sequence[float] = (),
        closes: Sequence[float] = (),
        *,
        rise_color: str = "#26A69A",
        fall_color: str = "#EF5350",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, **kwargs)
        self.opens = np.asarray(opens, dtype=np.float64)
        self.highs = np.asarray(highs, dtype=np.float64)
        self.lows = np.asarray(lows, dtype=np.float64)
        self.closes = np.asarray(closes, dtype=np.float64)
        if not (self.opens.size == self.highs.size == self.lows.size == self.closes.size):
            raise ValueError("open/high/low/close lengths must match")
        self.rise_color = rise_color
        self.fall_color = fall_color
        self._rise = Appearance(fill_color=rise_color, outline_color=rise_color)
        self._fall = Appearance(fill_color=fall_color, outline_color=fall_color)

    def point_count(self) -> int:
        return int(self.closes.size)

    def append(self, open_: float, high: float, low: float, close: float) -> None:
        self.opens = np.append(self.opens, float(open_))
        self.highs = np.append(self.highs, float(high))
        self.lows = np.append(self.lows, float(low))
        self.closes = np.append(self.closes, float(close))

    def _extrema(self) -> tuple[np.ndarray, np.ndarray]:
        return self.highs, self.lows

    def draw(self, area: "Area", renderer: Renderer, origin: tuple[float, float]) -> None:
        x_axis, y_axis = self._axes_for(area)
        if x_axis is None or y_axis is None or not self.has_points():
            return
        ox, oy = origin
        slot = abs(x_axis.get_coordinate(1.0) - x_axis.get_coordinate(0.0))
        body_w = max(1.0, slot * 0.7)
        for i in range(self.point_count()):
            o, h, l, c = (float(self.opens[i]), float(self.highs[i]), float(self.lows[i]), float(self.closes[i]))
            if not all(math.isfinite(v) for v in (o, h, l, c)):
                continue
            look = self._rise if c >= o else self._fall
            x = ox + x_axis.get_coordinate(self.index_offset + i)
            renderer.draw_line(x, oy + y_axis.get_coordinate(h), x, oy + y_axis.get_coordinate(l), look.outline_rgba)
            top = oy + y_axis.get_coordinate(max(o, c))
            bottom = oy + y_axis.get_coordinate(min(o, c))
            renderer.fill_rect(Rect(x - body_w / 2.0, top, body_w, max(1.0, bottom - top)), look.fill_rgba)

    def to_dict(self) -> dict[str, Any]:
        out = self._common_to_dict()
        out["open"] = [float(v) for v in self.opens.tolist()]
        out["high"] = [float(v) for v in self.highs.tolist()]
        out["low"] = [float(v) for v in self.lows.tolist()]
        out["close"] = [float(v) for v in self.closes.tolist()]
        out["riseColor"] = self.rise_color
        out["fallColor"] = self.fall_color
        return out

    @classmethod
    def from_dict(cls, doc: dict[str, Any], path: str) -> "StockSeries":
        common = cls._common_from_dict(doc, path)
        opens, highs, lows, closes = (require_float_list(doc, key, path) for key in ("open", "high", "low", "close"))
        rise_color = require_str(doc, "riseColor", path)
        fall_color = require_str(doc, "fallColor", path)
        try:
            return cls(
                opens=opens,
                highs=highs,
                lows=lows,
                closes=closes,
                rise_color=rise_color,
                fall_color=fall_color,
                **common,
            )
        except ValueError as exc:
            raise ChartDocumentError(str(exc), path=path) from exc
