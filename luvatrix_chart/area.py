from __future__ import annotations

import logging
from typing import Any

from .appearance import Appearance
from .axis import AXIS_SIDES, Axis
from .axis_range import AxisRange
from .axis_set import (
    BOTTOM_AXIS_ID,
    FIXED_AXIS_IDS,
    LEFT_AXIS_ID,
    RIGHT_AXIS_ID,
    TOP_AXIS_ID,
    VIRTUAL_AXIS_BASE,
    AxisSet,
    AxisVisitor,
    ChartCounters,
)
from .errors import ChartDocumentError, TypeNotRegisteredError
from .geometry import Margins, Rect
from .legend import Legend
from .line import Line
from .plot import Plot
from .registry import SERIES_TYPES, STICKER_TYPES, TypeRegistry
from .renderer import Renderer
from .schema import (
    expect_obj,
    field_path,
    require_bool,
    require_float,
    require_int,
    require_list,
    require_obj,
    require_str,
)
from .series import SeriesBase
from .settings import DEFAULT_SETTINGS, ChartSettings
from .stickers import StickerBase

LOGGER = logging.getLogger(__name__)

# Axes drawn in this order, after the legend and before the plot.
AXIS_DRAW_ORDER = (TOP_AXIS_ID, LEFT_AXIS_ID, RIGHT_AXIS_ID, BOTTOM_AXIS_ID)

_FIXED_SIDE_BY_ID = {axis_id: side for side, axis_id in FIXED_AXIS_IDS.items()}


class Area:
    """One pane of a chart: four fixed axes, optional virtual axes, a plot and a legend.

    Rectangles of axes, plot and legend are relative to the area's own origin.
    Virtual axes have zero thickness; their coordinates are relative to the plot.
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        counters: ChartCounters | None = None,
        settings: ChartSettings = DEFAULT_SETTINGS,
        series_types: TypeRegistry[SeriesBase] = SERIES_TYPES,
        sticker_types: TypeRegistry[StickerBase] = STICKER_TYPES,
    ) -> None:
        self.counters = counters if counters is not None else ChartCounters()
        self.settings = settings
        self.series_types = series_types
        self.sticker_types = sticker_types

        self.name = name if name is not None else self.counters.next_area_name()
        self.title = ""
        self.visible = True
        self.auto_height = True
        self.height_in_percents = 0.0
        self.vertical_grid_axis_side = "bottom"
        self.horizontal_grid_axis_side = "right"
        self.vertical_grid_visible = True
        self.horizontal_grid_visible = True
        self.global_margins = Margins()
        self.appearance = settings.appearance_for("area")
        self.bounds = Rect()
        self.global_x_range: AxisRange | None = None

        self.axes = AxisSet(self.counters)
        for side, axis_id in FIXED_AXIS_IDS.items():
            self.axes.put(axis_id, self._new_axis(side, visible=side in ("right", "bottom")))
        self.plot = Plot(self, settings.appearance_for("plot"))
        self.legend = Legend(
            self,
            visible=settings.legend_visible,
            side=settings.legend_side,
            appearance=settings.appearance_for("legend"),
        )
        self.series: list[SeriesBase] = []
        self.lines: list[Line] = []
        self.stickers: list[StickerBase] = []

    def _new_axis(self, side: str, *, visible: bool = True) -> Axis:
        axis = Axis(
            side,
            size=self.settings.axis_size,
            visible=visible,
            axis_range=AxisRange(margin_ratio=self.settings.margin_ratio, min_span=self.settings.min_span),
            appearance=self.settings.appearance_for("axis"),
        )
        if axis.is_horizontal():
            axis.global_axis_range = self.global_x_range
        return axis

    def __repr__(self) -> str:
        return f"Area(name={self.name!r}, series={len(self.series)}, axes={len(self.axes)})"

    # Axes

    @property
    def left_axis(self) -> Axis:
        return self.axes.get(LEFT_AXIS_ID)  # type: ignore[return-value]

    @property
    def right_axis(self) -> Axis:
        return self.axes.get(RIGHT_AXIS_ID)  # type: ignore[return-value]

    @property
    def top_axis(self) -> Axis:
        return self.axes.get(TOP_AXIS_ID)  # type: ignore[return-value]

    @property
    def bottom_axis(self) -> Axis:
        return self.axes.get(BOTTOM_AXIS_ID)  # type: ignore[return-value]

    def get_axis(self, side: str, virtual_id: int | None = None) -> Axis | None:
        if virtual_id is not None and virtual_id >= VIRTUAL_AXIS_BASE:
            return self.get_virtual_axis(virtual_id)
        return self.axes.fixed(side)

    def get_virtual_axis(self, axis_id: int) -> Axis | None:
        if axis_id < VIRTUAL_AXIS_BASE:
            return None
        return self.axes.get(axis_id)

    def add_virtual_axis(self, side: str) -> int:
        axis = self._new_axis(side)
        axis_id = self.axes.add_virtual(axis)
        self._layout_virtual_axes()
        return axis_id

    def remove_virtual_axis(self, axis_id: int) -> bool:
        return self.axes.remove_virtual(axis_id)

    def do_axis_action(self, visitor: AxisVisitor) -> None:
        self.axes.do_axis_action(visitor)

    def link_global_x_range(self, axis_range: AxisRange | None) -> None:
        """Point every horizontal axis at a range shared with other areas."""

        self.global_x_range = axis_range

        def link(_axis_id: int, axis: Axis) -> bool:
            if axis.is_horizontal():
                axis.global_axis_range = axis_range
            return True

        self.do_axis_action(link)

    def get_coordinate(self, side: str, value: float) -> float | None:
        axis = self.axes.fixed(side)
        return None if axis is None else axis.get_coordinate(value)

    def get_value_by_coordinate(self, side: str, coordinate: float, is_absolute: bool = False) -> float | None:
        axis = self.axes.fixed(side)
        return None if axis is None else axis.get_value_by_coordinate(coordinate, is_absolute)

    def set_all_axes_visible(self, visible: bool) -> None:
        def apply(_axis_id: int, axis: Axis) -> bool:
            axis.visible = visible
            return True

        self.do_axis_action(apply)

    def set_axes_visible(self, left: bool, top: bool, right: bool, bottom: bool) -> None:
        self.left_axis.visible = left
        self.top_axis.visible = top
        self.right_axis.visible = right
        self.bottom_axis.visible = bottom

    @property
    def vertical_grid_axis(self) -> Axis | None:
        return self.axes.fixed(self.vertical_grid_axis_side)

    @property
    def horizontal_grid_axis(self) -> Axis | None:
        return self.axes.fixed(self.horizontal_grid_axis_side)

    # Content

    def add_series(self, series: SeriesBase) -> SeriesBase:
        self.series.append(series)
        return series

    def remove_series(self, series: SeriesBase) -> bool:
        for i, item in enumerate(self.series):
            if item is series:
                del self.series[i]
                return True
        return False

    def find_series_by_name(self, name: str) -> SeriesBase | None:
        for series in self.series:
            if series.name == name:
                return series
        return None

    def add_line(self, line: Line) -> Line:
        self.lines.append(line)
        return line

    def add_sticker(self, sticker: StickerBase) -> StickerBase:
        self.stickers.append(sticker)
        return sticker

    # Pan and zoom

    def view_ranges(self) -> tuple[list[AxisRange], list[AxisRange]]:
        horizontal: list[AxisRange] = []
        vertical: list[AxisRange] = []
        seen: set[int] = set()

        def collect(_axis_id: int, axis: Axis) -> bool:
            axis_range = axis.get_axis_range_or_global_axis_range()
            if id(axis_range) not in seen:
                seen.add(id(axis_range))
                (horizontal if axis.is_horizontal() else vertical).append(axis_range)
            return True

        self.do_axis_action(collect)
        return horizontal, vertical

    def move(self, horizontal_factor: float, vertical_factor: float) -> None:
        h_ranges, v_ranges = self.view_ranges()
        for axis_range in h_ranges:
            axis_range.move_view_values(horizontal_factor)
        for axis_range in v_ranges:
            axis_range.move_view_values(vertical_factor)

    def zoom(self, horizontal_factor: float, vertical_factor: float) -> None:
        h_ranges, v_ranges = self.view_ranges()
        for axis_range in h_ranges:
            axis_range.zoom_view_values(horizontal_factor)
        for axis_range in v_ranges:
            axis_range.zoom_view_values(vertical_factor)

    def reset_view_values(self) -> None:
        h_ranges, v_ranges = self.view_ranges()
        for axis_range in h_ranges + v_ranges:
            axis_range.reset_view_values()

    # Auto range

    def _series_with_points(self) -> list[SeriesBase]:
        return [s for s in self.series if s.visible and s.has_points()]

    def reset_auto_values(self) -> None:
        for axis in self.axes:
            axis.axis_range.reset_auto_values()

    def calc_x_auto_values(self) -> None:
        for series in self._series_with_points():
            x_axis = self.get_axis(series.x_axis_side, series.x_axis_virtual_id)
            if x_axis is None or not x_axis.axis_range.is_auto():
                continue
            # One empty slot on each side so the outer candles are not clipped.
            x_axis.axis_range.expand_auto_values(series.get_last_scale_index() + 1, series.get_first_scale_index() - 1)

    def calc_y_auto_values(self) -> None:
        for series in self._series_with_points():
            x_axis = self.get_axis(series.x_axis_side, series.x_axis_virtual_id)
            y_axis = self.get_axis(series.y_axis_side, series.y_axis_virtual_id)
            if x_axis is None or y_axis is None or not y_axis.axis_range.is_auto():
                continue
            x_range = x_axis.get_axis_range_or_global_axis_range()
            found = series.get_max_min_price(
                x_range.get_max_view_value_or_auto_value(),
                x_range.get_min_view_value_or_auto_value(),
            )
            if found is None:
                continue
            high, low = found
            y_range = y_axis.axis_range
            margin = y_range.get_margin(high, low)
            y_range.expand_auto_values(high + margin, low - margin)

    def calc_auto_values(self) -> None:
        self.reset_auto_values()
        self.calc_x_auto_values()
        self.calc_y_auto_values()
        LOGGER.debug(
            "%s auto range x=%s y=%s",
            self.name,
            self.bottom_axis.get_axis_range_or_global_axis_range().view_bounds(),
            self.right_axis.axis_range.view_bounds(),
        )

    # Layout

    def get_side_margins(self) -> Margins:
        margins = Margins(
            left=self.left_axis.get_size_or_invisible_size(),
            top=self.top_axis.get_size_or_invisible_size(),
            right=self.right_axis.get_size_or_invisible_size(),
            bottom=self.bottom_axis.get_size_or_invisible_size(),
        )
        if self.legend.visible:
            width, height = self.legend.get_size()
            if self.legend.side == "left":
                margins.left += width
            elif self.legend.side == "right":
                margins.right += width
            elif self.legend.side == "top":
                margins.top += height
            else:
                margins.bottom += height
        return margins

    def set_global_margins(self, left: float, right: float) -> None:
        self.global_margins.left = float(left)
        self.global_margins.right = float(right)

    def set_bounds(self, bounds: Rect) -> None:
        self.compute_layout(bounds)

    def compute_layout(self, bounds: Rect) -> None:
        self.bounds = bounds
        margins = self.get_side_margins()
        left = max(margins.left, self.global_margins.left)
        right = max(margins.right, self.global_margins.right)
        top = margins.top
        bottom = margins.bottom
        plot_w = max(0.0, bounds.width - left - right)
        plot_h = max(0.0, bounds.height - top - bottom)

        top_size = self.top_axis.get_size_or_invisible_size()
        left_size = self.left_axis.get_size_or_invisible_size()
        right_size = self.right_axis.get_size_or_invisible_size()
        bottom_size = self.bottom_axis.get_size_or_invisible_size()
        self.top_axis.set_bounds(left, top - top_size, plot_w, top_size)
        self.bottom_axis.set_bounds(left, top + plot_h, plot_w, bottom_size)
        self.left_axis.set_bounds(left - left_size, top, left_size, plot_h)
        self.right_axis.set_bounds(left + plot_w, top, right_size, plot_h)
        self.plot.set_bounds(left, top, plot_w, plot_h)
        self._layout_virtual_axes()
        self._layout_legend(bounds)
        LOGGER.debug("%s layout bounds=%s plot=%s", self.name, bounds.to_tuple(), self.plot.bounds.to_tuple())

    def _layout_virtual_axes(self) -> None:
        plot = self.plot.bounds
        for _axis_id, axis in self.axes.virtual_items():
            if axis.is_horizontal():
                axis.set_bounds(0.0, 0.0, plot.width, 0.0)
            else:
                axis.set_bounds(0.0, 0.0, 0.0, plot.height)

    def _layout_legend(self, bounds: Rect) -> None:
        if not self.legend.visible:
            self.legend.set_bounds(0.0, 0.0, 0.0, 0.0)
            return
        width, height = self.legend.get_size()
        plot = self.plot.bounds
        side = self.legend.side
        if side in ("top", "bottom"):
            x = plot.x + (plot.width - width) / 2.0
            y = 0.0 if side == "top" else bounds.height - height
        else:
            x = 0.0 if side == "left" else bounds.width - width
            y = plot.y + (plot.height - height) / 2.0
        self.legend.set_bounds(x, y, width, height)

    # Drawing

    def draw(self, renderer: Renderer) -> None:
        if not self.visible:
            return
        origin = (self.bounds.x, self.bounds.y)
        renderer.fill_rect(self.bounds, self.appearance.fill_rgba)
        if self.legend.visible:
            self.legend.draw(renderer, origin)
        for axis_id in AXIS_DRAW_ORDER:
            axis = self.axes.get(axis_id)
            if axis is not None and axis.visible:
                axis.draw(renderer, origin)
        self.plot.draw(renderer, origin)

    # Persistence

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "name": self.name,
            "visible": self.visible,
            "autoHeight": self.auto_height,
            "heightInPercents": float(self.height_in_percents),
            "verticalGridAxis": self.vertical_grid_axis_side,
            "horizontalGridAxis": self.horizontal_grid_axis_side,
            "verticalGridVisible": self.vertical_grid_visible,
            "horizontalGridVisible": self.horizontal_grid_visible,
            "globalMargins": {"left": float(self.global_margins.left), "right": float(self.global_margins.right)},
            "areaAppearance": self.appearance.to_dict(),
            "plotAppearance": self.plot.appearance.to_dict(),
            "legend": self.legend.to_dict(),
            "axes": [{"id": axis_id, "axis": axis.to_dict()} for axis_id, axis in self.axes.items()],
            "lines": [line.to_dict() for line in self.lines],
            "series": [{"typeId": self.series_types.type_id_of(s), "params": s.to_dict()} for s in self.series],
            "stickers": [
                {"typeId": self.sticker_types.type_id_of(s), "params": s.to_dict()} for s in self.stickers
            ],
        }

    def _parse_axes(self, doc: dict[str, Any]) -> list[tuple[int, Axis]]:
        parsed: list[tuple[int, Axis]] = []
        seen: set[int] = set()
        for i, item in enumerate(require_list(doc, "axes", "")):
            item_path = field_path("axes", i)
            entry = expect_obj(item, item_path)
            axis_id = require_int(entry, "id", item_path)
            if axis_id in seen:
                raise ChartDocumentError(f"duplicate axis id {axis_id}", path=field_path(item_path, "id"))
            if axis_id not in _FIXED_SIDE_BY_ID and axis_id < VIRTUAL_AXIS_BASE:
                raise ChartDocumentError(f"axis id {axis_id} is reserved", path=field_path(item_path, "id"))
            axis = Axis.from_dict(require_obj(entry, "axis", item_path), field_path(item_path, "axis"))
            expected_side = _FIXED_SIDE_BY_ID.get(axis_id)
            if expected_side is not None and axis.side != expected_side:
                raise ChartDocumentError(
                    f"axis {axis_id} must be on the {expected_side} side",
                    path=field_path(field_path(item_path, "axis"), "side"),
                )
            seen.add(axis_id)
            parsed.append((axis_id, axis))
        missing = sorted(set(_FIXED_SIDE_BY_ID) - seen)
        if missing:
            raise ChartDocumentError(f"missing fixed axis id {missing[0]}", path="axes")
        return parsed

    def _parse_typed(self, doc: dict[str, Any], key: str, registry: TypeRegistry) -> list[Any]:
        out = []
        for i, item in enumerate(require_list(doc, key, "")):
            item_path = field_path(key, i)
            entry = expect_obj(item, item_path)
            type_id = require_str(entry, "typeId", item_path)
            if not registry.is_registered(type_id):
                raise TypeNotRegisteredError(registry.kind, type_id, path=field_path(item_path, "typeId"))
            params = require_obj(entry, "params", item_path)
            out.append(registry.create(type_id, params, field_path(item_path, "params")))
        return out

    def load_dict(self, doc: dict[str, Any]) -> None:
        """Replace the whole area state from a document.

        Everything is parsed before anything is assigned, so a failed load
        leaves the area untouched.
        """

        doc = expect_obj(doc, "")
        title = require_str(doc, "title", "")
        name = require_str(doc, "name", "")
        visible = require_bool(doc, "visible", "")
        auto_height = require_bool(doc, "autoHeight", "")
        height_in_percents = require_float(doc, "heightInPercents", "")
        vertical_grid_axis = require_str(doc, "verticalGridAxis", "", choices=AXIS_SIDES)
        horizontal_grid_axis = require_str(doc, "horizontalGridAxis", "", choices=AXIS_SIDES)
        vertical_grid_visible = require_bool(doc, "verticalGridVisible", "")
        horizontal_grid_visible = require_bool(doc, "horizontalGridVisible", "")
        margins_doc = require_obj(doc, "globalMargins", "")
        global_margins = Margins(
            left=require_float(margins_doc, "left", "globalMargins"),
            right=require_float(margins_doc, "right", "globalMargins"),
        )
        area_appearance = Appearance.from_dict(require_obj(doc, "areaAppearance", ""), "areaAppearance")
        plot_appearance = Appearance.from_dict(require_obj(doc, "plotAppearance", ""), "plotAppearance")
        legend = Legend.from_dict(require_obj(doc, "legend", ""), "legend", self)
        legend.text_measurer = self.legend.text_measurer
        axes = self._parse_axes(doc)
        lines = [
            Line.from_dict(expect_obj(item, field_path("lines", i)), field_path("lines", i))
            for i, item in enumerate(require_list(doc, "lines", ""))
        ]
        series = self._parse_typed(doc, "series", self.series_types)
        stickers = self._parse_typed(doc, "stickers", self.sticker_types)

        self.title = title
        self.name = name
        self.visible = visible
        self.auto_height = auto_height
        self.height_in_percents = height_in_percents
        self.vertical_grid_axis_side = vertical_grid_axis
        self.horizontal_grid_axis_side = horizontal_grid_axis
        self.vertical_grid_visible = vertical_grid_visible
        self.horizontal_grid_visible = horizontal_grid_visible
        self.global_margins = global_margins
        self.appearance = area_appearance
        self.plot.appearance = plot_appearance
        self.legend = legend
        self.axes = AxisSet(self.counters)
        for axis_id, axis in axes:
            self.axes.put(axis_id, axis)
        self.lines = lines
        self.series = series
        self.stickers = stickers
        self.link_global_x_range(self.global_x_range)
        LOGGER.debug("%s loaded: %d axes, %d series, %d stickers", name, len(axes), len(series), len(stickers))

    @classmethod
    def from_dict(
        cls,
        doc: dict[str, Any],
        *,
        counters: ChartCounters | None = None,
        settings: ChartSettings = DEFAULT_SETTINGS,
    ) -> "Area":
        area = cls(require_str(expect_obj(doc, ""), "name", ""), counters=counters, settings=settings)
        area.load_dict(doc)
        return area
