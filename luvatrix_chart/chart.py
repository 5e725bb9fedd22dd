from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from .area import Area
from .axis_range import AxisRange
from .axis_set import ChartCounters
from .errors import ChartDocumentError
from .geometry import Rect
from .renderer import RasterRenderer, Renderer
from .schema import expect_obj, field_path, require_bool, require_int, require_list, require_obj
from .settings import DEFAULT_SETTINGS, ChartSettings

LOGGER = logging.getLogger(__name__)

DOCUMENT_VERSION = 1


class Chart:
    """Vertical stack of areas sharing one X range."""

    def __init__(self, settings: ChartSettings = DEFAULT_SETTINGS, *, counters: ChartCounters | None = None) -> None:
        self.settings = settings
        self.counters = counters if counters is not None else ChartCounters()
        self.shared_x_range = settings.shared_x_range
        self.global_x_range = AxisRange(margin_ratio=settings.margin_ratio, min_span=settings.min_span)
        self.areas: list[Area] = []
        self.bounds = Rect()

    def _adopt(self, area: Area) -> Area:
        area.link_global_x_range(self.global_x_range if self.shared_x_range else None)
        return area

    def add_area(self, name: str | None = None) -> Area:
        area = self._adopt(Area(name, counters=self.counters, settings=self.settings))
        self.areas.append(area)
        return area

    def remove_area(self, area: Area) -> bool:
        for i, item in enumerate(self.areas):
            if item is area:
                del self.areas[i]
                item.link_global_x_range(None)
                return True
        return False

    def find_area(self, name: str) -> Area | None:
        for area in self.areas:
            if area.name == name:
                return area
        return None

    def set_bounds(self, bounds: Rect) -> None:
        self.bounds = bounds
        self.layout()

    def layout(self) -> None:
        visible = [a for a in self.areas if a.visible]
        if not visible:
            return
        gap = self.settings.area_gap
        total = max(0.0, self.bounds.height - gap * (len(visible) - 1))
        fixed = sum(total * a.height_in_percents / 100.0 for a in visible if not a.auto_height)
        auto_count = sum(1 for a in visible if a.auto_height)
        auto_h = max(0.0, total - fixed) / auto_count if auto_count else 0.0

        # Plot edges line up across panes: every area gets the widest side margins.
        left = max(a.get_side_margins().left for a in visible)
        right = max(a.get_side_margins().right for a in visible)
        y = self.bounds.y
        for area in visible:
            height = auto_h if area.auto_height else total * area.height_in_percents / 100.0
            area.set_global_margins(left, right)
            area.compute_layout(Rect(self.bounds.x, y, self.bounds.width, height))
            y += height + gap
        LOGGER.debug("chart layout: %d areas in %s", len(visible), self.bounds.to_tuple())

    def calc_auto_values(self) -> None:
        for area in self.areas:
            area.reset_auto_values()
            area.calc_x_auto_values()
        if self.shared_x_range:
            self.global_x_range.reset_auto_values()
            for area in self.areas:
                for axis in area.axes:
                    if axis.is_horizontal() and axis.use_global_range:
                        own = axis.axis_range
                        if own.auto_min is not None and own.auto_max is not None:
                            self.global_x_range.expand_auto_values(own.auto_max, own.auto_min)
        for area in self.areas:
            area.calc_y_auto_values()

    def _unique_ranges(self) -> tuple[list[AxisRange], list[AxisRange]]:
        horizontal: list[AxisRange] = []
        vertical: list[AxisRange] = []
        seen: set[int] = set()
        for area in self.areas:
            h_ranges, v_ranges = area.view_ranges()
            for bucket, ranges in ((horizontal, h_ranges), (vertical, v_ranges)):
                for axis_range in ranges:
                    if id(axis_range) not in seen:
                        seen.add(id(axis_range))
                        bucket.append(axis_range)
        return horizontal, vertical

    def move(self, horizontal_factor: float, vertical_factor: float) -> None:
        h_ranges, v_ranges = self._unique_ranges()
        for axis_range in h_ranges:
            axis_range.move_view_values(horizontal_factor)
        for axis_range in v_ranges:
            axis_range.move_view_values(vertical_factor)

    def zoom(self, horizontal_factor: float, vertical_factor: float) -> None:
        h_ranges, v_ranges = self._unique_ranges()
        for axis_range in h_ranges:
            axis_range.zoom_view_values(horizontal_factor)
        for axis_range in v_ranges:
            axis_range.zoom_view_values(vertical_factor)

    def reset_view_values(self) -> None:
        h_ranges, v_ranges = self._unique_ranges()
        for axis_range in h_ranges + v_ranges:
            axis_range.reset_view_values()

    def draw(self, renderer: Renderer) -> None:
        renderer.fill_rect(self.bounds, self.settings.appearance_for("area").fill_rgba)
        for area in self.areas:
            area.draw(renderer)

    def to_rgba(self, width: int, height: int) -> np.ndarray:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        renderer = RasterRenderer(width, height)
        self.set_bounds(Rect(0.0, 0.0, float(width), float(height)))
        self.draw(renderer)
        return renderer.to_rgba()

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": DOCUMENT_VERSION,
            "sharedXRange": self.shared_x_range,
            "globalXRange": self.global_x_range.to_dict(),
            "areas": [area.to_dict() for area in self.areas],
        }

    def load_dict(self, doc: dict[str, Any]) -> None:
        doc = expect_obj(doc, "")
        version = require_int(doc, "version", "")
        if version != DOCUMENT_VERSION:
            raise ChartDocumentError(f"unsupported document version {version}", path="version")
        shared = require_bool(doc, "sharedXRange", "")
        global_x_range = AxisRange.from_dict(require_obj(doc, "globalXRange", ""), "globalXRange")
        areas: list[Area] = []
        for i, item in enumerate(require_list(doc, "areas", "")):
            item_path = field_path("areas", i)
            area_doc = expect_obj(item, item_path)
            try:
                areas.append(Area.from_dict(area_doc, counters=self.counters, settings=self.settings))
            except ChartDocumentError as exc:
                raise exc.under(item_path) from exc

        self.shared_x_range = shared
        self.global_x_range = global_x_range
        self.areas = [self._adopt(area) for area in areas]
        LOGGER.debug("chart loaded with %d areas", len(areas))

    @classmethod
    def from_dict(cls, doc: dict[str, Any], settings: ChartSettings = DEFAULT_SETTINGS) -> "Chart":
        chart = cls(settings)
        chart.load_dict(doc)
        return chart

    def save(self, path: str | Path) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2, sort_keys=True), encoding="utf-8")

    @classmethod
    def load(cls, path: str | Path, settings: ChartSettings = DEFAULT_SETTINGS) -> "Chart":
        doc_path = Path(path)
        try:
            doc = json.loads(doc_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ChartDocumentError(f"invalid JSON in {doc_path}: {exc}") from exc
        return cls.from_dict(doc, settings)
