from __future__ import annotations

import logging
import math
from typing import Any

from .errors import ChartDocumentError
from .schema import field_path, optional_float, require_float

LOGGER = logging.getLogger(__name__)

DEFAULT_MARGIN_RATIO = 0.05
DEFAULT_MIN_SPAN = 1e-12
FALLBACK_BOUNDS = (0.0, 1.0)


def _as_float(value: float | None) -> float | None:
    return None if value is None else float(value)


def _finite(*values: float | None) -> bool:
    return all(v is not None and math.isfinite(v) for v in values)


class AxisRange:
    """Value domain of one axis.

    Three layers resolve to the visible window, first hit wins: the explicit
    view values set by pan/zoom, the fixed ``min_value``/``max_value`` pair,
    and the extrema accumulated from series data during an auto-range pass.
    """

    def __init__(
        self,
        *,
        margin_ratio: float = DEFAULT_MARGIN_RATIO,
        min_span: float = DEFAULT_MIN_SPAN,
        min_value: float | None = None,
        max_value: float | None = None,
    ) -> None:
        if margin_ratio < 0:
            raise ValueError("margin_ratio must be >= 0")
        if min_span <= 0:
            raise ValueError("min_span must be > 0")
        self.margin_ratio = float(margin_ratio)
        self.min_span = float(min_span)
        self.min_value = min_value
        self.max_value = max_value
        self.min_view_value: float | None = None
        self.max_view_value: float | None = None
        self.auto_min: float | None = None
        self.auto_max: float | None = None

    def is_auto(self) -> bool:
        return self.min_view_value is None or self.max_view_value is None

    def set_min_max(self, min_value: float | None, max_value: float | None) -> None:
        if min_value is not None and max_value is not None and min_value > max_value:
            min_value, max_value = max_value, min_value
        self.min_value = min_value
        self.max_value = max_value

    def set_view_values(self, min_view: float, max_view: float) -> None:
        if not _finite(min_view, max_view):
            LOGGER.warning("ignoring non-finite view window (%s, %s)", min_view, max_view)
            return
        lo = float(min(min_view, max_view))
        hi = float(max(min_view, max_view))
        if hi - lo < self.min_span:
            center = (lo + hi) * 0.5
            lo = center - self.min_span * 0.5
            hi = center + self.min_span * 0.5
        self.min_view_value = lo
        self.max_view_value = hi

    def reset_view_values(self) -> None:
        self.min_view_value = None
        self.max_view_value = None

    def move_view_values(self, factor: float) -> None:
        if self.is_auto():
            return
        if not math.isfinite(factor):
            LOGGER.warning("ignoring non-finite pan factor %s", factor)
            return
        assert self.min_view_value is not None and self.max_view_value is not None
        delta = factor * (self.max_view_value - self.min_view_value)
        self.min_view_value += delta
        self.max_view_value += delta

    def zoom_view_values(self, factor: float) -> None:
        if not math.isfinite(factor) or factor <= 0:
            LOGGER.warning("ignoring invalid zoom factor %s", factor)
            return
        if factor == 1.0:
            return
        lo, hi = self.view_bounds()
        center = (lo + hi) * 0.5
        span = max(self.min_span, (hi - lo) * factor)
        if not math.isfinite(span):
            LOGGER.warning("zoom by %s overflows the view span; keeping current window", factor)
            return
        self.min_view_value = center - span * 0.5
        self.max_view_value = center + span * 0.5

    def reset_auto_values(self) -> None:
        self.auto_min = None
        self.auto_max = None

    def expand_auto_values(self, new_max: float, new_min: float) -> None:
        for value in (new_max, new_min):
            if value is None or not math.isfinite(value):
                continue
            value = float(value)
            if self.auto_min is None or value < self.auto_min:
                self.auto_min = value
            if self.auto_max is None or value > self.auto_max:
                self.auto_max = value

    def get_margin(self, max_value: float, min_value: float) -> float:
        if not _finite(max_value, min_value):
            return 0.0
        span = abs(max_value - min_value)
        if span <= self.min_span:
            return max(1.0, abs(max_value) * self.margin_ratio)
        return span * self.margin_ratio

    def get_min_view_value_or_auto_value(self) -> float | None:
        if self.min_view_value is not None:
            return self.min_view_value
        if self.min_value is not None:
            return self.min_value
        return self.auto_min

    def get_max_view_value_or_auto_value(self) -> float | None:
        if self.max_view_value is not None:
            return self.max_view_value
        if self.max_value is not None:
            return self.max_value
        return self.auto_max

    def view_bounds(self) -> tuple[float, float]:
        """Effective ``(min, max)`` window, always finite with a positive span."""

        lo = self.get_min_view_value_or_auto_value()
        hi = self.get_max_view_value_or_auto_value()
        if not _finite(lo, hi):
            return FALLBACK_BOUNDS
        assert lo is not None and hi is not None
        if lo > hi:
            lo, hi = hi, lo
        if hi - lo <= 0.0:
            pad = self.get_margin(hi, lo)
            LOGGER.debug("degenerate axis range at %s widened by %s", lo, pad)
            return (lo - pad, hi + pad)
        return (lo, hi)

    def to_dict(self) -> dict[str, Any]:
        return {
            "minValue": _as_float(self.min_value),
            "maxValue": _as_float(self.max_value),
            "minViewValue": _as_float(self.min_view_value),
            "maxViewValue": _as_float(self.max_view_value),
            "marginRatio": self.margin_ratio,
            "minSpan": self.min_span,
        }

    @classmethod
    def from_dict(cls, doc: dict[str, Any], path: str) -> "AxisRange":
        margin_ratio = require_float(doc, "marginRatio", path)
        min_span = require_float(doc, "minSpan", path)
        min_value = optional_float(doc, "minValue", path)
        max_value = optional_float(doc, "maxValue", path)
        try:
            out = cls(margin_ratio=margin_ratio, min_span=min_span, min_value=min_value, max_value=max_value)
        except ValueError as exc:
            raise ChartDocumentError(str(exc), path=path) from exc
        min_view = optional_float(doc, "minViewValue", path)
        max_view = optional_float(doc, "maxViewValue", path)
        if (min_view is None) != (max_view is None):
            missing = "minViewValue" if min_view is None else "maxViewValue"
            raise ChartDocumentError("view values must be set together", path=field_path(path, missing))
        if min_view is not None and max_view is not None and min_view > max_view:
            raise ChartDocumentError("minViewValue must be <= maxViewValue", path=path)
        out.min_view_value = min_view
        out.max_view_value = max_view
        return out
