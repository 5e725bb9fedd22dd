from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from .appearance import Appearance, default_appearance
from .errors import ChartDocumentError
from .geometry import Rect
from .raster import text_size
from .renderer import Renderer
from .schema import field_path, require_bool, require_float, require_obj, require_str

if TYPE_CHECKING:
    from .area import Area
    from .series import SeriesBase

LEGEND_SIDES: tuple[str, ...] = ("left", "right", "top", "bottom")

TextMeasurer = Callable[[str, float], tuple[int, int]]


def _raster_measure(text: str, font_size_px: float) -> tuple[int, int]:
    return text_size(text, font_size_px=font_size_px)


class Legend:
    """Series key docked on one side of an area.

    ``width``/``height`` of 0 mean "measure from the series names".
    """

    pad = 4
    swatch_w = 14
    item_gap = 8

    def __init__(
        self,
        area: "Area",
        *,
        visible: bool = False,
        side: str = "top",
        appearance: Appearance | None = None,
        text_measurer: TextMeasurer | None = None,
    ) -> None:
        if side not in LEGEND_SIDES:
            raise ValueError(f"unknown legend side: {side}")
        self._area = area
        self.visible = visible
        self.side = side
        self.width = 0.0
        self.height = 0.0
        self.appearance = appearance if appearance is not None else default_appearance("legend")
        self.text_measurer: TextMeasurer = text_measurer or _raster_measure
        self.bounds = Rect()

    @property
    def font_size_px(self) -> float:
        return self.appearance.font_size_px

    def entries(self) -> list["SeriesBase"]:
        return [s for s in self._area.series if s.visible and s.name]

    def is_horizontal(self) -> bool:
        return self.side in ("top", "bottom")

    def get_size(self) -> tuple[float, float]:
        if self.width > 0 and self.height > 0:
            return (self.width, self.height)
        font = self.font_size_px
        sizes = [self.text_measurer(s.name, font) for s in self.entries()]
        row_h = max([int(round(font))] + [h for _, h in sizes])
        item_ws = [self.swatch_w + self.pad + w for w, _ in sizes]
        if not sizes:
            measured = (0.0, 0.0)
        elif self.is_horizontal():
            measured = (
                float(2 * self.pad + sum(item_ws) + self.item_gap * (len(item_ws) - 1)),
                float(2 * self.pad + row_h),
            )
        else:
            measured = (
                float(2 * self.pad + max(item_ws)),
                float(2 * self.pad + len(sizes) * row_h + self.pad * (len(sizes) - 1)),
            )
        return (
            self.width if self.width > 0 else measured[0],
            self.height if self.height > 0 else measured[1],
        )

    def set_bounds(self, x: float, y: float, width: float, height: float) -> None:
        self.bounds = Rect(float(x), float(y), float(width), float(height))

    def draw(self, renderer: Renderer, origin: tuple[float, float] = (0.0, 0.0)) -> None:
        rect = self.bounds.offset(*origin)
        if rect.width <= 0 or rect.height <= 0:
            return
        look = self.appearance
        renderer.fill_rect(rect, look.fill_rgba)
        renderer.stroke_rect(rect, look.outline_rgba, look.outline_width)
        font = look.font_size_px
        x = rect.x + self.pad
        y = rect.y + self.pad
        for series in self.entries():
            w, h = self.text_measurer(series.name, font)
            row_h = max(int(round(font)), h)
            mid = y + row_h / 2.0
            renderer.draw_line(x, mid, x + self.swatch_w - 1, mid, series.appearance.outline_rgba, 2.0)
            renderer.draw_text(x + self.swatch_w + self.pad, y, series.name, look.text_rgba, font)
            if self.is_horizontal():
                x += self.swatch_w + self.pad + w + self.item_gap
            else:
                y += row_h + self.pad

    def to_dict(self) -> dict[str, Any]:
        return {
            "visible": self.visible,
            "side": self.side,
            "width": float(self.width),
            "height": float(self.height),
            "appearance": self.appearance.to_dict(),
        }

    @classmethod
    def from_dict(cls, doc: dict[str, Any], path: str, area: "Area") -> "Legend":
        legend = cls(
            area,
            visible=require_bool(doc, "visible", path),
            side=require_str(doc, "side", path, choices=LEGEND_SIDES),
            appearance=Appearance.from_dict(require_obj(doc, "appearance", path), field_path(path, "appearance")),
        )
        for key in ("width", "height"):
            value = require_float(doc, key, path)
            if value < 0:
                raise ChartDocumentError("must be >= 0", path=field_path(path, key))
            setattr(legend, key, value)
        return legend
