from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from .appearance import Appearance, default_appearance
from .axis import AXIS_SIDES
from .renderer import Renderer
from .schema import field_path, optional_int, require_float, require_obj, require_str

if TYPE_CHECKING:
    from .area import Area


class StickerBase:
    """User annotation anchored in (scale index, value) space of an area."""

    type_id: ClassVar[str] = ""

    def __init__(
        self,
        *,
        x_axis_side: str = "bottom",
        y_axis_side: str = "right",
        x_axis_virtual_id: int | None = None,
        y_axis_virtual_id: int | None = None,
        appearance: Appearance | None = None,
    ) -> None:
        for side in (x_axis_side, y_axis_side):
            if side not in AXIS_SIDES:
                raise ValueError(f"unknown axis side: {side}")
        self.x_axis_side = x_axis_side
        self.y_axis_side = y_axis_side
        self.x_axis_virtual_id = x_axis_virtual_id
        self.y_axis_virtual_id = y_axis_virtual_id
        self.appearance = appearance if appearance is not None else default_appearance("sticker")

    def to_point(self, area: "Area", index: float, value: float, origin: tuple[float, float]) -> tuple[float, float] | None:
        x_axis = area.get_axis(self.x_axis_side, self.x_axis_virtual_id)
        y_axis = area.get_axis(self.y_axis_side, self.y_axis_virtual_id)
        if x_axis is None or y_axis is None:
            return None
        return (origin[0] + x_axis.get_coordinate(index), origin[1] + y_axis.get_coordinate(value))

    def draw(self, area: "Area", renderer: Renderer, origin: tuple[float, float]) -> None:
        raise NotImplementedError

    def _common_to_dict(self) -> dict[str, Any]:
        return {
            "xAxisSide": self.x_axis_side,
            "yAxisSide": self.y_axis_side,
            "xAxisVirtualId": self.x_axis_virtual_id,
            "yAxisVirtualId": self.y_axis_virtual_id,
            "appearance": self.appearance.to_dict(),
        }

    @staticmethod
    def _common_from_dict(doc: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "x_axis_side": require_str(doc, "xAxisSide", path, choices=AXIS_SIDES),
            "y_axis_side": require_str(doc, "yAxisSide", path, choices=AXIS_SIDES),
            "x_axis_virtual_id": optional_int(doc, "xAxisVirtualId", path),
            "y_axis_virtual_id": optional_int(doc, "yAxisVirtualId", path),
            "appearance": Appearance.from_dict(require_obj(doc, "appearance", path), field_path(path, "appearance")),
        }

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


class TrendLineSticker(StickerBase):
    type_id: ClassVar[str] = "trend_line"

    def __init__(self, start: tuple[float, float], end: tuple[float, float], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.start = (float(start[0]), float(start[1]))
        self.end = (float(end[0]), float(end[1]))

    def draw(self, area: "Area", renderer: Renderer, origin: tuple[float, float]) -> None:
        a = self.to_point(area, *self.start, origin)
        b = self.to_point(area, *self.end, origin)
        if a is None or b is None:
            return
        renderer.draw_line(a[0], a[1], b[0], b[1], self.appearance.outline_rgba, self.appearance.outline_width)

    def to_dict(self) -> dict[str, Any]:
        out = self._common_to_dict()
        out["start"] = {"index": self.start[0], "value": self.start[1]}
        out["end"] = {"index": self.end[0], "value": self.end[1]}
        return out

    @classmethod
    def from_dict(cls, doc: dict[str, Any], path: str) -> "TrendLineSticker":
        common = cls._common_from_dict(doc, path)
        anchors = []
        for key in ("start", "end"):
            anchor = require_obj(doc, key, path)
            anchor_path = field_path(path, key)
            anchors.append((require_float(anchor, "index", anchor_path), require_float(anchor, "value", anchor_path)))
        return cls(anchors[0], anchors[1], **common)
