from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .appearance import Appearance, default_appearance
from .axis import AXIS_SIDES
from .renderer import Renderer
from .schema import field_path, optional_int, require_float, require_obj, require_str

if TYPE_CHECKING:
    from .area import Area


@dataclass
class Line:
    """Manually placed level: a line across the plot at ``value`` of one axis.

    A value on a vertical axis draws a horizontal line and vice versa.
    """

    value: float
    axis_side: str = "right"
    virtual_id: int | None = None
    appearance: Appearance = field(default_factory=lambda: default_appearance("line"))

    def __post_init__(self) -> None:
        if self.axis_side not in AXIS_SIDES:
            raise ValueError(f"unknown axis side: {self.axis_side}")
        self.value = float(self.value)

    def draw(self, area: "Area", renderer: Renderer, origin: tuple[float, float]) -> None:
        axis = area.get_axis(self.axis_side, self.virtual_id)
        if axis is None:
            return
        plot = area.plot.bounds
        ox, oy = origin
        c = axis.get_coordinate(self.value)
        color = self.appearance.outline_rgba
        if axis.is_vertical():
            if 0 <= c <= plot.height:
                renderer.draw_line(ox, oy + c, ox + plot.width - 1, oy + c, color, self.appearance.outline_width)
        elif 0 <= c <= plot.width:
            renderer.draw_line(ox + c, oy, ox + c, oy + plot.height - 1, color, self.appearance.outline_width)

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": float(self.value),
            "axisSide": self.axis_side,
            "virtualId": self.virtual_id,
            "appearance": self.appearance.to_dict(),
        }

    @classmethod
    def from_dict(cls, doc: dict[str, Any], path: str) -> "Line":
        return cls(
            value=require_float(doc, "value", path),
            axis_side=require_str(doc, "axisSide", path, choices=AXIS_SIDES),
            virtual_id=optional_int(doc, "virtualId", path),
            appearance=Appearance.from_dict(require_obj(doc, "appearance", path), field_path(path, "appearance")),
        )
