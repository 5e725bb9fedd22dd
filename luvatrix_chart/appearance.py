from __future__ import annotations

from dataclasses import asdict, dataclass, replace
import re
from typing import Any, Literal, Mapping

from .errors import ChartDocumentError, ChartSettingsError
from .schema import require_float, require_str

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

RGBA = tuple[int, int, int, int]
ComponentKind = Literal["area", "plot", "legend", "axis", "series", "line", "sticker"]
COMPONENT_KINDS: tuple[str, ...] = ("area", "plot", "legend", "axis", "series", "line", "sticker")

_COLOR_FIELDS = ("fill_color", "outline_color", "text_color")


def parse_color(value: str) -> RGBA:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"`{value}` is not a hex color (#RRGGBB or #RRGGBBAA)")
    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    a = int(value[7:9], 16) if len(value) == 9 else 255
    return (r, g, b, a)


@dataclass(frozen=True)
class Appearance:
    """Colors and stroke settings of one chart element."""

    fill_color: str = "#00000000"
    outline_color: str = "#000000"
    outline_width: float = 1.0
    text_color: str = "#D0DAE8"
    font_size_px: float = 11.0

    def __post_init__(self) -> None:
        for key in _COLOR_FIELDS:
            parse_color(getattr(self, key))
        if self.outline_width < 0:
            raise ValueError("outline_width must be >= 0")
        if self.font_size_px <= 0:
            raise ValueError("font_size_px must be > 0")

    @property
    def fill_rgba(self) -> RGBA:
        return parse_color(self.fill_color)

    @property
    def outline_rgba(self) -> RGBA:
        return parse_color(self.outline_color)

    @property
    def text_rgba(self) -> RGBA:
        return parse_color(self.text_color)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fillColor": self.fill_color,
            "outlineColor": self.outline_color,
            "outlineWidth": float(self.outline_width),
            "textColor": self.text_color,
            "fontSizePx": float(self.font_size_px),
        }

    @classmethod
    def from_dict(cls, doc: dict[str, Any], path: str) -> "Appearance":
        fields = {
            "fill_color": require_str(doc, "fillColor", path),
            "outline_color": require_str(doc, "outlineColor", path),
            "outline_width": require_float(doc, "outlineWidth", path),
            "text_color": require_str(doc, "textColor", path),
            "font_size_px": require_float(doc, "fontSizePx", path),
        }
        try:
            return cls(**fields)
        except ValueError as exc:
            raise ChartDocumentError(str(exc), path=path) from exc


# Dark palette matching the luvatrix plot defaults.
DEFAULT_APPEARANCES: dict[str, Appearance] = {
    "area": Appearance(fill_color="#0C1017", outline_color="#000000"),
    "plot": Appearance(fill_color="#141A24", outline_color="#3C434E"),
    "legend": Appearance(fill_color="#0A0E14AA", outline_color="#3C434E"),
    "axis": Appearance(fill_color="#0C1017", outline_color="#7C8A9C"),
    "series": Appearance(fill_color="#3E95FF", outline_color="#3E95FF", outline_width=1.0),
    "line": Appearance(fill_color="#00000000", outline_color="#BAC9DCEB"),
    "sticker": Appearance(fill_color="#00000000", outline_color="#FFA500"),
}


def default_appearance(kind: str) -> Appearance:
    try:
        return DEFAULT_APPEARANCES[kind]
    except KeyError:
        raise ValueError(f"unknown component kind: {kind}") from None


def validate_appearance_overrides(kind: str, overrides: Mapping[str, Any] | None = None) -> Appearance:
    """Merge overrides for one component kind onto its default appearance."""

    if kind not in DEFAULT_APPEARANCES:
        raise ChartSettingsError(f"Unknown component kind: {kind}")
    base = DEFAULT_APPEARANCES[kind]
    if not overrides:
        return base
    known = asdict(base)
    for key, value in overrides.items():
        if key not in known:
            raise ChartSettingsError(f"Unknown appearance field `{key}` for `{kind}`")
        if key in _COLOR_FIELDS:
            if not isinstance(value, str) or not _HEX_COLOR.match(value):
                raise ChartSettingsError(f"`{kind}.{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")
        elif isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) < 0:
            raise ChartSettingsError(f"`{kind}.{key}` must be a non-negative number")
    merged = {k: (float(v) if k not in _COLOR_FIELDS else v) for k, v in overrides.items()}
    try:
        return replace(base, **merged)
    except ValueError as exc:
        raise ChartSettingsError(f"`{kind}`: {exc}") from exc
