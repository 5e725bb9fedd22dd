from __future__ import annotations

from dataclasses import asdict, dataclass, field
import logging
from pathlib import Path
import tomllib
from typing import Any, Mapping

from .appearance import COMPONENT_KINDS, Appearance, validate_appearance_overrides
from .errors import ChartSettingsError

LOGGER = logging.getLogger(__name__)

LEGEND_SIDES: tuple[str, ...] = ("left", "right", "top", "bottom")


@dataclass(frozen=True)
class ChartSettings:
    axis_size: float = 50.0
    margin_ratio: float = 0.05
    min_span: float = 1e-12
    legend_side: str = "top"
    legend_visible: bool = False
    shared_x_range: bool = True
    area_gap: float = 0.0
    appearance: dict[str, Appearance] = field(default_factory=dict)

    def appearance_for(self, kind: str) -> Appearance:
        if kind in self.appearance:
            return self.appearance[kind]
        return validate_appearance_overrides(kind)


DEFAULT_SETTINGS = ChartSettings()


def validate_settings(
    overrides: Mapping[str, Any] | None = None,
    appearance: Mapping[str, Mapping[str, Any]] | None = None,
) -> ChartSettings:
    """Merge `[chart]` and `[appearance.<kind>]` overrides onto the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_SETTINGS)
    raw.pop("appearance")
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ChartSettingsError(f"Unknown chart setting: {key}")
            raw[key] = value

    for key in ("axis_size", "margin_ratio", "min_span", "area_gap"):
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) < 0:
            raise ChartSettingsError(f"Setting `{key}` must be a non-negative number")
    if float(raw["min_span"]) <= 0:
        raise ChartSettingsError("Setting `min_span` must be a positive number")
    if raw["legend_side"] not in LEGEND_SIDES:
        raise ChartSettingsError(f"Setting `legend_side` must be one of {', '.join(LEGEND_SIDES)}")
    for key in ("legend_visible", "shared_x_range"):
        if not isinstance(raw[key], bool):
            raise ChartSettingsError(f"Setting `{key}` must be a boolean")

    resolved: dict[str, Appearance] = {}
    for kind, kind_overrides in (appearance or {}).items():
        if not isinstance(kind_overrides, Mapping):
            raise ChartSettingsError(f"appearance.{kind} must be a table")
        resolved[kind] = validate_appearance_overrides(kind, kind_overrides)

    return ChartSettings(
        axis_size=float(raw["axis_size"]),
        margin_ratio=float(raw["margin_ratio"]),
        min_span=float(raw["min_span"]),
        legend_side=str(raw["legend_side"]),
        legend_visible=bool(raw["legend_visible"]),
        shared_x_range=bool(raw["shared_x_range"]),
        area_gap=float(raw["area_gap"]),
        appearance=resolved,
    )


def load_settings(path: str | Path) -> ChartSettings:
    settings_path = Path(path)
    if not settings_path.exists():
        raise FileNotFoundError(f"chart settings not found: {settings_path}")
    with settings_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ChartSettingsError(f"invalid settings file {settings_path}: {exc}") from exc
    chart = raw.get("chart", {})
    appearance = raw.get("appearance", {})
    if not isinstance(chart, dict):
        raise ChartSettingsError("[chart] must be a table")
    if not isinstance(appearance, dict):
        raise ChartSettingsError("[appearance] must be a table")
    unknown = set(appearance) - set(COMPONENT_KINDS)
    if unknown:
        raise ChartSettingsError(f"Unknown component kind: {sorted(unknown)[0]}")
    settings = validate_settings(chart, appearance)
    LOGGER.debug("loaded chart settings from %s", settings_path)
    return settings
