from luvatrix_chart.appearance import Appearance, default_appearance
from luvatrix_chart.area import Area
from luvatrix_chart.axis import AXIS_SIDES, Axis
from luvatrix_chart.axis_range import AxisRange
from luvatrix_chart.axis_set import VIRTUAL_AXIS_BASE, AxisSet, ChartCounters
from luvatrix_chart.chart import Chart
from luvatrix_chart.errors import ChartDocumentError, ChartError, ChartSettingsError, TypeNotRegisteredError
from luvatrix_chart.geometry import Margins, Rect
from luvatrix_chart.legend import Legend
from luvatrix_chart.line import Line
from luvatrix_chart.plot import Plot
from luvatrix_chart.registry import SERIES_TYPES, STICKER_TYPES, TypeRegistry
from luvatrix_chart.renderer import RasterRenderer, Renderer
from luvatrix_chart.series import LinearSeries, SeriesBase, StockSeries
from luvatrix_chart.settings import DEFAULT_SETTINGS, ChartSettings, load_settings, validate_settings
from luvatrix_chart.stickers import StickerBase, TrendLineSticker

__all__ = [
    "AXIS_SIDES",
    "Appearance",
    "Area",
    "Axis",
    "AxisRange",
    "AxisSet",
    "Chart",
    "ChartCounters",
    "ChartDocumentError",
    "ChartError",
    "ChartSettings",
    "ChartSettingsError",
    "DEFAULT_SETTINGS",
    "Legend",
    "Line",
    "LinearSeries",
    "Margins",
    "Plot",
    "RasterRenderer",
    "Rect",
    "Renderer",
    "SERIES_TYPES",
    "STICKER_TYPES",
    "SeriesBase",
    "StickerBase",
    "StockSeries",
    "TrendLineSticker",
    "TypeNotRegisteredError",
    "TypeRegistry",
    "VIRTUAL_AXIS_BASE",
    "default_appearance",
    "load_settings",
    "validate_settings",
]
