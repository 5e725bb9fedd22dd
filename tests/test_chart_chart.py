from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

import numpy as np

from luvatrix_chart import (
    Chart,
    ChartDocumentError,
    ChartSettingsError,
    LinearSeries,
    Rect,
    load_settings,
    validate_settings,
)


def _two_pane_chart(settings=None) -> Chart:
    chart = Chart(settings) if settings is not None else Chart()
    prices = chart.add_area()
    prices.add_series(LinearSeries("close", np.linspace(10.0, 19.0, 10)))
    volume = chart.add_area()
    volume.auto_height = False
    volume.height_in_percents = 25.0
    volume.add_series(LinearSeries("volume", np.arange(20, dtype=np.float64)))
    return chart


class ChartTests(unittest.TestCase):
    def test_areas_get_sequential_default_names(self) -> None:
        chart = _two_pane_chart()
        self.assertEqual([a.name for a in chart.areas], ["Area1", "Area2"])
        self.assertIs(chart.find_area("Area2"), chart.areas[1])
        self.assertIsNone(chart.find_area("nope"))

    def test_stack_layout_honours_fixed_percentages(self) -> None:
        chart = _two_pane_chart()
        chart.set_bounds(Rect(0, 0, 400, 400))
        self.assertEqual(chart.areas[0].bounds.to_tuple(), (0, 0, 400, 300))
        self.assertEqual(chart.areas[1].bounds.to_tuple(), (0, 300, 400, 100))

    def test_stack_layout_with_gap_and_hidden_area(self) -> None:
        chart = _two_pane_chart(validate_settings({"area_gap": 10}))
        hidden = chart.add_area()
        hidden.visible = False
        chart.set_bounds(Rect(0, 0, 400, 410))
        self.assertEqual(chart.areas[0].bounds.to_tuple(), (0, 0, 400, 300))
        self.assertEqual(chart.areas[1].bounds.to_tuple(), (0, 310, 400, 100))

    def test_plot_edges_align_across_panes(self) -> None:
        chart = _two_pane_chart()
        chart.areas[0].left_axis.visible = True
        chart.set_bounds(Rect(0, 0, 400, 400))
        self.assertEqual(chart.areas[0].plot.bounds.x, 50)
        self.assertEqual(chart.areas[1].plot.bounds.x, 50)
        self.assertEqual(chart.areas[0].plot.bounds.width, chart.areas[1].plot.bounds.width)

    def test_shared_x_range_merges_all_areas(self) -> None:
        chart = _two_pane_chart()
        chart.calc_auto_values()
        for area in chart.areas:
            axis = area.bottom_axis
            self.assertIs(axis.get_axis_range_or_global_axis_range(), chart.global_x_range)
            self.assertEqual(axis.get_axis_range_or_global_axis_range().view_bounds(), (-1.0, 20.0))

    def test_y_auto_range_uses_shared_window(self) -> None:
        chart = _two_pane_chart()
        chart.global_x_range.set_view_values(2.0, 4.0)
        chart.calc_auto_values()
        lo, hi = chart.areas[1].right_axis.axis_range.view_bounds()
        self.assertAlmostEqual(lo, 1.9)
        self.assertAlmostEqual(hi, 4.1)

    def test_pan_and_zoom_touch_shared_range_once(self) -> None:
        chart = _two_pane_chart()
        chart.global_x_range.set_view_values(0.0, 10.0)
        chart.move(0.5, 0.0)
        self.assertEqual(chart.global_x_range.view_bounds(), (5.0, 15.0))
        chart.zoom(0.5, 1.0)
        self.assertEqual(chart.global_x_range.view_bounds(), (7.5, 12.5))
        chart.reset_view_values()
        self.assertTrue(chart.global_x_range.is_auto())

    def test_unshared_chart_keeps_ranges_per_area(self) -> None:
        chart = _two_pane_chart(validate_settings({"shared_x_range": False}))
        chart.calc_auto_values()
        self.assertEqual(chart.areas[0].bottom_axis.get_axis_range_or_global_axis_range().view_bounds(), (-1.0, 10.0))

    def test_remove_area_unlinks_shared_range(self) -> None:
        chart = _two_pane_chart()
        area = chart.areas[0]
        self.assertTrue(chart.remove_area(area))
        self.assertIsNone(area.bottom_axis.global_axis_range)
        self.assertFalse(chart.remove_area(area))

    def test_save_and_load(self) -> None:
        chart = _two_pane_chart()
        chart.global_x_range.set_view_values(3.0, 9.0)
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.json"
            chart.save(path)
            loaded = Chart.load(path)
        self.assertEqual(
            json.dumps(loaded.to_dict(), sort_keys=True),
            json.dumps(chart.to_dict(), sort_keys=True),
        )
        self.assertIs(loaded.areas[0].bottom_axis.global_axis_range, loaded.global_x_range)
        self.assertEqual(loaded.areas[1].add_virtual_axis("left"), 101)

    def test_failed_load_leaves_chart_unchanged(self) -> None:
        chart = _two_pane_chart()
        doc = chart.to_dict()
        doc["areas"][1]["axes"][0]["axis"]["size"] = -1
        target = Chart()
        target.add_area("keep")
        with self.assertRaises(ChartDocumentError) as ctx:
            target.load_dict(doc)
        self.assertEqual(ctx.exception.path, "areas[1].axes[0].axis.size")
        self.assertEqual([a.name for a in target.areas], ["keep"])

    def test_invalid_json_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ChartDocumentError):
                Chart.load(path)

    def test_to_rgba(self) -> None:
        chart = _two_pane_chart()
        chart.calc_auto_values()
        frame = chart.to_rgba(240, 160)
        self.assertEqual(frame.shape, (160, 240, 4))
        with self.assertRaises(ValueError):
            chart.to_rgba(0, 10)


class ChartSettingsTests(unittest.TestCase):
    def test_toml_settings_apply_to_new_areas(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.toml"
            path.write_text(
                "[chart]\n"
                "axis_size = 40\n"
                "legend_visible = true\n"
                "legend_side = \"left\"\n"
                "\n"
                "[appearance.plot]\n"
                "fill_color = \"#101010\"\n",
                encoding="utf-8",
            )
            settings = load_settings(path)
        chart = Chart(settings)
        area = chart.add_area()
        self.assertEqual(area.right_axis.size, 40.0)
        self.assertTrue(area.legend.visible)
        self.assertEqual(area.legend.side, "left")
        self.assertEqual(area.plot.appearance.fill_color, "#101010")
        self.assertEqual(area.appearance.fill_color, "#0C1017")

    def test_unknown_keys_and_bad_values_are_rejected(self) -> None:
        with self.assertRaises(ChartSettingsError):
            validate_settings({"axis_width": 10})
        with self.assertRaises(ChartSettingsError):
            validate_settings({"legend_side": "center"})
        with self.assertRaises(ChartSettingsError):
            validate_settings({"min_span": 0})
        with self.assertRaises(ChartSettingsError):
            validate_settings(appearance={"plot": {"fill_color": "red"}})
        with self.assertRaises(ChartSettingsError):
            validate_settings(appearance={"gauge": {}})

    def test_missing_settings_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_settings("/nonexistent/chart.toml")


if __name__ == "__main__":
    unittest.main()
