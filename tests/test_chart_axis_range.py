from __future__ import annotations

import math
import unittest

from luvatrix_chart import AxisRange, ChartDocumentError


class AxisRangeTests(unittest.TestCase):
    def test_new_range_is_auto_and_falls_back_to_unit_window(self) -> None:
        r = AxisRange()
        self.assertTrue(r.is_auto())
        self.assertEqual(r.view_bounds(), (0.0, 1.0))

    def test_set_view_values_sorts_the_pair(self) -> None:
        r = AxisRange()
        r.set_view_values(20.0, 10.0)
        self.assertEqual((r.min_view_value, r.max_view_value), (10.0, 20.0))
        self.assertFalse(r.is_auto())

    def test_non_finite_view_window_is_ignored_with_warning(self) -> None:
        r = AxisRange()
        r.set_view_values(1.0, 2.0)
        with self.assertLogs("luvatrix_chart.axis_range", level="WARNING"):
            r.set_view_values(float("nan"), 5.0)
        self.assertEqual(r.view_bounds(), (1.0, 2.0))

    def test_pan_preserves_span_and_composes(self) -> None:
        a = AxisRange()
        a.set_view_values(10.0, 20.0)
        a.move_view_values(0.25)
        self.assertAlmostEqual(a.min_view_value, 12.5)
        self.assertAlmostEqual(a.max_view_value - a.min_view_value, 10.0)

        b = AxisRange()
        b.set_view_values(10.0, 20.0)
        b.move_view_values(0.1)
        b.move_view_values(0.3)
        c = AxisRange()
        c.set_view_values(10.0, 20.0)
        c.move_view_values(0.4)
        self.assertAlmostEqual(b.min_view_value, c.min_view_value, places=9)
        self.assertAlmostEqual(b.max_view_value, c.max_view_value, places=9)

    def test_pan_is_noop_in_auto_mode(self) -> None:
        r = AxisRange()
        r.expand_auto_values(20.0, 10.0)
        r.move_view_values(0.5)
        self.assertTrue(r.is_auto())
        self.assertEqual(r.view_bounds(), (10.0, 20.0))

    def test_zoom_keeps_midpoint_and_inverse_restores_span(self) -> None:
        r = AxisRange()
        r.set_view_values(10.0, 30.0)
        r.zoom_view_values(0.5)
        self.assertAlmostEqual((r.min_view_value + r.max_view_value) / 2.0, 20.0)
        self.assertAlmostEqual(r.max_view_value - r.min_view_value, 10.0)
        r.zoom_view_values(2.0)
        self.assertAlmostEqual(r.max_view_value - r.min_view_value, 20.0)

    def test_zoom_on_auto_range_starts_from_effective_window(self) -> None:
        r = AxisRange()
        r.expand_auto_values(20.0, 10.0)
        r.zoom_view_values(1.0)
        self.assertTrue(r.is_auto())
        r.zoom_view_values(0.5)
        self.assertFalse(r.is_auto())
        self.assertEqual(r.view_bounds(), (12.5, 17.5))

    def test_invalid_zoom_factor_is_ignored(self) -> None:
        r = AxisRange()
        r.set_view_values(0.0, 10.0)
        for factor in (0.0, -2.0, float("inf"), float("nan")):
            with self.assertLogs("luvatrix_chart.axis_range", level="WARNING"):
                r.zoom_view_values(factor)
        self.assertEqual(r.view_bounds(), (0.0, 10.0))

    def test_zoom_clamps_to_min_span(self) -> None:
        r = AxisRange(min_span=1e-3)
        r.set_view_values(0.0, 1.0)
        r.zoom_view_values(1e-9)
        self.assertAlmostEqual(r.max_view_value - r.min_view_value, 1e-3)

    def test_expand_only_widens(self) -> None:
        r = AxisRange()
        r.expand_auto_values(10.0, 5.0)
        r.expand_auto_values(7.0, 6.0)
        self.assertEqual((r.auto_min, r.auto_max), (5.0, 10.0))
        r.expand_auto_values(1.0, 12.0)
        self.assertEqual((r.auto_min, r.auto_max), (1.0, 12.0))
        r.expand_auto_values(float("nan"), float("-inf"))
        self.assertEqual((r.auto_min, r.auto_max), (1.0, 12.0))
        r.reset_auto_values()
        self.assertIsNone(r.auto_min)
        self.assertIsNone(r.get_max_view_value_or_auto_value())

    def test_margin_policy(self) -> None:
        r = AxisRange(margin_ratio=0.05)
        self.assertAlmostEqual(r.get_margin(20.0, 10.0), 0.5)
        self.assertEqual(r.get_margin(5.0, 5.0), 1.0)
        self.assertEqual(r.get_margin(100.0, 100.0), 5.0)
        self.assertEqual(r.get_margin(float("nan"), 1.0), 0.0)

    def test_degenerate_auto_window_is_widened(self) -> None:
        r = AxisRange()
        r.expand_auto_values(5.0, 5.0)
        lo, hi = r.view_bounds()
        self.assertEqual((lo, hi), (4.0, 6.0))
        self.assertTrue(math.isfinite(lo) and math.isfinite(hi))

    def test_fixed_values_take_precedence_over_auto(self) -> None:
        r = AxisRange(min_value=0.0, max_value=100.0)
        r.expand_auto_values(20.0, 10.0)
        self.assertEqual(r.view_bounds(), (0.0, 100.0))
        r.set_view_values(40.0, 60.0)
        self.assertEqual(r.view_bounds(), (40.0, 60.0))

    def test_document_round_trip(self) -> None:
        r = AxisRange(margin_ratio=0.1, min_value=-5.0)
        r.set_view_values(1.0, 3.0)
        doc = r.to_dict()
        back = AxisRange.from_dict(doc, "range")
        self.assertEqual(back.to_dict(), doc)

    def test_document_errors_name_the_field(self) -> None:
        doc = AxisRange().to_dict()
        del doc["marginRatio"]
        with self.assertRaises(ChartDocumentError) as ctx:
            AxisRange.from_dict(doc, "axes[0].axis.range")
        self.assertEqual(ctx.exception.path, "axes[0].axis.range.marginRatio")

        bad = AxisRange().to_dict()
        bad["minViewValue"] = 5.0
        bad["maxViewValue"] = 1.0
        with self.assertRaises(ChartDocumentError):
            AxisRange.from_dict(bad, "range")


    def test_one_sided_view_window_is_rejected(self) -> None:
        doc = AxisRange().to_dict()
        doc["minViewValue"] = 50.0
        with self.assertRaises(ChartDocumentError) as ctx:
            AxisRange.from_dict(doc, "range")
        self.assertEqual(ctx.exception.path, "range.maxViewValue")

        doc = AxisRange().to_dict()
        doc["maxViewValue"] = 50.0
        with self.assertRaises(ChartDocumentError) as ctx:
            AxisRange.from_dict(doc, "range")
        self.assertEqual(ctx.exception.path, "range.minViewValue")

    def test_set_min_max_sorts_and_overrides_auto_values(self) -> None:
        r = AxisRange()
        r.expand_auto_values(20.0, 10.0)
        r.set_min_max(100.0, 0.0)
        self.assertEqual((r.min_value, r.max_value), (0.0, 100.0))
        self.assertEqual(r.view_bounds(), (0.0, 100.0))
        r.set_min_max(None, None)
        self.assertEqual(r.view_bounds(), (10.0, 20.0))

if __name__ == "__main__":
    unittest.main()
