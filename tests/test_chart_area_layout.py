from __future__ import annotations

import unittest

from luvatrix_chart import Area, Rect


def _scenario_area() -> Area:
    area = Area()
    area.set_axes_visible(left=True, top=False, right=False, bottom=True)
    area.left_axis.size = 40
    area.bottom_axis.size = 40
    return area


def _snapshot(area: Area) -> dict[str, tuple[float, float, float, float]]:
    out = {f"axis{axis_id}": axis.bounds.to_tuple() for axis_id, axis in area.axes.items()}
    out["plot"] = area.plot.bounds.to_tuple()
    out["legend"] = area.legend.bounds.to_tuple()
    return out


class AreaLayoutTests(unittest.TestCase):
    def test_left_bottom_scenario(self) -> None:
        area = _scenario_area()
        area.compute_layout(Rect(0, 0, 400, 300))
        self.assertEqual(area.plot.bounds.to_tuple(), (40, 0, 360, 260))
        self.assertEqual(area.bottom_axis.bounds.to_tuple(), (40, 260, 360, 40))
        self.assertEqual(area.left_axis.bounds.to_tuple(), (0, 0, 40, 260))

    def test_layout_is_idempotent(self) -> None:
        area = _scenario_area()
        area.legend.visible = True
        area.legend.width = 120
        area.legend.height = 18
        area.add_virtual_axis("left")
        area.compute_layout(Rect(0, 0, 400, 300))
        first = _snapshot(area)
        area.compute_layout(Rect(0, 0, 400, 300))
        self.assertEqual(_snapshot(area), first)

    def test_global_margins_are_a_floor(self) -> None:
        area = _scenario_area()
        area.set_global_margins(60, 10)
        area.compute_layout(Rect(0, 0, 400, 300))
        self.assertEqual(area.plot.bounds.to_tuple(), (60, 0, 330, 260))
        # The left axis stays glued to the plot.
        self.assertEqual(area.left_axis.bounds.to_tuple(), (20, 0, 40, 260))

        area.set_global_margins(10, 0)
        area.compute_layout(Rect(0, 0, 400, 300))
        self.assertEqual(area.plot.bounds.x, 40)

    def test_legend_docked_top_is_centered_over_plot(self) -> None:
        area = Area()
        area.legend.visible = True
        area.legend.side = "top"
        area.legend.width = 100
        area.legend.height = 20
        area.compute_layout(Rect(0, 0, 400, 300))
        self.assertEqual(area.plot.bounds.to_tuple(), (0, 20, 350, 230))
        self.assertEqual(area.legend.bounds.to_tuple(), (125, 0, 100, 20))

    def test_legend_docked_right_takes_width(self) -> None:
        area = Area()
        area.legend.visible = True
        area.legend.side = "right"
        area.legend.width = 60
        area.legend.height = 30
        area.compute_layout(Rect(0, 0, 400, 300))
        self.assertEqual(area.plot.bounds.to_tuple(), (0, 0, 290, 250))
        self.assertEqual(area.right_axis.bounds.to_tuple(), (290, 0, 50, 250))
        self.assertEqual(area.legend.bounds.to_tuple(), (340, 110, 60, 30))

    def test_measured_legend_size(self) -> None:
        from luvatrix_chart import LinearSeries

        area = Area()
        area.legend.text_measurer = lambda text, size: (len(text) * 6, 10)
        area.add_series(LinearSeries("abc", [1.0]))
        area.add_series(LinearSeries("hidden", [1.0], visible=False))
        w, h = area.legend.get_size()
        # pad + swatch + pad + text + pad
        self.assertEqual((w, h), (4 + 14 + 4 + 18 + 4, 4 + 11 + 4))

    def test_hidden_legend_takes_no_space(self) -> None:
        area = Area()
        area.legend.width = 100
        area.legend.height = 40
        area.compute_layout(Rect(0, 0, 400, 300))
        self.assertEqual(area.plot.bounds.y, 0)
        self.assertEqual(area.legend.bounds.to_tuple(), (0, 0, 0, 0))

    def test_virtual_axes_span_plot_with_zero_thickness(self) -> None:
        area = _scenario_area()
        h_id = area.add_virtual_axis("top")
        v_id = area.add_virtual_axis("left")
        area.compute_layout(Rect(0, 0, 400, 300))
        self.assertEqual(area.get_virtual_axis(h_id).bounds.to_tuple(), (0, 0, 360, 0))
        self.assertEqual(area.get_virtual_axis(v_id).bounds.to_tuple(), (0, 0, 0, 260))

        axis = area.get_virtual_axis(h_id)
        axis.axis_range.set_view_values(0.0, 10.0)
        self.assertAlmostEqual(axis.get_coordinate(5.0), 180.0)

    def test_absent_axes_are_none(self) -> None:
        area = Area()
        self.assertIsNone(area.get_axis("diagonal"))
        self.assertIsNone(area.get_virtual_axis(2))
        self.assertIsNone(area.get_axis("left", 999))
        self.assertIsNone(area.get_coordinate("diagonal", 1.0))

    def test_remove_fixed_axis_id_keeps_axis_set(self) -> None:
        area = Area()
        self.assertFalse(area.remove_virtual_axis(1))
        self.assertEqual(len(area.axes), 4)

    def test_visibility_helpers(self) -> None:
        area = Area()
        area.set_all_axes_visible(False)
        self.assertFalse(any(axis.visible for axis in area.axes))
        area.set_axes_visible(True, False, True, False)
        self.assertEqual(
            [area.left_axis.visible, area.top_axis.visible, area.right_axis.visible, area.bottom_axis.visible],
            [True, False, True, False],
        )


if __name__ == "__main__":
    unittest.main()
