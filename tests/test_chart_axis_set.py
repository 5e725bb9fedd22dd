from __future__ import annotations

import threading
import unittest

from luvatrix_chart import Axis, AxisSet, ChartCounters
from luvatrix_chart.axis_set import FIXED_AXIS_IDS, IdCounter


def _fixed_set(counters: ChartCounters | None = None) -> AxisSet:
    axes = AxisSet(counters or ChartCounters())
    for side, axis_id in FIXED_AXIS_IDS.items():
        axes.put(axis_id, Axis(side))
    return axes


class AxisSetTests(unittest.TestCase):
    def test_virtual_ids_start_above_base(self) -> None:
        axes = _fixed_set()
        self.assertEqual(axes.add_virtual(Axis("left")), 101)
        self.assertEqual(axes.add_virtual(Axis("top")), 102)
        self.assertEqual(axes.ids(), [0, 1, 2, 3, 101, 102])

    def test_removing_fixed_id_is_noop(self) -> None:
        axes = _fixed_set()
        self.assertFalse(axes.remove_virtual(2))
        self.assertEqual(len(axes), 4)
        self.assertIsNotNone(axes.fixed("top"))

    def test_remove_virtual(self) -> None:
        axes = _fixed_set()
        vid = axes.add_virtual(Axis("right"))
        self.assertTrue(axes.remove_virtual(vid))
        self.assertFalse(axes.remove_virtual(vid))
        self.assertNotIn(vid, axes)

    def test_put_advances_virtual_counter(self) -> None:
        counters = ChartCounters()
        axes = _fixed_set(counters)
        axes.put(150, Axis("left"))
        self.assertEqual(axes.add_virtual(Axis("left")), 151)

    def test_virtual_items_lists_only_virtual_axes(self) -> None:
        axes = _fixed_set()
        left = Axis("left")
        vid = axes.add_virtual(left)
        self.assertEqual(axes.virtual_items(), [(vid, left)])
        axes.remove_virtual(vid)
        self.assertEqual(axes.virtual_items(), [])

    def test_unknown_side_is_absent(self) -> None:
        self.assertIsNone(_fixed_set().fixed("diagonal"))

    def test_visitor_runs_in_ascending_order_and_stops_early(self) -> None:
        axes = _fixed_set()
        axes.add_virtual(Axis("left"))
        seen: list[int] = []

        def visit(axis_id: int, _axis: Axis) -> bool:
            seen.append(axis_id)
            return True

        axes.do_axis_action(visit)
        self.assertEqual(seen, [0, 1, 2, 3, 101])

        stopped: list[int] = []

        def stop_at_right(axis_id: int, axis: Axis) -> bool:
            stopped.append(axis_id)
            return axis.side != "right"

        axes.do_axis_action(stop_at_right)
        self.assertEqual(stopped, [0, 1])

    def test_counters_are_independent_per_owner(self) -> None:
        a = ChartCounters()
        b = ChartCounters()
        self.assertEqual(a.next_area_name(), "Area1")
        self.assertEqual(a.next_area_name(), "Area2")
        self.assertEqual(b.next_area_name(), "Area1")

    def test_id_counter_is_thread_safe(self) -> None:
        counter = IdCounter()
        results: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            local = [counter.next() for _ in range(500)]
            with lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(counter.value, 4000)
        self.assertEqual(len(set(results)), 4000)


if __name__ == "__main__":
    unittest.main()
