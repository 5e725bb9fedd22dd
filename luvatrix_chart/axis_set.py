from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Callable, Iterator

from .axis import Axis

LEFT_AXIS_ID = 0
RIGHT_AXIS_ID = 1
TOP_AXIS_ID = 2
BOTTOM_AXIS_ID = 3
VIRTUAL_AXIS_BASE = 100

FIXED_AXIS_IDS: dict[str, int] = {
    "left": LEFT_AXIS_ID,
    "right": RIGHT_AXIS_ID,
    "top": TOP_AXIS_ID,
    "bottom": BOTTOM_AXIS_ID,
}

AxisVisitor = Callable[[int, Axis], bool]


class IdCounter:
    """Monotonic counter; ``next()`` is safe to call from several threads."""

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        return self._value

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def advance_to(self, value: int) -> None:
        with self._lock:
            self._value = max(self._value, value)


@dataclass
class ChartCounters:
    virtual_axes: IdCounter = field(default_factory=IdCounter)
    area_names: IdCounter = field(default_factory=IdCounter)

    def next_virtual_axis_id(self) -> int:
        return VIRTUAL_AXIS_BASE + self.virtual_axes.next()

    def next_area_name(self) -> str:
        return f"Area{self.area_names.next()}"


class AxisSet:
    """Axes of one area keyed by id, iterated in ascending id order."""

    def __init__(self, counters: ChartCounters) -> None:
        self._counters = counters
        self._axes: dict[int, Axis] = {}

    def __len__(self) -> int:
        return len(self._axes)

    def __iter__(self) -> Iterator[Axis]:
        return (axis for _, axis in self.items())

    def __contains__(self, axis_id: object) -> bool:
        return axis_id in self._axes

    def items(self) -> list[tuple[int, Axis]]:
        return sorted(self._axes.items(), key=lambda kv: kv[0])

    def ids(self) -> list[int]:
        return sorted(self._axes)

    def get(self, axis_id: int) -> Axis | None:
        return self._axes.get(axis_id)

    def put(self, axis_id: int, axis: Axis) -> None:
        self._axes[axis_id] = axis
        if axis_id >= VIRTUAL_AXIS_BASE:
            # Keep freshly allocated ids clear of ids that came from a document.
            self._counters.virtual_axes.advance_to(axis_id - VIRTUAL_AXIS_BASE)

    def fixed(self, side: str) -> Axis | None:
        axis_id = FIXED_AXIS_IDS.get(side)
        if axis_id is None:
            return None
        return self._axes.get(axis_id)

    def add_virtual(self, axis: Axis) -> int:
        axis_id = self._counters.next_virtual_axis_id()
        self._axes[axis_id] = axis
        return axis_id

    def remove_virtual(self, axis_id: int) -> bool:
        if axis_id < VIRTUAL_AXIS_BASE:
            return False
        return self._axes.pop(axis_id, None) is not None

    def virtual_items(self) -> list[tuple[int, Axis]]:
        return [(axis_id, axis) for axis_id, axis in self.items() if axis_id >= VIRTUAL_AXIS_BASE]

    def do_axis_action(self, visitor: AxisVisitor) -> None:
        for axis_id, axis in self.items():
            if not visitor(axis_id, axis):
                break
