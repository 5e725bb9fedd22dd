from __future__ import annotations

from decimal import Decimal, InvalidOperation

import numpy as np


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Return 1/2/5-stepped tick values inside ``[vmin, vmax]``."""

    if target <= 0:
        raise ValueError("target must be > 0")
    if not (np.isfinite(vmin) and np.isfinite(vmax)):
        return np.asarray([], dtype=np.float64)
    lo = float(min(vmin, vmax))
    hi = float(max(vmin, vmax))
    if hi - lo <= 0.0:
        return np.asarray([lo], dtype=np.float64)

    span = _nice_number(hi - lo, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    first = np.ceil(lo / step) * step
    last = np.floor(hi / step) * step
    ticks = np.arange(first, last + 0.5 * step, step, dtype=np.float64)
    # Snap accumulated drift (e.g. -4.4e-16) back onto the step grid.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks[(ticks >= lo - step * 1e-9) & (ticks <= hi + step * 1e-9)]


def tick_step(ticks: np.ndarray) -> float | None:
    if ticks.size < 2:
        return None
    return float(abs(ticks[1] - ticks[0]))


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 1e-6 or (step is not None and step < 1e-4)):
        return f"{value:.4e}"

    decimals = _decimals_from_step(step) if step is not None else 6
    d = Decimal(str(value))
    try:
        q = d.quantize(Decimal("1").scaleb(-decimals))
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return "0" if out == "-0" else out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    step = tick_step(ticks)
    return [format_tick(float(v), step=step) for v in ticks]


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)
    if round_result:
        bounds = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))
        nice = next((n for limit, n in bounds if frac < limit), 10.0)
    else:
        bounds = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))
        nice = next((n for limit, n in bounds if frac <= limit), 10.0)
    return float(nice * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    exp = Decimal(str(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exp)))
