"""Axis tick generation."""

from __future__ import annotations

import math

TICK_EPSILON = 1e-9
TICK_DECIMALS = 6


def ticks(min_value: float, max_value: float, step: float) -> list[float]:
    """Return ``min, min+step, min+2·step, …`` up to ``max`` inclusive.

    Each tick is computed as ``min + i·step`` (not by repeated addition) and
    rounded to 6 decimals, so ``ticks(0, 1, 0.1)`` yields ``0.3`` rather than
    ``0.30000000000000004``. ``max`` is included when the last tick overshoots
    it by at most ``1e-9``.

    Raises
    ------
    ValueError
        If ``step`` is not a positive finite number or the bounds are not finite.

    Examples
    --------
    >>> ticks(0, 4, 0.5)
    [0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0]
    """
    for name, value in (("min_value", min_value), ("max_value", max_value), ("step", step)):
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")
    if step <= 0:
        raise ValueError(f"step must be > 0, got {step!r}")

    result: list[float] = []
    i = 0
    while True:
        value = min_value + i * step
        if value > max_value + TICK_EPSILON:
            break
        result.append(round(value, TICK_DECIMALS))
        i += 1
    return result


def format_tick(value: float) -> str:
    """Render a tick label without trailing zeros (``2.0`` → ``"2"``)."""
    text = f"{value:.{TICK_DECIMALS}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


__all__ = ["TICK_DECIMALS", "TICK_EPSILON", "format_tick", "ticks"]
