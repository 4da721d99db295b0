"""Curve sampling over the visible x-range.

A curve is drawn as a polyline through ``SAMPLING_POINTS`` evenly spaced
x-values covering the whole math viewport. The same sampler serves the
function graph and the secant/tangent lines; the lines are passed in as
callables built by :func:`line_through`, so they extend across the full plot
rather than stopping at their anchor points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Tuple

import numpy as np

from .viewport import CoordinateMapper, MathViewport

SAMPLING_POINTS = 300

CurveFunction = Callable[[np.ndarray], np.ndarray]


@dataclass(frozen=True, eq=False)
class CurvePoints:
    """Ordered sequence of mapped drawing points for one polyline.

    Parameters
    ----------
    x : numpy.ndarray
        Drawing x-coordinates, in sampling order.
    y : numpy.ndarray
        Drawing y-coordinates, aligned with ``x``.
    """

    x: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return int(self.x.shape[0])

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        for px, py in zip(self.x, self.y):
            yield float(px), float(py)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurvePoints):
            return NotImplemented
        return np.array_equal(self.x, other.x) and np.array_equal(self.y, other.y)

    __hash__ = None  # type: ignore[assignment]

    def as_pairs(self) -> list[Tuple[float, float]]:
        """Return the points as a list of ``(x, y)`` tuples."""
        return list(self)


def sample_x(viewport: MathViewport, n: int = SAMPLING_POINTS) -> np.ndarray:
    """Return ``n`` evenly spaced x-values over ``[x_min, x_max]`` inclusive.

    Raises
    ------
    ValueError
        If ``n < 2``; a single sample cannot cover both endpoints.
    """
    n = int(n)
    if n < 2:
        raise ValueError(f"sampling points must be >= 2, got {n}")
    return np.linspace(viewport.x_min, viewport.x_max, num=n)


def sample_curve(x_values: np.ndarray, func: CurveFunction, mapper: CoordinateMapper) -> CurvePoints:
    """Evaluate ``func`` on ``x_values`` and map every point to drawing space.

    The output preserves the order of ``x_values``.
    """
    xs = np.asarray(x_values, dtype=float)
    ys = np.broadcast_to(np.asarray(func(xs), dtype=float), xs.shape)
    draw_x, draw_y = mapper.to_draw(xs, ys)
    return CurvePoints(x=np.asarray(draw_x), y=np.asarray(draw_y))


def line_through(x0: float, y0: float, slope: float) -> CurveFunction:
    """Return the line ``x ↦ y0 + slope · (x − x0)`` as a vectorized callable."""

    def line(x: np.ndarray) -> np.ndarray:
        return y0 + slope * (np.asarray(x, dtype=float) - x0)

    return line


__all__ = [
    "CurveFunction",
    "CurvePoints",
    "SAMPLING_POINTS",
    "line_through",
    "sample_curve",
    "sample_x",
]
