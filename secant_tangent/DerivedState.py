"""Derived quantities of one :class:`StepState`.

Purpose
-------
:func:`update` is the whole reactive layer: it takes the current state and
returns a fresh :class:`DerivedState` holding everything the presentation
layer draws. There is no observer graph and no cached intermediate; the
widget calls ``update`` after every transition and throws the previous result
away.

Recomputation order
-------------------
1. secant slope ``(f(x₀+Δx) − f(x₀)) / Δx``
2. tangent slope ``f'(x₀)``
3. error ``|secant − tangent|``
4. error color
5. function / secant / tangent point sequences
6. marker points ``P = (x₀, f(x₀))`` and ``Q = (x₀+Δx, f(x₀+Δx))``

All steps are pure and total for any state ``StepState`` can hold.

Examples
--------
>>> d = update(StepState(delta_x=1.0))
>>> d.secant_slope, d.tangent_slope, d.error_text
(3.0, 2.0, '1.0000')
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .colors import RGB, error_color, error_ratio, rgb_css
from .math_model import f, f_prime
from .sampling import CurvePoints, line_through, sample_curve, sample_x
from .StepState import StepState
from .viewport import DEFAULT_MAPPER, CoordinateMapper

Point = Tuple[float, float]


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class DerivedState:
    """Everything computed from ``(x₀, Δx)`` and the viewport.

    Math-space values (``secant_slope``, ``p_math``, …) are kept next to the
    drawing-space point sequences so readouts and geometry always agree.
    """

    state: StepState
    secant_slope: float
    tangent_slope: float
    error: float
    error_ratio: float
    error_rgb: RGB
    function_points: CurvePoints
    secant_points: CurvePoints
    tangent_points: CurvePoints
    p_math: Point
    q_math: Point
    p_draw: Point
    q_draw: Point

    __hash__ = None  # type: ignore[assignment]

    @property
    def delta_x(self) -> float:
        return self.state.delta_x

    @property
    def x0(self) -> float:
        return self.state.x0

    @property
    def error_color(self) -> str:
        """CSS ``rgb(...)`` form of :attr:`error_rgb`."""
        return rgb_css(self.error_rgb)

    @property
    def secant_slope_text(self) -> str:
        return f"{self.secant_slope:.4f}"

    @property
    def tangent_slope_text(self) -> str:
        return f"{self.tangent_slope:.4f}"

    @property
    def error_text(self) -> str:
        return f"{self.error:.4f}"

    @property
    def delta_x_text(self) -> str:
        return f"{self.delta_x:.2f}"


def secant_slope(x0: float, delta_x: float) -> float:
    """Return the difference quotient ``(f(x₀+Δx) − f(x₀)) / Δx``."""
    return (f(x0 + delta_x) - f(x0)) / delta_x


def tangent_slope(x0: float) -> float:
    """Return the exact derivative ``f'(x₀)``."""
    return f_prime(x0)


def update(
    state: StepState,
    mapper: CoordinateMapper = DEFAULT_MAPPER,
    x_values: Optional[np.ndarray] = None,
) -> DerivedState:
    """Recompute all derived quantities for ``state``.

    Parameters
    ----------
    state : StepState
        Current step size and evaluation point.
    mapper : CoordinateMapper, optional
        Math → drawing transform. Defaults to the standard 600×400 surface.
    x_values : numpy.ndarray, optional
        Precomputed sample grid. Defaults to :func:`sample_x` over the
        mapper's viewport; callers that redraw often pass it in to skip
        re-allocating the grid.

    Returns
    -------
    DerivedState
    """
    x0, dx = state.x0, state.delta_x

    m_secant = secant_slope(x0, dx)
    m_tangent = tangent_slope(x0)
    err = abs(m_secant - m_tangent)
    ratio = error_ratio(err)
    rgb = error_color(err)

    xs = sample_x(mapper.math) if x_values is None else x_values
    y0 = f(x0)
    function_points = sample_curve(xs, f, mapper)
    secant_points = sample_curve(xs, line_through(x0, y0, m_secant), mapper)
    tangent_points = sample_curve(xs, line_through(x0, y0, m_tangent), mapper)

    p_math = (x0, y0)
    q_math = (x0 + dx, f(x0 + dx))

    return DerivedState(
        state=state,
        secant_slope=m_secant,
        tangent_slope=m_tangent,
        error=err,
        error_ratio=ratio,
        error_rgb=rgb,
        function_points=function_points,
        secant_points=secant_points,
        tangent_points=tangent_points,
        p_math=p_math,
        q_math=q_math,
        p_draw=mapper.to_draw(*p_math),
        q_draw=mapper.to_draw(*q_math),
    )


__all__ = ["DerivedState", "Point", "secant_slope", "tangent_slope", "update"]
