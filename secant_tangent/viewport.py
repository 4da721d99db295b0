"""Viewport primitives and the math → drawing coordinate mapper.

Purpose
-------
Two fixed rectangles describe every frame the widget draws:

- :class:`MathViewport`, the visible range of the mathematical plane,
- :class:`DrawingSurface`, the internal drawing coordinate system (600×400
  units by default) with per-side padding reserved for tick labels.

:class:`CoordinateMapper` is the affine transform between them. Drawing
coordinates have their origin in the top-left corner and grow downward, so the
vertical map is flipped.

Important gotchas
-----------------
- The mapper never clamps. Points outside the math viewport map outside the
  plot rectangle; the renderer is responsible for clipping.
- Both dataclasses are frozen; a widget keeps the same viewport for its whole
  lifetime.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple, Union

import numpy as np

ArrayOrScalar = Union[float, np.ndarray]


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")


@dataclass(frozen=True)
class MathViewport:
    """Visible rectangle of the mathematical plane.

    Parameters
    ----------
    x_min, x_max : float
        Horizontal range. ``x_max`` must exceed ``x_min``.
    y_min, y_max : float
        Vertical range. ``y_max`` must exceed ``y_min``.
    """

    x_min: float = 0.0
    x_max: float = 4.0
    y_min: float = 0.0
    y_max: float = 9.0

    def __post_init__(self) -> None:
        _require_finite(x_min=self.x_min, x_max=self.x_max, y_min=self.y_min, y_max=self.y_max)
        if self.x_max <= self.x_min:
            raise ValueError(f"x_max ({self.x_max}) must be greater than x_min ({self.x_min})")
        if self.y_max <= self.y_min:
            raise ValueError(f"y_max ({self.y_max}) must be greater than y_min ({self.y_min})")

    @property
    def x_range(self) -> Tuple[float, float]:
        return (self.x_min, self.x_max)

    @property
    def y_range(self) -> Tuple[float, float]:
        return (self.y_min, self.y_max)

    def contains_x(self, x: float) -> bool:
        """Return ``True`` when ``x`` lies inside ``[x_min, x_max]``."""
        return self.x_min <= x <= self.x_max


@dataclass(frozen=True)
class Padding:
    """Per-side padding of the drawing surface, in drawing units."""

    top: float = 20.0
    right: float = 20.0
    bottom: float = 45.0
    left: float = 55.0

    def __post_init__(self) -> None:
        for side in ("top", "right", "bottom", "left"):
            value = getattr(self, side)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"padding.{side} must be a finite value >= 0, got {value!r}")


@dataclass(frozen=True)
class DrawingSurface:
    """Fixed internal coordinate system of the drawing region.

    The plot rectangle is the surface minus its padding; ``plot_width`` and
    ``plot_height`` must both be positive.
    """

    width: float = 600.0
    height: float = 400.0
    padding: Padding = field(default_factory=Padding)

    def __post_init__(self) -> None:
        _require_finite(width=self.width, height=self.height)
        if self.plot_width <= 0:
            raise ValueError(
                f"Horizontal padding ({self.padding.left} + {self.padding.right}) "
                f"leaves no room in a surface of width {self.width}"
            )
        if self.plot_height <= 0:
            raise ValueError(
                f"Vertical padding ({self.padding.top} + {self.padding.bottom}) "
                f"leaves no room in a surface of height {self.height}"
            )

    @property
    def plot_width(self) -> float:
        return self.width - self.padding.left - self.padding.right

    @property
    def plot_height(self) -> float:
        return self.height - self.padding.top - self.padding.bottom

    @property
    def plot_left(self) -> float:
        return self.padding.left

    @property
    def plot_right(self) -> float:
        return self.padding.left + self.plot_width

    @property
    def plot_top(self) -> float:
        return self.padding.top

    @property
    def plot_bottom(self) -> float:
        return self.padding.top + self.plot_height


class CoordinateMapper:
    """Affine map from a :class:`MathViewport` onto a :class:`DrawingSurface`.

    Both ``to_draw_x`` and ``to_draw_y`` accept a scalar (returning ``float``)
    or a NumPy array (returning an array of the same shape).

    Examples
    --------
    >>> mapper = CoordinateMapper(MathViewport(), DrawingSurface())
    >>> mapper.to_draw_x(0.0), mapper.to_draw_y(9.0)
    (55.0, 20.0)
    """

    def __init__(self, math_viewport: MathViewport, surface: DrawingSurface) -> None:
        self.math = math_viewport
        self.surface = surface

    def __repr__(self) -> str:
        return f"CoordinateMapper(math={self.math!r}, surface={self.surface!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoordinateMapper):
            return NotImplemented
        return self.math == other.math and self.surface == other.surface

    def __hash__(self) -> int:
        return hash((self.math, self.surface))

    def to_draw_x(self, x: ArrayOrScalar) -> ArrayOrScalar:
        """Map a math x-coordinate to a drawing x-coordinate."""
        m, s = self.math, self.surface
        values = np.asarray(x, dtype=float)
        result = s.padding.left + (values - m.x_min) / (m.x_max - m.x_min) * s.plot_width
        return float(result) if result.ndim == 0 else result

    def to_draw_y(self, y: ArrayOrScalar) -> ArrayOrScalar:
        """Map a math y-coordinate to a drawing y-coordinate (vertically flipped)."""
        m, s = self.math, self.surface
        values = np.asarray(y, dtype=float)
        result = s.padding.top + (1.0 - (values - m.y_min) / (m.y_max - m.y_min)) * s.plot_height
        return float(result) if result.ndim == 0 else result

    def to_draw(self, x: ArrayOrScalar, y: ArrayOrScalar) -> Tuple[ArrayOrScalar, ArrayOrScalar]:
        """Map a math point (or arrays of points) to drawing coordinates."""
        return self.to_draw_x(x), self.to_draw_y(y)


DEFAULT_MATH_VIEWPORT = MathViewport()
DEFAULT_SURFACE = DrawingSurface()
DEFAULT_MAPPER = CoordinateMapper(DEFAULT_MATH_VIEWPORT, DEFAULT_SURFACE)


__all__ = [
    "CoordinateMapper",
    "DEFAULT_MAPPER",
    "DEFAULT_MATH_VIEWPORT",
    "DEFAULT_SURFACE",
    "DrawingSurface",
    "MathViewport",
    "Padding",
]
