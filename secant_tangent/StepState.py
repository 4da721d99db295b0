"""Interactive state of the widget: the step size and the evaluation point.

``StepState`` is the single authoritative piece of mutable state. It is
immutable itself; transitions return a new instance, so a derived-state
computation can never observe a half-applied update.

Transitions
-----------
- :meth:`StepState.with_delta_x` ("set Δx"), driven by the slider and the
  preset buttons. Values are clamped into ``[DELTA_X_MIN, DELTA_X_MAX]``,
  which keeps ``Δx = 0`` (undefined secant slope) unreachable.
- :meth:`StepState.with_x0` ("set x₀"). No control is bound to it yet.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .InputConvert import InputConvert
from .viewport import DEFAULT_MATH_VIEWPORT, MathViewport

DELTA_X_MIN = 0.01
DELTA_X_MAX = 2.0
DELTA_X_STEP = 0.01
DEFAULT_DELTA_X = 1.0
DEFAULT_X0 = 2.0

PRESETS: tuple[float, ...] = (2.0, 1.0, 0.5, 0.1, 0.01)
PRESET_TOLERANCE = 0.005


def clamp_delta_x(value: Any) -> float:
    """Convert ``value`` to float and clamp it into ``[DELTA_X_MIN, DELTA_X_MAX]``.

    Raises
    ------
    ValueError
        If ``value`` is not finite or cannot be parsed.
    TypeError
        If ``value`` is not a number or numeric string.
    """
    dx = InputConvert(value, name="delta_x")
    return min(DELTA_X_MAX, max(DELTA_X_MIN, dx))


def is_preset_active(delta_x: float, preset: float, tolerance: float = PRESET_TOLERANCE) -> bool:
    """Return ``True`` when ``delta_x`` is within ``tolerance`` of ``preset``."""
    return abs(delta_x - preset) < tolerance


@dataclass(frozen=True)
class StepState:
    """Current interactive parameters.

    Parameters
    ----------
    delta_x : float
        Step size Δx, always inside ``[DELTA_X_MIN, DELTA_X_MAX]``.
    x0 : float
        Evaluation point where the secant and tangent are anchored.
        Only checked for finiteness here; range checks against a viewport
        happen in :meth:`with_x0`.
    """

    delta_x: float = DEFAULT_DELTA_X
    x0: float = DEFAULT_X0

    def __post_init__(self) -> None:
        object.__setattr__(self, "delta_x", clamp_delta_x(self.delta_x))
        object.__setattr__(self, "x0", InputConvert(self.x0, name="x0"))

    def with_delta_x(self, value: Any) -> "StepState":
        """Return a copy with Δx set to ``value`` (clamped)."""
        return replace(self, delta_x=clamp_delta_x(value))

    def with_x0(self, value: Any, viewport: MathViewport = DEFAULT_MATH_VIEWPORT) -> "StepState":
        """Return a copy with x₀ set to ``value``.

        Raises
        ------
        ValueError
            If ``value`` lies outside the viewport's x-range.
        """
        x0 = InputConvert(value, name="x0")
        if not viewport.contains_x(x0):
            raise ValueError(
                f"x0 must lie inside [{viewport.x_min}, {viewport.x_max}], got {x0!r}"
            )
        return replace(self, x0=x0)

    def active_presets(self) -> tuple[float, ...]:
        """Return the presets currently matching Δx."""
        return tuple(p for p in PRESETS if is_preset_active(self.delta_x, p))


__all__ = [
    "DEFAULT_DELTA_X",
    "DEFAULT_X0",
    "DELTA_X_MAX",
    "DELTA_X_MIN",
    "DELTA_X_STEP",
    "PRESETS",
    "PRESET_TOLERANCE",
    "StepState",
    "clamp_delta_x",
    "is_preset_active",
]
