"""Property-based checks for the pure computational core.

These cover the convergence, mapping, and color invariants over the whole
input range rather than at a handful of examples.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from secant_tangent.colors import error_color
from secant_tangent.DerivedState import update
from secant_tangent.StepState import DELTA_X_MAX, DELTA_X_MIN, StepState
from secant_tangent.ticks import ticks
from secant_tangent.viewport import DEFAULT_MAPPER

try:
    from hypothesis import assume, given, settings
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


DELTA_XS = st.floats(min_value=DELTA_X_MIN, max_value=DELTA_X_MAX, allow_nan=False)
X0S = st.floats(min_value=0.0, max_value=4.0, allow_nan=False)
VIEW_XS = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False)


@settings(max_examples=50, deadline=None)
@given(delta_x=DELTA_XS, x0=X0S)
def test_secant_error_equals_step_for_quadratic(delta_x: float, x0: float) -> None:
    """For a unit-leading-coefficient quadratic the difference quotient is f'(x₀) + Δx."""
    d = update(StepState(delta_x=delta_x).with_x0(x0))
    assert math.isfinite(d.secant_slope)
    assert d.error == pytest.approx(delta_x, abs=1e-9)
    assert d.secant_slope > d.tangent_slope


@given(a=DELTA_XS, b=DELTA_XS)
def test_error_is_monotonic_in_step(a: float, b: float) -> None:
    small, large = sorted((a, b))
    e_small = update(StepState(delta_x=small)).error
    e_large = update(StepState(delta_x=large)).error
    assert e_small <= e_large + 1e-9


@given(x1=VIEW_XS, x2=VIEW_XS, t=st.floats(min_value=0.0, max_value=1.0))
def test_mapper_is_affine(x1: float, x2: float, t: float) -> None:
    mid = x1 + t * (x2 - x1)
    expected = DEFAULT_MAPPER.to_draw_x(x1) + t * (
        DEFAULT_MAPPER.to_draw_x(x2) - DEFAULT_MAPPER.to_draw_x(x1)
    )
    assert DEFAULT_MAPPER.to_draw_x(mid) == pytest.approx(expected, abs=1e-6)


@given(y1=VIEW_XS, y2=VIEW_XS)
def test_mapper_flips_vertical_order(y1: float, y2: float) -> None:
    # below this gap both values can round to the same drawing coordinate
    assume(y2 - y1 > 1e-9)
    assert DEFAULT_MAPPER.to_draw_y(y1) > DEFAULT_MAPPER.to_draw_y(y2)


@given(error=st.floats(min_value=0.0, max_value=1e6, allow_nan=False))
def test_error_color_channels_stay_between_endpoints(error: float) -> None:
    r, g, b = error_color(error)
    assert 39 <= r <= 192
    assert 57 <= g <= 174
    assert 43 <= b <= 96


@settings(max_examples=25, deadline=None)
@given(delta_x=DELTA_XS)
def test_update_is_deterministic(delta_x: float) -> None:
    first = update(StepState(delta_x=delta_x))
    second = update(StepState(delta_x=delta_x))
    assert first == second
    np.testing.assert_array_equal(first.secant_points.y, second.secant_points.y)


@given(
    lo=st.integers(min_value=-20, max_value=20),
    span=st.integers(min_value=1, max_value=40),
    step=st.sampled_from([0.1, 0.25, 0.5, 1.0, 2.0]),
)
def test_ticks_start_at_min_and_never_exceed_max(lo: int, span: int, step: float) -> None:
    hi = lo + span
    result = ticks(lo, hi, step)
    assert result[0] == lo
    assert result[-1] <= hi + 1e-9
    assert result == sorted(result)
    assert len(result) == math.floor(span / step + 1e-9) + 1
