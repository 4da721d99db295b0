from __future__ import annotations

import pytest

from secant_tangent.ticks import format_tick, ticks


def test_half_unit_ticks_on_x_axis() -> None:
    assert ticks(0, 4, 0.5) == [0, 0.5, 1, 1.5, 2, 2.5, 3, 3.5, 4]


def test_unit_ticks_on_y_axis() -> None:
    result = ticks(0, 9, 1)
    assert len(result) == 10
    assert result[-1] == 9


def test_floating_point_drift_is_rounded_away() -> None:
    result = ticks(0, 1, 0.1)
    assert len(result) == 11
    assert result[3] == 0.3
    assert result[-1] == 1.0


def test_max_is_excluded_when_not_on_grid() -> None:
    assert ticks(0, 1, 0.3) == [0, 0.3, 0.6, 0.9]


@pytest.mark.parametrize("step", [0, -1, float("nan")])
def test_invalid_step_is_rejected(step: float) -> None:
    with pytest.raises(ValueError):
        ticks(0, 1, step)


def test_format_tick_drops_trailing_zeros() -> None:
    assert format_tick(2.0) == "2"
    assert format_tick(0.5) == "0.5"
    assert format_tick(-0.0) == "0"
    assert format_tick(1.25) == "1.25"
