from __future__ import annotations

import logging

import ipywidgets as widgets
import pytest

from secant_tangent.figure_render import INTERVAL_ANNOTATION_INDEX, SECANT_TRACE_INDEX
from secant_tangent.SecantWidget import SecantWidget
from secant_tangent.StepState import DELTA_X_MIN, PRESETS


def test_widget_builds_with_defaults() -> None:
    w = SecantWidget()
    assert w.state.delta_x == 1.0
    assert w.state.x0 == 2.0
    assert isinstance(w.widget, widgets.VBox)
    assert w.slider.min == 0.01
    assert w.slider.max == 2.0
    assert w.slider.step == 0.01
    assert list(w.preset_buttons) == list(PRESETS)
    assert "3.0000" in w.secant_readout.value
    assert "1.0000" in w.error_readout.value


def test_set_delta_x_redraws_everything() -> None:
    w = SecantWidget()
    derived = w.set_delta_x(0.1)

    assert derived is w.derived
    assert derived.secant_slope_text == "2.1000"
    assert w.slider.value == pytest.approx(0.1)
    assert w.figure_widget.data[SECANT_TRACE_INDEX].name == "Secant (m = 2.1000)"
    assert w.figure_widget.layout.annotations[INTERVAL_ANNOTATION_INDEX].text == "Δx = 0.10"
    assert "2.1000" in w.secant_readout.value
    assert derived.error_color in w.error_readout.value


def test_slider_drag_routes_through_set_delta_x() -> None:
    w = SecantWidget()
    w.slider.value = 0.5
    assert w.state.delta_x == 0.5
    assert w.derived.secant_slope_text == "2.5000"


def test_preset_click_and_active_styling() -> None:
    w = SecantWidget()
    assert w.preset_buttons[1.0].button_style == "primary"
    assert w.preset_buttons[0.5].button_style == ""

    w.preset_buttons[0.01].click()
    assert w.state.delta_x == DELTA_X_MIN
    assert w.slider.value == pytest.approx(0.01)
    assert w.preset_buttons[0.01].button_style == "primary"
    assert w.preset_buttons[1.0].button_style == ""


def test_near_preset_values_mark_button_active() -> None:
    w = SecantWidget(delta_x=0.499)
    assert w.preset_buttons[0.5].button_style == "primary"
    w.set_delta_x(0.51)
    assert w.preset_buttons[0.5].button_style == ""


def test_out_of_range_input_is_clamped() -> None:
    w = SecantWidget()
    assert w.set_delta_x(0).delta_x == 0.01
    assert w.set_delta_x("5").delta_x == 2.0


def test_repeated_set_is_idempotent() -> None:
    w = SecantWidget()
    first = w.set_delta_x(0.73)
    second = w.set_delta_x(0.73)
    assert first == second


def test_set_x0() -> None:
    w = SecantWidget()
    derived = w.set_x0(1.0)
    assert derived.tangent_slope == 0.0
    assert "x_0 = 1.00" in w.title_html.value
    with pytest.raises(ValueError):
        w.set_x0(10)
    assert w.state.x0 == 1.0


def test_on_init_is_called_once_after_render() -> None:
    seen = []

    def hook(widget: SecantWidget) -> None:
        seen.append(widget.derived.secant_slope_text)

    w = SecantWidget(delta_x=0.5, on_init=hook)
    w.set_delta_x(0.1)
    assert seen == ["2.5000"]


def test_on_init_errors_propagate() -> None:
    def hook(widget: SecantWidget) -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        SecantWidget(on_init=hook)


def test_transitions_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    w = SecantWidget()
    with caplog.at_level(logging.DEBUG, logger="secant_tangent.SecantWidget"):
        w.set_delta_x(0.2)
    assert any("transition(delta_x)" in rec.getMessage() for rec in caplog.records)


def test_widget_export_uses_current_state() -> None:
    w = SecantWidget(delta_x=0.5)
    fragment = w.export_html(grid_step=1.0, include_plotlyjs=False)
    assert "secant-tangent-panel" in fragment
    assert "Secant (m = 2.5000)" in fragment
