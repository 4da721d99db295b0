from __future__ import annotations

import numpy as np
import plotly.graph_objects as go
import pytest

from secant_tangent.DerivedState import update
from secant_tangent.figure_render import (
    INTERVAL_ANNOTATION_INDEX,
    INTERVAL_SHAPE_INDEX,
    MARKER_TRACE_INDEX,
    SECANT_TRACE_INDEX,
    TANGENT_TRACE_INDEX,
    apply_frame,
    build_figure,
    clip_to_plot,
    frame_update,
)
from secant_tangent.panel_style import PanelStyle
from secant_tangent.StepState import StepState
from secant_tangent.viewport import DEFAULT_MAPPER


def test_build_figure_contains_all_layers() -> None:
    fig = build_figure(update(StepState(delta_x=1.0)))
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 4
    assert fig.data[0].name == "f(x) = x² - 2x + 3"
    assert fig.data[SECANT_TRACE_INDEX].name == "Secant (m = 3.0000)"
    assert fig.data[TANGENT_TRACE_INDEX].name == "Tangent (m = 2.0000)"
    assert list(fig.data[MARKER_TRACE_INDEX].text) == ["P", "Q"]
    # interval + 9 vertical + 10 horizontal grid lines + 2 axes
    assert len(fig.layout.shapes) == 1 + 9 + 10 + 2
    # interval label + 9 x labels + 10 y labels + 2 axis titles
    assert len(fig.layout.annotations) == 1 + 9 + 10 + 2


def test_axes_use_drawing_coordinates() -> None:
    fig = build_figure(update(StepState()))
    assert tuple(fig.layout.xaxis.range) == (0, 600.0)
    assert tuple(fig.layout.yaxis.range) == (400.0, 0)
    assert fig.layout.yaxis.scaleanchor == "x"


def test_interval_shape_and_label() -> None:
    fig = build_figure(update(StepState(delta_x=1.0)))
    shape = fig.layout.shapes[INTERVAL_SHAPE_INDEX]
    assert shape.type == "rect"
    assert shape.x0 == pytest.approx(DEFAULT_MAPPER.to_draw_x(2.0))
    assert shape.x1 == pytest.approx(DEFAULT_MAPPER.to_draw_x(3.0))
    assert fig.layout.annotations[INTERVAL_ANNOTATION_INDEX].text == "Δx = 1.00"


def test_lines_are_clipped_to_plot_rectangle() -> None:
    d = update(StepState(delta_x=2.0))
    clipped = clip_to_plot(d.secant_points, DEFAULT_MAPPER)
    # Secant slope 4 through (2, 3): y(0) = -5 is below the viewport.
    assert np.isnan(clipped[0])
    assert not np.isnan(clipped[150])
    frame = frame_update(d)
    assert frame.secant_y[0] is None
    assert len(frame.secant_x) == 300


def test_apply_frame_updates_dynamic_parts_in_place() -> None:
    fig = build_figure(update(StepState(delta_x=1.0)))
    function_y_before = np.array(fig.data[0].y, dtype=float)
    apply_frame(fig, frame_update(update(StepState(delta_x=0.1))))

    assert fig.data[SECANT_TRACE_INDEX].name == "Secant (m = 2.1000)"
    assert fig.layout.annotations[INTERVAL_ANNOTATION_INDEX].text == "Δx = 0.10"
    assert fig.layout.shapes[INTERVAL_SHAPE_INDEX].x1 == pytest.approx(DEFAULT_MAPPER.to_draw_x(2.1))
    np.testing.assert_array_equal(np.array(fig.data[0].y, dtype=float), function_y_before)


def test_frame_payloads_address_dynamic_elements() -> None:
    frame = frame_update(update(StepState(delta_x=0.5)))
    data = frame.trace_data()
    assert len(data["x"]) == 3
    assert data["name"][1] == "Secant (m = 2.5000)"
    layout = frame.layout_data()
    assert layout["annotations[0].text"] == "Δx = 0.50"
    assert layout["shapes[0].x0"] == pytest.approx(DEFAULT_MAPPER.to_draw_x(2.0))


def test_style_is_applied() -> None:
    style = PanelStyle(secant_color="black", tangent_dash="dot", y_tick_step=3.0)
    fig = build_figure(update(StepState()), style=style)
    assert fig.data[SECANT_TRACE_INDEX].line.color == "black"
    assert fig.data[TANGENT_TRACE_INDEX].line.dash == "dot"
    assert len(fig.layout.shapes) == 1 + 9 + 4 + 2


def test_invalid_style_is_rejected() -> None:
    with pytest.raises(ValueError, match="tangent_dash"):
        PanelStyle(tangent_dash="zigzag")
    with pytest.raises(ValueError, match="marker_size"):
        PanelStyle(marker_size=0)


def test_widget_figure() -> None:
    fig = build_figure(update(StepState()), widget=True)
    assert isinstance(fig, go.FigureWidget)
