"""Plotly rendering of the secant/tangent panel.

Purpose
-------
Turns a :class:`~secant_tangent.DerivedState.DerivedState` into a Plotly
figure. The figure's axes are the drawing surface itself (``0..width`` by
``height..0``), so the point sequences produced by the coordinate mapper are
plotted as-is and the aspect ratio of the surface is locked.

Concepts and structure
----------------------
The figure is split into a static part, built once by :func:`build_figure`
(grid, axes, tick labels, the function curve), and a dynamic part that
depends on the state: the secant and tangent traces, the P/Q markers, the
shaded interval and its ``Δx`` annotation, and the legend names carrying the
live slopes. :func:`frame_update` computes the dynamic part as plain data;
:func:`apply_frame` writes it into an existing figure in place. The HTML
export reuses :func:`frame_update` to precompute slider steps.

Important gotchas
-----------------
- Trace, shape, and annotation positions are fixed (see the ``*_INDEX``
  constants). Dynamic elements are always created first so their indices do
  not depend on the number of ticks.
- Line points falling outside the plot rectangle are replaced by ``NaN`` so
  Plotly breaks the polyline there instead of drawing over the tick labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import numpy as np
import plotly.graph_objects as go

from .DerivedState import DerivedState
from .math_model import F_TEXT
from .panel_style import DEFAULT_STYLE, PanelStyle
from .sampling import CurvePoints
from .ticks import format_tick, ticks
from .viewport import DEFAULT_MAPPER, CoordinateMapper

FigureLike = Union[go.Figure, go.FigureWidget]

FUNCTION_TRACE_INDEX = 0
TANGENT_TRACE_INDEX = 1
SECANT_TRACE_INDEX = 2
MARKER_TRACE_INDEX = 3
DYNAMIC_TRACE_INDICES = (TANGENT_TRACE_INDEX, SECANT_TRACE_INDEX, MARKER_TRACE_INDEX)

INTERVAL_SHAPE_INDEX = 0
INTERVAL_ANNOTATION_INDEX = 0

CLIP_EPSILON = 1e-6


@dataclass(frozen=True)
class FrameUpdate:
    """Dynamic figure content for one state, as plain Python data."""

    tangent_x: List[float]
    tangent_y: List[Optional[float]]
    tangent_name: str
    secant_x: List[float]
    secant_y: List[Optional[float]]
    secant_name: str
    marker_x: List[float]
    marker_y: List[float]
    marker_hover: List[str]
    interval_x0: float
    interval_x1: float
    interval_label: str
    interval_label_x: float

    def trace_data(self) -> Dict[str, list]:
        """Return the trace fields for ``Plotly.restyle``, ordered as ``DYNAMIC_TRACE_INDICES``."""
        return {
            "x": [self.tangent_x, self.secant_x, self.marker_x],
            "y": [self.tangent_y, self.secant_y, self.marker_y],
            "name": [self.tangent_name, self.secant_name, "Points P, Q"],
            "hovertext": [None, None, self.marker_hover],
        }

    def layout_data(self) -> Dict[str, Any]:
        """Return the layout fields for ``Plotly.relayout`` (attribute-path keys)."""
        shape = f"shapes[{INTERVAL_SHAPE_INDEX}]"
        note = f"annotations[{INTERVAL_ANNOTATION_INDEX}]"
        return {
            f"{shape}.x0": self.interval_x0,
            f"{shape}.x1": self.interval_x1,
            f"{note}.x": self.interval_label_x,
            f"{note}.text": self.interval_label,
        }


def clip_to_plot(points: CurvePoints, mapper: CoordinateMapper) -> np.ndarray:
    """Return ``points.y`` with values outside the plot rectangle set to ``NaN``."""
    s = mapper.surface
    y = np.array(points.y, dtype=float)
    outside = (y < s.plot_top - CLIP_EPSILON) | (y > s.plot_bottom + CLIP_EPSILON)
    y[outside] = np.nan
    return y


def _as_list(values: np.ndarray) -> List[Optional[float]]:
    """Convert to JSON-friendly floats, mapping ``NaN`` to ``None``."""
    return [None if np.isnan(v) else float(v) for v in values]


def frame_update(
    derived: DerivedState,
    mapper: CoordinateMapper = DEFAULT_MAPPER,
) -> FrameUpdate:
    """Compute the state-dependent part of the figure."""
    s = mapper.surface
    interval_x0 = max(s.plot_left, min(s.plot_right, derived.p_draw[0]))
    interval_x1 = max(s.plot_left, min(s.plot_right, derived.q_draw[0]))
    (px, py), (qx, qy) = derived.p_math, derived.q_math
    return FrameUpdate(
        tangent_x=[float(v) for v in derived.tangent_points.x],
        tangent_y=_as_list(clip_to_plot(derived.tangent_points, mapper)),
        tangent_name=f"Tangent (m = {derived.tangent_slope_text})",
        secant_x=[float(v) for v in derived.secant_points.x],
        secant_y=_as_list(clip_to_plot(derived.secant_points, mapper)),
        secant_name=f"Secant (m = {derived.secant_slope_text})",
        marker_x=[derived.p_draw[0], derived.q_draw[0]],
        marker_y=[derived.p_draw[1], derived.q_draw[1]],
        marker_hover=[f"P ({px:.2f}, {py:.2f})", f"Q ({qx:.2f}, {qy:.2f})"],
        interval_x0=interval_x0,
        interval_x1=interval_x1,
        interval_label=f"Δx = {derived.delta_x_text}",
        interval_label_x=(interval_x0 + interval_x1) / 2.0,
    )


def apply_frame(fig: FigureLike, frame: FrameUpdate) -> None:
    """Write ``frame`` into ``fig`` in place.

    For a ``FigureWidget`` callers should wrap this in ``fig.batch_update()``
    so the frontend receives a single message.
    """
    tangent = fig.data[TANGENT_TRACE_INDEX]
    tangent.x, tangent.y, tangent.name = frame.tangent_x, frame.tangent_y, frame.tangent_name

    secant = fig.data[SECANT_TRACE_INDEX]
    secant.x, secant.y, secant.name = frame.secant_x, frame.secant_y, frame.secant_name

    markers = fig.data[MARKER_TRACE_INDEX]
    markers.x, markers.y, markers.hovertext = frame.marker_x, frame.marker_y, frame.marker_hover

    fig.layout.shapes[INTERVAL_SHAPE_INDEX].update(x0=frame.interval_x0, x1=frame.interval_x1)
    fig.layout.annotations[INTERVAL_ANNOTATION_INDEX].update(
        x=frame.interval_label_x, text=frame.interval_label
    )


def _axis_position(value_range: tuple[float, float], lo: float, hi: float, to_draw: Any) -> float:
    """Drawing coordinate of the math axis at 0, or the plot edge when 0 is off-screen."""
    v_min, v_max = value_range
    if v_min <= 0.0 <= v_max:
        return float(to_draw(0.0))
    return lo if v_min > 0.0 else hi


def _static_shapes(mapper: CoordinateMapper, style: PanelStyle) -> List[Dict[str, Any]]:
    m, s = mapper.math, mapper.surface
    line_grid = dict(color=style.grid_color, width=1)
    line_axis = dict(color=style.axis_color, width=1.5)
    shapes: List[Dict[str, Any]] = []

    for t in ticks(m.x_min, m.x_max, style.x_tick_step):
        x = mapper.to_draw_x(t)
        shapes.append(dict(type="line", x0=x, x1=x, y0=s.plot_top, y1=s.plot_bottom,
                           line=line_grid, layer="below"))
    for t in ticks(m.y_min, m.y_max, style.y_tick_step):
        y = mapper.to_draw_y(t)
        shapes.append(dict(type="line", x0=s.plot_left, x1=s.plot_right, y0=y, y1=y,
                           line=line_grid, layer="below"))

    x_axis_y = _axis_position(m.y_range, s.plot_bottom, s.plot_top, mapper.to_draw_y)
    y_axis_x = _axis_position(m.x_range, s.plot_left, s.plot_right, mapper.to_draw_x)
    shapes.append(dict(type="line", x0=s.plot_left, x1=s.plot_right, y0=x_axis_y, y1=x_axis_y,
                       line=line_axis, layer="below"))
    shapes.append(dict(type="line", x0=y_axis_x, x1=y_axis_x, y0=s.plot_top, y1=s.plot_bottom,
                       line=line_axis, layer="below"))
    return shapes


def _static_annotations(mapper: CoordinateMapper, style: PanelStyle) -> List[Dict[str, Any]]:
    m, s = mapper.math, mapper.surface
    font = dict(color=style.label_color, size=style.font_size - 1)
    notes: List[Dict[str, Any]] = []

    for t in ticks(m.x_min, m.x_max, style.x_tick_step):
        notes.append(dict(x=mapper.to_draw_x(t), y=s.plot_bottom + 6, text=format_tick(t),
                          xanchor="center", yanchor="top", showarrow=False, font=font))
    for t in ticks(m.y_min, m.y_max, style.y_tick_step):
        notes.append(dict(x=s.plot_left - 8, y=mapper.to_draw_y(t), text=format_tick(t),
                          xanchor="right", yanchor="middle", showarrow=False, font=font))

    title_font = dict(color=style.label_color, size=style.font_size + 1)
    notes.append(dict(x=s.plot_right, y=s.plot_bottom + 24, text="<i>x</i>",
                      xanchor="right", yanchor="top", showarrow=False, font=title_font))
    notes.append(dict(x=s.plot_left + 6, y=s.plot_top, text="<i>f(x)</i>",
                      xanchor="left", yanchor="top", showarrow=False, font=title_font))
    return notes


def build_figure(
    derived: DerivedState,
    mapper: CoordinateMapper = DEFAULT_MAPPER,
    style: PanelStyle = DEFAULT_STYLE,
    *,
    widget: bool = False,
) -> FigureLike:
    """Build the complete panel figure for ``derived``.

    Parameters
    ----------
    derived : DerivedState
        State to draw.
    mapper : CoordinateMapper, optional
        Transform that produced ``derived``'s point sequences.
    style : PanelStyle, optional
        Colors, widths, and tick spacing.
    widget : bool, optional
        If ``True`` return a ``plotly.graph_objects.FigureWidget`` suitable
        for live updates in a notebook; otherwise a plain ``Figure``.

    Returns
    -------
    plotly.graph_objects.Figure or plotly.graph_objects.FigureWidget
    """
    s = mapper.surface
    frame = frame_update(derived, mapper)

    function_trace = go.Scatter(
        x=derived.function_points.x,
        y=clip_to_plot(derived.function_points, mapper),
        mode="lines",
        name=f"f(x) = {F_TEXT}",
        line=dict(color=style.function_color, width=style.function_width),
        hoverinfo="skip",
    )
    tangent_trace = go.Scatter(
        mode="lines",
        line=dict(color=style.tangent_color, width=style.tangent_width, dash=style.tangent_dash),
        hoverinfo="skip",
    )
    secant_trace = go.Scatter(
        mode="lines",
        line=dict(color=style.secant_color, width=style.secant_width),
        hoverinfo="skip",
    )
    marker_trace = go.Scatter(
        mode="markers+text",
        text=["P", "Q"],
        textposition=["top left", "bottom right"],
        textfont=dict(color=style.label_color, size=style.font_size + 1),
        marker=dict(
            color=style.secant_color,
            size=style.marker_size,
            line=dict(color="white", width=2),
        ),
        hoverinfo="text",
        showlegend=False,
    )

    interval_shape = dict(
        type="rect",
        x0=frame.interval_x0,
        x1=frame.interval_x1,
        y0=s.plot_top,
        y1=s.plot_bottom,
        fillcolor=style.interval_fill,
        line=dict(width=0),
        layer="below",
    )
    interval_note = dict(
        x=frame.interval_label_x,
        y=s.plot_bottom - 6,
        text=frame.interval_label,
        xanchor="center",
        yanchor="bottom",
        showarrow=False,
        font=dict(color=style.secant_color, size=style.font_size),
    )

    layout = go.Layout(
        autosize=True,
        margin=dict(l=0, r=0, t=0, b=0),
        paper_bgcolor="white",
        plot_bgcolor="white",
        font=dict(family=style.font_family, size=style.font_size, color=style.label_color),
        xaxis=dict(range=[0, s.width], visible=False, fixedrange=True, constrain="domain"),
        yaxis=dict(
            range=[s.height, 0],
            visible=False,
            fixedrange=True,
            scaleanchor="x",
            scaleratio=1,
            constrain="domain",
        ),
        shapes=[interval_shape, *_static_shapes(mapper, style)],
        annotations=[interval_note, *_static_annotations(mapper, style)],
        legend=dict(
            x=0.12,
            y=0.97,
            xanchor="left",
            yanchor="top",
            bgcolor="rgba(255,255,255,0.85)",
            bordercolor=style.grid_color,
            borderwidth=1,
        ),
        dragmode=False,
        hovermode="closest",
    )

    traces = [function_trace, tangent_trace, secant_trace, marker_trace]
    fig: FigureLike = go.FigureWidget(data=traces, layout=layout) if widget else go.Figure(data=traces, layout=layout)
    apply_frame(fig, frame)
    return fig


__all__ = [
    "DYNAMIC_TRACE_INDICES",
    "FrameUpdate",
    "apply_frame",
    "build_figure",
    "clip_to_plot",
    "frame_update",
]
