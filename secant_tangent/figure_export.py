"""Standalone HTML export of the panel.

A notebook widget needs a live kernel. For embedding in a static page the
panel is exported as a plain Plotly figure whose controls are Plotly's own:
a slider with one step per Δx on the slider grid, and a row of preset
buttons. Each step carries a precomputed ``update`` (restyle + relayout)
payload built from the same :func:`~secant_tangent.figure_render.frame_update`
the widget uses, so the exported panel shows exactly what the widget would.

Notes
-----
Plotly's slider and buttons do not share state: clicking a preset does not
move the slider handle.
"""

from __future__ import annotations

import html
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import plotly.graph_objects as go

from .DerivedState import DerivedState, update
from .figure_render import DYNAMIC_TRACE_INDICES, build_figure, frame_update
from .panel_style import ARIA_LABEL, DEFAULT_STYLE, PanelStyle
from .sampling import sample_x
from .StepState import DELTA_X_MAX, DELTA_X_MIN, DELTA_X_STEP, PRESETS, StepState
from .ticks import TICK_DECIMALS, ticks
from .viewport import DEFAULT_MAPPER, CoordinateMapper

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

CONTROLS_TOP_PX = 40
CONTROLS_BOTTOM_PX = 110


def slider_values(grid_step: float = DELTA_X_STEP) -> List[float]:
    """Return the Δx values offered by the exported slider.

    The grid ``DELTA_X_MIN, DELTA_X_MIN + grid_step, …, DELTA_X_MAX`` is merged
    with the presets so every preset has an exact step.
    """
    grid = ticks(DELTA_X_MIN, DELTA_X_MAX, grid_step)
    return sorted({round(v, TICK_DECIMALS) for v in (*grid, DELTA_X_MAX, *PRESETS)})


def _readout_text(derived: DerivedState) -> str:
    return (
        f"Secant slope: <b>{derived.secant_slope_text}</b>    "
        f"Error: <b><span style='color:{derived.error_color}'>{derived.error_text}</span></b>"
    )


def _step_args(
    derived: DerivedState, mapper: CoordinateMapper, readout_index: int
) -> List[Any]:
    frame = frame_update(derived, mapper)
    layout_update: Dict[str, Any] = frame.layout_data()
    layout_update[f"annotations[{readout_index}].text"] = _readout_text(derived)
    return [frame.trace_data(), layout_update, list(DYNAMIC_TRACE_INDICES)]


def build_static_figure(
    state: Optional[StepState] = None,
    *,
    mapper: CoordinateMapper = DEFAULT_MAPPER,
    style: PanelStyle = DEFAULT_STYLE,
    grid_step: float = DELTA_X_STEP,
) -> go.Figure:
    """Build a self-contained figure with a Plotly slider and preset buttons.

    Parameters
    ----------
    state : StepState, optional
        Initial state (default ``StepState()``). Its ``x0`` is used for every step.
    mapper : CoordinateMapper, optional
        Math → drawing transform.
    style : PanelStyle, optional
        Visual configuration.
    grid_step : float, optional
        Δx spacing of the slider steps. Larger values produce smaller files.

    Returns
    -------
    plotly.graph_objects.Figure
    """
    state = state or StepState()
    xs = sample_x(mapper.math)
    current = update(state, mapper, xs)
    fig = build_figure(current, mapper, style)

    readout_index = len(fig.layout.annotations)
    fig.add_annotation(
        x=0.5,
        y=0.0,
        xref="paper",
        yref="paper",
        xanchor="center",
        yanchor="top",
        yshift=-62,
        showarrow=False,
        text=_readout_text(current),
    )

    values = slider_values(grid_step)
    steps = []
    for value in values:
        derived = update(state.with_delta_x(value), mapper, xs)
        steps.append(
            dict(
                method="update",
                label=f"{value:.2f}",
                args=_step_args(derived, mapper, readout_index),
            )
        )
    active = min(range(len(values)), key=lambda i: abs(values[i] - state.delta_x))

    buttons = []
    for preset in PRESETS:
        derived = update(state.with_delta_x(preset), mapper, xs)
        buttons.append(
            dict(
                method="update",
                label=f"Δx = {preset:g}",
                args=_step_args(derived, mapper, readout_index),
            )
        )

    fig.update_layout(
        margin=dict(l=0, r=0, t=CONTROLS_TOP_PX, b=CONTROLS_BOTTOM_PX),
        sliders=[
            dict(
                active=active,
                steps=steps,
                currentvalue=dict(prefix="Δx = ", font=dict(color=style.label_color)),
                pad=dict(t=10),
                x=0.05,
                len=0.9,
                y=0.0,
                yanchor="top",
            )
        ],
        updatemenus=[
            dict(
                type="buttons",
                direction="right",
                buttons=buttons,
                showactive=False,
                x=0.5,
                y=1.0,
                xanchor="center",
                yanchor="bottom",
                pad=dict(b=6),
            )
        ],
    )
    logger.debug("built static figure with %d slider steps", len(steps))
    return fig


def export_html(
    state: Optional[StepState] = None,
    path: Optional[Union[str, Path]] = None,
    *,
    mapper: CoordinateMapper = DEFAULT_MAPPER,
    style: PanelStyle = DEFAULT_STYLE,
    grid_step: float = DELTA_X_STEP,
    include_plotlyjs: Union[bool, str] = "cdn",
) -> str:
    """Render the panel as an embeddable HTML fragment.

    The fragment is a ``<div>`` carrying the panel's ARIA label whose CSS
    ``aspect-ratio`` matches the drawing surface plus the control strip, so it
    scales to any container width.

    Parameters
    ----------
    state : StepState, optional
        Initial state.
    path : str or pathlib.Path, optional
        If given, the fragment is also written to this file (UTF-8).
    include_plotlyjs : bool or str, optional
        Forwarded to ``plotly.io.to_html`` (``"cdn"``, ``True`` to inline, …).

    Returns
    -------
    str
        The HTML fragment.
    """
    fig = build_static_figure(state, mapper=mapper, style=style, grid_step=grid_step)
    body = fig.to_html(
        full_html=False,
        include_plotlyjs=include_plotlyjs,
        default_width="100%",
        default_height="100%",
        config={"responsive": True, "displayModeBar": False},
    )
    s = mapper.surface
    aspect = f"{s.width:g} / {s.height + CONTROLS_TOP_PX + CONTROLS_BOTTOM_PX:g}"
    fragment = (
        f'<div class="secant-tangent-panel" role="img" '
        f'aria-label="{html.escape(ARIA_LABEL, quote=True)}" '
        f'style="width:{style.panel_width};aspect-ratio:{aspect};'
        f'border:{style.border};border-radius:{style.border_radius_px}px;">'
        f"{body}</div>"
    )
    if path is not None:
        target = Path(path)
        target.write_text(fragment, encoding="utf-8")
        logger.info(f"exported panel to {target}")
    return fragment


__all__ = ["build_static_figure", "export_html", "slider_values"]
