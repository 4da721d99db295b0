"""Notebook widget showing a secant line converging to the tangent line.

Purpose
-------
``SecantWidget`` owns the interactive state (a :class:`StepState`), the
derived-state pipeline, and the ipywidgets/Plotly view. It is the only place
where state changes: both the slider and the preset buttons call
:meth:`SecantWidget.set_delta_x`.

Architecture notes
------------------
Every transition runs the same three steps, synchronously and in order:

1. replace the state (``StepState.with_delta_x`` / ``with_x0``),
2. ``update(state) → DerivedState``,
3. redraw: one ``FigureWidget.batch_update()`` for the figure, then the
   slider position, preset highlighting, and readouts.

There is no observer graph between derived values; the only observers are
the control callbacks that feed step 1.

Important gotchas
-----------------
- Programmatic slider syncs in step 3 would re-enter ``set_delta_x`` through
  the slider observer; they are suppressed with ``_syncing_controls``.
- ``on_init`` is called once, after the first render, and has no default
  behavior. Exceptions it raises propagate out of the constructor.

Examples
--------
>>> w = SecantWidget()  # doctest: +SKIP
>>> w  # doctest: +SKIP
>>> w.set_delta_x(0.1).secant_slope_text  # doctest: +SKIP
'2.1000'
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import ipywidgets as widgets
from IPython.display import display

from .DerivedState import DerivedState, update
from .figure_export import export_html
from .figure_render import apply_frame, build_figure, frame_update
from .math_model import F_LATEX
from .panel_style import DEFAULT_STYLE, PanelStyle
from .sampling import sample_x
from .StepState import (
    DEFAULT_DELTA_X,
    DEFAULT_X0,
    DELTA_X_MAX,
    DELTA_X_MIN,
    DELTA_X_STEP,
    PRESETS,
    StepState,
    is_preset_active,
)
from .viewport import (
    DEFAULT_MATH_VIEWPORT,
    DEFAULT_SURFACE,
    CoordinateMapper,
    DrawingSurface,
    MathViewport,
)

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

InitCallback = Callable[["SecantWidget"], None]


class SecantWidget:
    """
    Interactive secant/tangent panel for Jupyter.

    Parameters
    ----------
    delta_x : float or str, optional
        Initial step size; clamped into ``[0.01, 2.0]``.
    x0 : float or str, optional
        Evaluation point; must lie inside the math viewport's x-range.
    math : MathViewport, optional
        Visible region of the plane. Defaults to ``[0, 4] × [0, 9]``.
    surface : DrawingSurface, optional
        Internal drawing coordinate system. Defaults to 600×400 with padding
        for tick labels.
    style : PanelStyle, optional
        Colors, widths, and tick spacing.
    on_init : callable, optional
        ``on_init(widget)`` is called once after the first render.
    """

    def __init__(
        self,
        delta_x: Union[float, str] = DEFAULT_DELTA_X,
        x0: Union[float, str] = DEFAULT_X0,
        *,
        math: Optional[MathViewport] = None,
        surface: Optional[DrawingSurface] = None,
        style: PanelStyle = DEFAULT_STYLE,
        on_init: Optional[InitCallback] = None,
    ) -> None:
        self._mapper = CoordinateMapper(math or DEFAULT_MATH_VIEWPORT, surface or DEFAULT_SURFACE)
        self._style = style
        self._x_values = sample_x(self._mapper.math)
        self._state = StepState(delta_x=delta_x).with_x0(x0, self._mapper.math)
        self._derived = update(self._state, self._mapper, self._x_values)
        self._syncing_controls = False
        self._render_info_last_log_t = 0.0
        self._render_debug_last_log_t = 0.0

        self._figure_widget = build_figure(self._derived, self._mapper, style, widget=True)
        self._build_controls()
        self._root = self._build_layout()

        self.render(reason="init")
        if on_init is not None:
            on_init(self)

    # ------------------------------------------------------------------
    # Widget tree
    # ------------------------------------------------------------------

    def _build_controls(self) -> None:
        self.title_html = widgets.HTMLMath(layout=widgets.Layout(margin="0 0 4px 0"))

        self.slider = widgets.FloatSlider(
            value=self._state.delta_x,
            min=DELTA_X_MIN,
            max=DELTA_X_MAX,
            step=DELTA_X_STEP,
            description="Δx",
            readout_format=".2f",
            continuous_update=True,
            layout=widgets.Layout(width="100%"),
        )
        self.slider.observe(self._on_slider_change, names="value")

        self.preset_buttons: Dict[float, widgets.Button] = {}
        for preset in PRESETS:
            button = widgets.Button(
                description=f"Δx = {preset:g}",
                tooltip=f"Set Δx to {preset:g}",
                layout=widgets.Layout(width="auto"),
            )
            button.on_click(lambda _button, value=preset: self.set_delta_x(value))
            self.preset_buttons[preset] = button

        self.secant_readout = widgets.HTML(layout=widgets.Layout(margin="0 16px 0 0"))
        self.error_readout = widgets.HTML()

    def _build_layout(self) -> widgets.VBox:
        style = self._style
        presets = widgets.HBox(
            list(self.preset_buttons.values()),
            layout=widgets.Layout(flex_flow="row wrap", margin="4px 0"),
        )
        readouts = widgets.HBox(
            [self.secant_readout, self.error_readout],
            layout=widgets.Layout(align_items="center"),
        )
        return widgets.VBox(
            [self.title_html, self._figure_widget, self.slider, presets, readouts],
            layout=widgets.Layout(
                width=style.panel_width,
                padding="8px",
                border=style.border,
            ),
        )

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> StepState:
        """Current interactive state."""
        return self._state

    @property
    def derived(self) -> DerivedState:
        """Derived quantities for :attr:`state`."""
        return self._derived

    @property
    def mapper(self) -> CoordinateMapper:
        return self._mapper

    @property
    def style(self) -> PanelStyle:
        return self._style

    @property
    def figure_widget(self) -> Any:
        """The backing ``plotly.graph_objects.FigureWidget``."""
        return self._figure_widget

    @property
    def widget(self) -> widgets.VBox:
        """Root widget, for embedding in other ipywidgets layouts."""
        return self._root

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_delta_x(self, value: Union[float, str]) -> DerivedState:
        """Set Δx (clamped into ``[0.01, 2.0]``), recompute, and redraw.

        Returns
        -------
        DerivedState
            The freshly computed derived state.
        """
        return self._transition(self._state.with_delta_x(value), reason="delta_x")

    def set_x0(self, value: Union[float, str]) -> DerivedState:
        """Set the evaluation point x₀, recompute, and redraw.

        Raises
        ------
        ValueError
            If ``value`` is outside the math viewport's x-range.
        """
        return self._transition(self._state.with_x0(value, self._mapper.math), reason="x0")

    def _transition(self, new_state: StepState, *, reason: str) -> DerivedState:
        logger.debug(
            "transition(%s) delta_x %s -> %s, x0 %s -> %s",
            reason, self._state.delta_x, new_state.delta_x, self._state.x0, new_state.x0,
        )
        self._state = new_state
        self._derived = update(new_state, self._mapper, self._x_values)
        self.render(reason=reason)
        return self._derived

    def _on_slider_change(self, change: Dict[str, Any]) -> None:
        if self._syncing_controls:
            return
        self.set_delta_x(change["new"])

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, reason: str = "manual") -> None:
        """Push :attr:`derived` into the figure, controls, and readouts.

        This is a *hot* method: it runs on every slider movement.
        """
        self._log_render(reason)
        d = self._derived

        with self._figure_widget.batch_update():
            apply_frame(self._figure_widget, frame_update(d, self._mapper))

        self._syncing_controls = True
        try:
            if self.slider.value != d.delta_x:
                self.slider.value = d.delta_x
        finally:
            self._syncing_controls = False

        for preset, button in self.preset_buttons.items():
            button.button_style = "primary" if is_preset_active(d.delta_x, preset) else ""

        self.title_html.value = rf"$f(x) = {F_LATEX}$, evaluated at $x_0 = {d.x0:.2f}$"
        self.secant_readout.value = f"<b>Secant slope:</b> {d.secant_slope_text}"
        self.error_readout.value = (
            f"<b>Error:</b> <span style='color:{d.error_color};font-weight:bold'>"
            f"{d.error_text}</span>"
        )

    def _log_render(self, reason: str) -> None:
        """Log render information with rate-limiting."""
        now = time.monotonic()
        if logger.isEnabledFor(logging.INFO) and (now - self._render_info_last_log_t) > 1.0:
            self._render_info_last_log_t = now
            logger.info(f"render(reason={reason}) delta_x={self._state.delta_x:.2f}")

        if logger.isEnabledFor(logging.DEBUG) and (now - self._render_debug_last_log_t) > 0.5:
            self._render_debug_last_log_t = now
            logger.debug(
                f"secant={self._derived.secant_slope_text} "
                f"tangent={self._derived.tangent_slope_text} error={self._derived.error_text}"
            )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def export_html(self, path: Optional[Union[str, Path]] = None, **kwargs: Any) -> str:
        """Export the current state as standalone HTML; see :func:`figure_export.export_html`."""
        return export_html(self._state, path, mapper=self._mapper, style=self._style, **kwargs)

    def _ipython_display_(self, **kwargs: Any) -> None:
        """IPython display hook: show the root widget."""
        display(self._root)


__all__ = ["InitCallback", "SecantWidget"]
