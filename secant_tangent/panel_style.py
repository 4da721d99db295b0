"""Visual configuration of the secant/tangent panel.

All presentation constants live in :class:`PanelStyle` so the rendering code
holds no literals and notebook users can restyle a widget with
``SecantWidget(style=PanelStyle(secant_color="black"))``.
"""

from __future__ import annotations

from dataclasses import dataclass

DASH_STYLES = ("solid", "dot", "dash", "longdash", "dashdot", "longdashdot")

ARIA_LABEL = (
    "Interactive plot of f(x) = x² − 2x + 3 showing a secant line through "
    "x₀ and x₀ + Δx approaching the tangent line at x₀ as Δx shrinks."
)


@dataclass(frozen=True)
class PanelStyle:
    """
    Visual styling options for the panel.

    Parameters
    ----------
    function_color, secant_color, tangent_color:
        Line colors. Accept CSS names, ``#RRGGBB`` or ``rgb()`` strings.
    function_width, secant_width, tangent_width:
        Line widths in pixels.
    tangent_dash:
        Plotly dash pattern for the tangent line.
    marker_size:
        Diameter of the P/Q endpoint markers in pixels.
    interval_fill:
        Fill color of the shaded ``[x₀, x₀+Δx]`` rectangle.
    grid_color, axis_color, label_color:
        Grid lines, axis lines, and tick/axis label text.
    font_family, font_size:
        Font used for all text inside the figure.
    x_tick_step, y_tick_step:
        Tick spacing in math units.
    panel_width:
        CSS width of the whole panel; the figure keeps its aspect ratio.
    border, border_radius_px:
        Frame drawn around the panel.
    """

    function_color: str = "#2c3e50"
    secant_color: str = "#e67e22"
    tangent_color: str = "#8e44ad"
    function_width: float = 3.0
    secant_width: float = 2.0
    tangent_width: float = 2.0
    tangent_dash: str = "dash"
    marker_size: float = 10.0
    interval_fill: str = "rgba(230,126,34,0.12)"
    grid_color: str = "#ecf0f1"
    axis_color: str = "#7f8c8d"
    label_color: str = "#34495e"
    font_family: str = "Helvetica, Arial, sans-serif"
    font_size: int = 12
    x_tick_step: float = 0.5
    y_tick_step: float = 1.0
    panel_width: str = "100%"
    border: str = "1px solid #ddd"
    border_radius_px: int = 8

    def __post_init__(self) -> None:
        if self.tangent_dash not in DASH_STYLES:
            raise ValueError(
                f"tangent_dash must be one of {', '.join(DASH_STYLES)}; got {self.tangent_dash!r}"
            )
        for name in ("function_width", "secant_width", "tangent_width", "marker_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)!r}")
        for name in ("x_tick_step", "y_tick_step"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)!r}")


DEFAULT_STYLE = PanelStyle()


__all__ = ["ARIA_LABEL", "DASH_STYLES", "DEFAULT_STYLE", "PanelStyle"]
