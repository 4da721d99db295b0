"""Top-level public API for the ``secant_tangent`` package.

This module re-exports the notebook-facing widget and the pure building
blocks behind it, so users can import from a single namespace:

>>> from secant_tangent import SecantWidget  # doctest: +SKIP
>>> SecantWidget(delta_x=0.5)  # doctest: +SKIP

The computational core (``StepState`` → ``update`` → ``DerivedState``) has no
widget dependency at runtime and can be used on its own:

>>> from secant_tangent import StepState, update
>>> update(StepState(delta_x=0.01)).error_text
'0.0100'
"""

from .colors import ERROR_SCALE, LARGE_ERROR_RGB, SMALL_ERROR_RGB, error_color, rgb_css
from .DerivedState import DerivedState, secant_slope, tangent_slope, update
from .figure_export import build_static_figure, export_html
from .figure_render import build_figure
from .InputConvert import InputConvert
from .math_model import F_EXPR, F_PRIME_EXPR, f, f_prime
from .panel_style import ARIA_LABEL, PanelStyle
from .sampling import SAMPLING_POINTS, CurvePoints, line_through, sample_curve, sample_x
from .SecantWidget import SecantWidget
from .StepState import (
    DELTA_X_MAX,
    DELTA_X_MIN,
    DELTA_X_STEP,
    PRESETS,
    StepState,
    clamp_delta_x,
    is_preset_active,
)
from .ticks import ticks
from .viewport import CoordinateMapper, DrawingSurface, MathViewport, Padding

__all__ = [
    "ARIA_LABEL",
    "CoordinateMapper",
    "CurvePoints",
    "DELTA_X_MAX",
    "DELTA_X_MIN",
    "DELTA_X_STEP",
    "DerivedState",
    "DrawingSurface",
    "ERROR_SCALE",
    "F_EXPR",
    "F_PRIME_EXPR",
    "InputConvert",
    "LARGE_ERROR_RGB",
    "MathViewport",
    "PRESETS",
    "Padding",
    "PanelStyle",
    "SAMPLING_POINTS",
    "SMALL_ERROR_RGB",
    "SecantWidget",
    "StepState",
    "build_figure",
    "build_static_figure",
    "clamp_delta_x",
    "error_color",
    "export_html",
    "f",
    "f_prime",
    "is_preset_active",
    "line_through",
    "rgb_css",
    "sample_curve",
    "sample_x",
    "secant_slope",
    "tangent_slope",
    "ticks",
    "update",
]
