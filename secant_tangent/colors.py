"""Error-magnitude color scale.

The approximation error is mapped onto a green → red ramp: green while the
secant is a good stand-in for the tangent, red once the slopes differ by
``ERROR_SCALE`` or more.
"""

from __future__ import annotations

import math
from typing import Tuple

RGB = Tuple[int, int, int]

SMALL_ERROR_RGB: RGB = (0x27, 0xAE, 0x60)
LARGE_ERROR_RGB: RGB = (0xC0, 0x39, 0x2B)
ERROR_SCALE = 3.0


def error_ratio(error: float, scale: float = ERROR_SCALE) -> float:
    """Return ``min(1, |error| / scale)``."""
    if scale <= 0:
        raise ValueError(f"scale must be > 0, got {scale!r}")
    return min(1.0, abs(error) / scale)


def interpolate_rgb(start: RGB, end: RGB, ratio: float) -> RGB:
    """Linearly interpolate each channel from ``start`` (0) to ``end`` (1).

    Channels are rounded half-up to the nearest integer and clamped to ``[0, 255]``.
    """
    channels = []
    for a, b in zip(start, end):
        value = math.floor(a + (b - a) * ratio + 0.5)
        channels.append(max(0, min(255, int(value))))
    return (channels[0], channels[1], channels[2])


def error_color(error: float) -> RGB:
    """Return the ramp color for an absolute slope difference."""
    return interpolate_rgb(SMALL_ERROR_RGB, LARGE_ERROR_RGB, error_ratio(error))


def rgb_css(rgb: RGB) -> str:
    """Format ``(r, g, b)`` as a CSS ``rgb(...)`` string."""
    r, g, b = rgb
    return f"rgb({r},{g},{b})"


__all__ = [
    "ERROR_SCALE",
    "LARGE_ERROR_RGB",
    "RGB",
    "SMALL_ERROR_RGB",
    "error_color",
    "error_ratio",
    "interpolate_rgb",
    "rgb_css",
]
