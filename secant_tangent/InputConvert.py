# === SECTION: InputConvert [id: InputConvert]===
"""Coerce user-facing input (slider values, typed text) to a real float.

Controls and notebook callers may hand the widget a Python number, a NumPy
scalar, or a short expression such as ``"1/10"`` or ``"sqrt(2)/10"``. All of
them go through :func:`InputConvert` before they reach the state layer.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

import numpy as np
import sympy as sp


def InputConvert(obj: Any, *, name: str = "value", finite: bool = True) -> float:
    """
    Convert `obj` to a real ``float``.

    Rules:
    - ``bool`` is rejected (``True`` is almost always a wiring mistake).
    - Real numbers and NumPy real scalars are cast via ``float(obj)``.
    - Strings are tried as plain floats first, then parsed and evaluated with
      SymPy. The result must be real.

    Parameters
    ----------
    obj : Any
        The value to convert.
    name : str, optional
        Argument name used in error messages.
    finite : bool, optional
        If ``True`` (default), NaN and infinities are rejected.

    Raises
    ------
    TypeError
        If ``obj`` is neither a real number nor a string.
    ValueError
        If a string cannot be parsed, evaluates to a non-real number, or the
        result is not finite while ``finite=True``.

    Examples
    --------
    >>> InputConvert(0.5)
    0.5
    >>> InputConvert("1/4")
    0.25
    """
    if isinstance(obj, (bool, np.bool_)):
        raise TypeError(f"{name} must be a real number, got {type(obj).__name__}")

    if isinstance(obj, (Real, np.integer, np.floating)):
        result = float(obj)
    elif isinstance(obj, str):
        result = _convert_text(obj, name=name)
    else:
        raise TypeError(
            f"{name} must be a real number or a numeric expression string, "
            f"got {type(obj).__name__}"
        )

    if finite and not math.isfinite(result):
        raise ValueError(f"{name} must be finite, got {result!r}")
    return result


def _convert_text(text: str, *, name: str) -> float:
    """Parse ``text`` as a float literal or a SymPy expression."""
    s = text.strip()
    if s == "":
        raise ValueError(f"Cannot convert empty string to float ({name}).")

    try:
        return float(s)
    except ValueError:
        pass

    try:
        value = complex(sp.sympify(s).evalf())
    except (sp.SympifyError, TypeError, ValueError) as e:
        raise ValueError(
            f"Could not convert {text!r} to float ({name}), neither directly nor via SymPy."
        ) from e

    if value.imag != 0:
        raise ValueError(
            f"Could not convert {text!r} to float ({name}): imaginary part is non-zero."
        )
    return float(value.real)

# === END OF SECTION: InputConvert [id: InputConvert]===
