"""The function under study and its exact derivative.

Purpose
-------
Holds ``f(x) = x² − 2x + 3`` as a SymPy expression, derives ``f'(x)``
symbolically, and compiles both to NumPy-vectorized callables. Everything the
widget draws or reports is computed from :func:`f` and :func:`f_prime`.

Notes
-----
The derivative is obtained with ``sympy.diff`` and is therefore exact; the
secant slope is the only approximation in the package.

Examples
--------
>>> f(2.0)
3.0
>>> f_prime(2.0)
2.0
"""

from __future__ import annotations

from typing import Callable, Union

import numpy as np
import sympy as sp

ArrayOrScalar = Union[float, np.ndarray]

X = sp.Symbol("x", real=True)
F_EXPR = X**2 - 2 * X + 3
F_PRIME_EXPR = sp.diff(F_EXPR, X)

F_LATEX = sp.latex(F_EXPR)
F_PRIME_LATEX = sp.latex(F_PRIME_EXPR)

# Plain-text form for legends and readouts that do not render LaTeX.
F_TEXT = F_LATEX.replace("^{2}", "²").replace(" x", "x")


def _compile(expr: sp.Expr) -> Callable[[ArrayOrScalar], ArrayOrScalar]:
    """Compile ``expr`` in ``X`` to a callable that preserves scalar/array shape."""
    numeric = sp.lambdify(X, expr, modules="numpy")

    def evaluate(x: ArrayOrScalar) -> ArrayOrScalar:
        if np.ndim(x) == 0:
            return float(numeric(float(x)))
        values = np.asarray(x, dtype=float)
        # A constant expression would otherwise collapse to a scalar.
        return np.broadcast_to(numeric(values), values.shape).astype(float)

    evaluate.__doc__ = f"Evaluate ``{expr}`` at ``x`` (scalar or array)."
    return evaluate


f = _compile(F_EXPR)
f_prime = _compile(F_PRIME_EXPR)


__all__ = [
    "F_EXPR",
    "F_LATEX",
    "F_PRIME_EXPR",
    "F_PRIME_LATEX",
    "F_TEXT",
    "X",
    "f",
    "f_prime",
]
