from __future__ import annotations

import numpy as np
import pytest

from secant_tangent.InputConvert import InputConvert


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, 1.0),
        (0.25, 0.25),
        (np.float32(0.5), 0.5),
        (np.int64(2), 2.0),
        (" 0.1 ", 0.1),
        ("1/4", 0.25),
        ("sqrt(4)/10", 0.2),
    ],
)
def test_accepts_numbers_and_expressions(value: object, expected: float) -> None:
    assert InputConvert(value) == pytest.approx(expected)


def test_rejects_booleans_and_other_types() -> None:
    with pytest.raises(TypeError):
        InputConvert(True)
    with pytest.raises(TypeError):
        InputConvert([1.0])
    with pytest.raises(TypeError, match="delta_x"):
        InputConvert(None, name="delta_x")


@pytest.mark.parametrize("text", ["", "   ", "not a number", "x + 1", "sqrt(-1)"])
def test_rejects_unparsable_or_nonreal_text(text: str) -> None:
    with pytest.raises(ValueError):
        InputConvert(text)


def test_non_finite_values_depend_on_flag() -> None:
    with pytest.raises(ValueError, match="finite"):
        InputConvert(float("nan"))
    with pytest.raises(ValueError, match="finite"):
        InputConvert("oo")
    assert InputConvert(float("inf"), finite=False) == float("inf")
