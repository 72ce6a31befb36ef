"""Private helper utilities."""

import math
from numbers import Real
from typing import Iterable

import numpy as np


def is_finite_number(x) -> bool:
    """Is `x` a real, finite number? Booleans do not count."""
    return isinstance(x, Real) and not isinstance(x, bool) and math.isfinite(x)


def ensure_finite(x: float, what: str) -> float:
    """Raise if a computed value is NaN or infinite; otherwise return it as a float."""
    if not math.isfinite(x):
        raise ValueError(f"Computed {what} is not a finite number: {x!r}.")
    return float(x)


def mean_or_zero(values: Iterable[float]) -> float:
    """The arithmetic mean of the values, or 0 if there are none."""
    values = list(values)
    if not values:
        return 0.0
    return float(np.mean(values))


def round_half_up(x: float) -> int:
    """Round to the nearest integer, with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(x + 0.5))
