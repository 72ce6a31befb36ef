"""Preparing computed percentages for display."""

import math
from typing import Optional, Union

from ._util import round_half_up
from .core import CategoryGrade, StudentGradeSummary

NOT_GRADED = "—"


def display_percentage(value: float, rounding_method: str = "round") -> float:
    """Clamp a percentage to [0, 100] and round it for display.

    Parameters
    ----------
    value : float
        The percentage.
    rounding_method : str
        "none", "round" (halves round up), "floor" or "ceil". Default: "round".

    Raises
    ------
    ValueError
        If the rounding method is unknown or the value is not finite.

    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot display a non-finite percentage: {value!r}.")

    value = max(0.0, min(100.0, float(value)))

    if rounding_method == "none":
        return value
    if rounding_method == "round":
        return float(round_half_up(value))
    if rounding_method == "floor":
        return float(math.floor(value))
    if rounding_method == "ceil":
        return float(math.ceil(value))

    raise ValueError(f"Unknown rounding method: {rounding_method!r}.")


def format_percentage(
    grade: Union[StudentGradeSummary, CategoryGrade, float, None],
    rounding_method: str = "round",
    placeholder: Optional[str] = NOT_GRADED,
) -> str:
    """Format an overall or category grade as a string like "87%".

    Summaries and category grades without any graded work are shown as
    `placeholder` ("—") rather than as 0%, as is `None`.

    """
    if grade is None:
        return placeholder
    if isinstance(grade, StudentGradeSummary):
        if not grade.has_graded_work:
            return placeholder
        grade = grade.overall_percentage
    elif isinstance(grade, CategoryGrade):
        if not grade.has_graded_work:
            return placeholder
        grade = grade.percentage

    value = display_percentage(grade, rounding_method)
    if rounding_method == "none":
        return f"{value:.2f}%"
    return f"{value:.0f}%"
