"""Combining category grades into an overall grade."""

from typing import Iterable

from .._util import ensure_finite
from ._category import CategoryGrade


def weighted_grade(category_grades: Iterable[CategoryGrade]) -> float:
    """Compute the overall percentage from a student's category grades.

    Each category with graded work contributes its percentage times its weight.
    The result is normalized by the total weight of those categories, so

        - categories without graded work neither help nor hurt: they are left
          out entirely rather than being counted as 0% or 100%, and
        - the weights do not need to add to 100.

    For example, with Homework at 90% (weight 25) and Tests at 70% (weight 75)
    the overall grade is 75%. If Tests had no graded work, it would be 90%.

    The result is not clamped to [0, 100]; see :mod:`classgrade.display`.

    Parameters
    ----------
    category_grades : Iterable[CategoryGrade]
        The student's category grades.

    Returns
    -------
    float
        The overall percentage, or 0 if no category has graded work.

    """
    weighted_sum = 0.0
    weight_present = 0.0

    for category_grade in category_grades:
        if not category_grade.has_graded_work:
            continue

        percentage = (
            category_grade.earned_points / category_grade.total_points * 100
        )
        weighted_sum += percentage * (category_grade.weight / 100)
        weight_present += category_grade.weight

    if weight_present <= 0:
        return 0.0

    return ensure_finite(weighted_sum * 100 / weight_present, "overall percentage")
