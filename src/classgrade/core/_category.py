"""Aggregating a student's grades within one category."""

import dataclasses
import logging
from typing import Iterable, Optional

from .._util import mean_or_zero
from ..exceptions import GradeReferenceError
from ..scales import DEFAULT_SCALE, GradingScale
from ..trends import Trend, chronological, trend_of
from ._records import Category, Grade
from ._settings import RECENT_WINDOW

LOG = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CategoryGrade:
    """A student's standing within one category.

    Attributes
    ----------
    category_id : str
    category_name : str
    weight : float
        The category's weight, in percentage points.
    total_points : float
        Points possible over the grades that count (after drops).
    earned_points : float
        Points earned over the grades that count (after drops).
    percentage : float
        ``earned_points / total_points * 100``, or 0 if nothing counts.
    letter : str
        The letter grade of `percentage`.
    assignment_count : int
        The number of grades in the category, including dropped ones.
    graded_assignments : int
        The number of grades that count.
    dropped_grades : tuple[Grade, ...]
        The grades that were dropped, lowest first.
    recent_average : float
        The average percentage of the most recently graded grades that count.
    trend : Trend
        The trend of the grades that count.

    """

    category_id: str
    category_name: str
    weight: float
    total_points: float
    earned_points: float
    percentage: float
    letter: str
    assignment_count: int
    graded_assignments: int
    dropped_grades: tuple[Grade, ...]
    recent_average: float
    trend: Trend

    @property
    def has_graded_work(self) -> bool:
        """Whether any grade counts in this category.

        A category without graded work has a percentage of 0, but that is not
        a grade of 0%; it is excluded from the overall grade.

        """
        return self.total_points > 0


def aggregate_category(
    grades: Iterable[Grade],
    category: Category,
    scale: Optional[GradingScale] = None,
    recent_window: int = RECENT_WINDOW,
) -> CategoryGrade:
    """Compute a student's grade within a single category.

    The grades are sorted from lowest to highest percentage, and the first
    ``category.drop_lowest`` of them are dropped. When two grades have the same
    percentage, the one appearing first in `grades` is dropped first. If there
    are no more grades than there are drops, every grade is dropped.

    The category percentage is the total points earned over the total points
    possible among the remaining grades. It is not an average of percentages,
    so assignments worth more points count for more.

    Excused grades are ignored entirely.

    Parameters
    ----------
    grades : Iterable[Grade]
        One student's grades in the category.
    category : Category
        The category.
    scale : Optional[GradingScale]
        Used to find the letter grade. Default: :data:`DEFAULT_SCALE`.
    recent_window : int
        How many of the most recently graded grades go into the recent
        average. Default: 3.

    Returns
    -------
    CategoryGrade

    Raises
    ------
    GradeReferenceError
        If a grade belongs to a different category.

    """
    if scale is None:
        scale = DEFAULT_SCALE

    grades = [g for g in grades if not g.is_excused]

    for grade in grades:
        if grade.category_id != category.id:
            raise GradeReferenceError(
                f"Grade for student {grade.student_id!r}, assignment "
                f"{grade.assignment_id!r} is in category {grade.category_id!r}, "
                f"not {category.id!r}.",
                student_id=grade.student_id,
                assignment_id=grade.assignment_id,
                category_id=grade.category_id,
            )

    # sorted() is stable, so ties keep their original order
    by_percentage = sorted(grades, key=lambda g: g.percentage)
    dropped = by_percentage[: category.drop_lowest]
    kept = by_percentage[category.drop_lowest :]

    earned_points = sum(g.points for g in kept)
    total_points = sum(g.max_points for g in kept)
    percentage = earned_points / total_points * 100 if total_points > 0 else 0.0

    recent = chronological(kept)[-recent_window:] if recent_window > 0 else []

    LOG.debug(
        "Category %s: kept %d, dropped %d, %.2f%%.",
        category.id,
        len(kept),
        len(dropped),
        percentage,
    )

    return CategoryGrade(
        category_id=category.id,
        category_name=category.name,
        weight=category.weight,
        total_points=float(total_points),
        earned_points=float(earned_points),
        percentage=float(percentage),
        letter=scale.letter_for(percentage),
        assignment_count=len(grades),
        graded_assignments=len(kept),
        dropped_grades=tuple(dropped),
        recent_average=mean_or_zero(g.percentage for g in recent),
        trend=trend_of(kept),
    )
