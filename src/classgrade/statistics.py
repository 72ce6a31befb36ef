"""Class-wide statistics and analytics."""

import dataclasses
from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from .core import (
    Assignment,
    Grade,
    GradebookSettings,
    StudentGradeSummary,
    grades_to_frame,
    latest_grades,
)
from .scales import DEFAULT_SCALE, GradingScale


# result types =========================================================================


@dataclasses.dataclass(frozen=True)
class ScoreStatistics:
    """Descriptive statistics of a set of percentages."""

    count: int
    mean: float
    median: float
    min: float
    max: float
    standard_deviation: float


@dataclasses.dataclass(frozen=True)
class AssignmentStatistics:
    """How the class did on one assignment.

    Attributes
    ----------
    assignment_id : str
    title : str
    average : float
        The average percentage among submitted, non-excused grades.
    submission_rate : float
        The fraction of (non-excused) students with a grade, between 0 and 1.
    on_time_rate : float
        The fraction of submitted grades that were not late, between 0 and 1.

    """

    assignment_id: str
    title: str
    average: float
    submission_rate: float
    on_time_rate: float


@dataclasses.dataclass(frozen=True)
class CategoryPerformance:
    """How the class is doing in one category.

    Attributes
    ----------
    category_id : str
    category_name : str
    class_average : float
        The average category percentage among students with graded work in it.
    struggling_students : int
        The number of those students below the struggling threshold.

    """

    category_id: str
    category_name: str
    class_average: float
    struggling_students: int


@dataclasses.dataclass(frozen=True)
class GradebookAnalytics:
    """Class-wide analytics. See :func:`class_analytics`."""

    class_id: str
    total_students: int
    grade_distribution: dict[str, int]
    average_grade: float
    median_grade: float
    assignment_stats: tuple[AssignmentStatistics, ...]
    category_performance: tuple[CategoryPerformance, ...]
    at_risk_students: tuple[str, ...]
    missing_assignment_alerts: dict[str, tuple[str, ...]]


# scores ===============================================================================


def class_average(scores: Iterable[float]) -> float:
    """The mean of the scores, or 0 if there are none."""
    scores = np.asarray(list(scores), dtype=float)
    if scores.size == 0:
        return 0.0
    return float(scores.mean())


def class_median(scores: Iterable[float], strategy: str = "midpoint") -> float:
    """The median of the scores, or 0 if there are none.

    Parameters
    ----------
    scores : Iterable[float]
    strategy : str
        For an even number of scores, "midpoint" returns the element at index
        ``n // 2`` of the sorted scores (the upper of the two middle values)
        and "average" returns the mean of the two middle values. The two agree
        for an odd number of scores. Default: "midpoint".

    Raises
    ------
    ValueError
        If the strategy is unknown.

    """
    if strategy not in ("midpoint", "average"):
        raise ValueError(f"Unknown median strategy: {strategy!r}.")

    scores = np.sort(np.asarray(list(scores), dtype=float))
    if scores.size == 0:
        return 0.0

    if strategy == "midpoint":
        return float(scores[scores.size // 2])
    return float(np.median(scores))


def score_statistics(percentages: Iterable[float]) -> ScoreStatistics:
    """Descriptive statistics of a set of percentages.

    The median is the usual median (the mean of the two middle values for an
    even count) and the standard deviation is the population standard
    deviation. All statistics are 0 when there are no percentages.

    """
    percentages = np.asarray(list(percentages), dtype=float)
    if percentages.size == 0:
        return ScoreStatistics(0, 0.0, 0.0, 0.0, 0.0, 0.0)

    return ScoreStatistics(
        count=int(percentages.size),
        mean=float(percentages.mean()),
        median=float(np.median(percentages)),
        min=float(percentages.min()),
        max=float(percentages.max()),
        standard_deviation=float(percentages.std()),
    )


def rank(scores: pd.Series) -> pd.Series:
    """The rank of each student according to score.

    Parameters
    ----------
    scores : pd.Series
        A series containing overall scores.

    Returns
    -------
    pd.Series
        A Series of the same size as `scores` containing the integer rank of
        each student in the class.

    """
    sorted_scores = scores.sort_values(ascending=False, kind="stable").to_frame()
    sorted_scores["rank"] = np.arange(1, len(sorted_scores) + 1)
    return sorted_scores["rank"]


def percentile(scores: pd.Series) -> pd.Series:
    """The percentile of each student according to score.

    Parameters
    ----------
    scores : pd.Series
        The scores used to compute the percentile.

    Returns
    -------
    pd.Series
        A Series of the same size as `scores` in which each entry is the
        student's percentile in the class, as a number between 0 and 1.

    """
    ranks = rank(scores)
    s = 1 - ((ranks - 1) / len(ranks))
    s.name = "percentile"
    return s


# letter grades ========================================================================


def letter_grade_distribution(
    letters: pd.Series, scale: Optional[GradingScale] = None
) -> pd.Series:
    """Counts the frequency of each letter grade.

    Parameters
    ----------
    letters : pd.Series
        The letter grades.
    scale : Optional[GradingScale]
        The scale the letters come from. Default: :data:`DEFAULT_SCALE`.

    Returns
    -------
    pd.Series
        The count of each letter grade in the scale. The letters are guaranteed
        to be in order, from highest to lowest.

    """
    if scale is None:
        scale = DEFAULT_SCALE

    counts = letters.value_counts().reindex(list(scale.letters))
    counts.index.name = "Letter"
    counts.name = "Frequency"
    return counts.fillna(0).astype(int)


def average_gpa(
    letters: pd.Series, scale: Optional[GradingScale] = None, include_failing=False
) -> float:
    """Compute the average GPA.

    Parameters
    ----------
    letters : pd.Series
        A Series containing the letter grades.
    scale : Optional[GradingScale]
        Provides the GPA value of each letter. Default: :data:`DEFAULT_SCALE`.
    include_failing : bool
        Whether or not to include the scale's lowest grade in the calculation.
        Default: False.

    Returns
    -------
    float
        The average GPA, or 0 if there are no letters to average.

    """
    if scale is None:
        scale = DEFAULT_SCALE

    if not include_failing:
        letters = letters[letters != scale.lowest.letter]

    if letters.empty:
        return 0.0

    return float(letters.map(scale.gpa_of_letter).mean())


# students =============================================================================


def _overall_scores(summaries: Iterable[StudentGradeSummary]) -> pd.Series:
    summaries = list(summaries)
    return pd.Series(
        [s.overall_percentage for s in summaries],
        index=pd.Index([s.student_id for s in summaries], name="student_id"),
        dtype=float,
    )


def at_risk_students(
    summaries: Iterable[StudentGradeSummary], threshold: float = 60
) -> tuple[str, ...]:
    """The students whose overall percentage is below the threshold."""
    return tuple(s.student_id for s in summaries if s.overall_percentage < threshold)


def missing_assignment_alerts(
    summaries: Iterable[StudentGradeSummary],
) -> dict[str, tuple[str, ...]]:
    """A mapping from each student with missing work to the missing assignment ids."""
    return {
        s.student_id: tuple(s.missing_assignments)
        for s in summaries
        if s.missing_assignments
    }


def category_performance(
    summaries: Iterable[StudentGradeSummary], struggling_threshold: float = 70
) -> tuple[CategoryPerformance, ...]:
    """Summarize how the class is doing in each category.

    Only students with graded work in a category are counted for that
    category.

    """
    percentages: dict[str, list[float]] = {}
    names: dict[str, str] = {}
    for summary in summaries:
        for category_grade in summary.category_grades:
            names.setdefault(category_grade.category_id, category_grade.category_name)
            bucket = percentages.setdefault(category_grade.category_id, [])
            if category_grade.has_graded_work:
                bucket.append(category_grade.percentage)

    return tuple(
        CategoryPerformance(
            category_id=category_id,
            category_name=names[category_id],
            class_average=class_average(values),
            struggling_students=sum(1 for v in values if v < struggling_threshold),
        )
        for category_id, values in percentages.items()
    )


def outcomes(summaries: Sequence[StudentGradeSummary]) -> pd.DataFrame:
    """Compute a table summarizing student outcomes.

    Parameters
    ----------
    summaries : Sequence[StudentGradeSummary]

    Returns
    -------
    pd.DataFrame
        A table with one row per student, and columns for the percentage in
        each category (labelled by category id), as well as overall score,
        letter grade, rank, and percentile. Sorted by score, from highest to lowest.

    """
    scores = _overall_scores(summaries)

    category_scores = pd.DataFrame(
        {
            category_id: pd.Series(
                {
                    s.student_id: (c.percentage if c.has_graded_work else np.nan)
                    for s in summaries
                    for c in s.category_grades
                    if c.category_id == category_id
                },
                dtype=float,
            )
            for category_id in _category_ids(summaries)
        },
        index=scores.index,
    )

    statistics = pd.DataFrame(
        {
            "overall score": scores,
            "letter": pd.Series(
                [s.overall_letter for s in summaries], index=scores.index
            ),
            "rank": rank(scores),
            "percentile": percentile(scores),
        }
    )

    table = pd.concat([category_scores, statistics], axis=1)
    return table.sort_values(by="overall score", ascending=False, kind="stable")


def _category_ids(summaries):
    """Every category id in the summaries, in order of first appearance."""
    ids = {}
    for summary in summaries:
        for category_grade in summary.category_grades:
            ids.setdefault(category_grade.category_id, None)
    return list(ids)


# assignments ==========================================================================


def assignment_statistics(
    grades: Iterable[Grade],
    assignments: Sequence[Assignment],
    student_ids: Sequence[str],
) -> tuple[AssignmentStatistics, ...]:
    """Compute per-assignment statistics.

    Parameters
    ----------
    grades : Iterable[Grade]
        The class's grades. Only the most recent grade per (student,
        assignment) pair counts, and only grades of students in `student_ids`.
    assignments : Sequence[Assignment]
        The class's assignments. One result is produced for each, in order.
    student_ids : Sequence[str]
        The enrolled students.

    """
    enrolled = set(student_ids)
    table = grades_to_frame(g for g in latest_grades(grades) if g.student_id in enrolled)

    results = []
    for assignment in assignments:
        rows = table[table["assignment_id"] == assignment.id]
        excused = int(rows["is_excused"].sum())
        submitted = rows[~rows["is_excused"].astype(bool)]

        expected = len(enrolled) - excused
        n_submitted = len(submitted)

        results.append(
            AssignmentStatistics(
                assignment_id=assignment.id,
                title=assignment.title,
                average=class_average(submitted["percentage"]),
                submission_rate=n_submitted / expected if expected > 0 else 0.0,
                on_time_rate=(
                    int((~submitted["is_late"].astype(bool)).sum()) / n_submitted
                    if n_submitted > 0
                    else 0.0
                ),
            )
        )

    return tuple(results)


# analytics ============================================================================


def class_analytics(
    summaries: Sequence[StudentGradeSummary],
    settings: GradebookSettings,
    assignments: Sequence[Assignment] = (),
    grades: Iterable[Grade] = (),
) -> GradebookAnalytics:
    """Compute class-wide analytics from the students' summaries.

    The class average and median only include students with graded work; a
    student who has not been graded yet does not pull the average down.
    Everyone is included in the letter grade distribution and the at-risk
    list.

    Parameters
    ----------
    summaries : Sequence[StudentGradeSummary]
        One summary per student, e.g. from
        :func:`classgrade.core.summarize_class`.
    settings : GradebookSettings
        Provides the class id, the grading scale and the thresholds.
    assignments : Sequence[Assignment]
        The class's assignments. Needed for the per-assignment statistics.
    grades : Iterable[Grade]
        The class's grades. Needed for the per-assignment statistics.

    Returns
    -------
    GradebookAnalytics

    """
    options = settings.options
    summaries = list(summaries)

    letters = pd.Series([s.overall_letter for s in summaries], dtype=object)
    distribution = letter_grade_distribution(letters, settings.grading_scale)

    graded_scores = [s.overall_percentage for s in summaries if s.has_graded_work]

    return GradebookAnalytics(
        class_id=settings.class_id,
        total_students=len(summaries),
        grade_distribution={str(k): int(v) for k, v in distribution.items()},
        average_grade=class_average(graded_scores),
        median_grade=class_median(graded_scores, strategy=options.median_strategy),
        assignment_stats=assignment_statistics(
            grades, assignments, [s.student_id for s in summaries]
        ),
        category_performance=category_performance(
            summaries, options.struggling_threshold
        ),
        at_risk_students=at_risk_students(summaries, options.at_risk_threshold),
        missing_assignment_alerts=missing_assignment_alerts(summaries),
    )
