"""Summarizing a student's standing in a class."""

import dataclasses
import datetime
import logging
from typing import Iterable, Optional, Sequence

from ..trends import Trend, trend_of
from ._category import CategoryGrade, aggregate_category
from ._records import Assignment, Grade, latest_grades
from ._settings import UNCATEGORIZED, GradebookSettings
from ._weighting import weighted_grade

LOG = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class StudentGradeSummary:
    """A student's computed standing in a class.

    This is derived data. It is computed on demand and never cached by the
    engine.

    Attributes
    ----------
    student_id : str
    class_id : str
    overall_percentage : float
        The weighted overall percentage. Not clamped or rounded.
    overall_letter : str
    gpa : float
    category_grades : tuple[CategoryGrade, ...]
        One entry per class category, in the order of the class settings. If
        any grade fell into the uncategorized bucket, it comes last.
    total_assignments : int
        The number of assignments in the class.
    completed_assignments : int
        The number of assignments with a (non-excused) grade.
    late_assignments : int
        The number of completed assignments turned in late.
    missing_assignments : tuple[str, ...]
        Ids of the class assignments the student has no grade for.
    excused_assignments : int
    trend : Trend
        The trend of all of the student's grades.
    computed_at : datetime.datetime

    """

    student_id: str
    class_id: str
    overall_percentage: float
    overall_letter: str
    gpa: float
    category_grades: tuple[CategoryGrade, ...]
    total_assignments: int
    completed_assignments: int
    late_assignments: int
    missing_assignments: tuple[str, ...]
    excused_assignments: int
    trend: Trend
    computed_at: datetime.datetime

    @property
    def has_graded_work(self) -> bool:
        """Whether any of the student's grades count towards the overall grade."""
        return any(c.has_graded_work and c.weight > 0 for c in self.category_grades)

    def category_grade(self, category_id: str) -> CategoryGrade:
        """Look up the grade for one category.

        Raises
        ------
        KeyError
            If the summary has no such category.

        """
        for category_grade in self.category_grades:
            if category_grade.category_id == category_id:
                return category_grade
        raise KeyError(f"No grade for category {category_id!r}.")


def summarize_student(
    student_id: str,
    grades: Iterable[Grade],
    settings: GradebookSettings,
    assignments: Optional[Sequence[Assignment]] = None,
    now: Optional[datetime.datetime] = None,
) -> StudentGradeSummary:
    """Compute a student's grade summary.

    Parameters
    ----------
    student_id : str
        The student to summarize. Grades belonging to other students are
        ignored, so the whole class's grades may be passed in.
    grades : Iterable[Grade]
        The grades. If a (student, assignment) pair has several grades, only
        the most recent counts.
    settings : GradebookSettings
        The class's categories, scale and options.
    assignments : Optional[Sequence[Assignment]]
        The class's assignments, used to find missing work. If not provided,
        no assignment is considered missing and the total is the number of
        graded assignments.
    now : Optional[datetime.datetime]
        The timestamp recorded in the summary. Default: the current UTC time.

    Returns
    -------
    StudentGradeSummary

    Raises
    ------
    GradeReferenceError
        If a grade's category is unknown and the class options do not allow
        uncategorized grades.

    """
    grades = latest_grades(g for g in grades if g.student_id == student_id)
    scale = settings.grading_scale

    by_category: dict[str, list[Grade]] = {c.id: [] for c in settings.categories}
    uncategorized = []
    for grade in grades:
        category = settings.category_of(grade)
        if category is UNCATEGORIZED:
            LOG.warning(
                "Grade for student %s, assignment %s has unknown category %s; "
                "treating it as uncategorized.",
                grade.student_id,
                grade.assignment_id,
                grade.category_id,
            )
            uncategorized.append(dataclasses.replace(grade, category_id=UNCATEGORIZED.id))
        else:
            by_category[category.id].append(grade)

    category_grades = [
        aggregate_category(
            by_category[c.id], c, scale, recent_window=settings.options.recent_window
        )
        for c in settings.categories
    ]
    if uncategorized:
        category_grades.append(
            aggregate_category(
                uncategorized,
                UNCATEGORIZED,
                scale,
                recent_window=settings.options.recent_window,
            )
        )

    overall = weighted_grade(category_grades)

    counted = [g for g in grades if not g.is_excused]
    graded_ids = {g.assignment_id for g in grades}

    if assignments is None:
        total = len(graded_ids)
        missing = ()
    else:
        total = len(assignments)
        missing = tuple(a.id for a in assignments if a.id not in graded_ids)

    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)

    LOG.debug("Student %s: overall %.2f%%.", student_id, overall)

    return StudentGradeSummary(
        student_id=student_id,
        class_id=settings.class_id,
        overall_percentage=overall,
        overall_letter=scale.letter_for(overall),
        gpa=scale.gpa_for(overall),
        category_grades=tuple(category_grades),
        total_assignments=total,
        completed_assignments=len(counted),
        late_assignments=sum(1 for g in counted if g.is_late),
        missing_assignments=missing,
        excused_assignments=len(grades) - len(counted),
        trend=trend_of(counted),
        computed_at=now,
    )


def summarize_class(
    grades: Iterable[Grade],
    settings: GradebookSettings,
    student_ids: Optional[Sequence[str]] = None,
    assignments: Optional[Sequence[Assignment]] = None,
    now: Optional[datetime.datetime] = None,
) -> list[StudentGradeSummary]:
    """Compute a grade summary for every student in a class.

    Each summary is independent of the others.

    Parameters
    ----------
    grades : Iterable[Grade]
        The grades of the whole class.
    settings : GradebookSettings
    student_ids : Optional[Sequence[str]]
        The enrolled students. Students without any grades are summarized too.
        If not provided, the students appearing in `grades` are used, in order
        of first appearance.
    assignments : Optional[Sequence[Assignment]]
    now : Optional[datetime.datetime]
        The timestamp recorded in every summary. Default: the current UTC time.

    Returns
    -------
    list[StudentGradeSummary]
        In the order of `student_ids`.

    """
    grades = list(grades)

    if student_ids is None:
        student_ids = list(dict.fromkeys(g.student_id for g in grades))

    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)

    by_student: dict[str, list[Grade]] = {s: [] for s in student_ids}
    for grade in grades:
        if grade.student_id in by_student:
            by_student[grade.student_id].append(grade)

    return [
        summarize_student(s, by_student[s], settings, assignments, now=now)
        for s in student_ids
    ]
