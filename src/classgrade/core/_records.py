"""Records supplied to the engine by the grade store."""

import dataclasses
import datetime
from typing import Iterable, Optional

import pandas as pd

from .._util import is_finite_number
from ..exceptions import ConfigurationError, InvalidGradeError


# Category -----------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Category:
    """A weighted bucket of assignments, such as "Homework" or "Tests".

    Attributes
    ----------
    id : str
        The category's identifier. Grades refer to categories by this id.
    name : str
        The display name of the category.
    weight : float
        The weight of the category in the overall grade, in percentage points.
        The weights of a class's categories do not need to add to 100.
    drop_lowest : int
        The number of lowest-scoring grades in the category to ignore.
        Default: 0.
    color : Optional[str]
        A display color. Not used in any calculation.
    description : Optional[str]
        Free text. Not used in any calculation.

    Raises
    ------
    ConfigurationError
        If the weight is negative or not a number, or if `drop_lowest` is not a
        non-negative integer.

    """

    id: str
    name: str
    weight: float
    drop_lowest: int = 0
    color: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        if not is_finite_number(self.weight) or self.weight < 0:
            raise ConfigurationError(
                f"Category {self.id!r} has invalid weight {self.weight!r}; "
                "weights must be non-negative numbers.",
                category_id=self.id,
            )

        if (
            not isinstance(self.drop_lowest, int)
            or isinstance(self.drop_lowest, bool)
            or self.drop_lowest < 0
        ):
            raise ConfigurationError(
                f"Category {self.id!r} has invalid drop_lowest {self.drop_lowest!r}; "
                "it must be a non-negative integer.",
                category_id=self.id,
            )


# Grade --------------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Grade:
    """A single student's grade on a single assignment.

    Attributes
    ----------
    student_id : str
    assignment_id : str
    class_id : str
    category_id : str
        The category the assignment belonged to when it was graded.
    points : float
        The number of points earned. May exceed `max_points` (extra credit).
    max_points : float
        The number of points possible. Must be positive.
    graded_at : datetime.datetime
        When the grade was recorded. Used to order grades chronologically.
        Naive timestamps are taken to be in UTC when compared with aware ones.
    is_late : bool
        Whether the work was turned in late. Default: False.
    is_excused : bool
        Whether the student was excused from the assignment. Excused grades do
        not count towards any average and the assignment is not considered
        missing. Default: False.
    feedback : Optional[str]
        Free text. Not used in any calculation.

    Raises
    ------
    InvalidGradeError
        If the points are not finite numbers or `max_points` is not positive,
        or if `graded_at` is not a datetime.

    """

    student_id: str
    assignment_id: str
    class_id: str
    category_id: str
    points: float
    max_points: float
    graded_at: datetime.datetime
    is_late: bool = False
    is_excused: bool = False
    feedback: Optional[str] = None

    def __post_init__(self):
        where = f"student {self.student_id!r}, assignment {self.assignment_id!r}"

        if not is_finite_number(self.points):
            raise InvalidGradeError(
                f"Points earned for {where} is not a number: {self.points!r}.",
                student_id=self.student_id,
                assignment_id=self.assignment_id,
            )

        if not is_finite_number(self.max_points) or self.max_points <= 0:
            raise InvalidGradeError(
                f"Points possible for {where} must be a positive number, "
                f"got {self.max_points!r}.",
                student_id=self.student_id,
                assignment_id=self.assignment_id,
            )

        if not isinstance(self.graded_at, datetime.datetime):
            raise InvalidGradeError(
                f"Grading time for {where} must be a datetime, "
                f"got {self.graded_at!r}.",
                student_id=self.student_id,
                assignment_id=self.assignment_id,
            )

    @property
    def percentage(self) -> float:
        """Points earned as a percentage of points possible."""
        return self.points / self.max_points * 100

    @property
    def graded_at_utc(self) -> datetime.datetime:
        """`graded_at` as an aware UTC datetime, for ordering grades."""
        if self.graded_at.tzinfo is None:
            return self.graded_at.replace(tzinfo=datetime.timezone.utc)
        return self.graded_at.astimezone(datetime.timezone.utc)

    @property
    def key(self) -> tuple[str, str]:
        """The (student, assignment) pair identifying this grade."""
        return (self.student_id, self.assignment_id)

    def with_percentage(self, percentage: float) -> "Grade":
        """A copy of this grade whose points are rescaled to the given percentage."""
        return dataclasses.replace(self, points=percentage / 100 * self.max_points)


# Assignment ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Assignment:
    """An assignment given to the class.

    Attributes
    ----------
    id : str
    title : str
    category_id : Optional[str]
    due_at : Optional[datetime.datetime]

    """

    id: str
    title: str = ""
    category_id: Optional[str] = None
    due_at: Optional[datetime.datetime] = None


# public functions =====================================================================


def latest_grades(grades: Iterable[Grade]) -> list[Grade]:
    """Keep only the most recent grade for each (student, assignment) pair.

    Saving a grade for a pair that already has one replaces the earlier grade,
    so a history of saves collapses to the latest save. When two saves have the
    same timestamp, the one appearing later in `grades` wins.

    The result keeps the order in which each pair first appears.

    """
    latest: dict[tuple[str, str], Grade] = {}
    for grade in grades:
        current = latest.get(grade.key)
        if current is None or grade.graded_at_utc >= current.graded_at_utc:
            latest[grade.key] = grade
    return list(latest.values())


def grades_to_frame(grades: Iterable[Grade]) -> pd.DataFrame:
    """Create a table with one row per grade.

    The columns are the fields of :class:`Grade` plus a `percentage` column.

    """
    rows = []
    for grade in grades:
        row = dataclasses.asdict(grade)
        row["percentage"] = grade.percentage
        rows.append(row)

    columns = [f.name for f in dataclasses.fields(Grade)] + ["percentage"]
    return pd.DataFrame(rows, columns=columns)
