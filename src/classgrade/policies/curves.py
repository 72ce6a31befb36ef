"""Curving a batch of grades."""

import dataclasses
import enum
import logging
from typing import Optional, Sequence, Union

import pandas as pd

from .._util import is_finite_number, mean_or_zero, round_half_up
from ..core import Grade
from ..exceptions import ConfigurationError

LOG = logging.getLogger(__name__)


# public classes =======================================================================


class CurveType(str, enum.Enum):
    """How a curve transforms each grade."""

    #: add a number of percentage points
    FLAT = "flat"
    #: scale by a percentage
    PERCENTAGE = "percentage"
    #: stretch grades away from the class average
    BELL = "bell"


@dataclasses.dataclass(frozen=True)
class Curve:
    """A curve to apply to a batch of grades.

    Attributes
    ----------
    type : Union[CurveType, str]
        The kind of curve; see :func:`curve_percentage`.
    amount : float
        Percentage points to add (flat), or a percent by which to scale
        (percentage and bell).
    max_grade : Optional[float]
        If given, no curved grade exceeds this percentage. Default: None.
    reason : Optional[str]
        Why the curve was applied. Not used in any calculation.

    Raises
    ------
    ConfigurationError
        If the type is unknown or the amount or cap is not a number.

    """

    type: Union[CurveType, str]
    amount: float
    max_grade: Optional[float] = None
    reason: Optional[str] = None

    def __post_init__(self):
        try:
            object.__setattr__(self, "type", CurveType(self.type))
        except ValueError:
            raise ConfigurationError(f"Unknown curve type: {self.type!r}.") from None

        if not is_finite_number(self.amount):
            raise ConfigurationError(f"Curve amount is not a number: {self.amount!r}.")

        if self.max_grade is not None and not is_finite_number(self.max_grade):
            raise ConfigurationError(
                f"Curve max_grade is not a number: {self.max_grade!r}."
            )


@dataclasses.dataclass(frozen=True)
class CurveAdjustment:
    """The record of a single grade changed by a curve."""

    student_id: str
    assignment_id: str
    previous_percentage: float
    new_percentage: float


@dataclasses.dataclass(frozen=True)
class CurveResult:
    """The outcome of :func:`apply_curve`.

    Attributes
    ----------
    grades : tuple[Grade, ...]
        The grades after curving, in the order they were given. Excused grades
        appear unchanged.
    adjustments : tuple[CurveAdjustment, ...]
        One entry per curved grade, holding its percentage before and after.
        Curves overwrite grades and cannot be undone automatically; these
        entries are what a caller needs to restore the previous values.
    class_average : Optional[float]
        The class average used by a bell curve; None for other curves.

    """

    grades: tuple[Grade, ...]
    adjustments: tuple[CurveAdjustment, ...]
    class_average: Optional[float] = None

    def to_frame(self) -> pd.DataFrame:
        """A table of the adjustments, one row per curved grade."""
        columns = [f.name for f in dataclasses.fields(CurveAdjustment)]
        return pd.DataFrame(
            [dataclasses.astuple(a) for a in self.adjustments], columns=columns
        )


# public functions =====================================================================


def curve_percentage(
    percentage: float, curve: Curve, class_average: Optional[float] = None
) -> int:
    """Curve a single percentage.

    The curves are:

        - flat: ``percentage + amount``
        - percentage: ``percentage * (1 + amount / 100)``
        - bell: ``average + (percentage - average) * (1 + amount / 100)``

    A bell curve with a positive amount pushes every grade away from the class
    average, so grades above average go up and grades below average go down. A
    grade exactly at the average does not change.

    The result is then capped at ``curve.max_grade`` (if given), clamped to
    [0, 100] and rounded to the nearest integer, with halves rounding up.

    Raises
    ------
    ValueError
        If the curve is a bell curve and no class average is given.
    ConfigurationError
        If the class average is not a finite number.

    """
    if curve.type is CurveType.FLAT:
        new = percentage + curve.amount
    elif curve.type is CurveType.PERCENTAGE:
        new = percentage * (1 + curve.amount / 100)
    else:
        if class_average is None:
            raise ValueError("A bell curve needs the class average.")
        if not is_finite_number(class_average):
            raise ConfigurationError(
                f"Class average for a bell curve is not a number: {class_average!r}."
            )
        new = class_average + (percentage - class_average) * (1 + curve.amount / 100)

    if curve.max_grade is not None:
        new = min(new, curve.max_grade)

    new = max(0.0, min(100.0, new))
    return round_half_up(new)


def apply_curve(
    grades: Sequence[Grade], curve: Curve, class_average: Optional[float] = None
) -> CurveResult:
    """Apply a curve to a batch of grades.

    The input grades are not modified. Instead, new grades are returned whose
    points are rescaled to the curved percentage, along with a record of every
    change. Persisting the new grades is up to the caller.

    Parameters
    ----------
    grades : Sequence[Grade]
        The grades to curve. Excused grades are passed through unchanged.
    curve : Curve
        The curve to apply.
    class_average : Optional[float]
        The class average percentage, used by bell curves. If not given, the
        average percentage of the (non-excused) grades being curved is used.

    Returns
    -------
    CurveResult

    Raises
    ------
    ConfigurationError
        If a bell curve is given a class average that is not a finite number.

    Example
    -------

    .. code:: python

        result = apply_curve(grades, Curve("flat", 5, max_grade=100))
        store.save(result.grades)
        audit_log.write(result.to_frame())

    """
    grades = list(grades)
    targets = [g for g in grades if not g.is_excused]

    if curve.type is CurveType.BELL:
        if class_average is None:
            class_average = mean_or_zero(g.percentage for g in targets)
        elif not is_finite_number(class_average):
            raise ConfigurationError(
                f"Class average for a bell curve is not a number: {class_average!r}."
            )

    new_grades = []
    adjustments = []
    for grade in grades:
        if grade.is_excused:
            new_grades.append(grade)
            continue

        previous = grade.percentage
        new = curve_percentage(previous, curve, class_average)

        new_grades.append(grade.with_percentage(new))
        adjustments.append(
            CurveAdjustment(grade.student_id, grade.assignment_id, previous, new)
        )

        LOG.info(
            "Curved %s on %s from %.2f%% to %d%% (%s curve, amount %s).",
            grade.student_id,
            grade.assignment_id,
            previous,
            new,
            curve.type.value,
            curve.amount,
        )

    return CurveResult(
        grades=tuple(new_grades),
        adjustments=tuple(adjustments),
        class_average=class_average if curve.type is CurveType.BELL else None,
    )
