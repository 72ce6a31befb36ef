"""Mapping percentages to letter grades."""

import dataclasses
from typing import Optional, Sequence

import pandas as pd

from ._util import is_finite_number
from .exceptions import ConfigurationError


# public classes =======================================================================


@dataclasses.dataclass(frozen=True)
class GradeRange:
    """A range of percentages that earns a letter grade.

    Attributes
    ----------
    min : float
        The smallest percentage in the range (inclusive).
    max : float
        The largest percentage in the range (inclusive).
    letter : str
        The letter grade, e.g., "A" or "B+".
    gpa : float
        The GPA points earned by this letter grade.
    color : Optional[str]
        A display color. Not used in any calculation.

    """

    min: float
    max: float
    letter: str
    gpa: float
    color: Optional[str] = None

    def contains(self, percentage: float) -> bool:
        return self.min <= percentage <= self.max


class GradingScale:
    """An ordered table of grade ranges covering 0 to 100.

    The scale is validated when it is created; see :meth:`validate`. Scales are
    immutable and hashable, so one scale can be shared between classes.

    Percentages are looked up *unrounded*. Tables written with integer bounds,
    like B = [80, 89] and A = [90, 100], leave a gap between 89 and 90; a
    percentage falling in such a gap belongs to the lower range. So 89.6 is a
    B, not an A. Callers that want 89.6 to count as an A should round before
    calling :meth:`resolve`.

    Parameters
    ----------
    ranges : Sequence[GradeRange]
        The ranges, in any order.
    id : str
        An identifier for the scale. Default: "custom".
    name : str
        A human-readable name. Default: "Custom Scale".

    Raises
    ------
    ConfigurationError
        If the ranges overlap or do not cover 0 to 100.

    """

    def __init__(
        self, ranges: Sequence[GradeRange], id: str = "custom", name: str = "Custom Scale"
    ):
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "name", name)
        # highest range first
        object.__setattr__(
            self, "ranges", tuple(sorted(ranges, key=lambda r: r.min, reverse=True))
        )
        self.validate()

    def __setattr__(self, name, value):
        raise AttributeError(f"GradingScale is immutable; cannot set {name!r}.")

    def __delattr__(self, name):
        raise AttributeError(f"GradingScale is immutable; cannot delete {name!r}.")

    def __repr__(self):
        return f"GradingScale(id={self.id!r}, letters={self.letters!r})"

    def __eq__(self, other):
        if not isinstance(other, GradingScale):
            return NotImplemented
        return (self.id, self.name, self.ranges) == (other.id, other.name, other.ranges)

    def __hash__(self):
        return hash((self.id, self.name, self.ranges))

    @property
    def letters(self) -> tuple[str, ...]:
        """The letter grades, from highest to lowest."""
        return tuple(r.letter for r in self.ranges)

    @property
    def lowest(self) -> GradeRange:
        """The range for the lowest grade."""
        return self.ranges[-1]

    def validate(self):
        """Check that the ranges form a valid scale.

        Makes sure that:

            - There is at least one range.
            - Every bound is a finite number and ``min <= max``.
            - No letter appears twice.
            - No two ranges overlap.
            - There are no gaps of more than one point between ranges.
            - The ranges reach down to 0 and up to 100.

        Raises a :class:`ConfigurationError` if any of these conditions are not met.

        """
        if not self.ranges:
            raise ConfigurationError("Grading scale has no ranges.", scale_id=self.id)

        for r in self.ranges:
            if not (is_finite_number(r.min) and is_finite_number(r.max)):
                raise ConfigurationError(
                    f"Range for {r.letter!r} has non-numeric bounds.", scale_id=self.id
                )
            if r.min > r.max:
                raise ConfigurationError(
                    f"Range for {r.letter!r} has min {r.min} greater than max {r.max}.",
                    scale_id=self.id,
                )

        if len(set(self.letters)) != len(self.letters):
            raise ConfigurationError(
                f"Grading scale has duplicate letters: {self.letters}.", scale_id=self.id
            )

        ascending = self.ranges[::-1]
        for lower, upper in zip(ascending, ascending[1:]):
            if upper.min <= lower.max:
                raise ConfigurationError(
                    f"Ranges {lower.letter!r} and {upper.letter!r} overlap.",
                    scale_id=self.id,
                )
            if upper.min - lower.max > 1:
                raise ConfigurationError(
                    f"Gap between ranges {lower.letter!r} and {upper.letter!r}.",
                    scale_id=self.id,
                )

        if ascending[0].min > 0:
            raise ConfigurationError(
                "Grading scale does not reach down to 0.", scale_id=self.id
            )
        if ascending[-1].max < 100:
            raise ConfigurationError(
                "Grading scale does not reach up to 100.", scale_id=self.id
            )

    def resolve(self, percentage: float) -> GradeRange:
        """Find the grade range that a percentage falls into.

        Never raises for out-of-table values: anything below the scale gets the
        lowest grade, and anything above it gets the highest.

        """
        for r in self.ranges:
            if r.contains(percentage):
                return r

        # in a gap between integer bounds, or above the top of the table
        for r in self.ranges:
            if percentage >= r.min:
                return r

        return self.lowest

    def letter_for(self, percentage: float) -> str:
        """The letter grade for a percentage."""
        return self.resolve(percentage).letter

    def gpa_for(self, percentage: float) -> float:
        """The GPA points for a percentage."""
        return self.resolve(percentage).gpa

    def gpa_of_letter(self, letter: str) -> float:
        """The GPA points of a letter grade in this scale.

        Raises
        ------
        KeyError
            If the letter is not in the scale.

        """
        for r in self.ranges:
            if r.letter == letter:
                return r.gpa
        raise KeyError(f"Letter {letter!r} is not in the scale.")


# common scales ========================================================================

DEFAULT_SCALE = GradingScale(
    [
        GradeRange(90, 100, "A", 4.0, "#10B981"),
        GradeRange(80, 89, "B", 3.0, "#3B82F6"),
        GradeRange(70, 79, "C", 2.0, "#F59E0B"),
        GradeRange(60, 69, "D", 1.0, "#F97316"),
        GradeRange(0, 59, "F", 0.0, "#EF4444"),
    ],
    id="standard",
    name="Standard Scale",
)
"""The standard A through F scale."""


# public functions =====================================================================


def map_scores_to_letter_grades(
    scores: pd.Series, scale: Optional[GradingScale] = None
) -> pd.Series:
    """Map each percentage to a letter grade.

    Parameters
    ----------
    scores : pandas.Series
        A series containing percentages between 0 and 100.
    scale : Optional[GradingScale]
        The scale to use. Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    pandas.Series
        A series containing the resulting letter grades.

    """
    if scale is None:
        scale = DEFAULT_SCALE

    return scores.apply(scale.letter_for)
