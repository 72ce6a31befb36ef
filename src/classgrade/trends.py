"""Classifying a student's grade trajectory."""

import enum
from typing import Sequence

import numpy as np


#: how far apart (in percentage points) the two halves' averages must be before
#: a trend is anything but stable
TREND_THRESHOLD = 5

#: fewer grades than this is always a stable trend
MINIMUM_GRADES_FOR_TREND = 3


class Trend(str, enum.Enum):
    """A coarse classification of a grade trajectory."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"

    def __str__(self):
        return self.value


def classify_trend(percentages: Sequence[float]) -> Trend:
    """Classify a chronologically-ordered sequence of percentages.

    The sequence is split into a first and second half; when the length is odd,
    the second half gets the extra element. If the second half's average is
    more than :data:`TREND_THRESHOLD` points above the first half's, the trend
    is improving; more than :data:`TREND_THRESHOLD` points below, declining;
    otherwise stable.

    Fewer than three percentages is not enough data, and the trend is stable.

    Parameters
    ----------
    percentages : Sequence[float]
        The percentages, oldest first.

    Returns
    -------
    Trend

    """
    if len(percentages) < MINIMUM_GRADES_FOR_TREND:
        return Trend.STABLE

    middle = len(percentages) // 2
    first_half = np.asarray(percentages[:middle], dtype=float)
    second_half = np.asarray(percentages[middle:], dtype=float)

    difference = second_half.mean() - first_half.mean()

    if difference > TREND_THRESHOLD:
        return Trend.IMPROVING
    if difference < -TREND_THRESHOLD:
        return Trend.DECLINING
    return Trend.STABLE


def chronological(grades):
    """Sort grades by when they were graded, oldest first. Ties keep their order."""
    return sorted(grades, key=lambda g: g.graded_at_utc)


def trend_of(grades) -> Trend:
    """The trend of a collection of grades, ordered by when they were graded."""
    return classify_trend([g.percentage for g in chronological(grades)])
