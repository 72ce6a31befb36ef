import pytest

from classgrade.trends import Trend, classify_trend, trend_of
from util import make_grade, make_grades


@pytest.mark.parametrize("percentages", [[], [10], [10, 100], [100, 10]])
def test_fewer_than_three_grades_is_stable(percentages):
    assert classify_trend(percentages) is Trend.STABLE


def test_improving():
    assert classify_trend([60, 70, 80, 90]) is Trend.IMPROVING


def test_declining():
    assert classify_trend([90, 80, 70, 60]) is Trend.DECLINING


def test_small_change_is_stable():
    assert classify_trend([80, 82, 84, 85]) is Trend.STABLE


def test_threshold_is_exclusive():
    # first half averages 80, second half 85: a difference of exactly 5
    assert classify_trend([80, 80, 85, 85]) is Trend.STABLE
    assert classify_trend([80, 80, 85.5, 85]) is Trend.IMPROVING


def test_second_half_gets_the_extra_element_when_odd():
    # first half [100], second half [60, 100]: averages 100 and 80.
    # splitting as [100, 60] and [100] would have been improving
    assert classify_trend([100, 60, 100]) is Trend.DECLINING


def test_trend_of_sorts_grades_chronologically():
    # given
    improving = make_grades("A1", "tests", [60, 70, 80, 90])

    # when
    trend = trend_of(list(reversed(improving)))

    # then
    assert trend is Trend.IMPROVING


def test_trend_of_uses_percentages_not_points():
    # given
    grades = [
        make_grade("A1", "t1", "tests", 50, max_points=100, graded_on=1),
        make_grade("A1", "t2", "tests", 5, max_points=10, graded_on=2),
        make_grade("A1", "t3", "tests", 9, max_points=10, graded_on=3),
        make_grade("A1", "t4", "tests", 90, max_points=100, graded_on=4),
    ]

    # then
    assert trend_of(grades) is Trend.IMPROVING


def test_trend_is_a_string():
    assert Trend.IMPROVING == "improving"
    assert str(Trend.DECLINING) == "declining"
