import datetime
import math

import pytest

import classgrade
from util import CLASS_ID, make_grade


# Category -----------------------------------------------------------------------------


def test_category_rejects_negative_weight():
    with pytest.raises(classgrade.ConfigurationError) as exc:
        classgrade.Category("hw", "Homework", -5)

    assert exc.value.category_id == "hw"


def test_category_rejects_negative_drop_lowest():
    with pytest.raises(classgrade.ConfigurationError):
        classgrade.Category("hw", "Homework", 25, drop_lowest=-1)


def test_category_rejects_fractional_drop_lowest():
    with pytest.raises(classgrade.ConfigurationError):
        classgrade.Category("hw", "Homework", 25, drop_lowest=1.5)


def test_category_rejects_nan_weight():
    with pytest.raises(classgrade.ConfigurationError):
        classgrade.Category("hw", "Homework", math.nan)


def test_category_allows_zero_weight():
    assert classgrade.Category("hw", "Homework", 0).weight == 0


# Grade --------------------------------------------------------------------------------


def test_grade_percentage():
    assert make_grade("A1", "hw01", "homework", 8, max_points=10).percentage == 80


def test_grade_rejects_zero_max_points():
    with pytest.raises(classgrade.InvalidGradeError) as exc:
        make_grade("A1", "hw01", "homework", 8, max_points=0)

    assert exc.value.student_id == "A1"
    assert exc.value.assignment_id == "hw01"
    assert "hw01" in str(exc.value)


@pytest.mark.parametrize("points", [math.nan, math.inf, "8", None, True])
def test_grade_rejects_non_numeric_points(points):
    with pytest.raises(classgrade.InvalidGradeError):
        make_grade("A1", "hw01", "homework", points)


def test_grade_allows_extra_credit_points():
    grade = make_grade("A1", "hw01", "homework", 11, max_points=10)
    assert grade.percentage == pytest.approx(110)


def test_with_percentage_rescales_points():
    # given
    grade = make_grade("A1", "hw01", "homework", 7, max_points=20)

    # when
    new = grade.with_percentage(50)

    # then
    assert new.points == 10
    assert grade.points == 7


# latest_grades ------------------------------------------------------------------------


def test_latest_grades_keeps_most_recent_save_per_pair():
    # given
    grades = [
        make_grade("A1", "hw01", "homework", 5, graded_on=1),
        make_grade("A2", "hw01", "homework", 7, graded_on=1),
        make_grade("A1", "hw01", "homework", 9, graded_on=3),
        make_grade("A1", "hw01", "homework", 6, graded_on=2),
    ]

    # when
    latest = classgrade.latest_grades(grades)

    # then
    assert [(g.student_id, g.points) for g in latest] == [("A1", 9), ("A2", 7)]


def test_latest_grades_prefers_later_save_on_tie():
    # given
    grades = [
        make_grade("A1", "hw01", "homework", 5, graded_on=1),
        make_grade("A1", "hw01", "homework", 6, graded_on=1),
    ]

    # then
    assert [g.points for g in classgrade.latest_grades(grades)] == [6]


# grades_to_frame ----------------------------------------------------------------------


def test_grades_to_frame():
    # given
    grades = [
        make_grade("A1", "hw01", "homework", 5, max_points=10),
        make_grade("A2", "hw01", "homework", 10, max_points=10, is_late=True),
    ]

    # when
    table = classgrade.core.grades_to_frame(grades)

    # then
    assert list(table["percentage"]) == [50, 100]
    assert list(table["is_late"]) == [False, True]


def test_grades_to_frame_with_no_grades_has_columns():
    table = classgrade.core.grades_to_frame([])
    assert "percentage" in table.columns
    assert len(table) == 0


@pytest.mark.parametrize("graded_at", [None, "2024-01-01", datetime.date(2024, 1, 1)])
def test_grade_rejects_graded_at_that_is_not_a_datetime(graded_at):
    with pytest.raises(classgrade.InvalidGradeError) as exc:
        classgrade.Grade("A1", "hw01", CLASS_ID, "homework", 8, 10, graded_at)

    assert exc.value.student_id == "A1"
    assert exc.value.assignment_id == "hw01"


def test_naive_graded_at_is_taken_as_utc():
    # given
    naive = make_grade("A1", "hw01", "homework", 5)
    aware = naive.graded_at.replace(tzinfo=datetime.timezone.utc)

    # then
    assert naive.graded_at_utc == aware


def test_latest_grades_with_naive_and_aware_timestamps():
    # given
    eastern = datetime.timezone(datetime.timedelta(hours=-5))
    grades = [
        # 15:00 UTC
        classgrade.Grade(
            "A1",
            "hw01",
            CLASS_ID,
            "homework",
            5,
            10,
            datetime.datetime(2024, 1, 1, 10, tzinfo=eastern),
        ),
        # naive, so 12:00 UTC
        classgrade.Grade(
            "A1", "hw01", CLASS_ID, "homework", 9, 10, datetime.datetime(2024, 1, 1, 12)
        ),
    ]

    # when
    latest = classgrade.latest_grades(grades)

    # then
    assert [g.points for g in latest] == [5]
