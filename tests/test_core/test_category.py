import pytest

import classgrade
from classgrade import Category, aggregate_category
from classgrade.trends import Trend
from util import make_grade, make_grades


def test_drop_lowest_on_homework_example():
    # given
    homework = Category("homework", "Homework", 25, drop_lowest=1)
    grades = make_grades("A1", "homework", [60, 80, 90, 100])

    # when
    result = aggregate_category(grades, homework)

    # then
    assert [g.percentage for g in result.dropped_grades] == [60]
    assert result.earned_points == 270
    assert result.total_points == 300
    assert result.percentage == pytest.approx(90)
    assert result.letter == "A"
    assert result.assignment_count == 4
    assert result.graded_assignments == 3


def test_without_drops_percentage_is_ratio_of_total_points():
    # given
    category = Category("labs", "Labs", 20)
    grades = [
        make_grade("A1", "lab01", "labs", 5, max_points=10),
        make_grade("A1", "lab02", "labs", 45, max_points=50),
        make_grade("A1", "lab03", "labs", 0, max_points=40),
    ]

    # when
    result = aggregate_category(grades, category)

    # then
    assert result.percentage == pytest.approx((5 + 45 + 0) / (10 + 50 + 40) * 100)
    assert result.dropped_grades == ()


def test_drop_lowest_drops_by_percentage_not_points():
    # given
    category = Category("labs", "Labs", 20, drop_lowest=1)
    grades = [
        make_grade("A1", "lab01", "labs", 30, max_points=100),
        make_grade("A1", "lab02", "labs", 2, max_points=10),
    ]

    # when
    result = aggregate_category(grades, category)

    # then
    assert result.dropped_grades[0].assignment_id == "lab02"
    assert result.percentage == pytest.approx(30)


def test_drop_lowest_ties_drop_first_in_original_order():
    # given
    category = Category("hw", "Homework", 25, drop_lowest=1)
    grades = [
        make_grade("A1", "hw01", "hw", 70),
        make_grade("A1", "hw02", "hw", 70),
        make_grade("A1", "hw03", "hw", 90),
    ]

    # when
    result = aggregate_category(grades, category)

    # then
    assert [g.assignment_id for g in result.dropped_grades] == ["hw01"]


@pytest.mark.parametrize("drop_lowest", [3, 4])
def test_dropping_everything_leaves_no_graded_work(drop_lowest):
    # given
    category = Category("hw", "Homework", 25, drop_lowest=drop_lowest)
    grades = make_grades("A1", "hw", [60, 80, 90])

    # when
    result = aggregate_category(grades, category)

    # then
    assert result.percentage == 0
    assert result.total_points == 0
    assert not result.has_graded_work
    assert len(result.dropped_grades) == 3


def test_empty_category():
    # given
    category = Category("hw", "Homework", 25, drop_lowest=1)

    # when
    result = aggregate_category([], category)

    # then
    assert result.percentage == 0
    assert result.letter == "F"
    assert result.recent_average == 0
    assert result.trend is Trend.STABLE
    assert not result.has_graded_work


def test_increasing_drop_lowest_never_lowers_percentage():
    # given
    grades = make_grades("A1", "hw", [55, 100, 72, 72, 88, 64, 91])

    # when
    percentages = [
        aggregate_category(grades, Category("hw", "Homework", 25, drop_lowest=n)).percentage
        for n in range(len(grades))
    ]

    # then
    assert percentages == sorted(percentages)


def test_recent_average_uses_last_three_kept_grades_chronologically():
    # given
    category = Category("hw", "Homework", 25, drop_lowest=1)
    # graded on days 1..5 in this order; 40 (day 4) is dropped
    grades = make_grades("A1", "hw", [100, 90, 80, 40, 70])

    # when
    result = aggregate_category(grades, category)

    # then
    # the last three kept grades by date are 90, 80, 70
    assert result.recent_average == pytest.approx(80)


def test_recent_window_is_configurable():
    # given
    category = Category("hw", "Homework", 25)
    grades = make_grades("A1", "hw", [100, 90, 80, 70])

    # when
    result = aggregate_category(grades, category, recent_window=1)

    # then
    assert result.recent_average == 70


def test_category_trend_uses_kept_grades():
    # given
    category = Category("hw", "Homework", 25)
    grades = make_grades("A1", "hw", [90, 85, 70, 60])

    # when
    result = aggregate_category(grades, category)

    # then
    assert result.trend is Trend.DECLINING


def test_excused_grades_are_ignored():
    # given
    category = Category("hw", "Homework", 25, drop_lowest=1)
    grades = make_grades("A1", "hw", [80, 90]) + [
        make_grade("A1", "hw03", "hw", 0, is_excused=True)
    ]

    # when
    result = aggregate_category(grades, category)

    # then
    # the excused zero is not the one dropped; the 80 is
    assert result.percentage == pytest.approx(90)
    assert result.assignment_count == 2


def test_grade_from_other_category_raises():
    # given
    category = Category("hw", "Homework", 25)
    grades = [make_grade("A1", "test01", "tests", 80)]

    # when / then
    with pytest.raises(classgrade.GradeReferenceError) as exc:
        aggregate_category(grades, category)

    assert exc.value.student_id == "A1"
    assert exc.value.assignment_id == "test01"
    assert exc.value.category_id == "tests"


def test_letter_uses_given_scale():
    # given
    scale = classgrade.GradingScale(
        [
            classgrade.GradeRange(0, 49.99, "Fail", 0),
            classgrade.GradeRange(50, 100, "Pass", 1),
        ]
    )
    category = Category("hw", "Homework", 25)

    # when
    result = aggregate_category(make_grades("A1", "hw", [55]), category, scale)

    # then
    assert result.letter == "Pass"
