import pytest

import classgrade
from classgrade import Category, GradebookOptions, GradebookSettings
from classgrade.core import UNCATEGORIZED
from util import CLASS_ID, make_grade


def test_default_settings_are_for_the_given_class():
    # when
    settings = classgrade.default_gradebook_settings("chem-201")

    # then
    assert settings.class_id == "chem-201"
    assert [c.id for c in settings.categories] == [
        "homework",
        "tests",
        "projects",
        "participation",
    ]
    assert sum(c.weight for c in settings.categories) == 100
    assert settings.category("homework").drop_lowest == 1
    assert settings.grading_scale == classgrade.DEFAULT_SCALE
    assert settings.rounding_method == "round"


def test_default_settings_are_independent_between_calls():
    # given
    first = classgrade.default_gradebook_settings("a")
    second = classgrade.default_gradebook_settings("b")

    # when
    first.options.at_risk_threshold = 70
    first.rounding_method = "floor"
    with pytest.raises(AttributeError):
        first.grading_scale.name = "Mutated"

    # then
    assert second.options.at_risk_threshold == 60
    assert second.rounding_method == "round"
    assert second.grading_scale.name == "Standard Scale"
    assert second.grading_scale == classgrade.DEFAULT_SCALE


def test_duplicate_category_ids_are_rejected():
    with pytest.raises(classgrade.ConfigurationError):
        GradebookSettings(
            CLASS_ID,
            [Category("hw", "Homework", 50), Category("hw", "Homework 2", 50)],
        )


def test_unknown_rounding_method_is_rejected():
    with pytest.raises(classgrade.ConfigurationError):
        GradebookSettings(CLASS_ID, [], rounding_method="bankers")


def test_unknown_option_values_are_rejected():
    with pytest.raises(classgrade.ConfigurationError):
        GradebookOptions(unknown_category="ignore")

    with pytest.raises(classgrade.ConfigurationError):
        GradebookOptions(median_strategy="mode")


def test_category_of_known_category(settings, homework):
    grade = make_grade("A1", "hw01", "homework", 5)
    assert settings.category_of(grade) == homework


def test_category_of_unknown_category_raises_by_default(settings):
    # given
    grade = make_grade("A1", "lab01", "labs", 5)

    # when / then
    with pytest.raises(classgrade.GradeReferenceError) as exc:
        settings.category_of(grade)

    assert exc.value.category_id == "labs"
    assert exc.value.assignment_id == "lab01"
    assert "labs" in str(exc.value)


def test_category_of_unknown_category_can_be_uncategorized(settings):
    # given
    settings.options = GradebookOptions(unknown_category="uncategorized")
    grade = make_grade("A1", "lab01", "labs", 5)

    # then
    assert settings.category_of(grade) is UNCATEGORIZED


def test_settings_default_to_standard_scale():
    # when
    settings = GradebookSettings(CLASS_ID, [])

    # then
    assert settings.grading_scale == classgrade.DEFAULT_SCALE
    assert settings.options == GradebookOptions()


def test_uncategorized_id_is_reserved():
    with pytest.raises(classgrade.ConfigurationError) as exc:
        GradebookSettings(CLASS_ID, [Category("uncategorized", "Misc", 10)])

    assert exc.value.category_id == "uncategorized"
