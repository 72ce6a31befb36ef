import pytest

import classgrade
from util import CLASS_ID


@pytest.fixture
def homework():
    return classgrade.Category("homework", "Homework", 25, drop_lowest=1)


@pytest.fixture
def tests_category():
    return classgrade.Category("tests", "Tests", 75)


@pytest.fixture
def settings(homework, tests_category):
    return classgrade.GradebookSettings(CLASS_ID, [homework, tests_category])
