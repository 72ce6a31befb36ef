"""Per-class configuration of the gradebook."""

import dataclasses
from typing import Optional, Sequence

from ..exceptions import ConfigurationError, GradeReferenceError
from ..scales import DEFAULT_SCALE, GradingScale
from ._records import Category

UNCATEGORIZED = Category(id="uncategorized", name="Uncategorized", weight=0)
"""The category that grades with an unknown category fall into, if allowed."""

ROUNDING_METHODS = ("none", "round", "floor", "ceil")

#: how many of the most recent grades go into a category's recent average
RECENT_WINDOW = 3


# GradebookOptions ---------------------------------------------------------------------


@dataclasses.dataclass
class GradebookOptions:
    """Configures the behavior of the calculations.

    Attributes
    ----------
    unknown_category : str
        What to do with a grade whose category is not one of the class's
        categories. If "raise", a :class:`GradeReferenceError` is raised. If
        "uncategorized", the grade is placed in :data:`UNCATEGORIZED`, a
        category with zero weight: it is reported, but does not affect the
        overall grade. Default: "raise".
    at_risk_threshold : float
        Students whose overall percentage is below this are at risk.
        Default: 60.
    struggling_threshold : float
        Students below this percentage in a category are counted as struggling
        in that category. Default: 70.
    recent_window : int
        The number of most recent grades in a category's recent average.
        Default: 3.
    median_strategy : str
        How the class median is computed for an even number of students.
        "midpoint" takes the upper of the two middle values; "average" takes
        their mean. Default: "midpoint".

    """

    unknown_category: str = "raise"
    at_risk_threshold: float = 60
    struggling_threshold: float = 70
    recent_window: int = RECENT_WINDOW
    median_strategy: str = "midpoint"

    def __post_init__(self):
        if self.unknown_category not in ("raise", "uncategorized"):
            raise ConfigurationError(
                f"Unknown value for unknown_category: {self.unknown_category!r}."
            )
        if self.median_strategy not in ("midpoint", "average"):
            raise ConfigurationError(
                f"Unknown median strategy: {self.median_strategy!r}."
            )


# GradebookSettings --------------------------------------------------------------------


@dataclasses.dataclass
class GradebookSettings:
    """A class's categories, grading scale and options.

    Attributes
    ----------
    class_id : str
    categories : Sequence[Category]
        The class's categories. Ids must be unique.
    grading_scale : GradingScale
        Default: :data:`classgrade.scales.DEFAULT_SCALE`.
    rounding_method : str
        How percentages are rounded for display: "none", "round", "floor" or
        "ceil". Calculations always use unrounded values. Default: "round".
    options : GradebookOptions

    Raises
    ------
    ConfigurationError
        If two categories share an id, a category uses the reserved id
        "uncategorized", or the rounding method is unknown.

    """

    class_id: str
    categories: Sequence[Category]
    grading_scale: GradingScale = DEFAULT_SCALE
    rounding_method: str = "round"
    options: GradebookOptions = dataclasses.field(default_factory=GradebookOptions)

    def __post_init__(self):
        self.categories = tuple(self.categories)

        ids = [c.id for c in self.categories]
        duplicates = {i for i in ids if ids.count(i) > 1}
        if duplicates:
            raise ConfigurationError(
                f"Duplicate category ids in class {self.class_id!r}: {sorted(duplicates)}.",
                category_id=sorted(duplicates)[0],
            )

        if UNCATEGORIZED.id in ids:
            raise ConfigurationError(
                f"Category id {UNCATEGORIZED.id!r} is reserved for grades with an "
                "unknown category.",
                category_id=UNCATEGORIZED.id,
            )

        if self.rounding_method not in ROUNDING_METHODS:
            raise ConfigurationError(
                f"Unknown rounding method: {self.rounding_method!r}. "
                f"Must be one of {ROUNDING_METHODS}."
            )

    def category(self, category_id: str) -> Optional[Category]:
        """The category with the given id, or None."""
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def category_of(self, grade) -> Category:
        """The category a grade belongs to.

        Applies the :attr:`GradebookOptions.unknown_category` policy when the
        grade's category is not in the class.

        Raises
        ------
        GradeReferenceError
            If the category is unknown and the policy is "raise".

        """
        category = self.category(grade.category_id)
        if category is not None:
            return category

        if self.options.unknown_category == "uncategorized":
            return UNCATEGORIZED

        raise GradeReferenceError(
            f"Grade for student {grade.student_id!r}, assignment "
            f"{grade.assignment_id!r} refers to unknown category "
            f"{grade.category_id!r} in class {self.class_id!r}.",
            student_id=grade.student_id,
            assignment_id=grade.assignment_id,
            category_id=grade.category_id,
        )


# public functions =====================================================================


def default_gradebook_settings(class_id: str) -> GradebookSettings:
    """Create the settings used by a class that has not configured its own.

    A new object is returned on every call; changing it does not affect the
    defaults of any other class.

    """
    return GradebookSettings(
        class_id=class_id,
        categories=(
            Category("homework", "Homework", 25, drop_lowest=1, color="#3B82F6"),
            Category("tests", "Tests & Quizzes", 50, color="#EF4444"),
            Category("projects", "Projects", 20, color="#10B981"),
            Category("participation", "Participation", 5, color="#8B5CF6"),
        ),
        grading_scale=DEFAULT_SCALE,
        rounding_method="round",
        options=GradebookOptions(),
    )
