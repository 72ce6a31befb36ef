"""A package for computing weighted class grades, trends, curves and analytics."""

from .core import (
    Category,
    Grade,
    Assignment,
    CategoryGrade,
    StudentGradeSummary,
    GradebookOptions,
    GradebookSettings,
    default_gradebook_settings,
    aggregate_category,
    weighted_grade,
    summarize_student,
    summarize_class,
    latest_grades,
)

from .scales import DEFAULT_SCALE, GradeRange, GradingScale, map_scores_to_letter_grades

from .trends import Trend, classify_trend

from .exceptions import (
    Error,
    ConfigurationError,
    GradeReferenceError,
    InvalidGradeError,
)

from . import policies
from . import statistics
from . import display
from . import io

__all__ = [
    "Category",
    "Grade",
    "Assignment",
    "CategoryGrade",
    "StudentGradeSummary",
    "GradebookOptions",
    "GradebookSettings",
    "default_gradebook_settings",
    "aggregate_category",
    "weighted_grade",
    "summarize_student",
    "summarize_class",
    "latest_grades",
    "DEFAULT_SCALE",
    "GradeRange",
    "GradingScale",
    "map_scores_to_letter_grades",
    "Trend",
    "classify_trend",
    "Error",
    "ConfigurationError",
    "GradeReferenceError",
    "InvalidGradeError",
    "policies",
    "statistics",
    "display",
    "io",
]
