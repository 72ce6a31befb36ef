from ._records import (
    Category,
    Grade,
    Assignment,
    latest_grades,
    grades_to_frame,
)
from ._settings import (
    GradebookOptions,
    GradebookSettings,
    UNCATEGORIZED,
    default_gradebook_settings,
)
from ._category import CategoryGrade, aggregate_category
from ._weighting import weighted_grade
from ._summary import StudentGradeSummary, summarize_student, summarize_class

__all__ = [
    "Category",
    "Grade",
    "Assignment",
    "latest_grades",
    "grades_to_frame",
    "GradebookOptions",
    "GradebookSettings",
    "UNCATEGORIZED",
    "default_gradebook_settings",
    "CategoryGrade",
    "aggregate_category",
    "weighted_grade",
    "StudentGradeSummary",
    "summarize_student",
    "summarize_class",
]
