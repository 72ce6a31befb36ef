"""Errors raised by the grade calculation engine."""


class Error(Exception):
    """Generic error."""


class ConfigurationError(Error, ValueError):
    """A grading scale or category is misconfigured.

    Attributes
    ----------
    category_id : Optional[str]
        The offending category, if the problem is with a category.
    scale_id : Optional[str]
        The offending grading scale, if the problem is with a scale.

    """

    def __init__(self, message, *, category_id=None, scale_id=None):
        super().__init__(message)
        self.category_id = category_id
        self.scale_id = scale_id


class GradeReferenceError(Error, KeyError):
    """A grade refers to a category that the class does not have."""

    def __init__(self, message, *, student_id=None, assignment_id=None, category_id=None):
        super().__init__(message)
        self.student_id = student_id
        self.assignment_id = assignment_id
        self.category_id = category_id

    def __str__(self):
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidGradeError(Error, ValueError):
    """A grade record holds points that cannot be used in a calculation."""

    def __init__(self, message, *, student_id=None, assignment_id=None):
        super().__init__(message)
        self.student_id = student_id
        self.assignment_id = assignment_id
