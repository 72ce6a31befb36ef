import datetime

import classgrade

CLASS_ID = "bio-101"


def day(n):
    """A timestamp n days into the term."""
    return datetime.datetime(2024, 1, 1) + datetime.timedelta(days=n)


def make_grade(
    student, assignment, category, points, max_points=100, graded_on=0, **kwargs
):
    return classgrade.Grade(
        student_id=student,
        assignment_id=assignment,
        class_id=CLASS_ID,
        category_id=category,
        points=points,
        max_points=max_points,
        graded_at=day(graded_on),
        **kwargs,
    )


def make_grades(student, category, percentages, max_points=100, prefix=None):
    """One grade per percentage, graded on consecutive days, in the given order."""
    prefix = category if prefix is None else prefix
    return [
        make_grade(
            student,
            f"{prefix} {i:02d}",
            category,
            p * max_points / 100,
            max_points,
            graded_on=i,
        )
        for i, p in enumerate(percentages, start=1)
    ]
