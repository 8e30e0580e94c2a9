"""GPA and CGPA calculation."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from gradebook.core.exceptions import NotFoundError
from gradebook.models.course import Course
from gradebook.models.grade import GradeRecord
from gradebook.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def weighted_average(pairs: Iterable[tuple[GradeRecord, Course]]) -> float:
    """Credit-hour weighted average of total / course maximum.

    Pairs whose course lacks a maximum total (or declares it as zero) or
    lacks credit hours are skipped entirely. Returns 0.0 when no credit
    hours are counted.
    """
    grade_points = 0.0
    credits = 0.0
    for record, course in pairs:
        # A zero maximum is treated like a missing one
        if not course.max_total or course.credit_hours is None:
            continue
        total = record.total or 0.0
        grade_points += (total / course.max_total) * course.credit_hours
        credits += course.credit_hours
    return grade_points / credits if credits > 0 else 0.0


class GpaCalculator:
    """Semester and cumulative grade-point averages of a student."""

    def __init__(self, db: Session):
        self.db = db
        self.store = RecordStore(db)

    def semester_gpa(self, student_email: str, semester: int) -> float:
        """GPA over the student's courses of one semester."""
        pairs = self.store.list_grade_records(student_email, semester=semester)
        if not pairs:
            logger.warning(f"No courses found for {student_email} in semester {semester}")
            raise NotFoundError("Grade records for semester", str(semester))
        return weighted_average(pairs)

    def cumulative_gpa(self, student_email: str) -> float:
        """GPA over every course the student has registered."""
        pairs = self.store.list_grade_records(student_email)
        if not pairs:
            logger.warning(f"No courses found for {student_email}")
            raise NotFoundError("Grade records", student_email)
        return weighted_average(pairs)
