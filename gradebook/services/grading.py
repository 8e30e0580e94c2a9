"""Grade update policy shared by doctors and assistants."""

import logging

from sqlalchemy.orm import Session

from gradebook.core.config import settings
from gradebook.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from gradebook.models.account import Account
from gradebook.models.course import Course, InstructorRole
from gradebook.models.grade import GradeRecord
from gradebook.schemas.grade import GradeUpdate
from gradebook.services.record_store import RecordStore

logger = logging.getLogger(__name__)

# Components an instructor may set, with the course field holding each maximum
COMPONENT_MAXIMUMS = {
    "mid_term": "max_mid_term",
    "final_exam": "max_final_exam",
    "quizzes": "max_quizzes",
    "practical": "max_practical",
}


def compute_total(record: GradeRecord, has_practical_component: bool) -> float:
    """Sum of the stored components that count for the course.

    Null components add nothing; practical counts only on courses with a
    practical component.
    """
    total = 0.0
    for value in (record.mid_term, record.final_exam, record.quizzes):
        if value is not None:
            total += value
    if has_practical_component and record.practical is not None:
        total += record.practical
    return total


class GradeUpdatePolicy:
    """Applies instructor grade edits to grade records."""

    def __init__(self, db: Session, enforce_maximums: bool | None = None):
        self.db = db
        self.store = RecordStore(db)
        if enforce_maximums is None:
            enforce_maximums = settings.ENFORCE_COMPONENT_MAXIMUMS
        self.enforce_maximums = enforce_maximums

    def get_taught_course(
        self,
        instructor_email: str,
        role: InstructorRole,
        course_code: str,
    ) -> Course:
        """Course with ``course_code`` among the ones the instructor teaches."""
        for course in self.store.list_taught_courses(instructor_email, role):
            if course.code == course_code:
                return course
        logger.warning(f"{role.value.title()} {instructor_email} does not teach course {course_code}")
        raise ForbiddenError(
            f"{role.value.title()} does not teach this course",
            details={"course_code": course_code},
        )

    def update_grade(
        self,
        instructor_email: str,
        role: InstructorRole,
        course_code: str,
        update: GradeUpdate,
    ) -> GradeRecord:
        """Apply a partial grade update and recompute the total."""
        logger.info(
            f"Editing grades of {update.student_email} in {course_code} "
            f"by {role.value.lower()} {instructor_email}"
        )
        course = self.get_taught_course(instructor_email, role, course_code)
        has_practical = course.has_practical_component

        record = self._find_record(update.student_email, course)

        changes = self._applicable_changes(update, has_practical)
        if self.enforce_maximums:
            self._check_maximums(course, changes)

        for field, value in changes.items():
            setattr(record, field, value)
        record.total = compute_total(record, has_practical)

        self.db.flush()
        logger.info(f"Grades updated for {update.student_email} in {course_code}: total={record.total}")
        return record

    def get_student_grades(
        self,
        instructor_email: str,
        role: InstructorRole,
        course_code: str,
        student_email: str,
    ) -> tuple[Account, GradeRecord, Course]:
        """One student's grades in a course the instructor teaches."""
        course = self.get_taught_course(instructor_email, role, course_code)
        student = self.store.find_student(student_email)
        record = self._find_record(student_email, course)
        return student, record, course

    def _find_record(self, student_email: str, course: Course) -> GradeRecord:
        record = self.store.find_grade_record(student_email, course.code)
        if record.course_id != course.id:
            # Same code in another faculty
            raise NotFoundError("Grade record", f"{student_email}/{course.code}")
        return record

    def _applicable_changes(self, update: GradeUpdate, has_practical: bool) -> dict[str, float]:
        changes = {}
        for field in COMPONENT_MAXIMUMS:
            value = getattr(update, field)
            if value is None:
                continue
            if field == "practical" and not has_practical:
                logger.debug("Ignoring practical score for course without practical component")
                continue
            changes[field] = value
        return changes

    def _check_maximums(self, course: Course, changes: dict[str, float]) -> None:
        errors = {}
        for field, value in changes.items():
            maximum = getattr(course, COMPONENT_MAXIMUMS[field])
            if maximum is not None and value > maximum:
                errors[field] = f"{value} exceeds maximum {maximum}"
        if errors:
            raise ValidationError("Grade component exceeds the course maximum", details=errors)
