"""Course eligibility and registration service."""

import logging

from sqlalchemy.orm import Session

from gradebook.core.exceptions import InvalidStateError, ValidationError
from gradebook.models.account import Account
from gradebook.models.course import Course
from gradebook.models.grade import GradeRecord
from gradebook.schemas.grade import RegistrationResult
from gradebook.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class EligibilityResolver:
    """Resolves which courses a student may take and registers them."""

    def __init__(self, db: Session):
        self.db = db
        self.store = RecordStore(db)

    def available_courses(self, student_email: str) -> list[Course]:
        """Courses of the student's department, semester and faculty."""
        student = self.store.find_student(student_email)
        profile = student.student_profile

        if profile is None or profile.current_semester is None:
            logger.warning(f"Current semester is not assigned for student: {student_email}")
            raise InvalidStateError(
                "Current semester is not assigned for this student",
                details={"email": student_email},
            )

        courses = self.store.list_courses_for(
            department=profile.department,
            semester=profile.current_semester,
            faculty=student.faculty,
        )
        logger.info(f"Found {len(courses)} available courses for {student_email}")
        return courses

    def register_courses(self, student_email: str, course_codes: list[str]) -> RegistrationResult:
        """Create zeroed grade records for the requested courses.

        Codes that do not resolve to a course of the student's faculty are
        reported but do not fail the request; courses already registered are
        left untouched.
        """
        student = self.store.find_student(student_email)
        requested = list(dict.fromkeys(code.strip() for code in course_codes if code.strip()))

        courses = self.store.find_courses_by_codes(requested, student.faculty)
        if not courses:
            logger.warning(f"No matching courses found for {student_email}: {requested}")
            raise ValidationError(
                "No matching courses found",
                details={"course_codes": requested},
            )

        existing = self.store.existing_course_ids(student.id, [c.id for c in courses])
        new_records = [
            GradeRecord.zeroed(student_id=student.id, course_id=course.id)
            for course in courses
            if course.id not in existing
        ]
        self.store.add_all(new_records)

        resolved_codes = {c.code for c in courses}
        result = RegistrationResult(
            registered=[c.code for c in courses if c.id not in existing],
            already_registered=[c.code for c in courses if c.id in existing],
            unresolved=[code for code in requested if code not in resolved_codes],
            message=f"Registered {len(new_records)} of {len(requested)} courses.",
        )
        logger.info(
            f"Registered {len(new_records)} courses for {student_email} "
            f"({len(result.already_registered)} already registered, {len(result.unresolved)} unresolved)"
        )
        return result

    def complete_registration(self, student_email: str) -> Account:
        """Mark the student's course registration as done for this cycle."""
        student = self.store.find_student(student_email)
        if student.student_profile is None:
            raise InvalidStateError(
                "Student has no academic profile",
                details={"email": student_email},
            )
        student.student_profile.has_registered_courses = True
        self.db.flush()
        logger.info(f"Registration completed for {student_email}")
        return student
