"""Record store: lookups of students, courses and grade records by business key."""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from gradebook.core.exceptions import NotFoundError
from gradebook.models.account import Account, AccountRole
from gradebook.models.course import Course, CourseDepartment, CourseInstructor, Department, InstructorRole
from gradebook.models.grade import GradeRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """Queries over accounts, courses and grade records.

    Bound to the request's session; every lookup of a single entity raises
    ``NotFoundError`` instead of returning ``None``.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==========================================
    # Accounts
    # ==========================================

    def find_student(self, email: str) -> Account:
        """Get a student account (with profile) by email."""
        result = self.db.execute(
            select(Account).where(
                Account.email == email,
                Account.role == AccountRole.STUDENT,
            )
        )
        student = result.scalar_one_or_none()
        if not student:
            logger.warning(f"Student not found with email: {email}")
            raise NotFoundError("Student", email)
        return student

    def find_instructor(self, email: str, role: InstructorRole) -> Account:
        """Get a doctor or assistant account by email."""
        result = self.db.execute(
            select(Account).where(
                Account.email == email,
                Account.role == AccountRole(role.value),
            )
        )
        instructor = result.scalar_one_or_none()
        if not instructor:
            logger.warning(f"{role.value.title()} not found with email: {email}")
            raise NotFoundError(role.value.title(), email)
        return instructor

    # ==========================================
    # Courses
    # ==========================================

    def find_course(self, course_code: str, faculty: str) -> Course:
        """Get a course by its code within a faculty."""
        result = self.db.execute(
            select(Course).where(
                Course.code == course_code,
                Course.faculty == faculty,
            )
        )
        course = result.scalar_one_or_none()
        if not course:
            logger.warning(f"Course {course_code} not found in faculty {faculty}")
            raise NotFoundError("Course", course_code)
        return course

    def find_courses_by_codes(self, course_codes: Iterable[str], faculty: str) -> list[Course]:
        """Get the courses of a faculty whose codes are in ``course_codes``.

        Unknown codes are simply absent from the result.
        """
        codes = set(course_codes)
        if not codes:
            return []
        result = self.db.execute(
            select(Course)
            .where(Course.code.in_(codes), Course.faculty == faculty)
            .order_by(Course.code)
        )
        return list(result.scalars().all())

    def list_courses_for(self, department: str, semester: int, faculty: str) -> list[Course]:
        """Courses offered to a department in a given semester of a faculty."""
        offered_to_department = (
            select(CourseDepartment.course_id)
            .join(Department, Department.id == CourseDepartment.department_id)
            .where(Department.name == department)
        )
        result = self.db.execute(
            select(Course)
            .where(
                Course.id.in_(offered_to_department),
                Course.semester == semester,
                Course.faculty == faculty,
            )
            .order_by(Course.code)
        )
        return list(result.scalars().all())

    def list_taught_courses(self, instructor_email: str, role: InstructorRole) -> list[Course]:
        """Courses taught by a doctor or assistant."""
        instructor = self.find_instructor(instructor_email, role)
        result = self.db.execute(
            select(Course)
            .join(CourseInstructor, CourseInstructor.course_id == Course.id)
            .where(
                CourseInstructor.account_id == instructor.id,
                CourseInstructor.role == role,
            )
            .order_by(Course.code)
        )
        return list(result.scalars().all())

    # ==========================================
    # Grade Records
    # ==========================================

    def find_grade_record(self, student_email: str, course_code: str) -> GradeRecord:
        """Get the grade record of a student in a course by email and course code."""
        result = self.db.execute(
            select(GradeRecord)
            .join(Account, Account.id == GradeRecord.student_id)
            .join(Course, Course.id == GradeRecord.course_id)
            .where(
                Account.email == student_email,
                Course.code == course_code,
                Course.faculty == Account.faculty,
            )
        )
        record = result.scalar_one_or_none()
        if not record:
            logger.warning(f"No grade record for student {student_email} in course {course_code}")
            raise NotFoundError("Grade record", f"{student_email}/{course_code}")
        return record

    def list_grade_records(
        self,
        student_email: str,
        semester: int | None = None,
        course_code: str | None = None,
    ) -> list[tuple[GradeRecord, Course]]:
        """List a student's grade records, each paired with its course.

        At most one of ``semester`` / ``course_code`` is expected; neither
        means every record of the student.
        """
        student = self.find_student(student_email)
        query = (
            select(GradeRecord, Course)
            .join(Course, Course.id == GradeRecord.course_id)
            .where(GradeRecord.student_id == student.id)
        )
        if semester is not None:
            query = query.where(Course.semester == semester)
        if course_code is not None:
            query = query.where(Course.code == course_code)
        query = query.order_by(Course.semester, Course.code)

        result = self.db.execute(query)
        return [(record, course) for record, course in result.all()]

    def list_roster(self, course_code: str, faculty: str) -> list[Account]:
        """Students holding a grade record for the course."""
        course = self.find_course(course_code, faculty)
        result = self.db.execute(
            select(Account)
            .join(GradeRecord, GradeRecord.student_id == Account.id)
            .where(GradeRecord.course_id == course.id)
            .order_by(Account.email)
        )
        students = list(result.scalars().all())
        logger.info(f"Found {len(students)} students for course {course_code}")
        return students

    def existing_course_ids(self, student_id: int, course_ids: Iterable[int]) -> set[int]:
        """Subset of ``course_ids`` the student already holds a record for."""
        ids = set(course_ids)
        if not ids:
            return set()
        result = self.db.execute(
            select(GradeRecord.course_id).where(
                GradeRecord.student_id == student_id,
                GradeRecord.course_id.in_(ids),
            )
        )
        return set(result.scalars().all())

    def add_all(self, records: Iterable[GradeRecord]) -> None:
        """Stage new grade records and flush them as one batch."""
        self.db.add_all(list(records))
        self.db.flush()
