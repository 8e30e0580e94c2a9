"""Grade, registration and GPA schemas."""

from pydantic import Field

from gradebook.models.course import Course
from gradebook.models.grade import GradeRecord
from gradebook.schemas.common import BaseSchema


# ==========================================
# Grade Update
# ==========================================

class GradeUpdate(BaseSchema):
    """Partial update of one student's grade components.

    A component left out (or sent as null) keeps its stored value.
    """

    student_email: str = Field(..., min_length=3, max_length=255)
    mid_term: float | None = Field(None, ge=0)
    final_exam: float | None = Field(None, ge=0)
    quizzes: float | None = Field(None, ge=0)
    practical: float | None = Field(None, ge=0)


class GradeUpdateResponse(BaseSchema):
    """Result of a grade update."""

    success: bool = True
    student_email: str
    course_code: str
    mid_term: float | None
    final_exam: float | None
    quizzes: float | None
    practical: float | None
    total: float | None


# ==========================================
# Grade Views
# ==========================================

class CourseGradesEntry(BaseSchema):
    """One course with its maximums next to the student's values."""

    course_code: str
    name: str
    credit_hours: int | None
    has_practical_component: bool
    semester: int

    course_mid_term: float | None
    course_final_exam: float | None
    course_quizzes: float | None
    course_practical: float | None
    course_total: float | None

    student_mid_term: float | None
    student_final_exam: float | None
    student_quizzes: float | None
    student_practical: float | None
    student_total: float | None

    @classmethod
    def from_pair(cls, record: GradeRecord, course: Course) -> "CourseGradesEntry":
        return cls(
            course_code=course.code,
            name=course.name,
            credit_hours=course.credit_hours,
            has_practical_component=course.has_practical_component,
            semester=course.semester,
            course_mid_term=course.max_mid_term,
            course_final_exam=course.max_final_exam,
            course_quizzes=course.max_quizzes,
            course_practical=course.max_practical,
            course_total=course.max_total,
            student_mid_term=record.mid_term,
            student_final_exam=record.final_exam,
            student_quizzes=record.quizzes,
            student_practical=record.practical,
            student_total=record.total,
        )


class StudentGradesResponse(BaseSchema):
    """Grade records of a student, paired with their courses."""

    student_code: str | None
    email: str
    current_semester: int | None
    department: str | None
    has_registered_courses: bool
    courses: list[CourseGradesEntry]


# ==========================================
# Registration
# ==========================================

class RegistrationRequest(BaseSchema):
    """Course codes a student wants to register for."""

    course_codes: list[str] = Field(..., min_length=1)


class RegistrationResult(BaseSchema):
    """Outcome of a registration request, per course code."""

    registered: list[str] = []
    already_registered: list[str] = []
    unresolved: list[str] = []
    message: str


# ==========================================
# GPA
# ==========================================

class GpaResponse(BaseSchema):
    """Semester grade-point average."""

    semester: int
    gpa: float


class CgpaResponse(BaseSchema):
    """Cumulative grade-point average."""

    cgpa: float
