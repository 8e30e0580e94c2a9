"""Student-facing endpoints: eligibility, registration, grades and GPA."""

from fastapi import APIRouter, Path, Query

from gradebook.core.database import DbSession
from gradebook.core.dependencies import ClientIp, CurrentStudent
from gradebook.core.exceptions import NotFoundError
from gradebook.models.audit import AuditAction
from gradebook.schemas.account import StudentResponse
from gradebook.schemas.common import MessageResponse
from gradebook.schemas.course import CourseResponse
from gradebook.schemas.grade import (
    CgpaResponse,
    CourseGradesEntry,
    GpaResponse,
    RegistrationRequest,
    RegistrationResult,
    StudentGradesResponse,
)
from gradebook.schemas.petition import PetitionCreate, PetitionResponse
from gradebook.services.aggregation import GpaCalculator
from gradebook.services.audit import AuditService
from gradebook.services.eligibility import EligibilityResolver
from gradebook.services.petition import PetitionService
from gradebook.services.record_store import RecordStore

router = APIRouter()


@router.get("/me", response_model=StudentResponse)
def get_my_profile(student: CurrentStudent):
    """Get the calling student's profile."""
    return StudentResponse.from_account(student)


@router.get("/me/available-courses", response_model=list[CourseResponse])
def get_available_courses(
    student: CurrentStudent,
    db: DbSession,
):
    """
    Courses the student may register for.
    Matches the student's department, current semester and faculty.
    """
    service = EligibilityResolver(db)
    courses = service.available_courses(student.email)
    return [CourseResponse.model_validate(c) for c in courses]


@router.post("/me/registrations", response_model=RegistrationResult)
def register_courses(
    request: RegistrationRequest,
    student: CurrentStudent,
    db: DbSession,
    client_ip: ClientIp,
):
    """
    Register the student for the given course codes.
    Already registered courses are kept as they are; unknown codes are reported.
    """
    service = EligibilityResolver(db)
    result = service.register_courses(student.email, request.course_codes)

    # Audit log
    audit = AuditService(db)
    audit.log(
        action=AuditAction.COURSES_REGISTERED,
        resource_type="student",
        resource_id=student.email,
        account_id=student.id,
        description=f"Registered {len(result.registered)} courses",
        metadata=result.model_dump(exclude={"message"}),
        ip_address=client_ip,
    )

    return result


@router.put("/me/registration-status", response_model=MessageResponse)
def complete_registration(
    student: CurrentStudent,
    db: DbSession,
    client_ip: ClientIp,
):
    """Mark course registration as completed for the current cycle."""
    service = EligibilityResolver(db)
    service.complete_registration(student.email)

    # Audit log
    audit = AuditService(db)
    audit.log(
        action=AuditAction.REGISTRATION_COMPLETED,
        resource_type="student",
        resource_id=student.email,
        account_id=student.id,
        ip_address=client_ip,
    )

    return MessageResponse(message="Student registration status updated successfully")


@router.get("/me/grades", response_model=StudentGradesResponse)
def get_my_grades(
    student: CurrentStudent,
    db: DbSession,
    semester: int | None = Query(None, ge=1, description="Limit to one semester"),
):
    """
    Grade records of the student, each with the course maximums.
    Returns 404 when the student has no course in the requested scope.
    """
    store = RecordStore(db)
    pairs = store.list_grade_records(student.email, semester=semester)
    if not pairs:
        if semester is not None:
            raise NotFoundError("Grade records for semester", str(semester))
        raise NotFoundError("Grade records", student.email)

    profile = student.student_profile
    return StudentGradesResponse(
        student_code=profile.student_code if profile else None,
        email=student.email,
        current_semester=profile.current_semester if profile else None,
        department=profile.department if profile else None,
        has_registered_courses=profile.has_registered_courses if profile else False,
        courses=[CourseGradesEntry.from_pair(record, course) for record, course in pairs],
    )


@router.get("/me/gpa/{semester}", response_model=GpaResponse)
def get_semester_gpa(
    student: CurrentStudent,
    db: DbSession,
    semester: int = Path(..., ge=1),
):
    """Credit-weighted GPA of one semester."""
    service = GpaCalculator(db)
    return GpaResponse(semester=semester, gpa=service.semester_gpa(student.email, semester))


@router.get("/me/cgpa", response_model=CgpaResponse)
def get_cumulative_gpa(
    student: CurrentStudent,
    db: DbSession,
):
    """Credit-weighted GPA over every registered course."""
    service = GpaCalculator(db)
    return CgpaResponse(cgpa=service.cumulative_gpa(student.email))


@router.post("/me/petitions", response_model=PetitionResponse)
def submit_petition(
    request: PetitionCreate,
    student: CurrentStudent,
    db: DbSession,
    client_ip: ClientIp,
):
    """File a petition about a course."""
    service = PetitionService(db)
    petition = service.submit(student.email, request)

    # Audit log
    audit = AuditService(db)
    audit.log(
        action=AuditAction.PETITION_SUBMITTED,
        resource_type="petition",
        resource_id=str(petition.id),
        account_id=student.id,
        description=f"Petition about '{petition.course_name}'",
        ip_address=client_ip,
    )

    return PetitionResponse.model_validate(petition)
