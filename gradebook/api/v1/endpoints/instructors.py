"""Instructor-facing endpoints, shared by doctors and assistants."""

from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from gradebook.core.database import DbSession
from gradebook.core.dependencies import ClientIp, require_role
from gradebook.models.account import Account, AccountRole
from gradebook.models.audit import AuditAction
from gradebook.models.course import InstructorRole
from gradebook.schemas.account import AccountResponse, RosterEntry
from gradebook.schemas.course import CourseResponse
from gradebook.schemas.grade import (
    CourseGradesEntry,
    GradeUpdate,
    GradeUpdateResponse,
    StudentGradesResponse,
)
from gradebook.services.audit import AuditService
from gradebook.services.grade_sheet import GradeSheetService
from gradebook.services.grading import GradeUpdatePolicy
from gradebook.services.record_store import RecordStore


def build_instructor_router(role: InstructorRole) -> APIRouter:
    """Create the router for one instructor role.

    Doctors and assistants get the same endpoints; ``role`` only selects
    which taught-courses collection is consulted.
    """
    router = APIRouter()
    CurrentInstructor = Annotated[Account, Depends(require_role(AccountRole(role.value)))]

    @router.get("/me", response_model=AccountResponse)
    def get_my_profile(instructor: CurrentInstructor):
        """Get the calling instructor's profile."""
        return AccountResponse.model_validate(instructor)

    @router.get("/me/courses", response_model=list[CourseResponse])
    def list_my_courses(
        instructor: CurrentInstructor,
        db: DbSession,
    ):
        """Courses taught by the caller."""
        store = RecordStore(db)
        courses = store.list_taught_courses(instructor.email, role)
        return [CourseResponse.model_validate(c) for c in courses]

    @router.get("/me/courses/{course_code}/students", response_model=list[RosterEntry])
    def list_course_students(
        course_code: str,
        instructor: CurrentInstructor,
        db: DbSession,
    ):
        """Students registered in a course the caller teaches."""
        policy = GradeUpdatePolicy(db)
        course = policy.get_taught_course(instructor.email, role, course_code)
        students = policy.store.list_roster(course.code, course.faculty)
        return [RosterEntry.from_account(s) for s in students]

    @router.get(
        "/me/courses/{course_code}/students/{student_email}",
        response_model=StudentGradesResponse,
    )
    def get_student_grades(
        course_code: str,
        student_email: str,
        instructor: CurrentInstructor,
        db: DbSession,
    ):
        """One student's grades in a course the caller teaches."""
        policy = GradeUpdatePolicy(db)
        student, record, course = policy.get_student_grades(
            instructor.email, role, course_code, student_email
        )
        profile = student.student_profile
        return StudentGradesResponse(
            student_code=profile.student_code if profile else None,
            email=student.email,
            current_semester=profile.current_semester if profile else None,
            department=profile.department if profile else None,
            has_registered_courses=profile.has_registered_courses if profile else False,
            courses=[CourseGradesEntry.from_pair(record, course)],
        )

    @router.put("/me/courses/{course_code}/grades", response_model=GradeUpdateResponse)
    def edit_student_grades(
        course_code: str,
        request: GradeUpdate,
        instructor: CurrentInstructor,
        db: DbSession,
        client_ip: ClientIp,
    ):
        """
        Update a student's grade components.
        Omitted components keep their value; the total is recomputed.
        """
        policy = GradeUpdatePolicy(db)
        record = policy.update_grade(instructor.email, role, course_code, request)

        # Audit log
        audit = AuditService(db)
        audit.log(
            action=AuditAction.GRADE_UPDATED,
            resource_type="grade_record",
            resource_id=str(record.id),
            account_id=instructor.id,
            description=f"Grades of {request.student_email} in {course_code} updated",
            metadata=request.model_dump(exclude_none=True),
            ip_address=client_ip,
        )

        return GradeUpdateResponse(
            student_email=request.student_email,
            course_code=course_code,
            mid_term=record.mid_term,
            final_exam=record.final_exam,
            quizzes=record.quizzes,
            practical=record.practical,
            total=record.total,
        )

    @router.get("/me/courses/{course_code}/grade-sheet")
    def download_grade_sheet(
        course_code: str,
        instructor: CurrentInstructor,
        db: DbSession,
        client_ip: ClientIp,
    ):
        """Download the course grade sheet as an Excel file."""
        service = GradeSheetService(db)
        content = service.build_course_sheet(instructor.email, role, course_code)

        # Audit log
        audit = AuditService(db)
        audit.log(
            action=AuditAction.GRADE_SHEET_EXPORTED,
            resource_type="course",
            resource_id=course_code,
            account_id=instructor.id,
            ip_address=client_ip,
        )

        return StreamingResponse(
            BytesIO(content),
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f"attachment; filename={course_code}_grades.xlsx"},
        )

    return router


doctors_router = build_instructor_router(InstructorRole.DOCTOR)
assistants_router = build_instructor_router(InstructorRole.ASSISTANT)
