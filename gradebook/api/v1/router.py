"""Main API router aggregating all module routers."""

from fastapi import APIRouter

from gradebook.api.v1.endpoints import instructors, students
from gradebook.schemas.common import ErrorResponse

# Every error raised through AppException shares this envelope
ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired token"},
    403: {"model": ErrorResponse, "description": "Role not allowed or course not taught"},
    404: {"model": ErrorResponse, "description": "Student, course or grade record not found"},
    409: {"model": ErrorResponse, "description": "Student state does not allow the operation"},
    422: {"model": ErrorResponse, "description": "Request or grade validation failed"},
}

api_router = APIRouter(responses=ERROR_RESPONSES)

# Students (student role)
api_router.include_router(
    students.router,
    prefix="/students",
    tags=["Students"],
)

# Doctors (doctor role)
api_router.include_router(
    instructors.doctors_router,
    prefix="/doctors",
    tags=["Doctors"],
)

# Assistants (assistant role)
api_router.include_router(
    instructors.assistants_router,
    prefix="/assistants",
    tags=["Assistants"],
)
