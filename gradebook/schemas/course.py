"""Course schemas."""

from pydantic import field_validator

from gradebook.schemas.common import BaseSchema


class CourseResponse(BaseSchema):
    """Course with its component maximums."""

    code: str
    name: str
    credit_hours: int | None = None
    faculty: str
    semester: int
    has_practical_component: bool
    has_assistants: bool
    max_mid_term: float | None = None
    max_final_exam: float | None = None
    max_quizzes: float | None = None
    max_practical: float | None = None
    max_total: float | None = None
    departments: list[str] = []

    @field_validator("departments", mode="before")
    @classmethod
    def department_names(cls, v):
        """Accept Department rows and keep only their names."""
        return [getattr(d, "name", d) for d in v or []]
