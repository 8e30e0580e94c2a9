"""Petition schemas."""

from datetime import datetime

from pydantic import Field

from gradebook.schemas.common import BaseSchema


class PetitionCreate(BaseSchema):
    """Petition submission."""

    course_name: str = Field(..., min_length=1, max_length=255)
    text: str = Field(..., min_length=1)


class PetitionResponse(BaseSchema):
    """Stored petition."""

    id: int
    email: str
    course_name: str
    text: str
    submitted_at: datetime
