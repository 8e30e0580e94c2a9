"""Petition model."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gradebook.core.database import Base
from gradebook.models.base import IDMixin


class Petition(Base, IDMixin):
    """Free-text petition a student files about a course."""

    __tablename__ = "petitions"

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    course_name: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Petition(id={self.id}, email={self.email}, course={self.course_name})>"
