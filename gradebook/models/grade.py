"""Grade record model."""

from sqlalchemy import BigInteger, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gradebook.core.database import Base
from gradebook.models.base import IDMixin, TimestampMixin


class GradeRecord(Base, IDMixin, TimestampMixin):
    """Grade components of one student in one course.

    ``total`` is derived from the components and is only written by the
    grade update policy.
    """

    __tablename__ = "grade_records"

    student_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    course_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mid_term: Mapped[float | None] = mapped_column(Float, nullable=True)
    final_exam: Mapped[float | None] = mapped_column(Float, nullable=True)
    quizzes: Mapped[float | None] = mapped_column(Float, nullable=True)
    practical: Mapped[float | None] = mapped_column(Float, nullable=True)
    total: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Relationships
    student: Mapped["Account"] = relationship(
        "Account",
        back_populates="grade_records",
        lazy="selectin",
    )
    course: Mapped["Course"] = relationship(
        "Course",
        back_populates="grade_records",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_grade_student_course"),
    )

    @classmethod
    def zeroed(cls, student_id: int, course_id: int) -> "GradeRecord":
        """New record as created at registration time."""
        return cls(
            student_id=student_id,
            course_id=course_id,
            mid_term=0.0,
            final_exam=0.0,
            quizzes=0.0,
            practical=0.0,
            total=0.0,
        )

    def __repr__(self) -> str:
        return f"<GradeRecord(student_id={self.student_id}, course_id={self.course_id}, total={self.total})>"
