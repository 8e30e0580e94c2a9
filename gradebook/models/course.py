"""Course, department and course relation models."""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gradebook.core.database import Base
from gradebook.models.base import IDMixin, TimestampMixin


class InstructorRole(str, enum.Enum):
    """Teaching role of an account on a course."""

    DOCTOR = "DOCTOR"
    ASSISTANT = "ASSISTANT"


class Department(Base, IDMixin):
    """Academic department within a faculty."""

    __tablename__ = "departments"

    code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    faculty: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Department(id={self.id}, name={self.name})>"


class Course(Base, IDMixin, TimestampMixin):
    """Course offered by a faculty, with the maximum score of each component."""

    __tablename__ = "courses"

    code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    credit_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    faculty: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    semester: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    has_practical_component: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    has_assistants: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Component maximums
    max_mid_term: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_final_exam: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_quizzes: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_practical: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_total: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Relationships
    departments: Mapped[list["Department"]] = relationship(
        "Department",
        secondary="course_departments",
        lazy="selectin",
    )
    grade_records: Mapped[list["GradeRecord"]] = relationship(
        "GradeRecord",
        back_populates="course",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("faculty", "code", name="uq_course_faculty_code"),
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, code={self.code}, faculty={self.faculty})>"


class CourseDepartment(Base, IDMixin):
    """Junction table linking courses to the departments that offer them."""

    __tablename__ = "course_departments"

    course_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    department_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("course_id", "department_id", name="uq_course_department"),
    )

    def __repr__(self) -> str:
        return f"<CourseDepartment(course_id={self.course_id}, department_id={self.department_id})>"


class CourseInstructor(Base, IDMixin):
    """Junction table assigning doctors and assistants to the courses they teach."""

    __tablename__ = "course_instructors"

    course_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    account_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[InstructorRole] = mapped_column(Enum(InstructorRole), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("course_id", "account_id", "role", name="uq_course_instructor_role"),
    )

    def __repr__(self) -> str:
        return f"<CourseInstructor(course_id={self.course_id}, account_id={self.account_id}, role={self.role})>"
