"""Account and student profile models."""

import enum

from sqlalchemy import BigInteger, Boolean, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gradebook.core.database import Base
from gradebook.models.base import IDMixin, TimestampMixin


class AccountRole(str, enum.Enum):
    """Role tag of an account."""

    STUDENT = "STUDENT"
    DOCTOR = "DOCTOR"
    ASSISTANT = "ASSISTANT"
    EMPLOYEE = "EMPLOYEE"


class Account(Base, IDMixin, TimestampMixin):
    """Account shared by every person in the university."""

    __tablename__ = "accounts"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    backup_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    faculty: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    role: Mapped[AccountRole] = mapped_column(Enum(AccountRole), nullable=False, index=True)

    # Relationships
    student_profile: Mapped["StudentProfile | None"] = relationship(
        "StudentProfile",
        back_populates="account",
        uselist=False,
        lazy="selectin",
        passive_deletes=True,
    )
    grade_records: Mapped[list["GradeRecord"]] = relationship(
        "GradeRecord",
        back_populates="student",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email={self.email}, role={self.role})>"


class StudentProfile(Base):
    """Student-only fields, one row per student account."""

    __tablename__ = "student_profiles"

    account_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
        autoincrement=False,
    )
    student_code: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    current_semester: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_credit_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    has_registered_courses: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    account: Mapped["Account"] = relationship("Account", back_populates="student_profile")

    def __repr__(self) -> str:
        return f"<StudentProfile(account_id={self.account_id}, semester={self.current_semester})>"
