"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

Creates accounts, student profiles, departments, courses, the course
relation tables, grade records, petitions and the audit log.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

account_role = sa.Enum("STUDENT", "DOCTOR", "ASSISTANT", "EMPLOYEE", name="accountrole")
instructor_role = sa.Enum("DOCTOR", "ASSISTANT", name="instructorrole")
audit_action = sa.Enum(
    "GRADE_UPDATED",
    "COURSES_REGISTERED",
    "REGISTRATION_COMPLETED",
    "PETITION_SUBMITTED",
    "GRADE_SHEET_EXPORTED",
    name="auditaction",
)

pk = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", pk, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("backup_email", sa.String(255), nullable=True),
        sa.Column("faculty", sa.String(255), nullable=True),
        sa.Column("role", account_role, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)
    op.create_index("ix_accounts_faculty", "accounts", ["faculty"])
    op.create_index("ix_accounts_role", "accounts", ["role"])

    op.create_table(
        "student_profiles",
        sa.Column(
            "account_id",
            sa.BigInteger(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            primary_key=True,
            autoincrement=False,
        ),
        sa.Column("student_code", sa.String(50), nullable=True, unique=True),
        sa.Column("department", sa.String(255), nullable=True),
        sa.Column("current_semester", sa.Integer(), nullable=True),
        sa.Column("total_credit_hours", sa.Integer(), nullable=True),
        sa.Column("has_registered_courses", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        "departments",
        sa.Column("id", pk, primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("faculty", sa.String(255), nullable=True),
    )
    op.create_index("ix_departments_name", "departments", ["name"])

    op.create_table(
        "courses",
        sa.Column("id", pk, primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("credit_hours", sa.Integer(), nullable=True),
        sa.Column("faculty", sa.String(255), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.Column("has_practical_component", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_assistants", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("max_mid_term", sa.Float(), nullable=True),
        sa.Column("max_final_exam", sa.Float(), nullable=True),
        sa.Column("max_quizzes", sa.Float(), nullable=True),
        sa.Column("max_practical", sa.Float(), nullable=True),
        sa.Column("max_total", sa.Float(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("faculty", "code", name="uq_course_faculty_code"),
    )
    op.create_index("ix_courses_code", "courses", ["code"])
    op.create_index("ix_courses_faculty", "courses", ["faculty"])
    op.create_index("ix_courses_semester", "courses", ["semester"])

    op.create_table(
        "course_departments",
        sa.Column("id", pk, primary_key=True, autoincrement=True),
        sa.Column("course_id", sa.BigInteger(), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("department_id", sa.BigInteger(), sa.ForeignKey("departments.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("course_id", "department_id", name="uq_course_department"),
    )
    op.create_index("ix_course_departments_course_id", "course_departments", ["course_id"])
    op.create_index("ix_course_departments_department_id", "course_departments", ["department_id"])

    op.create_table(
        "course_instructors",
        sa.Column("id", pk, primary_key=True, autoincrement=True),
        sa.Column("course_id", sa.BigInteger(), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("account_id", sa.BigInteger(), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role", instructor_role, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("course_id", "account_id", "role", name="uq_course_instructor_role"),
    )
    op.create_index("ix_course_instructors_course_id", "course_instructors", ["course_id"])
    op.create_index("ix_course_instructors_account_id", "course_instructors", ["account_id"])

    op.create_table(
        "grade_records",
        sa.Column("id", pk, primary_key=True, autoincrement=True),
        sa.Column("student_id", sa.BigInteger(), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("course_id", sa.BigInteger(), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("mid_term", sa.Float(), nullable=True),
        sa.Column("final_exam", sa.Float(), nullable=True),
        sa.Column("quizzes", sa.Float(), nullable=True),
        sa.Column("practical", sa.Float(), nullable=True),
        sa.Column("total", sa.Float(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("student_id", "course_id", name="uq_grade_student_course"),
    )
    op.create_index("ix_grade_records_student_id", "grade_records", ["student_id"])
    op.create_index("ix_grade_records_course_id", "grade_records", ["course_id"])

    op.create_table(
        "petitions",
        sa.Column("id", pk, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("course_name", sa.String(255), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_petitions_email", "petitions", ["email"])

    op.create_table(
        "audit_logs",
        sa.Column("id", pk, primary_key=True, autoincrement=True),
        sa.Column("account_id", sa.BigInteger(), sa.ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True),
        sa.Column("action", audit_action, nullable=False),
        sa.Column("resource_type", sa.String(100), nullable=False),
        sa.Column("resource_id", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("extra_data", sa.JSON().with_variant(postgresql.JSONB(), "postgresql"), nullable=True),
        sa.Column("ip_address", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_logs_account_id", "audit_logs", ["account_id"])
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("petitions")
    op.drop_table("grade_records")
    op.drop_table("course_instructors")
    op.drop_table("course_departments")
    op.drop_table("courses")
    op.drop_table("departments")
    op.drop_table("student_profiles")
    op.drop_table("accounts")

    bind = op.get_bind()
    audit_action.drop(bind, checkfirst=True)
    instructor_role.drop(bind, checkfirst=True)
    account_role.drop(bind, checkfirst=True)
