"""Audit log model."""

import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, BigInteger, DateTime, Enum, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from gradebook.core.database import Base
from gradebook.models.base import IDMixin


class AuditAction(str, enum.Enum):
    """Audit action types."""

    GRADE_UPDATED = "GRADE_UPDATED"
    COURSES_REGISTERED = "COURSES_REGISTERED"
    REGISTRATION_COMPLETED = "REGISTRATION_COMPLETED"
    PETITION_SUBMITTED = "PETITION_SUBMITTED"
    GRADE_SHEET_EXPORTED = "GRADE_SHEET_EXPORTED"


class AuditLog(Base, IDMixin):
    """Append-only audit log model."""

    __tablename__ = "audit_logs"

    # Actor
    account_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Action details
    action: Mapped[AuditAction] = mapped_column(
        Enum(AuditAction),
        nullable=False,
        index=True,
    )
    resource_type: Mapped[str] = mapped_column(String(100), nullable=False)
    resource_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Additional context
    extra_data: Mapped[dict | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=True,
    )

    # Request context
    ip_address: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Timestamp (append-only, no updated_at)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<AuditLog(id={self.id}, action={self.action})>"
