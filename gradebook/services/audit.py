"""Audit logging service."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from gradebook.models.audit import AuditAction, AuditLog


class AuditService:
    """Audit logging service - append-only."""

    def __init__(self, db: Session):
        self.db = db

    def log(
        self,
        action: AuditAction,
        resource_type: str,
        resource_id: str | None = None,
        account_id: int | None = None,
        description: str | None = None,
        metadata: dict[str, Any] | None = None,
        ip_address: str | None = None,
    ) -> AuditLog:
        """Create an audit log entry."""
        log = AuditLog(
            account_id=account_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            description=description,
            extra_data=metadata,
            ip_address=ip_address,
        )
        self.db.add(log)
        self.db.flush()
        return log

    def list_logs(
        self,
        action: AuditAction | None = None,
        resource_id: str | None = None,
    ) -> list[AuditLog]:
        """List audit logs, newest first."""
        query = select(AuditLog)
        if action:
            query = query.where(AuditLog.action == action)
        if resource_id:
            query = query.where(AuditLog.resource_id == resource_id)
        query = query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        result = self.db.execute(query)
        return list(result.scalars().all())
