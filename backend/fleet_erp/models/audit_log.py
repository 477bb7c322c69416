from __future__ import annotations

from datetime import datetime
from uuid import UUID as UUIDType

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleet_erp.core.enums import AuditAction
from fleet_erp.db.base import Base
from fleet_erp.db.types import db_enum
from fleet_erp.models.mixins import UUIDPrimaryKeyMixin


class AuditLog(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_created_at", "created_at"),
        Index("ix_audit_logs_entity", "entity", "entity_id"),
    )

    user_id: Mapped[UUIDType | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    branch_id: Mapped[UUIDType | None] = mapped_column(Uuid, ForeignKey("branches.id"), nullable=True)
    action: Mapped[AuditAction] = mapped_column(db_enum(AuditAction, "audit_action", native=False), nullable=False)
    entity: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    changes_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", back_populates="audit_logs")
