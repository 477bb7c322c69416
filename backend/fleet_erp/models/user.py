from __future__ import annotations

from uuid import UUID as UUIDType

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleet_erp.db.base import Base
from fleet_erp.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    role_id: Mapped[UUIDType] = mapped_column(Uuid, ForeignKey("roles.id"), nullable=False)
    branch_id: Mapped[UUIDType | None] = mapped_column(Uuid, ForeignKey("branches.id"), nullable=True)

    role = relationship("Role", back_populates="users")
    branch = relationship("Branch", back_populates="users")
    audit_logs = relationship("AuditLog", back_populates="user")
