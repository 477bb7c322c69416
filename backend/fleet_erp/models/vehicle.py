from __future__ import annotations

from uuid import UUID as UUIDType

from sqlalchemy import ForeignKey, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleet_erp.core.enums import VehicleStatus
from fleet_erp.db.base import Base
from fleet_erp.db.types import db_enum
from fleet_erp.models.mixins import SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin


class Vehicle(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "vehicles"
    __table_args__ = (
        Index("ix_vehicles_branch_id", "branch_id"),
        Index("ix_vehicles_created_at", "created_at"),
        # Soft-deleted vehicles release their plate.
        Index("uq_vehicles_plate_active", "plate", unique=True, postgresql_where=text("deleted_at IS NULL")),
    )

    plate: Mapped[str] = mapped_column(String(16), nullable=False)
    brand: Mapped[str | None] = mapped_column(String(64), nullable=True)
    model: Mapped[str | None] = mapped_column(String(64), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    current_km: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[VehicleStatus] = mapped_column(
        db_enum(VehicleStatus, "vehicle_status"),
        nullable=False,
        default=VehicleStatus.ACTIVE,
        server_default=VehicleStatus.ACTIVE.value,
    )
    branch_id: Mapped[UUIDType] = mapped_column(Uuid, ForeignKey("branches.id"), nullable=False)

    branch = relationship("Branch", back_populates="vehicles")
