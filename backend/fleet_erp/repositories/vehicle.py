from __future__ import annotations

from collections.abc import Mapping, Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_erp.core.enums import VehicleStatus
from fleet_erp.db.filters import date_range_conditions
from fleet_erp.models import Vehicle
from fleet_erp.utils.dates import DateBounds
from fleet_erp.utils.pagination import PaginationResult


class VehicleRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _conditions(
        self,
        *,
        branch_id: UUID | None,
        status: VehicleStatus | None,
        q: str | None,
        date_filter: Mapping[str, DateBounds] | None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = [Vehicle.deleted_at.is_(None)]
        if branch_id is not None:
            conditions.append(Vehicle.branch_id == branch_id)
        if status is not None:
            conditions.append(Vehicle.status == status)
        if q:
            pattern = f"%{q.strip().lower()}%"
            conditions.append(
                or_(
                    func.lower(Vehicle.plate).like(pattern),
                    func.lower(Vehicle.brand).like(pattern),
                    func.lower(Vehicle.model).like(pattern),
                )
            )
        conditions.extend(date_range_conditions(Vehicle, date_filter))
        return conditions

    async def list_page(
        self,
        bounds: PaginationResult,
        *,
        branch_id: UUID | None = None,
        status: VehicleStatus | None = None,
        q: str | None = None,
        date_filter: Mapping[str, DateBounds] | None = None,
    ) -> Sequence[Vehicle]:
        conditions = self._conditions(branch_id=branch_id, status=status, q=q, date_filter=date_filter)
        stmt = (
            select(Vehicle)
            .where(*conditions)
            .order_by(Vehicle.created_at.desc(), Vehicle.plate.asc())
            .offset(bounds.skip)
            .limit(bounds.take)
        )
        result = await self.session.scalars(stmt)
        return result.all()

    async def count(
        self,
        *,
        branch_id: UUID | None = None,
        status: VehicleStatus | None = None,
        q: str | None = None,
        date_filter: Mapping[str, DateBounds] | None = None,
    ) -> int:
        conditions = self._conditions(branch_id=branch_id, status=status, q=q, date_filter=date_filter)
        value = await self.session.scalar(select(func.count(Vehicle.id)).where(*conditions))
        return int(value or 0)

    async def get_by_id(self, vehicle_id: UUID) -> Vehicle | None:
        return await self.session.scalar(select(Vehicle).where(Vehicle.id == vehicle_id))

    async def get_by_plate(self, plate: str) -> Vehicle | None:
        return await self.session.scalar(select(Vehicle).where(Vehicle.plate == plate, Vehicle.deleted_at.is_(None)))

    async def create(self, vehicle: Vehicle) -> Vehicle:
        self.session.add(vehicle)
        await self.session.flush()
        return vehicle
