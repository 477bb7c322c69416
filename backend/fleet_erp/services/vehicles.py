from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_erp.core.enums import AuditAction, VehicleStatus
from fleet_erp.core.exceptions import ConflictError, ValidationAppError
from fleet_erp.models import Vehicle
from fleet_erp.repositories.vehicle import VehicleRepository
from fleet_erp.schemas.vehicle import VehicleCreate, VehicleUpdate
from fleet_erp.services.audit import AuditService
from fleet_erp.services.permissions import Principal
from fleet_erp.utils.branch_access import resolve_branch_id, validate_branch_access
from fleet_erp.utils.dates import DateBounds
from fleet_erp.utils.pagination import DEFAULT_LIMIT, PaginationMeta, PaginationRequest, compute_pagination, compute_pagination_meta
from fleet_erp.utils.validation import require_not_deleted

logger = structlog.get_logger(__name__)

ENTITY = "vehicle"


class VehicleService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.vehicles = VehicleRepository(session)
        self.audit = AuditService(session)

    async def list_vehicles(
        self,
        principal: Principal,
        pagination: PaginationRequest,
        *,
        date_filter: Mapping[str, DateBounds] | None = None,
        status: VehicleStatus | None = None,
        q: str | None = None,
        branch_id: UUID | None = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> tuple[Sequence[Vehicle], PaginationMeta]:
        validate_branch_access(principal, requested_branch_id=branch_id)
        scope = branch_id if principal.is_admin else principal.branch_id

        bounds = compute_pagination(pagination, default_limit)
        items = await self.vehicles.list_page(bounds, branch_id=scope, status=status, q=q, date_filter=date_filter)
        total = await self.vehicles.count(branch_id=scope, status=status, q=q, date_filter=date_filter)
        return items, compute_pagination_meta(total, bounds.page, bounds.limit)

    async def get_vehicle(self, principal: Principal, vehicle_id: UUID) -> Vehicle:
        vehicle = require_not_deleted(await self.vehicles.get_by_id(vehicle_id), "Vehicle")
        validate_branch_access(principal, entity_branch_id=vehicle.branch_id)
        return vehicle

    async def _ensure_plate_free(self, plate: str, *, exclude_id: UUID | None = None) -> None:
        existing = await self.vehicles.get_by_plate(plate)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError("Plate already registered", details={"plate": plate})

    async def create_vehicle(self, principal: Principal, payload: VehicleCreate) -> Vehicle:
        branch_id = resolve_branch_id(payload.branch_id, principal)
        validate_branch_access(principal, requested_branch_id=payload.branch_id)
        await self._ensure_plate_free(payload.plate)

        vehicle = await self.vehicles.create(
            Vehicle(
                plate=payload.plate,
                brand=payload.brand,
                model=payload.model,
                year=payload.year,
                color=payload.color,
                current_km=payload.current_km,
                status=payload.status,
                branch_id=branch_id,
            )
        )
        await self.audit.record(
            principal,
            action=AuditAction.CREATE,
            entity=ENTITY,
            entity_id=vehicle.id,
            branch_id=branch_id,
            changes=payload.model_dump(mode="json", exclude={"branch_id"}),
        )
        await self.session.commit()
        logger.info("Vehicle created", vehicle_id=str(vehicle.id), plate=vehicle.plate)
        return vehicle

    async def update_vehicle(self, principal: Principal, vehicle_id: UUID, payload: VehicleUpdate) -> Vehicle:
        vehicle = await self.get_vehicle(principal, vehicle_id)
        changes = payload.model_dump(exclude_unset=True)
        if "plate" in changes and changes["plate"] is None:
            changes.pop("plate")
        if "plate" in changes and changes["plate"] != vehicle.plate:
            await self._ensure_plate_free(changes["plate"], exclude_id=vehicle.id)

        for key, value in changes.items():
            setattr(vehicle, key, value)
        await self.session.flush()
        await self.audit.record(
            principal,
            action=AuditAction.UPDATE,
            entity=ENTITY,
            entity_id=vehicle.id,
            branch_id=vehicle.branch_id,
            changes=changes,
        )
        await self.session.commit()
        logger.info("Vehicle updated", vehicle_id=str(vehicle.id), fields=sorted(changes))
        return vehicle

    async def change_status(self, principal: Principal, vehicle_id: UUID, status: VehicleStatus) -> Vehicle:
        vehicle = await self.get_vehicle(principal, vehicle_id)
        previous = vehicle.status
        vehicle.status = status
        await self.session.flush()
        await self.audit.record(
            principal,
            action=AuditAction.UPDATE,
            entity=ENTITY,
            entity_id=vehicle.id,
            branch_id=vehicle.branch_id,
            changes={"status": {"from": VehicleStatus(previous).value, "to": status.value}},
        )
        await self.session.commit()
        return vehicle

    async def update_km(self, principal: Principal, vehicle_id: UUID, current_km: int) -> Vehicle:
        vehicle = await self.get_vehicle(principal, vehicle_id)
        if current_km < vehicle.current_km:
            raise ValidationAppError(
                "Mileage cannot decrease",
                details={"current_km": vehicle.current_km, "requested_km": current_km},
            )
        previous = vehicle.current_km
        vehicle.current_km = current_km
        await self.session.flush()
        await self.audit.record(
            principal,
            action=AuditAction.UPDATE,
            entity=ENTITY,
            entity_id=vehicle.id,
            branch_id=vehicle.branch_id,
            changes={"current_km": {"from": previous, "to": current_km}},
        )
        await self.session.commit()
        return vehicle

    async def delete_vehicle(self, principal: Principal, vehicle_id: UUID) -> None:
        vehicle = await self.get_vehicle(principal, vehicle_id)
        vehicle.deleted_at = datetime.now(timezone.utc)
        await self.session.flush()
        await self.audit.record(
            principal,
            action=AuditAction.DELETE,
            entity=ENTITY,
            entity_id=vehicle.id,
            branch_id=vehicle.branch_id,
        )
        await self.session.commit()
        logger.info("Vehicle deleted", vehicle_id=str(vehicle.id))
