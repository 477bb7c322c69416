from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_erp.api.deps import get_app_settings, get_db_session, require_permission
from fleet_erp.core.config import Settings
from fleet_erp.core.enums import VehicleStatus
from fleet_erp.core.responses import success_response
from fleet_erp.schemas.common import ListQuery
from fleet_erp.schemas.vehicle import VehicleCreate, VehicleKmUpdate, VehicleRead, VehicleStatusUpdate, VehicleUpdate
from fleet_erp.services.permissions import Principal
from fleet_erp.services.vehicles import VehicleService

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


def _serialize(vehicle) -> dict:
    return VehicleRead.model_validate(vehicle).model_dump(mode="json")


@router.get("")
async def list_vehicles(
    request: Request,
    query: ListQuery = Depends(),
    status_filter: VehicleStatus | None = Query(default=None, alias="status"),
    q: str | None = None,
    branch_id: UUID | None = None,
    principal: Principal = Depends(require_permission("vehicles.view")),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
):
    items, meta = await VehicleService(session).list_vehicles(
        principal,
        query.pagination,
        date_filter=query.date_filter("created_at"),
        status=status_filter,
        q=q,
        branch_id=branch_id,
        default_limit=settings.default_page_limit,
    )
    return success_response(data=[_serialize(item) for item in items], request=request, pagination=meta)


@router.get("/{vehicle_id}")
async def get_vehicle(
    vehicle_id: UUID,
    request: Request,
    principal: Principal = Depends(require_permission("vehicles.view")),
    session: AsyncSession = Depends(get_db_session),
):
    item = await VehicleService(session).get_vehicle(principal, vehicle_id)
    return success_response(data=_serialize(item), request=request)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    payload: VehicleCreate,
    request: Request,
    principal: Principal = Depends(require_permission("vehicles.create")),
    session: AsyncSession = Depends(get_db_session),
):
    item = await VehicleService(session).create_vehicle(principal, payload)
    return success_response(data=_serialize(item), request=request)


@router.patch("/{vehicle_id}")
async def update_vehicle(
    vehicle_id: UUID,
    payload: VehicleUpdate,
    request: Request,
    principal: Principal = Depends(require_permission("vehicles.update")),
    session: AsyncSession = Depends(get_db_session),
):
    item = await VehicleService(session).update_vehicle(principal, vehicle_id, payload)
    return success_response(data=_serialize(item), request=request)


@router.patch("/{vehicle_id}/status")
async def change_vehicle_status(
    vehicle_id: UUID,
    payload: VehicleStatusUpdate,
    request: Request,
    principal: Principal = Depends(require_permission("vehicles.update-status")),
    session: AsyncSession = Depends(get_db_session),
):
    item = await VehicleService(session).change_status(principal, vehicle_id, payload.status)
    return success_response(data=_serialize(item), request=request)


@router.patch("/{vehicle_id}/km")
async def update_vehicle_km(
    vehicle_id: UUID,
    payload: VehicleKmUpdate,
    request: Request,
    principal: Principal = Depends(require_permission("vehicles.update-km")),
    session: AsyncSession = Depends(get_db_session),
):
    item = await VehicleService(session).update_km(principal, vehicle_id, payload.current_km)
    return success_response(data=_serialize(item), request=request)


@router.delete("/{vehicle_id}")
async def delete_vehicle(
    vehicle_id: UUID,
    request: Request,
    principal: Principal = Depends(require_permission("vehicles.delete")),
    session: AsyncSession = Depends(get_db_session),
):
    await VehicleService(session).delete_vehicle(principal, vehicle_id)
    return success_response(data={"ok": True}, request=request)
