from fastapi import APIRouter

from fleet_erp.api.v1.endpoints import audit_logs, permissions, vehicles

api_router = APIRouter()
api_router.include_router(permissions.router)
api_router.include_router(vehicles.router)
api_router.include_router(audit_logs.router)
