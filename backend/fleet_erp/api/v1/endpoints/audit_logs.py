from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_erp.api.deps import get_app_settings, get_db_session, require_permission
from fleet_erp.core.config import Settings
from fleet_erp.core.enums import AuditAction
from fleet_erp.core.responses import success_response
from fleet_erp.schemas.audit import AuditLogRead
from fleet_erp.schemas.common import ListQuery
from fleet_erp.services.audit import AuditService
from fleet_erp.services.permissions import Principal

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("")
async def list_audit_logs(
    request: Request,
    query: ListQuery = Depends(),
    entity: str | None = None,
    action: AuditAction | None = None,
    user_id: UUID | None = None,
    principal: Principal = Depends(require_permission("audit.view")),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
):
    items, meta = await AuditService(session).list_logs(
        principal,
        query.pagination,
        date_filter=query.date_filter("created_at"),
        entity=entity,
        action=action,
        user_id=user_id,
        default_limit=settings.default_page_limit,
    )
    data = [AuditLogRead.model_validate(item).model_dump(mode="json") for item in items]
    return success_response(data=data, request=request, pagination=meta)
