from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_erp.core.enums import AuditAction
from fleet_erp.models import AuditLog
from fleet_erp.repositories.audit_log import AuditLogRepository
from fleet_erp.services.permissions import Principal
from fleet_erp.utils.branch_access import validate_branch_access
from fleet_erp.utils.dates import DateBounds
from fleet_erp.utils.pagination import DEFAULT_LIMIT, PaginationMeta, PaginationRequest, compute_pagination, compute_pagination_meta


class AuditService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.logs = AuditLogRepository(session)

    async def record(
        self,
        principal: Principal | None,
        *,
        action: AuditAction,
        entity: str,
        entity_id: Any = None,
        branch_id: UUID | None = None,
        changes: Mapping[str, Any] | None = None,
    ) -> AuditLog:
        entry = AuditLog(
            user_id=principal.user_id if principal else None,
            branch_id=branch_id,
            action=action,
            entity=entity,
            entity_id=str(entity_id) if entity_id is not None else None,
            changes_json=dict(changes) if changes else None,
        )
        return await self.logs.create(entry)

    async def list_logs(
        self,
        principal: Principal,
        pagination: PaginationRequest,
        *,
        date_filter: Mapping[str, DateBounds] | None = None,
        entity: str | None = None,
        action: AuditAction | None = None,
        user_id: UUID | None = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> tuple[Sequence[AuditLog], PaginationMeta]:
        validate_branch_access(principal)
        bounds = compute_pagination(pagination, default_limit)
        branch_id = None if principal.is_admin else principal.branch_id
        filters = {
            "branch_id": branch_id,
            "user_id": user_id,
            "entity": entity,
            "action": action,
            "date_filter": date_filter,
        }
        items = await self.logs.list_page(bounds, **filters)
        total = await self.logs.count(**filters)
        return items, compute_pagination_meta(total, bounds.page, bounds.limit)
