from __future__ import annotations

from collections.abc import Mapping, Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_erp.core.enums import AuditAction
from fleet_erp.db.filters import date_range_conditions
from fleet_erp.models import AuditLog
from fleet_erp.utils.dates import DateBounds
from fleet_erp.utils.pagination import PaginationResult


class AuditLogRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _conditions(
        self,
        *,
        branch_id: UUID | None,
        user_id: UUID | None,
        entity: str | None,
        action: AuditAction | None,
        date_filter: Mapping[str, DateBounds] | None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if branch_id is not None:
            conditions.append(AuditLog.branch_id == branch_id)
        if user_id is not None:
            conditions.append(AuditLog.user_id == user_id)
        if entity:
            conditions.append(AuditLog.entity == entity)
        if action is not None:
            conditions.append(AuditLog.action == action)
        conditions.extend(date_range_conditions(AuditLog, date_filter))
        return conditions

    async def list_page(
        self,
        bounds: PaginationResult,
        *,
        branch_id: UUID | None = None,
        user_id: UUID | None = None,
        entity: str | None = None,
        action: AuditAction | None = None,
        date_filter: Mapping[str, DateBounds] | None = None,
    ) -> Sequence[AuditLog]:
        conditions = self._conditions(branch_id=branch_id, user_id=user_id, entity=entity, action=action, date_filter=date_filter)
        stmt = select(AuditLog).where(*conditions).order_by(AuditLog.created_at.desc()).offset(bounds.skip).limit(bounds.take)
        result = await self.session.scalars(stmt)
        return result.all()

    async def count(
        self,
        *,
        branch_id: UUID | None = None,
        user_id: UUID | None = None,
        entity: str | None = None,
        action: AuditAction | None = None,
        date_filter: Mapping[str, DateBounds] | None = None,
    ) -> int:
        conditions = self._conditions(branch_id=branch_id, user_id=user_id, entity=entity, action=action, date_filter=date_filter)
        value = await self.session.scalar(select(func.count(AuditLog.id)).where(*conditions))
        return int(value or 0)

    async def create(self, entry: AuditLog) -> AuditLog:
        self.session.add(entry)
        await self.session.flush()
        return entry
