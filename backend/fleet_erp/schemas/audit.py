from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from fleet_erp.core.enums import AuditAction
from fleet_erp.schemas.common import BaseReadModel


class AuditLogRead(BaseReadModel):
    id: UUID
    user_id: UUID | None = None
    branch_id: UUID | None = None
    action: AuditAction
    entity: str
    entity_id: str | None = None
    changes_json: dict[str, Any] | None = None
    created_at: datetime
