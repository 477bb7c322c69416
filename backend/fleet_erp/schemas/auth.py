from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class PermissionDefinitionRead(BaseModel):
    name: str
    description: str
    module: str
    action: str


class PermissionModuleRead(BaseModel):
    module: str
    module_name: str
    permissions: list[PermissionDefinitionRead]


class MyPermissionsRead(BaseModel):
    user_id: UUID
    role: str
    is_admin: bool
    branch_id: UUID | None = None
    permissions: list[str]
    modules: list[str]
