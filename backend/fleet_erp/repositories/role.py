from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_erp.core.permissions import PermissionDefinition
from fleet_erp.models import Permission, Role, RolePermission


class RoleRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def sync_permissions(self, catalog: Iterable[PermissionDefinition]) -> int:
        """Insert catalog permissions missing from the table; returns how many were added."""
        existing = set((await self.session.scalars(select(Permission.name))).all())
        added = 0
        for definition in catalog:
            if definition.name in existing:
                continue
            self.session.add(
                Permission(
                    name=definition.name,
                    module=definition.module,
                    action=definition.action,
                    description=definition.description,
                )
            )
            added += 1
        await self.session.flush()
        return added

    async def create_role(self, name: str, permission_names: Iterable[str] = (), description: str | None = None) -> Role:
        names = list(dict.fromkeys(permission_names))
        permissions = []
        if names:
            permissions = list((await self.session.scalars(select(Permission).where(Permission.name.in_(names)))).all())
        role = Role(name=name, description=description)
        role.permissions = [RolePermission(permission=item) for item in permissions]
        self.session.add(role)
        await self.session.flush()
        return role
