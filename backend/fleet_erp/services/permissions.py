from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as resolved from the bearer token and the database."""

    user_id: UUID
    email: str
    name: str
    role: str
    branch_id: UUID | None = None
    permissions: tuple[str, ...] = ()
    admin_role_name: str = "ADMIN"

    @property
    def is_admin(self) -> bool:
        return self.role.strip().upper() == self.admin_role_name.strip().upper()


class PermissionEvaluator:
    """Answers permission queries over a flat list of ``module.action`` strings.

    An admin satisfies every query without the list being inspected.
    """

    def __init__(self, permissions: Iterable[str] = (), is_admin: bool = False) -> None:
        self._permissions = tuple(permissions or ())
        self._lookup = frozenset(self._permissions)
        self._is_admin = bool(is_admin)

    @classmethod
    def for_principal(cls, principal: Principal) -> "PermissionEvaluator":
        return cls(principal.permissions, is_admin=principal.is_admin)

    @property
    def permissions(self) -> tuple[str, ...]:
        return self._permissions

    @property
    def is_admin(self) -> bool:
        return self._is_admin

    def has_permission(self, permission: str) -> bool:
        if self._is_admin:
            return True
        return permission in self._lookup

    def has_all_permissions(self, permissions: Iterable[str] | None) -> bool:
        if self._is_admin:
            return True
        return all(item in self._lookup for item in permissions or ())

    def has_any_permission(self, permissions: Iterable[str] | None) -> bool:
        if self._is_admin:
            return True
        return any(item in self._lookup for item in permissions or ())

    def can_access_module(self, module: str) -> bool:
        if self._is_admin:
            return True
        prefix = f"{module}."
        return any(item.startswith(prefix) for item in self._permissions)

    def accessible_modules(self, modules: Iterable[str]) -> list[str]:
        return [module for module in modules if self.can_access_module(module)]


@dataclass(frozen=True)
class PermissionGate:
    """Composed access policy: every supplied criterion must hold.

    Criteria left as ``None`` or empty are treated as satisfied.
    """

    permission: str | None = None
    permissions: tuple[str, ...] = field(default_factory=tuple)
    any_permission: tuple[str, ...] = field(default_factory=tuple)
    module: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "permissions", tuple(self.permissions or ()))
        object.__setattr__(self, "any_permission", tuple(self.any_permission or ()))

    @property
    def is_empty(self) -> bool:
        return not (self.permission or self.permissions or self.any_permission or self.module)

    def allows(self, evaluator: PermissionEvaluator) -> bool:
        allowed = True
        if self.permission:
            allowed = allowed and evaluator.has_permission(self.permission)
        if self.permissions:
            allowed = allowed and evaluator.has_all_permissions(self.permissions)
        if self.any_permission:
            allowed = allowed and evaluator.has_any_permission(self.any_permission)
        if self.module:
            allowed = allowed and evaluator.can_access_module(self.module)
        return allowed

    def describe(self) -> dict[str, object]:
        details: dict[str, object] = {}
        if self.permission:
            details["required_permission"] = self.permission
        if self.permissions:
            details["required_permissions"] = list(self.permissions)
        if self.any_permission:
            details["any_permission"] = list(self.any_permission)
        if self.module:
            details["module"] = self.module
        return details
