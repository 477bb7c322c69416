from __future__ import annotations

from collections.abc import AsyncGenerator, Iterable
from uuid import UUID

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_erp.core.config import Settings, get_settings
from fleet_erp.core.exceptions import ForbiddenError, UnauthorizedError
from fleet_erp.core.security import decode_token, ensure_token_type
from fleet_erp.db.session import Database
from fleet_erp.repositories.user import UserRepository
from fleet_erp.services.permissions import PermissionEvaluator, PermissionGate, Principal

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db_session(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    async for session in database.session():
        yield session


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    if credentials is None:
        raise UnauthorizedError("Authorization header missing")
    payload = decode_token(credentials.credentials)
    ensure_token_type(payload, "access")

    user_id = payload.get("sub")
    if user_id is None:
        raise UnauthorizedError("Invalid token payload")

    try:
        user_uuid = UUID(str(user_id))
    except (ValueError, TypeError) as exc:
        raise UnauthorizedError("Invalid token payload") from exc

    user = await UserRepository(session).get_with_permissions(user_uuid)
    if user is None or not user.active:
        raise UnauthorizedError("User not found or inactive")

    return Principal(
        user_id=user.id,
        email=user.email,
        name=user.name,
        role=user.role.name,
        branch_id=user.branch_id,
        permissions=tuple(user.role.permission_names),
        admin_role_name=settings.admin_role_name,
    )


def _enforce(gate: PermissionGate, principal: Principal) -> Principal:
    if gate.is_empty:
        return principal
    if gate.allows(PermissionEvaluator.for_principal(principal)):
        return principal

    details = gate.describe()
    logger.warning("Permission denied", user_id=str(principal.user_id), gate=details)
    if gate.permission:
        message = f"You do not have permission to perform this action. Required permission: {gate.permission}"
    else:
        message = "You do not have permission to perform this action"
    raise ForbiddenError(message, details=details)


def require_access(
    permission: str | None = None,
    all_of: Iterable[str] = (),
    any_of: Iterable[str] = (),
    module: str | None = None,
):
    gate = PermissionGate(permission=permission, permissions=tuple(all_of), any_permission=tuple(any_of), module=module)

    async def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        return _enforce(gate, principal)

    return dependency


def require_permission(permission: str):
    return require_access(permission=permission)
