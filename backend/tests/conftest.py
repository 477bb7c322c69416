from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Generator
from uuid import UUID

import pytest
import structlog
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession
from structlog.testing import LogCapture

from fleet_erp.core.config import Settings, get_settings
from fleet_erp.core.permissions import ALL_PERMISSIONS
from fleet_erp.db.base import Base
from fleet_erp.db.session import Database
from fleet_erp.main import create_app
from fleet_erp.models import *  # noqa: F401,F403
from fleet_erp.models import Branch, User
from fleet_erp.repositories.role import RoleRepository


TEST_DB_URL = os.getenv("TEST_DATABASE_URL")


def make_access_token(user_id: UUID, settings: Settings | None = None) -> str:
    settings = settings or get_settings()
    return jwt.encode({"sub": str(user_id), "type": "access"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


@pytest.fixture()
def captured_logs() -> Generator[LogCapture, None, None]:
    capture = LogCapture()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
        cache_logger_on_first_use=False,
    )
    yield capture
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture()
def integration_enabled() -> bool:
    return bool(TEST_DB_URL)


@pytest.fixture()
async def database(integration_enabled: bool) -> AsyncGenerator[Database, None]:
    if not integration_enabled:
        pytest.skip("Integration env is not configured")

    database = Database(TEST_DB_URL)
    database.open()
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield database
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await database.close()


@pytest.fixture()
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async for session in database.session():
        yield session


@pytest.fixture()
async def app_client(database: Database):
    app = create_app(database=database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture()
async def seeded(db_session: AsyncSession) -> dict:
    """Two branches, an admin, a branch-scoped fleet operator and a viewer with no vehicle access."""
    roles = RoleRepository(db_session)
    await roles.sync_permissions(ALL_PERMISSIONS)
    admin_role = await roles.create_role("ADMIN")
    operator_role = await roles.create_role(
        "FLEET_OPERATOR",
        ["vehicles.view", "vehicles.create", "vehicles.update", "vehicles.update-km", "audit.view"],
    )
    viewer_role = await roles.create_role("VIEWER", ["products.view"])

    north = Branch(name="North", code="N01")
    south = Branch(name="South", code="S01")
    db_session.add_all([north, south])
    await db_session.flush()

    admin = User(email="admin@example.com", name="Admin", role_id=admin_role.id, branch_id=None)
    operator = User(email="operator@example.com", name="Operator", role_id=operator_role.id, branch_id=north.id)
    viewer = User(email="viewer@example.com", name="Viewer", role_id=viewer_role.id, branch_id=south.id)
    db_session.add_all([admin, operator, viewer])
    await db_session.commit()

    return {
        "north": north.id,
        "south": south.id,
        "admin": {"Authorization": f"Bearer {make_access_token(admin.id)}"},
        "operator": {"Authorization": f"Bearer {make_access_token(operator.id)}"},
        "viewer": {"Authorization": f"Bearer {make_access_token(viewer.id)}"},
    }
