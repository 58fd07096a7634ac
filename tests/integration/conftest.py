"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite database file, so separate sessions behave like
separate connections (needed for optimistic locking tests).
"""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from src.pnrelease.api.dependencies import get_db_session
from src.pnrelease.core import db
from src.pnrelease.core.db import get_session
from src.pnrelease.core.shutdown import request_tracker
from src.pnrelease.main import create_app
from src.pnrelease.models import Employee
from src.pnrelease.repositories import (
    EmployeeRepository,
    PartNumberRequestRepository,
    ReleaseWorkflowRepository,
)
from src.pnrelease.services import EmployeeService, ReleaseService
from tests.factories import EmployeeFactory


def release_service_for(session: AsyncSession) -> ReleaseService:
    return ReleaseService(
        PartNumberRequestRepository(session),
        ReleaseWorkflowRepository(session),
        EmployeeRepository(session),
        session,
    )


def employee_service_for(session: AsyncSession) -> EmployeeService:
    return EmployeeService(
        EmployeeRepository(session),
        PartNumberRequestRepository(session),
        ReleaseWorkflowRepository(session),
        session,
    )


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Fresh database with all tables created."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'pnrelease.db'}", poolclass=NullPool
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for arranging data. Tests must commit explicitly."""
    async with get_session(engine) as session:
        yield session


@pytest.fixture
def new_session(engine: AsyncEngine) -> Callable:
    """Open an independent session, e.g. to check what was committed."""
    return lambda: get_session(engine)


@pytest.fixture
def release_service(db_session: AsyncSession) -> ReleaseService:
    return release_service_for(db_session)


@pytest.fixture
def employee_service(db_session: AsyncSession) -> EmployeeService:
    return employee_service_for(db_session)


@pytest.fixture
async def staff(db_session: AsyncSession) -> dict[str, Employee]:
    """One committed employee per slotted role."""
    employees = {
        "creator": EmployeeFactory.build(name="Rita Requester"),
        "manager": EmployeeFactory.build(name="Max Manager"),
        "specialist": EmployeeFactory.build(name="Sam Specialist"),
        "spare": EmployeeFactory.build(name="Sid Substitute"),
    }
    db_session.add_all(employees.values())
    await db_session.commit()
    return employees


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the app, bound to the test database."""
    request_tracker.reset()
    await db.dispose_engine()

    app = create_app()

    async def _test_db_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = _test_db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    await db.dispose_engine()
    request_tracker.reset()
