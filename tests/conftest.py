import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REMINDER_ENABLED", "false")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from hrfleet.core.config import settings  # noqa: E402
from hrfleet.core.db import get_db, init_db  # noqa: E402
from hrfleet.main import app  # noqa: E402
from hrfleet.services.employees import EmployeeLedger  # noqa: E402


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
        class_=AsyncSession,
    )


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_employee(session):
    async def _make(first_name="Ayse", last_name="Yilmaz", **fields):
        data = {
            "first_name": first_name,
            "last_name": last_name,
            "phone": "555-0100",
            "position": "Driver",
            "salary": 1000,
            "join_date": date(2024, 1, 1),
            "emergency_contacts": [],
            "total_leave_allowance": 30,
        }
        data.update(fields)
        return await EmployeeLedger(session).create_employee(data)

    return _make


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(client):
    await client.post("/api/init")
    resp = await client.post("/api/login", json={"password": settings.ADMIN_PASSWORD})
    assert resp.status_code == 200
    client.headers["Authorization"] = f"Bearer {resp.json()['token']}"
    return client
