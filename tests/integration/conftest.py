import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from config import ApplicationConfig


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
async def engine(tmp_path):
    # File database: concurrent requests need separate connections
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def client(session_factory):
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def create_sent_proposal(client, admin_headers, test_data):
    """Create a draft through the admin API, send it, return the send payload."""

    async def _create(recipients=None, **overrides):
        payload = test_data.get_copy("proposal", **overrides)
        if recipients is not None:
            payload["recipients"] = recipients

        created = await client.post("/admin/proposals", json=payload, headers=admin_headers)
        assert created.status_code == 201, created.text

        sent = await client.post(
            f"/admin/proposals/{created.json()['id']}/send", headers=admin_headers
        )
        assert sent.status_code == 200, sent.text
        return sent.json()

    return _create
