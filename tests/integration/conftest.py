from contextlib import asynccontextmanager
from datetime import timedelta

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401  registers tables on the metadata
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.session_lifecycle_manager import SessionLifecycleManager
from src.domain.base import utcnow
from src.depends import get_unit_of_work

SESSION_LIFETIME = timedelta(days=14)


class FrozenClock:
    """Controllable replacement for utcnow"""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, delta: timedelta):
        self.now = self.now + delta


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def uow(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest_asyncio.fixture
async def clock():
    return FrozenClock(utcnow())


@pytest_asyncio.fixture
async def manager(uow, clock):
    return SessionLifecycleManager(uow, SESSION_LIFETIME, clock=clock)


@pytest_asyncio.fixture
async def uow_scope(uow):
    @asynccontextmanager
    async def scope():
        yield uow

    return scope


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
