from contextlib import asynccontextmanager
from datetime import timedelta

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork

MIN_SESSION_LIFETIME_DAYS = 1
MAX_SESSION_LIFETIME_DAYS = 365

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@asynccontextmanager
async def unit_of_work_scope():
    """Unit of work with its own database session, for background jobs"""
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_session_lifetime() -> timedelta:
    """
    Configured lifetime of a session secret.

    Raises:
        ValueError: SESSION_LIFETIME_DAYS outside 1..365
    """
    days = int(ApplicationConfig.SESSION_LIFETIME_DAYS)
    if not MIN_SESSION_LIFETIME_DAYS <= days <= MAX_SESSION_LIFETIME_DAYS:
        raise ValueError(
            f"SESSION_LIFETIME_DAYS must be between {MIN_SESSION_LIFETIME_DAYS} "
            f"and {MAX_SESSION_LIFETIME_DAYS}, got {days}"
        )
    return timedelta(days=days)
