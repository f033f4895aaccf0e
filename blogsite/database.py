"""
Database engine and the request-scoped transaction.

Every route that touches the database takes ``get_db``.  One request is one
transaction: services only ``flush`` so generated ids are available, and the
commit happens here once the route has returned.  Services that hit a store
error roll the session back themselves before raising, which leaves the
final commit a no-op instead of a second failure.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from blogsite.config import settings

# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


@asynccontextmanager
async def transaction(factory: async_sessionmaker) -> AsyncIterator[AsyncSession]:
    """Yield a session from *factory*; commit when the caller finishes, roll back on error."""
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncIterator[AsyncSession]:
    async with transaction(async_session) as session:
        yield session
