"""Database utilities for the relationship tracking service."""
from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (AsyncEngine, AsyncSession, async_sessionmaker,
                                    create_async_engine)

from reconnect.core.config import get_settings

settings = get_settings()

engine: AsyncEngine = create_async_engine(settings.async_database_url, future=True)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


if settings.is_sqlite:

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a SQLAlchemy async session."""
    async with AsyncSessionLocal() as session:
        yield session
