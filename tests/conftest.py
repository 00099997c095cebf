from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402

from reconnect.core.config import get_settings  # noqa: E402

TEST_DB_PATH = ROOT / "test.db"
if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
get_settings.cache_clear()

OWNER_ID = 1
OTHER_OWNER_ID = 2


class QueryCounter:
    """Collect SQL statements issued while attached to the engine."""

    def __init__(self) -> None:
        self.statements: list[str] = []

    def __call__(self, _conn, _cursor, statement, _parameters, _context, _executemany) -> None:
        self.statements.append(statement)

    def reset(self) -> None:
        self.statements.clear()

    @property
    def count(self) -> int:
        return len(self.statements)


@pytest.fixture()
async def database() -> AsyncIterator[None]:
    from reconnect.core.db import engine
    from reconnect.models import Base

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture()
async def session(database):
    from reconnect.core.db import AsyncSessionLocal

    async with AsyncSessionLocal() as db_session:
        yield db_session


@pytest.fixture()
async def client(database) -> AsyncIterator[AsyncClient]:
    from reconnect.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
        headers={"X-User-Id": str(OWNER_ID)},
    ) as client:
        yield client


@pytest.fixture()
def query_counter() -> Iterator[QueryCounter]:
    from reconnect.core.db import engine

    counter = QueryCounter()
    event.listen(engine.sync_engine, "before_cursor_execute", counter)
    try:
        yield counter
    finally:
        event.remove(engine.sync_engine, "before_cursor_execute", counter)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"
