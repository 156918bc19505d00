from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from timeless.infrastructure.db.database import create_engine_for, create_session_factory, init_db
from timeless.infrastructure.store.store_factory import build_store
from timeless.realtime.runtime import BoardRuntime
from timeless.main import include_routers


class FakeClock:
    """Settable clock for runtime and route tests"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture()
async def db_engine(tmp_path):
    engine = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture()
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def sql_store(session_factory):
    return build_store("sql", session_factory)


@pytest.fixture()
def memory_store():
    return build_store("memory")


@pytest.fixture()
async def app(sql_store, clock) -> AsyncGenerator[FastAPI, None]:
    await sql_store.news.provision()
    runtime = BoardRuntime(sql_store, clock=clock)
    await runtime.start()

    app = FastAPI()
    include_routers(app)
    app.state.store = sql_store
    app.state.runtime = runtime
    app.state.ticker = None

    yield app

    await runtime.stop()


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
