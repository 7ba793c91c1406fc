"""Infrastructure test fixtures - seeded in-memory SQLite, sync and async.

Invariants:
    - Every test gets a fresh in-memory database seeded with tests/models.seed_shop
    - The session handed to a test is a NEW session: nothing from seeding is resident
    - statements counts SQL round-trips on the sync engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; lazy loading semantics are
      identical across backends
"""

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from graphload.db.session import create_session_factory

from tests.models import Base, seed_shop


@pytest.fixture
def session_factory():
    factory = create_session_factory("sqlite://")
    with factory() as seed:
        engine = seed.get_bind()
        Base.metadata.create_all(engine)
        seed_shop(seed)
        seed.commit()
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def statements(db):
    """List that receives every SQL statement executed through db's engine."""
    executed: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        executed.append(statement)

    engine = db.get_bind()
    event.listen(engine, "before_cursor_execute", _record)
    yield executed
    event.remove(engine, "before_cursor_execute", _record)


@pytest.fixture
async def async_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def async_session_factory(async_engine):
    factory = async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as seed:
        seed_shop(seed)
        await seed.commit()
    return factory


@pytest.fixture
async def async_db(async_session_factory):
    async with async_session_factory() as session:
        yield session
