"""Session Factories - sync and async ORM session factories for hydration callers.

Invariants:
    - expire_on_commit=False on both: hydrated graphs stay readable after commit
    - Async sessions hydrate through run_sync (services/hydrate.py), never lazily in await code

Design Decisions:
    - Both flavours here: scripts and tests use sync sessions, services use async ones
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from graphload.config import Settings, get_settings


def create_session_factory(
    database_url: str, echo: bool = False,
) -> sessionmaker[Session]:
    """Create a sync session factory for the given database URL."""
    engine = create_engine(database_url, echo=echo)
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


def create_async_session_factory(
    database_url: str, echo: bool = False,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=echo)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


def session_factory_from_settings(
    settings: Settings | None = None,
) -> sessionmaker[Session]:
    """Sync session factory configured from GRAPHLOAD_DATABASE_URL / GRAPHLOAD_DATABASE_ECHO."""
    settings = settings or get_settings()
    return create_session_factory(settings.database_url, echo=settings.database_echo)
