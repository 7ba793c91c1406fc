"""Hydration Service - public entry points for loading object graphs and reading keys.

Invariants:
    - Accepts either a PersistenceContext or a sqlalchemy.orm.Session (wrapped in
      SqlAlchemyContext); the core loader only ever sees a PersistenceContext
    - cycle_guard=None resolves to Settings.cycle_guard
    - Async entry points run the sync traversal inside AsyncSession.run_sync, so
      lazy loads happen on the sync Session backing the AsyncSession
    - Errors propagate unchanged from core/graph_loader.py and core/key_extractor.py

Design Decisions:
    - Thin shell around the core: Session coercion and settings lookup live here so
      core/ stays free of sqlalchemy and config imports
"""

from typing import Any, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy.ext.asyncio import AsyncSession

from graphload.config import get_settings
from graphload.core import graph_loader, key_extractor
from graphload.core.context_protocols import PersistenceContext
from graphload.core.relationship_cache import RelationshipMetadataCache
from graphload.infrastructure.sqlalchemy_context import SqlAlchemyContext

T = TypeVar("T")

ContextLike = PersistenceContext | Session


def as_context(context: ContextLike) -> PersistenceContext:
    """Wrap a SQLAlchemy Session; pass any other context through."""
    if isinstance(context, Session):
        return SqlAlchemyContext(context)
    return context


def _resolve_cycle_guard(cycle_guard: bool | None) -> bool:
    if cycle_guard is None:
        return get_settings().cycle_guard
    return cycle_guard


# ─── Graph loading ───────────────────────────────────────────────

def load_graph(
    context: ContextLike,
    entity: T,
    *,
    cycle_guard: bool | None = None,
    cache: RelationshipMetadataCache | None = None,
) -> T:
    """Load the entire object graph for a root entity; returns the same reference."""
    return graph_loader.load_graph(
        as_context(context), entity,
        cycle_guard=_resolve_cycle_guard(cycle_guard), cache=cache,
    )


def load_graphs(
    context: ContextLike,
    entities: list[T] | None,
    *,
    cycle_guard: bool | None = None,
    cache: RelationshipMetadataCache | None = None,
) -> list[T] | None:
    """Load the object graph for each root in entities, in place; returns the same list."""
    return graph_loader.load_graphs(
        as_context(context), entities,
        cycle_guard=_resolve_cycle_guard(cycle_guard), cache=cache,
    )


async def load_graph_async(
    session: AsyncSession,
    entity: T,
    *,
    cycle_guard: bool | None = None,
    cache: RelationshipMetadataCache | None = None,
) -> T:
    """Async variant of load_graph for AsyncSession callers."""
    return await session.run_sync(
        load_graph, entity, cycle_guard=cycle_guard, cache=cache,
    )


async def load_graphs_async(
    session: AsyncSession,
    entities: list[T] | None,
    *,
    cycle_guard: bool | None = None,
    cache: RelationshipMetadataCache | None = None,
) -> list[T] | None:
    """Async variant of load_graphs for AsyncSession callers."""
    return await session.run_sync(
        load_graphs, entities, cycle_guard=cycle_guard, cache=cache,
    )


# ─── Keys ────────────────────────────────────────────────────────

def primary_key(context: ContextLike, entity: Any) -> Any:
    """Single primary-key value of entity."""
    return key_extractor.primary_key(as_context(context), entity)


def primary_keys(context: ContextLike, entity: Any) -> list[Any]:
    """All primary-key values of entity, in declared key order."""
    return key_extractor.primary_keys(as_context(context), entity)
