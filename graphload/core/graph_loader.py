"""Graph Loader - recursive, metadata-driven hydration of an entity's object graph.

Invariants:
    - Every root-level call runs inside SuspendedChangeTracking (restored on all exit paths)
    - Traversal is depth-first, left to right, in cached descriptor order
    - A relationship already resident in the context is skipped entirely:
      no load, and for collections no visit of its elements
    - With cycle_guard on, load_collection / load_reference run at most once per
      (instance, relationship) in a root call
    - Load failures propagate unmodified; the graph may be left partially hydrated
    - A GraphLoadError raised below a relationship propagates as the same object,
      with ErrorContext.relationship set to the innermost relationship name
    - With cycle_guard on, each instance is visited at most once per root call

Design Decisions:
    - GraphTraversal object per root call: holds the visited set and stats so the
      recursion itself stays a plain method
    - Visited set keyed by (type, id(instance)) and holding the instance: ids cannot
      be recycled while the call is running; the session identity map makes instance
      identity equivalent to database identity
"""

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from graphload.core.change_tracking import SuspendedChangeTracking
from graphload.core.context_protocols import PersistenceContext
from graphload.core.domain_types import RelationshipDescriptor
from graphload.core.errors import GraphLoadError, qualified_name
from graphload.core.relationship_cache import (
    RelationshipMetadataCache, relationship_cache,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class TraversalStats:
    """Counters for one root-level call."""
    entities_visited: int = 0
    collections_loaded: int = 0
    references_loaded: int = 0
    revisits_skipped: int = 0
    max_depth: int = 0

    def as_log_extra(self) -> dict:
        return {
            "entities_visited": self.entities_visited,
            "collections_loaded": self.collections_loaded,
            "references_loaded": self.references_loaded,
            "revisits_skipped": self.revisits_skipped,
            "depth": self.max_depth,
        }


class GraphTraversal:
    """Walks and hydrates the graph reachable from the entities it visits."""

    def __init__(
        self,
        context: PersistenceContext,
        cache: RelationshipMetadataCache | None = None,
        cycle_guard: bool = True,
    ):
        self.context = context
        self.cache = cache if cache is not None else relationship_cache
        self.cycle_guard = cycle_guard
        self.stats = TraversalStats()
        self._visited: dict[tuple[type, int], Any] = {}

    def visit(self, entity: T, depth: int = 0) -> T:
        """Hydrate every unresident relationship of entity, recursively."""
        if entity is None:
            return entity

        entity_type = type(entity)
        relationships = self.cache.relationships_for(self.context, entity_type)

        if self.cycle_guard:
            marker = (entity_type, id(entity))
            if marker in self._visited:
                self.stats.revisits_skipped += 1
                return entity
            self._visited[marker] = entity

        self.stats.entities_visited += 1
        self.stats.max_depth = max(self.stats.max_depth, depth)

        for descriptor in relationships:
            if descriptor.is_collection:
                self._visit_collection(entity, descriptor, depth)
            else:
                self._visit_reference(entity, descriptor, depth)
        return entity

    def _visit_collection(
        self, entity: Any, descriptor: RelationshipDescriptor, depth: int,
    ) -> None:
        name = descriptor.name
        if self.context.is_loaded(entity, name):
            return
        self._load(self.context.load_collection, entity, descriptor, depth)
        self.stats.collections_loaded += 1

        values = self.context.get_value(entity, name)
        if values is None:
            return
        # Dict-backed collections iterate keys; hydrate the mapped values instead
        if hasattr(values, "values") and callable(values.values):
            values = values.values()
        for child in list(values):
            self._visit_child(child, descriptor, depth)

    def _visit_reference(
        self, entity: Any, descriptor: RelationshipDescriptor, depth: int,
    ) -> None:
        name = descriptor.name
        if self.context.is_loaded(entity, name):
            return
        self._load(self.context.load_reference, entity, descriptor, depth)
        self.stats.references_loaded += 1

        child = self._visit_child(self.context.get_value(entity, name), descriptor, depth)
        self.context.set_value(entity, name, child)

    def _visit_child(self, child: Any, descriptor: RelationshipDescriptor, depth: int) -> Any:
        try:
            return self.visit(child, depth + 1)
        except GraphLoadError as e:
            # Only the innermost relationship is recorded
            if e.context.relationship is None:
                e.context.relationship = descriptor.name
                logger.warning(
                    f"{e.message} Reached through "
                    f"{qualified_name(descriptor.owner)}.{descriptor.name}.",
                    extra={
                        "entity_type": e.context.entity_type,
                        "relationship": descriptor.name,
                        "depth": depth + 1,
                        "error_code": e.code,
                    },
                )
            raise

    def _load(self, load, entity: Any, descriptor: RelationshipDescriptor, depth: int):
        type_name = qualified_name(type(entity))
        logger.debug(
            f"Loading {descriptor.kind.value} {type_name}.{descriptor.name}",
            extra={
                "entity_type": type_name,
                "relationship": descriptor.name,
                "depth": depth,
            },
        )
        try:
            load(entity, descriptor.name)
        except Exception as e:
            logger.warning(
                f"Load of {type_name}.{descriptor.name} failed: {e}",
                extra={
                    "entity_type": type_name,
                    "relationship": descriptor.name,
                    "depth": depth,
                },
            )
            raise


def load_graph(
    context: PersistenceContext,
    entity: T,
    *,
    cycle_guard: bool = True,
    cache: RelationshipMetadataCache | None = None,
) -> T:
    """Load the entire object graph for one root entity and return the same reference."""
    if entity is None:
        return entity

    traversal = GraphTraversal(context, cache, cycle_guard)
    with SuspendedChangeTracking(context):
        traversal.visit(entity)
    _log_summary(traversal, roots=1)
    return entity


def load_graphs(
    context: PersistenceContext,
    entities: list[T] | None,
    *,
    cycle_guard: bool = True,
    cache: RelationshipMetadataCache | None = None,
) -> list[T] | None:
    """Load the object graph for every root in entities, in place, by index."""
    if not entities:
        return entities

    traversal = GraphTraversal(context, cache, cycle_guard)
    with SuspendedChangeTracking(context):
        for index in range(len(entities)):
            entities[index] = traversal.visit(entities[index])
    _log_summary(traversal, roots=len(entities))
    return entities


def _log_summary(traversal: GraphTraversal, roots: int) -> None:
    stats = traversal.stats
    logger.debug(
        f"Hydrated {roots} root(s): {stats.entities_visited} entities, "
        f"{stats.collections_loaded} collection load(s), "
        f"{stats.references_loaded} reference load(s)",
        extra={"roots": roots, **stats.as_log_extra()},
    )
