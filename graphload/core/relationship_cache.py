"""Relationship Metadata Cache - per-type relationship descriptors, computed once.

Invariants:
    - An entry, once stored, never changes for the rest of the process
    - Cache hits never touch the persistence context
    - Unmapped types are never stored; UnmappedTypeError is raised on every request
    - Concurrent first requests may each query metadata; dict.setdefault keeps
      exactly one stored value that every caller then observes

Design Decisions:
    - Insert-if-absent via dict.setdefault instead of a lock: metadata for a type
      is deterministic, so a lost race only costs a redundant lookup
    - Module-level relationship_cache instance, empty at import, no teardown
"""

import logging

from graphload.core.context_protocols import PersistenceContext
from graphload.core.domain_types import RelationshipSet
from graphload.core.errors import UnmappedTypeError, qualified_name

logger = logging.getLogger(__name__)


class RelationshipMetadataCache:
    """Append-only map of entity type to its relationship descriptors."""

    def __init__(self) -> None:
        self._entries: dict[type, RelationshipSet] = {}

    def relationships_for(
        self, context: PersistenceContext, entity_type: type,
    ) -> RelationshipSet:
        """Return the descriptors for entity_type, querying metadata on first use."""
        cached = self._entries.get(entity_type)
        if cached is not None:
            return cached

        relationships = context.metadata_for(entity_type)
        if relationships is None:
            raise UnmappedTypeError(entity_type)

        stored = self._entries.setdefault(entity_type, tuple(relationships))
        logger.debug(
            f"Cached {len(stored)} relationship(s) for {qualified_name(entity_type)}",
            extra={"entity_type": qualified_name(entity_type)},
        )
        return stored

    def clear(self) -> None:
        """Drop every entry. Test isolation only."""
        self._entries.clear()

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Process-wide cache shared by every load_graph call
relationship_cache = RelationshipMetadataCache()
