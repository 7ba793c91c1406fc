"""Boundary Protocols - contract between the traversal core and the persistence layer.

Invariants:
    - Core NEVER imports sqlalchemy - dependency arrows point inward only
    - All store access goes through PersistenceContext
    - Implementations provided by infrastructure (SqlAlchemyContext) or by tests

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Sync methods only: lazy loading is synchronous; async sessions bridge via
      run_sync in services/hydrate.py
"""

from typing import Any, Protocol

from graphload.core.domain_types import RelationshipSet


class PersistenceContext(Protocol):
    """Contract for the ORM session the traversal runs against."""

    change_tracking_enabled: bool

    def metadata_for(self, entity_type: type) -> RelationshipSet | None:
        """Relationship descriptors for a mapped type, or None if unmapped."""
        ...

    def key_members_for(self, entity_type: type) -> tuple[str, ...] | None:
        """Primary-key attribute names in declared order, or None if unmapped."""
        ...

    def is_loaded(self, entity: Any, name: str) -> bool: ...

    def load_collection(self, entity: Any, name: str) -> None: ...

    def load_reference(self, entity: Any, name: str) -> None: ...

    def get_value(self, entity: Any, name: str) -> Any: ...

    def set_value(self, entity: Any, name: str, value: Any) -> None: ...
