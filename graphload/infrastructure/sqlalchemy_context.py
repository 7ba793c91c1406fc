"""SQLAlchemy Persistence Context - PersistenceContext implemented over an ORM Session.

Invariants:
    - metadata_for lists mapper.relationships in declaration order; uselist picks the kind
    - write_only and dynamic relationships are left out: they are query handles, not
      loadable state, and the caller reads them with .select() / session.scalars()
    - Unmapped classes (no Mapper from sa.inspect) yield None, never raise
    - is_loaded reads InstanceState.unloaded; nothing is cached here
    - Loads are plain attribute access: the session's lazy loader does the round-trip
    - Write-back uses set_committed_value so hydration never dirties the session
    - change_tracking_enabled maps to Session.autoflush

Design Decisions:
    - Attribute access over session.refresh(): refresh re-selects column state too and
      would discard pending in-memory edits on the instance
    - autoflush is the closest SQLAlchemy analogue to automatic change detection: with it
      on, every lazy load first flushes pending changes
"""

from typing import Any

import sqlalchemy as sa
from sqlalchemy.orm import Mapper, Session
from sqlalchemy.orm.attributes import set_committed_value

from graphload.core.domain_types import (
    RelationshipDescriptor, RelationshipKind, RelationshipSet,
)

# Relationships that never become resident on the instance: access yields a query object
_QUERY_ONLY_STRATEGIES = frozenset({"write_only", "dynamic"})


def _mapper_for(entity_type: type) -> Mapper | None:
    mapper = sa.inspect(entity_type, raiseerr=False)
    if isinstance(mapper, Mapper):
        return mapper
    return None


class SqlAlchemyContext:
    """Adapter exposing a sqlalchemy.orm.Session through PersistenceContext."""

    def __init__(self, session: Session):
        self.session = session

    # ─── Metadata ────────────────────────────────────────────────

    def metadata_for(self, entity_type: type) -> RelationshipSet | None:
        mapper = _mapper_for(entity_type)
        if mapper is None:
            return None
        return tuple(
            RelationshipDescriptor(
                owner=entity_type,
                name=relationship.key,
                kind=(
                    RelationshipKind.COLLECTION if relationship.uselist
                    else RelationshipKind.REFERENCE
                ),
                target=relationship.mapper.class_,
            )
            for relationship in mapper.relationships
            if relationship.lazy not in _QUERY_ONLY_STRATEGIES
        )

    def key_members_for(self, entity_type: type) -> tuple[str, ...] | None:
        mapper = _mapper_for(entity_type)
        if mapper is None:
            return None
        return tuple(
            mapper.get_property_by_column(column).key
            for column in mapper.primary_key
        )

    # ─── Load state ──────────────────────────────────────────────

    def is_loaded(self, entity: Any, name: str) -> bool:
        return name not in sa.inspect(entity).unloaded

    def load_collection(self, entity: Any, name: str) -> None:
        getattr(entity, name)

    def load_reference(self, entity: Any, name: str) -> None:
        getattr(entity, name)

    # ─── Field access ────────────────────────────────────────────

    def get_value(self, entity: Any, name: str) -> Any:
        return getattr(entity, name)

    def set_value(self, entity: Any, name: str, value: Any) -> None:
        set_committed_value(entity, name, value)

    # ─── Change tracking ─────────────────────────────────────────

    @property
    def change_tracking_enabled(self) -> bool:
        return self.session.autoflush

    @change_tracking_enabled.setter
    def change_tracking_enabled(self, enabled: bool) -> None:
        self.session.autoflush = enabled
