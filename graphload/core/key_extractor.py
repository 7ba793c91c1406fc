"""Key Extractor - reads primary-key values off a materialized entity.

Invariants:
    - Pure reads: no loads, no writes, no caching
    - Unmapped types raise UnmappedTypeError (same message as the relationship cache)
    - primary_key requires exactly one key member, otherwise MalformedKeyError
    - primary_keys returns values in declared key order, empty when no members are declared
"""

from typing import Any

from graphload.core.context_protocols import PersistenceContext
from graphload.core.errors import MalformedKeyError, UnmappedTypeError


def _key_members(context: PersistenceContext, entity: Any) -> tuple[str, ...]:
    entity_type = type(entity)
    members = context.key_members_for(entity_type)
    if members is None:
        raise UnmappedTypeError(entity_type)
    return tuple(members)


def primary_key(context: PersistenceContext, entity: Any) -> Any:
    """Return the single primary-key value of entity."""
    members = _key_members(context, entity)
    if len(members) != 1:
        raise MalformedKeyError(type(entity), members)
    return context.get_value(entity, members[0])


def primary_keys(context: PersistenceContext, entity: Any) -> list[Any]:
    """Return every primary-key value of entity (composite keys included)."""
    members = _key_members(context, entity)
    return [context.get_value(entity, name) for name in members]
