"""Domain Types - relationship descriptors and the aliases used across the traversal.

Invariants:
    - RelationshipDescriptor is immutable and identified by (owner, name)
    - RelationshipKind encodes the only two shapes a relationship can take
    - Descriptor tuples preserve mapper declaration order

Design Decisions:
    - Frozen dataclass over NamedTuple: keyword construction, hashable, readable repr
    - str Enum: serializes into log records without custom encoders
"""

from dataclasses import dataclass
from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class RelationshipKind(str, Enum):
    """Shape of a relationship target."""
    REFERENCE = "reference"
    COLLECTION = "collection"


# ─── Descriptors ─────────────────────────────────────────────────

@dataclass(frozen=True)
class RelationshipDescriptor:
    """One named relationship declared on a mapped type."""
    owner: type
    name: str
    kind: RelationshipKind
    target: type | None = None

    @property
    def is_collection(self) -> bool:
        return self.kind is RelationshipKind.COLLECTION


RelationshipSet = tuple[RelationshipDescriptor, ...]
