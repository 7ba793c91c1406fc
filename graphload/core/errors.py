"""Error Hierarchy - typed, categorized exceptions for graphload failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Metadata errors (unmapped type, malformed key) are raised by graphload itself
    - Store/load failures from the persistence context are never wrapped here;
      they propagate as the original exception
    - to_dict() produces a flat, JSON-serializable envelope for logs

Design Decisions:
    - Single hierarchy with GraphLoadError base: callers catch one type for all
      metadata problems
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    METADATA = "metadata"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity_type: str | None = None
    relationship: str | None = None
    debug_info: dict[str, Any] | None = None


def qualified_name(entity_type: type) -> str:
    """Fully qualified name of a type, e.g. ``shop.models.Order``."""
    return f"{entity_type.__module__}.{entity_type.__qualname__}"


class GraphLoadError(Exception):
    """Base exception for all graphload errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Convert to a flat error envelope."""
        return {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "entity_type": self.context.entity_type,
            "relationship": self.context.relationship,
        }


# ─── Metadata Errors ────────────────────────────────────────────

class UnmappedTypeError(GraphLoadError):
    """The entity's runtime type has no metadata in the persistence context."""
    def __init__(self, entity_type: type, context: ErrorContext | None = None):
        self.type_name = qualified_name(entity_type)
        ctx = context or ErrorContext()
        ctx.entity_type = self.type_name
        super().__init__(
            f"The type {self.type_name} is not known to the persistence context.",
            "TYPE_NOT_MAPPED", ErrorCategory.METADATA,
            ErrorSeverity.ERROR, ctx,
        )


class MalformedKeyError(GraphLoadError):
    """Key metadata cannot satisfy the requested lookup (zero or ambiguous members)."""
    def __init__(
        self,
        entity_type: type,
        key_members: tuple[str, ...],
        context: ErrorContext | None = None,
    ):
        self.type_name = qualified_name(entity_type)
        self.key_members = key_members
        ctx = context or ErrorContext()
        ctx.entity_type = self.type_name
        ctx.debug_info = {"key_members": list(key_members)}
        if key_members:
            detail = f"declares {len(key_members)} key members ({', '.join(key_members)})"
        else:
            detail = "declares no key members"
        super().__init__(
            f"The type {self.type_name} {detail}; exactly one is required.",
            "MALFORMED_KEY", ErrorCategory.METADATA,
            ErrorSeverity.ERROR, ctx,
        )
