"""Change-Tracking Guard - suspends automatic change detection for one root-level load.

Invariants:
    - Prior setting captured on __enter__, restored on __exit__ for every exit path
    - Exceptions are never suppressed (__exit__ returns False)
    - Not re-entrant against the same context: one guard per root call
"""

import logging

from graphload.core.context_protocols import PersistenceContext

logger = logging.getLogger(__name__)


class SuspendedChangeTracking:
    """Context manager that disables change tracking and restores the prior value."""

    def __init__(self, context: PersistenceContext):
        self._context = context
        self._previous: bool | None = None

    @property
    def previous(self) -> bool | None:
        """Setting captured on entry (None before entry)."""
        return self._previous

    def __enter__(self) -> "SuspendedChangeTracking":
        self._previous = self._context.change_tracking_enabled
        self._context.change_tracking_enabled = False
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._context.change_tracking_enabled = self._previous
        if exc_type is not None:
            logger.debug(
                f"Change tracking restored to {self._previous} after {exc_type.__name__}",
            )
        return False
