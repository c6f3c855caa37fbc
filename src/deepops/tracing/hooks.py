"""Ready-made diagnostic hooks."""

from __future__ import annotations

import logging

from deepops.tracing.models import TraversalEvent


class LoggingHook:
    """Write every traversal event to a logger at DEBUG level.

    Args:
        logger_name: Name of the logger to write to.
    """

    def __init__(self, logger_name: str = "deepops.trace") -> None:
        self._logger = logging.getLogger(logger_name)

    def on_enter(self, event: TraversalEvent) -> None:
        if not self._logger.isEnabledFor(logging.DEBUG):
            return
        self._logger.debug(
            "%s%s %s %s at %s",
            "  " * event.depth,
            event.operation,
            event.category,
            event.type_name,
            event.format_path(),
        )


class RecordingHook:
    """Keep every traversal event in memory, mostly for tests."""

    def __init__(self) -> None:
        self.events: list[TraversalEvent] = []

    def on_enter(self, event: TraversalEvent) -> None:
        self.events.append(event)

    def operations(self) -> list[str]:
        """Operation names of the recorded events, in order."""
        return [e.operation for e in self.events]

    def clear(self) -> None:
        self.events.clear()
