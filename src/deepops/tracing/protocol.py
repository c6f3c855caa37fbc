"""Protocols for traversal diagnostics.

A diagnostic hook is injected per call (or via settings) instead of a global
logging switch, so tracing one comparison never affects another.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from deepops.tracing.models import TraversalEvent


@runtime_checkable
class DiagnosticHook(Protocol):
    """Receives an event at every recursion entry point.

    Usage:
        class CountingHook:
            def __init__(self):
                self.count = 0

            def on_enter(self, event: TraversalEvent) -> None:
                self.count += 1

        equal_deep(a, b, hook=CountingHook())

    Thread Safety:
        A hook shared between concurrent calls must do its own locking.
    """

    def on_enter(self, event: TraversalEvent) -> None:
        """Called before an engine descends into a value.

        Args:
            event: Where the engine is and what it is looking at.
        """
        ...
