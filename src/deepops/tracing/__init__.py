"""Diagnostics for the traversal engines.

Usage:
    from deepops import equal_deep
    from deepops.tracing import LoggingHook, RecordingHook

    hook = RecordingHook()
    equal_deep(a, b, hook=hook)
    for event in hook.events:
        print(event.depth, event.category, event.format_path())
"""

from deepops.tracing.hooks import LoggingHook, RecordingHook
from deepops.tracing.models import TraversalEvent
from deepops.tracing.protocol import DiagnosticHook

__all__ = [
    "DiagnosticHook",
    "LoggingHook",
    "RecordingHook",
    "TraversalEvent",
]
