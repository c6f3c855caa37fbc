"""Data models for traversal diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class TraversalEvent:
    """One recursion entry inside an engine.

    Attributes:
        operation: Engine name: "equal", "compare", "hash" or "copy".
        category: Category name of the value being entered.
        type_name: Qualified name of the declared type.
        depth: Recursion depth, 0 for the top-level call.
        path: Field names, indices and map keys leading to the value.

    Example:
        event = TraversalEvent(
            operation="equal",
            category="RECORD",
            type_name="Node",
            depth=1,
            path=("next",),
        )
    """

    operation: str
    category: str
    type_name: str
    depth: int
    path: tuple[Any, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "operation": self.operation,
            "category": self.category,
            "type_name": self.type_name,
            "depth": self.depth,
            "path": list(self.path),
        }

    def format_path(self) -> str:
        """Render the path the way it would be written in Python."""
        parts = []
        for step in self.path:
            if isinstance(step, str):
                parts.append(f".{step}")
            else:
                parts.append(f"[{step!r}]")
        return "".join(parts) or "<root>"
