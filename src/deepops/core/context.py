"""Per-call traversal state.

A TraversalContext is created for every top-level engine call and threaded
through the recursion. It carries the settings snapshot, the diagnostic hook,
the active-path set used for cycle termination and, for copies, the memo of
in-progress results. Nothing in it is shared between calls.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from deepops.config import EngineSettings, get_settings
from deepops.core.override import Operation, OverrideTable, get_overrides
from deepops.core.schema import (
    OptionalSchema,
    Schema,
    SchemaRegistry,
    get_registry,
    schemas_compatible,
)
from deepops.tracing import DiagnosticHook, LoggingHook, TraversalEvent

_NONE_TYPE = type(None)


@dataclass(slots=True)
class TraversalContext:
    """State threaded through one engine call.

    Attributes:
        operation: Engine name reported to the diagnostic hook.
        settings: Settings snapshot taken when the call started.
        registry: Schema registry used for runtime-classified values.
        overrides: Override table consulted before generic traversal.
        hook: Diagnostic hook invoked at every recursion entry, if any.
        active: Identities (or identity pairs) on the current recursion path.
        memo: Source identity to in-progress copy, used by the copy engine.
        path: Field names, indices and keys from the root to the current value.
    """

    operation: str
    settings: EngineSettings
    registry: SchemaRegistry
    overrides: OverrideTable
    hook: DiagnosticHook | None = None
    active: set[Any] = field(default_factory=set)
    memo: dict[int, Any] = field(default_factory=dict)
    path: list[Any] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        operation: str,
        *,
        settings: EngineSettings | None = None,
        hook: DiagnosticHook | None = None,
        registry: SchemaRegistry | None = None,
        overrides: OverrideTable | None = None,
    ) -> TraversalContext:
        """Build a fresh context for a top-level call.

        Args:
            operation: Engine name ("equal", "compare", "hash", "copy").
            settings: Settings to use; defaults to the process-wide settings.
            hook: Diagnostic hook; defaults to a LoggingHook when settings.trace is on.
            registry: Schema registry; defaults to the global one.
            overrides: Override table; defaults to the global one.

        Returns:
            New context with an empty active path.
        """
        settings = settings or get_settings()
        if hook is None and settings.trace:
            hook = LoggingHook(settings.trace_logger)
        return cls(
            operation=operation,
            settings=settings,
            registry=registry or get_registry(),
            overrides=overrides or get_overrides(),
            hook=hook,
        )

    def derive(self, operation: str) -> TraversalContext:
        """Fresh context for a nested call of another engine, same collaborators."""
        return TraversalContext(
            operation=operation,
            settings=self.settings,
            registry=self.registry,
            overrides=self.overrides,
            hook=self.hook,
        )

    @property
    def depth(self) -> int:
        return len(self.path)

    @contextmanager
    def step(self, key: Any) -> Iterator[None]:
        """Descend one level into a field, index or map key."""
        self.path.append(key)
        try:
            yield
        finally:
            self.path.pop()

    def notify(self, schema: Schema) -> None:
        """Report a recursion entry to the diagnostic hook."""
        if self.hook is None:
            return
        self.hook.on_enter(
            TraversalEvent(
                operation=self.operation,
                category=schema.category.name,
                type_name=schema.type_name,
                depth=self.depth,
                path=tuple(self.path),
            )
        )

    def override(self, value: Any, operation: Operation) -> Any:
        """Resolve a type-specific implementation for value, or None."""
        if value is None:
            return None
        return self.overrides.resolve(type(value), operation)

    def schema_of(self, declared: Schema | None, value: Any) -> Schema:
        """Declared schema if known, else the value's runtime schema."""
        if declared is not None:
            return declared
        return self.registry.schema_for_value(value)

    def pair_schema(self, declared: Schema | None, a: Any, b: Any) -> Schema | None:
        """Schema shared by two operands.

        Args:
            declared: Schema from the enclosing declaration, if any.
            a: Left operand.
            b: Right operand.

        Returns:
            The declared schema when given. Otherwise the operands' runtime
            schema, an optional schema when either side is None, or None when
            the operands have incompatible shapes.
        """
        if declared is not None:
            return declared
        if a is None or b is None:
            present = b if a is None else a
            target = None if present is None else self.registry.schema_for_value(present)
            return OptionalSchema(_NONE_TYPE, target=target)
        sa = self.registry.schema_for_value(a)
        sb = self.registry.schema_for_value(b)
        return sa if schemas_compatible(sa, sb) else None
