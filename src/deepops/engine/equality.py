"""Deep structural equality.

Usage:
    @record
    @dataclass
    class Pair:
        other: "Pair | None"
        extra: int = 3

    p1, p2 = Pair(None), Pair(None)
    p1.other, p2.other = p2, p1
    assert equal_deep(p1, p2)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from deepops.config import EngineSettings
from deepops.core.context import TraversalContext
from deepops.core.override import Operation
from deepops.core.schema import (
    Category,
    MapSchema,
    OptionalSchema,
    RecordSchema,
    ScalarKind,
    ScalarSchema,
    Schema,
    SequenceSchema,
)
from deepops.engine.ordering import sorted_keys
from deepops.tracing import DiagnosticHook


def equal_deep(
    a: Any,
    b: Any,
    *,
    schema: Schema | None = None,
    hook: DiagnosticHook | None = None,
    settings: EngineSettings | None = None,
    context: TraversalContext | None = None,
) -> bool:
    """Compare two values for deep structural equality.

    Floats treat NaN as equal to NaN. Two absent references are equal. Maps are
    equal when their sorted keys and the values at those keys are equal,
    whatever their insertion order.

    Args:
        a: Left operand.
        b: Right operand.
        schema: Declared schema of both operands; derived from their runtime
            types when omitted.
        hook: Diagnostic hook invoked at every recursion entry.
        settings: Engine settings; defaults to the process-wide settings.
        context: Existing traversal context (for overrides calling back in).

    Returns:
        True if the values are deeply equal. Operands of incompatible shapes
        are never equal.
    """
    ctx = context or TraversalContext.create("equal", hook=hook, settings=settings)
    return _equal(a, b, schema, ctx)


def _equal(a: Any, b: Any, declared: Schema | None, ctx: TraversalContext) -> bool:
    if a is b:
        return True
    schema = ctx.pair_schema(declared, a, b)
    if schema is None:
        return False
    ctx.notify(schema)

    if a is not None and b is not None:
        override = ctx.override(a, Operation.EQUAL)
        if override is not None:
            return bool(override(a, b))

    return _EQUALIZERS[schema.category](a, b, schema, ctx)


def _equal_scalar(a: Any, b: Any, schema: ScalarSchema, ctx: TraversalContext) -> bool:
    if schema.kind is ScalarKind.FLOAT and math.isnan(a) and math.isnan(b):
        # Deliberate departure from IEEE: NaN equals NaN
        return True
    return bool(a == b)


def _equal_text(a: Any, b: Any, schema: Schema, ctx: TraversalContext) -> bool:
    return bool(a == b)


def _equal_optional(a: Any, b: Any, schema: OptionalSchema, ctx: TraversalContext) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return _equal(a, b, schema.target, ctx)


def _equal_sequence(a: Any, b: Any, schema: SequenceSchema, ctx: TraversalContext) -> bool:
    pair = (id(a), id(b))
    if pair in ctx.active:
        return True
    ctx.active.add(pair)
    try:
        for i in range(min(len(a), len(b))):
            with ctx.step(i):
                if not _equal(a[i], b[i], schema.element, ctx):
                    return False
        return len(a) == len(b)
    finally:
        ctx.active.discard(pair)


def _equal_map(a: Any, b: Any, schema: MapSchema, ctx: TraversalContext) -> bool:
    if len(a) != len(b):
        return False
    pair = (id(a), id(b))
    if pair in ctx.active:
        return True
    ctx.active.add(pair)
    try:
        a_keys = sorted_keys(a, schema.key, ctx)
        b_keys = sorted_keys(b, schema.key, ctx)
        for ka, kb in zip(a_keys, b_keys):
            with ctx.step(ka):
                if not _equal(ka, kb, schema.key, ctx):
                    return False
                if not _equal(a[ka], b[kb], schema.value, ctx):
                    return False
        return True
    finally:
        ctx.active.discard(pair)


def _self_reference_settles(a: Any, b: Any, name: str) -> bool:
    """Check the two-node mutual reference pattern on a self-reference field.

    When each side's referent points back (by identity) at what the opposite
    side points to, expanding the referents' own link would only revisit the
    referents themselves. Only their other fields are left to compare.
    """
    left = getattr(a, name)
    right = getattr(b, name)
    if left is None or right is None:
        return False
    return getattr(left, name) is getattr(b, name) and getattr(right, name) is getattr(a, name)


def _equal_referent_fields(
    left: Any, right: Any, schema: RecordSchema, link: str, ctx: TraversalContext
) -> bool:
    """Compare two referents on every field except the link back."""
    if left is right:
        return True
    ctx.notify(schema)
    for f in schema.fields:
        if f.name == link:
            continue
        with ctx.step(f.name):
            if not _equal(getattr(left, f.name), getattr(right, f.name), f.schema, ctx):
                return False
    return True


def _equal_record(a: Any, b: Any, schema: RecordSchema, ctx: TraversalContext) -> bool:
    pair = (id(a), id(b))
    if pair in ctx.active:
        return True
    ctx.active.add(pair)
    try:
        for f in schema.fields:
            with ctx.step(f.name):
                if f.self_reference and _self_reference_settles(a, b, f.name):
                    left, right = getattr(a, f.name), getattr(b, f.name)
                    if not _equal_referent_fields(left, right, schema, f.name, ctx):
                        return False
                    continue
                if not _equal(getattr(a, f.name), getattr(b, f.name), f.schema, ctx):
                    return False
        return True
    finally:
        ctx.active.discard(pair)


_EQUALIZERS: dict[Category, Callable[[Any, Any, Any, TraversalContext], bool]] = {
    Category.SCALAR: _equal_scalar,
    Category.TEXT: _equal_text,
    Category.OPTIONAL: _equal_optional,
    Category.SEQUENCE: _equal_sequence,
    Category.MAP: _equal_map,
    Category.RECORD: _equal_record,
}
