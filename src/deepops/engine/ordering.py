"""Deep three-way comparison.

Values are ordered by declared field order, element order and sorted key
order. Results are always -1, 0 or 1.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from functools import cmp_to_key
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
    enum_ordinal,
)
from deepops.tracing import DiagnosticHook


def compare_deep(
    a: Any,
    b: Any,
    *,
    schema: Schema | None = None,
    hook: DiagnosticHook | None = None,
    settings: EngineSettings | None = None,
    context: TraversalContext | None = None,
) -> int:
    """Order two values structurally.

    Args:
        a: Left operand.
        b: Right operand.
        schema: Declared schema of both operands; derived from their runtime
            types when omitted.
        hook: Diagnostic hook invoked at every recursion entry.
        settings: Engine settings; defaults to the process-wide settings.
        context: Existing traversal context (for overrides calling back in).

    Returns:
        -1 if a orders before b, 0 if they are ordered-equal, 1 otherwise.

    Note:
        Operands of incompatible shapes never raise: they are ordered by
        category, then by type name, so sorting mixed data stays total.
    """
    ctx = context or TraversalContext.create("compare", hook=hook, settings=settings)
    return _compare(a, b, schema, ctx)


def sorted_keys(mapping: Mapping[Any, Any], key_schema: Schema | None, ctx: TraversalContext) -> list[Any]:
    """Keys of a mapping in deterministic deep order.

    Map enumeration order depends on insertion history, so every engine that
    walks a map walks it in this order instead.
    """
    keys = list(mapping)
    if len(keys) < 2:
        return keys
    key_ctx = ctx.derive("compare")
    return sorted(keys, key=cmp_to_key(lambda x, y: _compare(x, y, key_schema, key_ctx)))


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _compare(a: Any, b: Any, declared: Schema | None, ctx: TraversalContext) -> int:
    if a is b:
        return 0
    schema = ctx.pair_schema(declared, a, b)
    if schema is None:
        return _compare_mismatched(a, b, ctx)
    ctx.notify(schema)

    if a is not None and b is not None:
        override = ctx.override(a, Operation.COMPARE)
        if override is not None:
            return _sign(override(a, b))

    return _COMPARERS[schema.category](a, b, schema, ctx)


def _compare_mismatched(a: Any, b: Any, ctx: TraversalContext) -> int:
    """Order values of different shapes by category, then type name."""
    sa = ctx.registry.schema_for_value(a)
    sb = ctx.registry.schema_for_value(b)
    left = (sa.category.value, sa.type_name)
    right = (sb.category.value, sb.type_name)
    return (left > right) - (left < right)


def _compare_scalar(a: Any, b: Any, schema: ScalarSchema, ctx: TraversalContext) -> int:
    if schema.kind is ScalarKind.FLOAT:
        a_nan, b_nan = math.isnan(a), math.isnan(b)
        if a_nan or b_nan:
            # NaN equals NaN and orders after every number
            return a_nan - b_nan
    elif schema.kind is ScalarKind.ENUM:
        a, b = enum_ordinal(a), enum_ordinal(b)
    return (a > b) - (a < b)


def _compare_text(a: Any, b: Any, schema: Schema, ctx: TraversalContext) -> int:
    return (a > b) - (a < b)


def _compare_optional(a: Any, b: Any, schema: OptionalSchema, ctx: TraversalContext) -> int:
    if a is None or b is None:
        # Absent orders strictly before present
        return (a is not None) - (b is not None)
    return _compare(a, b, schema.target, ctx)


def _compare_sequence(a: Any, b: Any, schema: SequenceSchema, ctx: TraversalContext) -> int:
    pair = (id(a), id(b))
    if pair in ctx.active:
        return 0
    ctx.active.add(pair)
    try:
        for i in range(min(len(a), len(b))):
            with ctx.step(i):
                result = _compare(a[i], b[i], schema.element, ctx)
            if result:
                return result
        return (len(a) > len(b)) - (len(a) < len(b))
    finally:
        ctx.active.discard(pair)


def _compare_map(a: Any, b: Any, schema: MapSchema, ctx: TraversalContext) -> int:
    pair = (id(a), id(b))
    if pair in ctx.active:
        return 0
    ctx.active.add(pair)
    try:
        a_keys = sorted_keys(a, schema.key, ctx)
        b_keys = sorted_keys(b, schema.key, ctx)

        # Sorted key sequences first, lexicographically
        for ka, kb in zip(a_keys, b_keys):
            with ctx.step(ka):
                result = _compare(ka, kb, schema.key, ctx)
            if result:
                return result
        if len(a_keys) != len(b_keys):
            return (len(a_keys) > len(b_keys)) - (len(a_keys) < len(b_keys))

        # Same keys: values at matching sorted keys
        for ka, kb in zip(a_keys, b_keys):
            with ctx.step(ka):
                result = _compare(a[ka], b[kb], schema.value, ctx)
            if result:
                return result
        return 0
    finally:
        ctx.active.discard(pair)


def _compare_record(a: Any, b: Any, schema: RecordSchema, ctx: TraversalContext) -> int:
    pair = (id(a), id(b))
    if pair in ctx.active:
        return 0
    ctx.active.add(pair)
    try:
        for f in schema.fields:
            with ctx.step(f.name):
                result = _compare(getattr(a, f.name), getattr(b, f.name), f.schema, ctx)
            if result:
                return result
        return 0
    finally:
        ctx.active.discard(pair)


_COMPARERS: dict[Category, Callable[[Any, Any, Any, TraversalContext], int]] = {
    Category.SCALAR: _compare_scalar,
    Category.TEXT: _compare_text,
    Category.OPTIONAL: _compare_optional,
    Category.SEQUENCE: _compare_sequence,
    Category.MAP: _compare_map,
    Category.RECORD: _compare_record,
}
