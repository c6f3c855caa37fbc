"""Deep, order-sensitive hash accumulation.

Every value folds its contributions into ``result = result * multiplier +
contribution`` starting from the configured seed, wrapping at the configured
width. Maps fold in sorted key order so values that are ``equal_deep`` hash
equal regardless of insertion history.
"""

from __future__ import annotations

import hashlib
import math
import struct
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
    TextSchema,
    enum_ordinal,
)
from deepops.engine.ordering import sorted_keys
from deepops.tracing import DiagnosticHook

_FLOAT_BYTES = struct.Struct("<d")
_SIGNED_BYTES = struct.Struct("<8b")
_CANONICAL_NAN = float("nan")


def hash_deep(
    value: Any,
    *,
    schema: Schema | None = None,
    hook: DiagnosticHook | None = None,
    settings: EngineSettings | None = None,
    context: TraversalContext | None = None,
) -> int:
    """Hash a value from all of its content.

    Args:
        value: Value to hash.
        schema: Declared schema; derived from the runtime type when omitted.
        hook: Diagnostic hook invoked at every recursion entry.
        settings: Engine settings (seed, multiplier, width).
        context: Existing traversal context (for overrides calling back in).

    Returns:
        Non-negative integer below ``2 ** settings.hash_bits``. Stable across
        processes: text is hashed by content, not with Python's salted hash().
    """
    ctx = context or TraversalContext.create("hash", hook=hook, settings=settings)
    return _hash(value, schema, ctx)


def text_digest(text: str | bytes | bytearray) -> int:
    """Content hash of text, independent of interning and PYTHONHASHSEED."""
    data = text.encode("utf-8", "surrogatepass") if isinstance(text, str) else bytes(text)
    return int.from_bytes(hashlib.blake2b(data, digest_size=8).digest(), "little")


def _mix(result: int, contribution: int, ctx: TraversalContext) -> int:
    settings = ctx.settings
    return (result * settings.hash_multiplier + contribution) & settings.hash_mask


def _hash(value: Any, declared: Schema | None, ctx: TraversalContext) -> int:
    schema = ctx.schema_of(declared, value)
    ctx.notify(schema)

    override = ctx.override(value, Operation.HASH)
    if override is not None:
        return int(override(value)) & ctx.settings.hash_mask

    return _HASHERS[schema.category](value, schema, ctx)


def _hash_scalar(value: Any, schema: ScalarSchema, ctx: TraversalContext) -> int:
    seed = ctx.settings.hash_seed
    if schema.kind is ScalarKind.FLOAT:
        number = float(value)
        if math.isnan(number):
            # All NaNs are equal, so they must share one encoding
            number = _CANONICAL_NAN
        result = seed
        for byte in _SIGNED_BYTES.unpack(_FLOAT_BYTES.pack(number)):
            result = _mix(result, byte, ctx)
        return result
    if schema.kind is ScalarKind.ENUM:
        return _mix(seed, enum_ordinal(value), ctx)
    return _mix(seed, int(value), ctx)


def _hash_text(value: Any, schema: TextSchema, ctx: TraversalContext) -> int:
    return _mix(ctx.settings.hash_seed, text_digest(value), ctx)


def _hash_optional(value: Any, schema: OptionalSchema, ctx: TraversalContext) -> int:
    result = ctx.settings.hash_seed
    if value is not None:
        result = _mix(result, _hash(value, schema.target, ctx), ctx)
    return result


def _hash_sequence(value: Any, schema: SequenceSchema, ctx: TraversalContext) -> int:
    result = ctx.settings.hash_seed
    if id(value) in ctx.active:
        return result
    ctx.active.add(id(value))
    try:
        for i, item in enumerate(value):
            with ctx.step(i):
                result = _mix(result, _hash(item, schema.element, ctx), ctx)
        return result
    finally:
        ctx.active.discard(id(value))


def _hash_map(value: Any, schema: MapSchema, ctx: TraversalContext) -> int:
    result = ctx.settings.hash_seed
    if id(value) in ctx.active:
        return result
    ctx.active.add(id(value))
    try:
        for key in sorted_keys(value, schema.key, ctx):
            with ctx.step(key):
                result = _mix(result, _hash(key, schema.key, ctx), ctx)
                result = _mix(result, _hash(value[key], schema.value, ctx), ctx)
        return result
    finally:
        ctx.active.discard(id(value))


def _hash_record(value: Any, schema: RecordSchema, ctx: TraversalContext) -> int:
    result = ctx.settings.hash_seed
    if id(value) in ctx.active:
        return result
    ctx.active.add(id(value))
    try:
        for f in schema.fields:
            with ctx.step(f.name):
                result = _mix(result, _hash(getattr(value, f.name), f.schema, ctx), ctx)
        return result
    finally:
        ctx.active.discard(id(value))


_HASHERS: dict[Category, Callable[[Any, Any, TraversalContext], int]] = {
    Category.SCALAR: _hash_scalar,
    Category.TEXT: _hash_text,
    Category.OPTIONAL: _hash_optional,
    Category.SEQUENCE: _hash_sequence,
    Category.MAP: _hash_map,
    Category.RECORD: _hash_record,
}
