"""Deep copy with an explicit aliasing policy.

Aliasing policy:
    - Scalars, ``str`` and ``bytes`` are immutable and shared.
    - ``bytearray`` is mutable text and copied by value.
    - Sequences and maps get new backing storage. Map keys are shared.
    - Optional references allocate a new referent when present.
    - Records are allocated fresh, without running ``__init__``, and filled
      field by field in declared order. Pydantic extra and private values are
      deep-copied like fields.

Shared and cyclic structure is reproduced, not duplicated: a source object
reached twice yields the same copy both times.
"""

from __future__ import annotations

import copy as _copy_module
from collections.abc import Callable
from typing import Any

from deepops.config import EngineSettings
from deepops.core.context import TraversalContext
from deepops.core.override import Operation
from deepops.core.schema import (
    Category,
    MapSchema,
    OptionalSchema,
    RecordKind,
    RecordSchema,
    Schema,
    SequenceSchema,
    TextSchema,
)
from deepops.errors import CapabilityError, SchemaMismatchError
from deepops.tracing import DiagnosticHook


def copy_deep(
    src: Any,
    *,
    schema: Schema | None = None,
    hook: DiagnosticHook | None = None,
    settings: EngineSettings | None = None,
    context: TraversalContext | None = None,
) -> Any:
    """Produce a value equal to src that shares no mutable storage with it.

    Args:
        src: Value to copy. Never modified.
        schema: Declared schema; derived from the runtime type when omitted.
        hook: Diagnostic hook invoked at every recursion entry.
        settings: Engine settings; defaults to the process-wide settings.
        context: Existing traversal context (for overrides calling back in).

    Returns:
        An independent copy, ``equal_deep`` to src.
    """
    ctx = context or TraversalContext.create("copy", hook=hook, settings=settings)
    return _copy(src, schema, ctx)


def copy_into(
    dst: Any,
    src: Any,
    *,
    hook: DiagnosticHook | None = None,
    settings: EngineSettings | None = None,
) -> Any:
    """Deep-copy the content of src into the existing object dst.

    Works for records (every field is replaced), lists and dicts. Content is
    first copied into a temporary and then moved into place, so dst is never
    overwritten while it is still being read, whether it is src itself or an
    object src refers to.
    References inside src that lead back to src end up pointing at dst.

    Args:
        dst: Destination record, list or dict. Modified in place.
        src: Source value of the same type. Never modified unless it is or reaches dst.
        hook: Diagnostic hook invoked at every recursion entry.
        settings: Engine settings; defaults to the process-wide settings.

    Returns:
        dst, for chaining.

    Raises:
        SchemaMismatchError: If dst and src are of different types.
        CapabilityError: If dst is immutable (scalar, text, tuple).
    """
    if type(dst) is not type(src):
        raise SchemaMismatchError(
            f"Cannot copy {type(src).__qualname__} into {type(dst).__qualname__}"
        )
    ctx = TraversalContext.create("copy", hook=hook, settings=settings)
    schema = ctx.registry.schema_for_value(src)
    if not isinstance(schema, RecordSchema) and not isinstance(dst, (list, dict)):
        raise CapabilityError(f"Cannot copy into immutable {type(dst).__qualname__}")
    ctx.notify(schema)
    ctx.memo[id(src)] = dst

    if isinstance(schema, RecordSchema):
        # dst may be src itself or reachable from it, so it is only written once src is read
        temp = _allocate(schema)
        _fill_record(temp, src, schema, ctx)
        _move_record(dst, temp, schema)
    elif isinstance(dst, list):
        items = []
        for i, item in enumerate(src):
            with ctx.step(i):
                items.append(_copy(item, schema.element, ctx))
        dst[:] = items
    else:
        content = {}
        for key, value in src.items():
            with ctx.step(key):
                content[key] = _copy(value, schema.value, ctx)
        dst.clear()
        dst.update(content)
    return dst


def _copy(src: Any, declared: Schema | None, ctx: TraversalContext) -> Any:
    schema = ctx.schema_of(declared, src)
    ctx.notify(schema)

    override = ctx.override(src, Operation.COPY)
    if override is not None:
        return override(src)

    return _COPIERS[schema.category](src, schema, ctx)


def _copy_scalar(src: Any, schema: Schema, ctx: TraversalContext) -> Any:
    return src


def _copy_text(src: Any, schema: TextSchema, ctx: TraversalContext) -> Any:
    if isinstance(src, bytearray):
        return bytearray(src)
    return src


def _copy_optional(src: Any, schema: OptionalSchema, ctx: TraversalContext) -> Any:
    if src is None:
        return None
    return _copy(src, schema.target, ctx)


def _copy_sequence(src: Any, schema: SequenceSchema, ctx: TraversalContext) -> Any:
    if id(src) in ctx.memo:
        return ctx.memo[id(src)]
    if isinstance(src, tuple):
        # Immutable: cannot be registered before its items exist
        items = []
        for i, item in enumerate(src):
            with ctx.step(i):
                items.append(_copy(item, schema.element, ctx))
        result = type(src)(items) if type(src) is tuple else _rebuild_tuple(src, items)
        ctx.memo[id(src)] = result
        return result

    result = type(src)() if isinstance(src, list) and type(src) is not list else []
    ctx.memo[id(src)] = result
    for i, item in enumerate(src):
        with ctx.step(i):
            result.append(_copy(item, schema.element, ctx))
    return result


def _rebuild_tuple(src: tuple[Any, ...], items: list[Any]) -> tuple[Any, ...]:
    make = getattr(type(src), "_make", None)
    if make is not None:
        return make(items)
    return type(src)(items)


def _empty_like(src: Any) -> Any:
    """Empty mapping of the same type, keeping configuration such as a default factory."""
    result = _copy_module.copy(src)
    result.clear()
    return result


def _copy_map(src: Any, schema: MapSchema, ctx: TraversalContext) -> Any:
    if id(src) in ctx.memo:
        return ctx.memo[id(src)]
    result = {} if type(src) is dict or not isinstance(src, dict) else _empty_like(src)
    ctx.memo[id(src)] = result
    for key, value in src.items():
        with ctx.step(key):
            # Keys are only used for lookup and are shared
            result[key] = _copy(value, schema.value, ctx)
    return result


_PYDANTIC_STATE = ("__pydantic_fields_set__", "__pydantic_extra__", "__pydantic_private__")


def _allocate(schema: RecordSchema) -> Any:
    cls = schema.py_type
    if schema.kind is RecordKind.PYDANTIC:
        return cls.model_construct()
    return object.__new__(cls)


def _copy_entries(entries: dict[str, Any], ctx: TraversalContext) -> dict[str, Any]:
    result = {}
    for name, value in entries.items():
        with ctx.step(name):
            result[name] = _copy(value, None, ctx)
    return result


def _fill_record(dst: Any, src: Any, schema: RecordSchema, ctx: TraversalContext) -> None:
    for f in schema.fields:
        with ctx.step(f.name):
            object.__setattr__(dst, f.name, _copy(getattr(src, f.name), f.schema, ctx))
    if schema.kind is RecordKind.PYDANTIC:
        object.__setattr__(dst, "__pydantic_fields_set__", set(src.__pydantic_fields_set__))
        extra = getattr(src, "__pydantic_extra__", None)
        if extra is not None:
            object.__setattr__(dst, "__pydantic_extra__", _copy_entries(extra, ctx))
        private = getattr(src, "__pydantic_private__", None)
        if private is not None:
            object.__setattr__(dst, "__pydantic_private__", _copy_entries(private, ctx))


def _move_record(dst: Any, temp: Any, schema: RecordSchema) -> None:
    names = [f.name for f in schema.fields]
    if schema.kind is RecordKind.PYDANTIC:
        names.extend(_PYDANTIC_STATE)
    for name in names:
        object.__setattr__(dst, name, getattr(temp, name))


def _copy_record(src: Any, schema: RecordSchema, ctx: TraversalContext) -> Any:
    if id(src) in ctx.memo:
        return ctx.memo[id(src)]
    result = _allocate(schema)
    ctx.memo[id(src)] = result
    _fill_record(result, src, schema, ctx)
    return result


_COPIERS: dict[Category, Callable[[Any, Any, TraversalContext], Any]] = {
    Category.SCALAR: _copy_scalar,
    Category.TEXT: _copy_text,
    Category.OPTIONAL: _copy_optional,
    Category.SEQUENCE: _copy_sequence,
    Category.MAP: _copy_map,
    Category.RECORD: _copy_record,
}
