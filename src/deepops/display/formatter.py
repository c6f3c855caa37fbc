"""Indented structural rendering of any supported value.

Example output for a record holding a list and a map:

    {
     (Outer).numbers = [
      [0]->1
      [1]->2
     ]
     (Outer).ages = {
      (K("dad")[0] =>
       V(34)),
     }
     (Outer).parent = null
    }
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from deepops.core.context import TraversalContext
from deepops.core.schema import (
    MapSchema,
    OptionalSchema,
    RecordSchema,
    Schema,
    SequenceSchema,
    TextSchema,
)
from deepops.engine.ordering import sorted_keys


def pformat(value: Any, *, schema: Schema | None = None, indent: str = " ") -> str:
    """Render a value's shape as indented text.

    Args:
        value: Value to render.
        schema: Declared schema; derived from the runtime type when omitted.
        indent: Added per nesting level.

    Returns:
        Multi-line text. Map entries appear in sorted key order. References
        back to a value already being rendered (including self-reference
        fields) appear as ``<TypeName>`` instead of being expanded.
    """
    ctx = TraversalContext.create("format")
    parts: list[str] = []
    _render(value, schema, ctx, parts, indent, "")
    return "".join(parts)


def format_scalar(value: Any) -> str:
    """Single-token rendering of a scalar or text value."""
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, float) and value > 1000:
        return f"{value:.2f}"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, (bytes, bytearray)):
        return repr(bytes(value))
    return str(value)


def _render(
    value: Any,
    declared: Schema | None,
    ctx: TraversalContext,
    out: list[str],
    indent: str,
    cum_indent: str,
) -> None:
    if value is None:
        out.append("null")
        return
    schema = ctx.schema_of(declared, value)
    if isinstance(schema, OptionalSchema):
        _render(value, schema.target, ctx, out, indent, cum_indent)
        return
    if isinstance(schema, TextSchema) or not isinstance(schema, (SequenceSchema, MapSchema, RecordSchema)):
        out.append(format_scalar(value))
        return

    if id(value) in ctx.active:
        out.append(f"<{type(value).__qualname__}>")
        return
    ctx.active.add(id(value))
    new_indent = cum_indent + indent
    try:
        if isinstance(schema, RecordSchema):
            _render_record(value, schema, ctx, out, indent, cum_indent, new_indent)
        elif isinstance(schema, SequenceSchema):
            _render_sequence(value, schema, ctx, out, indent, cum_indent, new_indent)
        else:
            _render_map(value, schema, ctx, out, indent, cum_indent, new_indent)
    finally:
        ctx.active.discard(id(value))


def _render_record(value, schema, ctx, out, indent, cum_indent, new_indent) -> None:
    out.append("{")
    for f in schema.fields:
        out.append(f"\n{new_indent}({schema.type_name}).{f.name} = ")
        field_value = getattr(value, f.name)
        if f.self_reference and field_value is not None:
            out.append(f"<{schema.type_name}>")
        else:
            _render(field_value, f.schema, ctx, out, indent, new_indent)
    out.append(f"\n{cum_indent}}}")


def _render_sequence(value, schema, ctx, out, indent, cum_indent, new_indent) -> None:
    if not value:
        out.append("[]")
        return
    out.append("[")
    for i, item in enumerate(value):
        out.append(f"\n{new_indent}[{i}]->")
        _render(item, schema.element, ctx, out, indent, new_indent)
    out.append(f"\n{cum_indent}]")


def _render_map(value, schema, ctx, out, indent, cum_indent, new_indent) -> None:
    if not value:
        out.append("{}")
        return
    out.append("{")
    value_indent = new_indent + indent
    for i, key in enumerate(sorted_keys(value, schema.key, ctx)):
        out.append(f"\n{new_indent}(K(")
        _render(key, schema.key, ctx, out, indent, new_indent)
        out.append(f")[{i}] =>\n{value_indent}V(")
        _render(value[key], schema.value, ctx, out, indent, value_indent)
        out.append(")),")
    out.append(f"\n{cum_indent}}}")
