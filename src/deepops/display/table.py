"""Aligned plain-text tables of uniformly shaped records.

Usage:
    print(tabulate(results))
    print(tabulate(results, header=False))
    print(tabulate(results, header=["Module", "Test", "Result"]))

Output:
    module    test   result
    --------  -----  ------
    tests.a   first  pass
    tests.b   other  fail
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from deepops.core.context import TraversalContext
from deepops.core.schema import (
    MapSchema,
    OptionalSchema,
    RecordSchema,
    Schema,
    SequenceSchema,
    get_registry,
)
from deepops.display.formatter import format_scalar
from deepops.engine.ordering import sorted_keys

COLUMN_GAP = "  "


def tabulate(
    rows: Sequence[Any],
    header: bool | Sequence[str] = True,
    *,
    schema: RecordSchema | None = None,
) -> str:
    """Render records as an aligned text table.

    Args:
        rows: Records of one type, one per table row.
        header: True to derive column names from field names, False for no
            header, or explicit column names.
        schema: Record schema of the rows; derived from the first row when omitted.

    Returns:
        Table text without a trailing newline. Each column is as wide as its
        widest cell; a dash row separates header and body.

    Raises:
        ValueError: If an explicit header does not match the column count.
        TypeError: If rows are not records.
    """
    if schema is None:
        if not rows:
            return COLUMN_GAP.join(header) if isinstance(header, Sequence) and not isinstance(header, str) else ""
        found = get_registry().schema_for_value(rows[0])
        if not isinstance(found, RecordSchema):
            raise TypeError(f"tabulate expects records, got {type(rows[0]).__qualname__}")
        schema = found

    columns = schema.field_names
    if header is True:
        names: list[str] | None = list(columns)
    elif header is False:
        names = None
    else:
        names = list(header)
        if len(names) != len(columns):
            raise ValueError(f"Header has {len(names)} names for {len(columns)} columns")

    ctx = TraversalContext.create("format")
    body = [[format_cell(getattr(row, f.name), f.schema, ctx) for f in schema.fields] for row in rows]

    widths = [0] * len(columns)
    for line in ([names] if names else []) + body:
        for i, cell in enumerate(line):
            widths[i] = max(widths[i], len(cell))

    lines = []
    if names:
        lines.append(_join(names, widths))
        lines.append(_join(["-" * w for w in widths], widths))
    lines.extend(_join(line, widths) for line in body)
    return "\n".join(lines)


def _join(cells: Sequence[str], widths: Sequence[int]) -> str:
    return COLUMN_GAP.join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()


def format_cell(value: Any, declared: Schema | None, ctx: TraversalContext) -> str:
    """One-line rendering of a value for a table cell. Text is unquoted."""
    if isinstance(value, str):
        return value
    schema = ctx.schema_of(declared, value) if value is not None else None
    if isinstance(schema, OptionalSchema):
        schema = ctx.schema_of(schema.target, value)
    if not isinstance(schema, (SequenceSchema, MapSchema, RecordSchema)):
        return format_scalar(value)

    if id(value) in ctx.active:
        return f"<{type(value).__qualname__}>"
    ctx.active.add(id(value))
    try:
        return _format_container(value, schema, ctx)
    finally:
        ctx.active.discard(id(value))


def _format_container(value: Any, schema: Schema, ctx: TraversalContext) -> str:
    if isinstance(schema, SequenceSchema):
        return "[" + ", ".join(format_cell(v, schema.element, ctx) for v in value) + "]"
    if isinstance(schema, MapSchema):
        items = (
            f"{format_cell(k, schema.key, ctx)}: {format_cell(value[k], schema.value, ctx)}"
            for k in sorted_keys(value, schema.key, ctx)
        )
        return "{" + ", ".join(items) + "}"
    inner = ", ".join(
        f"{f.name}={format_cell(getattr(value, f.name), f.schema, ctx)}" for f in schema.fields
    )
    return f"{schema.type_name}({inner})"
