"""Core functionalities: schemas, overrides, and traversal context.

Architecture Note:
    core/ contains the stateless building blocks shared by every engine: the
    value classifier and schema registry, the override resolver, and the
    per-call traversal context. The engines themselves live in engine/.
"""

from deepops.core.context import TraversalContext
from deepops.core.override import (
    DeepCopyable,
    DeepEquatable,
    DeepHashable,
    DeepOrderable,
    Operation,
    OverrideEntry,
    OverrideTable,
    get_overrides,
)
from deepops.core.schema import (
    Category,
    FieldSchema,
    MapSchema,
    OptionalSchema,
    RecordKind,
    RecordSchema,
    ScalarKind,
    ScalarSchema,
    Schema,
    SchemaRegistry,
    SequenceSchema,
    TextSchema,
    classify,
    get_registry,
    record,
    schema_for_type,
    schema_for_value,
)

__all__ = [
    # Schema
    "Category",
    "ScalarKind",
    "RecordKind",
    "Schema",
    "ScalarSchema",
    "TextSchema",
    "OptionalSchema",
    "SequenceSchema",
    "MapSchema",
    "FieldSchema",
    "RecordSchema",
    "SchemaRegistry",
    "record",
    "classify",
    "get_registry",
    "schema_for_type",
    "schema_for_value",
    # Override
    "Operation",
    "OverrideEntry",
    "OverrideTable",
    "get_overrides",
    "DeepEquatable",
    "DeepOrderable",
    "DeepHashable",
    "DeepCopyable",
    # Context
    "TraversalContext",
]
