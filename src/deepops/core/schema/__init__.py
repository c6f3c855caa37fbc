"""Schema functionality: value categories, registry, classifier, and decorator."""

from deepops.core.schema.core import (
    SchemaRegistry,
    classify,
    enum_ordinal,
    get_registry,
    record,
    record_kind,
    schema_for_type,
    schema_for_value,
    schemas_compatible,
)
from deepops.core.schema.models import (
    Category,
    FieldSchema,
    MapSchema,
    OptionalSchema,
    RecordKind,
    RecordSchema,
    ScalarKind,
    ScalarSchema,
    Schema,
    SequenceSchema,
    TextSchema,
)

__all__ = [
    # Models
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
    # Core
    "record",
    "classify",
    "get_registry",
    "SchemaRegistry",
    "schema_for_type",
    "schema_for_value",
    "schemas_compatible",
    "record_kind",
    "enum_ordinal",
]
