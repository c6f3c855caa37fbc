"""deepops: deep equality, ordering, hashing and copy for structured values.

Usage:
    from dataclasses import dataclass
    from deepops import record, equal_deep, compare_deep, hash_deep, copy_deep

    @record
    @dataclass
    class Node:
        value: int
        tags: dict[str, list[float]]
        next: "Node | None" = None

    a = Node(1, {"x": [1.0, 2.0]})
    b = copy_deep(a)
    assert equal_deep(a, b) and hash_deep(a) == hash_deep(b)
    assert compare_deep(a, Node(2, {})) == -1
"""

__version__ = "0.1.0"

# Configuration
from deepops.config import EngineSettings, configure, get_settings, reset_settings

# Schemas and overrides
from deepops.core import (
    Category,
    OverrideTable,
    Schema,
    classify,
    get_overrides,
    get_registry,
    record,
    schema_for_type,
    schema_for_value,
)

# Presentation
from deepops.display import pformat, tabulate

# Engines
from deepops.engine import compare_deep, copy_deep, copy_into, equal_deep, hash_deep

# Errors
from deepops.errors import (
    CapabilityError,
    DeepOpsError,
    SchemaError,
    SchemaMismatchError,
    UnsupportedTypeError,
)

# Harness
from deepops.harness import run_tests, ut

# Tracing
from deepops.tracing import DiagnosticHook, LoggingHook, RecordingHook, TraversalEvent

__all__ = [
    # Engines
    "equal_deep",
    "compare_deep",
    "hash_deep",
    "copy_deep",
    "copy_into",
    # Schemas
    "record",
    "classify",
    "schema_for_type",
    "schema_for_value",
    "get_registry",
    "Category",
    "Schema",
    # Overrides
    "OverrideTable",
    "get_overrides",
    # Config
    "EngineSettings",
    "get_settings",
    "configure",
    "reset_settings",
    # Tracing
    "DiagnosticHook",
    "LoggingHook",
    "RecordingHook",
    "TraversalEvent",
    # Display
    "pformat",
    "tabulate",
    # Harness
    "ut",
    "run_tests",
    # Errors
    "DeepOpsError",
    "SchemaError",
    "UnsupportedTypeError",
    "CapabilityError",
    "SchemaMismatchError",
]
