"""Override functionality: protocols, table, and resolver."""

from deepops.core.override.core import OverrideTable, get_overrides
from deepops.core.override.models import (
    DeepCopyable,
    DeepEquatable,
    DeepHashable,
    DeepOrderable,
    Operation,
    OverrideEntry,
)

__all__ = [
    # Models
    "Operation",
    "OverrideEntry",
    "DeepEquatable",
    "DeepOrderable",
    "DeepHashable",
    "DeepCopyable",
    # Core
    "OverrideTable",
    "get_overrides",
]
