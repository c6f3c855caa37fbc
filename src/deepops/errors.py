"""Exception types.

All of these are raised while a schema is being built or when the API is
misused. The four engines themselves never raise for values that conform to
their schema.
"""

from __future__ import annotations


class DeepOpsError(Exception):
    """Base class for deepops errors."""


class SchemaError(DeepOpsError, TypeError):
    """A type's declared shape cannot be turned into a schema."""


class UnsupportedTypeError(SchemaError):
    """A declared type falls outside the six value categories."""

    def __init__(self, tp: object, owner: type | None = None, field_name: str | None = None):
        self.tp = tp
        self.owner = owner
        self.field_name = field_name
        where = f" (field {owner.__qualname__}.{field_name})" if owner and field_name else ""
        super().__init__(f"Unsupported type {tp!r}{where}")


class CapabilityError(SchemaError):
    """A record type cannot produce a fresh instance for deep copy."""


class SchemaMismatchError(DeepOpsError, TypeError):
    """Two operands do not share a schema."""
