"""Schema registry, value classifier, and the record decorator.

Usage:
    @record
    @dataclass(slots=True)
    class Node:
        value: int
        label: str
        next: "Node | None" = None

    schema = get_registry().schema_for_type(Node)
    assert schema.get_field("next").self_reference

    # With generated operators (==, <, hash(), dup()):
    @record(operators=True)
    @dataclass
    class Point:
        x: float
        y: float
"""

from __future__ import annotations

import inspect
import logging
import threading
import types
import typing
from collections.abc import Callable, Mapping, MutableMapping, MutableSequence, Sequence
from dataclasses import fields as dataclass_fields
from dataclasses import is_dataclass
from enum import Enum, Flag
from functools import cache
from typing import Any, overload

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
from deepops.errors import CapabilityError, SchemaError, UnsupportedTypeError

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)
_SEQUENCE_ORIGINS = (list, tuple, Sequence, MutableSequence)
_MAP_ORIGINS = (dict, Mapping, MutableMapping)


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def record_kind(cls: Any) -> RecordKind | None:
    """Return how ``cls`` stores fields, or None if it is not a record type."""
    if not isinstance(cls, type):
        return None
    if _is_pydantic(cls):
        return RecordKind.PYDANTIC
    if is_dataclass(cls):
        return RecordKind.DATACLASS
    return None


def enum_ordinal(member: Enum) -> int:
    """Ordinal of an enum member used for ordering and hashing.

    Plain enums use the member's position in definition order. Flag members
    combine freely, so a flag's ordinal is its integer value.
    """
    if isinstance(member, Flag):
        return int(member.value)
    return _definition_order(type(member))[member]


@cache
def _definition_order(enum_cls: type[Enum]) -> dict[Enum, int]:
    return {member: position for position, member in enumerate(enum_cls)}


def _record_field_names(cls: type, kind: RecordKind) -> list[str]:
    if kind is RecordKind.PYDANTIC:
        return list(cls.model_fields)  # type: ignore[attr-defined]
    return [f.name for f in dataclass_fields(cls)]


def _record_hints(cls: type, kind: RecordKind) -> dict[str, Any]:
    """Resolved field annotations of a record type.

    Raises:
        NameError: If an annotation names a class that does not exist yet.
    """
    if kind is RecordKind.PYDANTIC:
        if not getattr(cls, "__pydantic_complete__", True):
            # Raises PydanticUndefinedAnnotation, a NameError, while forward refs are missing
            cls.model_rebuild()  # type: ignore[attr-defined]
        return {name: info.annotation for name, info in cls.model_fields.items()}  # type: ignore[attr-defined]
    return typing.get_type_hints(cls, localns={cls.__name__: cls})


def _check_allocatable(cls: type, kind: RecordKind) -> None:
    """Reject record types the copy engine could not instantiate.

    Types providing their own ``__deep_copy__`` never need a fresh instance.

    Raises:
        CapabilityError: If the type is abstract or constructs itself in ``__new__``.
    """
    if hasattr(cls, "__deep_copy__"):
        return
    if inspect.isabstract(cls):
        raise CapabilityError(f"Cannot allocate abstract record type {cls.__qualname__}")
    if kind is RecordKind.DATACLASS and cls.__new__ is not object.__new__:
        raise CapabilityError(
            f"Cannot allocate {cls.__qualname__}: it defines __new__. "
            f"Provide __deep_copy__ or register a copy override."
        )


def classify(tp: Any) -> Category:
    """Assign the traversal category of a declared type.

    Args:
        tp: A type or type hint (``int``, ``list[str]``, ``Node | None``...).

    Returns:
        The category every engine uses to pick its traversal.

    Raises:
        UnsupportedTypeError: If the type is outside the six categories.
    """
    return _registry.schema_for_type(tp).category


class SchemaRegistry:
    """Process-local registry mapping declared types to their schemas.

    Record schemas are built once, on registration or first use, and shared by
    every instance. Builds are staged and only published when the whole graph
    of referenced records built successfully, so a rejected type never leaves
    half-built schemas behind.
    """

    def __init__(self) -> None:
        """Initialize empty schema registry."""
        self._records: dict[type, RecordSchema] = {}
        self._deferred: set[type] = set()
        self._builtin: dict[type, Schema] = {}
        self._lock = threading.RLock()

    def register(self, cls: type) -> RecordSchema | None:
        """Register a record type and build its schema.

        If a type hint names a class that is not defined yet (a forward
        reference to a record declared further down the module), the build is
        deferred to the first use of the type.

        Args:
            cls: Dataclass or Pydantic model to register.

        Returns:
            The built schema, or None if the build was deferred.

        Raises:
            SchemaError: If cls is not a record type.
            UnsupportedTypeError: If a field's declared type is not supported.
            CapabilityError: If instances cannot be allocated for copying.
        """
        if record_kind(cls) is None:
            raise SchemaError(
                f"Record {getattr(cls, '__name__', cls)} must be a dataclass or Pydantic model. "
                f"Did you forget @dataclass decorator?"
            )
        with self._lock:
            try:
                return self._build_record(cls)
            except NameError as e:
                logger.debug("Deferring schema of %s: %s", cls.__qualname__, e)
                self._deferred.add(cls)
                return None

    def is_registered(self, cls: type) -> bool:
        """Check if a record type has a published schema.

        Args:
            cls: Class to check.

        Returns:
            True if the schema is built, False otherwise.
        """
        return cls in self._records

    def is_deferred(self, cls: type) -> bool:
        return cls in self._deferred

    def schema_for_type(self, tp: Any) -> Schema:
        """Build (or fetch) the schema of a declared type.

        Args:
            tp: A type or type hint.

        Returns:
            Schema describing tp.

        Raises:
            UnsupportedTypeError: If tp is outside the six categories.
            SchemaError: If a deferred forward reference still cannot be resolved.
        """
        if isinstance(tp, type):
            if tp in self._records:
                return self._records[tp]
            if tp in self._builtin:
                return self._builtin[tp]
        with self._lock:
            staged: dict[type, RecordSchema] = {}
            try:
                schema = self._from_hint(tp, staged)
            except NameError as e:
                raise SchemaError(f"Cannot resolve type hints for {tp!r}: {e}") from e
            self._publish(staged)
            if isinstance(tp, type) and not isinstance(schema, RecordSchema):
                self._builtin[tp] = schema
            return schema

    def schema_for_value(self, value: Any) -> Schema:
        """Derive a schema from a value's runtime type.

        Containers get runtime-classified elements. ``None`` yields an optional
        schema with no target.

        Args:
            value: Any supported value.

        Returns:
            Schema describing the value's type.
        """
        if value is None:
            return OptionalSchema(_NONE_TYPE, target=None)
        return self.schema_for_type(type(value))

    def _publish(self, staged: dict[type, RecordSchema]) -> None:
        for cls, schema in staged.items():
            self._records[cls] = schema
            self._deferred.discard(cls)
            logger.debug("Built schema %r with fields %s", schema, schema.field_names)

    def _build_record(self, cls: type) -> RecordSchema:
        if cls in self._records:
            return self._records[cls]
        staged: dict[type, RecordSchema] = {}
        schema = self._record(cls, staged)
        self._publish(staged)
        return schema

    def _record(self, cls: type, staged: dict[type, RecordSchema]) -> RecordSchema:
        if cls in self._records:
            return self._records[cls]
        if cls in staged:
            return staged[cls]

        kind = record_kind(cls)
        assert kind is not None
        _check_allocatable(cls, kind)

        # Published only once every field resolved; placeholder breaks self-reference loops
        schema = RecordSchema(cls, kind=kind)
        staged[cls] = schema
        hints = _record_hints(cls, kind)
        for name in _record_field_names(cls, kind):
            try:
                field_schema = self._from_hint(hints[name], staged)
            except UnsupportedTypeError as e:
                raise UnsupportedTypeError(e.tp, owner=cls, field_name=name) from e
            self_reference = isinstance(field_schema, OptionalSchema) and field_schema.target is schema
            schema.fields.append(FieldSchema(name, field_schema, self_reference=self_reference))
        return schema

    def _from_hint(self, tp: Any, staged: dict[type, RecordSchema]) -> Schema:
        origin = typing.get_origin(tp)
        args = typing.get_args(tp)

        if origin is typing.Union or origin is types.UnionType:
            present = [a for a in args if a is not _NONE_TYPE]
            if len(present) == 1 and len(args) == 2:
                return OptionalSchema(tp, target=self._from_hint(present[0], staged))
            raise UnsupportedTypeError(tp)

        if origin is not None:
            if origin in _SEQUENCE_ORIGINS:
                if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
                    # Fixed-shape tuples: positions are classified at runtime
                    return SequenceSchema(tuple, element=None)
                return SequenceSchema(origin, element=self._from_hint(args[0], staged))
            if origin in _MAP_ORIGINS:
                key, value = args
                return MapSchema(origin, key=self._from_hint(key, staged), value=self._from_hint(value, staged))
            if record_kind(origin) is not None:
                return self._record(origin, staged)
            raise UnsupportedTypeError(tp)

        if not isinstance(tp, type) or tp is _NONE_TYPE:
            raise UnsupportedTypeError(tp)

        # Order matters: bool < int, IntEnum < int, str < Sequence
        if issubclass(tp, bool):
            return ScalarSchema(tp, kind=ScalarKind.BOOL)
        if issubclass(tp, Enum):
            return ScalarSchema(tp, kind=ScalarKind.ENUM)
        if issubclass(tp, int):
            return ScalarSchema(tp, kind=ScalarKind.INT)
        if issubclass(tp, float):
            return ScalarSchema(tp, kind=ScalarKind.FLOAT)
        if issubclass(tp, (str, bytes, bytearray)):
            return TextSchema(tp)
        if record_kind(tp) is not None:
            return self._record(tp, staged)
        if issubclass(tp, (list, tuple)) or tp in _SEQUENCE_ORIGINS:
            return SequenceSchema(tp, element=None)
        if issubclass(tp, dict) or tp in _MAP_ORIGINS:
            return MapSchema(tp, key=None, value=None)
        raise UnsupportedTypeError(tp)


def schemas_compatible(a: Schema, b: Schema) -> bool:
    """Check whether two runtime-derived schemas describe comparable values.

    Records must be the same type, scalars the same kind, text the same
    family (str vs bytes-like), sequences the same family (list vs tuple).
    """
    if a is b:
        return True
    if a.category is not b.category:
        return False
    if isinstance(a, RecordSchema):
        return a.py_type is b.py_type
    if isinstance(a, ScalarSchema) and isinstance(b, ScalarSchema):
        if a.kind is not b.kind:
            return False
        return a.kind is not ScalarKind.ENUM or a.py_type is b.py_type
    if isinstance(a, TextSchema) and isinstance(b, TextSchema):
        return a.is_str == b.is_str
    if isinstance(a, SequenceSchema) and isinstance(b, SequenceSchema):
        return a.is_tuple == b.is_tuple
    return True


# Module-level registry instance
_registry = SchemaRegistry()


def get_registry() -> SchemaRegistry:
    """Access the global schema registry.

    Returns:
        The process-local SchemaRegistry instance.
    """
    return _registry


def schema_for_type(tp: Any) -> Schema:
    """Schema of a declared type from the global registry."""
    return _registry.schema_for_type(tp)


def schema_for_value(value: Any) -> Schema:
    """Schema of a value's runtime type from the global registry."""
    return _registry.schema_for_value(value)


@overload
def record(cls: type) -> type: ...


@overload
def record(cls: None = None, *, operators: bool = False) -> Callable[[type], type]: ...


def record(cls: type | None = None, *, operators: bool = False) -> type | Callable[[type], type]:
    """Register a dataclass or Pydantic model as a record type.

    Supports three forms:
        @record                       # bare decorator
        @record()                     # parenthesized, no args
        @record(operators=True)       # also install ==, <, hash() and dup()

    Args:
        cls: The class to register, or None if called with arguments.
        operators: If True, comparison, hashing and ``dup()`` delegate to the
            deep engines.

    Returns:
        Decorated class or decorator function.

    Raises:
        SchemaError: If class is neither a dataclass nor Pydantic model.
        UnsupportedTypeError: If a field's declared type is not supported.

    Note:
        Apply @record AFTER @dataclass:

        >>> @record
        ... @dataclass(slots=True)
        ... class MyRecord:
        ...     value: int
    """

    def decorator(c: type) -> type:
        _registry.register(c)
        if operators:
            # Late import to avoid circular dependency
            from deepops.engine.operators import install_operators

            install_operators(c)
        return c

    if cls is None:
        return decorator
    return decorator(cls)
