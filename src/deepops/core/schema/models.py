"""Schema models: value categories and per-type shape descriptions.

A schema is built once per declared type and shared by every instance of that
type. Record schemas may refer to themselves (a ``next: Node | None`` field),
so schemas compare and hash by identity and render without recursing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar


class Category(Enum):
    """Traversal category of a declared type."""

    SCALAR = auto()
    TEXT = auto()
    OPTIONAL = auto()
    SEQUENCE = auto()
    MAP = auto()
    RECORD = auto()


class ScalarKind(Enum):
    """Flavor of scalar, selects comparison and hash contribution."""

    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    ENUM = auto()


class RecordKind(Enum):
    """How a record type stores its fields and allocates fresh instances."""

    DATACLASS = auto()
    PYDANTIC = auto()


@dataclass(slots=True, eq=False, repr=False)
class Schema:
    """Base for all schema nodes."""

    py_type: Any
    category: ClassVar[Category]

    @property
    def type_name(self) -> str:
        """Readable name of the declared type."""
        return getattr(self.py_type, "__qualname__", None) or repr(self.py_type)

    def describe(self) -> str:
        return self.type_name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()})"


@dataclass(slots=True, eq=False, repr=False)
class ScalarSchema(Schema):
    kind: ScalarKind
    category: ClassVar[Category] = Category.SCALAR


@dataclass(slots=True, eq=False, repr=False)
class TextSchema(Schema):
    category: ClassVar[Category] = Category.TEXT

    @property
    def is_str(self) -> bool:
        """True for ``str``, False for bytes-like text."""
        return issubclass(self.py_type, str)

    @property
    def mutable(self) -> bool:
        """Mutable text is copied by value instead of shared."""
        return issubclass(self.py_type, bytearray)


@dataclass(slots=True, eq=False, repr=False)
class OptionalSchema(Schema):
    """Nullable single reference. ``target`` is None only for a bare ``None`` value."""

    target: Schema | None
    category: ClassVar[Category] = Category.OPTIONAL

    def describe(self) -> str:
        inner = self.target.describe() if self.target is not None else "None"
        return f"{inner} | None"


@dataclass(slots=True, eq=False, repr=False)
class SequenceSchema(Schema):
    """Ordered container. ``element`` None means elements are classified at runtime."""

    element: Schema | None
    category: ClassVar[Category] = Category.SEQUENCE

    @property
    def is_tuple(self) -> bool:
        return isinstance(self.py_type, type) and issubclass(self.py_type, tuple)

    def describe(self) -> str:
        inner = self.element.describe() if self.element is not None else "?"
        return f"{self.type_name}[{inner}]"


@dataclass(slots=True, eq=False, repr=False)
class MapSchema(Schema):
    """Key/value container with no intrinsic order."""

    key: Schema | None
    value: Schema | None
    category: ClassVar[Category] = Category.MAP

    def describe(self) -> str:
        key = self.key.describe() if self.key is not None else "?"
        value = self.value.describe() if self.value is not None else "?"
        return f"{self.type_name}[{key}, {value}]"


@dataclass(slots=True, eq=False, repr=False)
class FieldSchema:
    """One named field of a record, in declaration order.

    Attributes:
        name: Attribute name on instances.
        schema: Schema of the declared field type.
        self_reference: Field is an optional reference whose target is the
            enclosing record's own schema.
    """

    name: str
    schema: Schema
    self_reference: bool = False

    def __repr__(self) -> str:
        marker = " (self)" if self.self_reference else ""
        return f"FieldSchema({self.name}: {self.schema.describe()}{marker})"


@dataclass(slots=True, eq=False, repr=False)
class RecordSchema(Schema):
    """Fixed-shape aggregate of named, ordered fields."""

    kind: RecordKind
    fields: list[FieldSchema] = field(default_factory=list)
    category: ClassVar[Category] = Category.RECORD

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> FieldSchema:
        """Look up a field by name.

        Raises:
            KeyError: If the record has no such field.
        """
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)
