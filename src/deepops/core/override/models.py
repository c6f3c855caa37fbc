"""Override models: protocols and table entries.

Override protocols are optional interfaces a type can implement to replace the
generic structural traversal for one operation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Self, runtime_checkable


class Operation(Enum):
    """The four engine operations, valued by their protocol method name."""

    EQUAL = "__deep_eq__"
    COMPARE = "__deep_cmp__"
    HASH = "__deep_hash__"
    COPY = "__deep_copy__"


@runtime_checkable
class DeepEquatable(Protocol):
    """Own equality instead of field-by-field comparison."""

    def __deep_eq__(self, other: Any) -> bool: ...


@runtime_checkable
class DeepOrderable(Protocol):
    """Own three-way ordering, e.g. by a derived key. Returns <0, 0 or >0."""

    def __deep_cmp__(self, other: Any) -> int: ...


@runtime_checkable
class DeepHashable(Protocol):
    """Own hash, must agree with the type's equality."""

    def __deep_hash__(self) -> int: ...


@runtime_checkable
class DeepCopyable(Protocol):
    """Own copy, e.g. to pool or share instances."""

    def __deep_copy__(self) -> Self: ...


@dataclass(slots=True, frozen=True)
class OverrideEntry:
    """Custom implementations registered for one type.

    Attributes:
        eq: ``eq(a, b) -> bool``.
        cmp: ``cmp(a, b) -> int``.
        hash: ``hash(a) -> int``.
        copy: ``copy(a) -> value``.
    """

    eq: Callable[[Any, Any], bool] | None = None
    cmp: Callable[[Any, Any], int] | None = None
    hash: Callable[[Any], int] | None = None
    copy: Callable[[Any], Any] | None = None

    def get(self, operation: Operation) -> Callable[..., Any] | None:
        """Return the implementation for one operation, if any."""
        slots = {
            Operation.EQUAL: self.eq,
            Operation.COMPARE: self.cmp,
            Operation.HASH: self.hash,
            Operation.COPY: self.copy,
        }
        return slots[operation]

    def is_empty(self) -> bool:
        return self.eq is None and self.cmp is None and self.hash is None and self.copy is None
