"""Generated comparison, hashing and dup() for record types.

``record(operators=True)`` installs these so instances work with ``==``,
``sorted()``, sets and dict keys without hand-writing any of them:

    @record(operators=True)
    @dataclass
    class Version:
        tags: dict[str, int]
        label: str = ""

    assert Version({"a": 1}) == Version({"a": 1})
    index = {Version({"a": 1}): "first"}
    clone = Version({"a": 1}).dup()
"""

from __future__ import annotations

from typing import Any

from deepops.engine.copying import copy_deep
from deepops.engine.equality import equal_deep
from deepops.engine.hashing import hash_deep
from deepops.engine.ordering import compare_deep


def _eq(self: Any, other: Any) -> Any:
    if type(other) is not type(self):
        return NotImplemented
    return equal_deep(self, other)


def _ne(self: Any, other: Any) -> Any:
    if type(other) is not type(self):
        return NotImplemented
    return not equal_deep(self, other)


def _lt(self: Any, other: Any) -> Any:
    if type(other) is not type(self):
        return NotImplemented
    return compare_deep(self, other) < 0


def _le(self: Any, other: Any) -> Any:
    if type(other) is not type(self):
        return NotImplemented
    return compare_deep(self, other) <= 0


def _gt(self: Any, other: Any) -> Any:
    if type(other) is not type(self):
        return NotImplemented
    return compare_deep(self, other) > 0


def _ge(self: Any, other: Any) -> Any:
    if type(other) is not type(self):
        return NotImplemented
    return compare_deep(self, other) >= 0


def _hash(self: Any) -> int:
    return hash_deep(self)


def _dup(self: Any) -> Any:
    """Independent deep copy of this record."""
    return copy_deep(self)


_OPERATORS = {
    "__eq__": _eq,
    "__ne__": _ne,
    "__lt__": _lt,
    "__le__": _le,
    "__gt__": _gt,
    "__ge__": _ge,
    "__hash__": _hash,
    "dup": _dup,
}


def install_operators(cls: type) -> type:
    """Attach deep comparison, hashing and dup() to a record class.

    Replaces anything the class (or @dataclass) already generated for these
    names. Per-type overrides still apply because the engines resolve them.

    Args:
        cls: Record class to modify in place.

    Returns:
        The same class.
    """
    for name, impl in _OPERATORS.items():
        setattr(cls, name, impl)
    return cls
