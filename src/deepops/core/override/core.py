"""Override table and resolver.

Usage:
    # Register implementations for a type you do not own:
    get_overrides().register(Decimal, cmp=lambda a, b: (a > b) - (a < b))

    # Or implement the protocol on your own type:
    @record
    @dataclass
    class Version:
        major: int
        minor: int
        build_tag: str

        def __deep_cmp__(self, other: "Version") -> int:
            return compare_deep((self.major, self.minor), (other.major, other.minor))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from deepops.core.override.models import Operation, OverrideEntry

logger = logging.getLogger(__name__)


class OverrideTable:
    """Process-local mapping from a type to its custom implementations.

    Entries apply to the exact type they were registered for. The table is
    consulted before a type's own protocol methods.
    """

    def __init__(self) -> None:
        """Initialize empty override table."""
        self._entries: dict[type, OverrideEntry] = {}

    def register(
        self,
        cls: type,
        *,
        eq: Callable[[Any, Any], bool] | None = None,
        cmp: Callable[[Any, Any], int] | None = None,
        hash: Callable[[Any], int] | None = None,
        copy: Callable[[Any], Any] | None = None,
    ) -> OverrideEntry:
        """Add implementations for a type, keeping any already registered.

        Args:
            cls: Type the implementations apply to.
            eq: Equality implementation.
            cmp: Ordering implementation.
            hash: Hash implementation.
            copy: Copy implementation.

        Returns:
            The combined entry now stored for cls.
        """
        entry = self._entries.get(cls, OverrideEntry())
        updates = {
            name: impl
            for name, impl in (("eq", eq), ("cmp", cmp), ("hash", hash), ("copy", copy))
            if impl is not None
        }
        entry = replace(entry, **updates)
        self._entries[cls] = entry
        logger.debug("Registered overrides %s for %s", sorted(updates), cls.__qualname__)
        return entry

    def unregister(self, cls: type) -> None:
        """Remove every implementation registered for cls."""
        self._entries.pop(cls, None)

    def get(self, cls: type) -> OverrideEntry | None:
        """Get the entry registered for a type.

        Args:
            cls: Type to look up.

        Returns:
            Entry if registered, None otherwise.
        """
        return self._entries.get(cls)

    def resolve(self, cls: type, operation: Operation) -> Callable[..., Any] | None:
        """Find the implementation that replaces generic traversal.

        Tries in order:
        1. An implementation registered in this table for cls
        2. The protocol method on cls (``__deep_eq__``, ``__deep_cmp__``, ...)

        Args:
            cls: Runtime type of the value about to be traversed.
            operation: Engine operation being performed.

        Returns:
            A plain callable taking the operands positionally, or None to
            traverse structurally.
        """
        entry = self._entries.get(cls)
        if entry is not None:
            impl = entry.get(operation)
            if impl is not None:
                return impl
        return getattr(cls, operation.value, None)

    def clear(self) -> None:
        self._entries.clear()


# Module-level table instance
_overrides = OverrideTable()


def get_overrides() -> OverrideTable:
    """Access the global override table.

    Returns:
        The process-local OverrideTable instance.
    """
    return _overrides
