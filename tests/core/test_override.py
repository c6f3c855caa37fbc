"""Tests for the override table and resolver.

Why these tests exist:
- Overrides replace generic traversal for one operation without touching others
- Table entries take precedence over protocol methods
"""

from dataclasses import dataclass

from deepops import compare_deep, copy_deep, equal_deep, hash_deep, record
from deepops.core.override import (
    DeepCopyable,
    DeepEquatable,
    DeepHashable,
    DeepOrderable,
    Operation,
    OverrideEntry,
    OverrideTable,
)


@record
@dataclass
class Tag:
    name: str


@record
@dataclass
class Version:
    major: int
    minor: int
    build_tag: str

    def __deep_cmp__(self, other: "Version") -> int:
        return compare_deep((self.major, self.minor), (other.major, other.minor)) * 7

    def __deep_eq__(self, other: "Version") -> bool:
        return (self.major, self.minor) == (other.major, other.minor)

    def __deep_hash__(self) -> int:
        return hash_deep((self.major, self.minor))


@record
@dataclass
class Pooled:
    key: str

    def __deep_copy__(self) -> "Pooled":
        return self


def test_register_merges_entries():
    """Registering one operation keeps the ones already registered."""
    table = OverrideTable()
    table.register(Tag, eq=lambda a, b: True)
    entry = table.register(Tag, hash=lambda a: 1)

    assert entry.eq is not None
    assert entry.hash is not None
    assert entry.cmp is None
    assert table.get(Tag) is entry


def test_unregister():
    table = OverrideTable()
    table.register(Tag, eq=lambda a, b: True)
    table.unregister(Tag)

    assert table.get(Tag) is None
    assert table.resolve(Tag, Operation.EQUAL) is None


def test_empty_entry():
    assert OverrideEntry().is_empty()
    assert not OverrideEntry(copy=lambda a: a).is_empty()


def test_resolve_falls_back_to_protocol_method():
    table = OverrideTable()

    assert table.resolve(Version, Operation.COMPARE) is Version.__deep_cmp__
    assert table.resolve(Version, Operation.COPY) is None


def test_table_takes_precedence_over_protocol():
    """CRITICAL: An explicit registration wins over the type's own method.

    Why: Callers must be able to adjust types they do not own.
    """
    table = OverrideTable()

    def cmp(a, b):
        return 0

    table.register(Version, cmp=cmp)

    assert table.resolve(Version, Operation.COMPARE) is cmp


def test_protocols_are_runtime_checkable():
    version = Version(1, 0, "")

    assert isinstance(version, DeepOrderable)
    assert isinstance(version, DeepEquatable)
    assert isinstance(version, DeepHashable)
    assert isinstance(Pooled("a"), DeepCopyable)
    assert not isinstance(Tag("a"), DeepCopyable)


def test_equality_override_from_table(overrides):
    """Case-insensitive tags compare equal, even nested in containers."""
    overrides.register(Tag, eq=lambda a, b: a.name.lower() == b.name.lower())

    assert equal_deep([Tag("Alpha")], [Tag("alpha")])
    assert not equal_deep([Tag("Alpha")], [Tag("beta")])


def test_override_only_replaces_its_operation(overrides):
    overrides.register(Tag, eq=lambda a, b: True)

    assert equal_deep(Tag("a"), Tag("b"))
    assert compare_deep(Tag("a"), Tag("b")) == -1


def test_ordering_override_orders_by_derived_key():
    """The build tag is ignored because the type orders by version number."""
    assert compare_deep(Version(1, 2, "zzz"), Version(1, 2, "aaa")) == 0
    assert compare_deep(Version(1, 2, "zzz"), Version(1, 3, "aaa")) == -1


def test_ordering_override_result_normalised():
    """Overrides may return any integer; the engine returns -1, 0 or 1."""
    assert compare_deep(Version(2, 0, ""), Version(1, 0, "")) == 1
    assert compare_deep([Version(1, 0, "")], [Version(3, 0, "")]) == -1


def test_equality_and_hash_overrides_agree():
    a = Version(1, 2, "x")
    b = Version(1, 2, "y")

    assert equal_deep(a, b)
    assert hash_deep(a) == hash_deep(b)


def test_hash_override_from_table(overrides):
    overrides.register(Tag, hash=lambda a: 42)

    assert hash_deep(Tag("a")) == 42
    assert hash_deep(Tag("a")) == hash_deep(Tag("b"))


def test_copy_override_shares_instance():
    """A type may pool instances instead of copying them."""
    pooled = Pooled("shared")
    copied = copy_deep({"p": pooled})

    assert copied["p"] is pooled


def test_copy_override_from_table(overrides):
    overrides.register(Tag, copy=lambda a: Tag(a.name.upper()))

    assert copy_deep([Tag("a")]) == [Tag("A")]
