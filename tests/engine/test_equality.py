"""Tests for deep equality.

Why these tests exist:
- Equality is the reference every other engine must stay consistent with
- The self-reference short-circuit and the visited-set must both terminate
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel

from deepops import compare_deep, equal_deep, record, schema_for_type


class Suit(Enum):
    HEARTS = 1
    SPADES = 2


@record
@dataclass
class R:
    x: int
    y: str


@record
@dataclass
class Link:
    x: int
    y: str
    other: "Link | None" = None


@record
@dataclass
class Bag:
    items: list[float] = field(default_factory=list)
    index: dict[str, int] = field(default_factory=dict)
    owner: R | None = None


@record
class Account(BaseModel):
    name: str
    balances: dict[str, float]
    suit: Suit = Suit.HEARTS


def test_scenario_identical_records_are_equal():
    assert equal_deep(R(1, "a"), R(1, "a"))


def test_scenario_first_field_difference():
    assert not equal_deep(R(1, "a"), R(2, "a"))


def test_scenario_mutual_reference():
    """CRITICAL: Two records pointing at each other compare without recursing forever.

    Why: This is the two-node cycle the self-reference short-circuit exists for.
    """
    a = Link(1, "same")
    b = Link(1, "same")
    a.other, b.other = b, a

    assert equal_deep(a, b)
    assert equal_deep(b, a)

    b.y = "changed"
    assert not equal_deep(a, b)


def test_scenario_maps():
    m1 = {"a": 1}
    m2 = {"a": 1}
    m3 = {"a": 1, "b": 2}

    assert equal_deep(m1, m2)
    assert not equal_deep(m1, m3)
    assert not equal_deep(m3, m2)


def test_identity_fast_path(hook):
    """Same object is equal without any traversal."""
    value = Bag([1.0], {"a": 1})

    assert equal_deep(value, value, hook=hook)
    assert hook.events == []


def test_nan_equals_nan():
    """Deliberate departure from IEEE float semantics."""
    nan = float("nan")

    assert equal_deep(nan, float("nan"))
    assert equal_deep(Bag([nan]), Bag([float("nan")]))
    assert not equal_deep(Bag([nan]), Bag([1.0]))


def test_both_absent_references_equal():
    assert equal_deep(Link(1, "a"), Link(1, "a"))
    assert equal_deep(None, None)


def test_one_absent_reference_unequal():
    assert not equal_deep(Link(1, "a", Link(2, "b")), Link(1, "a"))
    assert not equal_deep(Link(1, "a"), Link(1, "a", Link(2, "b")))
    assert not equal_deep(None, R(1, "a"))


def test_text_compared_by_content():
    left = "".join(["ab", "cd"])
    right = "abcd"

    assert equal_deep(R(1, left), R(1, right))
    assert equal_deep(b"xy", bytearray(b"xy"))


def test_sequence_lengths():
    assert not equal_deep([1, 2], [1, 2, 3])
    assert not equal_deep([1, 2, 3], [1, 2])
    assert equal_deep([], [])
    assert equal_deep((1, "a"), (1, "a"))


def test_map_insertion_order_irrelevant():
    first = {"b": [2], "a": [1], "c": [3]}
    second = {"a": [1], "c": [3], "b": [2]}

    assert equal_deep(first, second)
    assert equal_deep(OrderedDict(first), OrderedDict(second))


def test_map_same_size_different_keys():
    assert not equal_deep({"a": 1, "b": 2}, {"a": 1, "c": 2})


def test_map_same_keys_different_values():
    assert not equal_deep({"a": 1, "b": 2}, {"a": 1, "b": 3})


def test_map_with_record_values_and_tuple_keys():
    left = {(1, "x"): R(1, "a"), (0, "y"): R(2, "b")}
    right = {(0, "y"): R(2, "b"), (1, "x"): R(1, "a")}

    assert equal_deep(left, right)


def test_incompatible_shapes_unequal():
    """Values of different types are never equal, even where Python's == says so."""
    assert not equal_deep(1, "1")
    assert not equal_deep(1, 1.0)
    assert not equal_deep(True, 1)
    assert not equal_deep([1], (1,))
    assert not equal_deep(R(1, "a"), Link(1, "a"))


def test_enum_members():
    assert equal_deep(Suit.HEARTS, Suit.HEARTS)
    assert not equal_deep(Suit.HEARTS, Suit.SPADES)


def test_declared_schema_used():
    schema = schema_for_type(list[R])

    assert equal_deep([R(1, "a")], [R(1, "a")], schema=schema)


def test_pydantic_records():
    a = Account(name="ann", balances={"usd": 1.5, "eur": 2.0})
    b = Account(name="ann", balances={"eur": 2.0, "usd": 1.5})
    c = Account(name="ann", balances={"eur": 2.0, "usd": 1.5}, suit=Suit.SPADES)

    assert equal_deep(a, b)
    assert not equal_deep(a, c)


def test_mutual_reference_referents_fields_compared():
    """CRITICAL: Records whose links form a settled pair still compare the linked records.

    Why: The short-circuit stops re-expanding the link, but the referents'
    other fields decide equality and must agree with compare_deep.
    """
    x = Link(1, "n")
    y = Link(2, "n")
    x.other, y.other = y, x
    a = Link(0, "n", other=x)
    b = Link(0, "n", other=y)

    assert not equal_deep(a, b)
    assert compare_deep(a, b) == -1

    y.x = 1
    assert equal_deep(a, b)
    assert compare_deep(a, b) == 0


def test_three_node_ring_terminates():
    """Cycles longer than two nodes terminate through the visited-set."""

    def ring(values):
        nodes = [Link(v, "n") for v in values]
        for current, following in zip(nodes, nodes[1:] + nodes[:1]):
            current.other = following
        return nodes[0]

    assert equal_deep(ring([1, 2, 3]), ring([1, 2, 3]))
    assert not equal_deep(ring([1, 2, 3]), ring([1, 2, 4]))


def test_self_containing_lists():
    a: list = [1]
    a.append(a)
    b: list = [1]
    b.append(b)

    assert equal_deep(a, b)


def test_hook_sees_each_recursion_entry(hook):
    """Every value entered is reported with its path and depth."""
    equal_deep(Bag([], {}), Bag([], {}), hook=hook)

    assert set(hook.operations()) == {"equal"}
    assert [(e.category, e.path) for e in hook.events] == [
        ("RECORD", ()),
        ("SEQUENCE", ("items",)),
        ("MAP", ("index",)),
    ]
    assert [e.depth for e in hook.events] == [0, 1, 1]
