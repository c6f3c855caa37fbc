"""Tests for deep three-way comparison.

Why these tests exist:
- Sorting records and map keys depends on a total, deterministic order
- Ordering must agree with equality and terminate on cycles
"""

from dataclasses import dataclass
from enum import Enum, IntFlag
from functools import cmp_to_key

import pytest

from deepops import compare_deep, equal_deep, record


class Priority(Enum):
    # Definition order deliberately differs from value order
    HIGH = "z"
    LOW = "a"


class Perm(IntFlag):
    R = 4
    W = 2
    X = 1


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
class Task:
    priority: Priority
    title: str
    parent: "Link | None" = None


def test_scenario_first_differing_field_decides():
    assert compare_deep(R(1, "a"), R(2, "a")) == -1
    assert compare_deep(R(2, "a"), R(1, "a")) == 1
    assert compare_deep(R(1, "a"), R(1, "a")) == 0


def test_later_field_decides_when_earlier_equal():
    assert compare_deep(R(1, "b"), R(1, "a")) == 1


def test_results_are_normalised():
    assert compare_deep(1, 1000) == -1
    assert compare_deep("zzz", "a") == 1


def test_absent_orders_before_present():
    assert compare_deep(Link(1, "a"), Link(1, "a", Link(0, ""))) == -1
    assert compare_deep(Link(1, "a", Link(0, "")), Link(1, "a")) == 1
    assert compare_deep(None, R(1, "a")) == -1


def test_sequence_prefix_is_less():
    assert compare_deep([1, 2], [1, 2, 3]) == -1
    assert compare_deep([1, 3], [1, 2, 3]) == 1
    assert compare_deep([], []) == 0


def test_text_lexicographic():
    assert compare_deep("abc", "abd") == -1
    assert compare_deep(b"b", b"ab") == 1


def test_nan_ordering():
    """NaN equals NaN and sorts after every number."""
    nan = float("nan")

    assert compare_deep(nan, float("nan")) == 0
    assert compare_deep(nan, 1e300) == 1
    assert compare_deep(float("-inf"), nan) == -1


def test_enum_by_definition_order():
    assert compare_deep(Priority.HIGH, Priority.LOW) == -1
    assert compare_deep(Task(Priority.LOW, "a"), Task(Priority.HIGH, "b")) == 1


def test_combined_flags_order_by_value():
    assert compare_deep(Perm.R | Perm.W, Perm.R) == 1
    assert compare_deep(Perm.X, Perm.W | Perm.X) == -1
    assert compare_deep(Perm.R | Perm.X, Perm.X | Perm.R) == 0
    assert equal_deep(Perm.R | Perm.X, Perm.X | Perm.R)


def test_bool_as_int():
    assert compare_deep(False, True) == -1


def test_maps_compare_keys_first():
    assert compare_deep({"a": 9}, {"b": 0}) == -1
    assert compare_deep({"a": 1}, {"a": 1, "b": 0}) == -1


def test_maps_then_values():
    assert compare_deep({"a": 1, "b": 2}, {"b": 3, "a": 1}) == -1


def test_maps_independent_of_insertion_order():
    assert compare_deep({"b": 2, "a": 1}, {"a": 1, "b": 2}) == 0


def test_mismatched_shapes_never_raise():
    """Mixed data still sorts: category first, then type name."""
    assert compare_deep(1, "a") == -1
    assert compare_deep("a", 1) == 1
    assert compare_deep(1, 1.0) != 0
    assert compare_deep(R(1, "a"), Link(1, "a")) != 0

    mixed = ["b", 2, [1], "a", 1, {"k": 0}]
    ordered = sorted(mixed, key=cmp_to_key(compare_deep))
    assert ordered == [1, 2, "a", "b", [1], {"k": 0}]


def test_mixed_type_map_keys():
    assert equal_deep({1: "int", "1": "str"}, {"1": "str", 1: "int"})


def test_mutual_reference_terminates():
    a = Link(1, "same")
    b = Link(1, "same")
    a.other, b.other = b, a

    assert compare_deep(a, b) == 0

    b.x = 2
    assert compare_deep(a, b) == -1


def test_self_loop_terminates():
    a = Link(1, "x")
    a.other = a
    b = Link(1, "x")
    b.other = b

    assert compare_deep(a, b) == 0


def test_sorting_records():
    items = [R(2, "b"), R(1, "z"), R(2, "a"), R(1, "a")]

    assert sorted(items, key=cmp_to_key(compare_deep)) == [R(1, "a"), R(1, "z"), R(2, "a"), R(2, "b")]


@pytest.mark.parametrize(
    ("a", "b"),
    [
        (R(1, "a"), R(1, "a")),
        (R(1, "a"), R(1, "b")),
        ([1.5, 2.5], [1.5, 2.5]),
        ({"k": [1]}, {"k": [2]}),
        ((1, "x"), (1, "x")),
        (Task(Priority.LOW, "t"), Task(Priority.LOW, "t")),
    ],
)
def test_zero_iff_equal(a, b):
    assert (compare_deep(a, b) == 0) == equal_deep(a, b)


def test_hook_reports_compare_operation(hook):
    compare_deep([R(1, "a")], [R(1, "b")], hook=hook)

    assert set(hook.operations()) == {"compare"}
    assert hook.events[0].category == "SEQUENCE"
