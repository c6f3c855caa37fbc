"""Tests for traversal events.

Why these tests exist:
- Events are what a diagnostic hook sees; paths must read like Python
"""

import pytest

from deepops.tracing import TraversalEvent


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ((), "<root>"),
        (("next",), ".next"),
        (("items", 2), ".items[2]"),
        (("index", "key", "value"), ".index.key.value"),
        (((1, 2),), "[(1, 2)]"),
    ],
    ids=["root", "field", "index", "nested", "tuple-key"],
)
def test_format_path(path, expected) -> None:
    event = TraversalEvent(operation="equal", category="RECORD", type_name="Node", depth=len(path), path=path)

    assert event.format_path() == expected


def test_to_dict() -> None:
    event = TraversalEvent(operation="hash", category="MAP", type_name="dict", depth=1, path=("index",))

    assert event.to_dict() == {
        "operation": "hash",
        "category": "MAP",
        "type_name": "dict",
        "depth": 1,
        "path": ["index"],
    }


def test_events_are_frozen() -> None:
    event = TraversalEvent(operation="copy", category="SCALAR", type_name="int", depth=0)

    with pytest.raises(AttributeError):
        event.depth = 3  # type: ignore[misc]
