"""Named tests run through the harness.

Run with:
    python -m deepops.harness examples.ut_suite -s
    python -m deepops.harness examples.ut_suite -t "^copy" -s
"""

from deepops import copy_deep, equal_deep, ut


@ut()
def _() -> None:
    assert equal_deep([1, 2], [1, 2])


@ut("copy keeps values")
def _() -> None:
    value = {"a": [1, 2]}
    assert equal_deep(copy_deep(value), value)


@ut("copy detaches lists")
def _() -> None:
    value = {"a": [1, 2]}
    copied = copy_deep(value)
    copied["a"].append(3)
    assert value["a"] == [1, 2]


@ut("deliberately failing")
def _() -> None:
    raise ValueError("shows up as fail in the summary")
