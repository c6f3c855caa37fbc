"""Harness data models: registered procedures and their outcomes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from deepops.core.schema import record

PASS = "pass"
FAIL = "fail"


@dataclass(slots=True, frozen=True)
class TestCase:
    """A tagged zero-argument procedure.

    Attributes:
        module: Name of the module that declared the procedure.
        tag: Test name within the module.
        func: The procedure itself.
    """

    __test__ = False

    module: str
    tag: str
    func: Callable[[], object]

    @property
    def key(self) -> str:
        """Registry key, ``module:tag``."""
        return f"{self.module}:{self.tag}"


@record
@dataclass(slots=True)
class TestResult:
    """Outcome of one procedure run. Rendered as a row of the summary table."""

    __test__ = False

    module: str
    test: str
    result: str
    error: str = ""

    @property
    def passed(self) -> bool:
        return self.result == PASS
