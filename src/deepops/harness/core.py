"""Named-test registry, the ``ut`` decorator, and the runner.

Usage:
    from deepops.harness import ut

    @ut("copy keeps cycles")
    def _():
        ...

    @ut()
    def _():  # registered as "Unnamed 1"
        ...

    results = run_tests(["engine"], ["copy"], summary=True)
"""

from __future__ import annotations

import logging
import re
import sys
from collections import defaultdict
from collections.abc import Callable, Iterable
from typing import TextIO

from deepops.display import tabulate
from deepops.harness.models import FAIL, PASS, TestCase, TestResult

logger = logging.getLogger(__name__)

SUMMARY_HEADER = ["Module", "Test", "Result", "Error"]


class TestRegistry:
    """Procedures keyed by ``module:tag``."""

    __test__ = False

    def __init__(self) -> None:
        self._cases: dict[str, TestCase] = {}
        self._unnamed: defaultdict[str, int] = defaultdict(int)

    def __len__(self) -> int:
        return len(self._cases)

    def __contains__(self, key: object) -> bool:
        return key in self._cases

    def register(self, func: Callable[[], object], tag: str | None = None) -> TestCase:
        """Register a procedure under its declaring module.

        Args:
            func: Zero-argument procedure.
            tag: Test name; untagged procedures are numbered per module.

        Returns:
            The registered TestCase.
        """
        module = func.__module__
        if not tag:
            self._unnamed[module] += 1
            tag = f"Unnamed {self._unnamed[module]}"
        case = TestCase(module, tag, func)
        if case.key in self._cases:
            logger.warning("Test %s registered twice, keeping the latest", case.key)
        self._cases[case.key] = case
        return case

    def select(
        self,
        module_patterns: Iterable[str] = (),
        test_patterns: Iterable[str] = (),
    ) -> list[TestCase]:
        """Cases matching the filters, in sorted ``module:tag`` order.

        A case is selected when any module pattern matches its module and any
        test pattern matches its tag. An empty pattern list matches everything.

        Raises:
            re.error: If a pattern is not a valid regular expression.
        """
        module_res = [re.compile(p) for p in module_patterns]
        test_res = [re.compile(p) for p in test_patterns]
        selected = []
        for key in sorted(self._cases):
            case = self._cases[key]
            if module_res and not any(r.search(case.module) for r in module_res):
                continue
            if test_res and not any(r.search(case.tag) for r in test_res):
                continue
            selected.append(case)
        return selected

    def clear(self) -> None:
        self._cases.clear()
        self._unnamed.clear()


# Module-level registry instance
_registry = TestRegistry()


def get_test_registry() -> TestRegistry:
    """Access the global test registry."""
    return _registry


def ut(tag: str | None = None, *, registry: TestRegistry | None = None) -> Callable[[Callable[[], object]], Callable[[], object]]:
    """Register the decorated zero-argument procedure as a named test.

    Args:
        tag: Test name; None numbers it as "Unnamed N" within its module.
        registry: Registry to add to; defaults to the global one.

    Returns:
        Decorator returning the procedure unchanged.
    """

    def decorator(func: Callable[[], object]) -> Callable[[], object]:
        (registry or _registry).register(func, tag)
        return func

    return decorator


def run_case(case: TestCase) -> TestResult:
    """Run one procedure. Any Exception it raises counts as a failure."""
    try:
        case.func()
    except Exception as e:
        logger.warning("Test %s failed: %s", case.key, e, exc_info=True)
        return TestResult(case.module, case.tag, FAIL, f"{type(e).__name__}: {e}")
    logger.debug("Test %s passed", case.key)
    return TestResult(case.module, case.tag, PASS)


def run_tests(
    module_patterns: Iterable[str] = (),
    test_patterns: Iterable[str] = (),
    *,
    summary: bool = False,
    registry: TestRegistry | None = None,
    stream: TextIO | None = None,
) -> list[TestResult]:
    """Run the selected procedures in sorted ``module:tag`` order.

    Args:
        module_patterns: Regexes searched in module names.
        test_patterns: Regexes searched in test tags.
        summary: If True, print "Test Summary" and a results table.
        registry: Registry to run; defaults to the global one.
        stream: Where the summary goes; defaults to stdout.

    Returns:
        One result per selected procedure, in run order.
    """
    cases = (registry or _registry).select(module_patterns, test_patterns)
    results = [run_case(case) for case in cases]
    failed = sum(1 for r in results if not r.passed)
    logger.info("Ran %d tests, %d failed", len(results), failed)

    if summary:
        out = stream or sys.stdout
        out.write("\nTest Summary\n")
        out.write(tabulate(results, header=SUMMARY_HEADER))
        out.write("\n")
    return results
