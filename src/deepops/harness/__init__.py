"""Named-test harness.

Procedures tagged with ``@ut`` are collected per declaring module, filtered by
regular expressions over module name and tag, run, and reported.
"""

from deepops.harness.core import (
    TestRegistry,
    get_test_registry,
    run_case,
    run_tests,
    ut,
)
from deepops.harness.models import FAIL, PASS, TestCase, TestResult

__all__ = [
    "ut",
    "run_tests",
    "run_case",
    "TestRegistry",
    "get_test_registry",
    "TestCase",
    "TestResult",
    "PASS",
    "FAIL",
]
