"""CLI: import test modules and run their named tests.

    python -m deepops.harness tests.sample -m sample -t "copy.*" -s
"""

import argparse
import importlib
import logging

from deepops.harness.core import run_tests


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="deepops.harness", description="Run named tests.")
    parser.add_argument("modules", nargs="*", help="Modules to import so their tests register")
    parser.add_argument(
        "-m", "--module-re", action="append", default=[], dest="module_patterns",
        help="Regex matched against module names (repeatable)",
    )
    parser.add_argument(
        "-t", "--test-re", action="append", default=[], dest="test_patterns",
        help="Regex matched against test names (repeatable)",
    )
    parser.add_argument("-s", "--summary", action="store_true", help="Print a table of results")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every test outcome")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    for name in args.modules:
        importlib.import_module(name)

    results = run_tests(args.module_patterns, args.test_patterns, summary=args.summary)
    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
