#!/usr/bin/env python3
"""
Hash Tree Test Runner

Discovers every test_*.py module next to this file, runs them in one pass
and prints a per-module tally.

Usage:
    python tests/run_tests.py
    python tests/run_tests.py -q
"""

import os
import sys
import unittest
from collections import Counter

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))


def _module_of(test) -> str:
    # Failed subtests report through their parent test case
    test = getattr(test, "test_case", test)
    return type(test).__module__.split(".")[-1]


def tally(result: unittest.TestResult, suite: unittest.TestSuite) -> dict:
    """Count passed, failed, errored and skipped tests per test module."""
    counts = {}
    for test in _iter_tests(suite):
        counts.setdefault(_module_of(test), Counter())["run"] += 1

    for outcome, entries in (
        ("failed", result.failures),
        ("errored", result.errors),
        ("skipped", result.skipped),
    ):
        for test, _ in entries:
            counts.setdefault(_module_of(test), Counter())[outcome] += 1
    return counts


def _iter_tests(suite):
    for entry in suite:
        if isinstance(entry, unittest.TestSuite):
            yield from _iter_tests(entry)
        else:
            yield entry


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    verbosity = 1 if "-q" in argv else 2

    suite = unittest.defaultTestLoader.discover(TESTS_DIR, pattern="test_*.py", top_level_dir=TESTS_DIR)
    result = unittest.TextTestRunner(verbosity=verbosity).run(suite)

    print(f"\n{'Module':<20}{'Run':>6}{'Failed':>8}{'Errors':>8}{'Skipped':>9}")
    for module, counts in sorted(tally(result, suite).items()):
        print(
            f"{module:<20}{counts['run']:>6}{counts['failed']:>8}"
            f"{counts['errored']:>8}{counts['skipped']:>9}"
        )

    return 0 if result.wasSuccessful() else 1


if __name__ == "__main__":
    sys.exit(main())
