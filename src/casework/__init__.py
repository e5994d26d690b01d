"""Nested unit test sets with pluggable type and equality checks."""

from __future__ import annotations

from typing import Any

from casework.compare import Tolerance
from casework.exceptions import (
    ArgumentTypeError,
    AssertionFailure,
    CaseworkError,
    ConfigError,
    GroupStackError,
    UsageError,
)
from casework.groups import TestGroup, TestResult
from casework.reporting import HtmlReport, JUnitReport, ReportSink, TestReport
from casework.testset import TestSet


def new_test_set(name: str, **options: Any) -> TestSet:
    """Create a test set. *name* must be a non-empty string."""
    return TestSet(name, **options)


def new_test_report(only_failures: bool = False, indent: int = 2) -> TestReport:
    """Create a plain text report."""
    return TestReport(only_failures=only_failures, indent=indent)


__all__ = [
    "ArgumentTypeError",
    "AssertionFailure",
    "CaseworkError",
    "ConfigError",
    "GroupStackError",
    "HtmlReport",
    "JUnitReport",
    "ReportSink",
    "TestGroup",
    "TestReport",
    "TestResult",
    "TestSet",
    "Tolerance",
    "UsageError",
    "new_test_report",
    "new_test_set",
]
