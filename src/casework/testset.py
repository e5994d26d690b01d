"""Test sets: nested groups, isolated test cases and assertions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence

from casework.compare import (
    DEFAULT_TOLERANCE,
    STRUCTURED,
    Tolerance,
    primitive_kind,
    structural_equal,
)
from casework.exceptions import (
    ArgumentTypeError,
    AssertionFailure,
    CaseworkError,
    check_argument,
)
from casework.groups import GroupStack, TestGroup, TestResult
from casework.registry import (
    EqualityRegistry,
    EqualityStrategy,
    TypeClassifier,
    TypeRegistry,
)
from casework.reporting.base import ReportSink
from casework.serial import serialize

_VALUE_KINDS = frozenset({"nil", "boolean", "number", "string", "bytes"})

_default_tolerances: list[Tolerance] = []


@contextmanager
def default_tolerance(tolerance: Tolerance) -> Iterator[None]:
    """Use *tolerance* for test sets created without an explicit one."""
    _default_tolerances.append(tolerance)
    try:
        yield
    finally:
        _default_tolerances.pop()


class TestSet:
    """A named collection of test groups and test cases.

    Tests run as soon as they are declared. Failed assertions are recorded in
    the result tree of the set; they never escape ``run``.

    Usage::

        test = TestSet("math")

        def additions():
            test.run("adds small numbers", lambda: test.assert_equal(1 + 1, 2))

        test.group("addition", additions)
    """

    __test__ = False

    def __init__(
        self,
        name: str,
        tolerance: Tolerance | None = None,
        logger: logging.Logger | None = None,
    ):
        if not isinstance(name, str) or not name:
            raise ArgumentTypeError(1, "non-empty str", name)

        if tolerance is None:
            tolerance = _default_tolerances[-1] if _default_tolerances else DEFAULT_TOLERANCE
        self.tolerance = tolerance
        self.logger = logger or logging.getLogger("casework.testset")
        self._groups = GroupStack()
        self._type_checks = TypeRegistry()
        self._equality_checks = EqualityRegistry()
        self._groups.push(name)

    @staticmethod
    def is_instance(value: Any) -> bool:
        return isinstance(value, TestSet)

    @property
    def name(self) -> str:
        return self._groups.root.name

    @property
    def root(self) -> TestGroup:
        return self._groups.root

    @property
    def failed(self) -> bool:
        return self._groups.root.failed

    def __repr__(self) -> str:
        return f"<TestSet '{self.name}'>"

    # --- registration ---

    def add_type_check(self, func: TypeClassifier) -> None:
        """Register a function that names the type of structured values.

        The function receives a structured value and returns a type name, or
        ``False``/``None`` when it does not recognise the value. Checks run in
        registration order::

            test.add_type_check(lambda v: "Point" if isinstance(v, Point) else False)
        """
        check_argument(1, func, "callable")
        self._type_checks.add(func)

    def add_equality_check(self, type_name: str, func: EqualityStrategy) -> None:
        """Register the equality function used for values of *type_name*.

        The function is called as ``func(first, second, almost)`` whenever both
        compared values are classified as *type_name*::

            test.add_equality_check("Point", lambda a, b, almost: a.x == b.x)
        """
        check_argument(1, type_name, "str")
        check_argument(2, func, "callable")
        self._equality_checks.add(type_name, func)

    # --- execution ---

    def group(self, name: str, body: Callable[[], Any]) -> None:
        """Open a named group, call *body* inside it and close it again."""
        check_argument(1, name, "str")
        check_argument(2, body, "callable")

        self._groups.push(name)
        try:
            body()
        finally:
            self._groups.pop()

    def run(
        self,
        name: str,
        test_func: Callable[..., Any],
        test_data: Sequence[Sequence[Any]] | None = None,
    ) -> TestResult:
        """Run a test case and record its result in the current group.

        When *test_data* is given, *test_func* is called once per row with the
        row spread as positional arguments. The run stops at the first failing
        row, and a single result is recorded for the whole data set.
        """
        check_argument(1, name, "str")
        check_argument(2, test_func, "callable")
        if test_data is not None:
            check_argument(3, test_data, "sequence")

        error = None
        try:
            if test_data is None:
                test_func()
            else:
                for row in test_data:
                    args = row if isinstance(row, (list, tuple)) else (row,)
                    test_func(*args)
        except CaseworkError:
            raise
        except Exception as exc:
            error = str(exc) or type(exc).__name__
            self.logger.debug(f"Test '{name}' raised {type(exc).__name__}", exc_info=True)

        result = TestResult(name=name, failed=error is not None, error=error)
        self._groups.peek().results.append(result)

        label = " / ".join([*self._groups.path(), name])
        if result.failed:
            self._groups.mark_failed()
            self.logger.debug(f"FAIL {label}: {error}")
        else:
            self.logger.debug(f"PASS {label}")
        return result

    def case(
        self, name: str, test_data: Sequence[Sequence[Any]] | None = None
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of ``run``; the decorated function runs immediately."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.run(name, func, test_data)
            return func

        return decorator

    # --- comparison ---

    def determine_type(self, value: Any) -> str:
        """Return the registered type name of *value*, or its primitive kind."""
        kind = primitive_kind(value)
        if kind == STRUCTURED:
            custom = self._type_checks.classify(value)
            if custom:
                return custom
        return kind

    def compare_values(self, first: Any, second: Any, almost: bool = False) -> bool:
        """Test if two values are equal.

        If both values classify as the same custom type and an equality check
        is registered for it, that check decides. Otherwise the values are
        compared structurally.
        """
        first_type = self.determine_type(first)
        if (
            primitive_kind(first) == STRUCTURED
            and first_type == self.determine_type(second)
            and first_type in self._equality_checks
        ):
            return bool(self._equality_checks.get(first_type)(first, second, almost))

        return structural_equal(first, second, almost, self.tolerance)

    # --- assertions ---

    def assert_true(self, value: Any, message: str | None = None) -> None:
        self.assert_same(value, True, message)

    def assert_false(self, value: Any, message: str | None = None) -> None:
        self.assert_same(value, False, message)

    def assert_equal(self, value: Any, expected: Any, message: str | None = None) -> None:
        if not self.compare_values(value, expected):
            raise AssertionFailure(
                message
                or f"Actual value: {serialize(value)} | Expected value: {serialize(expected)}"
            )

    def assert_not_equal(self, first: Any, second: Any, message: str | None = None) -> None:
        if self.compare_values(first, second):
            raise AssertionFailure(message or f"Both values are equal: {serialize(first)}")

    def assert_almost_equal(
        self, value: Any, expected: Any, message: str | None = None
    ) -> None:
        if not self.compare_values(value, expected, almost=True):
            raise AssertionFailure(
                message
                or f"Actual value: {serialize(value)} | Expected value: {serialize(expected)}"
            )

    def assert_not_almost_equal(
        self, first: Any, second: Any, message: str | None = None
    ) -> None:
        if self.compare_values(first, second, almost=True):
            raise AssertionFailure(
                message
                or f"Both values are almost equal: {serialize(first)} | {serialize(second)}"
            )

    def assert_same(self, value: Any, expected: Any, message: str | None = None) -> None:
        if not _identical(value, expected):
            raise AssertionFailure(
                message or f"Actual value: {value!r} | Expected value: {expected!r}"
            )

    def assert_not_same(self, first: Any, second: Any, message: str | None = None) -> None:
        if _identical(first, second):
            raise AssertionFailure(message or f"Both values are the same: {first!r}")

    def assert_error(
        self,
        func: Callable[[], Any],
        message: str | None = None,
        expected: type[BaseException] | None = None,
    ) -> None:
        """Assert that calling *func* raises.

        With *expected* set, the raised exception must also be an instance of
        that class.
        """
        check_argument(1, func, "callable")
        try:
            func()
        except Exception as exc:
            if expected is not None and not isinstance(exc, expected):
                raise AssertionFailure(
                    message
                    or f"Expected {expected.__name__} to be raised, got {type(exc).__name__}: {exc}"
                ) from exc
            return
        raise AssertionFailure(message or "The function was expected to throw an error")

    # --- reporting ---

    def write_report(self, report: ReportSink) -> ReportSink:
        """Push the result tree into *report* and return it."""
        if not ReportSink.is_instance(report):
            raise ArgumentTypeError(1, "ReportSink", report)
        self._write_group(report, self._groups.root)
        return report

    def _write_group(self, report: ReportSink, group: TestGroup) -> None:
        report.begin_group(group.name, group.failed)
        for result in group.results:
            report.add_leaf(result.name, result.failed, result.error)
        for subgroup in group.subgroups:
            self._write_group(report, subgroup)
        report.end_group()


def _identical(first: Any, second: Any) -> bool:
    # Immutable scalars are identical when they have the same type and value,
    # independent of interpreter object caching.
    if first is second:
        return True
    kind = primitive_kind(first)
    return (
        kind in _VALUE_KINDS
        and type(first) is type(second)
        and not isinstance(first, bytearray)
        and first == second
    )
