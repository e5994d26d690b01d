"""Push-style report sink interface and the plain text report."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from casework.exceptions import GroupStackError


class ReportSink(ABC):
    """Receives a finished result tree one group and leaf at a time.

    ``TestSet.write_report`` calls ``begin_group`` for each group, then
    ``add_leaf`` for each of its results, recurses into the subgroups and
    finally calls ``end_group``.
    """

    @abstractmethod
    def begin_group(self, name: str, failed: bool) -> None: ...

    @abstractmethod
    def add_leaf(self, name: str, failed: bool, error: str | None = None) -> None: ...

    @abstractmethod
    def end_group(self) -> None: ...

    @staticmethod
    def is_instance(value: Any) -> bool:
        return isinstance(value, ReportSink)


class TestReport(ReportSink):
    """Indented plain text report.

    Args:
        only_failures: Leave out passed tests and groups without failures.
        indent: Number of spaces per nesting level.
    """

    __test__ = False

    def __init__(self, only_failures: bool = False, indent: int = 2):
        self.only_failures = only_failures
        self.indent = indent
        self.passed = 0
        self.failed_count = 0
        self._lines: list[str] = []
        # One entry per open group: True when the group is hidden.
        self._hidden: list[bool] = []

    @property
    def failed(self) -> bool:
        return self.failed_count > 0

    def begin_group(self, name: str, failed: bool) -> None:
        hidden = (self._hidden and self._hidden[-1]) or (
            self.only_failures and not failed
        )
        if not hidden:
            status = "FAIL" if failed else "PASS"
            self._lines.append(f"{self._pad()}[{status}] {name}")
        self._hidden.append(bool(hidden))

    def add_leaf(self, name: str, failed: bool, error: str | None = None) -> None:
        if failed:
            self.failed_count += 1
        else:
            self.passed += 1

        if (self._hidden and self._hidden[-1]) or (self.only_failures and not failed):
            return
        pad = self._pad()
        status = "FAIL" if failed else "PASS"
        self._lines.append(f"{pad}[{status}] {name}")
        if failed and error:
            for line in str(error).splitlines():
                self._lines.append(f"{pad}{' ' * self.indent}{line}")

    def end_group(self) -> None:
        if not self._hidden:
            raise GroupStackError("end_group() called without an open group")
        self._hidden.pop()

    def render(self) -> str:
        total = self.passed + self.failed_count
        summary = f"{total} tests, {self.passed} passed, {self.failed_count} failed"
        return "\n".join([*self._lines, summary]) + "\n"

    def _pad(self) -> str:
        visible = sum(1 for hidden in self._hidden if not hidden)
        return " " * (self.indent * visible)
