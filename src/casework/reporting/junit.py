from __future__ import annotations

from pathlib import Path

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from casework.exceptions import GroupStackError
from casework.reporting.base import ReportSink


class JUnitReport(ReportSink):
    """Collect results into a JUnit XML document.

    Every group that holds results becomes a ``<testsuite>`` named after its
    full group path (``root / group / subgroup``). Each result becomes a
    ``<testcase>`` whose classname is that same path.
    """

    def __init__(self) -> None:
        self.xml = JUnitXml()
        self._path: list[str] = []
        self._suites: list[TestSuite | None] = []

    def begin_group(self, name: str, failed: bool) -> None:
        self._path.append(name)
        self._suites.append(None)

    def add_leaf(self, name: str, failed: bool, error: str | None = None) -> None:
        if not self._path:
            raise GroupStackError("add_leaf() called without an open group")
        suite = self._suites[-1]
        if suite is None:
            suite = TestSuite(" / ".join(self._path))
            self._suites[-1] = suite
            # Use append (not +=) so suites keep declaration order
            self.xml.append(suite)

        case = TestCase(name)
        case.classname = " / ".join(self._path)
        if failed:
            case.result = [Failure(error or "")]
        suite.add_testcase(case)

    def end_group(self) -> None:
        if not self._path:
            raise GroupStackError("end_group() called without an open group")
        self._path.pop()
        self._suites.pop()

    @property
    def failed(self) -> bool:
        return any(suite.failures > 0 for suite in self.xml)

    def write(self, path: Path) -> Path:
        """Write the collected document to *path* and return the path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        self.xml.update_statistics()
        self.xml.write(str(path), pretty=True)
        return path
