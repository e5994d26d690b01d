"""Result records and the stack of open test groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from casework.exceptions import GroupStackError


@dataclass
class TestResult:
    """Outcome of a single test case.

    Attributes:
        name: Name the test was run under.
        failed: Whether the test body (or one of its data rows) raised.
        error: Message of the raised failure. ``None`` for passed tests.
    """

    __test__ = False

    name: str
    failed: bool
    error: str | None = None


@dataclass
class TestGroup:
    """Named node of the result tree.

    ``failed`` is set when any result in this group or any of its subgroups
    failed, and is never reset.
    """

    __test__ = False

    name: str
    failed: bool = False
    results: list[TestResult] = field(default_factory=list)
    subgroups: list[TestGroup] = field(default_factory=list)

    def walk(self) -> Iterator[TestGroup]:
        """Yield this group and all nested groups depth first."""
        yield self
        for subgroup in self.subgroups:
            yield from subgroup.walk()

    def count(self) -> tuple[int, int]:
        """Return ``(passed, failed)`` totals over the whole subtree."""
        passed = failed = 0
        for group in self.walk():
            for result in group.results:
                if result.failed:
                    failed += 1
                else:
                    passed += 1
        return passed, failed


class GroupStack:
    """Stack of open groups. The first pushed group is the root of the tree."""

    def __init__(self) -> None:
        self._groups: list[TestGroup] = []
        self._root: TestGroup | None = None

    def push(self, name: str) -> TestGroup:
        group = TestGroup(name=name)
        if self._groups:
            self._groups[-1].subgroups.append(group)
        else:
            self._root = self._root or group
        self._groups.append(group)
        return group

    def pop(self) -> TestGroup:
        if not self._groups:
            raise GroupStackError("Cannot pop empty stack")
        return self._groups.pop()

    def peek(self) -> TestGroup:
        if not self._groups:
            raise GroupStackError("No open group")
        return self._groups[-1]

    def mark_failed(self) -> None:
        for group in reversed(self._groups):
            group.failed = True

    @property
    def root(self) -> TestGroup:
        if self._root is None:
            raise GroupStackError("No group was ever opened")
        return self._root

    @property
    def depth(self) -> int:
        return len(self._groups)

    def path(self) -> list[str]:
        return [group.name for group in self._groups]
