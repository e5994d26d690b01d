from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from casework.exceptions import GroupStackError
from casework.reporting.base import ReportSink


class HtmlReport(ReportSink):
    """Render the result tree as a standalone HTML page."""

    def __init__(self, title: str = "casework report"):
        self.title = title
        self.groups: list[dict[str, Any]] = []
        self.passed = 0
        self.failed_count = 0
        self._stack: list[dict[str, Any]] = []

    def begin_group(self, name: str, failed: bool) -> None:
        node: dict[str, Any] = {
            "name": name,
            "failed": failed,
            "results": [],
            "subgroups": [],
        }
        if self._stack:
            self._stack[-1]["subgroups"].append(node)
        else:
            self.groups.append(node)
        self._stack.append(node)

    def add_leaf(self, name: str, failed: bool, error: str | None = None) -> None:
        if not self._stack:
            raise GroupStackError("add_leaf() called without an open group")
        if failed:
            self.failed_count += 1
        else:
            self.passed += 1
        self._stack[-1]["results"].append(
            {"name": name, "failed": failed, "error": error or ""}
        )

    def end_group(self) -> None:
        if not self._stack:
            raise GroupStackError("end_group() called without an open group")
        self._stack.pop()

    @property
    def failed(self) -> bool:
        return self.failed_count > 0

    def render(self) -> str:
        """Render collected groups to HTML using the packaged Jinja2 template."""
        tmpl_dir = Path(__file__).parent / "templates"
        env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)
        template = env.get_template("report.html.j2")
        return template.render(
            title=self.title,
            groups=self.groups,
            total_tests=self.passed + self.failed_count,
            total_passed=self.passed,
            total_failures=self.failed_count,
        )

    def write(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")
        return path
