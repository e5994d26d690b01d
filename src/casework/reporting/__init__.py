"""Report sinks that receive a finished result tree."""

from __future__ import annotations

from typing import Any

from casework.reporting.base import ReportSink, TestReport
from casework.reporting.html import HtmlReport
from casework.reporting.junit import JUnitReport

REPORT_FORMATS = {
    "text": TestReport,
    "junit": JUnitReport,
    "html": HtmlReport,
}


def make_report(format: str = "text", **options: Any) -> ReportSink:
    """Create a report sink for *format* (``text``, ``junit`` or ``html``)."""
    if format not in REPORT_FORMATS:
        raise ValueError(
            f"Unknown report format '{format}'. Supported: {', '.join(REPORT_FORMATS)}"
        )
    return REPORT_FORMATS[format](**options)


__all__ = [
    "HtmlReport",
    "JUnitReport",
    "REPORT_FORMATS",
    "ReportSink",
    "TestReport",
    "make_report",
]
