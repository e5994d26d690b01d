from __future__ import annotations

import pytest
from junitparser import Failure, JUnitXml

from casework import AssertionFailure, TestSet, new_test_report
from casework.exceptions import GroupStackError
from casework.reporting import (
    HtmlReport,
    JUnitReport,
    ReportSink,
    TestReport,
    make_report,
)


def _fail(message):
    raise AssertionFailure(message)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_set() -> TestSet:
    test = TestSet("suite")
    test.run("top level", lambda: None)

    def passing():
        test.run("fine", lambda: None)

    def failing():
        test.run("ok", lambda: None)
        test.run("broken", lambda: _fail("boom <b>"))
        test.group("nested", lambda: test.run("deep", lambda: None))

    test.group("passing", passing)
    test.group("failing", failing)
    test.group("empty", lambda: None)
    return test


# ---------------------------------------------------------------------------
# TestReport
# ---------------------------------------------------------------------------


def test_text_report_renders_tree(sample_set):
    report = sample_set.write_report(TestReport())
    assert report.render() == (
        "[FAIL] suite\n"
        "  [PASS] top level\n"
        "  [PASS] passing\n"
        "    [PASS] fine\n"
        "  [FAIL] failing\n"
        "    [PASS] ok\n"
        "    [FAIL] broken\n"
        "      boom <b>\n"
        "    [PASS] nested\n"
        "      [PASS] deep\n"
        "  [PASS] empty\n"
        "5 tests, 4 passed, 1 failed\n"
    )
    assert report.failed is True


def test_text_report_only_failures(sample_set):
    report = sample_set.write_report(TestReport(only_failures=True, indent=4))
    assert report.render() == (
        "[FAIL] suite\n"
        "    [FAIL] failing\n"
        "        [FAIL] broken\n"
        "            boom <b>\n"
        "5 tests, 4 passed, 1 failed\n"
    )


def test_text_report_passing_set():
    test = TestSet("green")
    test.run("ok", lambda: None)
    report = test.write_report(new_test_report())
    assert isinstance(report, TestReport)
    assert report.failed is False
    assert report.render().endswith("1 tests, 1 passed, 0 failed\n")


def test_text_report_unbalanced_end_group():
    with pytest.raises(GroupStackError):
        TestReport().end_group()


# ---------------------------------------------------------------------------
# JUnitReport
# ---------------------------------------------------------------------------


@pytest.fixture
def junit_file(tmp_path, sample_set):
    report = sample_set.write_report(JUnitReport())
    return report.write(tmp_path / "out" / "junit.xml")


def test_junit_write_returns_path(tmp_path, junit_file):
    assert junit_file == tmp_path / "out" / "junit.xml"
    assert junit_file.exists()


def test_junit_one_suite_per_group_with_results(junit_file):
    xml = JUnitXml.fromfile(str(junit_file))
    names = [s.name for s in xml]
    assert names == [
        "suite",
        "suite / passing",
        "suite / failing",
        "suite / failing / nested",
    ]


def test_junit_testcase_classname(junit_file):
    xml = JUnitXml.fromfile(str(junit_file))
    suite = next(s for s in xml if s.name == "suite / failing")
    for case in suite:
        assert case.classname == "suite / failing"


def test_junit_failure_recorded(junit_file):
    xml = JUnitXml.fromfile(str(junit_file))
    failing = next(s for s in xml if s.name == "suite / failing")
    assert failing.tests == 2
    assert failing.failures == 1
    broken = next(c for c in failing if c.name == "broken")
    failure = next(r for r in broken.result if isinstance(r, Failure))
    assert failure.message == "boom <b>"


def test_junit_passing_suite_no_failures(junit_file):
    xml = JUnitXml.fromfile(str(junit_file))
    passing = next(s for s in xml if s.name == "suite / passing")
    assert passing.failures == 0


def test_junit_failed_property(sample_set):
    assert sample_set.write_report(JUnitReport()).failed is True


# ---------------------------------------------------------------------------
# HtmlReport
# ---------------------------------------------------------------------------


def test_html_report_renders_groups_and_escapes(sample_set):
    html = sample_set.write_report(HtmlReport(title="My run")).render()
    assert "<title>My run</title>" in html
    assert "nested" in html
    assert "deep" in html
    assert "boom &lt;b&gt;" in html
    assert "5 tests" in html


def test_html_report_write(tmp_path, sample_set):
    path = sample_set.write_report(HtmlReport()).write(tmp_path / "report.html")
    assert path.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")


# ---------------------------------------------------------------------------
# make_report
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "fmt, cls", [("text", TestReport), ("junit", JUnitReport), ("html", HtmlReport)]
)
def test_make_report(fmt, cls):
    report = make_report(fmt)
    assert isinstance(report, cls)
    assert ReportSink.is_instance(report)


def test_make_report_unknown_format():
    with pytest.raises(ValueError, match="Unknown report format"):
        make_report("pdf")
