from __future__ import annotations

from pathlib import Path

import typer

from casework.config import ReportFormat

app = typer.Typer(name="casework", help="Run nested unit test suites")

_DEFAULT_OUTPUTS = {
    ReportFormat.JUNIT: "casework-report.xml",
    ReportFormat.HTML: "casework-report.html",
}


@app.command()
def run(
    suites: list[str] = typer.Argument(None, help="Suite files to run"),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to YAML config"),
    format: ReportFormat | None = typer.Option(None, "--format", "-f", help="Report format"),
    output: str | None = typer.Option(None, "--output", "-o", help="Report output path"),
    only_failures: bool = typer.Option(
        False, "--only-failures", help="Hide passed tests in the text report"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(None, help="Also write debug output to this file"),
):
    """Run suite files and report the results."""
    from casework.config import CaseworkConfig, load_config
    from casework.exceptions import CaseworkError
    from casework.loader import load_suites
    from casework.reporting import TestReport, make_report
    from casework.verbose import setup_logger

    logger = setup_logger(
        Path(debug_log) if debug_log else None, verbose=verbose, logger_name="casework"
    )

    try:
        cfg = load_config(Path(config)) if config else CaseworkConfig()
    except CaseworkError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    suite_paths = list(suites or cfg.suites)
    if not suite_paths:
        typer.echo("Error: no suite files given", err=True)
        raise typer.Exit(1)

    report_format = format or cfg.report.format
    if report_format == ReportFormat.TEXT:
        report = TestReport(
            only_failures=only_failures or cfg.report.only_failures,
            indent=cfg.report.indent,
        )
    else:
        report = make_report(report_format.value)

    tolerance = cfg.comparison.to_tolerance()
    any_failed = False
    for suite_path in suite_paths:
        try:
            test_sets = load_suites(Path(suite_path), tolerance=tolerance)
        except CaseworkError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        except Exception as e:
            logger.debug(f"Suite {suite_path} raised while loading", exc_info=True)
            typer.echo(f"Error: {suite_path}: {e}", err=True)
            raise typer.Exit(1)

        for test_set in test_sets:
            logger.debug(f"Writing results of {test_set!r}")
            test_set.write_report(report)
            any_failed = any_failed or test_set.failed

    output_path = output or cfg.report.output
    if report_format == ReportFormat.TEXT:
        if output_path:
            Path(output_path).write_text(report.render(), encoding="utf-8")
            typer.echo(f"Report: {output_path}")
        else:
            typer.echo(report.render(), nl=False)
    else:
        written = report.write(Path(output_path or _DEFAULT_OUTPUTS[report_format]))
        typer.echo(f"Report: {written}")

    # Exit with non-zero if any test failed
    if any_failed:
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(
        "casework", "--dir", help="Directory to initialize the test project in"
    ),
):
    """Initialize a new test project with an example config and suite."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "casework.yaml"
    if example.exists():
        typer.echo(f"casework.yaml already exists in {dir}, skipping.")
        return

    example.write_text("""\
suites:
  - suites/example_suite.py

comparison:
  rel_tol: 1.0e-9
  abs_tol: 0.0

report:
  format: text
  only_failures: false
""")

    suite_dir = project_dir / "suites"
    suite_dir.mkdir(parents=True, exist_ok=True)
    (suite_dir / "example_suite.py").write_text('''\
from casework import TestSet

test = TestSet("example")


def arithmetic():
    test.run("adds numbers", lambda: test.assert_equal(1 + 1, 2))
    test.run("floats are almost equal", lambda: test.assert_almost_equal(0.1 + 0.2, 0.3))

    def less_than(a, b):
        test.assert_true(a < b)

    test.run("orders pairs", less_than, [(1, 2), (3, 4)])


test.group("arithmetic", arithmetic)
''')

    typer.echo(f"Initialized test project in {dir}:")
    typer.echo("  casework.yaml            - example config")
    typer.echo("  suites/example_suite.py  - example suite")
