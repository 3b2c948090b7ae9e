"""CLI entry point for jirafield."""

from __future__ import annotations

import contextlib
import signal
import sys
from collections.abc import Iterator
from pathlib import Path

import click

from jirafield.config import ConfigError, resolve_site_config
from jirafield.fields import CheckLevel, check_field_id
from jirafield.jira import JiraSite
from jirafield.logging import setup_logging
from jirafield.selectors import (
    ChangelogIssueSelector,
    ExplicitIssueSelector,
    IssueSelector,
    JqlIssueSelector,
)
from jirafield.step import (
    FieldUpdateOrchestrator,
    OutcomeStatus,
    RunContext,
    RunResult,
    StepConfig,
    StepReport,
)

# Process exit codes per run result
EXIT_CODES = {
    RunResult.SUCCESS: 0,
    RunResult.UNSTABLE: 0,
    RunResult.FAILURE: 1,
    RunResult.ABORTED: 130,
}


@click.group()
@click.version_option(package_name="jirafield")
def main() -> None:
    """Append values to multi-value Jira custom fields."""
    pass


@main.command("add-value")
@click.option("--field-id", required=True, help="Custom field id, e.g. 10010")
@click.option("--value", "value_to_add", required=True, help="Value to add to the field")
@click.option(
    "--issue",
    "issues",
    multiple=True,
    help="Issue key to update (repeatable)",
)
@click.option("--jql", default=None, help="Select issues with a JQL query")
@click.option(
    "--changes-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File of change messages to scan for issue keys",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to jira.yaml (auto-detected, else JIRA_* environment variables)",
)
@click.option("--job-name", default="", help="Name of the invoking job")
@click.option("--build-number", type=int, default=None, help="Build number of the run")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the step log to this file",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def add_value(
    field_id: str,
    value_to_add: str,
    issues: tuple[str, ...],
    jql: str | None,
    changes_file: Path | None,
    config_path: Path | None,
    job_name: str,
    build_number: int | None,
    log_file: Path | None,
    verbose: bool,
) -> None:
    """Add VALUE to a custom array field on the selected issues."""
    setup_logging(level="DEBUG" if verbose else None, log_file=log_file)

    check = check_field_id(field_id.removeprefix("customfield_"))
    if check.level is CheckLevel.ERROR:
        raise click.BadParameter(check.message, param_hint="--field-id")
    if check.level is CheckLevel.WARNING:
        click.echo(f"Warning: {check.message}", err=True)

    selector = _build_selector(issues, jql, changes_file)

    site: JiraSite | None = None
    try:
        site = resolve_site_config(config_path).to_site()
    except ConfigError as e:
        # The orchestrator reports the missing site after checking the selector
        click.echo(f"Configuration error: {e}", err=True)

    context = RunContext(job_name=job_name, build_number=build_number)
    if changes_file is not None:
        context.change_messages = changes_file.read_text().split("\n\n")

    with _cancel_on_signals(context):
        try:
            config = StepConfig(selector=selector, field_id=field_id, value_to_add=value_to_add)
            report = FieldUpdateOrchestrator(config, site).run(context)
        finally:
            if site is not None:
                site.close()

    _print_report(report)
    sys.exit(EXIT_CODES[report.result])


@main.command("check-field-id")
@click.argument("value")
def check_field_id_command(value: str) -> None:
    """Check that VALUE is a usable custom field id."""
    check = check_field_id(value)
    if check.level is CheckLevel.OK:
        click.echo("OK")
        return
    click.echo(f"{check.level.value.upper()}: {check.message}", err=True)
    if check.level is CheckLevel.ERROR:
        sys.exit(1)


def _build_selector(
    issues: tuple[str, ...], jql: str | None, changes_file: Path | None
) -> IssueSelector | None:
    """Pick the selector from the mutually exclusive selection options."""
    chosen = [bool(issues), jql is not None, changes_file is not None]
    if sum(chosen) > 1:
        raise click.UsageError("Use only one of --issue, --jql or --changes-file")
    if issues:
        return ExplicitIssueSelector(issues)
    if jql is not None:
        return JqlIssueSelector(jql)
    if changes_file is not None:
        return ChangelogIssueSelector()
    return None


@contextlib.contextmanager
def _cancel_on_signals(context: RunContext) -> Iterator[None]:
    """Turn SIGINT/SIGTERM into a cooperative cancel of the run."""

    def _cancel(signum: int, frame: object) -> None:
        click.echo("Cancelling after the current issue...", err=True)
        context.cancel()

    previous = {sig: signal.signal(sig, _cancel) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def _print_report(report: StepReport) -> None:
    """Print a per-issue summary of the run."""
    click.echo(f"Result: {report.result.value}")
    if report.error is not None:
        click.echo(f"  Error: {report.error}", err=True)
    if report.field_id:
        click.echo(f"  Field: {report.field_id}")

    symbols = {
        OutcomeStatus.UPDATED: "✓",
        OutcomeStatus.SKIPPED: "-",
        OutcomeStatus.FAILED: "✗",
    }
    for outcome in report.outcomes:
        line = f"  {symbols[outcome.status]} {outcome.ticket_id} {outcome.status.value}"
        if outcome.reason:
            line += f": {outcome.reason}"
        click.echo(line)


if __name__ == "__main__":
    main()
