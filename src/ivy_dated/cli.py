"""Command line interface: ``ivy-dated``.

Reads an Ivy manifest, checks every dependency against Maven Central and
prints one coloured line per dependency followed by a summary::

    ivy-dated -f ivy.xml            # check a manifest
    ivy-dated -f ivy.xml --json out.json
    ivy-dated config --section registry
    ivy-dated info

Logging, colours and the process exit status live here; the parser,
resolver and checker never touch global process state.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

import click

from . import __init__conf__
from .checker import DependencyChecker, check_manifest, fixed_delay, write_report_json
from .config import get_checker_settings
from .config_show import display_config
from .errors import IvyDatedError
from .models import CheckOutcome, RunStatistics, Status
from .registry_resolver import create_resolver

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_STATUS_COLORS = {
    Status.CURRENT: "green",
    Status.DATED: "yellow",
    Status.UNKNOWN: "red",
}

_LAG_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def format_lag(lag: timedelta) -> str:
    """Render a lag in its largest whole unit.

    Example:
        >>> format_lag(timedelta(days=-400))
        '1 year behind'
        >>> format_lag(timedelta(hours=5))
        '5 hours ahead'
    """
    seconds = abs(int(lag.total_seconds()))
    text = "moments"
    for unit, size in _LAG_UNITS:
        count = seconds // size
        if count:
            text = f"{count} {unit}" if count == 1 else f"{count} {unit}s"
            break
    direction = "behind" if lag < timedelta(0) else "ahead"
    return f"{text} {direction}"


def format_outcome(outcome: CheckOutcome) -> str:
    """Render one dependency line without colour."""
    dep = outcome.dependency
    label = f"{outcome.status.value:<8}"
    pinned, latest = outcome.pinned, outcome.latest

    if outcome.status is Status.CURRENT and pinned is not None:
        return f"{label} {pinned.publish_time:%Y-%m-%d}  {dep.display_name}@{dep.revision}"

    lag = outcome.lag
    if outcome.status is Status.DATED and pinned is not None and latest is not None and lag is not None:
        return (
            f"{label} {pinned.publish_time:%Y-%m-%d}  {dep.display_name}@{dep.revision}"
            f" -> {latest.version} ({latest.publish_time:%Y-%m-%d}, {format_lag(lag)})"
        )

    return f"{label} {dep.display_name}@{dep.revision}"


def format_summary(statistics: RunStatistics) -> str:
    """Render the summary line."""
    return f"Dated: {statistics.dated} Current: {statistics.current} Unknown: {statistics.unknown}"


def _echo_outcome(outcome: CheckOutcome) -> None:
    click.echo(click.style(format_outcome(outcome), fg=_STATUS_COLORS[outcome.status]))


def _run_check(manifest: Path, json_output: Path | None) -> None:
    try:
        settings = get_checker_settings()
        pacing = fixed_delay(settings.request_delay)
        resolver = create_resolver(settings)
    except ValueError as exc:
        raise click.ClickException(f"invalid configuration: {exc}") from exc

    try:
        with resolver:
            checker = DependencyChecker(resolver=resolver, pacing=pacing)
            report = check_manifest(manifest, checker=checker, on_outcome=_echo_outcome)
    except IvyDatedError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo()
    click.echo(format_summary(report.statistics))

    if json_output is not None:
        try:
            write_report_json(report, json_output)
        except (OSError, ValueError) as exc:
            raise click.ClickException(f"cannot write report: {exc}") from exc


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command)
@click.option(
    "-f",
    "--file",
    "manifest",
    default="ivy.xml",
    show_default=True,
    type=click.Path(path_type=Path),
    help="Ivy manifest to check",
)
@click.option(
    "--json",
    "json_output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the results to this JSON file",
)
@click.option("-v", "--verbose", count=True, help="Verbose logging (-vv for request URLs)")
@click.pass_context
def cli(ctx: click.Context, manifest: Path, json_output: Path | None, verbose: int) -> None:
    """How dated are your Ivy dependencies?"""
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        _run_check(manifest, json_output)


@cli.command("config")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
)
@click.option("--section", default=None, help="Only show this section, e.g. registry")
def config_command(output_format: str, section: str | None) -> None:
    """Show the merged configuration."""
    display_config(format=output_format, section=section)


@cli.command("info")
def info_command() -> None:
    """Show package metadata."""
    __init__conf__.print_info()


def main() -> None:
    """Console script entry point."""
    cli(prog_name=__init__conf__.shell_command)


__all__ = [
    "cli",
    "format_lag",
    "format_outcome",
    "format_summary",
    "main",
]
