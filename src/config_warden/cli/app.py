"""CLI application entry point."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from config_warden import __version__
from config_warden.core.orchestrator import Orchestrator, create_orchestrator
from config_warden.reporter.console import TaskResult, create_console_reporter
from config_warden.reporter.json_reporter import create_json_reporter
from config_warden.utils.config import load_config
from config_warden.utils.log_setup import setup_logging

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cfgwarden",
    help="Config Warden - format configuration files and detect leaked secrets",
    no_args_is_help=True,
    add_completion=False,
)

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_FATAL = 2

RootArgument = Annotated[
    Path,
    typer.Argument(
        exists=True,
        help="Directory (or single file) to process",
    ),
]
SettingsOption = Annotated[
    Path | None,
    typer.Option(
        "--settings",
        help="TOML settings file",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Show verbose output",
    ),
]


def _build(
    root: Path,
    settings_file: Path | None,
    verbose: bool,
    patterns_file: Path | None = None,
    strict_jsonc: bool | None = None,
) -> Orchestrator:
    """Load settings, configure logging and create the orchestrator."""
    settings = load_config(settings_file)
    setup_logging(settings.logging, verbose=verbose)
    return create_orchestrator(
        root,
        settings=settings,
        patterns_file=patterns_file,
        strict_jsonc=strict_jsonc,
    )


def _fatal(error: Exception) -> typer.Exit:
    logger.exception("Fatal error")
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(code=EXIT_FATAL)


def _run_scan(
    orchestrator: Orchestrator,
    verbose: bool,
    report: Path | None,
) -> bool:
    """Run the secret scan and print it. Returns True when secrets were found."""
    reporter = create_console_reporter(verbose=verbose)
    reporter.print_info("Starting secrets detection...")

    result = asyncio.run(orchestrator.run_scan())
    reporter.print_scan_result(result)

    if report is not None:
        create_json_reporter().write(result, report)
        reporter.console.print(f"[dim]Report saved to: {report}[/dim]")

    return result.has_secrets


def _run_format(orchestrator: Orchestrator, verbose: bool, check: bool) -> bool:
    """Run the format pass and print it. Returns True when the gate fails."""
    reporter = create_console_reporter(verbose=verbose)
    summary = asyncio.run(orchestrator.run_format(check=check))
    reporter.print_format_summary(summary, check=check)
    return summary.needs_attention(check)


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"Config Warden v{__version__}")


@app.command()
def scan(
    root: RootArgument = Path("."),
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Secret pattern configuration (default: <root>/.secrets-patterns.json)",
        ),
    ] = None,
    json_report: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Save report to secrets-report.json",
        ),
    ] = False,
    report_file: Annotated[
        Path | None,
        typer.Option(
            "--report",
            help="Save the JSON report to this path",
        ),
    ] = None,
    settings_file: SettingsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Scan configuration files for potential secrets.

    Exits with code 1 when any secret is found.

    Examples:
        cfgwarden scan
        cfgwarden scan ./project --json
        cfgwarden scan . --config rules.json --verbose
    """
    try:
        orchestrator = _build(root, settings_file, verbose, patterns_file=config)
        report = report_file or (orchestrator.report_path if json_report else None)
        found = _run_scan(orchestrator, verbose, report)
    except Exception as e:
        raise _fatal(e) from e

    if found:
        raise typer.Exit(code=EXIT_ISSUES)


@app.command("format")
def format_files(
    root: RootArgument = Path("."),
    check: Annotated[
        bool,
        typer.Option(
            "--check",
            help="Report files needing formatting without writing them",
        ),
    ] = False,
    strict_jsonc: Annotated[
        bool,
        typer.Option(
            "--strict-jsonc",
            help="Track every delimiter when reindenting JSONC",
        ),
    ] = False,
    settings_file: SettingsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Format JSON/JSONC, YAML and TOML configuration files.

    In check mode, exits with code 1 when any file needs formatting.
    """
    try:
        orchestrator = _build(
            root, settings_file, verbose, strict_jsonc=strict_jsonc or None
        )
        failed = _run_format(orchestrator, verbose, check)
    except Exception as e:
        raise _fatal(e) from e

    if failed:
        raise typer.Exit(code=EXIT_ISSUES)


@app.command()
def run(
    root: RootArgument = Path("."),
    secrets: Annotated[
        bool,
        typer.Option(
            "--secrets",
            "-s",
            help="Run secrets detection",
        ),
    ] = False,
    format_: Annotated[
        bool,
        typer.Option(
            "--format",
            "-f",
            help="Run formatting",
        ),
    ] = False,
    check: Annotated[
        bool,
        typer.Option(
            "--check",
            help="Format in check mode",
        ),
    ] = False,
    settings_file: SettingsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run secrets detection and formatting (both when no task is selected).

    Exits with code 1 when any task fails.
    """
    run_all = not (secrets or format_)
    try:
        orchestrator = _build(root, settings_file, verbose)
    except Exception as e:
        raise _fatal(e) from e
    reporter = create_console_reporter(verbose=verbose)

    tasks: list[tuple[str, Callable[[], bool]]] = []
    if run_all or secrets:
        tasks.append(
            ("Secrets Detection", lambda: not _run_scan(orchestrator, verbose, None))
        )
    if run_all or format_:
        tasks.append(
            (
                "Format Configuration Files",
                lambda: not _run_format(orchestrator, verbose, check),
            )
        )

    started = time.perf_counter()
    results: list[TaskResult] = []
    for name, task in tasks:
        task_started = time.perf_counter()
        try:
            success = task()
        except Exception as e:
            raise _fatal(e) from e
        duration_ms = (time.perf_counter() - task_started) * 1000
        results.append(
            TaskResult(
                name=name,
                success=success,
                duration_ms=duration_ms,
                message=None if success else "issues found",
            )
        )

    reporter.print_task_summary(results, (time.perf_counter() - started) * 1000)

    if not all(r.success for r in results):
        raise typer.Exit(code=EXIT_ISSUES)


@app.command()
def patterns(
    root: RootArgument = Path("."),
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Secret pattern configuration (default: <root>/.secrets-patterns.json)",
        ),
    ] = None,
    settings_file: SettingsOption = None,
) -> None:
    """List the secret patterns that a scan would use."""
    try:
        orchestrator = _build(root, settings_file, verbose=False, patterns_file=config)
        registry = orchestrator.load_registry()
    except Exception as e:
        raise _fatal(e) from e

    typer.echo(f"Pattern source: {orchestrator.patterns_path}")
    typer.echo()
    for pattern in registry.patterns:
        suffix = f" [context: {', '.join(pattern.context)}]" if pattern.context else ""
        typer.echo(f"  • {pattern.name} - {pattern.description}{suffix}")
    typer.echo()
    typer.echo(f"Extensions: {', '.join(registry.file_extensions)}")
    typer.echo(f"Ignored: {', '.join(registry.ignore_globs)}")
    typer.echo(f"Total: {len(registry.patterns)} patterns")


if __name__ == "__main__":
    app()
