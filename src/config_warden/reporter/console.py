"""Console output reporter using Rich.

This module renders scan results, formatting results and task summaries
for terminal display. Only masked values are printed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config_warden.core.aggregator import count_by_pattern, group_matches_by_file
from config_warden.core.models import FormatStatus
from config_warden.utils.redaction import redact_in_text

if TYPE_CHECKING:
    from config_warden.core.models import FormatSummary, ScanResult, SecretMatch

CONTEXT_PREVIEW_CHARS = 80


@dataclass
class TaskResult:
    """Outcome of one task of a combined run.

    Attributes:
        name: Task name.
        success: Whether the task passed.
        duration_ms: Wall-clock duration in milliseconds.
        message: Optional failure detail.
    """

    name: str
    success: bool
    duration_ms: float
    message: str | None = None


def preview_context(match: SecretMatch, limit: int = CONTEXT_PREVIEW_CHARS) -> str:
    """Return the match's source line, masked and truncated for display."""
    context = redact_in_text(match.context_line, match.raw_match, match.masked_match)
    if len(context) > limit:
        return context[:limit] + "..."
    return context


class ConsoleReporter:
    """Rich console reporter for scan and format results.

    Example:
        ```python
        reporter = ConsoleReporter()
        reporter.print_scan_result(result)
        reporter.print_format_summary(summary, check=True)
        ```
    """

    STATUS_STYLES: ClassVar[dict[FormatStatus, tuple[str, str]]] = {
        FormatStatus.FORMATTED: ("Formatted", "green"),
        FormatStatus.UNCHANGED: ("Unchanged", "dim"),
        FormatStatus.ERROR: ("Error", "red"),
    }

    RECOMMENDATIONS: ClassVar[tuple[str, ...]] = (
        "Move secrets to environment variables",
        "Use a secrets manager (e.g., 1Password, HashiCorp Vault)",
        "Add sensitive files to .gitignore",
        "Use placeholder values in committed configs",
    )

    def __init__(
        self,
        console: Console | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the console reporter.

        Args:
            console: Rich Console instance (creates one if None).
            verbose: Whether to show verbose output.
        """
        self.console = console or Console()
        self.verbose = verbose

    def print_header(self, title: str) -> None:
        """Print a styled header.

        Args:
            title: Title text to display.
        """
        self.console.print()
        self.console.print(Panel(f"[bold blue]{escape(title)}[/bold blue]", border_style="blue"))
        self.console.print()

    def print_scan_result(self, result: ScanResult) -> None:
        """Print a secrets detection report.

        Args:
            result: Scan result to display.
        """
        self.print_header("Secrets Detection Report")
        self.console.print(f"[cyan]Files scanned:[/cyan] {result.scanned_files}")
        self.console.print(f"[cyan]Config files checked:[/cyan] {result.total_files}")

        for error in result.errors:
            self.print_warning(error)

        if not result.has_secrets:
            self.console.print()
            self.console.print(
                Panel(
                    "[green]✓ No secrets detected![/green]",
                    title="Scan Complete",
                    border_style="green",
                )
            )
            return

        self.console.print()
        self.console.print(
            f"[bold red]Found {result.secrets_count} potential secret(s):[/bold red]"
        )

        for file_path, matches in group_matches_by_file(result.matches).items():
            self.print_file_matches(file_path, matches)

        if self.verbose:
            self._print_pattern_counts(result.matches)

        self.console.print()
        self.console.print(
            Panel(
                "\n".join(f"{i}. {tip}" for i, tip in enumerate(self.RECOMMENDATIONS, 1)),
                title="Recommendations",
                border_style="yellow",
            )
        )

    def print_file_matches(self, file_path: str, matches: list[SecretMatch]) -> None:
        """Print matches grouped under their file.

        Args:
            file_path: Path to the file.
            matches: List of matches in the file.
        """
        self.console.print()
        self.console.print(f"[bold blue]📄 {escape(file_path)}[/bold blue]")

        for match in matches:
            location = f"Line {match.line}"
            if self.verbose:
                location += f", column {match.column}"
            self.console.print(
                f"   [yellow]{location}:[/yellow] {escape(match.pattern_name)}"
            )
            self.console.print(f"   [dim]Matched:[/dim] {escape(match.masked_match)}")
            self.console.print(f"   [dim]Context:[/dim] {escape(preview_context(match))}")

    def _print_pattern_counts(self, matches: list[SecretMatch]) -> None:
        table = Table(
            title="Findings by Pattern",
            show_header=True,
            header_style="bold",
            border_style="blue",
        )
        table.add_column("Pattern", style="cyan")
        table.add_column("Count", justify="right", style="yellow")

        for name, count in count_by_pattern(matches).items():
            table.add_row(escape(name), str(count))

        self.console.print()
        self.console.print(table)

    def print_format_summary(self, summary: FormatSummary, check: bool = False) -> None:
        """Print per-file formatting results and totals.

        Args:
            summary: Formatting summary to display.
            check: Whether the run was in check mode.
        """
        self.print_header(f"Configuration File Formatter ({'Check' if check else 'Format'} mode)")

        if not summary.outcomes:
            self.console.print("[dim]No configuration files found.[/dim]")
            return

        table = Table(
            title="Results",
            show_header=True,
            header_style="bold magenta",
            border_style="bright_blue",
        )
        table.add_column("File", style="green")
        table.add_column("Status")
        table.add_column("Message", style="dim")

        for outcome in summary.outcomes:
            label, style = self.STATUS_STYLES[outcome.status]
            table.add_row(
                escape(outcome.file),
                Text(label, style=style),
                escape(outcome.message or ""),
            )

        self.console.print(table)
        self.console.print()
        self.console.print(f"  [green]Formatted:[/green] {summary.formatted}")
        self.console.print(f"  [dim]Unchanged:[/dim] {summary.unchanged}")
        self.console.print(f"  [red]Errors:[/red] {summary.errors}")

    def print_task_summary(self, results: list[TaskResult], total_ms: float) -> None:
        """Print the summary of a combined run.

        Args:
            results: Result of each task, in run order.
            total_ms: Total duration in milliseconds.
        """
        self.print_header("Summary")

        for result in results:
            icon, style = ("✓", "green") if result.success else ("✗", "red")
            line = f"  {icon} {result.name}: {result.duration_ms:.0f}ms"
            if result.message:
                line += f" ({result.message})"
            self.console.print(Text(line, style=style))

        passed = sum(1 for r in results if r.success)
        self.console.print()
        self.console.print(f"[cyan]Total time: {total_ms:.0f}ms[/cyan]")
        style = "green" if passed == len(results) else "yellow"
        self.console.print(f"[{style}]Success: {passed}/{len(results)}[/{style}]")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")

    def print_info(self, message: str) -> None:
        """Print an info message (verbose mode only)."""
        if self.verbose:
            self.console.print(f"[dim]{escape(message)}[/dim]")


def create_console_reporter(verbose: bool = False) -> ConsoleReporter:
    """Create a console reporter.

    Args:
        verbose: Whether to show verbose output.

    Returns:
        Configured ConsoleReporter instance.
    """
    return ConsoleReporter(verbose=verbose)
