"""Reporter module for console and JSON output."""

from config_warden.reporter.console import (
    ConsoleReporter,
    TaskResult,
    create_console_reporter,
    preview_context,
)
from config_warden.reporter.json_reporter import (
    JSONFinding,
    JSONReporter,
    create_json_reporter,
)

__all__ = [
    "ConsoleReporter",
    "JSONFinding",
    "JSONReporter",
    "TaskResult",
    "create_console_reporter",
    "create_json_reporter",
    "preview_context",
]
