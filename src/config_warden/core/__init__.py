"""Core module containing data models and business logic."""

from config_warden.core.aggregator import (
    build_scan_result,
    group_matches_by_file,
    summarize_formatting,
)
from config_warden.core.errors import ConfigWardenError, PatternConfigError
from config_warden.core.models import (
    FormatOutcome,
    FormatStatus,
    FormatSummary,
    PatternRegistry,
    ScanResult,
    SecretMatch,
    SecretPattern,
)
from config_warden.core.orchestrator import Orchestrator, create_orchestrator
from config_warden.core.patterns import (
    CompiledPattern,
    compile_patterns,
    default_registry,
    load_registry,
)
from config_warden.core.scanner import SecretScanner

__all__ = [
    "CompiledPattern",
    "ConfigWardenError",
    "FormatOutcome",
    "FormatStatus",
    "FormatSummary",
    "Orchestrator",
    "PatternConfigError",
    "PatternRegistry",
    "ScanResult",
    "SecretMatch",
    "SecretPattern",
    "SecretScanner",
    "build_scan_result",
    "compile_patterns",
    "create_orchestrator",
    "default_registry",
    "group_matches_by_file",
    "load_registry",
    "summarize_formatting",
]
