"""Fold per-file outcomes into run-level results."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from config_warden.core.models import FormatStatus, FormatSummary, ScanResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from config_warden.core.models import FormatOutcome, SecretMatch


def build_scan_result(
    total_files: int,
    scanned_files: int,
    per_file_matches: Iterable[Sequence[SecretMatch]],
    errors: Iterable[str] = (),
    root: str = "",
) -> ScanResult:
    """Concatenate per-file matches into a ScanResult.

    Args:
        total_files: Candidate files handed to the scanner.
        scanned_files: Non-ignored files visited by the walker.
        per_file_matches: Matches of each file, in walk order.
        errors: Per-file failure messages.
        root: Directory the scan ran against.

    Returns:
        The aggregated ScanResult.
    """
    matches: list[SecretMatch] = []
    for file_matches in per_file_matches:
        matches.extend(file_matches)
    return ScanResult(
        root=root,
        total_files=total_files,
        scanned_files=scanned_files,
        matches=matches,
        errors=list(errors),
    )


def summarize_formatting(outcomes: Iterable[FormatOutcome]) -> FormatSummary:
    """Count formatting outcomes by status."""
    outcome_list = list(outcomes)
    counts = Counter(outcome.status for outcome in outcome_list)
    return FormatSummary(
        outcomes=outcome_list,
        formatted=counts[FormatStatus.FORMATTED],
        unchanged=counts[FormatStatus.UNCHANGED],
        errors=counts[FormatStatus.ERROR],
    )


def group_matches_by_file(matches: Iterable[SecretMatch]) -> dict[str, list[SecretMatch]]:
    """Group matches by file, keeping first-seen file order."""
    grouped: dict[str, list[SecretMatch]] = {}
    for match in matches:
        grouped.setdefault(match.file, []).append(match)
    return grouped


def count_by_pattern(matches: Iterable[SecretMatch]) -> dict[str, int]:
    """Count matches per pattern name, most frequent first."""
    return dict(Counter(match.pattern_name for match in matches).most_common())
