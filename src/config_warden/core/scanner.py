"""Pattern scanning engine.

This module provides the core scanning functionality that detects
secrets using the regex rules of a pattern registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from config_warden.core.models import SecretMatch
from config_warden.core.patterns import compile_patterns
from config_warden.fetcher.file_walker import read_text_file
from config_warden.utils.redaction import mask_secret

if TYPE_CHECKING:
    import re
    from collections.abc import Iterator
    from pathlib import Path

    from config_warden.core.models import PatternRegistry
    from config_warden.core.patterns import CompiledPattern

# Characters on each side of a match searched for context keywords
CONTEXT_WINDOW = 100


def position_to_line_col(content: str, pos: int) -> tuple[int, int]:
    """Convert a character offset to a 1-based line and column.

    Args:
        content: The content string.
        pos: Character offset into ``content``.

    Returns:
        Tuple of (line, column), both 1-indexed.
    """
    line = content.count("\n", 0, pos) + 1
    column = pos - content.rfind("\n", 0, pos)
    return line, column


def line_at(content: str, pos: int) -> str:
    """Return the trimmed physical line containing an offset."""
    start = content.rfind("\n", 0, pos) + 1
    end = content.find("\n", pos)
    if end == -1:
        end = len(content)
    return content[start:end].strip()


def has_context(content: str, start: int, end: int, keywords: tuple[str, ...]) -> bool:
    """Check whether a keyword occurs near a match.

    The window spans ``CONTEXT_WINDOW`` characters before ``start`` and
    after ``end``, clipped to the content bounds. Comparison is
    case-insensitive; ``keywords`` must already be lowercase.
    """
    window = content[max(0, start - CONTEXT_WINDOW) : end + CONTEXT_WINDOW].lower()
    return any(keyword in window for keyword in keywords)


class SecretScanner:
    """Core scanning engine for detecting secrets.

    Applies every compiled rule of a registry to file content and
    returns positioned, masked matches.

    Example:
        >>> scanner = SecretScanner(default_registry())
        >>> matches = scanner.scan_content('password = "hunter22"', "app.env")
        >>> matches[0].masked_match
        'pass*************r22"'
    """

    def __init__(self, registry: PatternRegistry) -> None:
        """Initialize the scanner.

        Args:
            registry: Pattern registry to scan with.
        """
        self.registry = registry
        self._patterns = compile_patterns(registry)

    @property
    def pattern_count(self) -> int:
        """Number of usable (compiled) patterns."""
        return len(self._patterns)

    def scan_content(self, content: str, file_path: str = "<string>") -> list[SecretMatch]:
        """Scan content for secrets using all patterns.

        Args:
            content: Text content to scan. It is never modified.
            file_path: Path reported in each match.

        Returns:
            List of SecretMatch objects, grouped by pattern in registry
            order and by position within each pattern.
        """
        if not content:
            return []

        matches: list[SecretMatch] = []
        for pattern in self._patterns:
            matches.extend(self._find_matches(content, pattern, file_path))
        return matches

    def _find_matches(
        self,
        content: str,
        pattern: CompiledPattern,
        file_path: str,
    ) -> Iterator[SecretMatch]:
        """Find matches for a single pattern."""
        keywords = pattern.context
        for match in pattern.regex.finditer(content):
            if match.start() == match.end():
                continue
            if keywords and not has_context(content, match.start(), match.end(), keywords):
                continue
            yield self._build_match(content, match, pattern, file_path)

    def _build_match(
        self,
        content: str,
        match: re.Match[str],
        pattern: CompiledPattern,
        file_path: str,
    ) -> SecretMatch:
        raw = match.group(0)
        line, column = position_to_line_col(content, match.start())
        return SecretMatch(
            file=file_path,
            line=line,
            column=column,
            pattern_name=pattern.name,
            pattern=pattern.rule.pattern,
            raw_match=raw,
            masked_match=mask_secret(raw),
            context_line=line_at(content, match.start()),
        )

    def scan_file(self, file_path: Path, display_path: str | None = None) -> list[SecretMatch]:
        """Scan a file for secrets.

        Args:
            file_path: Path to the file to scan.
            display_path: Path to report in matches (defaults to ``file_path``).

        Returns:
            List of SecretMatch objects found in the file.

        Raises:
            OSError: If file cannot be read.
        """
        content = read_text_file(file_path)
        return self.scan_content(content, display_path or str(file_path))

    def scan_file_safe(
        self,
        file_path: Path,
        display_path: str | None = None,
    ) -> tuple[list[SecretMatch], str | None]:
        """Scan a file safely, returning error info if failed.

        Args:
            file_path: Path to the file to scan.
            display_path: Path to report in matches.

        Returns:
            Tuple of (matches, error_message).
            If successful, error_message is None.
        """
        try:
            return self.scan_file(file_path, display_path), None
        except OSError as e:
            return [], f"Could not read file {display_path or file_path}: {e}"
