"""Run orchestrator that coordinates the scan and format passes.

This module ties together all components:
- PatternRegistry loading for the secret rules
- FileWalker for directory traversal
- SecretScanner for secret detection
- Formatter dispatch for reformatting
- Aggregator for run-level results

Files are read and written through ``asyncio.to_thread``. By default
they are handled strictly one after another; a ``concurrency`` setting
above one runs a bounded pool of per-file tasks instead. Either way each
result stays keyed to its own file and results keep walk order.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from config_warden.core.aggregator import build_scan_result, summarize_formatting
from config_warden.core.models import FormatOutcome, FormatStatus
from config_warden.core.patterns import load_registry
from config_warden.core.scanner import SecretScanner
from config_warden.fetcher.file_walker import (
    FileFilter,
    FileInfo,
    create_walker,
    read_text_file,
)
from config_warden.formatters.dispatcher import format_content
from config_warden.utils.config import Settings

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from config_warden.core.models import (
        FormatSummary,
        PatternRegistry,
        ScanResult,
        SecretMatch,
    )

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

NEEDS_FORMATTING = "File needs formatting"


def _read_utf8(path: Path) -> str:
    # Bytes are decoded directly so CRLF line endings reach the formatter.
    return path.read_bytes().decode("utf-8")


def _write_utf8(path: Path, content: str) -> None:
    path.write_bytes(content.encode("utf-8"))


class Orchestrator:
    """Coordinates the secret scan and the format pass for one root.

    Example:
        ```python
        orchestrator = Orchestrator(Path("."), Settings())
        result = await orchestrator.run_scan()
        summary = await orchestrator.run_format(check=True)
        ```
    """

    def __init__(
        self,
        root: Path,
        settings: Settings | None = None,
        patterns_file: Path | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            root: Directory (or single file) to process.
            settings: Application settings.
            patterns_file: Explicit pattern configuration file. Defaults to
                ``settings.scanner.patterns_file`` under the root directory.
        """
        self.root = root.resolve()
        self.settings = settings or Settings()
        self._patterns_file = patterns_file

    @property
    def base_dir(self) -> Path:
        """Directory that relative paths are computed from."""
        return self.root if self.root.is_dir() else self.root.parent

    @property
    def patterns_path(self) -> Path:
        """Location of the pattern configuration file."""
        return self._patterns_file or self.base_dir / self.settings.scanner.patterns_file

    @property
    def report_path(self) -> Path:
        """Default location of the JSON scan report."""
        return self.base_dir / self.settings.scanner.report_file

    def load_registry(self) -> PatternRegistry:
        """Load the pattern registry for this run (never raises)."""
        return load_registry(self.patterns_path)

    async def _map_files(
        self,
        items: Sequence[T],
        worker: Callable[[T], Awaitable[R]],
    ) -> list[R]:
        """Run ``worker`` over ``items`` and return results in item order."""
        if self.settings.concurrency <= 1:
            return [await worker(item) for item in items]

        semaphore = asyncio.Semaphore(self.settings.concurrency)

        async def bounded(item: T) -> R:
            async with semaphore:
                return await worker(item)

        return list(await asyncio.gather(*(bounded(item) for item in items)))

    def _collect(
        self,
        ignore_globs: Sequence[str],
        extensions: Sequence[str],
        skip_hidden: bool,
    ) -> tuple[list[FileInfo], int]:
        """Walk the root, returning candidate files and the visited count."""
        if self.root.is_file():
            file_filter = FileFilter(
                ignore_globs=tuple(ignore_globs),
                extensions=tuple(extensions),
                skip_hidden_dirs=skip_hidden,
            )
            # Globs are matched against the full path, so directory globs still apply
            if file_filter.is_ignored(self.root.as_posix().lstrip("/")):
                return [], 0
            if not file_filter.accepts(self.root):
                return [], 1
            return [FileInfo(path=self.root, relative_path=self.root.name)], 1

        walker = create_walker(
            self.root, ignore_globs, extensions, skip_hidden_dirs=skip_hidden
        )
        files = list(walker.walk())
        return files, walker.files_visited

    async def run_scan(self) -> ScanResult:
        """Scan every candidate file for secrets.

        Returns:
            Aggregated ScanResult. Unreadable files are listed in
            ``errors`` and do not stop the run.
        """
        registry = self.load_registry()
        scanner = SecretScanner(registry)
        logger.debug(
            "Loaded %d patterns, checking extensions: %s",
            scanner.pattern_count,
            ", ".join(registry.file_extensions),
        )

        files, visited = await asyncio.to_thread(
            self._collect, registry.ignore_globs, registry.file_extensions, True
        )
        logger.debug("Found %d config files to scan", len(files))

        outcomes = await self._map_files(files, partial(self._scan_one, scanner))

        return build_scan_result(
            total_files=len(files),
            scanned_files=visited,
            per_file_matches=[matches for matches, _ in outcomes],
            errors=[error for _, error in outcomes if error],
            root=str(self.base_dir),
        )

    async def _scan_one(
        self,
        scanner: SecretScanner,
        file_info: FileInfo,
    ) -> tuple[list[SecretMatch], str | None]:
        try:
            content = await asyncio.to_thread(read_text_file, file_info.path)
        except OSError as e:
            logger.warning("Could not read file %s: %s", file_info.relative_path, e)
            return [], f"Could not read file {file_info.relative_path}: {e}"
        return scanner.scan_content(content, file_info.relative_path), None

    async def run_format(self, check: bool = False) -> FormatSummary:
        """Format every supported configuration file.

        Args:
            check: Report files that would change without writing them.

        Returns:
            FormatSummary with one outcome per file.
        """
        formatter_settings = self.settings.formatter
        files, _ = await asyncio.to_thread(
            self._collect,
            formatter_settings.ignore_globs,
            formatter_settings.extensions,
            False,
        )
        logger.debug("Found %d configuration file(s) to format", len(files))

        outcomes = await self._map_files(files, partial(self._format_one, check=check))
        return summarize_formatting(outcomes)

    async def _format_one(self, file_info: FileInfo, check: bool) -> FormatOutcome:
        relative = file_info.relative_path
        try:
            content = await asyncio.to_thread(_read_utf8, file_info.path)
            formatted = format_content(
                content,
                file_info.extension,
                strict_jsonc=self.settings.formatter.strict_jsonc,
            )

            if formatted == content:
                return FormatOutcome(file=relative, status=FormatStatus.UNCHANGED)

            if check:
                return FormatOutcome(
                    file=relative,
                    status=FormatStatus.ERROR,
                    message=NEEDS_FORMATTING,
                )

            await asyncio.to_thread(_write_utf8, file_info.path, formatted)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not format %s: %s", relative, e)
            return FormatOutcome(file=relative, status=FormatStatus.ERROR, message=str(e))

        logger.debug("Formatted %s", relative)
        return FormatOutcome(file=relative, status=FormatStatus.FORMATTED)


def create_orchestrator(
    root: Path,
    settings: Settings | None = None,
    patterns_file: Path | None = None,
    concurrency: int | None = None,
    strict_jsonc: bool | None = None,
) -> Orchestrator:
    """Create a configured orchestrator.

    Args:
        root: Directory (or file) to process.
        settings: Base settings (defaults are loaded if None).
        patterns_file: Explicit pattern configuration file.
        concurrency: Override for ``settings.concurrency``.
        strict_jsonc: Override for ``settings.formatter.strict_jsonc``.

    Returns:
        Configured Orchestrator.
    """
    settings = settings or Settings()
    if concurrency is not None:
        settings = settings.model_copy(update={"concurrency": concurrency})
    if strict_jsonc is not None:
        formatter = settings.formatter.model_copy(update={"strict_jsonc": strict_jsonc})
        settings = settings.model_copy(update={"formatter": formatter})
    return Orchestrator(root, settings=settings, patterns_file=patterns_file)
