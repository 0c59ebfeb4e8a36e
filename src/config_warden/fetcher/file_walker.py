"""File enumeration and filtering.

This module walks a directory tree, drops paths matching the ignore
globs, and yields the files whose extension is accepted. Ignore globs
are always checked before the extension filter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pathspec

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

# Hidden directories that are still walked when hidden directories are skipped
HIDDEN_DIR_ALLOWLIST: frozenset[str] = frozenset({".config"})


def read_text_file(path: Path) -> str:
    """Read a text file as UTF-8, falling back to latin-1.

    Raises:
        OSError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1")


def has_accepted_extension(path: Path, extensions: Iterable[str]) -> bool:
    """Check if a file's extension is in the accepted list.

    An entry starting with ``.env`` accepts any file whose name starts
    with ``.env`` (``.env``, ``.env.local``, ...). Other entries are
    compared with the lowercased suffix.
    """
    suffix = path.suffix.lower()
    for extension in extensions:
        if extension.startswith(".env"):
            if path.name.startswith(".env"):
                return True
        elif suffix == extension.lower():
            return True
    return False


@dataclass
class FileFilter:
    """Ignore-glob and extension rules for one walk.

    Attributes:
        ignore_globs: Gitignore-style glob patterns (``*``, ``**``).
        extensions: Accepted file extensions (with dot prefix).
        skip_hidden_dirs: Whether to skip dot-directories.
    """

    ignore_globs: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()
    skip_hidden_dirs: bool = True
    _spec: pathspec.PathSpec = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Compile the ignore globs."""
        self._spec = pathspec.PathSpec.from_lines("gitwildmatch", self.ignore_globs)

    def is_ignored(self, relative: str, is_dir: bool = False) -> bool:
        """Check a root-relative POSIX path against the ignore globs."""
        if self._spec.match_file(relative):
            return True
        return is_dir and self._spec.match_file(relative + "/")

    def should_descend(self, path: Path, relative: str) -> bool:
        """Check if a directory should be walked."""
        if self.is_ignored(relative, is_dir=True):
            return False
        return not (
            self.skip_hidden_dirs
            and path.name.startswith(".")
            and path.name not in HIDDEN_DIR_ALLOWLIST
        )

    def accepts(self, path: Path) -> bool:
        """Check if a (non-ignored) file has an accepted extension."""
        return has_accepted_extension(path, self.extensions)


@dataclass
class FileInfo:
    """Information about a candidate file.

    Attributes:
        path: Absolute path to the file.
        relative_path: POSIX path relative to the walk root.
    """

    path: Path
    relative_path: str

    @property
    def extension(self) -> str:
        """Lowercased file suffix (with dot)."""
        return self.path.suffix.lower()


class FileWalker:
    """Directory traversal with filtering.

    Walks a directory tree in sorted order and yields files matching the
    configured filter. Ignored directories are pruned, ignored files are
    not counted at all.

    Example:
        >>> walker = FileWalker(Path("/project"), FileFilter(extensions=(".json",)))
        >>> for file_info in walker.walk():
        ...     print(file_info.relative_path)
    """

    def __init__(self, root: Path, file_filter: FileFilter | None = None) -> None:
        """Initialize the FileWalker.

        Args:
            root: Root directory to walk.
            file_filter: Filter configuration. Uses defaults if not provided.
        """
        self.root = root.resolve()
        self.filter = file_filter or FileFilter()
        self._files_visited = 0

    @property
    def files_visited(self) -> int:
        """Number of non-ignored files seen, whatever their extension."""
        return self._files_visited

    def relative(self, path: Path) -> str:
        """Return ``path`` relative to the root, with ``/`` separators."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def walk(self) -> Iterator[FileInfo]:
        """Walk the directory tree and yield matching files.

        Yields:
            FileInfo for each file that passes the filter.

        Raises:
            FileNotFoundError: If root directory doesn't exist.
            NotADirectoryError: If root is not a directory.
        """
        if not self.root.exists():
            raise FileNotFoundError(f"Directory not found: {self.root}")

        if not self.root.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.root}")

        self._files_visited = 0
        yield from self._walk_dir(self.root)

    def _walk_dir(self, directory: Path) -> Iterator[FileInfo]:
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return

        for entry in entries:
            relative = self.relative(entry)
            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
            except OSError:
                continue

            if is_dir:
                if self.filter.should_descend(entry, relative):
                    yield from self._walk_dir(entry)
                continue

            if not is_file or self.filter.is_ignored(relative):
                continue

            self._files_visited += 1
            if self.filter.accepts(entry):
                yield FileInfo(path=entry, relative_path=relative)


def create_walker(
    root: Path,
    ignore_globs: Iterable[str],
    extensions: Iterable[str],
    skip_hidden_dirs: bool = True,
) -> FileWalker:
    """Create a FileWalker from configuration values.

    Args:
        root: Root directory to walk.
        ignore_globs: Glob patterns to exclude.
        extensions: Extensions to include.
        skip_hidden_dirs: Whether to skip dot-directories.

    Returns:
        Configured FileWalker instance.
    """
    file_filter = FileFilter(
        ignore_globs=tuple(ignore_globs),
        extensions=tuple(extensions),
        skip_hidden_dirs=skip_hidden_dirs,
    )
    return FileWalker(root, file_filter)
