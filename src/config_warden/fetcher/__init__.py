"""Fetcher module for directory traversal and file reading."""

from config_warden.fetcher.file_walker import (
    HIDDEN_DIR_ALLOWLIST,
    FileFilter,
    FileInfo,
    FileWalker,
    create_walker,
    has_accepted_extension,
    read_text_file,
)

__all__ = [
    "HIDDEN_DIR_ALLOWLIST",
    "FileFilter",
    "FileInfo",
    "FileWalker",
    "create_walker",
    "has_accepted_extension",
    "read_text_file",
]
