"""Whitespace normalization for YAML and TOML.

These formatters never parse the document: they strip trailing
whitespace, collapse blank-line runs, and (for TOML) even out the spacing
around ``=`` in key/value lines.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from config_warden.formatters.jsonc import split_lines


def collapse_blank_lines(lines: Iterable[str]) -> list[str]:
    """Replace runs of blank lines with a single blank line."""
    result: list[str] = []
    prev_blank = False
    for line in lines:
        blank = not line.strip()
        if blank and prev_blank:
            continue
        result.append(line)
        prev_blank = blank
    return result


def _normalize(content: str, fix_line: Callable[[str], str]) -> str:
    lines = [fix_line(line.rstrip()) for line in split_lines(content)]
    output = "\n".join(collapse_blank_lines(lines))
    if not output.endswith("\n"):
        output += "\n"
    return output


def normalize_toml_assignment(line: str) -> str:
    """Put exactly one space on each side of the first ``=`` of a line.

    Comment lines and lines without ``=`` are returned unchanged. Only the
    first ``=`` is touched, so values containing ``=`` stay intact.
    """
    if "=" not in line or line.lstrip().startswith("#"):
        return line
    key, _, value = line.partition("=")
    if not key:
        return line
    return f"{key.rstrip()} = {value.lstrip()}".rstrip()


def format_yaml(content: str) -> str:
    """Normalize whitespace in YAML content."""
    return _normalize(content, lambda line: line)


def format_toml(content: str) -> str:
    """Normalize whitespace and ``key = value`` spacing in TOML content."""
    return _normalize(content, normalize_toml_assignment)
