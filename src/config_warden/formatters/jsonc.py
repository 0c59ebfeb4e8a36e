"""Comment-preserving reindentation for JSON with comments.

Two strategies are provided:

- ``format_jsonc``: the default line classifier. Each line moves the
  depth by at most one level, driven by its first closing delimiter and
  its trailing opening delimiter. A line holding several structural
  delimiters (``"a": {"b": {``), or an opener followed by an inline
  comment, is therefore not depth-tracked correctly; that output is
  kept as-is.
- ``format_jsonc_strict``: an opt-in character scanner that skips string
  literals and comments and counts every delimiter, so such lines are
  indented by their real nesting.

Neither strategy parses the document. Both always return text, even for
malformed input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

INDENT = "  "

COMMENT_PREFIXES = ("//", "/*", "*")
OPENERS = "{["
CLOSERS = "}]"

_LINE_BREAK = re.compile(r"\r?\n")
_SAME_LINE_ARRAY = re.compile(r"\[.*\]")
_SAME_LINE_OBJECT = re.compile(r"\{.*\}")


def split_lines(content: str) -> list[str]:
    """Split text into physical lines, accepting ``\\n`` and ``\\r\\n``."""
    return _LINE_BREAK.split(content)


def join_lines(lines: list[str]) -> str:
    """Join lines and collapse trailing newlines to exactly one."""
    return "\n".join(lines).rstrip("\n") + "\n"


def split_inline_comment(code: str) -> tuple[str, str | None]:
    """Split a line into code and a trailing ``//`` comment.

    ``//`` inside a double-quoted string (``"http://..."``) is not a
    comment.

    Returns:
        Tuple of (code, comment). ``comment`` is None when the line has
        no inline comment.
    """
    in_string = False
    escaped = False
    for i, ch in enumerate(code):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif code.startswith("//", i):
            return code[:i], code[i:]
    return code, None


def _join_comment(code: str, comment: str | None) -> str:
    if comment is None:
        return code
    code = code.strip()
    return f"{code} {comment}" if code else comment


def opens_block(code: str) -> bool:
    """Check if a line opens a block continuing on the following lines."""
    return (
        code.endswith(("{", "["))
        and not _SAME_LINE_ARRAY.search(code)
        and not _SAME_LINE_OBJECT.search(code)
    )


def format_jsonc(content: str) -> str:
    """Reindent JSONC text with two spaces per level, keeping comments.

    Args:
        content: JSON-with-comments text.

    Returns:
        Reindented text ending in a single newline.
    """
    depth = 0
    formatted: list[str] = []

    for line in split_lines(content):
        trimmed = line.strip()

        if not trimmed:
            formatted.append("")
            continue

        if trimmed.startswith(COMMENT_PREFIXES):
            formatted.append(INDENT * depth + trimmed)
            continue

        if trimmed[0] in CLOSERS:
            depth = max(0, depth - 1)

        code, comment = split_inline_comment(trimmed)
        formatted.append(INDENT * depth + _join_comment(code, comment))

        if opens_block(trimmed):
            depth += 1

    return join_lines(formatted)


@dataclass
class LineTokens:
    """Delimiter counts for one line, outside strings and comments.

    Attributes:
        leading_closers: Closing delimiters before any other code.
        opened: Opening delimiters on the line.
        closed: Closing delimiters on the line (including leading ones).
        comment_start: Offset of a ``//`` comment, if any.
        in_block_comment: Whether a ``/*`` comment is still open at the end.
    """

    leading_closers: int = 0
    opened: int = 0
    closed: int = 0
    comment_start: int | None = None
    in_block_comment: bool = False


def scan_line(line: str, in_block_comment: bool = False) -> LineTokens:
    """Count structural delimiters in a line.

    Args:
        line: The trimmed line.
        in_block_comment: Whether the line starts inside a ``/*`` comment.

    Returns:
        LineTokens for the line.
    """
    tokens = LineTokens()
    seen_code = False
    in_string = False
    i = 0

    while i < len(line):
        ch = line[i]

        if in_block_comment:
            if line.startswith("*/", i):
                in_block_comment = False
                i += 2
            else:
                i += 1
            continue

        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if line.startswith("//", i):
            tokens.comment_start = i
            break
        if line.startswith("/*", i):
            in_block_comment = True
            i += 2
            continue

        if ch == '"':
            in_string = True
            seen_code = True
        elif ch in OPENERS:
            tokens.opened += 1
            seen_code = True
        elif ch in CLOSERS:
            tokens.closed += 1
            if not seen_code:
                tokens.leading_closers += 1
        elif not ch.isspace() and ch != ",":
            seen_code = True
        i += 1

    tokens.in_block_comment = in_block_comment
    return tokens


def format_jsonc_strict(content: str) -> str:
    """Reindent JSONC text by tracking every delimiter token.

    Unlike ``format_jsonc``, nested delimiters on a single line move the
    depth by their real count.

    Args:
        content: JSON-with-comments text.

    Returns:
        Reindented text ending in a single newline.
    """
    depth = 0
    in_block_comment = False
    formatted: list[str] = []

    for line in split_lines(content):
        trimmed = line.strip()

        if not trimmed:
            formatted.append("")
            continue

        tokens = scan_line(trimmed, in_block_comment)
        indent = max(0, depth - tokens.leading_closers)

        text = trimmed
        if tokens.comment_start:
            start = tokens.comment_start
            text = _join_comment(trimmed[:start], trimmed[start:])

        formatted.append(INDENT * indent + text)
        depth = max(0, depth + tokens.opened - tokens.closed)
        in_block_comment = tokens.in_block_comment

    return join_lines(formatted)
