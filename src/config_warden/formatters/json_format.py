"""JSON formatting with comment-aware routing.

Comment-free JSON is parsed and re-serialized; anything that looks like
it carries comments, or that fails to parse, goes through the JSONC
reindenter instead so that no comment is ever dropped.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from config_warden.formatters.jsonc import format_jsonc, format_jsonc_strict

logger = logging.getLogger(__name__)

# A line starting with "//" or any "/*" marks the content as commented.
_LEADING_COMMENT = re.compile(r"^\s*//|/\*", re.MULTILINE)
# "//" not preceded by ':' or '"' (so "https://..." is not a comment).
_INLINE_COMMENT = re.compile(r'[^:"]//')


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def has_comments(content: str) -> bool:
    """Guess whether JSON text contains comments.

    The check is deliberately loose. A miss sends commented content to
    ``format_pure_json``, which then fails to parse and falls back.
    """
    return bool(_LEADING_COMMENT.search(content) or _INLINE_COMMENT.search(content))


def format_pure_json(content: str) -> str:
    """Parse strict JSON and re-serialize it with two-space indentation.

    Args:
        content: JSON text without comments.

    Returns:
        Canonical JSON text ending in a single newline.

    Raises:
        ValueError: If the content is not valid JSON (``json.JSONDecodeError``
            is a subclass).
        RecursionError: If the content is nested deeper than the parser allows.
    """
    parsed = json.loads(content, parse_constant=_reject_constant)
    return json.dumps(parsed, indent=2, ensure_ascii=False) + "\n"


def format_json(content: str, strict_jsonc: bool = False) -> str:
    """Format JSON or JSONC content.

    Args:
        content: File content.
        strict_jsonc: Use the token-tracking JSONC reindenter.

    Returns:
        Formatted content.
    """
    reindent = format_jsonc_strict if strict_jsonc else format_jsonc

    if has_comments(content):
        return reindent(content)

    try:
        return format_pure_json(content)
    except (ValueError, RecursionError) as e:
        logger.debug("Not strict JSON, reindenting instead: %s", e)
        return reindent(content)
