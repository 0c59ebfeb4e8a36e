"""Route file content to the formatter for its extension."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from config_warden.formatters.json_format import format_json
from config_warden.formatters.jsonc import format_jsonc, format_jsonc_strict
from config_warden.formatters.lines import format_toml, format_yaml

if TYPE_CHECKING:
    from collections.abc import Callable


def _formatters(strict_jsonc: bool) -> dict[str, Callable[[str], str]]:
    return {
        ".json": partial(format_json, strict_jsonc=strict_jsonc),
        ".jsonc": format_jsonc_strict if strict_jsonc else format_jsonc,
        ".yaml": format_yaml,
        ".yml": format_yaml,
        ".toml": format_toml,
    }


def supported_extensions() -> list[str]:
    """Extensions that have a formatter."""
    return list(_formatters(strict_jsonc=False))


def format_content(content: str, extension: str, strict_jsonc: bool = False) -> str:
    """Apply the formatter registered for ``extension``.

    Unknown extensions are returned unchanged.

    Args:
        content: File content.
        extension: File extension with dot (case-insensitive).
        strict_jsonc: Use the token-tracking JSONC reindenter.

    Returns:
        Formatted content.
    """
    formatter = _formatters(strict_jsonc).get(extension.lower())
    if formatter is None:
        return content
    return formatter(content)
