"""Formatters for JSON/JSONC, YAML and TOML configuration files."""

from config_warden.formatters.dispatcher import format_content, supported_extensions
from config_warden.formatters.json_format import (
    format_json,
    format_pure_json,
    has_comments,
)
from config_warden.formatters.jsonc import format_jsonc, format_jsonc_strict
from config_warden.formatters.lines import format_toml, format_yaml

__all__ = [
    "format_content",
    "format_json",
    "format_jsonc",
    "format_jsonc_strict",
    "format_pure_json",
    "format_toml",
    "format_yaml",
    "has_comments",
    "supported_extensions",
]
