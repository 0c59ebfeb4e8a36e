"""Secret pattern registry.

This module loads the secret-detection rules, ignore globs and accepted
file extensions from a JSON configuration file. Any failure to load the
file degrades to a built-in default registry instead of aborting the run.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config_warden.core.errors import PatternConfigError
from config_warden.core.models import PatternRegistry, SecretPattern

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS_FILE = ".secrets-patterns.json"

DEFAULT_PATTERNS: tuple[SecretPattern, ...] = (
    SecretPattern(
        name="Generic API Key",
        pattern=r"""(?i)api[-_]?key["']?\s*[:=]\s*["'][A-Za-z0-9_-]{16,}["']""",
        description="Generic API Key pattern",
    ),
    SecretPattern(
        name="Generic Secret",
        pattern=r"""(?i)secret["']?\s*[:=]\s*["'][A-Za-z0-9_-]{8,}["']""",
        description="Generic Secret pattern",
    ),
    SecretPattern(
        name="Generic Password",
        pattern=r"""(?i)password["']?\s*[:=]\s*["'][^"']{4,}["']""",
        description="Generic Password pattern",
    ),
)

DEFAULT_IGNORE_GLOBS: tuple[str, ...] = (
    "**/node_modules/**",
    "**/.git/**",
    "**/dist/**",
)

DEFAULT_FILE_EXTENSIONS: tuple[str, ...] = (
    ".json",
    ".yaml",
    ".yml",
    ".toml",
    ".env",
)


class _PatternConfigFile(BaseModel):
    """On-disk layout of the pattern configuration file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    patterns: list[SecretPattern] = Field(..., min_length=1)
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_GLOBS),
        alias="ignorePatterns",
    )
    file_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FILE_EXTENSIONS),
        alias="fileExtensions",
    )


@dataclass(frozen=True)
class CompiledPattern:
    """A secret pattern with its regex compiled.

    Attributes:
        rule: The rule as loaded from configuration.
        regex: Compiled form of ``rule.pattern``.
    """

    rule: SecretPattern
    regex: re.Pattern[str]

    @property
    def name(self) -> str:
        """Name of the underlying rule."""
        return self.rule.name

    @property
    def context(self) -> tuple[str, ...]:
        """Lowercased context keywords (empty when the rule has none)."""
        return tuple(keyword.lower() for keyword in self.rule.context or ())


def default_registry() -> PatternRegistry:
    """Return the built-in registry used when no configuration is usable."""
    return PatternRegistry(
        patterns=DEFAULT_PATTERNS,
        ignore_globs=DEFAULT_IGNORE_GLOBS,
        file_extensions=DEFAULT_FILE_EXTENSIONS,
    )


def parse_registry(raw: str) -> PatternRegistry:
    """Parse and validate pattern configuration text.

    Args:
        raw: JSON text of the configuration file.

    Returns:
        Validated PatternRegistry.

    Raises:
        PatternConfigError: If the text is not JSON or does not match
            the expected schema.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PatternConfigError(f"Malformed JSON: {e}") from e

    try:
        config = _PatternConfigFile.model_validate(data)
    except ValidationError as e:
        raise PatternConfigError(f"Invalid pattern configuration: {e}") from e

    return PatternRegistry(
        patterns=tuple(config.patterns),
        ignore_globs=tuple(config.ignore_patterns),
        file_extensions=tuple(ext.lower() for ext in config.file_extensions),
    )


def load_registry(config_path: Path | None) -> PatternRegistry:
    """Load the pattern registry, falling back to built-in defaults.

    Never raises: a missing or broken configuration file only degrades
    the scan to the default rules.

    Args:
        config_path: Path to the JSON configuration file.

    Returns:
        Loaded PatternRegistry, or the default one on any failure.
    """
    if config_path is None:
        logger.info("No pattern configuration given, using built-in defaults")
        return default_registry()

    try:
        raw = config_path.read_text(encoding="utf-8")
        registry = parse_registry(raw)
    except (OSError, UnicodeDecodeError, PatternConfigError) as e:
        logger.error("Error loading config: %s (%s)", config_path, e)
        return default_registry()

    logger.debug(
        "Loaded %d patterns from %s", len(registry.patterns), config_path
    )
    return registry


def compile_patterns(registry: PatternRegistry) -> list[CompiledPattern]:
    """Compile every rule of a registry.

    Rules whose regex does not compile are logged and skipped; the
    remaining rules are returned in registry order.

    Args:
        registry: Registry whose patterns should be compiled.

    Returns:
        List of compiled patterns.
    """
    compiled: list[CompiledPattern] = []
    for rule in registry.patterns:
        try:
            regex = re.compile(rule.pattern)
        except re.error as e:
            logger.warning('Invalid regex pattern "%s": %s', rule.name, e)
            continue
        compiled.append(CompiledPattern(rule=rule, regex=regex))

    if not compiled:
        logger.warning("No usable secret patterns, scan will find nothing")
    return compiled
