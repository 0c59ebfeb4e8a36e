"""Core data models for Config Warden.

This module defines the Pydantic models used throughout the application
for representing secret patterns, scan matches, and per-file formatting
outcomes.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FormatStatus(str, Enum):
    """Outcome of formatting a single file."""

    FORMATTED = "formatted"
    UNCHANGED = "unchanged"
    ERROR = "error"


class SecretPattern(BaseModel):
    """A single secret-detection rule.

    The regex source is kept as text; compilation happens once per run
    in the pattern registry so that a bad rule can be dropped on its own.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Human-readable rule name")
    pattern: str = Field(..., min_length=1, description="Regular expression source")
    context: Optional[tuple[str, ...]] = Field(
        default=None,
        description="Keywords, one of which must appear near a match",
    )
    description: str = Field(default="", description="What the rule detects")


class PatternRegistry(BaseModel):
    """Validated set of secret patterns plus file selection rules.

    Loaded once per scan run and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    patterns: tuple[SecretPattern, ...] = Field(
        ...,
        min_length=1,
        description="Ordered list of detection rules",
    )
    ignore_globs: tuple[str, ...] = Field(
        default=(),
        description="Glob patterns excluding paths from the scan",
    )
    file_extensions: tuple[str, ...] = Field(
        default=(),
        description="File extensions (with dot) that reach the scanner",
    )


class SecretMatch(BaseModel):
    """A single regex hit inside a file.

    Line and column are 1-based and refer to the original file content.
    """

    model_config = ConfigDict(frozen=True)

    file: str = Field(..., description="Path of the file, relative to the run root")
    line: int = Field(..., ge=1, description="Line number of the match start")
    column: int = Field(..., ge=1, description="Column of the match start")
    pattern_name: str = Field(..., description="Name of the rule that matched")
    pattern: str = Field(default="", description="Regex source of the rule")
    raw_match: str = Field(..., description="The matched text, unmasked")
    masked_match: str = Field(..., description="Display-safe form of the match")
    context_line: str = Field(default="", description="Trimmed source line of the match")


class ScanResult(BaseModel):
    """Aggregate result of a secret scan run."""

    root: str = Field(default="", description="Directory the scan was run against")
    total_files: int = Field(default=0, ge=0, description="Candidate files passed to the scanner")
    scanned_files: int = Field(default=0, ge=0, description="Non-ignored files visited")
    matches: list[SecretMatch] = Field(default_factory=list, description="All matches in order")
    errors: list[str] = Field(default_factory=list, description="Per-file failures")

    @property
    def has_secrets(self) -> bool:
        """Whether any secret was found."""
        return len(self.matches) > 0

    @property
    def secrets_count(self) -> int:
        """Get count of secrets found."""
        return len(self.matches)


class FormatOutcome(BaseModel):
    """Result of formatting one file."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(..., description="Path of the file, relative to the run root")
    status: FormatStatus = Field(..., description="What happened to the file")
    message: Optional[str] = Field(default=None, description="Detail for errors")


class FormatSummary(BaseModel):
    """Counts of formatting outcomes for a whole run."""

    outcomes: list[FormatOutcome] = Field(default_factory=list)
    formatted: int = Field(default=0, ge=0)
    unchanged: int = Field(default=0, ge=0)
    errors: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        """Number of files processed."""
        return len(self.outcomes)

    def needs_attention(self, check: bool) -> bool:
        """Whether the run should fail a CI gate.

        Only check mode fails: a difference there is reported as an error
        outcome, and a normal run that rewrote files is a success.
        """
        return check and (self.formatted > 0 or self.errors > 0)
