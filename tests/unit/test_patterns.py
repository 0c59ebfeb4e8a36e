"""Unit tests for the secret pattern registry."""

from __future__ import annotations

import json
import logging
from pathlib import Path  # noqa: TC003

import pytest

from config_warden.core.errors import ConfigWardenError, PatternConfigError
from config_warden.core.models import PatternRegistry, SecretPattern
from config_warden.core.patterns import (
    DEFAULT_FILE_EXTENSIONS,
    DEFAULT_IGNORE_GLOBS,
    compile_patterns,
    default_registry,
    load_registry,
    parse_registry,
)


class TestDefaultRegistry:
    """Tests for the built-in registry."""

    def test_three_patterns(self) -> None:
        """Exactly the three generic rules are built in."""
        registry = default_registry()
        assert [p.name for p in registry.patterns] == [
            "Generic API Key",
            "Generic Secret",
            "Generic Password",
        ]

    def test_globs_and_extensions(self) -> None:
        """Default globs and extensions are set."""
        registry = default_registry()
        assert registry.ignore_globs == DEFAULT_IGNORE_GLOBS
        assert registry.file_extensions == (".json", ".yaml", ".yml", ".toml", ".env")

    def test_all_defaults_compile(self) -> None:
        """Every default rule is a valid regex."""
        assert len(compile_patterns(default_registry())) == 3


class TestParseRegistry:
    """Tests for parse_registry function."""

    def test_camel_case_keys(self) -> None:
        """On-disk keys map onto the registry fields."""
        raw = json.dumps(
            {
                "patterns": [{"name": "Token", "pattern": "tok_", "context": ["api"]}],
                "ignorePatterns": ["**/vendor/**"],
                "fileExtensions": [".JSON"],
            }
        )
        registry = parse_registry(raw)
        assert registry.patterns[0].context == ("api",)
        assert registry.ignore_globs == ("**/vendor/**",)
        assert registry.file_extensions == (".json",)

    def test_missing_lists_use_defaults(self) -> None:
        """Omitted globs and extensions fall back to the built-in lists."""
        registry = parse_registry('{"patterns": [{"name": "A", "pattern": "a"}]}')
        assert registry.ignore_globs == DEFAULT_IGNORE_GLOBS
        assert registry.file_extensions == DEFAULT_FILE_EXTENSIONS

    def test_malformed_json(self) -> None:
        """Broken JSON raises PatternConfigError."""
        with pytest.raises(PatternConfigError, match="Malformed JSON"):
            parse_registry("{not json")

    def test_schema_mismatch(self) -> None:
        """A pattern without a regex is rejected."""
        with pytest.raises(PatternConfigError):
            parse_registry('{"patterns": [{"name": "A"}]}')

    def test_empty_pattern_list(self) -> None:
        """An empty pattern list is rejected."""
        with pytest.raises(PatternConfigError):
            parse_registry('{"patterns": []}')

    def test_error_hierarchy(self) -> None:
        """PatternConfigError is a package error."""
        assert issubclass(PatternConfigError, ConfigWardenError)


class TestLoadRegistry:
    """Tests for load_registry function."""

    def test_none_path(self) -> None:
        """No path gives the default registry."""
        assert load_registry(None) == default_registry()

    def test_loads_file(self, patterns_file: Path) -> None:
        """A valid file is loaded as-is."""
        registry = load_registry(patterns_file)
        assert [p.name for p in registry.patterns] == ["Token"]
        assert registry.file_extensions == (".json", ".txt")

    def test_missing_file_falls_back(
        self,
        temp_dir: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A missing file logs an error and uses defaults."""
        path = temp_dir / "missing.json"
        with caplog.at_level(logging.ERROR, logger="config_warden"):
            registry = load_registry(path)

        assert len(registry.patterns) == 3
        assert "Error loading config" in caplog.text
        assert "missing.json" in caplog.text

    def test_malformed_file_falls_back(self, temp_dir: Path) -> None:
        """Malformed JSON never raises."""
        path = temp_dir / ".secrets-patterns.json"
        path.write_text("{ this is not json")
        assert load_registry(path) == default_registry()

    def test_wrong_shape_falls_back(self, temp_dir: Path) -> None:
        """A schema mismatch uses the full default registry."""
        path = temp_dir / ".secrets-patterns.json"
        path.write_text('{"patterns": "nope", "fileExtensions": [".txt"]}')
        registry = load_registry(path)
        assert registry.file_extensions == DEFAULT_FILE_EXTENSIONS


class TestCompilePatterns:
    """Tests for compile_patterns function."""

    def test_invalid_regex_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """A bad rule is warned about and dropped, the rest survive."""
        registry = PatternRegistry(
            patterns=(
                SecretPattern(name="Broken", pattern="(unclosed"),
                SecretPattern(name="Fine", pattern="tok_[0-9]+"),
            )
        )
        with caplog.at_level(logging.WARNING, logger="config_warden"):
            compiled = compile_patterns(registry)

        assert [p.name for p in compiled] == ["Fine"]
        assert 'Invalid regex pattern "Broken"' in caplog.text

    def test_all_invalid(self, caplog: pytest.LogCaptureFixture) -> None:
        """No usable pattern leaves an empty list and a warning."""
        registry = PatternRegistry(patterns=(SecretPattern(name="Broken", pattern="[a-"),))
        with caplog.at_level(logging.WARNING, logger="config_warden"):
            compiled = compile_patterns(registry)

        assert compiled == []
        assert "No usable secret patterns" in caplog.text

    def test_context_lowercased(self) -> None:
        """Context keywords are compared in lowercase."""
        registry = PatternRegistry(
            patterns=(SecretPattern(name="DB", pattern="x", context=("DataBase",)),)
        )
        assert compile_patterns(registry)[0].context == ("database",)
