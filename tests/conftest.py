"""Pytest configuration and shared fixtures."""

import json
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from config_warden.core.models import PatternRegistry, SecretMatch, SecretPattern
from config_warden.core.patterns import default_registry
from config_warden.utils.redaction import mask_secret


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registry() -> PatternRegistry:
    """Get the built-in pattern registry."""
    return default_registry()


@pytest.fixture
def database_registry() -> PatternRegistry:
    """Registry with a single rule gated on the "database" keyword."""
    return PatternRegistry(
        patterns=(
            SecretPattern(
                name="DB Password",
                pattern=r"""(?i)password\s*[:=]\s*["'][^"']{4,}["']""",
                context=("database",),
                description="Password near a database setting",
            ),
        ),
        ignore_globs=(),
        file_extensions=(".json", ".env"),
    )


@pytest.fixture
def sample_match() -> SecretMatch:
    """Create a sample SecretMatch for testing."""
    raw = 'api_key: "abcdefghijklmnopqrstuvwx"'
    return SecretMatch(
        file="config/app.yaml",
        line=3,
        column=3,
        pattern_name="Generic API Key",
        raw_match=raw,
        masked_match=mask_secret(raw),
        context_line=raw,
    )


@pytest.fixture
def config_tree(temp_dir: Path) -> Path:
    """Create a project with config files, ignored paths and a leaked secret."""
    (temp_dir / "node_modules" / "pkg").mkdir(parents=True)
    (temp_dir / "dist").mkdir()
    (temp_dir / "config").mkdir()
    (temp_dir / ".cache").mkdir()

    (temp_dir / "package.json").write_text('{\n  "name": "demo"\n}\n')
    (temp_dir / "config" / "app.yaml").write_text('database:\n  password: "supersecret"\n')
    (temp_dir / "config" / "settings.toml").write_text('title = "demo"\n')
    (temp_dir / "README.md").write_text("# Demo\n")
    (temp_dir / ".env.local").write_text('API_KEY="0123456789abcdefXYZ"\n')
    (temp_dir / "node_modules" / "pkg" / "package.json").write_text(
        '{"password": "ignored-secret"}'
    )
    (temp_dir / "dist" / "bundle.json").write_text('{"secret": "ignoredvalue"}')
    (temp_dir / ".cache" / "state.json").write_text('{"secret": "hiddenvalue"}')

    return temp_dir


@pytest.fixture
def patterns_file(temp_dir: Path) -> Path:
    """Write a custom pattern configuration file."""
    path = temp_dir / ".secrets-patterns.json"
    path.write_text(
        json.dumps(
            {
                "patterns": [
                    {
                        "name": "Token",
                        "pattern": "tok_[a-z0-9]{8}",
                        "description": "Service token",
                    }
                ],
                "ignorePatterns": ["**/vendor/**"],
                "fileExtensions": [".json", ".TXT"],
            }
        )
    )
    return path
