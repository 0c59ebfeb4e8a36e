"""Configuration management for Config Warden.

This module provides configuration loading and management using
Pydantic Settings with support for environment variables and TOML files.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScannerSettings(BaseSettings):
    """Secret scanner configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CFGW_SCANNER_")

    patterns_file: str = Field(
        default=".secrets-patterns.json",
        description="Pattern configuration file, relative to the run root",
    )
    report_file: str = Field(
        default="secrets-report.json",
        description="JSON report file, relative to the run root",
    )


class FormatterSettings(BaseSettings):
    """Formatter configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CFGW_FORMATTER_")

    extensions: list[str] = Field(
        default=[".json", ".yaml", ".yml", ".toml"],
        description="File extensions to format",
    )
    ignore_globs: list[str] = Field(
        default=[
            "**/node_modules/**",
            "**/.git/**",
            "**/dist/**",
            "**/package-lock.json",
            "**/bun.lock",
            "**/bun.lockb",
        ],
        description="Glob patterns excluded from formatting",
    )
    strict_jsonc: bool = Field(
        default=False,
        description="Track every delimiter when reindenting JSONC",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CFGW_LOGGING_")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="console",
        description="Log format: 'json' or 'console'",
    )
    file: str | None = Field(default=None, description="Log file path")


class Settings(BaseSettings):
    """Main application settings container."""

    model_config = SettingsConfigDict(
        env_prefix="CFGW_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    concurrency: int = Field(
        default=1,
        ge=1,
        description="Files processed at once (1 = strictly sequential)",
    )
    scanner: ScannerSettings = Field(default_factory=ScannerSettings)
    formatter: FormatterSettings = Field(default_factory=FormatterSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_config(config_path: Path | None = None) -> Settings:
    """Load configuration from file and environment.

    Priority (highest to lowest):
    1. Config file
    2. Environment variables
    3. Defaults

    Args:
        config_path: Optional path to a TOML configuration file.

    Returns:
        Loaded Settings instance.
    """
    config_data: dict[str, object] = {}

    if config_path and config_path.exists():
        import tomllib

        with config_path.open("rb") as f:
            config_data = tomllib.load(f)

    return Settings(**config_data)  # type: ignore[arg-type]

