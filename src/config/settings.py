# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for loading, resolution, export and logging settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from alpsgraph.logging.handlers import parse_size

KNOWN_EXPORT_FORMATS = frozenset({"json", "graphml"})


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Profile loading ===
    profile_encoding: str = "utf-8"

    # === Reference resolution ===
    # "fail": a conflicting re-merge aborts; "keep_first": warn and keep existing
    conflict_policy: Literal["fail", "keep_first"] = "fail"

    # === Graph export ===
    graph_export_formats: str = "json"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    @field_validator("log_rotation")
    @classmethod
    def validate_log_rotation(cls, v: str) -> str:
        parse_size(v)
        return v

    @field_validator("log_retention")
    @classmethod
    def validate_log_retention(cls, v: int) -> int:
        if v < 0:
            raise ValueError("log_retention must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        unknown = sorted(set(self.graph_export_formats_list) - KNOWN_EXPORT_FORMATS)
        if unknown:
            raise ConfigurationError(
                f"GRAPH_EXPORT_FORMATS contains unknown formats: {', '.join(unknown)}"
            )
        return self

    # --- Helpers ---

    @property
    def graph_export_formats_list(self) -> list[str]:
        """Parse comma-separated graph export formats."""
        return [
            f.strip().lower() for f in self.graph_export_formats.split(",") if f.strip()
        ]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-profile config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
