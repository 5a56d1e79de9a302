"""
Centralized configuration for versionator.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (VERSIONATOR_*)
3. .env file
4. Default values

Example:
    from versionator.config import get_config

    config = get_config()
    print(config.max_depth)  # From VERSIONATOR_MAX_DEPTH or default

    # Override at runtime
    config = get_config(log_format="text")
"""

from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class VersionatorConfig(BaseSettings):
    """
    Central configuration for versionator.

    All settings can be overridden via environment variables
    prefixed with VERSIONATOR_.

    Example:
        export VERSIONATOR_LOG_LEVEL=debug
        export VERSIONATOR_MAX_DEPTH=16
    """

    model_config = SettingsConfigDict(
        env_prefix="VERSIONATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = Field(
        default="versionator",
        description="Service name for log and telemetry attribution",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for versionator",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format",
    )

    # Schema walk
    max_depth: Optional[int] = Field(
        default=64,
        ge=1,
        description="Deepest nesting walked before complex fields are treated as leaves",
    )
    emit_span_events: bool = Field(
        default=True,
        description="Record an OTel span event for each excluded field",
    )
    log_exclusions: bool = Field(
        default=False,
        description="Write a JSON log line for each excluded field",
    )
    schema_path: Optional[str] = Field(
        default=None,
        description="Default schema YAML file for the CLI",
    )

    @field_validator("schema_path")
    @classmethod
    def expand_path(cls, v: Optional[str]) -> Optional[str]:
        """Expand ~ and environment variables in paths."""
        if v is None:
            return v
        return os.path.expanduser(os.path.expandvars(v))


# Global singleton
_config: Optional[VersionatorConfig] = None


def get_config(**overrides) -> VersionatorConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.
    """
    global _config

    if overrides or _config is None:
        _config = VersionatorConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
