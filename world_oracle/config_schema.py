"""Pydantic schema for configuration validation.

All config values are validated at startup. Typos and invalid values
fail fast with clear error messages.

Usage:
    from world_oracle.config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# REGISTRY MODEL
# =============================================================================

class RegistryConfig(StrictModel):
    """World registry configuration."""

    admin: str = Field(
        default="deployer",
        min_length=1,
        description="Deployer principal: whitelisted and sole admin"
    )
    general_image_source: str = Field(
        default="QmUHsB1Jt5vmY8ZdyLcLTBLw8mwVGdhMdvKbJqbhyYbPSa",
        min_length=1,
        description="Default image reference for non-special worlds"
    )
    provider_base: str = Field(
        default="https://ipfs.io/",
        description="Prefix prepended to image references in token URIs"
    )
    versioning: bool = Field(
        default=True,
        description="Track a per-world version bumped on each update"
    )
    whitelist: list[str] = Field(
        default_factory=list,
        description="Extra principals whitelisted at startup"
    )
    special_sources: list[str] = Field(
        default_factory=list,
        description="Special image references loaded at startup"
    )

    @field_validator("whitelist", "special_sources")
    @classmethod
    def no_empty_entries(cls, v: list[str]) -> list[str]:
        if any(not entry for entry in v):
            raise ValueError("entries must be non-empty strings")
        return v

    @model_validator(mode="after")
    def whitelist_unique(self) -> "RegistryConfig":
        seen: set[str] = {self.admin}
        for principal in self.whitelist:
            if principal in seen:
                raise ValueError(f"principal '{principal}' listed twice in whitelist")
            seen.add(principal)
        return self


# =============================================================================
# SPECIAL SELECTION MODEL
# =============================================================================

class SpecialSelectionConfig(StrictModel):
    """Special-variant selection policy."""

    cooldown_seconds: float = Field(
        default=7 * 24 * 60 * 60,
        ge=0,
        description="Minimum seconds between special assignments"
    )
    odds: int = Field(
        default=100,
        ge=1,
        description="An eligible creation is special with probability 1/odds"
    )


# =============================================================================
# LOGGING MODEL
# =============================================================================

class LoggingConfig(StrictModel):
    """Logging configuration."""

    output_file: str = Field(
        default="registry.jsonl",
        description="JSONL file for registry events"
    )
    logs_dir: str = Field(
        default="logs",
        description="Per-run logs directory (e.g., logs/run_20260115_120000/)"
    )
    default_recent: int = Field(
        default=50,
        gt=0,
        description="Default number of recent events to return"
    )
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Level for the standard library root logger"
    )
    enabled: bool = Field(
        default=True,
        description="Write the JSONL event log"
    )


# =============================================================================
# ROOT MODEL
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model for the entire application.

    All fields have sensible defaults, so an empty config file is valid.
    """

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    special_selection: SpecialSelectionConfig = Field(default_factory=SpecialSelectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# LOADING FUNCTIONS
# =============================================================================

def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config YAML file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)


__all__ = [
    "AppConfig",
    "RegistryConfig",
    "SpecialSelectionConfig",
    "LoggingConfig",
    "load_validated_config",
    "validate_config_dict",
]
