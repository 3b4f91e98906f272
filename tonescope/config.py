"""
tonescope.config - YAML config loading and validation.

Handles loading tonescope.yaml, applying defaults, and validating all
parameters. The scoring multipliers are deliberately absent: they define the
output format and are fixed in tonescope.analyze.scoring.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from tonescope.exceptions import ConfigError

CONFIG_FILENAME = "tonescope.yaml"


class RiskThresholds(BaseModel):
    """Conflict-risk boundaries between the low, medium and high levels."""

    medium: int = Field(default=30, ge=0, le=100)
    high: int = Field(default=60, ge=0, le=100)

    @model_validator(mode="after")
    def validate_order(self) -> RiskThresholds:
        if self.medium >= self.high:
            raise ValueError("risk_thresholds.medium must be below risk_thresholds.high")
        return self


class TonescopeConfig(BaseModel):
    """Resolved configuration for an analysis run."""

    max_window_seconds: float = Field(default=30.0, gt=0.0)
    centroid_frame_size: int = Field(default=1024, gt=0)
    max_file_size_mb: int = Field(default=50, gt=0)

    risk_thresholds: RiskThresholds = Field(default_factory=RiskThresholds)

    config_path: Path | None = None


def find_config(start: Path | None = None) -> Path | None:
    """Find tonescope.yaml in the start directory or any of its parents."""
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def load_config(path: Path | None = None) -> TonescopeConfig:
    """Load and validate configuration.

    Args:
        path: Path to a YAML config file; None means built-in defaults

    Returns:
        Validated TonescopeConfig

    Raises:
        ConfigError: If the file is missing, unparsable, or invalid
    """
    if path is None:
        return TonescopeConfig()

    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")

    raw_config["config_path"] = path

    try:
        return TonescopeConfig(**raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def create_default_config() -> dict[str, Any]:
    """Create the default config as a plain dict suitable for YAML."""
    return TonescopeConfig().model_dump(exclude={"config_path"})


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
