"""
Scoring weights, trend thresholds and output options.

Every section has defaults, so an absent or empty configuration file
behaves like the built-in scoring.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, model_validator

WEIGHT_TOLERANCE = 1e-6


class StabilityWeights(BaseModel):
    """Weights of the four stability factors; they must sum to 1.0."""

    breaking_change_ratio: float = Field(
        default=0.40,
        ge=0.0,
        le=1.0,
        description="Weight of the breaking-change ratio factor.",
    )
    time_between_breaking: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Weight of the time-between-breaking-changes factor.",
    )
    deprecation_management: float = Field(
        default=0.20,
        ge=0.0,
        le=1.0,
        description="Weight of the deprecation-management factor.",
    )
    semver_compliance: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Weight of the semver-compliance factor.",
    )

    class Config:
        frozen = True
        extra = "forbid"

    @model_validator(mode="after")
    def _check_sum(self) -> "StabilityWeights":
        total = (
            self.breaking_change_ratio
            + self.time_between_breaking
            + self.deprecation_management
            + self.semver_compliance
        )
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError(f"Stability weights must sum to 1.0, got {total:.6f}")
        return self


class TrendConfig(BaseModel):
    """Configuration for trend classification."""

    threshold: float = Field(
        default=0.1,
        ge=0.0,
        description="Absolute slope below which a series is considered stable.",
    )
    min_data_points: int = Field(
        default=3,
        ge=2,
        description="Data points required before a direction is reported.",
    )
    significant_change_ratio: float = Field(
        default=0.2,
        gt=0.0,
        description="Relative step between the last two values considered significant.",
    )

    class Config:
        extra = "forbid"


class VelocityConfig(BaseModel):
    """Configuration for velocity metrics."""

    acceleration_threshold: float = Field(
        default=1.2,
        gt=0.0,
        description="Second-half to first-half change ratio above which velocity is accelerating.",
    )

    class Config:
        extra = "forbid"


class OutputConfig(BaseModel):
    """Configuration for output formatting."""

    format: str = Field(
        default="text",
        description="Default output format (text, json, yaml).",
    )
    colorize: bool = Field(
        default=True,
        description="Use colors in terminal output.",
    )
    show_migration: bool = Field(
        default=True,
        description="Show migration suggestions for breaking changes.",
    )

    class Config:
        extra = "forbid"


class Config(BaseModel):
    """Root configuration model for Changelog Hub."""

    stability: StabilityWeights = Field(default_factory=StabilityWeights)
    trend: TrendConfig = Field(default_factory=TrendConfig)
    velocity: VelocityConfig = Field(default_factory=VelocityConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    class Config:
        """Pydantic model configuration."""

        extra = "forbid"


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Read a YAML configuration file.

    Args:
        config_path: File to read. None gives the defaults.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If config_path does not exist.
        ValueError: If the YAML is malformed or fails validation (unknown
            keys, weights not summing to one).
    """
    if config_path is None:
        return Config()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return Config(**data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in configuration file: {e}") from e
    except Exception as e:
        raise ValueError(f"Failed to load configuration: {e}") from e


def find_config_file(start_path: Path) -> Optional[Path]:
    """
    Nearest `.changelog-hub.yaml` (or `.yml`) at or above start_path.

    Within one directory the `.yaml` spelling wins.
    """
    config_names = [".changelog-hub.yaml", ".changelog-hub.yml"]

    current = start_path.resolve()
    while current != current.parent:
        for name in config_names:
            config_path = current / name
            if config_path.exists():
                return config_path
        current = current.parent

    return None
