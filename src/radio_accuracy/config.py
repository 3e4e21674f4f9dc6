"""Scoring configuration for radio-accuracy.

Every policy constant the scorer uses (match thresholds, category cutoffs,
suggestion bands) lives here as a named field so it can be tuned from a
JSON file without touching the matching algorithm.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from radio_accuracy.errors import ConfigurationError, ResourceError
from radio_accuracy.logging import get_logger
from radio_accuracy.storage import NotFoundError, StorageError, atomic_write_json, read_json

logger = get_logger(__name__)

CONFIG_ENV_VAR = "RADIO_ACCURACY_CONFIG"


class ScoringConfig(BaseModel):
    """Thresholds and limits applied by the scoring engine.

    Percentages are on the 0-100 similarity scale.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Per-token acceptance thresholds
    code_match_threshold: float = Field(default=80, ge=0, le=100)
    phonetic_match_threshold: float = Field(default=85, ge=0, le=100)
    token_match_threshold: float = Field(default=80, ge=0, le=100)
    strict_token_match_threshold: float = Field(default=95, ge=0, le=100)

    # Score -> category cutoffs (score >= cutoff)
    excellent_threshold: int = Field(default=90, ge=0, le=100)
    good_threshold: int = Field(default=75, ge=0, le=100)
    needs_improvement_threshold: int = Field(default=50, ge=0, le=100)

    # Default cutoff for is_likely_correct
    likely_correct_threshold: int = Field(default=75, ge=0, le=100)

    # Similarity bands for per-token suggestions
    unrecognized_below: float = Field(default=50, ge=0, le=100)
    partially_recognized_below: float = Field(default=80, ge=0, le=100)

    # Cap on the combined suggestion list
    max_suggestions: int = Field(default=3, ge=1, le=3)

    @model_validator(mode="after")
    def _check_ordering(self) -> "ScoringConfig":
        if not (self.excellent_threshold >= self.good_threshold >= self.needs_improvement_threshold):
            raise ValueError(
                "category cutoffs must satisfy excellent >= good >= needs_improvement"
            )
        if self.unrecognized_below > self.partially_recognized_below:
            raise ValueError("unrecognized_below must not exceed partially_recognized_below")
        return self


DEFAULT_SCORING_CONFIG = ScoringConfig()


def resolve_config_path() -> Path | None:
    """Get the config file named by the RADIO_ACCURACY_CONFIG variable.

    Returns:
        Path to the config file, or None if the variable is unset
    """
    value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    return Path(value).expanduser() if value else None


def load_scoring_config(path: Path | str) -> ScoringConfig:
    """Load scoring configuration from a JSON file.

    Fields missing from the file keep their defaults.

    Args:
        path: Path to the JSON config file

    Returns:
        ScoringConfig with the file's overrides applied

    Raises:
        ResourceError: If the file doesn't exist
        ConfigurationError: If the file is invalid JSON or holds bad values
    """
    path = Path(path)
    try:
        data = read_json(path)
    except NotFoundError as e:
        logger.error(f"Scoring config not found: {path}")
        raise ResourceError(str(e), context={"path": str(path)}) from e
    except StorageError as e:
        logger.error(f"Could not read scoring config {path}: {e}")
        raise ConfigurationError(str(e), context={"path": str(path)}) from e

    if not isinstance(data, dict):
        logger.error(f"Scoring config {path} is not a JSON object")
        raise ConfigurationError(
            "Scoring config must be a JSON object",
            context={"path": str(path)},
        )

    try:
        config = ScoringConfig.model_validate(data)
    except ValidationError as e:
        logger.error(f"Invalid scoring config {path}: {e.error_count()} error(s)")
        raise ConfigurationError(
            f"Invalid scoring config: {e.error_count()} error(s)",
            context={"path": str(path), "errors": "; ".join(err["msg"] for err in e.errors())},
        ) from e

    logger.info(f"Loaded scoring config from {path}", extra={"overrides": sorted(data)})
    return config


def save_scoring_config(path: Path | str, config: ScoringConfig) -> Path:
    """Save scoring configuration to a JSON file with atomic write.

    Args:
        path: Target file path
        config: Configuration to save

    Returns:
        Path to the saved config file
    """
    path = Path(path)
    atomic_write_json(path, config.model_dump())
    return path


def get_scoring_config(path: Path | str | None = None) -> ScoringConfig:
    """Get the effective scoring configuration.

    Resolution order: explicit path, then RADIO_ACCURACY_CONFIG, then the
    built-in defaults.
    """
    resolved = Path(path) if path else resolve_config_path()
    if resolved is None:
        return DEFAULT_SCORING_CONFIG
    return load_scoring_config(resolved)
