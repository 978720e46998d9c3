"""Reader configuration models and YAML loader."""

from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ValidationError, validator
import logging

from .characters import SENTENCE_DELIMITERS

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ZH_READER_CONFIG"

LEVEL_NAMES = ["LEVEL_1", "LEVEL_2", "LEVEL_3", "LEVEL_4", "LEVEL_5", "LEVEL_6"]

DEFAULT_LEVEL_BOUNDS = [500, 1000, 1500, 2000, 2500]

DEFAULT_LEVEL_WEIGHTS = {
    "LEVEL_1": 0.0,
    "LEVEL_2": 0.2,
    "LEVEL_3": 0.4,
    "LEVEL_4": 0.6,
    "LEVEL_5": 0.8,
    "LEVEL_6": 1.0,
}

SINGLE_BAND = "single_band"
CUMULATIVE = "cumulative"


class ConfigError(Exception):
    """Raised when the reader configuration cannot be loaded or is invalid."""

    pass


class SegmentationConfig(BaseModel):
    """Configuration for sentence splitting and pinyin resolution."""
    delimiters: str = SENTENCE_DELIMITERS
    heteronym_fallback: bool = False  # ask for every reading in the per-character path

    @validator('delimiters')
    def validate_delimiters(cls, v):
        if not v:
            raise ValueError("At least one sentence delimiter is required")
        return v


class AnalysisConfig(BaseModel):
    """Configuration for difficulty analysis."""
    level_bounds: List[int] = DEFAULT_LEVEL_BOUNDS
    level_weights: Dict[str, float] = DEFAULT_LEVEL_WEIGHTS
    threshold: float = 10.0
    rule: str = SINGLE_BAND

    @validator('level_bounds')
    def validate_level_bounds(cls, v):
        if len(v) != len(LEVEL_NAMES) - 1:
            raise ValueError(f"Expected {len(LEVEL_NAMES) - 1} level bounds, got {len(v)}")
        if v[0] < 1 or any(b <= a for a, b in zip(v, v[1:])):
            raise ValueError(f"Level bounds must be positive and strictly increasing, got {v}")
        return v

    @validator('level_weights')
    def validate_level_weights(cls, v):
        if set(v) != set(LEVEL_NAMES):
            raise ValueError(f"Level weights must cover exactly {LEVEL_NAMES}, got {sorted(v)}")
        return v

    @validator('threshold')
    def validate_threshold(cls, v):
        if v < 0 or v > 100:
            raise ValueError(f"Threshold must be between 0 and 100, got {v}")
        return v

    @validator('rule')
    def validate_rule(cls, v):
        valid_rules = [SINGLE_BAND, CUMULATIVE]
        if v not in valid_rules:
            raise ValueError(f"Invalid rule '{v}'. Must be one of: {valid_rules}")
        return v


class ReaderConfig(BaseModel):
    """Complete reader configuration."""
    segmentation: SegmentationConfig = SegmentationConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    frequency_table: Optional[str] = None


class ConfigLoader:
    """Loads and caches the reader configuration."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize with config file path, falling back to $ZH_READER_CONFIG."""
        if config_path is None:
            config_path = os.getenv(CONFIG_ENV_VAR)

        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[ReaderConfig] = None

    def load_config(self) -> ReaderConfig:
        """Load configuration from YAML file, or defaults when no file is configured."""
        if self._config is not None:
            return self._config

        if self.config_path is None:
            self._config = ReaderConfig()
            return self._config

        if not self.config_path.exists():
            raise ConfigError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                raw_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file {self.config_path}: {e}") from e

        if not isinstance(raw_config, dict):
            raise ConfigError(f"Config file {self.config_path} must contain a mapping")

        try:
            self._config = ReaderConfig(
                segmentation=SegmentationConfig(**(raw_config.get('segmentation') or {})),
                analysis=AnalysisConfig(**(raw_config.get('analysis') or {})),
                frequency_table=raw_config.get('frequency_table'),
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}:\n{e}") from e

        logger.debug(f"Loaded reader config from {self.config_path}")
        return self._config

    def resolve_table_path(self) -> Optional[Path]:
        """Resolve the configured frequency table path relative to the config file."""
        table = self.load_config().frequency_table
        if not table:
            return None
        if Path(table).is_absolute() or self.config_path is None:
            return Path(table)
        return self.config_path.parent / table
