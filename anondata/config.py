"""
Configuration Management Module

Handles loading, validation, and merging of engine configuration
with support for presets and YAML overrides.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, asdict, fields
from copy import deepcopy
import logging

from .distribution import Distribution

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0x07357FAC

POPULATION_OPTIONS = ["none", "shallow", "deep"]
RANGE_POLICIES = ["fail", "swap"]


@dataclass
class GenerationConfig:
    """Configuration for dispatch and object graph population"""
    seed: Optional[int] = DEFAULT_SEED
    population: str = "shallow"  # none, shallow, deep
    range_policy: str = "fail"  # fail, swap (when minimum > maximum)
    max_attempts: int = 1000  # retries for predicate-constrained requests


@dataclass
class NumericConfig:
    """Configuration for numeric synthesis"""
    distribution: str = "uniform"  # uniform, positive_normal, negative_normal, inverted_normal


@dataclass
class TextConfig:
    """Configuration for string synthesis"""
    min_length: int = 1
    max_length: int = 20
    char_class: str = "alpha"
    min_bytes: int = 1
    max_bytes: int = 32


@dataclass
class PIIConfig:
    """Configuration for person name synthesis"""
    locale: str = "en_US"
    gender_distribution: Dict[str, float] = field(default_factory=lambda: {"male": 0.5, "female": 0.5})


@dataclass
class TemporalConfig:
    """Configuration for temporal synthesis"""
    offset_step_minutes: int = 15
    min_utc_offset_hours: int = -12
    max_utc_offset_hours: int = 14


@dataclass
class CollectionConfig:
    """Configuration for collection synthesis"""
    min_length: int = 2
    max_length: int = 10


@dataclass
class Config:
    """Main configuration class combining all sub-configurations"""
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    numeric: NumericConfig = field(default_factory=NumericConfig)
    text: TextConfig = field(default_factory=TextConfig)
    pii: PIIConfig = field(default_factory=PIIConfig)
    temporal: TemporalConfig = field(default_factory=TemporalConfig)
    collections: CollectionConfig = field(default_factory=CollectionConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    def merge(self, other: 'Config') -> 'Config':
        """Merge another configuration into this one (other takes precedence)"""
        merged = deepcopy(self)

        for section in SECTIONS:
            other_config = getattr(other, section)
            merged_config = getattr(merged, section)

            # Update non-None values
            for field_name, field_value in asdict(other_config).items():
                if field_value is not None:
                    setattr(merged_config, field_name, field_value)

        return merged


SECTIONS = {
    'generation': GenerationConfig,
    'numeric': NumericConfig,
    'text': TextConfig,
    'pii': PIIConfig,
    'temporal': TemporalConfig,
    'collections': CollectionConfig,
}


class ConfigLoader:
    """Loads and manages configuration from various sources"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the configuration loader

        Args:
            config_dir: Optional directory of additional *.yaml presets
        """
        self.config_dir = Path(config_dir) if config_dir is not None else None
        self.presets = self._load_presets()

    def _load_presets(self) -> Dict[str, Config]:
        """Load built-in presets plus any YAML presets in config_dir"""
        presets = {name: factory() for name, factory in BUILTIN_PRESETS.items()}

        if self.config_dir is None:
            return presets

        if not self.config_dir.exists():
            logger.warning(f"Config directory not found: {self.config_dir}")
            return presets

        for preset_file in sorted(self.config_dir.glob("*.yaml")):
            preset_name = preset_file.stem
            presets[preset_name] = self.load_from_file(preset_file)
            logger.info(f"Loaded preset: {preset_name}")

        return presets

    def load_from_file(self, filepath: Union[str, Path]) -> Config:
        """
        Load configuration from a YAML file

        Args:
            filepath: Path to the YAML configuration file

        Returns:
            Config object
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(filepath, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return self._dict_to_config(config_dict)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> Config:
        """
        Load configuration from a dictionary

        Args:
            config_dict: Configuration dictionary

        Returns:
            Config object
        """
        return self._dict_to_config(config_dict)

    def load_preset(self, preset_name: str) -> Config:
        """
        Load a preset configuration by name

        Args:
            preset_name: Name of the preset (e.g., 'default', 'deep')

        Returns:
            Config object
        """
        if preset_name not in self.presets:
            available = ", ".join(self.presets.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available: {available}")

        return deepcopy(self.presets[preset_name])

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> Config:
        """Convert dictionary to Config object"""
        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(config_dict).__name__}")

        unknown = set(config_dict) - set(SECTIONS)
        if unknown:
            raise ValueError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

        config = Config()

        for key, config_class in SECTIONS.items():
            if key in config_dict:
                section = config_dict[key] or {}
                known = {f.name for f in fields(config_class)}
                bad_keys = set(section) - known
                if bad_keys:
                    raise ValueError(f"Unknown keys in '{key}': {', '.join(sorted(bad_keys))}")
                setattr(config, key, config_class(**section))

        return config

    def merge_configs(self, base: Config, override: Union[Config, Dict[str, Any], str]) -> Config:
        """
        Merge configurations with override taking precedence

        Args:
            base: Base configuration
            override: Override configuration (Config object, dict, or preset name)

        Returns:
            Merged Config object
        """
        if isinstance(override, str):
            override = self.load_preset(override)
        elif isinstance(override, dict):
            override = self.load_from_dict(override)

        return base.merge(override)

    def save_config(self, config: Config, filepath: Union[str, Path]):
        """
        Save configuration to a YAML file

        Args:
            config: Configuration to save
            filepath: Path to save the file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to: {filepath}")

    def list_presets(self) -> List[str]:
        """Get list of available preset names"""
        return list(self.presets.keys())


class ConfigValidator:
    """Validates configuration parameters"""

    @staticmethod
    def validate(config: Config) -> tuple[bool, List[str]]:
        """
        Validate configuration parameters

        Args:
            config: Configuration to validate

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        # Generation
        if config.generation.population not in POPULATION_OPTIONS:
            errors.append(f"generation.population must be one of {POPULATION_OPTIONS}")

        if config.generation.range_policy not in RANGE_POLICIES:
            errors.append(f"generation.range_policy must be one of {RANGE_POLICIES}")

        if config.generation.max_attempts <= 0:
            errors.append("generation.max_attempts must be positive")

        # Numeric
        try:
            Distribution.parse(config.numeric.distribution)
        except ValueError as e:
            errors.append(f"numeric.distribution: {e}")

        # Text
        if config.text.min_length < 0:
            errors.append("text.min_length must not be negative")

        if config.text.min_length > config.text.max_length:
            errors.append("text.min_length must not exceed text.max_length")

        if config.text.min_bytes < 0 or config.text.min_bytes > config.text.max_bytes:
            errors.append("text.min_bytes must be between 0 and text.max_bytes")

        # Deferred import: generators.text depends on this module
        from .generators.text import CharClass
        try:
            CharClass.parse(config.text.char_class)
        except ValueError as e:
            errors.append(f"text.char_class: {e}")

        # PII
        gender_sum = sum(config.pii.gender_distribution.values())
        if not (0.99 <= gender_sum <= 1.01):
            errors.append("pii.gender_distribution must sum to 1.0")

        # Temporal
        if config.temporal.offset_step_minutes <= 0:
            errors.append("temporal.offset_step_minutes must be positive")

        if config.temporal.min_utc_offset_hours > config.temporal.max_utc_offset_hours:
            errors.append("temporal.min_utc_offset_hours must not exceed temporal.max_utc_offset_hours")

        if not (-24 < config.temporal.min_utc_offset_hours and config.temporal.max_utc_offset_hours < 24):
            errors.append("temporal UTC offsets must lie strictly between -24 and 24 hours")

        # Collections
        if config.collections.min_length < 0:
            errors.append("collections.min_length must not be negative")

        if config.collections.min_length > config.collections.max_length:
            errors.append("collections.min_length must not exceed collections.max_length")

        return len(errors) == 0, errors


# Default configuration instance
def get_default_config() -> Config:
    """Get the default configuration"""
    return Config()


# Preset configurations
def create_deep_preset() -> Config:
    """Populate whole object graphs by default"""
    config = Config()
    config.generation.population = "deep"
    return config


def create_compact_preset() -> Config:
    """Small strings and collections, for readable failure messages"""
    config = Config()
    config.text.min_length = 1
    config.text.max_length = 8
    config.collections.min_length = 1
    config.collections.max_length = 3
    return config


def create_edge_preset() -> Config:
    """Bias numeric values toward both ends of their ranges"""
    config = Config()
    config.numeric.distribution = Distribution.INVERTED_NORMAL.value
    config.generation.range_policy = "swap"
    return config


BUILTIN_PRESETS = {
    'default': get_default_config,
    'deep': create_deep_preset,
    'compact': create_compact_preset,
    'edge': create_edge_preset,
}
