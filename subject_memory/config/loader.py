# subject_memory/config/loader.py
"""
Layered configuration loading for subject_memory.

Merge strategy:
    1. Package defaults (subject_memory/config/defaults/subject_memory.yaml)
    2. User config file (optional) - overrides defaults

The result is validated into a SubjectMemoryConfig, so every value is
guaranteed to exist.

Usage:
    from subject_memory.config import load_config

    config = load_config()                      # defaults only
    config = load_config("memory.yaml")         # defaults + overrides
    min_conf = config.extraction.min_confidence
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from subject_memory.core.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from subject_memory.logging.logger import get_logger
from subject_memory.logging.tags import CONFIG

from .schema import SubjectMemoryConfig

logger = get_logger(__name__)

ROOT_KEY = "subject_memory"
DEFAULTS_PATH = Path(__file__).parent / "defaults" / "subject_memory.yaml"


# =============================================================================
# Deep Merge
# =============================================================================


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from `override` take precedence over `base`. Nested dicts are
    merged recursively; lists are replaced entirely.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


# =============================================================================
# Loading Functions
# =============================================================================


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML file and return it as a dictionary.

    Raises:
        ConfigNotFoundError: If file doesn't exist
        ConfigParseError: If YAML is invalid or the root is not a mapping
    """
    p = Path(path)

    if not p.exists():
        raise ConfigNotFoundError("Config file not found", path=p)

    if p.is_dir():
        raise ConfigError("Config path is a directory, not a file", path=p)

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}", path=p) from e
    except OSError as e:
        raise ConfigParseError(f"Failed to read config: {e}", path=p) from e

    if not isinstance(data, dict):
        raise ConfigParseError("Config root must be a mapping (dict)", path=p)

    logger.debug(f"{CONFIG} Loaded config from {p}")
    return data


def _unwrap(data: Dict[str, Any], path: Path) -> Dict[str, Any]:
    """Accept both `subject_memory: {...}` and flat user files."""
    if ROOT_KEY not in data:
        return data

    section = data[ROOT_KEY] or {}
    if not isinstance(section, dict):
        raise ConfigParseError(f"'{ROOT_KEY}' section must be a mapping", path=path)
    return section


def load_defaults() -> Dict[str, Any]:
    """Load the package defaults as a plain dictionary."""
    return _unwrap(load_yaml(DEFAULTS_PATH), DEFAULTS_PATH)


def load_config(path: Optional[Union[str, Path]] = None) -> SubjectMemoryConfig:
    """
    Load and validate configuration.

    Args:
        path: Optional user config file merged over the package defaults

    Returns:
        Validated SubjectMemoryConfig

    Raises:
        ConfigNotFoundError: If `path` doesn't exist
        ConfigParseError: If YAML is invalid
        ConfigValidationError: If the merged config doesn't match the schema
    """
    data = load_defaults()
    source = DEFAULTS_PATH

    if path is not None:
        source = Path(path)
        data = deep_merge(data, _unwrap(load_yaml(source), source))

    try:
        config = SubjectMemoryConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Config validation failed: {e}", path=source) from e

    logger.debug(f"{CONFIG} Config resolved from {source}")
    return config


__all__ = ["load_config", "load_defaults", "load_yaml", "deep_merge", "DEFAULTS_PATH"]
