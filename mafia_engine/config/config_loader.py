"""
YAML settings for a game run.

A config file is a flat mapping of ``GameConfig`` fields. Keys left out
keep their defaults; unknown keys are reported and skipped.
"""

import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .game_config import AGENT_TYPES, GameConfig, default_config

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_config(config: GameConfig) -> GameConfig:
    """
    Check the settings a game cannot start without.

    ``default_names`` is either empty (random names are dealt) or a full,
    valid roster, so a bad file fails at load time rather than at setup.

    Raises:
        ValueError: On an unknown agent type or log level, or a bad roster.
    """
    # Imported here: the rules engine itself depends on this package
    from ..core.exceptions import GameRuleError
    from ..core.judge import validate_names

    if config.agent_type not in AGENT_TYPES:
        raise ValueError(f"agent_type must be one of {', '.join(AGENT_TYPES)} (got {config.agent_type!r})")

    if str(config.log_level).upper() not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)} (got {config.log_level!r})")

    if config.default_names:
        if not isinstance(config.default_names, list):
            raise ValueError("default_names must be a list of names")
        try:
            validate_names([str(name) for name in config.default_names])
        except GameRuleError as e:
            raise ValueError(f"default_names: {e}") from e

    return config


def _read_mapping(config_file: Path) -> Dict[str, Any]:
    with open(config_file, 'r') as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_file} must contain a mapping of settings, not {type(data).__name__}")
    return data


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Build a GameConfig from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the settings fail ``validate_config``.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    known = {f.name for f in fields(GameConfig)}
    overrides = {}
    for key, value in _read_mapping(config_file).items():
        if key in known:
            overrides[key] = value
        else:
            logger.warning("Unknown config key '%s' in %s", key, config_path)

    return validate_config(GameConfig(**overrides))


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """Load ``config_path``, or a fresh copy of the defaults when no path is given."""
    if config_path is None:
        return replace(default_config, default_names=list(default_config.default_names))

    return load_config_from_yaml(config_path)
