"""Game configuration module."""

from .game_config import AGENT_TYPES, GameConfig, default_config
from .config_loader import load_config, load_config_from_yaml, validate_config

__all__ = ['AGENT_TYPES', 'GameConfig', 'default_config', 'load_config', 'load_config_from_yaml',
           'validate_config']
