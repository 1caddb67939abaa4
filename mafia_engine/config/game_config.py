"""
Game configuration and constants.
"""

from dataclasses import dataclass, field
from typing import List, Optional

AGENT_TYPES = ("dummy_agent", "console_agent")


@dataclass
class GameConfig:
    """Configuration for a game session."""

    # Randomness
    random_seed: Optional[int] = None  # Seed for reproducible role assignment and dummy agents

    # Roster used when no names are given on the command line
    default_names: List[str] = field(default_factory=list)  # Empty: pick random default names

    # Agent settings
    agent_type: str = "dummy_agent"  # One of AGENT_TYPES

    # Event recording
    record_events: bool = True
    runs_dir: str = "runs"

    log_level: str = "INFO"

    # Judge announcements printed by the CLI
    use_judge_announcements: bool = True


# Default configuration instance
default_config = GameConfig()
