"""
Base class for the operator driving a game.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..config.game_config import GameConfig, default_config
from ..core.game_engine import GameState
from ..core.state_machine import Action


class BaseAgent(ABC):
    """
    Chooses the next action for the table.

    A single local operator cycles through every player's turn, so one
    agent decides for all roles.
    """

    def __init__(self, config: GameConfig = default_config):
        self.config = config

    @abstractmethod
    def choose_action(self, state: GameState) -> Optional[Action]:
        """
        Pick the next action for ``state``.

        Returns:
            The action to dispatch, or None when the operator is done.
        """
