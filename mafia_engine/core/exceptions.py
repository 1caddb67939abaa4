"""
Exceptions raised by the rules engine.
"""

from typing import List, Optional


class GameRuleError(Exception):
    """Base class for rule violations."""


class InvalidPlayerCount(GameRuleError):
    """Raised when a game is started with anything but 10 players."""

    def __init__(self, count: int, expected: int = 10):
        self.count = count
        self.expected = expected
        self.message = f"Game requires exactly {expected} players (got {count})"
        super().__init__(self.message)


class DuplicateName(GameRuleError):
    """Raised when two players share a name."""

    def __init__(self, names: List[str]):
        self.names = names
        self.message = f"All player names must be unique (duplicates: {', '.join(names)})"
        super().__init__(self.message)


class EmptyName(GameRuleError):
    """Raised when a player name is blank."""

    def __init__(self, index: int):
        self.index = index
        self.message = f"Player {index + 1} has no name"
        super().__init__(self.message)


class IllegalActionError(GameRuleError):
    """Raised when an action is not allowed in the current state."""

    def __init__(self, action: str, phase: Optional[str] = None, message: str = ""):
        self.action = action
        self.phase = phase
        self.message = message or f"Action '{action}' is not allowed in phase '{phase}'"
        super().__init__(self.message)
