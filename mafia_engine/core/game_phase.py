"""
Phase enumerations shared by the game state and the event log.
"""

from enum import Enum


class GamePhase(Enum):
    """Current game phase."""
    SETUP = "setup"
    NIGHT = "night"
    DAY = "day"
    VOTING = "voting"
    RESULTS = "results"


class VotingType(Enum):
    """Sub-state of the voting phase."""
    NORMAL = "normal"
    RUNOFF = "runoff"
    CONFIRMATION = "confirmation"
