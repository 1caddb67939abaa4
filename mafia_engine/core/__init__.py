"""
Core rules engine: game state, players, roles, and rule enforcement.
"""

from .roles import Role, Faction, get_role_distribution, faction_of, is_mafia_aligned
from .player import Player
from .game_phase import GamePhase, VotingType
from .event_log import EventKind, LogEntry, group_by_round, elimination_order
from .game_engine import GameState, initial_state, UNKNOWN_PLAYER
from .exceptions import (
    GameRuleError, InvalidPlayerCount, DuplicateName, EmptyName, IllegalActionError
)
from .role_assigner import assign_roles, random_default_names
from .win_conditions import WinResult, evaluate
from . import judge
from .state_machine import (
    Action, StartGame, MafiaKill, SheriffInvestigate, AcknowledgeInvestigation,
    EndDiscussion, CastVote, CastConfirmationVote, AcknowledgeResults, PlayAgain,
    NewGame, GameSession, transition,
)

__all__ = [
    'Role',
    'Faction',
    'get_role_distribution',
    'faction_of',
    'is_mafia_aligned',
    'Player',
    'GamePhase',
    'VotingType',
    'EventKind',
    'LogEntry',
    'group_by_round',
    'elimination_order',
    'GameState',
    'initial_state',
    'UNKNOWN_PLAYER',
    'GameRuleError',
    'InvalidPlayerCount',
    'DuplicateName',
    'EmptyName',
    'IllegalActionError',
    'assign_roles',
    'random_default_names',
    'WinResult',
    'evaluate',
    'judge',
    'Action',
    'StartGame',
    'MafiaKill',
    'SheriffInvestigate',
    'AcknowledgeInvestigation',
    'EndDiscussion',
    'CastVote',
    'CastConfirmationVote',
    'AcknowledgeResults',
    'PlayAgain',
    'NewGame',
    'GameSession',
    'transition',
]
