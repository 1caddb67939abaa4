"""
Rule checks shared by the phase transitions.

These functions never change state; transitions call them to decide whether
an action is legal and raise IllegalActionError when it is not.
"""

from collections import Counter
from typing import List, Sequence

from .exceptions import DuplicateName, EmptyName, IllegalActionError, InvalidPlayerCount
from .game_engine import GameState
from .game_phase import VotingType
from .player import Player
from .roles import Role, PLAYER_COUNT


def validate_names(names: Sequence[str]) -> List[str]:
    """
    Validate a setup roster and return the names with whitespace stripped.

    Raises:
        EmptyName: If any name is blank.
        InvalidPlayerCount: If there are not exactly 10 names.
        DuplicateName: If two names are equal.
    """
    cleaned = [name.strip() for name in names]
    for index, name in enumerate(cleaned):
        if not name:
            raise EmptyName(index)

    if len(cleaned) != PLAYER_COUNT:
        raise InvalidPlayerCount(len(cleaned), PLAYER_COUNT)

    duplicates = [name for name, count in Counter(cleaned).items() if count > 1]
    if duplicates:
        raise DuplicateName(duplicates)

    return cleaned


def require(condition: bool, action: str, state: GameState, message: str = "") -> None:
    """Raise IllegalActionError unless ``condition`` holds."""
    if not condition:
        raise IllegalActionError(action, state.phase.value, message)


def kill_targets(state: GameState) -> List[Player]:
    """Mafia can't kill mafia."""
    return [p for p in state.get_alive_players() if not p.is_mafia]


def investigation_targets(state: GameState) -> List[Player]:
    """Sheriff can investigate anyone alive except themselves."""
    return [p for p in state.get_alive_players() if p.role != Role.SHERIFF]


def can_be_killed(state: GameState, target_id: str) -> bool:
    return any(p.id == target_id for p in kill_targets(state))


def can_be_investigated(state: GameState, target_id: str) -> bool:
    return any(p.id == target_id for p in investigation_targets(state))


def eligible_vote_targets(state: GameState) -> List[Player]:
    """
    Players who may receive a ballot in the active voting sub-round.

    Normal voting is open to every alive player (self-votes included), a
    runoff only to the tied leaders, and a confirmation vote concerns the
    single remaining candidate.
    """
    alive = state.get_alive_players()
    if state.voting_type == VotingType.NORMAL:
        return alive
    if state.voting_type == VotingType.RUNOFF:
        return [p for p in alive if p.id in state.tied_player_ids]
    return [p for p in alive if state.tied_player_ids and p.id == state.tied_player_ids[0]]


def pending_voters(state: GameState) -> List[Player]:
    """Alive players who have not cast a ballot in the active sub-round."""
    ballots = state.confirmation_votes if state.voting_type == VotingType.CONFIRMATION else state.votes
    return [p for p in state.get_alive_players() if p.id not in ballots]


def can_vote(state: GameState, voter_id: str) -> bool:
    return any(p.id == voter_id for p in pending_voters(state))
