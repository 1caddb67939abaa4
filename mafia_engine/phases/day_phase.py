"""
Day phase: discussion summary and the move to voting.
"""

from dataclasses import replace
from typing import List

from ..core import judge
from ..core.event_log import EventKind, LogEntry, entries_of_kind
from ..core.game_engine import GameState
from ..core.game_phase import GamePhase, VotingType
from ..core.player import Player


def night_summary(state: GameState) -> List[LogEntry]:
    """Night kills recorded in the current round."""
    return entries_of_kind(state.game_log, EventKind.NIGHT_KILL, round=state.round)


def night_victims(state: GameState) -> List[Player]:
    victims = []
    for entry in night_summary(state):
        player = state.get_player(entry.target_id)
        if player is not None:
            victims.append(player)
    return victims


def end_discussion(state: GameState) -> GameState:
    """Close the day discussion and open a fresh normal vote."""
    judge.require(state.phase == GamePhase.DAY, "end_discussion", state)
    state = state.log(EventKind.PHASE_CHANGE, "Day discussion ended. Voting phase started.")
    return replace(
        state,
        phase=GamePhase.VOTING,
        votes={},
        confirmation_votes={},
        voting_type=VotingType.NORMAL,
        tied_player_ids=(),
        show_voting_results=False,
    )
