"""
Night phase: mafia kill, sheriff investigation and its acknowledgement.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..core import judge
from ..core.event_log import EventKind
from ..core.game_engine import GameState
from ..core.game_phase import GamePhase
from ..core.win_conditions import check_game_over

logger = logging.getLogger(__name__)

MAFIA_ACTION = "mafia"
SHERIFF_ACTION = "sheriff"


class NightSubTurn(Enum):
    """Which night action the operator is waiting on."""
    MAFIA = "mafia"
    SHERIFF = "sheriff"
    INVESTIGATION_RESULT = "investigation_result"


@dataclass(frozen=True)
class InvestigationResult:
    """What the sheriff learned tonight."""
    target_id: str
    target_name: str
    mafia_aligned: bool


def night_sub_turn(state: GameState) -> Optional[NightSubTurn]:
    """Derive the current night sub-turn from the recorded night actions."""
    if state.phase != GamePhase.NIGHT:
        return None
    if MAFIA_ACTION not in state.night_action:
        return NightSubTurn.MAFIA
    if SHERIFF_ACTION not in state.night_action:
        return NightSubTurn.SHERIFF
    return NightSubTurn.INVESTIGATION_RESULT


def _start_day(state: GameState) -> GameState:
    state = replace(state, phase=GamePhase.DAY)
    return state.log(EventKind.PHASE_CHANGE, f"Morning has come. Day {state.round} begins.")


def process_mafia_kill(state: GameState, target_id: str) -> GameState:
    """
    Eliminate the mafia's chosen target.

    The game ends immediately if the kill decides it. Otherwise the sheriff
    takes a turn if still alive, and the day begins if not.
    """
    judge.require(night_sub_turn(state) == NightSubTurn.MAFIA, "mafia_kill", state,
                  "The mafia has already acted tonight")
    judge.require(judge.can_be_killed(state, target_id), "mafia_kill", state,
                  f"{state.player_name(target_id)} cannot be killed by the mafia")

    victim = state.get_player(target_id)
    state = state.with_player_eliminated(target_id)
    state = replace(state, night_action={**state.night_action, MAFIA_ACTION: target_id})
    state = state.log(
        EventKind.NIGHT_KILL,
        f"{victim.name} was eliminated during the night.",
        target_id=target_id,
    )
    logger.debug("Night %d: mafia killed %s", state.round, victim.name)

    state = check_game_over(state)
    if state.is_over:
        return state

    if state.get_alive_sheriff() is None:
        # No sheriff left to investigate
        return _start_day(state)
    return state


def process_sheriff_check(state: GameState, target_id: str) -> GameState:
    """
    Record the sheriff's investigation.

    Mafia and Don both read as mafia members. The phase does not change
    until the result is acknowledged.
    """
    judge.require(night_sub_turn(state) == NightSubTurn.SHERIFF, "sheriff_check", state,
                  "It is not the sheriff's turn")
    judge.require(judge.can_be_investigated(state, target_id), "sheriff_check", state,
                  f"{state.player_name(target_id)} cannot be investigated")

    sheriff = state.get_alive_sheriff()
    target = state.get_player(target_id)
    finding = "a Mafia member" if target.is_mafia else "an innocent citizen"

    state = replace(state, night_action={**state.night_action, SHERIFF_ACTION: target_id})
    return state.log(
        EventKind.INVESTIGATION,
        f"Sheriff investigated {target.name} and found {finding}.",
        actor_id=sheriff.id if sheriff else None,
        target_id=target_id,
        details={"mafia_aligned": target.is_mafia},
    )


def investigation_result(state: GameState) -> Optional[InvestigationResult]:
    """The result waiting to be shown to the sheriff, if any."""
    if night_sub_turn(state) != NightSubTurn.INVESTIGATION_RESULT:
        return None
    target = state.get_player(state.night_action[SHERIFF_ACTION])
    if target is None:
        return None
    return InvestigationResult(target_id=target.id, target_name=target.name, mafia_aligned=target.is_mafia)


def acknowledge_investigation(state: GameState) -> GameState:
    """Close the investigation result and move on to the day."""
    judge.require(night_sub_turn(state) == NightSubTurn.INVESTIGATION_RESULT,
                  "acknowledge_investigation", state, "No investigation result to acknowledge")
    return _start_day(state)
