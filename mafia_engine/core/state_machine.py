"""
Phase state machine: the single entry point for changing a game.

Every action is applied by ``transition(state, action, rng)``, a pure
function from one GameState snapshot to the next. ``GameSession`` owns the
current snapshot for a running game and is the only place it is replaced.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence, Tuple, TYPE_CHECKING

from . import judge
from .event_log import EventKind, LogEntry
from .exceptions import IllegalActionError
from .game_engine import GameState, initial_state
from .game_phase import GamePhase
from .role_assigner import assign_roles
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..events.event_emitter import EventEmitter

logger = logging.getLogger(__name__)


class Action:
    """Base class for operator actions."""
    name = "action"


@dataclass(frozen=True)
class StartGame(Action):
    names: Tuple[str, ...]
    name = "start_game"


@dataclass(frozen=True)
class MafiaKill(Action):
    target_id: str
    name = "mafia_kill"


@dataclass(frozen=True)
class SheriffInvestigate(Action):
    target_id: str
    name = "sheriff_check"


@dataclass(frozen=True)
class AcknowledgeInvestigation(Action):
    name = "acknowledge_investigation"


@dataclass(frozen=True)
class EndDiscussion(Action):
    name = "end_discussion"


@dataclass(frozen=True)
class CastVote(Action):
    voter_id: str
    target_id: str
    name = "cast_vote"


@dataclass(frozen=True)
class CastConfirmationVote(Action):
    voter_id: str
    exile: bool
    name = "cast_confirmation_vote"


@dataclass(frozen=True)
class AcknowledgeResults(Action):
    name = "acknowledge_results"


@dataclass(frozen=True)
class PlayAgain(Action):
    """Re-deal roles to the same names and start over at round 1."""
    name = "play_again"


@dataclass(frozen=True)
class NewGame(Action):
    """Discard the roster and go back to setup."""
    name = "new_game"


def start_game(state: GameState, names: Sequence[str], rng: random.Random) -> GameState:
    """Validate the roster, deal roles and open the first night."""
    judge.require(state.phase == GamePhase.SETUP, StartGame.name, state)
    cleaned = judge.validate_names(names)

    players = tuple(assign_roles(cleaned, rng))
    fresh = GameState(players=players, phase=GamePhase.SETUP, round=1)
    fresh = fresh.log(EventKind.GAME_START, f"Game started with {len(players)} players.",
                      details={"player_ids": [p.id for p in players]})
    return replace(fresh, phase=GamePhase.NIGHT)


def play_again(state: GameState, rng: random.Random) -> GameState:
    """Fresh game with the same names: new roles, round 1, one seed log entry."""
    judge.require(state.phase == GamePhase.RESULTS, PlayAgain.name, state)

    players = tuple(assign_roles([p.name for p in state.players], rng))
    fresh = GameState(players=players, phase=GamePhase.NIGHT, round=1)
    return fresh.log(EventKind.GAME_START, "New game started with the same players.",
                     details={"player_ids": [p.id for p in players]})


def new_game(state: GameState) -> GameState:
    judge.require(state.phase == GamePhase.RESULTS, NewGame.name, state)
    return initial_state()


def transition(state: GameState, action: Action, rng: Optional[random.Random] = None) -> GameState:
    """
    Apply one action and return the next snapshot.

    Raises:
        IllegalActionError: If the action is not allowed in ``state``.
        InvalidPlayerCount, DuplicateName, EmptyName: On a bad setup roster.
    """
    # Phase handlers import core modules; imported lazily to break the cycle
    from ..phases import day_phase, night_phase, voting

    if state.phase == GamePhase.RESULTS and not isinstance(action, (PlayAgain, NewGame)):
        raise IllegalActionError(action.name, state.phase.value, "The game is over")

    rng = rng or random.Random()
    logger.debug("Applying %s in %s (round %d)", action.name, state.phase.value, state.round)

    if isinstance(action, StartGame):
        return start_game(state, action.names, rng)
    if isinstance(action, MafiaKill):
        return night_phase.process_mafia_kill(state, action.target_id)
    if isinstance(action, SheriffInvestigate):
        return night_phase.process_sheriff_check(state, action.target_id)
    if isinstance(action, AcknowledgeInvestigation):
        return night_phase.acknowledge_investigation(state)
    if isinstance(action, EndDiscussion):
        return day_phase.end_discussion(state)
    if isinstance(action, CastVote):
        return voting.cast_vote(state, action.voter_id, action.target_id)
    if isinstance(action, CastConfirmationVote):
        return voting.cast_confirmation_vote(state, action.voter_id, action.exile)
    if isinstance(action, AcknowledgeResults):
        return voting.acknowledge_results(state)
    if isinstance(action, PlayAgain):
        return play_again(state, rng)
    if isinstance(action, NewGame):
        return new_game(state)

    raise IllegalActionError(getattr(action, "name", type(action).__name__), state.phase.value,
                             f"Unknown action: {action!r}")


class GameSession:
    """
    Holds the authoritative snapshot of one running game.

    The engine does no locking: callers must apply one update at a time.
    """

    def __init__(self, config: GameConfig = default_config, state: Optional[GameState] = None,
                 rng: Optional[random.Random] = None, event_emitter: Optional['EventEmitter'] = None):
        self.config = config
        self.rng = rng or random.Random(config.random_seed)
        self.event_emitter = event_emitter
        self._state = state or initial_state()

    @property
    def game_state(self) -> GameState:
        return self._state

    def update_game_state(self, updater: Callable[[GameState], GameState]) -> GameState:
        """
        Replace the current snapshot with ``updater(current)``.

        If the updater raises, the current snapshot is kept.
        """
        previous = self._state
        updated = updater(previous)
        if not isinstance(updated, GameState):
            raise TypeError(f"State updater must return a GameState, got {type(updated).__name__}")

        self._state = updated
        self._emit_changes(previous, updated)
        return updated

    def dispatch(self, action: Action) -> GameState:
        """Apply an operator action to the current snapshot."""
        return self.update_game_state(lambda state: transition(state, action, self.rng))

    def _emit_changes(self, previous: GameState, updated: GameState) -> None:
        if not self.event_emitter:
            return
        for entry in new_entries(previous.game_log, updated.game_log):
            self.event_emitter.emit_log_entry(entry)
        self.event_emitter.emit_game_state_update(updated.to_dict())
        if updated.is_over and not previous.is_over:
            self.event_emitter.emit_game_over(updated.winner.value if updated.winner else None,
                                              updated.round)


def new_entries(previous: Sequence[LogEntry], updated: Sequence[LogEntry]) -> Sequence[LogEntry]:
    """Entries in ``updated`` that were not in ``previous``; all of them if the log was restarted."""
    if tuple(updated[:len(previous)]) == tuple(previous):
        return updated[len(previous):]
    return updated
