"""
Win condition evaluation.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional, TYPE_CHECKING

from .event_log import EventKind
from .game_phase import GamePhase
from .player import Player
from .roles import Faction

if TYPE_CHECKING:
    from .game_engine import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WinResult:
    """Outcome of a win check."""
    over: bool
    winner: Optional[Faction] = None


def evaluate(players: Iterable[Player]) -> WinResult:
    """
    Check if the game has ended and who won.

    The mafia-majority rule is checked before the all-mafia-dead rule, so
    an empty board resolves to a mafia win.
    """
    alive = [p for p in players if p.is_alive]
    alive_mafia = sum(1 for p in alive if p.is_mafia)
    alive_town = len(alive) - alive_mafia

    # Mafia wins: equal numbers or more mafia than town
    if alive_mafia >= alive_town:
        return WinResult(over=True, winner=Faction.MAFIA)

    # Town wins: all mafia eliminated
    if alive_mafia == 0:
        return WinResult(over=True, winner=Faction.TOWN)

    return WinResult(over=False)


def check_game_over(state: "GameState") -> "GameState":
    """
    Evaluate the roster after an elimination and end the game if decided.

    Logs the winner in the phase where the deciding elimination happened,
    then moves to RESULTS.
    """
    result = evaluate(state.players)
    if not result.over:
        return state

    winner_name = "Town" if result.winner == Faction.TOWN else "Mafia"
    state = state.log(
        EventKind.GAME_END,
        f"Game Over! {winner_name} wins!",
        details={"winner": result.winner.value},
    )
    logger.info("Game over after round %d: %s wins", state.round, winner_name)
    return replace(state, phase=GamePhase.RESULTS, winner=result.winner)
