"""
Event emitter for recording game events to files.
"""

import logging
from threading import Lock
from typing import Any, Dict, List, Optional

from ..core.event_log import LogEntry
from .run_recorder import RunRecorder

logger = logging.getLogger(__name__)


class EventEmitter:
    """Event emitter that records game events to files."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder or RunRecorder()
        self._lock = Lock()

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event by recording it to file."""
        with self._lock:
            try:
                self.run_recorder.record_event(event_type, data)
            except (OSError, TypeError, ValueError) as e:
                # Don't let recording errors break the game
                logger.error("Error recording %s event: %s", event_type, e)

    def emit_game_start(self, players: List[Dict[str, Any]], seed: Optional[int] = None) -> None:
        """Emit game start event with the dealt roster."""
        self._emit("game_start", {
            "players": players,
            "random_seed": seed,
        })

    def emit_log_entry(self, entry: LogEntry) -> None:
        """Emit one newly appended game log entry."""
        self._emit(entry.kind.value, entry.to_dict())

    def emit_game_state_update(self, game_state: Dict[str, Any]) -> None:
        """Record the latest snapshot."""
        try:
            self.run_recorder.save_state(game_state)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving game state: %s", e)

    def emit_game_over(self, winner: Optional[str], round_number: int) -> None:
        """Emit game over event."""
        self._emit("game_over", {
            "winner": winner,
            "round": round_number,
        })
