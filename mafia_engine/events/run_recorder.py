"""
Run recorder that saves game events to files.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

OUTCOME_LABELS = {"town": "Town Wins", "mafia": "Mafia Wins"}


class RunRecorder:
    """Records game events to files in a run directory."""

    def __init__(self, runs_dir: str = "runs"):
        self.runs_dir = Path(runs_dir)
        self.current_run_dir: Optional[Path] = None
        self.events_file: Optional[Path] = None
        self.metadata_file: Optional[Path] = None
        self.state_file: Optional[Path] = None
        self._lock = Lock()
        self._event_count = 0

    def create_run(self, run_name: Optional[str] = None) -> str:
        """
        Create a new run directory.

        Args:
            run_name: Optional custom run name. If None, generates timestamp-based name.

        Returns:
            The run name (directory name)
        """
        if run_name is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            run_name = f"run_{timestamp}"

        self.current_run_dir = self.runs_dir / run_name
        self.current_run_dir.mkdir(parents=True, exist_ok=True)

        self.events_file = self.current_run_dir / "events.jsonl"
        self.metadata_file = self.current_run_dir / "metadata.json"
        self.state_file = self.current_run_dir / "state.json"
        self._event_count = 0

        return run_name

    def record_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """
        Append an event to the events file (JSONL format).

        Does nothing until ``create_run`` has been called.
        """
        if not self.events_file:
            return

        with self._lock:
            event = {
                "recorded_at": datetime.now().isoformat(),
                "event_type": event_type,
                "data": data,
                "sequence": self._event_count
            }
            self._event_count += 1

            with open(self.events_file, 'a') as f:
                f.write(json.dumps(event) + '\n')

    def save_metadata(self, metadata: Dict[str, Any]) -> None:
        """Save run metadata to metadata.json."""
        if not self.metadata_file:
            return

        with self._lock:
            with open(self.metadata_file, 'w') as f:
                json.dump(metadata, f, indent=2)

    def save_state(self, state: Dict[str, Any]) -> None:
        """
        Overwrite state.json with the latest game snapshot.

        The file is for inspecting a run; games are never resumed from it.
        """
        if not self.state_file:
            return

        with self._lock:
            with open(self.state_file, 'w') as f:
                json.dump(state, f, indent=2)

    def get_run_path(self) -> Optional[Path]:
        """Get the current run directory path."""
        return self.current_run_dir

    def list_runs(self) -> List[Dict[str, Any]]:
        """
        List all recorded runs, newest first.

        Returns:
            List of run info dictionaries
        """
        runs: List[Dict[str, Any]] = []
        if not self.runs_dir.exists():
            return runs

        for run_dir in sorted(self.runs_dir.iterdir(), reverse=True):
            if not run_dir.is_dir():
                continue

            metadata_file = run_dir / "metadata.json"
            events_file = run_dir / "events.jsonl"

            run_info: Dict[str, Any] = {
                "name": run_dir.name,
                "path": str(run_dir),
                "has_metadata": metadata_file.exists(),
                "has_events": events_file.exists(),
            }

            if metadata_file.exists():
                try:
                    with open(metadata_file, 'r') as f:
                        run_info["metadata"] = json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    logger.warning("Could not read %s: %s", metadata_file, e)

            if events_file.exists():
                run_info.update(self._summarize_events(events_file))

            runs.append(run_info)

        return runs

    @staticmethod
    def _summarize_events(events_file: Path) -> Dict[str, Any]:
        """Count events and pick out the game outcome."""
        event_count = 0
        game_outcome = None

        with open(events_file, 'r') as f:
            for line in f:
                if not line.strip():
                    continue
                event_count += 1
                try:
                    event = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Skipping malformed event line in %s", events_file)
                    continue
                if event.get("event_type") == "game_over":
                    winner = event.get("data", {}).get("winner")
                    game_outcome = OUTCOME_LABELS.get(winner, "Unfinished")

        summary: Dict[str, Any] = {"event_count": event_count}
        if game_outcome:
            summary["game_outcome"] = game_outcome
        return summary
