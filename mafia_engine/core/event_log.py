"""
Append-only event log.

The log is stored as a tuple in chronological insertion order. Grouping by
round and newest-first ordering are read-side views only.
"""

import copy
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .game_phase import GamePhase


class EventKind(Enum):
    """Structured type of a log entry."""
    GAME_START = "game_start"
    NIGHT_KILL = "night_kill"
    INVESTIGATION = "investigation"
    PHASE_CHANGE = "phase_change"
    VOTE_CAST = "vote_cast"
    ESCALATION = "escalation"
    CONFIRMATION_RESULT = "confirmation_result"
    ELIMINATION = "elimination"
    NO_ELIMINATION = "no_elimination"
    GAME_END = "game_end"


ELIMINATION_KINDS = (EventKind.NIGHT_KILL, EventKind.ELIMINATION)


@dataclass(frozen=True)
class LogEntry:
    """A single record of something that happened in the game."""
    id: str
    round: int
    phase: GamePhase
    action: str
    timestamp: int
    kind: EventKind
    actor_id: Optional[str] = None
    target_id: Optional[str] = None
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Entries are append-only; details are a private read-only copy
        object.__setattr__(self, "details", MappingProxyType(copy.deepcopy(dict(self.details))))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "round": self.round,
            "phase": self.phase.value,
            "action": self.action,
            "timestamp": self.timestamp,
            "kind": self.kind.value,
            "actor_id": self.actor_id,
            "target_id": self.target_id,
            "details": copy.deepcopy(dict(self.details)),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        return cls(
            id=data["id"],
            round=data["round"],
            phase=GamePhase(data["phase"]),
            action=data["action"],
            timestamp=data["timestamp"],
            kind=EventKind(data["kind"]),
            actor_id=data.get("actor_id"),
            target_id=data.get("target_id"),
            details=dict(data.get("details") or {}),
        )


def append_entry(log: Tuple[LogEntry, ...], round: int, phase: GamePhase, kind: EventKind,
                 action: str, actor_id: Optional[str] = None, target_id: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None) -> Tuple[LogEntry, ...]:
    """
    Return a new log with one entry appended.

    Timestamps are a logical clock: one past the previous entry, starting at 0.
    """
    timestamp = log[-1].timestamp + 1 if log else 0
    entry = LogEntry(
        id=f"log-{timestamp:04d}",
        round=round,
        phase=phase,
        action=action,
        timestamp=timestamp,
        kind=kind,
        actor_id=actor_id,
        target_id=target_id,
        details=details or {},
    )
    return log + (entry,)


def entries_of_kind(log: Iterable[LogEntry], *kinds: EventKind,
                    round: Optional[int] = None) -> List[LogEntry]:
    """Get entries of the given kinds, optionally limited to one round."""
    return [
        entry for entry in log
        if entry.kind in kinds and (round is None or entry.round == round)
    ]


def latest_entry(log: Iterable[LogEntry], *kinds: EventKind) -> Optional[LogEntry]:
    matches = entries_of_kind(log, *kinds)
    return matches[-1] if matches else None


def elimination_order(log: Iterable[LogEntry]) -> List[LogEntry]:
    """Night kills and vote eliminations in the order they happened."""
    return entries_of_kind(log, *ELIMINATION_KINDS)


def group_by_round(log: Iterable[LogEntry]) -> List[Tuple[int, List[LogEntry]]]:
    """
    Group entries for display.

    Rounds are returned newest first and entries within a round are ordered
    by recency. The underlying log is not reordered.
    """
    groups: "OrderedDict[int, List[LogEntry]]" = OrderedDict()
    for entry in log:
        groups.setdefault(entry.round, []).append(entry)

    return [
        (round_number, sorted(entries, key=lambda e: e.timestamp, reverse=True))
        for round_number, entries in sorted(groups.items(), key=lambda item: item[0], reverse=True)
    ]
