"""
Game state snapshot.

A GameState is immutable. Every transition builds a new snapshot with
``dataclasses.replace``. Mapping fields are copied into read-only views on
construction, so no two snapshots share a mutable container.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .event_log import EventKind, LogEntry, append_entry
from .game_phase import GamePhase, VotingType
from .player import Player
from .roles import Faction, Role

UNKNOWN_PLAYER = "Unknown"


@dataclass(frozen=True)
class GameState:
    """Complete game state."""
    players: Tuple[Player, ...] = ()
    phase: GamePhase = GamePhase.SETUP
    round: int = 0

    # Voting phase
    votes: Mapping[str, str] = field(default_factory=dict)  # {voter_id: target_id}
    confirmation_votes: Mapping[str, bool] = field(default_factory=dict)  # {voter_id: exile?}
    voting_type: VotingType = VotingType.NORMAL
    tied_player_ids: Tuple[str, ...] = ()
    show_voting_results: bool = False

    # Night phase
    night_action: Mapping[str, str] = field(default_factory=dict)  # {role_name: target_id}

    # Game history
    game_log: Tuple[LogEntry, ...] = ()

    # Win condition
    winner: Optional[Faction] = None

    def __post_init__(self):
        for name in ("votes", "confirmation_votes", "night_action"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(self, "tied_player_ids", tuple(self.tied_player_ids))
        object.__setattr__(self, "game_log", tuple(self.game_log))

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_name(self, player_id: Optional[str]) -> str:
        """Display name for an id; unknown ids degrade to a placeholder."""
        player = self.get_player(player_id) if player_id else None
        return player.name if player else UNKNOWN_PLAYER

    def get_alive_players(self) -> List[Player]:
        """Get all alive players in seating order."""
        return [p for p in self.players if p.is_alive]

    def get_mafia_players(self) -> List[Player]:
        """Get all alive mafia-aligned players."""
        return [p for p in self.get_alive_players() if p.is_mafia]

    def get_town_players(self) -> List[Player]:
        """Get all alive town players."""
        return [p for p in self.get_alive_players() if not p.is_mafia]

    def get_alive_sheriff(self) -> Optional[Player]:
        return next((p for p in self.get_alive_players() if p.role == Role.SHERIFF), None)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.RESULTS

    def with_player_eliminated(self, player_id: str) -> "GameState":
        """Return a copy with the given player marked dead."""
        players = tuple(p.eliminated() if p.id == player_id else p for p in self.players)
        return replace(self, players=players)

    def log(self, kind: EventKind, action: str, actor_id: Optional[str] = None,
            target_id: Optional[str] = None, details: Optional[Dict[str, Any]] = None,
            phase: Optional[GamePhase] = None) -> "GameState":
        """Return a copy with one log entry appended for the current round."""
        game_log = append_entry(
            self.game_log,
            round=self.round,
            phase=phase or self.phase,
            kind=kind,
            action=action,
            actor_id=actor_id,
            target_id=target_id,
            details=details,
        )
        return replace(self, game_log=game_log)

    def get_game_summary(self) -> Dict[str, Any]:
        """Get a summary of the current game state."""
        return {
            "phase": self.phase.value,
            "round": self.round,
            "alive_players": len(self.get_alive_players()),
            "alive_mafia": len(self.get_mafia_players()),
            "alive_town": len(self.get_town_players()),
            "winner": self.winner.value if self.winner else None,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-serializable view of the snapshot."""
        return {
            "players": [p.to_dict() for p in self.players],
            "phase": self.phase.value,
            "round": self.round,
            "votes": dict(self.votes),
            "night_action": dict(self.night_action),
            "confirmation_votes": dict(self.confirmation_votes),
            "voting_type": self.voting_type.value,
            "tied_player_ids": list(self.tied_player_ids),
            "game_log": [entry.to_dict() for entry in self.game_log],
            "show_voting_results": self.show_voting_results,
            "winner": self.winner.value if self.winner else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        winner = data.get("winner")
        return cls(
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            phase=GamePhase(data.get("phase", GamePhase.SETUP.value)),
            round=data.get("round", 0),
            votes=dict(data.get("votes") or {}),
            night_action=dict(data.get("night_action") or {}),
            confirmation_votes=dict(data.get("confirmation_votes") or {}),
            voting_type=VotingType(data.get("voting_type", VotingType.NORMAL.value)),
            tied_player_ids=tuple(data.get("tied_player_ids") or ()),
            game_log=tuple(LogEntry.from_dict(e) for e in data.get("game_log", [])),
            show_voting_results=data.get("show_voting_results", False),
            winner=Faction(winner) if winner else None,
        )


def initial_state() -> GameState:
    """The empty setup-phase state every game starts from."""
    return GameState()
