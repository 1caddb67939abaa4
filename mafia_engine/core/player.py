"""
Player record for a game participant.
"""

from dataclasses import dataclass, replace
from typing import Dict, Any

from .roles import Role, Faction


@dataclass(frozen=True)
class Player:
    """
    A participant in the game.

    Players are immutable; elimination produces a new record with
    ``is_alive=False``. ``is_alive`` is the only field that changes after
    role assignment.
    """
    id: str
    name: str
    role: Role
    is_alive: bool = True

    def __str__(self) -> str:
        return f"{self.name} ({self.role.value})"

    @property
    def is_mafia(self) -> bool:
        """Check if player is on the mafia team."""
        return self.role.is_mafia

    @property
    def faction(self) -> Faction:
        return self.role.faction

    def eliminated(self) -> "Player":
        """Return a copy of this player marked as eliminated."""
        return replace(self, is_alive=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "is_alive": self.is_alive,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            id=data["id"],
            name=data["name"],
            role=Role(data["role"]),
            is_alive=data.get("is_alive", True),
        )
