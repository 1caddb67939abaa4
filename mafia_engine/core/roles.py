"""
Role definitions for the Mafia game.
"""

from enum import Enum
from typing import List


class Faction(Enum):
    """Team affiliation."""
    TOWN = "town"  # Civilians + Sheriff
    MAFIA = "mafia"  # Mafia + Don


class Role(Enum):
    """Player roles."""
    CIVILIAN = "civilian"
    SHERIFF = "sheriff"
    MAFIA = "mafia"
    DON = "don"

    @property
    def faction(self) -> Faction:
        return faction_of(self)

    @property
    def is_mafia(self) -> bool:
        """Don counts as mafia for kills, investigations and win conditions."""
        return self in MAFIA_ROLES

    @property
    def title(self) -> str:
        return self.value.title()


MAFIA_ROLES = (Role.MAFIA, Role.DON)


def faction_of(role: Role) -> Faction:
    """Get the faction a role plays for."""
    return Faction.MAFIA if role in MAFIA_ROLES else Faction.TOWN


def is_mafia_aligned(role: Role) -> bool:
    return role in MAFIA_ROLES


def get_role_distribution() -> List[Role]:
    """
    Get the fixed role distribution for a 10-player game.
    Returns: 7 town (6 civilians + 1 sheriff) and 3 mafia (2 mafia + 1 don)
    """
    return [
        Role.SHERIFF,  # 1 Sheriff
        Role.DON,  # 1 Don
        Role.MAFIA,
        Role.MAFIA,  # 2 Mafia
        Role.CIVILIAN,
        Role.CIVILIAN,
        Role.CIVILIAN,
        Role.CIVILIAN,
        Role.CIVILIAN,
        Role.CIVILIAN,
    ]


PLAYER_COUNT = len(get_role_distribution())
