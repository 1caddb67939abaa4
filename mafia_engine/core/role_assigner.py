"""
Role assignment: turns a list of player names into a shuffled roster.
"""

import random
import string
from typing import List, Optional, Sequence, Set, TypeVar

from .exceptions import InvalidPlayerCount
from .player import Player
from .roles import Role, get_role_distribution, PLAYER_COUNT

T = TypeVar("T")

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 7

# Names offered on the setup screen
DEFAULT_NAMES = [
    "Alex", "Sam", "Jordan", "Taylor", "Riley",
    "Morgan", "Casey", "Jamie", "Quinn", "Avery",
    "Emma", "Liam", "Olivia", "Noah", "Sophia",
    "Jackson", "Ava", "Lucas", "Isabella", "Ethan",
    "Mia", "Mason", "Charlotte", "Aiden", "Amelia",
    "Michael", "Elena", "Daniel", "Sofia", "Nathan",
]


def generate_id(rng: random.Random, taken: Optional[Set[str]] = None) -> str:
    """Generate a short base-36 id not present in ``taken``."""
    taken = taken or set()
    while True:
        candidate = "".join(rng.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
        if candidate not in taken:
            return candidate


def shuffle_roles(items: Sequence[T], rng: random.Random) -> List[T]:
    """
    Fisher-Yates shuffle returning a new list.

    For i from the last index down to 1, swap element i with a uniformly
    random element at index <= i.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def assign_roles(names: Sequence[str], rng: Optional[random.Random] = None) -> List[Player]:
    """
    Assign the fixed role distribution to the given names.

    Args:
        names: Exactly 10 player names, in seating order. Uniqueness is
            checked by the caller (see ``judge.validate_names``).
        rng: Random source; a fresh unseeded one is used if omitted.

    Returns:
        One alive Player per name, in the same order as ``names``.

    Raises:
        InvalidPlayerCount: If ``names`` does not hold exactly 10 entries.
    """
    if len(names) != PLAYER_COUNT:
        raise InvalidPlayerCount(len(names), PLAYER_COUNT)

    rng = rng or random.Random()
    roles: List[Role] = shuffle_roles(get_role_distribution(), rng)

    players = []
    ids: Set[str] = set()
    for name, role in zip(names, roles):
        player_id = generate_id(rng, ids)
        ids.add(player_id)
        players.append(Player(id=player_id, name=name, role=role))
    return players


def random_default_names(count: int = PLAYER_COUNT, rng: Optional[random.Random] = None) -> List[str]:
    """Pick ``count`` distinct names from the default name pool."""
    rng = rng or random.Random()
    return shuffle_roles(DEFAULT_NAMES, rng)[:count]
