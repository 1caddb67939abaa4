"""
Pytest fixtures for Mafia engine tests.
"""

import random
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence

import pytest

from mafia_engine.core import (
    GamePhase, GameState, Player, Role, StartGame, initial_state, transition
)
from mafia_engine.phases.voting import cast_confirmation_vote, cast_vote

NAMES = ["Alex", "Sam", "Jordan", "Taylor", "Riley", "Morgan", "Casey", "Jamie", "Quinn", "Avery"]

# Seat order of the hand-built table: p1 sheriff, p2 don, p3-p4 mafia, p5-p10 civilians
TABLE_ROLES = [
    Role.SHERIFF, Role.DON, Role.MAFIA, Role.MAFIA,
    Role.CIVILIAN, Role.CIVILIAN, Role.CIVILIAN, Role.CIVILIAN, Role.CIVILIAN, Role.CIVILIAN,
]


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def names() -> List[str]:
    return list(NAMES)


@pytest.fixture
def started_state(names, rng) -> GameState:
    """A game that has just been started with random roles."""
    return transition(initial_state(), StartGame(tuple(names)), rng)


@pytest.fixture
def make_players() -> Callable[..., List[Player]]:
    """Factory for players with known roles and ids p1, p2, ..."""
    def _make(roles: Sequence[Role] = TABLE_ROLES, dead: Sequence[str] = ()) -> List[Player]:
        return [
            Player(id=f"p{i}", name=NAMES[i - 1], role=role, is_alive=f"p{i}" not in dead)
            for i, role in enumerate(roles, start=1)
        ]
    return _make


@pytest.fixture
def make_state(make_players) -> Callable[..., GameState]:
    """Factory for a state on the hand-built table."""
    def _make(phase: GamePhase = GamePhase.NIGHT, dead: Sequence[str] = (), **changes) -> GameState:
        state = GameState(players=tuple(make_players(dead=dead)), phase=phase, round=1)
        return replace(state, **changes)
    return _make


@pytest.fixture
def table(make_state) -> GameState:
    """Hand-built table at the start of night 1."""
    return make_state()


@pytest.fixture
def voting_table(make_state) -> GameState:
    """Hand-built table at the start of a normal vote."""
    return make_state(phase=GamePhase.VOTING)


def cast_all(state: GameState, ballots: Dict[str, str]) -> GameState:
    """Cast ballots {voter_id: target_id} in the given order."""
    for voter_id, target_id in ballots.items():
        state = cast_vote(state, voter_id, target_id)
    return state


def confirm_all(state: GameState, ballots: Dict[str, bool]) -> GameState:
    for voter_id, exile in ballots.items():
        state = cast_confirmation_vote(state, voter_id, exile)
    return state


@pytest.fixture
def vote_with() -> Callable[[GameState, Dict[str, str]], GameState]:
    return cast_all


@pytest.fixture
def confirm_with() -> Callable[[GameState, Dict[str, bool]], GameState]:
    return confirm_all


def find_role(state: GameState, role: Role) -> Optional[Player]:
    return next((p for p in state.players if p.role == role), None)


@pytest.fixture
def player_with_role() -> Callable[[GameState, Role], Optional[Player]]:
    return find_role
