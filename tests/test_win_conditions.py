"""
Tests for win condition evaluation.
"""

from mafia_engine.core import EventKind, Faction, GamePhase, Role, evaluate
from mafia_engine.core.win_conditions import check_game_over


def test_full_table_continues(make_players):
    result = evaluate(make_players())
    assert not result.over
    assert result.winner is None


def test_mafia_wins_on_parity(make_players):
    """One mafia against one town: mafia-majority rule takes precedence."""
    players = make_players(dead=["p1", "p3", "p4", "p6", "p7", "p8", "p9", "p10"])  # don vs p5
    result = evaluate(players)
    assert result.over
    assert result.winner == Faction.MAFIA


def test_town_wins_when_mafia_gone(make_players):
    players = make_players(dead=["p2", "p3", "p4", "p5", "p6", "p7", "p8"])  # p1, p9, p10 left
    result = evaluate(players)
    assert result.over
    assert result.winner == Faction.TOWN


def test_game_continues_two_mafia_five_town(make_players):
    players = make_players(dead=["p2", "p5", "p6"])
    assert not evaluate(players).over


def test_don_counts_as_mafia(make_players):
    roles = [Role.DON, Role.CIVILIAN, Role.CIVILIAN]
    players = make_players(roles, dead=["p3"])
    assert evaluate(players).winner == Faction.MAFIA


def test_empty_board_is_a_mafia_win(make_players):
    """Zero against zero resolves by the first rule."""
    players = make_players(dead=[f"p{i}" for i in range(1, 11)])
    assert evaluate(players).winner == Faction.MAFIA


def test_check_game_over_ends_game(make_state):
    state = make_state(dead=["p1", "p3", "p4", "p6", "p7", "p8", "p9", "p10"])
    ended = check_game_over(state)

    assert ended.phase == GamePhase.RESULTS
    assert ended.winner == Faction.MAFIA
    assert ended.game_log[-1].kind == EventKind.GAME_END
    assert ended.game_log[-1].action == "Game Over! Mafia wins!"
    assert ended.game_log[-1].phase == GamePhase.NIGHT


def test_check_game_over_leaves_running_game(table):
    assert check_game_over(table) is table
