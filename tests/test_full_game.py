"""
Integration tests for full game flow.
"""

import json
from unittest.mock import Mock

import pytest

from main import MafiaGame
from mafia_engine.agents import DummyAgent
from mafia_engine.config.game_config import GameConfig, default_config
from mafia_engine.core import EventKind, Faction, GamePhase, GameRuleError, elimination_order
from mafia_engine.core.win_conditions import evaluate


@pytest.fixture
def game_config(names):
    return GameConfig(random_seed=7, default_names=names, record_events=False,
                      use_judge_announcements=False)


def test_full_game_flow(game_config, names):
    """A simulated game runs to a decided winner."""
    game = MafiaGame(game_config)
    winners = game.run_game()

    state = game.game_state
    assert state.phase == GamePhase.RESULTS
    assert state.winner in (Faction.TOWN, Faction.MAFIA)
    assert winners == ["Town" if state.winner == Faction.TOWN else "Mafia"]
    assert [p.name for p in state.players] == names
    assert evaluate(state.players).winner == state.winner

    kinds = [entry.kind for entry in state.game_log]
    assert kinds[0] == EventKind.GAME_START
    assert kinds[-1] == EventKind.GAME_END
    assert kinds.count(EventKind.GAME_END) == 1
    assert [e.timestamp for e in state.game_log] == list(range(len(state.game_log)))

    # Every dead player died exactly once
    dead = [p.id for p in state.players if not p.is_alive]
    eliminated = [e.target_id for e in elimination_order(state.game_log)]
    assert sorted(eliminated) == sorted(dead)

    summary = game.get_game_summary()
    assert summary["winner"] == state.winner.value
    assert summary["final_state"]["phase"] == "results"
    assert summary["game_log"][-1]["kind"] == "game_end"


def test_same_seed_same_game(names):
    def play():
        game = MafiaGame(GameConfig(random_seed=11, default_names=names, record_events=False,
                                    use_judge_announcements=False))
        game.run_game()
        return [entry.action for entry in game.game_state.game_log]

    assert play() == play()


def test_several_games_with_same_names(game_config, names):
    game = MafiaGame(game_config)
    winners = game.run_game(games=2)

    assert len(winners) == 2
    state = game.game_state
    assert state.is_over
    assert [p.name for p in state.players] == names
    assert state.game_log[0].action == "New game started with the same players."


def test_recorded_run(tmp_path, names):
    config = GameConfig(random_seed=3, default_names=names, runs_dir=str(tmp_path),
                        use_judge_announcements=False)
    game = MafiaGame(config, run_name="recorded")
    game.run_game()

    run_dir = tmp_path / "recorded"
    with open(run_dir / "events.jsonl") as f:
        events = [json.loads(line) for line in f]
    event_types = [e["event_type"] for e in events]

    assert "game_start" in event_types
    assert event_types[-1] == "game_over"
    assert event_types.count("game_over") == 1

    with open(run_dir / "metadata.json") as f:
        metadata = json.load(f)
    assert metadata["config"]["random_seed"] == 3

    with open(run_dir / "state.json") as f:
        assert json.load(f)["phase"] == "results"

    assert game.run_recorder.list_runs()[0]["game_outcome"] in ("Town Wins", "Mafia Wins")


def test_injected_emitter(game_config):
    emitter = Mock()
    game = MafiaGame(game_config, event_emitter=emitter)
    game.run_game()

    emitter.emit_game_start.assert_called_once()
    emitter.emit_game_over.assert_called_once()


def test_invalid_roster_is_not_retried(names):
    config = GameConfig(random_seed=1, default_names=names[:9], record_events=False,
                        use_judge_announcements=False)
    game = MafiaGame(config, agent=DummyAgent(config))
    with pytest.raises(GameRuleError):
        game.run_game()
    assert game.game_state.phase == GamePhase.SETUP


def test_unknown_agent_type():
    with pytest.raises(ValueError):
        MafiaGame(GameConfig(random_seed=1, record_events=False, agent_type="oracle"))


def test_judge_announcements(game_config, capsys):
    game_config.use_judge_announcements = True
    MafiaGame(game_config).run_game()

    out = capsys.readouterr().out
    assert "[JUDGE] Game started with 10 players." in out
    assert "[JUDGE] Game Over!" in out
    assert "voted for" not in out


def test_default_config_is_never_seeded(tmp_path, monkeypatch):
    """Each game without a config draws its own seed and leaves the shared default alone."""
    monkeypatch.chdir(tmp_path)
    first = MafiaGame(run_name="first")
    second = MafiaGame(run_name="second")

    assert default_config.random_seed is None
    assert first.config is not default_config
    assert first.config.random_seed is not None
    assert second.config.random_seed is not None


def test_caller_config_is_not_changed(names):
    config = GameConfig(default_names=names, record_events=False, use_judge_announcements=False)
    game = MafiaGame(config)

    assert config.random_seed is None
    assert game.config.random_seed is not None
    assert game.config.default_names == names
    assert game.config.default_names is not config.default_names
