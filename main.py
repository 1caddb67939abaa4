"""
Command-line runner for a Mafia game.
"""

import argparse
import logging
import random
from dataclasses import replace
from typing import Dict, List, Optional

from mafia_engine.agents import BaseAgent, ConsoleAgent, DummyAgent
from mafia_engine.config import AGENT_TYPES, GameConfig, default_config, load_config
from mafia_engine.core import (
    EventKind, Faction, GameRuleError, GameSession, GameState, PlayAgain, elimination_order,
)
from mafia_engine.core.state_machine import new_entries
from mafia_engine.events import EventEmitter, RunRecorder

logger = logging.getLogger("mafia_engine.main")


class MafiaGame:
    """Main game controller."""

    def __init__(self, config: Optional[GameConfig] = None, agent: Optional[BaseAgent] = None,
                 event_emitter: Optional[EventEmitter] = None, run_name: Optional[str] = None):
        # Own copy; the shared default stays unseeded
        base = config or default_config
        self.config = replace(base, default_names=list(base.default_names))

        # Generate seed if not provided
        if self.config.random_seed is None:
            self.config.random_seed = random.randint(0, 2**31 - 1)

        self.run_recorder: Optional[RunRecorder] = None
        if event_emitter is None and self.config.record_events:
            self.run_recorder = RunRecorder(self.config.runs_dir)
            run_name = self.run_recorder.create_run(run_name)
            event_emitter = EventEmitter(self.run_recorder)
            print(f"Recording game to: {self.run_recorder.get_run_path()}/")
        elif event_emitter is not None:
            self.run_recorder = event_emitter.run_recorder
        self.event_emitter = event_emitter

        self.session = GameSession(self.config, rng=random.Random(self.config.random_seed),
                                   event_emitter=self.event_emitter)
        self.agent = agent or self._create_agent(self.config.agent_type)

    def _create_agent(self, agent_type: str) -> BaseAgent:
        """Create an operator agent of the specified type."""
        agent_type = agent_type.lower()
        if agent_type == "dummy_agent":
            return DummyAgent(self.config)
        elif agent_type == "console_agent":
            return ConsoleAgent(self.config)
        raise ValueError(f"Unknown agent_type: {agent_type}. Must be one of {', '.join(AGENT_TYPES)}")

    @property
    def game_state(self) -> GameState:
        return self.session.game_state

    def announce(self, message: str) -> None:
        """Make a judge announcement."""
        if self.config.use_judge_announcements:
            print(f"[JUDGE] {message}")

    def run_game(self, games: int = 1) -> List[str]:
        """
        Play ``games`` games in a row with the same names.
        Returns the winner label of each game.
        """
        winners = []
        for game_number in range(games):
            if game_number > 0:
                self._apply(PlayAgain())
            winners.append(self._play_until_over())
        return winners

    def _play_until_over(self) -> str:
        while not self.game_state.is_over:
            action = self.agent.choose_action(self.game_state)
            if action is None:
                break
            self._apply(action)

        winner = self.game_state.winner
        winner_name = "Town" if winner == Faction.TOWN else "Mafia" if winner else "Unfinished"
        print("\n" + "=" * 60)
        print(f"GAME OVER - {winner_name.upper()} WIN" if winner else "Game ended without a winner")
        print("=" * 60)
        self._print_game_summary()
        return winner_name

    def _apply(self, action) -> None:
        previous = self.game_state
        first_game = not previous.players
        try:
            updated = self.session.dispatch(action)
        except GameRuleError as e:
            # Rejected actions leave the state untouched; only a human operator gets to retry
            if not isinstance(self.agent, ConsoleAgent):
                raise
            logger.warning("Rejected %s: %s", action.name, e)
            print(f"Not allowed: {e}")
            return

        if (first_game or isinstance(action, PlayAgain)) and self.event_emitter:
            self.event_emitter.emit_game_start(
                [p.to_dict() for p in updated.players], self.config.random_seed
            )
            if self.run_recorder:
                self.run_recorder.save_metadata({
                    "players": [p.to_dict() for p in updated.players],
                    "config": {
                        "agent_type": self.config.agent_type,
                        "random_seed": self.config.random_seed,
                    },
                })

        for entry in new_entries(previous.game_log, updated.game_log):
            if entry.kind != EventKind.VOTE_CAST or isinstance(self.agent, ConsoleAgent):
                self.announce(entry.action)

    def _print_game_summary(self) -> None:
        """Print a formatted game summary."""
        state = self.game_state
        print("\nGAME SUMMARY")
        print("-" * 60)
        print(f"Rounds played: {state.round}")
        print(f"Random Seed: {self.config.random_seed}")

        print("\nPlayers:")
        for player in state.players:
            status = "alive" if player.is_alive else "eliminated"
            print(f"  - {player.name}: {player.role.title} ({status})")

        eliminations = elimination_order(state.game_log)
        if eliminations:
            print("\nElimination order:")
            for index, entry in enumerate(eliminations, start=1):
                print(f"  {index}. {entry.action}")

    def get_game_summary(self) -> Dict:
        """Get final game summary as dictionary."""
        return {
            "winner": self.game_state.winner.value if self.game_state.winner else None,
            "final_state": self.game_state.get_game_summary(),
            "game_log": [entry.to_dict() for entry in self.game_state.game_log[-10:]],  # Last 10 entries
        }


def main():
    """Entry point for running a game."""
    parser = argparse.ArgumentParser(
        description="Run a Mafia game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                   # Simulated game with random choices
  python main.py --agent console_agent             # Play at the table, one operator
  python main.py --names Ann,Bo,Cy,Di,Ed,Fay,Gus,Hal,Ivy,Jo --seed 7
  python main.py --config configs/default.yaml --games 3
        """
    )
    parser.add_argument("--config", "-c", type=str, default=None,
                        help="Path to YAML configuration file (default: use default config)")
    parser.add_argument("--seed", "-s", type=int, default=None,
                        help="Random seed for reproducible games (generated and shown if omitted)")
    parser.add_argument("--names", "-n", type=str, default=None,
                        help="Comma-separated list of 10 player names")
    parser.add_argument("--agent", "-a", type=str, default=None,
                        choices=AGENT_TYPES,
                        help="Who makes the choices (overrides config file setting)")
    parser.add_argument("--games", "-g", type=int, default=1,
                        help="Number of games to play with the same names")
    parser.add_argument("--run-name", "-r", type=str, default=None,
                        help="Custom name for this run (default: auto-generated timestamp)")
    parser.add_argument("--no-record", action="store_true",
                        help="Do not record events to the runs directory")

    args = parser.parse_args()

    config = load_config(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config.random_seed = args.seed
    if args.names:
        config.default_names = [name.strip() for name in args.names.split(",")]
    if args.agent:
        config.agent_type = args.agent
    if args.no_record:
        config.record_events = False

    logging.basicConfig(
        level=getattr(logging, str(config.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Mafia Game")
    print("=" * 60)
    if args.config:
        print(f"Using config: {args.config}")
    print(f"Agent type: {config.agent_type}")
    print("=" * 60)

    game = MafiaGame(config=config, run_name=args.run_name)
    game.run_game(games=max(1, args.games))

    if game.run_recorder:
        run_path = game.run_recorder.get_run_path()
        if run_path:
            print(f"\nGame events saved to: {run_path}")


if __name__ == "__main__":
    main()
