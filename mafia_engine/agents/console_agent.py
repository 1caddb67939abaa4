"""
Console agent: a single local operator types each player's choice.
"""

from typing import Callable, List, Optional, Sequence

from .base_agent import BaseAgent
from ..config.game_config import GameConfig, default_config
from ..core import judge
from ..core.exceptions import GameRuleError
from ..core.game_engine import GameState
from ..core.game_phase import GamePhase, VotingType
from ..core.player import Player
from ..core.state_machine import (
    Action, StartGame, MafiaKill, SheriffInvestigate, AcknowledgeInvestigation,
    EndDiscussion, CastVote, CastConfirmationVote, AcknowledgeResults,
)
from ..phases.day_phase import night_victims
from ..phases.night_phase import NightSubTurn, investigation_result, night_sub_turn
from ..phases.voting import current_voter


class ConsoleAgent(BaseAgent):
    """Prompts on stdin for every decision."""

    def __init__(self, config: GameConfig = default_config,
                 input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        super().__init__(config)
        self.input = input_func
        self.output = output_func

    def choose_action(self, state: GameState) -> Optional[Action]:
        if state.phase == GamePhase.SETUP:
            return self._setup_action()
        if state.phase == GamePhase.NIGHT:
            return self._night_action(state)
        if state.phase == GamePhase.DAY:
            return self._day_action(state)
        if state.phase == GamePhase.VOTING:
            return self._voting_action(state)
        return None

    def _setup_action(self) -> StartGame:
        while True:
            raw = self.input("Enter 10 player names, separated by commas: ")
            names = [name.strip() for name in raw.split(",")]
            try:
                judge.validate_names(names)
            except GameRuleError as e:
                self.output(str(e))
                continue
            return StartGame(tuple(names))

    def _night_action(self, state: GameState) -> Action:
        sub_turn = night_sub_turn(state)
        if sub_turn == NightSubTurn.MAFIA:
            target = self._pick("Mafia decides who to eliminate", judge.kill_targets(state))
            return MafiaKill(target.id)
        if sub_turn == NightSubTurn.SHERIFF:
            target = self._pick("Sheriff investigates a player", judge.investigation_targets(state))
            return SheriffInvestigate(target.id)

        result = investigation_result(state)
        if result is not None:
            finding = "is a Mafia member" if result.mafia_aligned else "is not Mafia"
            self.output(f"Investigation result: {result.target_name} {finding}.")
        self.input("Press Enter to continue to the day phase...")
        return AcknowledgeInvestigation()

    def _day_action(self, state: GameState) -> Action:
        victims = night_victims(state)
        if victims:
            for victim in victims:
                self.output(f"{victim.name} was eliminated during the night.")
        else:
            self.output("No one was eliminated during the night.")
        self.input("Press Enter to end the discussion and start voting...")
        return EndDiscussion()

    def _voting_action(self, state: GameState) -> Action:
        voter = current_voter(state)
        if voter is None:
            self.input("Press Enter to continue to the next night...")
            return AcknowledgeResults()

        if state.voting_type == VotingType.CONFIRMATION:
            candidate = state.player_name(state.tied_player_ids[0])
            while True:
                answer = self.input(f"{voter.name}, should {candidate} be exiled? [y/n]: ").strip().lower()
                if answer in ("y", "n"):
                    return CastConfirmationVote(voter.id, answer == "y")

        title = "Runoff: vote between tied players only" if state.voting_type == VotingType.RUNOFF else "Vote"
        target = self._pick(f"{title} ({voter.name}'s turn)", judge.eligible_vote_targets(state))
        if target.id == voter.id:
            self.output("You're voting for yourself! This might draw suspicion.")
        return CastVote(voter.id, target.id)

    def _pick(self, prompt: str, players: Sequence[Player]) -> Player:
        """Show a numbered list and read a choice until it is valid."""
        options: List[Player] = list(players)
        self.output(prompt)
        for number, player in enumerate(options, start=1):
            self.output(f"  {number}. {player.name}")
        while True:
            raw = self.input("> ").strip()
            if raw.isdigit() and 1 <= int(raw) <= len(options):
                return options[int(raw) - 1]
            self.output(f"Choose a number between 1 and {len(options)}")
