"""
Dummy agent that plays every turn with random legal choices.
"""

import random
from typing import Optional

from .base_agent import BaseAgent
from ..config.game_config import GameConfig, default_config
from ..core import judge
from ..core.game_engine import GameState
from ..core.game_phase import GamePhase, VotingType
from ..core.role_assigner import random_default_names
from ..core.state_machine import (
    Action, StartGame, MafiaKill, SheriffInvestigate, AcknowledgeInvestigation,
    EndDiscussion, CastVote, CastConfirmationVote, AcknowledgeResults,
)
from ..phases.night_phase import NightSubTurn, night_sub_turn
from ..phases.voting import current_voter


class DummyAgent(BaseAgent):
    """
    Simple agent with reproducible random behavior:
    - Mafia: kill a random alive town player
    - Sheriff: investigate a random alive player other than themselves
    - Voters: vote for a random eligible player, avoiding themselves when possible
    - Confirmation: exile or keep with equal odds
    """

    def __init__(self, config: GameConfig = default_config, rng: Optional[random.Random] = None):
        super().__init__(config)
        # Use seed from config if provided, otherwise non-deterministic
        self.random = rng or random.Random(config.random_seed)

    def choose_action(self, state: GameState) -> Optional[Action]:
        if state.phase == GamePhase.SETUP:
            names = self.config.default_names or random_default_names(rng=self.random)
            return StartGame(tuple(names))

        if state.phase == GamePhase.NIGHT:
            return self._night_action(state)

        if state.phase == GamePhase.DAY:
            return EndDiscussion()

        if state.phase == GamePhase.VOTING:
            return self._voting_action(state)

        # Game over
        return None

    def _night_action(self, state: GameState) -> Action:
        sub_turn = night_sub_turn(state)
        if sub_turn == NightSubTurn.MAFIA:
            target = self.random.choice(judge.kill_targets(state))
            return MafiaKill(target.id)
        if sub_turn == NightSubTurn.SHERIFF:
            target = self.random.choice(judge.investigation_targets(state))
            return SheriffInvestigate(target.id)
        return AcknowledgeInvestigation()

    def _voting_action(self, state: GameState) -> Action:
        voter = current_voter(state)
        if voter is None:
            return AcknowledgeResults()

        if state.voting_type == VotingType.CONFIRMATION:
            return CastConfirmationVote(voter.id, self.random.random() < 0.5)

        targets = judge.eligible_vote_targets(state)
        others = [p for p in targets if p.id != voter.id]
        target = self.random.choice(others or targets)
        return CastVote(voter.id, target.id)
