"""
Voting system with tie-breaking logic.

A normal vote that ends in a tie goes to a runoff between the tied leaders.
A runoff that ties again goes to a confirmation vote (exile or keep) on the
first tied leader, which needs a strict majority to exile.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..core import judge
from ..core.event_log import EventKind
from ..core.game_engine import GameState
from ..core.game_phase import GamePhase, VotingType
from ..core.player import Player
from ..core.win_conditions import check_game_over

logger = logging.getLogger(__name__)


class OutcomeKind(Enum):
    """What a completed voting sub-round decided."""
    ELIMINATION = "elimination"
    RUNOFF = "runoff"
    CONFIRMATION = "confirmation"
    KEPT = "kept"
    NO_BALLOTS = "no_ballots"


@dataclass(frozen=True)
class VotingOutcome:
    """Result of tallying one voting sub-round."""
    kind: OutcomeKind
    voting_type: VotingType
    target_id: Optional[str] = None
    tied_player_ids: Tuple[str, ...] = ()
    vote_counts: Dict[str, int] = field(default_factory=dict)
    max_count: int = 0
    exile_count: int = 0
    total_votes: int = 0

    @property
    def exile_ratio(self) -> float:
        return self.exile_count / self.total_votes if self.total_votes else 0.0

    @property
    def exile_percentage(self) -> int:
        return int(self.exile_ratio * 100 + 0.5)


def tally(ballots: Mapping[str, str]) -> Dict[str, int]:
    """Count ballots per target, keeping first-vote order."""
    return dict(Counter(ballots.values()))


def resolve(ballots: Mapping[str, Union[str, bool]], voting_type: VotingType,
            tied_player_ids: Sequence[str], players: Sequence[Player]) -> VotingOutcome:
    """
    Decide the outcome of a completed voting sub-round.

    This is a pure function of its inputs.

    Args:
        ballots: {voter_id: target_id} for normal and runoff votes,
            {voter_id: exile?} for a confirmation vote.
        voting_type: The sub-round being resolved.
        tied_player_ids: Leaders carried over from the previous sub-round.
        players: Current roster.

    Returns:
        VotingOutcome describing the elimination, escalation or no-op.
    """
    if voting_type == VotingType.CONFIRMATION:
        return _resolve_confirmation(ballots, tied_player_ids)

    counts = tally(ballots)
    if not counts:
        return VotingOutcome(kind=OutcomeKind.NO_BALLOTS, voting_type=voting_type)

    max_count = max(counts.values())
    leaders = tuple(target for target, count in counts.items() if count == max_count)

    if len(leaders) == 1:
        return VotingOutcome(
            kind=OutcomeKind.ELIMINATION,
            voting_type=voting_type,
            target_id=leaders[0],
            vote_counts=counts,
            max_count=max_count,
            total_votes=len(ballots),
        )

    if voting_type == VotingType.NORMAL:
        return VotingOutcome(
            kind=OutcomeKind.RUNOFF,
            voting_type=voting_type,
            tied_player_ids=leaders,
            vote_counts=counts,
            max_count=max_count,
            total_votes=len(ballots),
        )

    # Still tied after a runoff: only the first leader (by first vote) goes
    # to the confirmation vote, the others are dropped.
    return VotingOutcome(
        kind=OutcomeKind.CONFIRMATION,
        voting_type=voting_type,
        target_id=leaders[0],
        tied_player_ids=leaders,
        vote_counts=counts,
        max_count=max_count,
        total_votes=len(ballots),
    )


def _resolve_confirmation(ballots: Mapping[str, bool], tied_player_ids: Sequence[str]) -> VotingOutcome:
    total = len(ballots)
    if total == 0 or not tied_player_ids:
        return VotingOutcome(kind=OutcomeKind.NO_BALLOTS, voting_type=VotingType.CONFIRMATION)

    exile_count = sum(1 for exile in ballots.values() if exile)
    # Exile needs strictly more than half
    kind = OutcomeKind.ELIMINATION if exile_count * 2 > total else OutcomeKind.KEPT
    return VotingOutcome(
        kind=kind,
        voting_type=VotingType.CONFIRMATION,
        target_id=tied_player_ids[0],
        tied_player_ids=(tied_player_ids[0],),
        exile_count=exile_count,
        total_votes=total,
    )


def current_voter(state: GameState) -> Optional[Player]:
    """Next alive player, in seating order, who still has to vote."""
    if state.phase != GamePhase.VOTING or state.show_voting_results:
        return None
    pending = judge.pending_voters(state)
    return pending[0] if pending else None


def eligible_targets(state: GameState) -> List[Player]:
    return judge.eligible_vote_targets(state)


def _require_open_ballot(state: GameState, action: str, voter_id: str) -> None:
    judge.require(state.phase == GamePhase.VOTING, action, state)
    judge.require(not state.show_voting_results, action, state, "Voting results are being shown")
    judge.require(judge.can_vote(state, voter_id), action, state,
                  f"{state.player_name(voter_id)} cannot vote now")


def cast_vote(state: GameState, voter_id: str, target_id: str) -> GameState:
    """
    Record one normal or runoff ballot.

    Self-votes are allowed. The sub-round is resolved as soon as every alive
    player has voted.
    """
    _require_open_ballot(state, "cast_vote", voter_id)
    judge.require(state.voting_type != VotingType.CONFIRMATION, "cast_vote", state,
                  "A confirmation vote is in progress")
    judge.require(any(p.id == target_id for p in judge.eligible_vote_targets(state)), "cast_vote", state,
                  f"{state.player_name(target_id)} is not a valid vote target")

    state = replace(state, votes={**state.votes, voter_id: target_id})
    state = state.log(
        EventKind.VOTE_CAST,
        f"{state.player_name(voter_id)} voted for {state.player_name(target_id)}.",
        actor_id=voter_id,
        target_id=target_id,
        details={"voting_type": state.voting_type.value, "self_vote": voter_id == target_id},
    )

    if not judge.pending_voters(state):
        state = resolve_votes(state)
    return state


def cast_confirmation_vote(state: GameState, voter_id: str, exile: bool) -> GameState:
    """Record one exile/keep ballot on the confirmation candidate."""
    _require_open_ballot(state, "cast_confirmation_vote", voter_id)
    judge.require(state.voting_type == VotingType.CONFIRMATION, "cast_confirmation_vote", state,
                  "No confirmation vote is in progress")

    target_id = state.tied_player_ids[0] if state.tied_player_ids else None
    state = replace(state, confirmation_votes={**state.confirmation_votes, voter_id: exile})
    state = state.log(
        EventKind.VOTE_CAST,
        f"{state.player_name(voter_id)} voted to {'exile' if exile else 'keep'} {state.player_name(target_id)}.",
        actor_id=voter_id,
        target_id=target_id,
        details={"voting_type": VotingType.CONFIRMATION.value, "exile": exile},
    )

    if not judge.pending_voters(state):
        state = resolve_votes(state)
    return state


def resolve_votes(state: GameState) -> GameState:
    """Tally the active sub-round and apply its outcome."""
    ballots = state.confirmation_votes if state.voting_type == VotingType.CONFIRMATION else state.votes
    outcome = resolve(ballots, state.voting_type, state.tied_player_ids, state.players)
    return apply_outcome(state, outcome)


def apply_outcome(state: GameState, outcome: VotingOutcome) -> GameState:
    """Apply a resolved outcome to the game state."""
    if outcome.kind == OutcomeKind.NO_BALLOTS:
        logger.warning("No valid votes found in round %d (%s vote); nothing to resolve",
                       state.round, outcome.voting_type.value)
        return state

    if outcome.kind == OutcomeKind.RUNOFF:
        return _start_runoff(state, outcome)

    if outcome.kind == OutcomeKind.CONFIRMATION:
        return _start_confirmation(state, outcome)

    if outcome.voting_type == VotingType.CONFIRMATION:
        return _apply_confirmation(state, outcome)

    name = state.player_name(outcome.target_id)
    return eliminate_by_vote(
        state,
        outcome.target_id,
        f"Voting complete. {name} received {outcome.max_count} votes and was eliminated.",
        details={"vote_counts": dict(outcome.vote_counts), "voting_type": outcome.voting_type.value},
    )


def _start_runoff(state: GameState, outcome: VotingOutcome) -> GameState:
    tied_names = ", ".join(state.player_name(pid) for pid in outcome.tied_player_ids)
    state = state.log(
        EventKind.ESCALATION,
        f"No clear majority. Starting runoff vote between tied players with "
        f"{outcome.max_count} votes each: {tied_names}",
        details={
            "to": VotingType.RUNOFF.value,
            "tied_player_ids": list(outcome.tied_player_ids),
            "vote_counts": dict(outcome.vote_counts),
        },
    )
    return replace(
        state,
        votes={},
        voting_type=VotingType.RUNOFF,
        tied_player_ids=outcome.tied_player_ids,
    )


def _start_confirmation(state: GameState, outcome: VotingOutcome) -> GameState:
    tied_names = ", ".join(state.player_name(pid) for pid in outcome.tied_player_ids)
    state = state.log(
        EventKind.ESCALATION,
        f"Still tied after runoff ({tied_names}). Starting confirmation vote "
        f"(exile or keep) on {state.player_name(outcome.target_id)}.",
        target_id=outcome.target_id,
        details={
            "to": VotingType.CONFIRMATION.value,
            "tied_player_ids": list(outcome.tied_player_ids),
            "vote_counts": dict(outcome.vote_counts),
        },
    )
    return replace(
        state,
        votes={},
        confirmation_votes={},
        voting_type=VotingType.CONFIRMATION,
        tied_player_ids=(outcome.target_id,),
    )


def _apply_confirmation(state: GameState, outcome: VotingOutcome) -> GameState:
    name = state.player_name(outcome.target_id)
    state = state.log(
        EventKind.CONFIRMATION_RESULT,
        f"Confirmation vote result: {outcome.exile_count} out of {outcome.total_votes} "
        f"({outcome.exile_percentage}%) voted to exile {name}.",
        target_id=outcome.target_id,
        details={
            "exile_count": outcome.exile_count,
            "keep_count": outcome.total_votes - outcome.exile_count,
            "total_votes": outcome.total_votes,
            "exiled": outcome.kind == OutcomeKind.ELIMINATION,
        },
    )

    if outcome.kind == OutcomeKind.ELIMINATION:
        return eliminate_by_vote(
            state,
            outcome.target_id,
            f"The town has decided to exile {name}.",
            details={"voting_type": VotingType.CONFIRMATION.value},
        )

    state = state.log(
        EventKind.NO_ELIMINATION,
        f"Not enough votes to exile {name}. The town continues with no elimination.",
        target_id=outcome.target_id,
    )
    return replace(
        state,
        show_voting_results=True,
        voting_type=VotingType.NORMAL,
        tied_player_ids=(),
    )


def eliminate_by_vote(state: GameState, target_id: str, action: str,
                      details: Optional[Dict[str, object]] = None) -> GameState:
    """
    Eliminate a voted-out player and check the win condition.

    Eliminating a player who is already dead is a no-op, so the elimination
    entry is never written twice.
    """
    target = state.get_player(target_id)
    if target is None or not target.is_alive:
        logger.warning("Ignoring elimination of %s: not an alive player", state.player_name(target_id))
        return state

    state = state.with_player_eliminated(target_id)
    state = state.log(EventKind.ELIMINATION, action, target_id=target_id, details=details)
    state = replace(state, votes={}, confirmation_votes={}, show_voting_results=True)
    logger.debug("Round %d: %s eliminated by vote", state.round, target.name)

    state = check_game_over(state)
    if state.is_over:
        return state
    return replace(state, voting_type=VotingType.NORMAL, tied_player_ids=())


def acknowledge_results(state: GameState) -> GameState:
    """Close the voting results and start the next night."""
    judge.require(state.phase == GamePhase.VOTING and state.show_voting_results,
                  "acknowledge_results", state, "There are no voting results to acknowledge")
    state = replace(
        state,
        phase=GamePhase.NIGHT,
        round=state.round + 1,
        votes={},
        confirmation_votes={},
        night_action={},
        voting_type=VotingType.NORMAL,
        tied_player_ids=(),
        show_voting_results=False,
    )
    return state.log(EventKind.PHASE_CHANGE, f"Night {state.round} falls.")
