"""
Phase handlers for night, day, and voting phases.
"""

from .night_phase import NightSubTurn, InvestigationResult, night_sub_turn, investigation_result
from .day_phase import night_summary, night_victims
from .voting import OutcomeKind, VotingOutcome, resolve, current_voter, eligible_targets

__all__ = [
    'NightSubTurn',
    'InvestigationResult',
    'night_sub_turn',
    'investigation_result',
    'night_summary',
    'night_victims',
    'OutcomeKind',
    'VotingOutcome',
    'resolve',
    'current_voter',
    'eligible_targets',
]
