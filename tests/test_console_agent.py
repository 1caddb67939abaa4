"""
Tests for the console operator with scripted input.
"""

from dataclasses import replace

import pytest

from mafia_engine.agents import ConsoleAgent
from mafia_engine.core import (
    AcknowledgeInvestigation, CastConfirmationVote, CastVote, EndDiscussion, GamePhase,
    MafiaKill, SheriffInvestigate, StartGame, VotingType, initial_state, transition,
)


class Script:
    """Feeds canned answers to the agent and records what it printed."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []
        self.printed = []

    def input(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0)

    def output(self, message):
        self.printed.append(message)


@pytest.fixture
def script():
    def _make(*answers):
        s = Script(*answers)
        return s, ConsoleAgent(input_func=s.input, output_func=s.output)
    return _make


def test_setup_reprompts_until_valid(script, names):
    s, agent = script("Alex, Sam", ", ".join(["Alex"] * 10), ", ".join(names))
    action = agent.choose_action(initial_state())

    assert action == StartGame(tuple(names))
    assert len(s.prompts) == 3
    assert len(s.printed) == 2


def test_mafia_pick_by_number(script, table):
    # Kill targets in seat order: p1, p5..p10
    s, agent = script("0", "abc", "2")
    assert agent.choose_action(table) == MafiaKill("p5")
    assert "Choose a number between 1 and 7" in s.printed


def test_sheriff_turn_and_result(script, table):
    state = transition(table, MafiaKill("p5"))
    s, agent = script("1")
    assert agent.choose_action(state) == SheriffInvestigate("p2")

    state = transition(state, SheriffInvestigate("p2"))
    s, agent = script("")
    assert agent.choose_action(state) == AcknowledgeInvestigation()
    assert "Investigation result: Sam is a Mafia member." in s.printed


def test_day_shows_night_victims(script, table):
    state = transition(table, MafiaKill("p1"))
    s, agent = script("")
    assert agent.choose_action(state) == EndDiscussion()
    assert "Alex was eliminated during the night." in s.printed


def test_self_vote_notice(script, voting_table):
    s, agent = script("1")
    assert agent.choose_action(voting_table) == CastVote("p1", "p1")
    assert any("voting for yourself" in line for line in s.printed)


def test_confirmation_prompt(script, voting_table):
    state = replace(voting_table, voting_type=VotingType.CONFIRMATION, tied_player_ids=("p5",))
    s, agent = script("maybe", "Y")
    assert agent.choose_action(state) == CastConfirmationVote("p1", True)
    assert "Riley" in s.prompts[0]


def test_nothing_to_do_when_over(script, voting_table):
    _, agent = script()
    assert agent.choose_action(replace(voting_table, phase=GamePhase.RESULTS)) is None
