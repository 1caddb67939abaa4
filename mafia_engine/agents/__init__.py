"""
Operator agents that choose the next action for a game.
"""

from .base_agent import BaseAgent
from .dummy_agent import DummyAgent
from .console_agent import ConsoleAgent

__all__ = ['BaseAgent', 'DummyAgent', 'ConsoleAgent']
