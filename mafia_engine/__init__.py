"""
Rules engine for the ten-player Mafia party game.
"""

__version__ = "0.1.0"
