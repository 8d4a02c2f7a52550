"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameSignal, GameStatus, Guess, RoundState, SubmissionTicket, SubmitResult, TileStatus
from .stats import Statistics

__all__ = [
    'GameSignal', 'GameStatus', 'Guess', 'RoundState', 'SubmissionTicket', 'SubmitResult',
    'TileStatus', 'Statistics'
]
