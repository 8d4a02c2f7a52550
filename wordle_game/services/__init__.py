"""
Services Package

Contains all business logic and service classes.
"""

from .game_logic import evaluate_guess, get_keyboard_status, is_winning_guess
from .game_round import GameRound
from .session_manager import SessionManager
from .session_service import SessionService, get_session_service, initialize_session_service
from .snapshot import SnapshotError
from .stats_service import StatisticsTracker
from .storage import JsonFileStore, KeyValueStore, MemoryStore, MongoStore, create_store
from .word_oracle import WordOracle
from .word_source import WordSource

__all__ = [
    'evaluate_guess', 'get_keyboard_status', 'is_winning_guess',
    'GameRound', 'SessionManager', 'SnapshotError', 'StatisticsTracker',
    'SessionService', 'get_session_service', 'initialize_session_service',
    'KeyValueStore', 'MemoryStore', 'JsonFileStore', 'MongoStore', 'create_store',
    'WordOracle', 'WordSource'
]
