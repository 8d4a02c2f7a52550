"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_session
from .helpers import get_player_id, get_player_identity
from .game_logger import game_logger

__all__ = ['require_session', 'get_player_id', 'get_player_identity', 'game_logger']
