"""
Controllers Package

Contains the HTTP endpoints the browser client talks to.
"""

from .game_controller import game_bp

__all__ = ['game_bp']
