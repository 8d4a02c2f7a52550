"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and word lists (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    MAX_ATTEMPTS, SUPPORTED_WORD_LENGTHS, DEFAULT_WORD_LENGTH, STORAGE_KEY,
    ANSWER_WORDS, VALID_GUESSES, validate_word_list_integrity, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'MAX_ATTEMPTS', 'SUPPORTED_WORD_LENGTHS', 'DEFAULT_WORD_LENGTH', 'STORAGE_KEY',
    'ANSWER_WORDS', 'VALID_GUESSES', 'validate_word_list_integrity', 'get_word_statistics'
]
