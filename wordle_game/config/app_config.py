"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv('wordle_game/config/config.env')


class Config:
    """Base configuration class with all settings."""
    
    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    
    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))
    
    # Storage Settings
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'file')  # "memory", "file" or "mongo"
    STORAGE_DIR = os.getenv('STORAGE_DIR', 'data')
    MONGO_URI = os.getenv('MONGO_URI')
    
    # Word Oracle Settings
    DICTIONARY_API_URL = os.getenv('DICTIONARY_API_URL', 'https://api.dictionaryapi.dev/api/v2/entries/en')
    DICTIONARY_API_ENABLED = os.getenv('DICTIONARY_API_ENABLED', 'True').lower() == 'true'
    DICTIONARY_TIMEOUT_SECONDS = float(os.getenv('DICTIONARY_TIMEOUT_SECONDS', 3))
    
    # Game Settings
    DEFAULT_WORD_LENGTH = int(os.getenv('DEFAULT_WORD_LENGTH', 5))
    MAX_SESSIONS = int(os.getenv('MAX_SESSIONS', 1000))
    
    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    STORAGE_BACKEND = 'memory'
    DICTIONARY_API_ENABLED = False


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
