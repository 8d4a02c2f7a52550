"""
Word Game Server - Main Entry Point

Initializes the word source, oracle, store and session service, then starts
the Flask application that serves the browser client.
"""

from wordle_game import create_app
from wordle_game.config import Config
from wordle_game.config.game_settings import SUPPORTED_WORD_LENGTHS, validate_word_list_integrity
from wordle_game.services.session_service import initialize_session_service
from wordle_game.services.storage import create_store
from wordle_game.services.word_oracle import WordOracle
from wordle_game.services.word_source import WordSource
from wordle_game.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        for length in SUPPORTED_WORD_LENGTHS:
            validate_word_list_integrity(length)
        print("✓ Word lists validated")

        store = create_store(Config)
        print(f"✓ Storage initialized ({Config.STORAGE_BACKEND})")

        word_source = WordSource()
        oracle = WordOracle(word_source)
        if Config.DEFAULT_WORD_LENGTH not in SUPPORTED_WORD_LENGTHS:
            raise ValueError(f"DEFAULT_WORD_LENGTH must be one of {SUPPORTED_WORD_LENGTHS}")
        initialize_session_service(word_source, oracle, store,
                                   default_length=Config.DEFAULT_WORD_LENGTH,
                                   max_sessions=Config.MAX_SESSIONS)
        print("✓ Session service initialized successfully")

        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Word Game Server Starting")

        print(f"\nStarting Word Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Dictionary lookups: {'enabled' if Config.DICTIONARY_API_ENABLED else 'offline only'}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Word Game Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
