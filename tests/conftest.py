import os
import tempfile

# Keep structured game logs out of the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='wordle-game-logs-'))

import pytest

from wordle_game import create_app
from wordle_game.config import TestingConfig
from wordle_game.services.session_manager import SessionManager
from wordle_game.services.session_service import initialize_session_service
from wordle_game.services.storage import MemoryStore
from wordle_game.services.word_oracle import WordOracle
from wordle_game.services.word_source import WordSource

# One answer per length keeps daily and random targets predictable
ANSWERS = {
    5: ["WORLD"],
    6: ["PLANET"],
    7: ["BALANCE"],
}

GUESSES = {
    5: ["WORDS", "CRANE", "SLATE", "TRAIN", "GHOST", "PLUMB", "WOODY", "LLAMA"],
    6: ["GARDEN", "SILVER"],
    7: ["HISTORY", "KINGDOM"],
}


@pytest.fixture
def word_source():
    return WordSource(answers=ANSWERS, valid_guesses=GUESSES)


@pytest.fixture
def oracle(word_source):
    return WordOracle(word_source, use_remote=False)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(word_source, oracle, store):
    return SessionManager(word_source, oracle, store=store)


@pytest.fixture
def type_word():
    def _type(session, word):
        for letter in word:
            session.add_letter(letter)
    return _type


@pytest.fixture
def client(word_source, oracle, store):
    initialize_session_service(word_source, oracle, store)
    app = create_app(TestingConfig)
    return app.test_client()
