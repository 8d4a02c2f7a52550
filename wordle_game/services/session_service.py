"""
Session Service

Keeps one SessionManager per player and wires them to shared collaborators.
"""

import logging
import threading
from collections import OrderedDict
from typing import Optional

from ..config.game_settings import DEFAULT_WORD_LENGTH, STORAGE_KEY
from .session_manager import SessionManager
from .storage import KeyValueStore
from .word_oracle import WordOracle
from .word_source import WordSource

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1000


class SessionService:
    """
    Player session registry.

    Sessions are loaded from the store on first access and share one word
    source, one oracle (and therefore one validation cache) and one store.
    Each player's snapshot lives under `wordle-game-storage:<player_id>`.

    At most `max_sessions` sessions stay in memory; the least recently used
    one is dropped first. Every session saves after each change, so a
    dropped player is restored from the store on their next request.
    """

    def __init__(self, word_source: WordSource, oracle: WordOracle, store: KeyValueStore,
                 default_length: int = DEFAULT_WORD_LENGTH,
                 max_sessions: int = DEFAULT_MAX_SESSIONS):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self.word_source = word_source
        self.oracle = oracle
        self.store = store
        self.default_length = default_length
        self.max_sessions = max_sessions
        self.sessions: "OrderedDict[str, SessionManager]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def storage_key_for(player_id: str) -> str:
        return f"{STORAGE_KEY}:{player_id}"

    def get_session(self, player_id: str) -> SessionManager:
        """Returns the player's session, restoring or creating it on first access."""
        with self._lock:
            session = self.sessions.get(player_id)
            if session is not None:
                self.sessions.move_to_end(player_id)
                return session

            session = SessionManager.load(
                self.word_source, self.oracle, self.store,
                storage_key=self.storage_key_for(player_id),
                active_length=self.default_length,
            )
            self.sessions[player_id] = session

            while len(self.sessions) > self.max_sessions:
                evicted_id, _ = self.sessions.popitem(last=False)
                logger.info("Evicted idle session for player %s", evicted_id)
            return session

    def drop_session(self, player_id: str) -> bool:
        """
        Forgets an in-memory session. The persisted snapshot is kept.

        Returns:
            bool: True if a session was dropped, False if none was loaded
        """
        with self._lock:
            return self.sessions.pop(player_id, None) is not None


# Global service instance
_session_service = None


def get_session_service() -> Optional[SessionService]:
    """Get the global session service instance."""
    return _session_service


def initialize_session_service(word_source: WordSource, oracle: WordOracle, store: KeyValueStore,
                               default_length: int = DEFAULT_WORD_LENGTH,
                               max_sessions: int = DEFAULT_MAX_SESSIONS) -> SessionService:
    """Initialize the global session service instance."""
    global _session_service
    _session_service = SessionService(word_source, oracle, store,
                                      default_length=default_length, max_sessions=max_sessions)
    return _session_service
