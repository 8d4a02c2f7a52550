"""
Word Oracle

Decides whether a submitted string is an acceptable dictionary word.
A remote dictionary is consulted first; on timeout or any network failure
the offline word list answers instead. Results are cached per word.
"""

import asyncio
import logging
import threading
from typing import Dict, Optional

import requests

from ..config import Config
from .game_logic import is_letter_word
from .word_source import WordSource

logger = logging.getLogger(__name__)


class DictionaryUnavailable(Exception):
    """Raised when the remote dictionary gives no usable answer."""


class WordOracle:
    """
    Dictionary lookup with an offline fallback.

    Lookups never raise: every failure mode resolves to a boolean using the
    fallback list. No retry is attempted.
    """

    def __init__(self,
                 word_source: WordSource,
                 api_url: str = Config.DICTIONARY_API_URL,
                 timeout: float = Config.DICTIONARY_TIMEOUT_SECONDS,
                 use_remote: bool = Config.DICTIONARY_API_ENABLED,
                 session: Optional[requests.Session] = None):
        self.word_source = word_source
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.use_remote = use_remote
        self.session = session or requests.Session()
        self._cache: Dict[str, bool] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def is_valid_word(self, word: str) -> bool:
        """
        Checks a word, consulting the cache, then the remote dictionary,
        then the offline list.
        """
        normalized = (word or "").strip().upper()
        if not is_letter_word(normalized):
            return False

        with self._lock:
            if normalized in self._cache:
                self.hits += 1
                return self._cache[normalized]
            self.misses += 1

        if self.use_remote:
            try:
                result = self._lookup_remote(normalized)
            except DictionaryUnavailable as e:
                logger.warning("Dictionary unavailable for %s, using offline list: %s", normalized, e)
                result = self.word_source.is_known_word(normalized)
        else:
            result = self.word_source.is_known_word(normalized)

        with self._lock:
            self._cache[normalized] = result
        return result

    async def is_valid_word_async(self, word: str) -> bool:
        """Awaitable variant; the blocking lookup runs in a worker thread."""
        return await asyncio.to_thread(self.is_valid_word, word)

    def _lookup_remote(self, word: str) -> bool:
        url = f"{self.api_url}/{word.lower()}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise DictionaryUnavailable(str(e)) from e

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise DictionaryUnavailable(f"Unexpected status {response.status_code} from {url}")

    def cache_info(self) -> Dict[str, int]:
        with self._lock:
            return {'size': len(self._cache), 'hits': self.hits, 'misses': self.misses}

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
            self.hits = 0
            self.misses = 0
