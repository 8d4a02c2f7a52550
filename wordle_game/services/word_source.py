"""
Word Source

Chooses target words (daily or random) and answers offline membership checks.
"""

import datetime
import random
from typing import Dict, List, Optional, Sequence

from ..config.game_settings import ANSWER_WORDS, DAILY_EPOCH, VALID_GUESSES


class WordSource:
    """
    Target word selection backed by per-length answer and guess lists.

    The answer list for each length must be a subset of its valid-guess list.
    """

    def __init__(self,
                 answers: Optional[Dict[int, Sequence[str]]] = None,
                 valid_guesses: Optional[Dict[int, Sequence[str]]] = None,
                 epoch: datetime.date = DAILY_EPOCH,
                 rng: Optional[random.Random] = None):
        answers = answers if answers is not None else ANSWER_WORDS
        valid_guesses = valid_guesses if valid_guesses is not None else VALID_GUESSES

        self.answers: Dict[int, List[str]] = {
            length: [word.upper() for word in words] for length, words in answers.items()
        }
        self.valid_guesses: Dict[int, frozenset] = {
            length: frozenset(word.upper() for word in words) for length, words in valid_guesses.items()
        }
        for length, words in self.answers.items():
            self.valid_guesses[length] = self.valid_guesses.get(length, frozenset()) | frozenset(words)

        self.epoch = epoch
        self.rng = rng or random.Random()

    @property
    def lengths(self) -> List[int]:
        return sorted(self.answers)

    def _answers_for(self, length: int) -> List[str]:
        words = self.answers.get(length)
        if not words:
            raise ValueError(f"No answer words for length {length}")
        return words

    def get_word_for_today(self, length: int, today: Optional[datetime.date] = None) -> str:
        """Same word for every player on a given calendar day."""
        words = self._answers_for(length)
        today = today or datetime.date.today()
        day_index = (today - self.epoch).days
        return words[day_index % len(words)]

    def get_random_word(self, length: int) -> str:
        """Uniform pick, used for replay."""
        return self.rng.choice(self._answers_for(length))

    def is_known_word(self, word: str) -> bool:
        """Offline check against the valid-guess list for the word's length."""
        normalized = word.strip().upper()
        return normalized in self.valid_guesses.get(len(normalized), frozenset())
