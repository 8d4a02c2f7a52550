"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import SIGNAL_DURATIONS_MS


class TileStatus(Enum):
    """Per-position feedback for a tile, also used for keyboard keys."""
    EMPTY = "EMPTY"
    FILLED = "FILLED"
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"

    @property
    def rank(self) -> int:
        """Aggregation priority: CORRECT > PRESENT > ABSENT > anything else."""
        return _TILE_RANKS.get(self, 0)


_TILE_RANKS = {
    TileStatus.CORRECT: 3,
    TileStatus.PRESENT: 2,
    TileStatus.ABSENT: 1,
}


class GameStatus(Enum):
    """Lifecycle of a single round. WON and LOST are terminal."""
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.PLAYING


class GameSignal(Enum):
    """Transient, caller-visible outcomes of a rejected submission."""
    INSUFFICIENT_LETTERS = "INSUFFICIENT_LETTERS"
    INVALID_WORD = "INVALID_WORD"
    VALIDATION_PENDING = "VALIDATION_PENDING"
    ROUND_OVER = "ROUND_OVER"
    STALE_RESPONSE = "STALE_RESPONSE"

    @property
    def duration_ms(self) -> int:
        """How long the UI should display this signal (0 if it is not shown)."""
        return SIGNAL_DURATIONS_MS.get(self.value, 0)


@dataclass(frozen=True)
class Guess:
    """A recorded guess and its evaluation. Immutable once created."""
    word: str
    evaluation: Tuple[TileStatus, ...]

    @property
    def is_winning(self) -> bool:
        return bool(self.evaluation) and all(status is TileStatus.CORRECT for status in self.evaluation)

    def to_dict(self) -> Dict:
        return {
            "word": self.word,
            "evaluation": [status.value for status in self.evaluation],
        }


@dataclass
class RoundState:
    """
    State of one puzzle attempt.

    `generation` identifies this particular round: a reset produces a new
    RoundState with a higher generation, which lets late oracle responses
    for an earlier round be recognized and discarded.
    """
    target_word: str
    guesses: List[Guess] = field(default_factory=list)
    current_input: str = ""
    status: GameStatus = GameStatus.PLAYING
    generation: int = 0

    @property
    def word_length(self) -> int:
        return len(self.target_word)

    def to_dict(self) -> Dict:
        return {
            "target_word": self.target_word,
            "current_input": self.current_input,
            "guesses": [guess.to_dict() for guess in self.guesses],
            "status": self.status.value,
        }


@dataclass(frozen=True)
class SubmissionTicket:
    """Identifies one in-flight word validation for a round."""
    generation: int
    sequence: int
    word: str


@dataclass
class SubmitResult:
    """Outcome of a submission attempt. Submissions never raise."""
    accepted: bool
    status: GameStatus
    signal: Optional[GameSignal] = None
    guess: Optional[Guess] = None

    def to_dict(self) -> Dict:
        return {
            "accepted": self.accepted,
            "status": self.status.value,
            "signal": self.signal.value if self.signal else None,
            "signal_duration_ms": self.signal.duration_ms if self.signal else 0,
            "guess": self.guess.to_dict() if self.guess else None,
        }
