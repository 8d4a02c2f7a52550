"""
Game Round

State machine for a single puzzle attempt: PLAYING -> WON | LOST.
"""

import logging
from typing import Dict, Optional, Union

from ..config.game_settings import MAX_ATTEMPTS
from ..models.game import GameSignal, GameStatus, Guess, RoundState, SubmissionTicket, SubmitResult, TileStatus
from .game_logic import evaluate_guess, get_keyboard_status, is_letter_word, is_winning_guess

logger = logging.getLogger(__name__)


class GameRound:
    """
    Owns one RoundState and the rules for mutating it.

    Submitting is split in two phases so the word lookup can happen outside
    the round: `begin_submit` hands out a ticket and marks the round as
    validating, `complete_submit` applies the oracle's answer. Only the
    round's outstanding ticket is honoured; anything else is stale.
    """

    def __init__(self, target_word: str, max_attempts: int = MAX_ATTEMPTS,
                 state: Optional[RoundState] = None):
        self.max_attempts = max_attempts
        self.state = state if state is not None else RoundState(target_word=target_word.upper())
        self._pending: Optional[SubmissionTicket] = None
        self._sequence = 0

    @property
    def word_length(self) -> int:
        return self.state.word_length

    @property
    def validating(self) -> bool:
        return self._pending is not None

    @property
    def attempts_used(self) -> int:
        return len(self.state.guesses)

    @property
    def attempts_remaining(self) -> int:
        return self.max_attempts - len(self.state.guesses)

    def _accepts_input(self) -> bool:
        return self.state.status is GameStatus.PLAYING and not self.validating

    def append_letter(self, letter: str) -> bool:
        """Appends one letter to the input buffer. Returns False when ignored."""
        if not self._accepts_input():
            return False
        if not isinstance(letter, str):
            return False
        # Uppercasing can expand a character ("\u00df" becomes "SS"), so check the result
        upper = letter.upper()
        if len(upper) != 1 or not is_letter_word(upper):
            return False
        if len(self.state.current_input) >= self.word_length:
            return False

        self.state.current_input += upper
        return True

    def delete_letter(self) -> bool:
        """Removes the last letter of the input buffer. Returns False when ignored."""
        if not self._accepts_input() or not self.state.current_input:
            return False

        self.state.current_input = self.state.current_input[:-1]
        return True

    def begin_submit(self) -> Union[SubmissionTicket, SubmitResult]:
        """
        Starts submitting the current input.

        Returns:
            A SubmissionTicket to resolve with `complete_submit`, or a
            SubmitResult when the submission is rejected up front.
        """
        if self.state.status is not GameStatus.PLAYING:
            return self._rejected(GameSignal.ROUND_OVER)

        if self.validating:
            return self._rejected(GameSignal.VALIDATION_PENDING)

        if len(self.state.current_input) != self.word_length:
            return self._rejected(GameSignal.INSUFFICIENT_LETTERS)

        self._sequence += 1
        self._pending = SubmissionTicket(
            generation=self.state.generation,
            sequence=self._sequence,
            word=self.state.current_input,
        )
        return self._pending

    def complete_submit(self, ticket: SubmissionTicket, is_valid: bool) -> SubmitResult:
        """Applies the word lookup result for `ticket`."""
        if ticket != self._pending:
            logger.info("Discarding stale validation for %s (generation %s)", ticket.word, ticket.generation)
            return self._rejected(GameSignal.STALE_RESPONSE)

        self._pending = None

        if not is_valid:
            self.state.current_input = ""
            return self._rejected(GameSignal.INVALID_WORD)

        evaluation = evaluate_guess(ticket.word, self.state.target_word)
        guess = Guess(word=ticket.word, evaluation=tuple(evaluation))

        self.state.guesses.append(guess)
        self.state.current_input = ""

        # Check win/loss conditions
        if is_winning_guess(evaluation):
            self.state.status = GameStatus.WON
        elif len(self.state.guesses) >= self.max_attempts:
            self.state.status = GameStatus.LOST

        return SubmitResult(accepted=True, status=self.state.status, guess=guess)

    def cancel_pending(self) -> None:
        """Forgets the outstanding validation so its late answer is discarded."""
        self._pending = None

    def reset(self, new_target_word: str) -> RoundState:
        """Replaces the round with a fresh one for `new_target_word`."""
        self._pending = None
        self.state = RoundState(
            target_word=new_target_word.upper(),
            generation=self.state.generation + 1,
        )
        return self.state

    def keyboard_status(self) -> Dict[str, TileStatus]:
        return get_keyboard_status(self.state.guesses)

    def _rejected(self, signal: GameSignal) -> SubmitResult:
        return SubmitResult(accepted=False, status=self.state.status, signal=signal)
