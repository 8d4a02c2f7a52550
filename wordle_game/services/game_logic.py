"""
Game Logic

Pure functions for scoring guesses and folding them into keyboard statuses.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from ..models.game import Guess, TileStatus


def is_letter_word(text: str) -> bool:
    """True for a non-empty string made only of the letters A-Z (either case)."""
    return isinstance(text, str) and bool(text) and text.isascii() and text.isalpha()


def evaluate_guess(guess: str, target: str) -> List[TileStatus]:
    """
    Implements the authentic Wordle letter evaluation algorithm.

    Letters are only credited as many times as they occur in the target:
    exact matches are consumed first, then displaced matches take the
    leftmost unconsumed occurrence.

    Args:
        guess: The guessed word
        target: The target word, same length as the guess

    Returns:
        List[TileStatus]: One status per letter position

    Raises:
        ValueError: If guess and target differ in length
    """
    if len(guess) != len(target):
        raise ValueError(f"Guess '{guess}' and target have different lengths")

    guess = guess.upper()
    result = [TileStatus.ABSENT] * len(guess)

    # Working copy of the target to track letter consumption
    remaining: List[Optional[str]] = list(target.upper())

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == remaining[i]:
            result[i] = TileStatus.CORRECT
            remaining[i] = None

    # Second pass: displaced matches
    for i, letter in enumerate(guess):
        if result[i] is not TileStatus.ABSENT:
            continue
        if letter in remaining:
            result[i] = TileStatus.PRESENT
            remaining[remaining.index(letter)] = None

    return result


def is_winning_guess(evaluation: Sequence[TileStatus]) -> bool:
    """A guess wins when every position is CORRECT."""
    return bool(evaluation) and all(status is TileStatus.CORRECT for status in evaluation)


def get_keyboard_status(guesses: Iterable[Guess]) -> Dict[str, TileStatus]:
    """
    Folds every evaluated guess into a single best status per letter.

    Status can only progress in priority order CORRECT > PRESENT > ABSENT,
    so the result does not depend on the order guesses are fed in.
    Letters never guessed are absent from the mapping.
    """
    letter_status: Dict[str, TileStatus] = {}

    for guess in guesses:
        for letter, new_status in zip(guess.word, guess.evaluation):
            current_status = letter_status.get(letter)
            if current_status is None or new_status.rank > current_status.rank:
                letter_status[letter] = new_status

    return letter_status
