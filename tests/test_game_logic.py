from collections import Counter
from itertools import product

import pytest

from wordle_game.models.game import Guess, TileStatus
from wordle_game.services.game_logic import evaluate_guess, get_keyboard_status, is_winning_guess

C, P, A = TileStatus.CORRECT, TileStatus.PRESENT, TileStatus.ABSENT


def test_exact_guess_is_all_correct():
    assert evaluate_guess("WORLD", "WORLD") == [C] * 5
    assert evaluate_guess("BALANCE", "BALANCE") == [C] * 7


def test_displaced_letter_is_present():
    assert evaluate_guess("WORDS", "WORLD") == [C, C, C, P, A]


def test_lowercase_guess_is_normalized():
    assert evaluate_guess("words", "WORLD") == [C, C, C, P, A]


def test_duplicate_guess_letters_not_over_credited():
    # Only one L in PLANE: the exact match wins, the other L is absent
    assert evaluate_guess("LLAMA", "PLANE") == [A, C, C, A, A]
    # One O in WORLD, credited to the exact position
    assert evaluate_guess("WOODY", "WORLD") == [C, C, A, P, A]


def test_exact_match_consumes_before_displaced():
    # Last E is exact, so only one displaced E remains to credit
    assert evaluate_guess("EERIE", "THREE") == [P, A, C, A, C]


def test_mismatched_lengths_rejected():
    with pytest.raises(ValueError):
        evaluate_guess("WORD", "WORLD")


def test_credit_never_exceeds_target_letter_count():
    alphabet = "AB"
    words = ["".join(letters) for letters in product(alphabet, repeat=4)]
    for target in words:
        target_counts = Counter(target)
        for guess in words:
            evaluation = evaluate_guess(guess, target)
            credited = Counter(
                letter for letter, status in zip(guess, evaluation) if status in (C, P)
            )
            for letter, count in credited.items():
                assert count <= target_counts[letter], (guess, target)


def test_is_winning_guess():
    assert is_winning_guess([C] * 5)
    assert not is_winning_guess([C, P, C, C, C])
    assert not is_winning_guess([])


def _guess(word, target):
    return Guess(word=word, evaluation=tuple(evaluate_guess(word, target)))


def test_keyboard_status_takes_best_status():
    guesses = [_guess("WORDS", "WORLD"), _guess("CRANE", "WORLD")]
    status = get_keyboard_status(guesses)

    assert status["W"] is C
    assert status["R"] is C  # present in CRANE, correct in WORDS
    assert status["D"] is P
    assert status["S"] is A
    assert status["C"] is A
    assert "Z" not in status


def test_keyboard_status_never_downgrades_regardless_of_order():
    guesses = [_guess("SLATE", "PLANE"), _guess("LLAMA", "PLANE"), _guess("PLANE", "PLANE")]

    forward = get_keyboard_status(guesses)
    backward = get_keyboard_status(list(reversed(guesses)))

    assert forward == backward
    assert forward["L"] is C
    assert forward["A"] is C


def test_keyboard_status_priority_enforced_for_conflicting_input():
    correct = Guess(word="A", evaluation=(C,))
    absent = Guess(word="A", evaluation=(A,))
    present = Guess(word="A", evaluation=(P,))

    assert get_keyboard_status([correct, absent, present])["A"] is C
    assert get_keyboard_status([absent, present])["A"] is P
    assert get_keyboard_status([present, absent])["A"] is P
