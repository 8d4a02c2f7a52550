"""
Game Configuration Constants Module

This module defines all game configuration constants and the bundled word
lists. All game parameters are centralized here to enable easy modification.
"""

import datetime
import json
import os
from typing import Dict, List, Final, Tuple

# Core Game Configuration Constants
MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guess attempts allowed per round.
Type: Final[int] - Immutable to prevent accidental modification
"""

SUPPORTED_WORD_LENGTHS: Final[Tuple[int, ...]] = (5, 6, 7)
DEFAULT_WORD_LENGTH: Final[int] = 5

# Day zero for the daily word rotation
DAILY_EPOCH: Final[datetime.date] = datetime.date(2024, 1, 1)

# Persistence
STORAGE_KEY: Final[str] = "wordle-game-storage"
SNAPSHOT_VERSION: Final[int] = 2

# How long the UI should show a transient signal, in milliseconds
SIGNAL_DURATIONS_MS: Final[Dict[str, int]] = {
    "INSUFFICIENT_LETTERS": 500,
    "INVALID_WORD": 400,
}

KEYBOARD_ROWS: Final[Tuple[Tuple[str, ...], ...]] = (
    ("Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P"),
    ("A", "S", "D", "F", "G", "H", "J", "K", "L"),
    ("BACKSPACE", "Z", "X", "C", "V", "B", "N", "M", "ENTER"),
)


def _normalize_words(words: List[str], length: int, source: str) -> List[str]:
    """Uppercase a raw list and check every entry has the expected shape."""
    if not isinstance(words, list):
        raise ValueError(f"{source} for length {length} must be an array of words")

    uppercase_words = [word.upper() for word in words]
    for word in uppercase_words:
        if len(word) != length:
            raise ValueError(f"Word '{word}' is not {length} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")
    return uppercase_words


# Load word lists from JSON file
def _load_word_lists() -> Tuple[Dict[int, List[str]], Dict[int, List[str]]]:
    """
    Load answer and valid-guess lists from wordles.json.

    Returns:
        Tuple of (answers, valid_guesses), each keyed by word length.
        Valid guesses always include every answer word.

    Raises:
        FileNotFoundError: If wordles.json file is not found
        ValueError: If JSON is malformed, a list is empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'wordles.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in wordles.json: {e}")

    answers: Dict[int, List[str]] = {}
    valid_guesses: Dict[int, List[str]] = {}

    for length in SUPPORTED_WORD_LENGTHS:
        key = str(length)
        answer_words = _normalize_words(data.get("answers", {}).get(key, []), length, "answers")
        extra_words = _normalize_words(data.get("guesses", {}).get(key, []), length, "guesses")

        if not answer_words:
            raise ValueError(f"Answer list for length {length} cannot be empty")

        answers[length] = answer_words
        valid_guesses[length] = sorted(set(answer_words) | set(extra_words))

    return answers, valid_guesses


# Curated word database loaded from JSON file
ANSWER_WORDS, VALID_GUESSES = _load_word_lists()


def validate_word_list_integrity(length: int = DEFAULT_WORD_LENGTH) -> bool:
    """
    Validates the integrity and consistency of the word database for one length.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly `length` characters
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate answers
    4. Format validation: Consistent uppercase formatting
    5. Subset validation: Every answer is also a valid guess

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    answer_list = ANSWER_WORDS.get(length)
    if not answer_list:
        raise ValueError(f"Word list for length {length} cannot be empty")

    # Validate each word meets game requirements
    for index, word in enumerate(answer_list):
        if len(word) != length:
            raise ValueError(f"Word at index {index} '{word}' is not {length} characters long")

        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ValueError(f"Word at index {index} '{word}' is not in uppercase format")

    # Validate uniqueness (no duplicates)
    if len(answer_list) != len(set(answer_list)):
        duplicates = sorted({word for word in answer_list if answer_list.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    missing = set(answer_list) - set(VALID_GUESSES[length])
    if missing:
        raise ValueError(f"Answers missing from valid guesses: {sorted(missing)}")

    return True


def get_word_statistics(length: int = DEFAULT_WORD_LENGTH) -> dict:
    """
    Analyzes the answer list for one length and returns statistical information.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of answers in database
            - total_guesses: Number of accepted guesses
            - avg_vowel_count: Average vowels per word
            - letter_frequency: Distribution of letters across all words
            - most_common_letters: Top five letters
    """
    answer_list = ANSWER_WORDS.get(length)
    if not answer_list:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in answer_list)

    # Calculate letter frequency distribution
    letter_frequency = {}
    for word in answer_list:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "word_length": length,
        "total_words": len(answer_list),
        "total_guesses": len(VALID_GUESSES[length]),
        "avg_vowel_count": round(total_vowels / len(answer_list), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


# Module initialization: Validate configuration when run directly
if __name__ == "__main__":

    try:
        for word_length in SUPPORTED_WORD_LENGTHS:
            validate_word_list_integrity(word_length)
            stats = get_word_statistics(word_length)
            print(f" {word_length}-letter statistics: {stats}")

        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
