"""
Snapshot Serialization

Converts session state to and from plain JSON-compatible structures.
Parsing is strict: any inconsistency raises SnapshotError so the caller can
discard that fragment and substitute a default.
"""

from typing import Any, Dict, List, Mapping

from ..config.game_settings import MAX_ATTEMPTS, SNAPSHOT_VERSION
from ..models.game import GameStatus, Guess, RoundState, TileStatus
from ..models.stats import Statistics
from .game_logic import evaluate_guess, is_letter_word, is_winning_guess


class SnapshotError(ValueError):
    """A persisted fragment is missing, malformed or inconsistent."""


def _first(data: Mapping, *keys: str, default: Any = None) -> Any:
    """Returns the first present key; accepts legacy camelCase spellings."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _require_word(value: Any, length: int, what: str) -> str:
    if not isinstance(value, str) or len(value) != length or not is_letter_word(value):
        raise SnapshotError(f"{what} must be a {length}-letter word, got {value!r}")
    return value.upper()


def _require_count(data: Mapping, *keys: str) -> int:
    value = _first(data, *keys, default=0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SnapshotError(f"{keys[0]} must be a non-negative integer, got {value!r}")
    return value


def serialize_snapshot(rounds: Mapping[int, RoundState], active_length: int, stats: Statistics) -> Dict:
    return {
        "version": SNAPSHOT_VERSION,
        "word_length": active_length,
        "stats": stats.to_dict(),
        "game_states": {str(length): state.to_dict() for length, state in sorted(rounds.items())},
    }


def parse_statistics(data: Any, max_attempts: int = MAX_ATTEMPTS) -> Statistics:
    if not isinstance(data, Mapping):
        raise SnapshotError("stats must be an object")

    distribution = data.get("distribution")
    if not isinstance(distribution, list) or len(distribution) != max_attempts:
        raise SnapshotError(f"distribution must be a list of {max_attempts} counts")
    if any(isinstance(count, bool) or not isinstance(count, int) or count < 0 for count in distribution):
        raise SnapshotError("distribution counts must be non-negative integers")

    stats = Statistics(
        played=_require_count(data, "played"),
        won=_require_count(data, "won"),
        current_streak=_require_count(data, "current_streak", "currentStreak"),
        max_streak=_require_count(data, "max_streak", "maxStreak"),
        distribution=list(distribution),
    )

    if stats.won > stats.played:
        raise SnapshotError("won exceeds played")
    if stats.current_streak > stats.max_streak:
        raise SnapshotError("current streak exceeds max streak")
    if sum(stats.distribution) != stats.won:
        raise SnapshotError("distribution does not sum to won")

    return stats


def _parse_guess(data: Any, target: str) -> Guess:
    if not isinstance(data, Mapping):
        raise SnapshotError("guess must be an object")

    word = _require_word(data.get("word"), len(target), "guess word")
    expected = evaluate_guess(word, target)

    raw_evaluation = data.get("evaluation")
    if raw_evaluation is not None:
        try:
            evaluation = [TileStatus(str(value).upper()) for value in raw_evaluation]
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"unknown tile status in evaluation of {word}") from e
        if evaluation != expected:
            raise SnapshotError(f"evaluation of {word} does not match its target")

    return Guess(word=word, evaluation=tuple(expected))


def parse_round(data: Any, length: int, max_attempts: int = MAX_ATTEMPTS) -> RoundState:
    """
    Rebuilds a RoundState and checks it is reachable by normal play.

    The status is derived from the guesses; a persisted status that
    disagrees makes the round inconsistent.
    """
    if not isinstance(data, Mapping):
        raise SnapshotError("round must be an object")

    target = _require_word(_first(data, "target_word", "targetWord"), length, "target word")

    raw_guesses = data.get("guesses", [])
    if not isinstance(raw_guesses, list):
        raise SnapshotError("guesses must be a list")
    if len(raw_guesses) > max_attempts:
        raise SnapshotError(f"more than {max_attempts} guesses recorded")

    guesses: List[Guess] = []
    for raw_guess in raw_guesses:
        if guesses and is_winning_guess(guesses[-1].evaluation):
            raise SnapshotError("guess recorded after a winning guess")
        guesses.append(_parse_guess(raw_guess, target))

    if guesses and guesses[-1].is_winning:
        status = GameStatus.WON
    elif len(guesses) >= max_attempts:
        status = GameStatus.LOST
    else:
        status = GameStatus.PLAYING

    raw_status = _first(data, "status", "game_status", "gameStatus")
    if raw_status is not None:
        try:
            persisted_status = GameStatus(str(raw_status).upper())
        except ValueError as e:
            raise SnapshotError(f"unknown round status {raw_status!r}") from e
        if persisted_status is not status:
            raise SnapshotError(f"status {persisted_status.value} is inconsistent with the guesses")

    current_input = _first(data, "current_input", "current_guess", "currentGuess", default="")
    if (not isinstance(current_input, str) or len(current_input) > length
            or (current_input and not is_letter_word(current_input))):
        raise SnapshotError(f"invalid current input {current_input!r}")
    if status is not GameStatus.PLAYING:
        current_input = ""

    return RoundState(
        target_word=target,
        guesses=guesses,
        current_input=current_input.upper(),
        status=status,
    )


def migrate_legacy_snapshot(data: Mapping) -> Dict:
    """
    Maps a single-round snapshot onto the multi-length shape, keyed by the
    length of its target word.
    """
    target = _first(data, "target_word", "targetWord")
    length = len(target) if isinstance(target, str) else None

    migrated: Dict[str, Any] = {
        "version": SNAPSHOT_VERSION,
        "stats": data.get("stats"),
        "word_length": length,
        "game_states": {},
    }
    if length is not None:
        migrated["game_states"][str(length)] = {
            key: value for key, value in data.items() if key not in ("stats", "version")
        }
    return migrated


def is_legacy_snapshot(data: Mapping) -> bool:
    has_map = "game_states" in data or "gameStates" in data
    return not has_map and ("target_word" in data or "targetWord" in data)
