"""
Session Manager

Owns one GameRound per supported word length, the shared statistics, and
persistence of the whole session as a snapshot.
"""

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..config.game_settings import DEFAULT_WORD_LENGTH, KEYBOARD_ROWS, MAX_ATTEMPTS, STORAGE_KEY, SUPPORTED_WORD_LENGTHS
from ..models.game import GameSignal, RoundState, SubmissionTicket, SubmitResult
from ..models.stats import Statistics
from .game_logic import is_letter_word
from .game_round import GameRound
from .snapshot import (
    SnapshotError, is_legacy_snapshot, migrate_legacy_snapshot, parse_round, parse_statistics, serialize_snapshot
)
from .stats_service import StatisticsTracker
from .storage import KeyValueStore
from .word_oracle import WordOracle
from .word_source import WordSource

logger = logging.getLogger(__name__)

DELETE_KEYS = frozenset({"BACKSPACE", "DELETE", "DEL"})


class SessionManager:
    """
    Game session for one player.

    This class handles:
    - One round per word length, created lazily on first use
    - Routing keyboard input to the active round
    - Word validation through the oracle and stale-response handling
    - Recording finished rounds in the statistics
    - Saving a snapshot after every state-affecting operation
    """

    def __init__(self,
                 word_source: WordSource,
                 oracle: WordOracle,
                 store: Optional[KeyValueStore] = None,
                 storage_key: str = STORAGE_KEY,
                 lengths: Sequence[int] = SUPPORTED_WORD_LENGTHS,
                 active_length: int = DEFAULT_WORD_LENGTH,
                 max_attempts: int = MAX_ATTEMPTS):
        if active_length not in lengths:
            raise ValueError(f"Unsupported word length: {active_length}")

        self.word_source = word_source
        self.oracle = oracle
        self.store = store
        self.storage_key = storage_key
        self.lengths = tuple(lengths)
        self.max_attempts = max_attempts

        # Held by request handlers for the whole of one operation
        self.lock = threading.RLock()
        self.rounds: Dict[int, GameRound] = {}
        self.active_length = active_length
        self.tracker = StatisticsTracker(max_attempts=max_attempts)
        self.rounds[active_length] = self._new_round(active_length)

    @classmethod
    def load(cls, word_source: WordSource, oracle: WordOracle, store: KeyValueStore,
             storage_key: str = STORAGE_KEY, **kwargs) -> 'SessionManager':
        """Creates a session and restores it from `store` if a snapshot exists."""
        session = cls(word_source, oracle, store=store, storage_key=storage_key, **kwargs)
        data = store.get(storage_key)
        if data is not None:
            session.restore_snapshot(data)
        return session

    # ============= ROUNDS =============

    def _new_round(self, length: int) -> GameRound:
        return GameRound(self.word_source.get_word_for_today(length), max_attempts=self.max_attempts)

    def _check_length(self, length: int) -> None:
        if length not in self.lengths:
            raise ValueError(f"Unsupported word length: {length}")

    @property
    def active_round(self) -> GameRound:
        return self.rounds[self.active_length]

    @property
    def statistics(self) -> Statistics:
        return self.tracker.stats

    def get_active(self) -> RoundState:
        return self.active_round.state

    def switch_length(self, new_length: int) -> RoundState:
        """
        Activates the round for `new_length`, creating it on first use.
        The outgoing round stays in the map untouched apart from dropping
        any outstanding validation.
        """
        self._check_length(new_length)
        if new_length == self.active_length:
            return self.get_active()

        outgoing = self.active_round
        outgoing.cancel_pending()
        self.rounds[self.active_length] = outgoing

        if new_length not in self.rounds:
            self.rounds[new_length] = self._new_round(new_length)
        self.active_length = new_length

        logger.info("Switched to %s-letter mode", new_length)
        self.save()
        return self.get_active()

    def reset_game(self, target_word: Optional[str] = None) -> RoundState:
        """Starts a replay of the active length with a random word. Statistics are kept."""
        if target_word is None:
            target_word = self.word_source.get_random_word(self.active_length)
        elif len(target_word) != self.active_length:
            raise ValueError(f"Target word must have {self.active_length} letters")

        state = self.active_round.reset(target_word)
        self.save()
        return state

    # ============= INPUT =============

    def add_letter(self, letter: str) -> bool:
        changed = self.active_round.append_letter(letter)
        if changed:
            self.save()
        return changed

    def delete_letter(self) -> bool:
        changed = self.active_round.delete_letter()
        if changed:
            self.save()
        return changed

    def press_key(self, key: str) -> Optional[SubmitResult]:
        """
        Keyboard-shaped dispatch. Returns the SubmitResult for ENTER,
        None for every other key.
        """
        normalized = (key or "").strip().upper()
        if normalized == "ENTER":
            return self.submit()
        if normalized in DELETE_KEYS:
            self.delete_letter()
        elif len(normalized) == 1 and is_letter_word(normalized):
            self.add_letter(normalized)
        return None

    # ============= SUBMISSION =============

    def begin_submit(self):
        """First phase of a submission on the active round (see GameRound)."""
        round_ = self.active_round
        outcome = round_.begin_submit()
        return round_, outcome

    def complete_submit(self, round_: GameRound, ticket: SubmissionTicket, is_valid: bool) -> SubmitResult:
        """Second phase: applies the oracle answer and books a finished round."""
        if self.rounds.get(round_.word_length) is not round_:
            # Round was replaced by a restore while the lookup was in flight
            round_.cancel_pending()
        result = round_.complete_submit(ticket, is_valid)

        if result.accepted and result.status.is_terminal:
            self.tracker.record_outcome(result.status, round_.attempts_used)
            logger.info("Round %s in %s attempts", result.status.value.lower(), round_.attempts_used)

        if result.signal is not GameSignal.STALE_RESPONSE:
            self.save()
        return result

    def _check_word(self, word: str) -> bool:
        try:
            return self.oracle.is_valid_word(word)
        except Exception as e:
            logger.warning("Word oracle failed for %s, using offline list: %s", word, e)
            return self.word_source.is_known_word(word)

    async def _check_word_async(self, word: str) -> bool:
        try:
            return await self.oracle.is_valid_word_async(word)
        except Exception as e:
            logger.warning("Word oracle failed for %s, using offline list: %s", word, e)
            return self.word_source.is_known_word(word)

    def submit(self) -> SubmitResult:
        """Submits the current input, blocking on the word lookup."""
        round_, outcome = self.begin_submit()
        if isinstance(outcome, SubmitResult):
            return outcome
        return self.complete_submit(round_, outcome, self._check_word(outcome.word))

    async def submit_async(self) -> SubmitResult:
        """
        Submits the current input without blocking the event loop.
        While the lookup is in flight the round rejects further edits and
        submissions; a reset or length switch makes the answer stale.
        """
        round_, outcome = self.begin_submit()
        if isinstance(outcome, SubmitResult):
            return outcome
        is_valid = await self._check_word_async(outcome.word)
        return self.complete_submit(round_, outcome, is_valid)

    # ============= READ-ONLY VIEWS =============

    def keyboard_status(self) -> Dict[str, str]:
        return {letter: status.value for letter, status in self.active_round.keyboard_status().items()}

    def view_state(self) -> Dict[str, Any]:
        """Everything the UI needs to render the active round."""
        round_ = self.active_round
        state = round_.state
        stats = self.statistics

        return {
            "word_length": self.active_length,
            "supported_lengths": list(self.lengths),
            "max_attempts": self.max_attempts,
            "attempts_remaining": round_.attempts_remaining,
            "guesses": [guess.to_dict() for guess in state.guesses],
            "current_input": state.current_input,
            "status": state.status.value,
            "validating": round_.validating,
            "keyboard": self.keyboard_status(),
            "keyboard_rows": [list(row) for row in KEYBOARD_ROWS],
            "answer": state.target_word if state.status.is_terminal else None,
            "stats": {**stats.to_dict(), "win_percentage": stats.win_percentage},
        }

    # ============= PERSISTENCE =============

    def serialize_snapshot(self) -> Dict[str, Any]:
        return serialize_snapshot(
            {length: round_.state for length, round_ in self.rounds.items()},
            self.active_length,
            self.statistics,
        )

    def restore_snapshot(self, data: Any) -> List[str]:
        """
        Replaces the session with a persisted snapshot.

        Each fragment is validated on its own; a missing or malformed one is
        discarded and replaced by its default. Never raises.

        Returns:
            Names of the fragments that were discarded
        """
        discarded: List[str] = []

        if not isinstance(data, Mapping):
            logger.warning("Persisted snapshot is not an object, starting fresh")
            data = {}
            discarded.append("snapshot")
        elif is_legacy_snapshot(data):
            logger.info("Migrating single-round snapshot")
            data = migrate_legacy_snapshot(data)

        # Statistics
        stats = Statistics(distribution=[0] * self.max_attempts)
        if "stats" in data and data["stats"] is not None:
            try:
                stats = parse_statistics(data["stats"], self.max_attempts)
            except SnapshotError as e:
                logger.warning("Discarding persisted statistics: %s", e)
                discarded.append("stats")
        self.tracker = StatisticsTracker(stats, max_attempts=self.max_attempts)

        # Active length
        active_length = data.get("word_length", data.get("wordLength"))
        if active_length not in self.lengths:
            if active_length is not None:
                logger.warning("Discarding persisted word length %r", active_length)
                discarded.append("word_length")
            active_length = self.active_length if self.active_length in self.lengths else DEFAULT_WORD_LENGTH

        # Rounds
        rounds: Dict[int, GameRound] = {}
        raw_states = data.get("game_states", data.get("gameStates", {}))
        if not isinstance(raw_states, Mapping):
            logger.warning("Discarding persisted game states: not an object")
            discarded.append("game_states")
            raw_states = {}

        for length in self.lengths:
            raw_round = raw_states.get(str(length), raw_states.get(length))
            if raw_round is None:
                continue
            try:
                state = parse_round(raw_round, length, self.max_attempts)
            except SnapshotError as e:
                logger.warning("Discarding persisted %s-letter round: %s", length, e)
                discarded.append(f"game_states.{length}")
                continue
            rounds[length] = GameRound(state.target_word, max_attempts=self.max_attempts, state=state)

        if active_length not in rounds:
            rounds[active_length] = self._new_round(active_length)

        self.rounds = rounds
        self.active_length = active_length
        return discarded

    def save(self) -> None:
        """Writes the snapshot to the store. Storage errors are logged, not raised."""
        if self.store is None:
            return
        try:
            self.store.set(self.storage_key, self.serialize_snapshot())
        except Exception as e:
            logger.error("Failed to persist session %s: %s", self.storage_key, e)
