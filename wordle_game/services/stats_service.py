"""
Statistics Service

Aggregates round outcomes into cumulative player statistics.
"""

from typing import Optional

from ..config.game_settings import MAX_ATTEMPTS
from ..models.game import GameStatus
from ..models.stats import Statistics


class StatisticsTracker:
    """Records finished rounds. Statistics are shared across word lengths."""

    def __init__(self, stats: Optional[Statistics] = None, max_attempts: int = MAX_ATTEMPTS):
        self.max_attempts = max_attempts
        self.stats = stats if stats is not None else Statistics(distribution=[0] * max_attempts)

    def record_outcome(self, status: GameStatus, attempts_used: int) -> Statistics:
        """
        Folds one terminal round into the statistics.

        Args:
            status: GameStatus.WON or GameStatus.LOST
            attempts_used: 1-indexed attempt count at which the round ended

        Raises:
            ValueError: If the status is not terminal or a win has an
                attempt count outside 1..max_attempts
        """
        if status is GameStatus.WON:
            if not 1 <= attempts_used <= self.max_attempts:
                raise ValueError(f"Winning attempt count must be 1..{self.max_attempts}, got {attempts_used}")

            self.stats.played += 1
            self.stats.won += 1
            self.stats.current_streak += 1
            self.stats.max_streak = max(self.stats.max_streak, self.stats.current_streak)
            self.stats.distribution[attempts_used - 1] += 1
        elif status is GameStatus.LOST:
            self.stats.played += 1
            self.stats.current_streak = 0
        else:
            raise ValueError(f"Cannot record a non-terminal outcome: {status.value}")

        return self.stats
