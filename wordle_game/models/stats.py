"""
Statistics Data Models

Contains the cumulative player statistics structure.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from ..config.game_settings import MAX_ATTEMPTS


def _empty_distribution() -> List[int]:
    return [0] * MAX_ATTEMPTS


@dataclass
class Statistics:
    """Cumulative outcome statistics, shared across all word lengths."""
    played: int = 0
    won: int = 0
    current_streak: int = 0
    max_streak: int = 0
    distribution: List[int] = field(default_factory=_empty_distribution)  # index = attempts used - 1

    @property
    def win_percentage(self) -> int:
        if self.played == 0:
            return 0
        return round(self.won / self.played * 100)

    def to_dict(self) -> Dict:
        return {
            "played": self.played,
            "won": self.won,
            "current_streak": self.current_streak,
            "max_streak": self.max_streak,
            "distribution": list(self.distribution),
        }
