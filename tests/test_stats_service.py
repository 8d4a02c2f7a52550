import pytest

from wordle_game.models.game import GameStatus
from wordle_game.services.stats_service import StatisticsTracker


def test_six_wins_at_attempt_three():
    tracker = StatisticsTracker()
    for _ in range(6):
        tracker.record_outcome(GameStatus.WON, 3)

    stats = tracker.stats
    assert stats.played == 6
    assert stats.won == 6
    assert stats.current_streak == 6
    assert stats.max_streak == 6
    assert stats.distribution[2] == 6
    assert stats.win_percentage == 100


def test_loss_resets_current_streak_only():
    tracker = StatisticsTracker()
    tracker.record_outcome(GameStatus.WON, 1)
    tracker.record_outcome(GameStatus.WON, 6)
    tracker.record_outcome(GameStatus.LOST, 6)
    tracker.record_outcome(GameStatus.WON, 4)

    stats = tracker.stats
    assert stats.played == 4
    assert stats.won == 3
    assert stats.current_streak == 1
    assert stats.max_streak == 2
    assert stats.distribution == [1, 0, 0, 1, 0, 1]
    assert sum(stats.distribution) == stats.won
    assert stats.win_percentage == 75


def test_empty_statistics():
    stats = StatisticsTracker().stats
    assert stats.win_percentage == 0
    assert stats.distribution == [0] * 6


def test_rejects_non_terminal_and_out_of_range_outcomes():
    tracker = StatisticsTracker()
    with pytest.raises(ValueError):
        tracker.record_outcome(GameStatus.PLAYING, 1)
    with pytest.raises(ValueError):
        tracker.record_outcome(GameStatus.WON, 0)
    with pytest.raises(ValueError):
        tracker.record_outcome(GameStatus.WON, 7)
    assert tracker.stats.played == 0
