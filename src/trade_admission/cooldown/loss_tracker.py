"""Loss streak tracking module.

Keeps the history of completed losing streaks and reports their
average length, clamped to a minimum.
"""

from typing import List


class LossStreakTracker:
    """Tracks consecutive-loss runs and their floored average length.

    - A loss extends the in-progress streak and recomputes the average
      from completed streaks only (the running streak does not count).
    - A win closes a non-empty streak, appends it to the history and
      recomputes the average.
    - average() never reports below the configured floor.
    """

    def __init__(self, initial_average: int = 0, floor: int = 3):
        """Initialize loss streak tracker.

        Args:
            initial_average: Seed average used until the first loss
            floor: Minimum average reported by average()
        """
        self.initial_average = initial_average
        self.floor = floor
        self.streak_lengths: List[int] = []
        self.current_streak: int = 0
        self._average: int = initial_average

    def record(self, is_win: bool) -> None:
        """Record a settled trade outcome.

        Args:
            is_win: True for a winning trade
        """
        if is_win:
            if self.current_streak > 0:
                self.streak_lengths.append(self.current_streak)
                self._average = self._calculate_average()
                self.current_streak = 0
            return

        self.current_streak += 1
        self._average = self._calculate_average()

    def average(self) -> int:
        """Get the streak average, never below the floor."""
        return max(self._average, self.floor)

    def reset(self) -> None:
        """Restore construction-time state."""
        self.streak_lengths = []
        self.current_streak = 0
        self._average = self.initial_average

    def _calculate_average(self) -> int:
        total = sum(self.streak_lengths)
        if total <= 0:
            return 0
        return total // len(self.streak_lengths)
