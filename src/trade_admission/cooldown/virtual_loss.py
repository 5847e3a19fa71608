"""Virtual loss counting module."""


class VirtualLossCounter:
    """Counts consecutive losses observed while trading is suppressed.

    Counter resets to zero on any winning trade.
    """

    def __init__(self):
        """Initialize virtual loss counter."""
        self._count: int = 0

    def record(self, is_win: bool) -> None:
        """Record an outcome: a win resets the count, a loss increments it."""
        if is_win:
            self._count = 0
        else:
            self._count += 1

    def count(self) -> int:
        return self._count

    def reset(self) -> None:
        """Reset the counter to zero."""
        self._count = 0
