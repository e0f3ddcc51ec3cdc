"""
Timer Interface (Port).

Time-based scheduling (auto-save debounce, status reset) goes through this
interface so tests can drive time manually.
"""
from typing import Callable, Protocol


class TimerHandle(Protocol):
    """Handle for a scheduled callback."""

    def cancel(self) -> None:
        """Cancel the callback. Cancelling twice, or after it ran, is a no-op."""
        ...


class Timer(Protocol):
    """Schedules a callback after a delay."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Schedule ``callback`` to run once after ``delay_seconds``.

        Returns:
            Handle that cancels the underlying timer
        """
        ...
