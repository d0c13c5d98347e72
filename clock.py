from __future__ import annotations

from config import DURATION_S


class SessionClock:
    """Countdown over a fixed session length, advanced explicitly by ticks."""

    def __init__(self, total_s: float = DURATION_S) -> None:
        if total_s <= 0:
            raise ValueError(f"session duration must be positive, got {total_s}")
        self.total_s = float(total_s)
        self.remaining_s = float(total_s)
        self.running = False

    @property
    def elapsed_s(self) -> float:
        return self.total_s - self.remaining_s

    @property
    def timed_out(self) -> bool:
        return self.remaining_s <= 0.0

    def start(self) -> None:
        if not self.timed_out:
            self.running = True

    def advance(self, interval_s: float) -> bool:
        """Move the clock forward. Returns True on the tick that reaches zero."""
        if not self.running or self.timed_out:
            return False
        # rounded so repeated fractional ticks still land on exactly zero
        self.remaining_s = max(0.0, round(self.remaining_s - interval_s, 9))
        if self.timed_out:
            self.running = False
            return True
        return False

    def view(self) -> str:
        seconds = max(0.0, self.remaining_s)
        minutes, secs = divmod(seconds, 60)
        if minutes:
            return f"{int(minutes)}m{secs:g}s"
        return f"{secs:g}s"
