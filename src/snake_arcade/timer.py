"""Fixed-interval timer driven by accumulated frame time."""

from __future__ import annotations


class RepeatingTimer:
    """Accumulates elapsed seconds and fires once per interval.

    A single :meth:`tick` fires at most once, however large ``dt`` is;
    any whole intervals beyond the first are dropped and only the
    remainder carries over.
    """

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("Timer interval must be positive.")
        self.interval = interval
        self.elapsed = 0.0
        self.just_finished = False

    def tick(self, dt: float) -> bool:
        """Advance by *dt* seconds. Returns True if the timer fired."""
        if dt < 0:
            raise ValueError("Elapsed time must be non-negative.")
        self.elapsed += dt
        self.just_finished = self.elapsed >= self.interval
        if self.just_finished:
            self.elapsed %= self.interval
        return self.just_finished

    def reset(self) -> None:
        self.elapsed = 0.0
        self.just_finished = False
