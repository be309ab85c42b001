from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]

# 60000 ms per minute / 5 characters per word
WPM_FACTOR = 12000
SAMPLE_INTERVAL_SEC = 1.0


def wpm_from_count(count: int, elapsed_ms: float) -> float:
    if elapsed_ms <= 0:
        return 0.0
    return count * WPM_FACTOR / elapsed_ms


class TimeTracker:
    """
    Countdown for a timed test, started when the tracker is created.

    WPM is only resampled once per second so the displayed number does not
    jitter on every tick.
    """

    def __init__(self, duration: int, clock: Clock = time.monotonic) -> None:
        self.duration = duration
        self._clock = clock
        self.started_at = clock()
        self._expired = False
        self._last_wpm = 0.0
        self._last_sample = self.started_at

    def elapsed(self) -> float:
        return max(0.0, self._clock() - self.started_at)

    def elapsed_ms(self) -> int:
        return int(self.elapsed() * 1000)

    def remaining(self) -> float:
        return max(0.0, self.duration - self.elapsed())

    def is_expired(self) -> bool:
        if not self._expired:
            self._expired = self.elapsed() > self.duration
        return self._expired

    def percent_elapsed(self) -> int:
        budget_ms = self.duration * 1000
        if budget_ms <= 0:
            return 100
        return min(100, self.elapsed_ms() * 100 // budget_ms)

    def sampled_wpm(self, correct: int) -> float:
        now = self._clock()
        if now - self._last_sample >= SAMPLE_INTERVAL_SEC:
            self._last_wpm = wpm_from_count(correct, (now - self.started_at) * 1000)
            self._last_sample = now
        return self._last_wpm
