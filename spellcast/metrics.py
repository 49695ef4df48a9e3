import logging
import time
from contextlib import contextmanager
from typing import Callable

logger = logging.getLogger("spellcast")


class StageTimer:
    """Wall-clock timing for one solve: named stages plus total elapsed time."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self.timings: dict[str, float] = {}
        self._clock = clock
        self._start = clock()

    @contextmanager
    def stage(self, name: str):
        t0 = self._clock()
        try:
            yield
        finally:
            elapsed = self._clock() - t0
            self.timings[name] = round(elapsed * 1000, 1)  # ms
            logger.info("stage=%s elapsed=%.1fms", name, self.timings[name])

    @property
    def elapsed(self) -> float:
        """Seconds since the timer was created."""
        return self._clock() - self._start

    @property
    def total_ms(self) -> float:
        return round(self.elapsed * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}
