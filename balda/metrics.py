import logging
import time
from collections import defaultdict
from contextlib import contextmanager

logger = logging.getLogger("balda")


class StageTimer:
    """Accumulates wall time per named stage, e.g. every decision a bot makes."""

    def __init__(self):
        self.timings: dict[str, float] = defaultdict(float)
        self.counts: dict[str, int] = defaultdict(int)
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = round((time.perf_counter() - t0) * 1000, 1)  # ms
            self.timings[name] += elapsed
            self.counts[name] += 1
            logger.info("stage=%s elapsed=%.1fms", name, elapsed)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**{name: round(ms, 1) for name, ms in self.timings.items()}, "total": self.total_ms}
