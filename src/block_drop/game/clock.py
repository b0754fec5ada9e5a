from __future__ import annotations

import logging
import math
import time
from typing import Callable


logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class InvalidRateError(ValueError):
    """Raised when a clock is configured with a non-positive cycle rate."""


def _seconds() -> float:
    return time.perf_counter()


class Clock:
    """Logical clock that turns wall-clock time into whole update cycles.

    ``time_fn`` returns the current time in seconds; tests pass a fake one.
    Fractional cycles carry over between ``update`` calls, so no time is lost
    when updates are irregular.
    """

    def __init__(self, cycles_per_second: float, time_fn: TimeFn = _seconds) -> None:
        self._time_fn = time_fn
        self.millis_per_cycle = 0.0
        self.set_cycles_per_second(cycles_per_second)
        self.elapsed_cycles = 0
        self.excess_millis = 0.0
        self.paused = False
        self.last_update = self._now_millis()

    def _now_millis(self) -> float:
        return self._time_fn() * 1000.0

    @property
    def cycles_per_second(self) -> float:
        return 1000.0 / self.millis_per_cycle

    def set_cycles_per_second(self, cycles_per_second: float) -> None:
        rate = float(cycles_per_second)
        if not math.isfinite(rate) or rate <= 0.0:
            raise InvalidRateError(f"cycles per second must be positive, got {cycles_per_second!r}")
        self.millis_per_cycle = 1000.0 / rate
        logger.debug("clock rate set to %.3f cycles/s", rate)

    def reset(self) -> None:
        self.elapsed_cycles = 0
        self.excess_millis = 0.0
        self.last_update = self._now_millis()

    def update(self) -> None:
        now = self._now_millis()
        if not self.paused:
            delta = (now - self.last_update) + self.excess_millis
            whole = int(delta // self.millis_per_cycle)
            self.elapsed_cycles += whole
            self.excess_millis = delta - whole * self.millis_per_cycle
        self.last_update = now

    def set_paused(self, paused: bool) -> None:
        self.paused = bool(paused)

    def is_paused(self) -> bool:
        return self.paused

    def has_elapsed_cycle(self) -> bool:
        if self.elapsed_cycles > 0:
            self.elapsed_cycles -= 1
            return True
        return False

    def peek_elapsed_cycle(self) -> bool:
        return self.elapsed_cycles > 0
