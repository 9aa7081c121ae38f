# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-16
# Description: Throttle.py
# -----------------------------------------------------------------------------
import time
from typing import Callable, Optional


class Throttle:
    """
    Enforces a minimum gap between consecutive calls to wait().

    The first call never blocks. `clock` and `sleep` are injectable so tests
    can run without real delays.
    """

    def __init__(
        self,
        min_interval_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")
        self.min_interval_seconds = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last: Optional[float] = None

    def wait(self) -> float:
        """Block until the interval has elapsed. Returns seconds slept."""
        slept = 0.0
        now = self._clock()
        if self._last is not None and self.min_interval_seconds > 0:
            remaining = self.min_interval_seconds - (now - self._last)
            if remaining > 0:
                self._sleep(remaining)
                slept = remaining
                now = self._clock()
        self._last = now
        return slept

    def reset(self) -> None:
        self._last = None
