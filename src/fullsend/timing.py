"""
timing.py: Frame admission control and intent rate limiting, both on real time.
"""

from dataclasses import dataclass
from typing import Optional

from .constants import INPUT_DEBOUNCE_MS, MAX_FRAME_DELTA_MS, SKIP_FRAME_DELTA_MS


@dataclass
class FrameClock:
    """
    Decides, from consecutive driver timestamps, whether a frame is simulated.
    admit() returns the elapsed milliseconds to simulate, or None to skip.
    """
    max_delta_ms: float = MAX_FRAME_DELTA_MS
    skip_delta_ms: float = SKIP_FRAME_DELTA_MS
    last_timestamp: Optional[float] = None

    def admit(self, timestamp_ms: float) -> Optional[float]:
        if self.last_timestamp is None:
            self.last_timestamp = timestamp_ms
            return 0.0

        delta = min(timestamp_ms - self.last_timestamp, self.max_delta_ms)
        # Advance even on a skip so a long pause does not stall the loop
        self.last_timestamp = timestamp_ms
        if delta > self.skip_delta_ms:
            return None
        return max(delta, 0.0)


@dataclass
class InputDebouncer:
    """Accepts at most one intent per window of real time."""
    window_ms: float = INPUT_DEBOUNCE_MS
    last_accepted: Optional[float] = None

    def accept(self, now_ms: float) -> bool:
        if self.last_accepted is not None and now_ms - self.last_accepted < self.window_ms:
            return False
        self.last_accepted = now_ms
        return True
