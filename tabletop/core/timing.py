import time
from dataclasses import dataclass


@dataclass
class FrameTimer:
    """Wall-clock delta between consecutive frames."""

    max_frame_time: float = 0.25

    _last_time: float = 0.0
    _dt: float = 0.0
    _started: bool = False

    def start(self) -> None:
        """Call this right before the main loop starts."""
        self._last_time = time.perf_counter()
        self._dt = 0.0
        self._started = True

    def tick(self) -> float:
        """
        Advance the timer and return seconds since the previous tick.
        Long stalls (window drag, breakpoint) are clamped to max_frame_time
        so the camera does not jump.
        """
        now = time.perf_counter()
        if not self._started:
            self._last_time = now
            self._started = True

        frame_time = now - self._last_time
        self._last_time = now

        self._dt = min(frame_time, self.max_frame_time)
        return self._dt

    @property
    def dt(self) -> float:
        return self._dt
