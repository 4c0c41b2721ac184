"""Activity tracking for activity-aware scheduling."""
import time
from threading import Lock
from typing import Callable, Optional

from git_pull_reminder.constants import ACTIVITY_DECAY_SECONDS, QUIET_WINDOW_SECONDS


class ActivityTracker:
    """Remembers when the user last edited, typed or focused the app.

    ``is_engaged`` is what the scheduler asks: automatic checks are skipped
    while it is true. The active flag decays after ``decay`` seconds without
    events.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        quiet_window: float = QUIET_WINDOW_SECONDS,
        decay: float = ACTIVITY_DECAY_SECONDS,
    ):
        self._clock = clock
        self.quiet_window = quiet_window
        self.decay = decay
        self.last_activity: Optional[float] = None
        self._active = False
        self._lock = Lock()

    def record(self) -> None:
        """Register an edit, key press or focus event."""
        with self._lock:
            self.last_activity = self._clock()
            self._active = True

    @property
    def is_active(self) -> bool:
        with self._lock:
            if self._active and self._since_last() >= self.decay:
                self._active = False
            return self._active

    def is_engaged(self) -> bool:
        """True when the user was active within the quiet window."""
        if not self.is_active:
            return False
        with self._lock:
            return self._since_last() < self.quiet_window

    def reset(self) -> None:
        with self._lock:
            self.last_activity = None
            self._active = False

    def _since_last(self) -> float:
        if self.last_activity is None:
            return float("inf")
        return self._clock() - self.last_activity
