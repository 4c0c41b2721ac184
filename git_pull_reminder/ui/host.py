"""Host interface the session talks to."""
from typing import Callable, Optional, Sequence

from git_pull_reminder.models.status import StatusState


class TimerHandle:
    """Something that can be stopped: a repeating or one-shot timer."""

    def stop(self) -> None:
        raise NotImplementedError


class Host:
    """UI and scheduling primitives supplied by the TUI or the console.

    ``ask`` blocks the calling thread until the user picks an action and
    returns its label, or None when the prompt is dismissed. Sessions call it
    from background threads only.
    """

    # Long-lived hosts keep an indicator and run timers; one-shot CLI
    # commands do not.
    persistent: bool = True

    def render_status(self, state: Optional[StatusState]) -> None:
        """Show the indicator, or hide it when ``state`` is None."""
        raise NotImplementedError

    def show_message(self, message: str, level: str, timeout: float) -> None:
        """Transient low-priority message."""
        raise NotImplementedError

    def show_error(self, message: str) -> None:
        raise NotImplementedError

    def ask(self, message: str, actions: Sequence[str], level: str = "info") -> Optional[str]:
        raise NotImplementedError

    def show_details(self, title: str, body: str) -> None:
        raise NotImplementedError

    def open_settings(self) -> None:
        raise NotImplementedError

    def start_interval(self, seconds: float, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError

    def call_later(self, seconds: float, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError

    def run_background(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` off the UI thread."""
        raise NotImplementedError
