"""Console host built on rich, for one-shot commands and headless watching."""
from threading import Event, Lock, Thread
from typing import Callable, Optional, Sequence, TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from git_pull_reminder.constants import LEVEL_COLORS
from git_pull_reminder.formatters import format_settings_table
from git_pull_reminder.logging_config import get_logger
from git_pull_reminder.models.status import StatusState
from git_pull_reminder.ui.host import Host, TimerHandle

if TYPE_CHECKING:
    from git_pull_reminder.services.settings_store import SettingsStore

console = Console()
logger = get_logger(__name__)


class ThreadTimer(TimerHandle):
    """One-shot or repeating timer running on a daemon thread."""

    def __init__(self, seconds: float, callback: Callable[[], None], repeat: bool = False):
        self.seconds = seconds
        self.callback = callback
        self.repeat = repeat
        self._stop_event = Event()
        self._thread = Thread(target=self._run, daemon=True, name="reminder-timer")
        self._thread.start()

    def _run(self) -> None:
        while not self._stop_event.wait(self.seconds):
            try:
                self.callback()
            except Exception:
                logger.exception("Timer callback failed")
            if not self.repeat:
                break

    def stop(self) -> None:
        self._stop_event.set()


class ConsoleHost(Host):
    """Prints status and notifications; asks with numbered prompts.

    Non-interactive hosts dismiss every prompt. Non-persistent hosts (one-shot
    commands) run background work inline.
    """

    def __init__(
        self,
        settings: "SettingsStore",
        interactive: bool = True,
        persistent: bool = False,
    ):
        self.settings = settings
        self.interactive = interactive
        self.persistent = persistent
        self._last_state: Optional[StatusState] = None
        self._prompt_lock = Lock()

    def render_status(self, state: Optional[StatusState]) -> None:
        if state is None or state == self._last_state:
            return
        self._last_state = state
        style = state.color or "bold"
        line = f"[{style}]{state.text}[/{style}]"
        if state.tooltip:
            line += f" [dim]{state.tooltip}[/dim]"
        console.print(line)

    def show_message(self, message: str, level: str, timeout: float) -> None:
        color = LEVEL_COLORS.get(level, "cyan")
        console.print(f"[{color}]{message}[/{color}]")

    def show_error(self, message: str) -> None:
        console.print(f"[red]{message}[/red]")

    def ask(self, message: str, actions: Sequence[str], level: str = "info") -> Optional[str]:
        color = LEVEL_COLORS.get(level, "cyan")
        with self._prompt_lock:
            console.print(f"[{color}]{message}[/{color}]")
            if not self.interactive:
                console.print("[dim]Non-interactive mode, prompt dismissed[/dim]")
                return None

            for index, action in enumerate(actions, start=1):
                console.print(f"  [bold]{index}[/bold]) {action}")
            console.print("  [bold]0[/bold]) Dismiss")

            choices = [str(i) for i in range(len(actions) + 1)]
            try:
                answer = Prompt.ask("Choose", choices=choices, default="0", console=console)
            except (EOFError, KeyboardInterrupt):
                console.print()
                return None

        index = int(answer)
        return actions[index - 1] if index > 0 else None

    def show_details(self, title: str, body: str) -> None:
        console.print(Panel(body, title=title, expand=False))

    def open_settings(self) -> None:
        console.print(format_settings_table(self.settings.load(), title="Settings"))
        console.print(f"[dim]Stored in {self.settings.settings_file}[/dim]")
        console.print("[dim]Change with: git-pull-reminder settings --set KEY=VALUE[/dim]")

    def start_interval(self, seconds: float, callback: Callable[[], None]) -> TimerHandle:
        return ThreadTimer(seconds, callback, repeat=True)

    def call_later(self, seconds: float, callback: Callable[[], None]) -> TimerHandle:
        return ThreadTimer(seconds, callback)

    def run_background(self, callback: Callable[[], None]) -> None:
        if not self.persistent:
            callback()
            return
        Thread(target=callback, daemon=True, name="reminder-check").start()
