"""Interactive TUI for git-pull-reminder using Textual."""

import threading
from concurrent.futures import Future
from typing import Callable, Optional, Sequence, Set

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.timer import Timer
from textual.widgets import Footer, RichLog, Static
from rich.text import Text

from .config import Config
from .core import ReminderSession
from .exceptions import SettingsError
from .formatters import format_outcome, format_setting_value
from .logging_config import get_logger
from .models.status import StatusState
from .services.settings_store import SettingsStore
from .ui.host import Host, TimerHandle
from .ui.screens import DetailsScreen, PromptScreen, SettingsScreen
from .ui.widgets import NonExpandingHeader, StatusIndicator

logger = get_logger(__name__)

SEVERITIES = {
    "info": "information",
    "warning": "warning",
    "error": "error",
}


class TextualTimer(TimerHandle):
    """Stops a Textual timer from any thread."""

    def __init__(self, host: "TextualHost", timer: Timer):
        self.host = host
        self.timer = timer

    def stop(self) -> None:
        self.host.call(self.timer.stop)


class TextualHost(Host):
    """Host implementation backed by a running Textual app.

    Session code runs in thread workers, so every call is marshalled onto the
    app thread. Prompts block the worker until the modal is dismissed.
    """

    persistent = True

    def __init__(self, app: "PullReminderApp"):
        self.app = app
        self._thread_id = threading.get_ident()
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()

    def bind_thread(self) -> None:
        """Remember the app thread; call from the app's event loop."""
        self._thread_id = threading.get_ident()

    def on_app_thread(self) -> bool:
        return threading.get_ident() == self._thread_id

    def call(self, callback: Callable, *args, **kwargs):
        if self.on_app_thread():
            return callback(*args, **kwargs)
        return self.app.call_from_thread(callback, *args, **kwargs)

    def close(self) -> None:
        """Release workers still waiting on a prompt."""
        with self._lock:
            pending = list(self._pending)
            self._pending.clear()
        for future in pending:
            if not future.done():
                future.set_result(None)

    def render_status(self, state: Optional[StatusState]) -> None:
        self.call(self.app.update_status, state)

    def show_message(self, message: str, level: str, timeout: float) -> None:
        self.call(self.app.show_notice, message, SEVERITIES.get(level, "information"), timeout)

    def show_error(self, message: str) -> None:
        self.call(self.app.show_notice, message, "error", 10)

    def ask(self, message: str, actions: Sequence[str], level: str = "info") -> Optional[str]:
        if self.on_app_thread():
            raise RuntimeError("ask() would block the app thread; call it from a worker")

        answer: Future = Future()
        with self._lock:
            self._pending.add(answer)

        def resolve(choice: Optional[str]) -> None:
            if not answer.done():
                answer.set_result(choice)

        def show() -> None:
            self.app.log_event(message)
            self.app.push_screen(PromptScreen(message, actions, level), resolve)

        self.call(show)
        try:
            return answer.result()
        finally:
            with self._lock:
                self._pending.discard(answer)

    def show_details(self, title: str, body: str) -> None:
        self.call(self.app.push_screen, DetailsScreen(title, body))

    def open_settings(self) -> None:
        self.call(self.app.action_open_settings)

    def start_interval(self, seconds: float, callback: Callable[[], None]) -> TimerHandle:
        return TextualTimer(self, self.call(self.app.set_interval, seconds, callback))

    def call_later(self, seconds: float, callback: Callable[[], None]) -> TimerHandle:
        return TextualTimer(self, self.call(self.app.set_timer, seconds, callback))

    def run_background(self, callback: Callable[[], None]) -> None:
        self.call(self.app.run_session_task, callback)


class PullReminderApp(App):
    """Watches one working directory and prompts when the remote moves ahead."""

    CSS = """
    #info {
        height: auto;
        padding: 1 2;
    }

    #event-log {
        height: 1fr;
        border: round $primary 50%;
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("c", "check_now", "Check Now"),
        Binding("p", "pull_now", "Pull Now"),
        Binding("a", "toggle_auto_check", "Toggle Auto-check"),
        Binding("v", "view_changes", "View Changes"),
        Binding("s", "open_settings", "Settings"),
    ]

    def __init__(self, repo_path: Optional[str], settings: SettingsStore, session: Optional[ReminderSession] = None):
        super().__init__()
        self.repo_path = repo_path
        self.settings = settings
        self.host = TextualHost(self)
        self.session = session or ReminderSession(repo_path, self.host, settings)
        self._closing = False
        self.title = "Git Pull Reminder"
        self.sub_title = repo_path or "no workspace"

    def compose(self) -> ComposeResult:
        yield NonExpandingHeader()
        with Vertical():
            yield Static(id="info")
            yield RichLog(id="event-log", wrap=True, markup=False)
        yield StatusIndicator(id="status-indicator")
        yield Footer()

    def on_mount(self) -> None:
        self.host.bind_thread()
        self.query_one(StatusIndicator).update_state(None)
        self.settings.add_listener(self._on_settings_saved)
        self.session.start()
        self._refresh_info()
        logger.info("TUI started")

    def on_unmount(self) -> None:
        self._closing = True
        self.settings.remove_listener(self._on_settings_saved)
        self.host.close()
        self.session.shutdown()

    # Activity triggers

    def on_key(self, event: events.Key) -> None:
        self.session.record_activity()

    def on_app_focus(self, event: events.AppFocus) -> None:
        self.session.record_activity()

    # Host callbacks (app thread)

    def update_status(self, state: Optional[StatusState]) -> None:
        if self._closing:
            return
        self.query_one(StatusIndicator).update_state(state)
        self._refresh_info()

    def show_notice(self, message: str, severity: str, timeout: float) -> None:
        self.log_event(message)
        self.notify(message, severity=severity, timeout=timeout)

    def log_event(self, message: str) -> None:
        if self._closing:
            return
        self.query_one("#event-log", RichLog).write(message)

    def run_session_task(self, callback: Callable[[], None]) -> None:
        self.run_worker(callback, thread=True, group="session", exit_on_error=False)

    def _on_settings_saved(self, config: Config) -> None:
        self.host.call(self._refresh_info)

    def _refresh_info(self) -> None:
        config = self.settings.load()
        auto = "on" if self.session.auto_check_enabled and config.auto_check else "off"
        info = Text()
        info.append("Repository: ", style="bold")
        info.append(f"{self.repo_path or 'none'}\n")
        info.append("Watching: ", style="bold")
        info.append(f"{format_setting_value(config.watched_branches)}\n")
        info.append("Auto-check: ", style="bold")
        info.append(f"{auto} (every {config.check_interval} min)\n")
        info.append("Last check: ", style="bold")
        info.append(format_outcome(self.session.last_outcome))
        self.query_one("#info", Static).update(info)

    # Actions

    def action_check_now(self) -> None:
        self.log_event("Checking for remote commits...")
        self._check_worker()

    def action_pull_now(self) -> None:
        self._pull_worker()

    def action_view_changes(self) -> None:
        self._view_changes_worker()

    def action_toggle_auto_check(self) -> None:
        self.session.toggle_auto_check()
        self._refresh_info()

    def action_open_settings(self) -> None:
        self.push_screen(SettingsScreen(self.settings.load()), self._handle_settings)

    def _handle_settings(self, changes: Optional[dict]) -> None:
        if changes is None:
            return
        try:
            self.settings.update(**changes)
        except SettingsError as e:
            self.notify(str(e), severity="error")
            return
        self.notify("Settings saved")

    @work(thread=True, group="session", exit_on_error=False)
    def _check_worker(self) -> None:
        self.session.check_now()

    @work(thread=True, group="session", exit_on_error=False)
    def _pull_worker(self) -> None:
        self.session.pull_now()

    @work(thread=True, group="session", exit_on_error=False)
    def _view_changes_worker(self) -> None:
        self.session.view_changes()

    async def action_quit(self) -> None:
        """Quit the application."""
        self.exit()
