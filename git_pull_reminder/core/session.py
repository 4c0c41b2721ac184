"""Reminder session: owns the indicator, timer and activity state of one workspace."""
from threading import Lock
from typing import Optional, TYPE_CHECKING

from git_pull_reminder.config import Config
from git_pull_reminder.constants import (
    Action,
    INITIAL_CHECK_DELAY,
    PULL_STATUS_RESET_DELAY,
    REPOLL_DELAY,
    STASH_STATUS_RESET_DELAY,
    STATUS_CHECKING,
    STATUS_FETCH_FAILED,
    STATUS_NO_REMOTE,
    STATUS_NO_UPSTREAM,
    STATUS_NOT_A_REPO,
    STATUS_SYNCED,
    StatusColor,
)
from git_pull_reminder.exceptions import GitOperationError, SettingsError
from git_pull_reminder.logging_config import get_logger
from git_pull_reminder.models.outcome import OutcomeKind, PollOutcome, SyncResult
from git_pull_reminder.services.activity import ActivityTracker
from git_pull_reminder.services.display_service import DisplayService
from git_pull_reminder.services.git.commands import GitCommands
from git_pull_reminder.services.poller import RemoteStatusPoller
from git_pull_reminder.services.settings_store import SettingsStore
from git_pull_reminder.services.sync_actions import SyncActions

if TYPE_CHECKING:
    from git_pull_reminder.ui.host import Host, TimerHandle

logger = get_logger(__name__)


class ReminderSession:
    """Ties the poller to a host UI for a single working directory.

    Built once at startup, torn down with ``shutdown``. Every decision the
    poller makes is turned into status text, notifications and prompts here.
    Only manual checks surface the outcomes the user cannot act on.
    """

    def __init__(
        self,
        repo_path: Optional[str],
        host: "Host",
        settings: Optional[SettingsStore] = None,
        commands: Optional[GitCommands] = None,
        activity: Optional[ActivityTracker] = None,
    ):
        """Initialize the session.

        Args:
            repo_path: Working directory to watch; None when no workspace is open
            host: TUI or console host providing UI and timers
            settings: Settings store (defaults to the per-workspace store)
            commands: Git command wrapper (injectable for tests)
            activity: Activity tracker (injectable for tests)
        """
        self.repo_path = repo_path
        self.host = host
        self.settings = settings or SettingsStore(repo_path or ".")
        self.commands = commands or GitCommands(repo_path or ".")
        self.display = DisplayService(host, self.settings)
        self.poller = RemoteStatusPoller(repo_path or ".", self.settings, self.commands)
        self.actions = SyncActions(self.commands, self.display)
        self.activity = activity or ActivityTracker()

        self.auto_check_enabled = True  # session toggle, on top of the auto_check setting
        self.last_outcome: Optional[PollOutcome] = None
        self._timer: Optional["TimerHandle"] = None
        self._pending: dict = {}
        self._poll_lock = Lock()

        self.settings.add_listener(self.on_config_changed)
        logger.info(f"Session created for {repo_path}")

    # Lifecycle

    def start(self) -> None:
        config = self.settings.load()
        if config.show_status_bar:
            self.display.show_indicator()
        self.setup_auto_check(config)
        if self.repo_path and self.host.persistent:
            self._schedule("initial", INITIAL_CHECK_DELAY, self._background_poll)

    def shutdown(self) -> None:
        self._stop_timer()
        for handle in self._pending.values():
            handle.stop()
        self._pending.clear()
        self.settings.remove_listener(self.on_config_changed)
        if self.display.visible:
            self.display.hide_indicator()
        self.auto_check_enabled = True
        self.activity.reset()
        logger.info("Session shut down")

    def setup_auto_check(self, config: Optional[Config] = None) -> None:
        """(Re)create the recurring check timer from the current settings."""
        config = config or self.settings.load()
        self._stop_timer()

        if self.auto_check_enabled and config.auto_check and self.repo_path:
            seconds = config.check_interval * 60
            self._timer = self.host.start_interval(seconds, self._background_poll)
            logger.info(f"Auto-check every {config.check_interval} minute(s)")
        else:
            logger.info("Auto-check off")

    def on_config_changed(self, config: Config) -> None:
        self.setup_auto_check(config)
        if config.show_status_bar and not self.display.visible:
            self.display.show_indicator()
        elif not config.show_status_bar and self.display.visible:
            self.display.hide_indicator()

    def toggle_auto_check(self) -> bool:
        self.auto_check_enabled = not self.auto_check_enabled
        state = "enabled" if self.auto_check_enabled else "disabled"
        self.display.notify(f"Auto-check {state}")
        self.setup_auto_check()
        return self.auto_check_enabled

    def record_activity(self) -> None:
        """Feed an edit, key press or focus event to the activity tracker."""
        self.activity.record()

    # Commands

    def check_now(self) -> Optional[PollOutcome]:
        return self.poll(manual=True)

    def pull_now(self) -> Optional[SyncResult]:
        """Pull straight away, without looking at the remote first."""
        if not self.repo_path:
            self.display.notify("No workspace folder open.", "error")
            return None
        return self._pull()

    def poll(self, manual: bool = False) -> Optional[PollOutcome]:
        """Run one check and present its outcome.

        Returns None only if something unexpected went wrong; git failures are
        always turned into an outcome.
        """
        if not self.repo_path:
            if manual:
                self.display.notify("No workspace folder found", "error")
            return PollOutcome(OutcomeKind.NO_WORKSPACE)

        config = self.settings.load()
        if not manual and config.smart_timing and self.activity.is_engaged():
            logger.debug("User is active, skipping automatic check")
            return PollOutcome(OutcomeKind.SKIPPED)

        if not self._poll_lock.acquire(blocking=False):
            logger.debug("A check is already running")
            if manual:
                self.display.notify("A check is already running", "warning")
            return PollOutcome(OutcomeKind.BUSY)

        repoll = False
        try:
            if manual:
                self.display.set_status(*STATUS_CHECKING)
            outcome = self.poller.check()
            self.last_outcome = outcome
            logger.info(f"Check finished: {outcome.kind.value} (behind={outcome.behind}, ahead={outcome.ahead})")
            repoll = self._present(outcome, manual)
        except Exception as e:
            logger.exception("Unexpected error while checking for remote commits")
            if manual:
                self.display.notify(f"Error: {e}", "error")
            return None
        finally:
            self._poll_lock.release()

        if repoll:
            if self.host.persistent:
                self._schedule("repoll", REPOLL_DELAY, lambda: self.host.run_background(self.check_now))
            else:
                self.check_now()
        return outcome

    def view_changes(self) -> None:
        """Show the commits waiting upstream."""
        self._refresh_timeout()
        try:
            log = self.commands.incoming_log()
            stat = self.commands.incoming_diffstat()
        except GitOperationError as e:
            self.display.notify(f"Unable to show incoming changes: {e.message or e}", "warning")
            return

        branch = self.last_outcome.branch if self.last_outcome and self.last_outcome.branch else "current branch"
        body = log or "No incoming commits."
        if stat:
            body += f"\n\n{stat}"
        self.host.show_details(f"Incoming changes on '{branch}'", body)

    def open_settings(self) -> None:
        self.host.open_settings()

    # Presentation

    def _present(self, outcome: PollOutcome, manual: bool) -> bool:
        """Turn an outcome into status, notifications and prompts.

        Returns:
            True when the branch was added to the watch list and should be re-checked
        """
        if outcome.detected_branch:
            self.display.notify(f"Now monitoring '{outcome.detected_branch}' (auto-detected)")

        kind = outcome.kind
        if kind == OutcomeKind.NOT_A_REPO:
            if manual:
                self.display.notify("This folder is not a Git repository", "error")
                self.display.set_status(*STATUS_NOT_A_REPO, StatusColor.ERROR)
        elif kind == OutcomeKind.NO_REMOTE:
            if manual:
                self.display.notify("No Git remote configured", "warning")
                self.display.set_status(*STATUS_NO_REMOTE, StatusColor.WARNING)
        elif kind == OutcomeKind.FETCH_FAILED:
            if manual:
                self.display.notify("Failed to fetch from remote. Check your connection.", "error")
                self.display.set_status(*STATUS_FETCH_FAILED, StatusColor.ERROR)
        elif kind == OutcomeKind.BRANCH_UNRESOLVED:
            if manual:
                self.display.notify("Unable to determine current branch", "warning")
                self.display.reset_status()
        elif kind == OutcomeKind.BRANCH_UNWATCHED:
            if manual:
                return self._prompt_unwatched(outcome.branch)
        elif kind == OutcomeKind.NO_UPSTREAM:
            if manual:
                self.display.notify("Unable to check commits. No upstream configured?", "warning")
                self.display.set_status(*STATUS_NO_UPSTREAM, StatusColor.WARNING)
        elif kind == OutcomeKind.UP_TO_DATE:
            self.display.set_status(*STATUS_SYNCED)
            if manual:
                self.display.notify("Repository is up to date!")
        elif kind == OutcomeKind.AHEAD_ONLY:
            self.display.set_status(
                f"↑ {outcome.ahead} Pending Push",
                f"{outcome.ahead} commit(s) ready to push",
                StatusColor.OUTGOING,
            )
            if manual:
                self.display.notify("Repository is ahead of remote. Don't forget to push!")
        elif kind == OutcomeKind.BEHIND_CONFLICTED:
            self._prompt_conflicts(outcome)
        elif kind == OutcomeKind.BEHIND_CLEAN:
            self._prompt_pull(outcome)
        return False

    def _prompt_unwatched(self, branch: str) -> bool:
        self.display.set_status(
            "○ Not monitoring", f"Branch '{branch}' is not in watched list"
        )
        choice = self.display.prompt(
            f"Branch '{branch}' is not being monitored.",
            [Action.ADD_BRANCH, Action.SETTINGS],
        )
        if choice == Action.ADD_BRANCH:
            watched = self.settings.load().watched_branches
            try:
                self.settings.update(watched_branches=watched + [branch])
            except SettingsError as e:
                self.display.notify(f"Could not save settings: {e}", "error")
                return False
            self.display.notify(f"Now monitoring branch '{branch}'")
            return True
        if choice == Action.SETTINGS:
            self.open_settings()
        return False

    def _prompt_pull(self, outcome: PollOutcome) -> None:
        behind, ahead = outcome.behind, outcome.ahead
        self.display.set_status(
            f"↓ {behind} ↑ {ahead}", f"{behind} incoming, {ahead} outgoing", StatusColor.INCOMING
        )
        ahead_text = f" (+{ahead} to push)" if ahead > 0 else ""
        choice = self.display.prompt(
            f"Remote has {behind} new commit(s){ahead_text}. Pull now?",
            [Action.PULL_NOW, Action.VIEW_CHANGES, Action.LATER],
        )
        if choice == Action.PULL_NOW:
            self._pull()
        elif choice == Action.VIEW_CHANGES:
            self.view_changes()

    def _prompt_conflicts(self, outcome: PollOutcome) -> None:
        behind, ahead = outcome.behind, outcome.ahead
        self.display.set_status(
            f"⚠ {behind}↓ {ahead}↑ (Conflicts)",
            f"{behind} incoming commits with potential conflicts",
            StatusColor.WARNING,
        )
        choice = self.display.prompt(
            f"{behind} new commit(s) available, but potential conflicts detected!",
            [Action.STASH_AND_PULL, Action.VIEW_CHANGES, Action.PULL_ANYWAY, Action.LATER],
            "warning",
        )
        if choice == Action.STASH_AND_PULL:
            self._stash_and_pull()
        elif choice == Action.VIEW_CHANGES:
            self.view_changes()
        elif choice == Action.PULL_ANYWAY:
            self._pull()

    # Actions

    def _pull(self) -> SyncResult:
        self._refresh_timeout()
        result = self.actions.pull_changes()
        if result == SyncResult.PULLED:
            self._schedule_status_reset(PULL_STATUS_RESET_DELAY)
        return result

    def _stash_and_pull(self) -> SyncResult:
        self._refresh_timeout()
        result = self.actions.stash_and_pull()
        if result == SyncResult.STASHED_AND_PULLED:
            self._schedule_status_reset(STASH_STATUS_RESET_DELAY)
        return result

    # Scheduling helpers

    def _background_poll(self) -> None:
        self.host.run_background(lambda: self.poll(manual=False))

    def _schedule(self, name: str, delay: float, callback) -> None:
        previous = self._pending.pop(name, None)
        if previous:
            previous.stop()
        self._pending[name] = self.host.call_later(delay, callback)

    def _schedule_status_reset(self, delay: float) -> None:
        if self.host.persistent:
            self._schedule("reset", delay, self.display.reset_status)

    def _stop_timer(self) -> None:
        if self._timer:
            self._timer.stop()
            self._timer = None

    def _refresh_timeout(self) -> None:
        self.commands.timeout = self.settings.load().git_timeout
