"""Status indicator and notification service"""
from typing import Optional, Sequence, TYPE_CHECKING

from git_pull_reminder.constants import MESSAGE_TIMEOUT, StatusColor
from git_pull_reminder.logging_config import get_logger
from git_pull_reminder.models.status import StatusState

if TYPE_CHECKING:
    from git_pull_reminder.services.settings_store import SettingsStore
    from git_pull_reminder.ui.host import Host

logger = get_logger(__name__)


def should_show(level: str, notification_level: str) -> bool:
    """Apply the verbosity setting: errors always show, info only at 'info'."""
    return (
        level == "error"
        or (level == "warning" and notification_level != "error")
        or notification_level == "info"
    )


class DisplayService:
    """Owns the status indicator and routes notifications to the host."""

    def __init__(self, host: "Host", settings: "SettingsStore"):
        self.host = host
        self.settings = settings
        self.visible = False
        self.state: StatusState = StatusState.idle()

    def show_indicator(self) -> None:
        self.visible = True
        self.host.render_status(self.state)

    def hide_indicator(self) -> None:
        self.visible = False
        self.host.render_status(None)

    def set_status(self, text: str, tooltip: str = "", color: str = StatusColor.DEFAULT) -> None:
        self.state = StatusState(text, tooltip, color)
        logger.debug(f"Status: {text}")
        if self.visible:
            self.host.render_status(self.state)

    def reset_status(self) -> None:
        self.state = StatusState.idle()
        if self.visible:
            self.host.render_status(self.state)

    def notify(self, message: str, level: str = "info", timeout: float = MESSAGE_TIMEOUT) -> None:
        """Show a message if the configured verbosity lets it through."""
        notification_level = self.settings.load().notification_level
        if not should_show(level, notification_level):
            logger.debug(f"Suppressed {level} notification: {message}")
            return

        if level == "error":
            logger.error(message)
            self.host.show_error(message)
            return

        logger.info(message)
        self.host.show_message(message, level, timeout)

    def prompt(self, message: str, actions: Sequence[str], level: str = "info") -> Optional[str]:
        """Ask the user to pick one of ``actions``; None means dismissed."""
        logger.debug(f"Prompt: {message} {list(actions)}")
        choice = self.host.ask(message, actions, level)
        logger.debug(f"Prompt answer: {choice}")
        return choice
