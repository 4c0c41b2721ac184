"""Custom widgets for the git-pull-reminder TUI."""

from typing import Optional

from textual.app import ComposeResult, RenderResult
from textual.events import Click
from textual.widgets import Header, Static
from textual.widgets._header import HeaderIcon, HeaderTitle, HeaderClockSpace
from rich.text import Text

from git_pull_reminder.__version__ import __version__
from git_pull_reminder.models.status import StatusState


class VersionDisplay(HeaderClockSpace):
    """Custom widget to display version in place of clock."""

    DEFAULT_CSS = """
    VersionDisplay {
        width: auto;
        dock: right;
        padding: 0 1;
        background: $foreground 5%;
        color: $text;
        text-align: center;
        text-opacity: 85%;
    }
    """

    def render(self) -> RenderResult:
        """Render the version string."""
        return Text(f"v{__version__}")


class NonExpandingHeader(Header):
    """Header widget that doesn't expand/contract on click and shows version instead of clock."""

    def compose(self) -> ComposeResult:
        """Compose the header with custom version display."""
        yield HeaderIcon().data_bind(Header.icon)
        yield HeaderTitle()
        yield VersionDisplay() if self._show_clock else HeaderClockSpace()

    def on_click(self, event: Click) -> None:
        """Override to disable click-to-expand behavior."""
        event.stop()


class StatusIndicator(Static):
    """The persistent status indicator; clicking it runs a check."""

    DEFAULT_CSS = """
    StatusIndicator {
        height: 1;
        padding: 0 1;
        background: $boost;
    }

    StatusIndicator:hover {
        background: $accent 30%;
    }
    """

    def update_state(self, state: Optional[StatusState]) -> None:
        """Show ``state``; None hides the indicator."""
        if state is None:
            self.display = False
            return

        self.display = True
        self.update(Text(state.text, style=state.color or ""))
        self.tooltip = state.tooltip or None

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.action_check_now()
