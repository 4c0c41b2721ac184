"""Modal screens for the git-pull-reminder TUI."""

from typing import Optional, Sequence

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical, ScrollableContainer
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static, Switch

from git_pull_reminder.config import Config
from git_pull_reminder.constants import NOTIFICATION_LEVELS
from git_pull_reminder.exceptions import SettingsError
from git_pull_reminder.services.settings_store import parse_setting


class PromptScreen(ModalScreen[Optional[str]]):
    """Modal prompt offering a few labelled actions.

    Dismisses with the chosen label, or None on escape.
    """

    DEFAULT_CSS = """
    PromptScreen {
        align: center middle;
    }

    #prompt-dialog {
        width: 80%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #prompt-dialog.warning {
        border: thick $warning;
    }

    #prompt-message {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }

    Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss_prompt", "Dismiss"),
    ]

    def __init__(self, message: str, actions: Sequence[str], level: str = "info"):
        super().__init__()
        self.message = message
        self.actions = list(actions)
        self.level = level

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-dialog", classes=self.level):
            yield Static(self.message, id="prompt-message", markup=False)
            with Container(id="button-container"):
                for index, action in enumerate(self.actions):
                    variant = "primary" if index == 0 else "default"
                    yield Button(action, variant=variant, id=f"action-{index}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        index = int(event.button.id.split("-", 1)[1])
        self.dismiss(self.actions[index])

    def action_dismiss_prompt(self) -> None:
        self.dismiss(None)


class DetailsScreen(ModalScreen):
    """Modal view of longer text, such as incoming commits."""

    DEFAULT_CSS = """
    DetailsScreen {
        align: center middle;
    }

    #details-dialog {
        width: 90%;
        height: 80%;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #details-title {
        text-style: bold;
        padding: 0 0 1 0;
    }

    #details-body {
        height: 1fr;
    }

    #details-button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0 0 0;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("enter", "close", "Close", show=False),
    ]

    def __init__(self, title: str, body: str):
        super().__init__()
        self.title_text = title
        self.body = body

    def compose(self) -> ComposeResult:
        with Vertical(id="details-dialog"):
            yield Static(self.title_text, id="details-title", markup=False)
            with ScrollableContainer(id="details-body"):
                yield Static(self.body, markup=False)
            with Container(id="details-button-container"):
                yield Button("Close", variant="primary", id="close")

    def action_close(self) -> None:
        self.dismiss()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss()


class SettingsScreen(ModalScreen[Optional[dict]]):
    """Settings editor. Dismisses with the changed values, or None on cancel."""

    DEFAULT_CSS = """
    SettingsScreen {
        align: center middle;
    }

    #settings-dialog {
        width: 80%;
        height: auto;
        max-height: 90%;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    .setting-row {
        height: auto;
        padding: 0 0 1 0;
    }

    .setting-row Label {
        width: 36;
        padding: 1 1 0 0;
    }

    .setting-row Input, .setting-row Select {
        width: 1fr;
    }

    #settings-error {
        color: $error;
        height: auto;
    }

    #settings-button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0 0 0;
    }

    Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    TEXT_FIELDS = ["watched_branches", "check_interval", "git_timeout"]
    SWITCH_FIELDS = [
        "auto_check",
        "smart_timing",
        "conflict_detection",
        "show_status_bar",
        "auto_add_detected_default_branch",
    ]

    def __init__(self, config: Config):
        super().__init__()
        self.config = config

    def compose(self) -> ComposeResult:
        values = self.config.to_dict()
        with ScrollableContainer(id="settings-dialog"):
            yield Static("[bold]Settings[/bold]")
            for key in self.TEXT_FIELDS:
                value = values[key]
                text = ", ".join(value) if isinstance(value, list) else str(value)
                with Horizontal(classes="setting-row"):
                    yield Label(key)
                    yield Input(value=text, id=f"setting-{key}")
            with Horizontal(classes="setting-row"):
                yield Label("notification_level")
                yield Select(
                    [(level, level) for level in NOTIFICATION_LEVELS],
                    value=values["notification_level"],
                    allow_blank=False,
                    id="setting-notification_level",
                )
            for key in self.SWITCH_FIELDS:
                with Horizontal(classes="setting-row"):
                    yield Label(key)
                    yield Switch(value=values[key], id=f"setting-{key}")
            yield Static("", id="settings-error", markup=False)
            with Container(id="settings-button-container"):
                yield Button("Save", variant="primary", id="save")
                yield Button("Cancel", id="cancel")

    def _collect(self) -> dict:
        """Read the form into a settings dict.

        Raises:
            SettingsError: if a value does not parse or validate
        """
        changes = {}
        for key in self.TEXT_FIELDS:
            raw = self.query_one(f"#setting-{key}", Input).value
            changes[key] = parse_setting(key, raw)
        changes["notification_level"] = self.query_one("#setting-notification_level", Select).value
        for key in self.SWITCH_FIELDS:
            changes[key] = self.query_one(f"#setting-{key}", Switch).value

        try:
            Config.from_dict(changes)
        except ValueError as e:
            raise SettingsError(str(e)) from e
        return changes

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
            return

        try:
            changes = self._collect()
        except SettingsError as e:
            self.query_one("#settings-error", Static).update(str(e))
            return
        self.dismiss(changes)

    def action_cancel(self) -> None:
        self.dismiss(None)
