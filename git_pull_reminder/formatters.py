"""Shared formatting for CLI and TUI output."""

from typing import Optional

from rich.table import Table

from git_pull_reminder.config import Config
from git_pull_reminder.models.outcome import OutcomeKind, PollOutcome


OUTCOME_DESCRIPTIONS = {
    OutcomeKind.NO_WORKSPACE: "No workspace folder",
    OutcomeKind.SKIPPED: "Skipped (user active)",
    OutcomeKind.BUSY: "Another check is running",
    OutcomeKind.NOT_A_REPO: "Not a Git repository",
    OutcomeKind.NO_REMOTE: "No remote configured",
    OutcomeKind.FETCH_FAILED: "Fetch failed",
    OutcomeKind.BRANCH_UNRESOLVED: "Unable to determine branch",
    OutcomeKind.BRANCH_UNWATCHED: "Branch not monitored",
    OutcomeKind.NO_UPSTREAM: "No upstream branch",
    OutcomeKind.UP_TO_DATE: "Up to date",
    OutcomeKind.AHEAD_ONLY: "Ahead of remote",
    OutcomeKind.BEHIND_CLEAN: "Behind remote",
    OutcomeKind.BEHIND_CONFLICTED: "Behind remote, potential conflicts",
}


def format_outcome(outcome: Optional[PollOutcome]) -> str:
    """One-line summary of a poll outcome."""
    if outcome is None:
        return "Not checked yet"

    text = OUTCOME_DESCRIPTIONS[outcome.kind]
    if outcome.kind == OutcomeKind.AHEAD_ONLY:
        text += f" ({outcome.ahead} to push)"
    elif outcome.is_behind:
        text += f" ({outcome.behind}↓ {outcome.ahead}↑)"
    if outcome.branch:
        text = f"{outcome.branch}: {text}"
    return text


def format_setting_value(value) -> str:
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, list):
        return ", ".join(value) if value else "(all branches)"
    return str(value)


def format_settings_table(config: Config, title: Optional[str] = None) -> Table:
    """Rich table of every setting and its current value."""
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in config.to_dict().items():
        table.add_row(key, format_setting_value(value))
    return table
