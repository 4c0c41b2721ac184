"""Tests for outcome and settings formatting"""
from rich.console import Console

from git_pull_reminder.config import Config
from git_pull_reminder.formatters import (
    OUTCOME_DESCRIPTIONS,
    format_outcome,
    format_setting_value,
    format_settings_table,
)
from git_pull_reminder.models.outcome import OutcomeKind, PollOutcome


def test_every_outcome_has_a_description():
    assert set(OUTCOME_DESCRIPTIONS) == set(OutcomeKind)


def test_format_outcome():
    assert format_outcome(None) == "Not checked yet"
    assert format_outcome(PollOutcome(OutcomeKind.NOT_A_REPO)) == "Not a Git repository"
    assert format_outcome(PollOutcome(OutcomeKind.AHEAD_ONLY, ahead=2, branch="main")) == (
        "main: Ahead of remote (2 to push)"
    )
    assert format_outcome(PollOutcome(OutcomeKind.BEHIND_CLEAN, behind=3, ahead=1, branch="main")) == (
        "main: Behind remote (3↓ 1↑)"
    )


def test_format_setting_value():
    assert format_setting_value(True) == "on"
    assert format_setting_value(False) == "off"
    assert format_setting_value(["main", "trunk"]) == "main, trunk"
    assert format_setting_value([]) == "(all branches)"
    assert format_setting_value(5) == "5"


def test_settings_table_lists_every_field():
    console = Console(record=True, width=120)
    console.print(format_settings_table(Config(), title="Settings"))
    text = console.export_text()
    for key in Config.known_fields():
        assert key in text
