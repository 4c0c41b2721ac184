"""Tests for GitCommands error mapping and output parsing"""
from unittest.mock import Mock, patch

import git
import pytest

from git_pull_reminder.exceptions import (
    CommandTimeoutError,
    DetachedHeadError,
    GitOperationError,
    OutputLimitError,
)
from git_pull_reminder.services.git.commands import GitCommands
from git_pull_reminder.services.git.parsing import (
    clean_stderr,
    has_changes,
    parse_ahead_behind,
    parse_remote_show_head,
    pick_remote,
    strip_remote_prefix,
)


@pytest.fixture
def fake_git():
    """Patch GitCommands to run against a mocked git.Git."""
    g = Mock()
    with patch.object(GitCommands, "_get_git", return_value=g):
        yield g


class TestGitCommandsExecution:
    """Test how command failures are reported."""

    def test_runs_in_repo_with_timeout(self, fake_git):
        fake_git.execute.return_value = "origin\nupstream\n"
        commands = GitCommands("/work", timeout=12)

        assert commands.list_remotes() == ["origin", "upstream"]
        fake_git.execute.assert_called_once_with(["git", "remote"], kill_after_timeout=12)

    def test_command_error_carries_stderr(self, fake_git):
        fake_git.execute.side_effect = git.exc.GitCommandError(
            ["git", "pull"], 1, stderr="fatal: Not possible to fast-forward, aborting."
        )
        with pytest.raises(GitOperationError) as exc_info:
            GitCommands("/work").pull()

        assert exc_info.value.operation == "pull"
        assert exc_info.value.message == "fatal: Not possible to fast-forward, aborting."

    def test_timeout(self, fake_git):
        """Test that a killed command is reported as a timeout."""
        fake_git.execute.side_effect = git.exc.GitCommandError(["git", "fetch"], -9)
        commands = GitCommands("/work", timeout=5)

        with patch("git_pull_reminder.services.git.commands.time.monotonic", side_effect=[100.0, 106.0]):
            with pytest.raises(CommandTimeoutError) as exc_info:
                commands.fetch()

        assert exc_info.value.timeout == 5
        assert "timed out after 5s" in str(exc_info.value)

    def test_missing_git_binary(self, fake_git):
        fake_git.execute.side_effect = git.exc.GitCommandNotFound("git", "not found")
        with pytest.raises(GitOperationError):
            GitCommands("/work").git_dir()

    def test_output_limit(self, fake_git):
        fake_git.execute.return_value = "x" * 11
        with pytest.raises(OutputLimitError):
            GitCommands("/work", max_output=10).incoming_log()

    def test_detached_head(self, fake_git):
        fake_git.execute.return_value = ""
        with pytest.raises(DetachedHeadError):
            GitCommands("/work").current_branch()

    def test_ahead_behind_order(self, fake_git):
        """Test that the upstream side is counted as behind."""
        fake_git.execute.return_value = "4\t1"
        assert GitCommands("/work").ahead_behind() == (4, 1)
        args = fake_git.execute.call_args[0][0]
        assert args[-1] == "@{u}...HEAD"

    def test_ahead_behind_garbage(self, fake_git):
        fake_git.execute.return_value = "fatal"
        with pytest.raises(GitOperationError):
            GitCommands("/work").ahead_behind()

    def test_stash_push_nothing_to_save(self, fake_git):
        fake_git.execute.return_value = "No local changes to save"
        assert GitCommands("/work").stash_push("Auto-stash before pull") is False

    def test_stash_push_saved(self, fake_git):
        fake_git.execute.return_value = "Saved working directory and index state On main: Auto-stash before pull"
        assert GitCommands("/work").stash_push("Auto-stash before pull") is True
        assert fake_git.execute.call_args[0][0] == [
            "git", "stash", "push", "-m", "Auto-stash before pull"
        ]

    def test_remote_head_branch(self, fake_git):
        fake_git.execute.return_value = "origin/trunk"
        assert GitCommands("/work").remote_head_branch("origin") == "trunk"

    def test_terminal_prompt_disabled(self):
        g = GitCommands("/work")._get_git()
        assert g.environment()["GIT_TERMINAL_PROMPT"] == "0"


class TestParsing:
    """Test git output parsers."""

    def test_parse_ahead_behind(self):
        assert parse_ahead_behind("0\t3\n") == (0, 3)

    @pytest.mark.parametrize("output", ["", "1", "1 2 3", "a b"])
    def test_parse_ahead_behind_invalid(self, output):
        with pytest.raises(ValueError):
            parse_ahead_behind(output)

    def test_parse_remote_show_head(self):
        output = (
            "* remote origin\n"
            "  Fetch URL: git@example.com:team/app.git\n"
            "  HEAD branch: trunk\n"
        )
        assert parse_remote_show_head(output) == "trunk"

    def test_parse_remote_show_head_unknown(self):
        assert parse_remote_show_head("  HEAD branch: (unknown)") is None
        assert parse_remote_show_head("* remote origin") is None

    def test_strip_remote_prefix(self):
        assert strip_remote_prefix("origin/main\n", "origin") == "main"
        assert strip_remote_prefix("origin/release/2.0", "origin") == "release/2.0"
        assert strip_remote_prefix("upstream/main", "origin") is None

    def test_pick_remote(self):
        assert pick_remote([]) is None
        assert pick_remote(["upstream", "origin"]) == "origin"
        assert pick_remote(["upstream", "fork"]) == "upstream"

    def test_has_changes(self):
        assert not has_changes("")
        assert not has_changes("\n")
        assert has_changes(" M README.md")

    def test_clean_stderr(self):
        assert clean_stderr("\n  stderr: 'fatal: bad revision'") == "fatal: bad revision"
        assert clean_stderr("plain message") == "plain message"
        assert clean_stderr(None) == ""
