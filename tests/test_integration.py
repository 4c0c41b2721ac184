"""Integration tests against real repositories with a bare origin"""
from pathlib import Path

import pytest

from git_pull_reminder.constants import Action
from git_pull_reminder.exceptions import OutputLimitError
from git_pull_reminder.models.outcome import OutcomeKind, SyncResult
from git_pull_reminder.services.display_service import DisplayService
from git_pull_reminder.services.git.commands import GitCommands
from git_pull_reminder.services.poller import RemoteStatusPoller
from git_pull_reminder.services.settings_store import SettingsStore
from git_pull_reminder.services.sync_actions import SyncActions


def poll(path, temp_dir):
    settings = SettingsStore(str(path), settings_dir=temp_dir / "settings")
    return RemoteStatusPoller(str(path), settings).check()


class TestPollRealRepositories:
    """Test poll outcomes on real working copies."""

    def test_plain_directory(self, temp_dir):
        plain = temp_dir / "plain"
        plain.mkdir()
        assert poll(plain, temp_dir).kind == OutcomeKind.NOT_A_REPO

    def test_repository_without_remote(self, git_repo, temp_dir):
        assert poll(git_repo.working_dir, temp_dir).kind == OutcomeKind.NO_REMOTE

    def test_fresh_clone_is_up_to_date(self, remote_repos, temp_dir):
        outcome = poll(remote_repos.local.working_dir, temp_dir)
        assert outcome.kind == OutcomeKind.UP_TO_DATE
        assert outcome.branch == "main"

    def test_behind_after_teammate_push(self, remote_repos, temp_dir):
        """Test that commits pushed elsewhere are counted as behind."""
        remote_repos.push(remote_repos.other)
        outcome = poll(remote_repos.local.working_dir, temp_dir)

        assert outcome.kind == OutcomeKind.BEHIND_CLEAN
        assert (outcome.behind, outcome.ahead) == (1, 0)

    def test_ahead_with_local_commit(self, remote_repos, temp_dir):
        """Test that unpushed commits are counted as ahead, not behind."""
        remote_repos.commit(remote_repos.local, "local.txt", "local\n", "Local change")
        outcome = poll(remote_repos.local.working_dir, temp_dir)

        assert outcome.kind == OutcomeKind.AHEAD_ONLY
        assert (outcome.behind, outcome.ahead) == (0, 1)

    def test_diverged_with_overlapping_change(self, remote_repos, temp_dir):
        """Test that a dirty tree with the same file changed on both sides is conflicted."""
        remote_repos.push(remote_repos.other, "README.md", "# Theirs\n", "Edit readme remotely")
        remote_repos.commit(remote_repos.local, "README.md", "# Ours\n", "Edit readme locally")
        (Path(remote_repos.local.working_dir) / "scratch.txt").write_text("wip\n")

        outcome = poll(remote_repos.local.working_dir, temp_dir)

        assert outcome.kind == OutcomeKind.BEHIND_CONFLICTED
        assert (outcome.behind, outcome.ahead) == (1, 1)

    def test_branch_without_upstream(self, remote_repos, temp_dir):
        remote_repos.local.git.checkout("-b", "develop")
        outcome = poll(remote_repos.local.working_dir, temp_dir)
        assert outcome.kind == OutcomeKind.NO_UPSTREAM
        assert outcome.branch == "develop"

    def test_detached_head(self, remote_repos, temp_dir):
        remote_repos.local.git.checkout("--detach")
        assert poll(remote_repos.local.working_dir, temp_dir).kind == OutcomeKind.BRANCH_UNRESOLVED

    def test_unreachable_remote(self, remote_repos, temp_dir):
        remote_repos.local.git.remote("set-url", "origin", str(temp_dir / "missing.git"))
        assert poll(remote_repos.local.working_dir, temp_dir).kind == OutcomeKind.FETCH_FAILED


class TestGitCommandsRealRepositories:
    """Test GitCommands against real repositories."""

    def test_remote_head_branch(self, remote_repos):
        commands = GitCommands(remote_repos.local.working_dir)
        assert commands.remote_head_branch("origin") == "main"

    def test_stash_with_nothing_to_save(self, remote_repos):
        commands = GitCommands(remote_repos.local.working_dir)
        assert commands.stash_push("Auto-stash before pull") is False

    def test_incoming_log_lists_remote_commits(self, remote_repos):
        remote_repos.push(remote_repos.other, message="Teammate change")
        commands = GitCommands(remote_repos.local.working_dir)
        commands.fetch()
        assert "Teammate change" in commands.incoming_log()

    def test_output_limit(self, remote_repos):
        """Test that output over the cap is rejected."""
        commands = GitCommands(remote_repos.local.working_dir, max_output=2)
        with pytest.raises(OutputLimitError):
            commands.git_dir()


class TestSyncRealRepositories:
    """Test pulling into real working copies."""

    def test_pull_brings_in_remote_commits(self, remote_repos, temp_dir, fake_host):
        remote_repos.push(remote_repos.other)
        settings = SettingsStore(remote_repos.local.working_dir, settings_dir=temp_dir / "settings")
        commands = GitCommands(remote_repos.local.working_dir)
        actions = SyncActions(commands, DisplayService(fake_host, settings))

        assert actions.pull_changes() == SyncResult.PULLED
        assert (Path(remote_repos.local.working_dir) / "remote.txt").exists()
        assert commands.ahead_behind() == (0, 0)

    def test_stash_pull_and_restore(self, remote_repos, temp_dir, make_host):
        """Test that local edits survive a stash-and-pull with restore."""
        remote_repos.push(remote_repos.other)
        readme = Path(remote_repos.local.working_dir) / "README.md"
        readme.write_text("# Local edit\n")

        settings = SettingsStore(remote_repos.local.working_dir, settings_dir=temp_dir / "settings")
        host = make_host(answers=[Action.RESTORE])
        actions = SyncActions(GitCommands(remote_repos.local.working_dir), DisplayService(host, settings))

        assert actions.stash_and_pull() == SyncResult.STASHED_AND_PULLED
        assert readme.read_text() == "# Local edit\n"
        assert (Path(remote_repos.local.working_dir) / "remote.txt").exists()
        assert remote_repos.local.git.stash("list") == ""
