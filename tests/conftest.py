"""Pytest fixtures for git-pull-reminder tests"""
import tempfile
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock
import pytest
import git

from git_pull_reminder.services.git.commands import GitCommands
from git_pull_reminder.services.settings_store import SettingsStore
from git_pull_reminder.ui.host import Host, TimerHandle


def configure_user(repo):
    """Configure git user for commits."""
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


def commit_file(repo, filename, content, message):
    """Write a file and commit it."""
    path = Path(repo.working_dir) / filename
    path.write_text(content)
    repo.index.add([filename])
    repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings_store(temp_dir):
    """Settings store writing into the temp directory."""
    work = temp_dir / "workspace"
    work.mkdir(exist_ok=True)
    return SettingsStore(str(work), settings_dir=temp_dir / "settings")


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository without a remote."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    configure_user(repo)
    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except git.exc.GitCommandError:
        pass

    yield repo

    repo.close()


@pytest.fixture
def remote_repos(temp_dir):
    """A bare origin with two clones: ``local`` (under test) and ``other``.

    ``other`` plays a teammate: commit and push there to put ``local`` behind.
    """
    seed = git.Repo.init(temp_dir / "seed")
    configure_user(seed)
    commit_file(seed, "README.md", "# Test Repository\n", "Initial commit")
    seed.git.branch('-M', 'main')

    origin = git.Repo.clone_from(seed.working_dir, str(temp_dir / "origin.git"), bare=True)
    local = git.Repo.clone_from(str(temp_dir / "origin.git"), str(temp_dir / "local"))
    other = git.Repo.clone_from(str(temp_dir / "origin.git"), str(temp_dir / "other"))
    configure_user(local)
    configure_user(other)

    yield SimpleNamespace(
        origin=origin,
        local=local,
        other=other,
        commit=commit_file,
        push=push_commit,
    )

    for repo in (seed, origin, local, other):
        repo.close()


def push_commit(repo, filename="remote.txt", content="remote change\n", message="Remote change"):
    """Commit a file in ``repo`` and push it to origin/main."""
    commit_file(repo, filename, content, message)
    repo.git.push("origin", "main")


@pytest.fixture
def mock_commands():
    """A GitCommands double describing a clean repo that is in sync."""
    commands = Mock(spec=GitCommands)
    commands.timeout = 30
    commands.git_dir.return_value = ".git"
    commands.list_remotes.return_value = ["origin"]
    commands.fetch.return_value = None
    commands.current_branch.return_value = "main"
    commands.remote_head_branch.return_value = "main"
    commands.remote_show_head_branch.return_value = None
    commands.ahead_behind.return_value = (0, 0)
    commands.status_porcelain.return_value = ""
    commands.merge_base.return_value = "abc123"
    commands.merge_tree.return_value = ""
    commands.stash_push.return_value = True
    commands.stash_pop.return_value = None
    commands.pull.return_value = "Already up to date."
    commands.incoming_log.return_value = "abc123 Remote change"
    commands.incoming_diffstat.return_value = " remote.txt | 1 +"
    return commands


class FakeTimer(TimerHandle):
    def __init__(self, seconds, callback, repeat):
        self.seconds = seconds
        self.callback = callback
        self.repeat = repeat
        self.stopped = False

    def stop(self):
        self.stopped = True

    def fire(self):
        self.callback()


class FakeHost(Host):
    """Records everything the session shows and answers prompts from a script."""

    def __init__(self, answers=None, persistent=True):
        self.persistent = persistent
        self.answers = list(answers or [])
        self.statuses = []
        self.messages = []
        self.errors = []
        self.prompts = []
        self.details = []
        self.timers = []
        self.settings_opened = 0

    @property
    def status(self):
        return self.statuses[-1] if self.statuses else None

    def render_status(self, state):
        self.statuses.append(state)

    def show_message(self, message, level, timeout):
        self.messages.append((level, message))

    def show_error(self, message):
        self.errors.append(message)

    def ask(self, message, actions, level="info"):
        self.prompts.append((message, list(actions), level))
        return self.answers.pop(0) if self.answers else None

    def show_details(self, title, body):
        self.details.append((title, body))

    def open_settings(self):
        self.settings_opened += 1

    def start_interval(self, seconds, callback):
        timer = FakeTimer(seconds, callback, repeat=True)
        self.timers.append(timer)
        return timer

    def call_later(self, seconds, callback):
        timer = FakeTimer(seconds, callback, repeat=False)
        self.timers.append(timer)
        return timer

    def run_background(self, callback):
        callback()

    @property
    def active_intervals(self):
        return [t for t in self.timers if t.repeat and not t.stopped]


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def make_host():
    """Factory for hosts with scripted prompt answers."""
    return FakeHost
