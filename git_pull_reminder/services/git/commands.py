"""Git command wrapper used by the poller and sync actions"""
import time
from typing import List, Optional, Tuple

import git

from git_pull_reminder.constants import MAX_OUTPUT_BYTES, NO_LOCAL_CHANGES_MARKER, STASH_MESSAGE
from git_pull_reminder.exceptions import (
    CommandTimeoutError,
    DetachedHeadError,
    GitOperationError,
    OutputLimitError,
)
from git_pull_reminder.logging_config import get_logger
from git_pull_reminder.services.git.parsing import (
    clean_stderr,
    parse_ahead_behind,
    parse_remote_show_head,
    strip_remote_prefix,
)

logger = get_logger(__name__)


class GitCommands:
    """One method per git operation the reminder needs.

    Every call runs in ``repo_path``, is killed after ``timeout`` seconds and
    rejects output larger than ``max_output`` bytes. Any failure raises
    GitOperationError, so callers only need a single except clause per step.
    """

    def __init__(self, repo_path: str, timeout: float = 30, max_output: int = MAX_OUTPUT_BYTES):
        """Initialize the command wrapper.

        Args:
            repo_path: Working directory the commands run in
            timeout: Seconds before a command is killed
            max_output: Largest accepted stdout, in bytes
        """
        self.repo_path = repo_path
        self.timeout = timeout
        self.max_output = max_output

    def _get_git(self) -> git.Git:
        """Get a git command wrapper bound to the working directory.

        A plain ``git.Git`` is used instead of ``git.Repo`` so the repository
        check itself can run in a directory that is not a repository.
        """
        g = git.Git(self.repo_path)
        # Never block a background check on a credential prompt
        g.update_environment(GIT_TERMINAL_PROMPT="0")
        return g

    def _run(self, operation: str, *args: str) -> str:
        """Run ``git <args>`` and return its stripped stdout."""
        logger.debug(f"Running git {' '.join(args)} in {self.repo_path}")
        started = time.monotonic()
        try:
            output = self._get_git().execute(
                ["git", *args],
                kill_after_timeout=self.timeout,
            )
        except git.exc.GitCommandError as e:
            if time.monotonic() - started >= self.timeout:
                raise CommandTimeoutError(operation, self.timeout) from e
            stderr = clean_stderr(e.stderr)
            raise GitOperationError(operation, message=stderr or str(e)) from e
        except (git.exc.CommandError, OSError) as e:
            raise GitOperationError(operation, message=str(e)) from e

        if len(output.encode("utf-8", errors="replace")) > self.max_output:
            raise OutputLimitError(operation, self.max_output)
        return output

    def git_dir(self) -> str:
        """Return the git directory; fails outside a working copy."""
        return self._run("is_repository", "rev-parse", "--git-dir")

    def list_remotes(self) -> List[str]:
        output = self._run("list_remotes", "remote")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def fetch(self, remote: Optional[str] = None) -> None:
        args = ["fetch"]
        if remote:
            args.append(remote)
        self._run("fetch", *args)

    def current_branch(self) -> str:
        """Return the checked-out branch name.

        Raises:
            DetachedHeadError: when HEAD does not point at a branch
        """
        branch = self._run("current_branch", "branch", "--show-current").strip()
        if not branch:
            raise DetachedHeadError()
        return branch

    def remote_head_branch(self, remote: str) -> Optional[str]:
        """Default branch according to the local ``<remote>/HEAD`` symref."""
        ref = self._run(
            "remote_head_branch", "symbolic-ref", "--short", f"refs/remotes/{remote}/HEAD"
        )
        return strip_remote_prefix(ref, remote)

    def remote_show_head_branch(self, remote: str) -> Optional[str]:
        """Default branch as reported by the remote itself (network call)."""
        output = self._run("remote_show_head_branch", "remote", "show", remote)
        return parse_remote_show_head(output)

    def ahead_behind(self) -> Tuple[int, int]:
        """Return (behind, ahead) of HEAD relative to its upstream."""
        output = self._run("ahead_behind", "rev-list", "--left-right", "--count", "@{u}...HEAD")
        try:
            return parse_ahead_behind(output)
        except ValueError as e:
            raise GitOperationError("ahead_behind", message=str(e)) from e

    def status_porcelain(self) -> str:
        return self._run("status", "status", "--porcelain")

    def merge_base(self, left: str = "HEAD", right: str = "@{u}") -> str:
        return self._run("merge_base", "merge-base", left, right).strip()

    def merge_tree(self, base: str, ours: str = "HEAD", theirs: str = "@{u}") -> str:
        """Three-way merge preview; non-empty output marks potential conflicts."""
        return self._run("merge_tree", "merge-tree", base, ours, theirs)

    def stash_push(self, message: str = STASH_MESSAGE) -> bool:
        """Stash local changes.

        Returns:
            False when git had nothing to stash (no stash entry was created)
        """
        output = self._run("stash_push", "stash", "push", "-m", message)
        return NO_LOCAL_CHANGES_MARKER not in output

    def stash_pop(self) -> None:
        self._run("stash_pop", "stash", "pop")

    def pull(self) -> str:
        return self._run("pull", "pull")

    def incoming_log(self, limit: int = 50) -> str:
        """One line per commit that exists upstream but not locally."""
        return self._run(
            "incoming_log", "log", "--oneline", "--no-decorate", f"-n{limit}", "HEAD..@{u}"
        )

    def incoming_diffstat(self) -> str:
        return self._run("incoming_diffstat", "diff", "--stat", "HEAD...@{u}")
