"""Remote-status decision procedure"""
from dataclasses import replace
from typing import Optional, TYPE_CHECKING

from git_pull_reminder.config import Config
from git_pull_reminder.exceptions import GitOperationError, SettingsError
from git_pull_reminder.logging_config import get_logger
from git_pull_reminder.models.outcome import OutcomeKind, PollOutcome
from git_pull_reminder.services.git.commands import GitCommands
from git_pull_reminder.services.git.parsing import has_changes, pick_remote

if TYPE_CHECKING:
    from git_pull_reminder.services.settings_store import SettingsStore

logger = get_logger(__name__)


class RemoteStatusPoller:
    """Runs the fixed chain of git queries and decides one PollOutcome.

    Steps run strictly in order and the first failure ends the chain. The
    only side effect is default-branch auto-detection, which may append the
    detected branch to the stored watch list.
    """

    def __init__(
        self,
        repo_path: str,
        settings: "SettingsStore",
        commands: Optional[GitCommands] = None,
    ):
        self.repo_path = repo_path
        self.settings = settings
        self.commands = commands or GitCommands(repo_path)

    def check(self) -> PollOutcome:
        """Run one poll cycle against the working directory."""
        config = self.settings.load()
        self.commands.timeout = config.git_timeout

        try:
            self.commands.git_dir()
        except GitOperationError as e:
            logger.debug(f"Not a repository: {e}")
            return PollOutcome(OutcomeKind.NOT_A_REPO, message=e.message)

        try:
            remote = pick_remote(self.commands.list_remotes())
        except GitOperationError as e:
            logger.debug(f"Listing remotes failed: {e}")
            return PollOutcome(OutcomeKind.NO_REMOTE, message=e.message)
        if remote is None:
            return PollOutcome(OutcomeKind.NO_REMOTE)

        try:
            self.commands.fetch()
        except GitOperationError as e:
            logger.info(f"Fetch failed: {e}")
            return PollOutcome(OutcomeKind.FETCH_FAILED, message=e.message)

        try:
            branch = self.commands.current_branch()
        except GitOperationError as e:
            logger.debug(f"Unable to determine branch: {e}")
            return PollOutcome(OutcomeKind.BRANCH_UNRESOLVED, message=e.message)

        detected = None
        if config.uses_default_branches:
            config, detected = self._auto_add_default_branch(config, remote)

        outcome = self._branch_status(config, branch)
        return replace(outcome, detected_branch=detected)

    def detect_default_branch(self, remote: str) -> Optional[str]:
        """Find the remote's default branch; errors mean "unknown"."""
        try:
            branch = self.commands.remote_head_branch(remote)
            if branch:
                return branch
        except GitOperationError as e:
            logger.debug(f"No {remote}/HEAD symref: {e}")

        try:
            return self.commands.remote_show_head_branch(remote)
        except GitOperationError as e:
            logger.debug(f"Asking {remote} for its HEAD branch failed: {e}")
            return None

    def _auto_add_default_branch(self, config: Config, remote: str):
        """Append the detected default branch to a factory-default watch list.

        Returns:
            (config, detected branch or None when nothing was added)
        """
        detected = self.detect_default_branch(remote)
        if not detected or not config.auto_add_detected_default_branch:
            return config, None
        if detected in config.watched_branches:
            return config, None

        try:
            updated = self.settings.update(watched_branches=config.watched_branches + [detected])
        except SettingsError as e:
            logger.warning(f"Could not save detected default branch '{detected}': {e}")
            return config, None

        logger.info(f"Auto-detected default branch '{detected}', now monitoring it")
        return updated, detected

    def _branch_status(self, config: Config, branch: str) -> PollOutcome:
        if not config.is_watched(branch):
            logger.debug(f"Branch '{branch}' is not watched")
            return PollOutcome(OutcomeKind.BRANCH_UNWATCHED, branch=branch)

        try:
            behind, ahead = self.commands.ahead_behind()
        except GitOperationError as e:
            logger.debug(f"Ahead/behind failed for '{branch}': {e}")
            return PollOutcome(OutcomeKind.NO_UPSTREAM, branch=branch, message=e.message)

        if behind == 0:
            kind = OutcomeKind.AHEAD_ONLY if ahead > 0 else OutcomeKind.UP_TO_DATE
            return PollOutcome(kind, behind=0, ahead=ahead, branch=branch)

        conflicted = config.conflict_detection and self.has_potential_conflicts()
        kind = OutcomeKind.BEHIND_CONFLICTED if conflicted else OutcomeKind.BEHIND_CLEAN
        return PollOutcome(kind, behind=behind, ahead=ahead, branch=branch)

    def has_potential_conflicts(self) -> bool:
        """Preview merging upstream over a dirty working tree.

        Fails open: any error reads as "no conflicts", so a broken check can
        never hold back the pull prompt.
        """
        try:
            if not has_changes(self.commands.status_porcelain()):
                return False
            base = self.commands.merge_base()
            return has_changes(self.commands.merge_tree(base))
        except GitOperationError as e:
            logger.debug(f"Conflict check failed, assuming no conflicts: {e}")
            return False
