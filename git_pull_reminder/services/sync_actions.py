"""Pull and stash-and-pull actions"""
from typing import TYPE_CHECKING

from git_pull_reminder.constants import (
    Action,
    STATUS_PULL_FAILED,
    STATUS_PULLED,
    STATUS_PULLING,
    STATUS_STASH_FAILED,
    STATUS_STASHED_PULLED,
    STATUS_STASHING,
    STASH_MESSAGE,
    StatusColor,
)
from git_pull_reminder.exceptions import GitOperationError
from git_pull_reminder.logging_config import get_logger
from git_pull_reminder.models.outcome import SyncResult

if TYPE_CHECKING:
    from git_pull_reminder.services.display_service import DisplayService
    from git_pull_reminder.services.git.commands import GitCommands

logger = get_logger(__name__)


def _reason(error: GitOperationError) -> str:
    return error.message or str(error)


class SyncActions:
    """Runs the pulls offered by the prompts and reports on them."""

    def __init__(self, commands: "GitCommands", display: "DisplayService"):
        self.commands = commands
        self.display = display

    def pull_changes(self) -> SyncResult:
        """Pull from upstream; failures leave an error status."""
        self.display.set_status(*STATUS_PULLING)

        try:
            self.commands.pull()
        except GitOperationError as e:
            logger.warning(f"Pull failed: {e}")
            self.display.notify(f"Failed to pull: {_reason(e)}", "error")
            self.display.set_status(*STATUS_PULL_FAILED, StatusColor.ERROR)
            return SyncResult.PULL_FAILED

        self.display.notify("Successfully pulled changes!")
        self.display.set_status(*STATUS_PULLED, StatusColor.SUCCESS)
        return SyncResult.PULLED

    def stash_and_pull(self) -> SyncResult:
        """Stash local changes, pull, then offer to restore the stash.

        A failed pull pops the stash once, best effort, so the user's changes
        are not left behind. A failed restore after a good pull is only a
        warning: the stash entry is still there.
        """
        self.display.set_status(*STATUS_STASHING)

        try:
            stashed = self.commands.stash_push(STASH_MESSAGE)
        except GitOperationError as e:
            logger.warning(f"Stash failed: {e}")
            self.display.notify(f"Failed to stash: {_reason(e)}", "error")
            self.display.set_status(*STATUS_STASH_FAILED, StatusColor.ERROR)
            return SyncResult.STASH_FAILED

        try:
            self.commands.pull()
        except GitOperationError as e:
            logger.warning(f"Pull after stash failed: {e}")
            self.display.notify(f"Failed to pull: {_reason(e)}", "error")
            self.display.set_status(*STATUS_PULL_FAILED, StatusColor.ERROR)
            if stashed:
                try:
                    self.commands.stash_pop()
                except GitOperationError as pop_error:
                    logger.debug(f"Restoring stash after failed pull failed: {pop_error}")
            return SyncResult.PULL_FAILED

        self.display.notify("Successfully stashed and pulled changes!")
        self.display.set_status(*STATUS_STASHED_PULLED, StatusColor.SUCCESS)

        if not stashed:
            logger.debug("Nothing was stashed, skipping restore")
            return SyncResult.STASHED_AND_PULLED

        choice = self.display.prompt(
            "Changes stashed and pull completed. Restore stashed changes?",
            [Action.RESTORE, Action.KEEP_STASHED],
        )
        if choice == Action.RESTORE:
            try:
                self.commands.stash_pop()
                self.display.notify("Stashed changes restored!")
            except GitOperationError as e:
                logger.warning(f"Stash pop failed: {e}")
                self.display.notify("Couldn't auto-restore stash. Check for conflicts.", "warning")

        return SyncResult.STASHED_AND_PULLED
