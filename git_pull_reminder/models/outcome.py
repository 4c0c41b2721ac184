"""Poll outcome model and error taxonomy"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class OutcomeKind(Enum):
    """What a single poll decided."""
    NO_WORKSPACE = "no-workspace"
    SKIPPED = "skipped"  # automatic poll while the user is active
    BUSY = "busy"  # another poll was already running
    NOT_A_REPO = "not-a-repo"
    NO_REMOTE = "no-remote"
    FETCH_FAILED = "fetch-failed"
    BRANCH_UNRESOLVED = "branch-unresolved"
    BRANCH_UNWATCHED = "branch-unwatched"
    NO_UPSTREAM = "no-upstream"
    UP_TO_DATE = "up-to-date"
    AHEAD_ONLY = "ahead-only"
    BEHIND_CLEAN = "behind-clean"
    BEHIND_CONFLICTED = "behind-conflicted"


class PollError(Enum):
    """Failures a poll or a sync action can run into."""
    NOT_REPOSITORY = "not-repository"
    NO_REMOTE = "no-remote"
    FETCH_FAILURE = "fetch-failure"
    BRANCH_RESOLUTION_FAILURE = "branch-resolution-failure"
    UPSTREAM_MISSING = "upstream-missing"
    CONFLICT_CHECK_FAILURE = "conflict-check-failure"
    STASH_FAILURE = "stash-failure"
    PULL_FAILURE = "pull-failure"
    STASH_POP_FAILURE = "stash-pop-failure"


# Outcomes that are only reported when the user asked for the check
FAILURE_KINDS = {
    OutcomeKind.NOT_A_REPO: PollError.NOT_REPOSITORY,
    OutcomeKind.NO_REMOTE: PollError.NO_REMOTE,
    OutcomeKind.FETCH_FAILED: PollError.FETCH_FAILURE,
    OutcomeKind.BRANCH_UNRESOLVED: PollError.BRANCH_RESOLUTION_FAILURE,
    OutcomeKind.NO_UPSTREAM: PollError.UPSTREAM_MISSING,
}


@dataclass(frozen=True)
class PollOutcome:
    """Result of one poll cycle. Never persisted."""
    kind: OutcomeKind
    behind: int = 0
    ahead: int = 0
    branch: Optional[str] = None
    detected_branch: Optional[str] = None  # default branch added to the watch list
    message: Optional[str] = None  # failure detail from git

    @property
    def error(self) -> Optional[PollError]:
        return FAILURE_KINDS.get(self.kind)

    @property
    def is_behind(self) -> bool:
        return self.kind in (OutcomeKind.BEHIND_CLEAN, OutcomeKind.BEHIND_CONFLICTED)


class SyncResult(Enum):
    """Final state of a pull or stash-and-pull action."""
    PULLED = "pulled"
    STASHED_AND_PULLED = "stashed-and-pulled"
    PULL_FAILED = "pull-failed"
    STASH_FAILED = "stash-failed"
