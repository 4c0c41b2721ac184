"""Data models for git-pull-reminder."""

from .outcome import OutcomeKind, PollError, PollOutcome, SyncResult
from .status import StatusState

__all__ = ["OutcomeKind", "PollError", "PollOutcome", "SyncResult", "StatusState"]
