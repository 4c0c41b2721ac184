"""Status indicator model"""
from dataclasses import dataclass

from git_pull_reminder.constants import STATUS_IDLE, StatusColor


@dataclass(frozen=True)
class StatusState:
    """What the single persistent status indicator shows."""
    text: str
    tooltip: str = ""
    color: str = StatusColor.DEFAULT

    @classmethod
    def idle(cls) -> "StatusState":
        text, tooltip = STATUS_IDLE
        return cls(text, tooltip)
