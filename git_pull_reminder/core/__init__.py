"""Core session logic for git-pull-reminder."""

from .session import ReminderSession

__all__ = ["ReminderSession"]
