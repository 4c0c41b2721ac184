"""Git-related services for git-pull-reminder."""

from .commands import GitCommands

__all__ = [
    "GitCommands",
]
