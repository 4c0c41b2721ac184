"""
git-pull-reminder - Watch a Git working copy and prompt when the remote has new commits
"""

from .__version__ import __version__
from .core import ReminderSession
from .cli.main import main

__all__ = ["ReminderSession", "main", "__version__"]
