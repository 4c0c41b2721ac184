"""Custom exceptions for git-pull-reminder"""

from typing import Optional


class GitPullReminderError(Exception):
    """Base exception for all git-pull-reminder errors."""
    pass


class GitOperationError(GitPullReminderError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class CommandTimeoutError(GitOperationError):
    """Exception raised when a git command exceeds the configured timeout."""

    def __init__(self, operation: str, timeout: float):
        self.timeout = timeout
        super().__init__(operation, message=f"timed out after {timeout:g}s")


class OutputLimitError(GitOperationError):
    """Exception raised when a git command produces more output than we capture."""

    def __init__(self, operation: str, limit: int):
        self.limit = limit
        super().__init__(operation, message=f"output exceeded {limit} bytes")


class DetachedHeadError(GitOperationError):
    """Exception raised when repository is in detached HEAD state."""

    def __init__(self):
        super().__init__("current_branch", message="Repository is in detached HEAD state")


class SettingsError(GitPullReminderError):
    """Exception raised for invalid settings keys or values."""
    pass
