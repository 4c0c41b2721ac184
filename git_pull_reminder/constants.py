"""Shared constants for git-pull-reminder."""

from typing import List


APP_NAME = "git-pull-reminder"

# Watch list a fresh workspace starts with; default-branch detection only runs
# while the configured list still equals this exactly.
DEFAULT_WATCHED_BRANCHES: List[str] = ["main", "master", "develop"]

NOTIFICATION_LEVELS = ["info", "warning", "error"]

# Activity-aware scheduling (seconds)
QUIET_WINDOW_SECONDS = 30
ACTIVITY_DECAY_SECONDS = 60

# Timings (seconds)
INITIAL_CHECK_DELAY = 5
REPOLL_DELAY = 1
PULL_STATUS_RESET_DELAY = 3
STASH_STATUS_RESET_DELAY = 5
MESSAGE_TIMEOUT = 5

# Captured git output is capped at 1 MiB
MAX_OUTPUT_BYTES = 1024 * 1024

STASH_MESSAGE = "Auto-stash before pull"
NO_LOCAL_CHANGES_MARKER = "No local changes to save"


# Prompt actions
class Action:
    """Labels for prompt buttons."""

    ADD_BRANCH = "Add This Branch"
    SETTINGS = "Settings"
    PULL_NOW = "Pull Now"
    PULL_ANYWAY = "Pull Anyway"
    STASH_AND_PULL = "Stash & Pull"
    VIEW_CHANGES = "View Changes"
    LATER = "Later"
    RESTORE = "Restore"
    KEEP_STASHED = "Keep Stashed"


# Status indicator texts
STATUS_IDLE = ("⎇ Git Pull Reminder", "Click to check for remote commits")
STATUS_CHECKING = ("⟳ Checking...", "Checking for remote commits")
STATUS_NOT_A_REPO = ("✗ Not a Git repo", "This folder is not a Git repository")
STATUS_NO_REMOTE = ("⚠ No remote", "No Git remote configured")
STATUS_FETCH_FAILED = ("✗ Fetch failed", "Failed to fetch from remote")
STATUS_NO_UPSTREAM = ("⚠ No upstream", "No upstream branch configured")
STATUS_SYNCED = ("✓ Synced", "Repository is up to date")
STATUS_PULLING = ("⟳ Pulling changes...", "Pulling changes from remote")
STATUS_PULLED = ("✓ Pulled", "Successfully pulled changes")
STATUS_PULL_FAILED = ("✗ Pull failed", "Failed to pull changes")
STATUS_STASHING = ("⟳ Stashing & Pulling...", "Stashing changes and pulling from remote")
STATUS_STASHED_PULLED = ("✓ Stashed & Pulled", "Successfully stashed and pulled changes")
STATUS_STASH_FAILED = ("✗ Stash failed", "Failed to stash changes")


# Indicator colors (Rich/Textual color names)
class StatusColor:
    """Colors for the status indicator."""

    DEFAULT = ""
    ERROR = "red"
    WARNING = "yellow"
    SUCCESS = "green"
    INCOMING = "dark_orange"
    OUTGOING = "white"


# Console colors per notification level
LEVEL_COLORS = {
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
}
