"""Version information for git-pull-reminder."""

try:
    from git_pull_reminder._version import __version__
except ImportError:
    # Fallback for development without tags or when running from source
    __version__ = "0.0.0+unknown"
