"""Services for git-pull-reminder."""
