"""User interface hosts and widgets for git-pull-reminder."""
