"""Command-line argument parsing for git-pull-reminder."""

import argparse
from git_pull_reminder.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-pull-reminder",
        description="Watch a Git working copy and prompt when the remote has new commits",
        epilog="Settings are stored per working directory in ~/.git-pull-reminder/settings/",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-pull-reminder {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--path",
        default=None,
        help="Working directory to watch (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    check = subparsers.add_parser("check", help="Check for remote commits now")
    check.add_argument(
        "--no-interactive",
        action="store_true",
        help="Never prompt; report the result only (for scripts/automation)",
    )

    subparsers.add_parser("pull", help="Pull now without checking first")

    watch = subparsers.add_parser(
        "watch", help="Keep watching and prompt when new commits arrive (default)"
    )
    watch.add_argument(
        "--interactive", action="store_true", help="Launch interactive TUI mode (default for TTY)"
    )
    watch.add_argument(
        "--no-interactive",
        action="store_true",
        help="Watch in plain console mode without prompts",
    )

    settings = subparsers.add_parser("settings", help="Show or change settings")
    settings.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Change a setting (repeatable); lists are comma separated",
    )
    settings.add_argument(
        "--add-branch", action="append", default=[], metavar="NAME", help="Watch another branch"
    )
    settings.add_argument("--reset", action="store_true", help="Restore default settings")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    if args.command is None:
        args.command = "watch"
        args.interactive = False
        args.no_interactive = False
    return args
