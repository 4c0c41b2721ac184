"""Command-line interface for git-pull-reminder"""

import sys
from pathlib import Path
from threading import Event
from typing import Optional

from rich.console import Console

from git_pull_reminder.cli.args import parse_args
from git_pull_reminder.core import ReminderSession
from git_pull_reminder.exceptions import SettingsError
from git_pull_reminder.formatters import format_outcome, format_settings_table
from git_pull_reminder.logging_config import setup_logging
from git_pull_reminder.models.outcome import OutcomeKind, SyncResult
from git_pull_reminder.services.settings_store import SettingsStore, parse_setting
from git_pull_reminder.ui.console import ConsoleHost

console = Console()


def resolve_workspace(path_arg: Optional[str]) -> Optional[str]:
    """Absolute working directory, or None when it does not exist."""
    path = Path(path_arg).expanduser() if path_arg else Path.cwd()
    if not path.is_dir():
        return None
    return str(path.resolve())


def run_settings(settings: SettingsStore, parsed_args) -> int:
    """Show settings, applying --reset, --set and --add-branch first."""
    try:
        if parsed_args.reset:
            settings.reset()
            console.print("[yellow]Settings restored to defaults[/yellow]")

        changes = {}
        for assignment in parsed_args.assignments:
            key, sep, raw = assignment.partition("=")
            if not sep:
                raise SettingsError(f"Expected KEY=VALUE, got '{assignment}'")
            changes[key.strip()] = parse_setting(key.strip(), raw)

        if parsed_args.add_branch:
            watched = changes.get("watched_branches", settings.load().watched_branches)
            changes["watched_branches"] = watched + [
                name for name in parsed_args.add_branch if name not in watched
            ]

        if changes:
            settings.update(**changes)
            console.print("[green]Settings saved[/green]")
    except SettingsError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print(format_settings_table(settings.load(), title="Settings"))
    console.print(f"[dim]{settings.settings_file}[/dim]")
    return 0


def run_watch(repo_path: Optional[str], settings: SettingsStore, use_tui: bool) -> int:
    """Keep a session running until the user quits."""
    if use_tui:
        from git_pull_reminder.tui import PullReminderApp
        app = PullReminderApp(repo_path, settings)
        app.run()
        return 0

    host = ConsoleHost(settings, interactive=False, persistent=True)
    session = ReminderSession(repo_path, host, settings)
    session.start()
    console.print(f"Watching [cyan]{repo_path}[/cyan] - press Ctrl+C to stop")
    stopped = Event()
    try:
        while not stopped.wait(1):
            pass
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped watching[/yellow]")
    finally:
        session.shutdown()
    return 0


def main(argv=None):
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        use_tui = parsed_args.command == "watch" and (
            parsed_args.interactive or (sys.stdin.isatty() and not parsed_args.no_interactive)
        )
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=use_tui)

        repo_path = resolve_workspace(parsed_args.path)
        settings = SettingsStore(repo_path or str(Path.cwd()))

        if parsed_args.debug and not use_tui:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"  Working directory: {repo_path}")
            console.print(f"  Settings file: {settings.settings_file}")
            for key, value in settings.load().to_dict().items():
                console.print(f"  {key}: {value}")

        if parsed_args.command == "settings":
            return run_settings(settings, parsed_args)

        if parsed_args.command == "watch":
            return run_watch(repo_path, settings, use_tui)

        interactive = sys.stdin.isatty() and not getattr(parsed_args, "no_interactive", False)
        host = ConsoleHost(settings, interactive=interactive, persistent=False)
        session = ReminderSession(repo_path, host, settings)

        if parsed_args.command == "pull":
            result = session.pull_now()
            return 0 if result == SyncResult.PULLED else 1

        outcome = session.check_now()
        console.print(f"[dim]Result: {format_outcome(outcome)}[/dim]")
        if outcome is None or outcome.error or outcome.kind == OutcomeKind.NO_WORKSPACE:
            return 1
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
