"""Per-workspace settings storage for git-pull-reminder."""
import json
import hashlib
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional
from datetime import datetime
from contextlib import contextmanager
from threading import Lock

from git_pull_reminder.config import Config
from git_pull_reminder.exceptions import SettingsError
from git_pull_reminder.logging_config import get_log_dir

# Import fcntl for POSIX file locking (Unix/Linux/macOS)
try:
    import fcntl
    HAS_FCNTL = True
except ImportError:
    HAS_FCNTL = False

logger = logging.getLogger(__name__)

ConfigListener = Callable[[Config], None]


class SettingsStore:
    """Loads and saves the watch configuration of one working directory.

    Settings live in ``~/.git-pull-reminder/settings/<hash>.json`` so that each
    workspace keeps its own watch list. Listeners registered with
    ``add_listener`` run after every successful save.
    """

    def __init__(self, repo_path: str, settings_dir: Optional[Path] = None):
        """Initialize the store for a working directory.

        Args:
            repo_path: Path to the working directory
            settings_dir: Override for the settings directory (tests)
        """
        self.repo_path = Path(repo_path).resolve()
        self.settings_dir = settings_dir or (get_log_dir() / "settings")
        self.settings_file = self.settings_dir / f"{self._get_repo_hash()}.json"
        self._listeners: List[ConfigListener] = []
        self._write_lock = Lock()

    def _get_repo_hash(self) -> str:
        """Generate a unique hash for the repository path."""
        return hashlib.md5(str(self.repo_path).encode()).hexdigest()

    @contextmanager
    def _acquire_lock(self, file_handle, operation: str = "read"):
        """Acquire a file lock for settings operations."""
        if not HAS_FCNTL:
            logger.debug("File locking not available on this platform")
            yield
            return

        try:
            lock_type = fcntl.LOCK_EX if operation == "write" else fcntl.LOCK_SH
            fcntl.flock(file_handle.fileno(), lock_type)
            yield
        finally:
            try:
                fcntl.flock(file_handle.fileno(), fcntl.LOCK_UN)
            except OSError as e:
                logger.debug(f"Error releasing lock: {e}")

    def add_listener(self, listener: ConfigListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ConfigListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def load(self) -> Config:
        """Load settings, falling back to defaults on a missing or invalid file."""
        if not self.settings_file.exists():
            logger.debug("No settings file found, using defaults")
            return Config()

        try:
            with open(self.settings_file, 'r') as f:
                with self._acquire_lock(f, operation="read"):
                    data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in settings file: {e}")
            return Config()
        except OSError as e:
            logger.warning(f"Failed to read settings: {e}")
            return Config()

        if not isinstance(data, dict) or not isinstance(data.get("settings"), dict):
            logger.warning("Settings file has unexpected structure, using defaults")
            return Config()

        try:
            return Config.from_dict(data["settings"])
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid settings, using defaults: {e}")
            return Config()

    def save(self, config: Config) -> None:
        """Write settings atomically and notify listeners.

        Raises:
            SettingsError: if the file cannot be written
        """
        data = {
            "repo_path": str(self.repo_path),
            "last_updated": datetime.now().isoformat(),
            "settings": config.to_dict(),
        }

        with self._write_lock:
            temp_file = self.settings_file.with_suffix('.tmp')
            try:
                self.settings_dir.mkdir(parents=True, exist_ok=True)
                with open(temp_file, 'w') as f:
                    with self._acquire_lock(f, operation="write"):
                        json.dump(data, f, indent=2)
                        f.flush()
                temp_file.replace(self.settings_file)
            except OSError as e:
                raise SettingsError(f"Failed to save settings: {e}") from e
            finally:
                if temp_file.exists():
                    try:
                        temp_file.unlink()
                    except OSError:
                        pass

        logger.debug(f"Saved settings to {self.settings_file}")
        for listener in list(self._listeners):
            listener(config)

    def update(self, **changes: Any) -> Config:
        """Apply changes on top of the stored settings and save them.

        Raises:
            SettingsError: for unknown keys, invalid values or write failures
        """
        unknown = set(changes) - Config.known_fields()
        if unknown:
            raise SettingsError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        merged = self.load().to_dict()
        merged.update(changes)
        try:
            config = Config.from_dict(merged)
        except (TypeError, ValueError) as e:
            raise SettingsError(str(e)) from e

        self.save(config)
        return config

    def reset(self) -> Config:
        """Restore factory defaults."""
        config = Config()
        self.save(config)
        return config


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_setting(key: str, raw: str) -> Any:
    """Convert a command-line ``key=value`` string to the setting's type.

    Raises:
        SettingsError: for unknown keys or values of the wrong type
    """
    defaults = Config().to_dict()
    if key not in defaults:
        raise SettingsError(f"Unknown setting: {key}")

    default = defaults[key]
    value = raw.strip()
    if isinstance(default, bool):
        lowered = value.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise SettingsError(f"{key} expects true/false, got '{raw}'")
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            raise SettingsError(f"{key} expects a number, got '{raw}'") from None
    if isinstance(default, list):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value
