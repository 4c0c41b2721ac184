"""Configuration handling for git-pull-reminder"""

from dataclasses import dataclass, field, fields
from typing import List

from git_pull_reminder.constants import DEFAULT_WATCHED_BRANCHES, NOTIFICATION_LEVELS


@dataclass
class Config:
    """Watch configuration for a working directory, with validation."""

    # Branch filtering
    watched_branches: List[str] = field(default_factory=lambda: list(DEFAULT_WATCHED_BRANCHES))
    auto_add_detected_default_branch: bool = True

    # Scheduling
    auto_check: bool = True
    check_interval: int = 5  # minutes
    git_timeout: int = 30  # seconds
    smart_timing: bool = True  # skip automatic checks while the user is active

    # Behaviour and display
    notification_level: str = "info"  # info, warning, error
    conflict_detection: bool = True
    show_status_bar: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_watched_branches()
        self._validate_check_interval()
        self._validate_git_timeout()
        self._validate_notification_level()

    def _validate_watched_branches(self):
        """Validate watched_branches is a list of non-empty names."""
        if not isinstance(self.watched_branches, list):
            raise ValueError("watched_branches must be a list")

        cleaned = []
        for name in self.watched_branches:
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"watched_branches entries must be non-empty strings, got {name!r}")
            name = name.strip()
            if name not in cleaned:
                cleaned.append(name)
        self.watched_branches = cleaned

    def _validate_check_interval(self):
        """Validate check_interval is positive."""
        if self.check_interval <= 0:
            raise ValueError(f"check_interval must be positive, got {self.check_interval}")

    def _validate_git_timeout(self):
        """Validate git_timeout is positive."""
        if self.git_timeout <= 0:
            raise ValueError(f"git_timeout must be positive, got {self.git_timeout}")

    def _validate_notification_level(self):
        """Validate notification_level is one of allowed values."""
        if self.notification_level not in NOTIFICATION_LEVELS:
            raise ValueError(
                f"notification_level must be one of {NOTIFICATION_LEVELS}, got '{self.notification_level}'"
            )

    @property
    def uses_default_branches(self) -> bool:
        """True while the watch list is still exactly the factory default."""
        return self.watched_branches == DEFAULT_WATCHED_BRANCHES

    def is_watched(self, branch: str) -> bool:
        """An empty watch list watches every branch."""
        return not self.watched_branches or branch in self.watched_branches

    def to_dict(self) -> dict:
        """Convert config to a JSON-friendly dictionary."""
        return {
            "watched_branches": list(self.watched_branches),
            "auto_add_detected_default_branch": self.auto_add_detected_default_branch,
            "auto_check": self.auto_check,
            "check_interval": self.check_interval,
            "git_timeout": self.git_timeout,
            "smart_timing": self.smart_timing,
            "notification_level": self.notification_level,
            "conflict_detection": self.conflict_detection,
            "show_status_bar": self.show_status_bar,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def known_fields(cls) -> set:
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known = cls.known_fields()
        filtered = {k: v for k, v in config_dict.items() if k in known}
        return cls(**filtered)
