"""Configuration management for pomotrack."""

import json
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from pomotrack.models.focus.cycling import PomodoroConfig


class FocusConfig(BaseModel):
    """Pomodoro timings and cycling."""

    work_minutes: int = Field(default=25, ge=1)
    short_break_minutes: int = Field(default=5, ge=1)
    long_break_minutes: int = Field(default=15, ge=1)
    sessions_before_long_break: int = Field(default=4, ge=0)
    auto_start_next: bool = Field(default=False)

    def to_pomodoro_config(self) -> PomodoroConfig:
        return PomodoroConfig(
            work_minutes=self.work_minutes,
            short_break_minutes=self.short_break_minutes,
            long_break_minutes=self.long_break_minutes,
            sessions_before_long_break=self.sessions_before_long_break,
        )


class UIConfig(BaseModel):
    """UI configuration."""

    page_size: int = Field(default=25, ge=1)
    color: bool = Field(default=True)


class StorageConfig(BaseModel):
    """Where the JSON store lives. None means the user data directory."""

    path: Optional[str] = Field(default=None)


class Config(BaseModel):
    """Main configuration."""

    focus: FocusConfig = Field(default_factory=FocusConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


class ConfigManager:
    """Manages pomotrack configuration."""

    def __init__(self, profile: str = "default", config_dir: Optional[Path] = None):
        self.profile = profile
        self.config_dir = config_dir or Path(user_config_dir("pomotrack"))
        self.config_file = self.config_dir / f"{profile}.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except (json.JSONDecodeError, TypeError, ValidationError):
                # If config is corrupted, return default
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key."""
        keys = key.split(".")
        config_dict = self.config.model_dump()

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        # Set the value
        current[keys[-1]] = value

        # Reload config from the modified dictionary
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            # Reset specific key to default
            default_value = self.get_from_config(Config(), key)
            if default_value is not None:
                self.set(key, default_value)
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager


def reset_config_manager() -> None:
    """Forget the global config manager (used by tests)."""
    global _config_manager
    _config_manager = None
