# Runtime settings for the ringring hook dispatcher
# Loads settings from environment variables with sensible defaults

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from utils.constants import EnvVars, PathConstants
from utils.environment import EnvironmentProvider, OsEnvironment
from utils.errors import UnknownThemeError
from utils import paths

# Load <config_dir>/.env for users who prefer a file over shell exports.
# DON'T override existing env vars (the real environment takes priority)
load_dotenv(paths.config_dir() / PathConstants.ENV_FILE)


def parse_bool_env(value: Optional[str], default: bool = False) -> bool:
    """
    Helper function to parse boolean environment variables consistently.

    Accepts multiple formats for better UX:
    - "true", "yes", "on", "1" → True
    - "false", "no", "off", "0" → False
    - Empty/None → default value

    Case-insensitive.
    """
    if not value:
        return default
    return value.strip().lower() in ("true", "yes", "on", "1")


def parse_volume(value: Optional[str], default: float = 0.5) -> float:
    """Parse a 0.0-1.0 volume, clamping out-of-range values."""
    if not value:
        return default
    try:
        volume = float(value)
    except ValueError:
        return default
    if math.isnan(volume):
        return default
    return min(max(volume, 0.0), 1.0)


def is_valid_theme_name(theme: str) -> bool:
    """A theme name must be one plain directory name under the data directory."""
    if not theme or theme in (".", ".."):
        return False
    return "/" not in theme and "\\" not in theme and "\0" not in theme


@dataclass
class Config:
    """Configuration settings loaded from environment variables."""

    config_dir: Path
    data_dir: Path
    session_dir: Path
    legacy_theme_file: Path
    volume: float = 0.5
    language: str = "cs"
    silent_effects: bool = False
    silent_notifications: bool = False

    @classmethod
    def from_env(cls, env: Optional[EnvironmentProvider] = None) -> "Config":
        """Create configuration from environment variables.

        The theme override (CLAUDE_SOUND_THEME) is deliberately not captured
        here: ThemeResolver reads it through its environment provider at
        resolution time.
        """
        env = env or OsEnvironment()
        return cls(
            config_dir=paths.config_dir(env),
            data_dir=paths.data_dir(env),
            session_dir=paths.session_dir(env),
            legacy_theme_file=paths.legacy_theme_file(env),
            volume=parse_volume(env.get(EnvVars.VOLUME)),
            language=(env.get_nonempty(EnvVars.LANGUAGE) or "cs").lower(),
            silent_effects=parse_bool_env(env.get(EnvVars.SILENT)),
            silent_notifications=parse_bool_env(env.get(EnvVars.NO_NOTIFY)),
        )

    @property
    def config_file(self) -> Path:
        """Path of the user's config.json."""
        return self.config_dir / PathConstants.CONFIG_FILE

    def theme_dir(self, theme: str) -> Path:
        """
        Directory of an installed theme.

        Raises:
            UnknownThemeError: the name is not a single path component
        """
        if not is_valid_theme_name(theme):
            raise UnknownThemeError(theme)
        return self.data_dir / theme

    def installed_themes(self) -> list:
        """Names of theme directories under the data directory, sorted."""
        if not self.data_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.data_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        )


config = Config.from_env()

