"""
Directory resolution for ringring.

Config and data directories follow the XDG base directory variables when set
and fall back to the platform convention otherwise.
"""

import platform
import tempfile
from pathlib import Path
from typing import Optional

from utils.constants import EnvVars, PathConstants
from utils.environment import EnvironmentProvider, OsEnvironment


def home_dir(env: Optional[EnvironmentProvider] = None) -> Path:
    """Return the user's home directory, /tmp when HOME is unset."""
    env = env or OsEnvironment()
    home = env.get_nonempty(EnvVars.HOME)
    return Path(home) if home else Path("/tmp")


def _platform_config_fallback(env: EnvironmentProvider) -> Path:
    if platform.system() == "Darwin":
        return home_dir(env) / "Library" / "Application Support"
    return home_dir(env) / ".config"


def _platform_data_fallback(env: EnvironmentProvider) -> Path:
    if platform.system() == "Darwin":
        return home_dir(env) / "Library" / "Application Support"
    return home_dir(env) / ".local" / "share"


def config_dir(env: Optional[EnvironmentProvider] = None) -> Path:
    """
    Get the configuration directory (holds config.json and .env).

    Returns:
        Path: $XDG_CONFIG_HOME/ringring, or the platform default
    """
    env = env or OsEnvironment()
    base = env.get_nonempty(EnvVars.XDG_CONFIG_HOME)
    if base:
        return Path(base) / PathConstants.APP_NAME
    return _platform_config_fallback(env) / PathConstants.APP_NAME


def data_dir(env: Optional[EnvironmentProvider] = None) -> Path:
    """
    Get the data directory (holds one sub-directory per installed theme).

    Returns:
        Path: $XDG_DATA_HOME/ringring, or the platform default
    """
    env = env or OsEnvironment()
    base = env.get_nonempty(EnvVars.XDG_DATA_HOME)
    if base:
        return Path(base) / PathConstants.APP_NAME
    return _platform_data_fallback(env) / PathConstants.APP_NAME


def session_dir(env: Optional[EnvironmentProvider] = None) -> Path:
    """Directory for the per-session theme cache and startup flag files."""
    env = env or OsEnvironment()
    override = env.get_nonempty(EnvVars.SESSION_DIR)
    if override:
        return Path(override)
    return Path(tempfile.gettempdir())


def legacy_theme_file(env: Optional[EnvironmentProvider] = None) -> Path:
    """Location of the single-line theme file used by older installs."""
    return home_dir(env) / PathConstants.LEGACY_THEME_FILE


def claude_settings_file(env: Optional[EnvironmentProvider] = None) -> Path:
    """Claude Code user settings file that hook registration edits."""
    return home_dir(env) / PathConstants.CLAUDE_SETTINGS_FILE
