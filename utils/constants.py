"""
Centralized constants for the ringring hook dispatcher.

This module consolidates file names, environment variable names and timing
values into a single location so that the resolver, the session coordinator
and the CLI agree on them.
"""

# Re-export hook enums for convenience
from utils.hooks_constants import HookEvent, NotificationType, SessionStartSource

__all__ = [
    "ThemeConstants",
    "SessionConstants",
    "PathConstants",
    "DateTimeConstants",
    "EnvVars",
    "HookEvent",
    "NotificationType",
    "SessionStartSource",
]


class ThemeConstants:
    """Constants describing the layout of a theme directory."""

    FALLBACK_THEME = "peon"
    MANIFEST_FILE = "manifest.json"
    SOUNDS_DIR = "sounds"
    ICON_FILE = "icon.png"
    RANDOM_MODE = "random"

    # Category played for SessionStart startup events
    GREETING_CATEGORY = "greeting"

    # Every category the event mapper can produce
    KNOWN_CATEGORIES = (
        "greeting",
        "permission",
        "complete",
        "annoyed",
        "acknowledge",
        "resource_limit",
    )


class SessionConstants:
    """Constants for the per-session temp files and the deferred startup sound."""

    STARTUP_DELAY_SECONDS = 1.0
    THEME_FILE_PREFIX = ".claude-theme-"
    FLAG_FILE_PREFIX = ".claude-startup-"
    DEFAULT_FLAG_KEY = "default"
    STALE_FILE_MAX_AGE_HOURS = 24


class PathConstants:
    """Application directory and file names."""

    APP_NAME = "ringring"
    CONFIG_FILE = "config.json"
    ENV_FILE = ".env"
    LEGACY_THEME_FILE = ".claude/sounds/theme"
    CLAUDE_SETTINGS_FILE = ".claude/settings.json"
    HOOK_COMMAND = "ringring"


class DateTimeConstants:
    """Constants related to date and time formatting."""

    ISO_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class EnvVars:
    """Environment variable names read by the dispatcher."""

    THEME = "CLAUDE_SOUND_THEME"
    VOLUME = "RINGRING_VOLUME"
    LANGUAGE = "RINGRING_LANGUAGE"
    SILENT = "RINGRING_SILENT"
    NO_NOTIFY = "RINGRING_NO_NOTIFY"
    SESSION_DIR = "RINGRING_SESSION_DIR"
    LOG_FILE = "RINGRING_LOG_FILE"
    LOG_LEVEL = "RINGRING_LOG_LEVEL"
    XDG_CONFIG_HOME = "XDG_CONFIG_HOME"
    XDG_DATA_HOME = "XDG_DATA_HOME"
    HOME = "HOME"
