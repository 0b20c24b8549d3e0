"""
Hook event constants for the ringring dispatcher.

This module defines the hook events ringring reacts to, together with the
secondary fields Claude Code sends for SessionStart and Notification events,
as Enums so that the mapper and the coordinator never compare magic strings.
"""

from enum import Enum


class HookEvent(Enum):
    """
    Enumeration of the Claude Code hook events ringring registers for.

    Each enum member has a string value that matches the actual hook event name.
    """

    SESSION_START = "SessionStart"
    PERMISSION_REQUEST = "PermissionRequest"
    STOP = "Stop"
    NOTIFICATION = "Notification"

    def __str__(self) -> str:
        """Return the string value of the hook event."""
        return self.value


class SessionStartSource(Enum):
    """Values of the `source` field of a SessionStart event."""

    STARTUP = "startup"
    RESUME = "resume"
    CLEAR = "clear"
    COMPACT = "compact"

    def __str__(self) -> str:
        return self.value


class NotificationType(Enum):
    """Values of the `notification_type` field of a Notification event."""

    PERMISSION_PROMPT = "permission_prompt"
    IDLE_PROMPT = "idle_prompt"
    AUTH_SUCCESS = "auth_success"
    ELICITATION_DIALOG = "elicitation_dialog"

    def __str__(self) -> str:
        return self.value


# Default event name when the input carries none
UNKNOWN_EVENT = "unknown"


def get_all_hook_events() -> list[str]:
    """
    Get all hook event names as strings.

    Returns:
        list[str]: List of all hook event names
    """
    return [event.value for event in HookEvent]


def is_valid_hook_event(event_name: str) -> bool:
    """
    Check if a string is a hook event name ringring knows about.

    Args:
        event_name (str): Event name to validate

    Returns:
        bool: True if valid hook event name, False otherwise
    """
    return event_name in get_all_hook_events()
