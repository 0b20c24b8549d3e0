"""
Desktop notifications for ringring.

Fire-and-forget: the notification command is started in the background with
its output discarded, and any failure is logged and dropped.
"""

import platform
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from utils.colored_logger import setup_logger

logger = setup_logger(__name__)

APP_NAME = "Claude Code"

_APPLESCRIPT = (
    "on run argv\n"
    "  display notification (item 1 of argv) with title (item 2 of argv)\n"
    "end run"
)


def build_linux_command(title: str, body: str, icon: Optional[Path] = None) -> List[str]:
    """notify-send invocation for a notification."""
    cmd = ["notify-send", f"--app-name={APP_NAME}"]
    if icon is not None and icon.exists():
        cmd.append(f"--icon={icon}")
    cmd.extend([title, body])
    return cmd


def build_macos_command(title: str, body: str) -> List[str]:
    """osascript invocation; text travels as argv so it needs no escaping."""
    return ["osascript", "-e", _APPLESCRIPT, body, title]


def build_notification_command(
    title: str, body: str, icon: Optional[Path] = None, system: Optional[str] = None
) -> Optional[List[str]]:
    """
    Pick the notification command for the current platform.

    Returns:
        Command list, or None when no backend is available
    """
    system = system or platform.system()
    if system == "Darwin":
        if shutil.which("osascript") is None:
            return None
        return build_macos_command(title, body)
    if system == "Linux":
        if shutil.which("notify-send") is None:
            return None
        return build_linux_command(title, body, icon)
    return None


def send_notification(title: str, body: str, icon: Optional[Path] = None) -> bool:
    """
    Show a desktop notification (best effort).

    Returns:
        bool: True if a notification command was started
    """
    cmd = build_notification_command(title, body, icon)
    if cmd is None:
        logger.debug("No desktop notification backend available")
        return False

    try:
        subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        return True
    except OSError as e:
        logger.warning(f"Failed to send notification: {e}")
        return False
