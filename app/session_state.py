"""
Per-session state kept in small temp files.

Two files exist per session id:

- the theme cache (`.claude-theme-<id>`), written at session start so that
  every later event of the session plays the same theme;
- the startup flag (`.claude-startup-<id>`), present while a startup sound is
  scheduled and not cancelled.

Both are shared between independent hook processes; there is no locking.
"""

import hashlib
import re
import time
from pathlib import Path
from typing import Optional

from utils.colored_logger import setup_logger
from utils.constants import SessionConstants

logger = setup_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def session_key(session_id: str) -> str:
    """
    Make a session id safe to embed in a file name.

    Unsafe characters become "_"; when any was replaced a short hash of the
    raw id is appended so that distinct ids never share a key.
    """
    session_id = session_id or ""
    key = _UNSAFE_CHARS.sub("_", session_id)
    if key != session_id:
        digest = hashlib.sha256(session_id.encode("utf-8")).hexdigest()[:8]
        key = f"{key}-{digest}"
    return key


class SessionStore:
    """Theme cache and startup flag of one session."""

    def __init__(self, session_id: str, base_dir: Path):
        self.session_id = session_id or ""
        self.base_dir = Path(base_dir)
        self.key = session_key(self.session_id)

    @property
    def theme_file(self) -> Path:
        return self.base_dir / f"{SessionConstants.THEME_FILE_PREFIX}{self.key}"

    @property
    def flag_file(self) -> Path:
        key = self.key or SessionConstants.DEFAULT_FLAG_KEY
        return self.base_dir / f"{SessionConstants.FLAG_FILE_PREFIX}{key}"

    # Theme cache

    def read_theme(self) -> Optional[str]:
        """Return the cached theme, None if no session id, no file or empty content."""
        if not self.session_id:
            return None
        try:
            cached = self.theme_file.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            return None
        return cached or None

    def write_theme(self, theme: str) -> bool:
        """Cache the theme for this session. No-op without a session id."""
        if not self.session_id:
            return False
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            self.theme_file.write_text(theme, encoding="utf-8")
            return True
        except OSError as e:
            logger.warning(f"Failed to persist theme for session {self.session_id}: {e}")
            return False

    # Startup flag

    def create_flag(self) -> None:
        """Mark a startup sound as scheduled. I/O errors propagate."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.flag_file.write_text(str(time.time()), encoding="utf-8")

    def flag_exists(self) -> bool:
        return self.flag_file.exists()

    def clear_flag(self) -> bool:
        """Remove the flag. Returns True if it existed."""
        try:
            self.flag_file.unlink()
            return True
        except FileNotFoundError:
            return False

    def cleanup_stale_files(
        self, max_age_hours: int = SessionConstants.STALE_FILE_MAX_AGE_HOURS
    ) -> int:
        """Remove theme caches and flags of other sessions older than max_age_hours."""
        cutoff_time = time.time() - (max_age_hours * 3600)
        removed = 0
        for prefix in (SessionConstants.THEME_FILE_PREFIX, SessionConstants.FLAG_FILE_PREFIX):
            for file_path in self.base_dir.glob(f"{prefix}*"):
                if file_path in (self.theme_file, self.flag_file):
                    continue
                try:
                    if file_path.stat().st_mtime < cutoff_time:
                        file_path.unlink()
                        removed += 1
                except OSError as e:
                    logger.warning(f"Failed to clean up file {file_path}: {e}")
        if removed:
            logger.debug(f"Cleaned up {removed} stale session file(s)")
        return removed
