# Theme resolution
# Picks the active theme name through an ordered priority chain of sources

import random
from pathlib import Path
from typing import Optional, Tuple

from app.session_state import SessionStore
from utils.colored_logger import setup_logger
from utils.config_loader import UserConfig
from utils.constants import EnvVars, ThemeConstants
from utils.environment import EnvironmentProvider, OsEnvironment

logger = setup_logger(__name__)

# Seeded from os.urandom, so the random pool differs across invocations
_default_rng = random.Random()


class ThemeResolver:
    """
    Resolve the active theme.

    Priority (first non-empty wins):
    1. CLAUDE_SOUND_THEME environment variable
    2. Workspace pin (config.json `workspaces[cwd]`)
    3. Session cache written at session start
    4. Random pick from `random_pool` when `mode` is "random"
    5. config.json `theme`
    6. Legacy ~/.claude/sounds/theme file
    7. Fallback "peon"

    No step raises: unreadable or malformed sources count as unset.
    """

    def __init__(
        self,
        user_config: UserConfig,
        session_store: SessionStore,
        cwd: str,
        legacy_theme_file: Optional[Path] = None,
        env: Optional[EnvironmentProvider] = None,
        rng: Optional[random.Random] = None,
    ):
        self.user_config = user_config
        self.session_store = session_store
        self.cwd = cwd
        self.legacy_theme_file = legacy_theme_file
        self.env = env or OsEnvironment()
        self.rng = rng or _default_rng

    @property
    def session_id(self) -> str:
        return self.session_store.session_id

    def resolve(self) -> str:
        """Return the theme name; never empty."""
        return self.resolve_with_source()[0]

    def resolve_with_source(self) -> Tuple[str, str]:
        """Return (theme, name of the source that decided it)."""
        steps = (
            ("env", self._from_env),
            ("workspace", self._from_workspace),
            ("session", self._from_session),
            ("random", self._from_random_pool),
            ("config", self._from_config),
            ("legacy", self._from_legacy_file),
        )
        for source, step in steps:
            try:
                theme = step()
            except Exception as e:
                logger.debug(f"Theme source '{source}' failed: {e}")
                continue
            if theme:
                logger.debug(f"Theme '{theme}' resolved from {source}")
                return theme, source
        return ThemeConstants.FALLBACK_THEME, "fallback"

    def persist_session_theme(self, theme: str) -> None:
        """Cache the theme for this session; no-op when the session id is empty."""
        if self.session_store.write_theme(theme):
            logger.debug(f"Persisted theme '{theme}' for session {self.session_id}")

    def _from_env(self) -> Optional[str]:
        # Only an empty string counts as unset; the value is used verbatim
        return self.env.get(EnvVars.THEME) or None

    def _from_workspace(self) -> Optional[str]:
        return self.user_config.workspaces.get(self.cwd) or None

    def _from_session(self) -> Optional[str]:
        return self.session_store.read_theme()

    def _from_random_pool(self) -> Optional[str]:
        pool = self.user_config.random_pool
        if self.user_config.mode == ThemeConstants.RANDOM_MODE and pool:
            return self.rng.choice(pool)
        return None

    def _from_config(self) -> Optional[str]:
        return self.user_config.theme or None

    def _from_legacy_file(self) -> Optional[str]:
        if self.legacy_theme_file is None:
            return None
        try:
            content = self.legacy_theme_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        return content.strip() or None
