"""
Session-start coordinator.

Claude Code fires SessionStart for new sessions (source "startup") and for
resumed ones (source "resume"), often back to back from two separate hook
processes. Only a genuinely new session should greet, so the startup sound is
deferred:

    Idle --startup--> Scheduled --(delay, flag still present)--> play --> Idle
                      Scheduled --(resume deletes the flag)--> Idle (silent)

The flag file is the only shared state between the two processes. It is
checked once, when the delay has elapsed; a resume that arrives after that
check may or may not silence the sound.
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from app.manifest import Manifest, SoundPick, pick_sound, resolve_sound_path
from app.session_state import SessionStore
from app.theme_resolver import ThemeResolver
from utils.colored_logger import setup_logger
from utils.constants import SessionConstants, ThemeConstants
from utils.hooks_constants import SessionStartSource

logger = setup_logger(__name__)


class StartupOutcome(Enum):
    """What a SessionStart invocation ended up doing."""

    PLAYED = "played"  # greeting played after the delay
    SILENT = "silent"  # flag survived but there was nothing (playable) to play
    CANCELLED = "cancelled"  # flag removed by a resume before the delay elapsed
    CLEARED = "cleared"  # this invocation was the resume that removed the flag
    IGNORED = "ignored"  # neither startup nor resume

    def __str__(self) -> str:
        return self.value


class SessionStartCoordinator:
    """Schedules, fires and cancels the deferred greeting of one session."""

    def __init__(
        self,
        resolver: ThemeResolver,
        play: Callable[[Path], bool],
        delay: float = SessionConstants.STARTUP_DELAY_SECONDS,
    ):
        self.resolver = resolver
        self.play = play
        self.delay = delay

    @property
    def store(self) -> SessionStore:
        return self.resolver.session_store

    async def handle(
        self, source: Optional[str], theme: str, manifest: Manifest, theme_dir: Path
    ) -> StartupOutcome:
        """Route a SessionStart event by its source."""
        if source == SessionStartSource.STARTUP.value:
            return await self.schedule_startup(theme, manifest, theme_dir)
        if source == SessionStartSource.RESUME.value:
            return self.cancel()
        logger.debug(f"SessionStart source '{source}' needs no sound")
        return StartupOutcome.IGNORED

    async def schedule_startup(
        self, theme: str, manifest: Manifest, theme_dir: Path
    ) -> StartupOutcome:
        """
        Persist the theme, raise the flag and wait for the deferred greeting.

        Flag creation errors propagate to the caller. The greeting is picked
        here, before the delay, and is not re-rolled when the timer fires.
        """
        self.resolver.persist_session_theme(theme)
        self.store.create_flag()

        pick = pick_sound(manifest, ThemeConstants.GREETING_CATEGORY)
        logger.info(
            f"Startup sound scheduled for session {self.store.session_id or '-'} "
            f"in {self.delay}s: {pick.file if pick else 'none'}"
        )

        task = asyncio.create_task(self._fire_after_delay(pick, theme_dir))
        return await task

    def cancel(self) -> StartupOutcome:
        """Remove the flag so that a pending startup greeting stays silent."""
        if self.store.clear_flag():
            logger.info(f"Cancelled pending startup sound for session {self.store.session_id}")
        return StartupOutcome.CLEARED

    async def _fire_after_delay(
        self, pick: Optional[SoundPick], theme_dir: Path
    ) -> StartupOutcome:
        await asyncio.sleep(self.delay)

        try:
            if not self.store.flag_exists():
                logger.info("Startup sound cancelled by a resumed session")
                return StartupOutcome.CANCELLED

            try:
                sound_path = resolve_sound_path(theme_dir, pick.file) if pick else None
                if sound_path is None:
                    return StartupOutcome.SILENT

                # Blocking playback runs in the default executor
                loop = asyncio.get_running_loop()
                played = await loop.run_in_executor(None, self.play, sound_path)
                return StartupOutcome.PLAYED if played else StartupOutcome.SILENT
            finally:
                self.store.clear_flag()

        except Exception as e:
            # Best effort: nothing left to report to the host at this point
            logger.warning(f"Deferred startup sound failed: {e}")
            return StartupOutcome.SILENT
