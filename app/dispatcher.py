# Hook event dispatcher
# Resolves the theme, maps the event and triggers the notification and sound for one invocation

import asyncio
import os
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Optional, Tuple

from app.event_mapper import map_event
from app.manifest import (
    Manifest,
    SoundPick,
    category_text,
    load_manifest,
    pick_sound,
    resolve_sound_path,
)
from app.session_start import SessionStartCoordinator, StartupOutcome
from app.session_state import SessionStore
from app.theme_resolver import ThemeResolver
from app.types import EventAction, HookInput
from config import Config, config as default_config
from utils.colored_logger import setup_logger
from utils.config_loader import load_user_config
from utils.constants import ThemeConstants
from utils.environment import EnvironmentProvider
from utils.errors import UnknownCategoryError, UnknownThemeError
from utils.hooks_constants import SessionStartSource, is_valid_hook_event
from utils.notifier import send_notification
from utils.sound_player import play_sound

logger = setup_logger(__name__)

PlayFn = Callable[[Path], bool]
NotifyFn = Callable[[str, str, Optional[Path]], object]


@dataclass
class DispatchResult:
    """What one invocation did (used by tests and the CLI)."""

    theme: str
    action: Optional[EventAction] = None
    sound: Optional[SoundPick] = None
    title: Optional[str] = None
    body: Optional[str] = None
    notified: bool = False
    played: bool = False
    startup_outcome: Optional[StartupOutcome] = None


def compose_text(
    action: EventAction, manifest: Manifest, pick: Optional[SoundPick]
) -> Tuple[str, str]:
    """
    Final notification (title, body).

    title: category title, else the mapper's fallback.
    body: picked sound's line, else category body, else the mapper's fallback.
    """
    cat_title, cat_body = category_text(manifest, action.category) if action.category else (None, None)
    title = cat_title if cat_title is not None else action.title
    if pick is not None and pick.line is not None:
        body = pick.line
    elif cat_body is not None:
        body = cat_body
    else:
        body = action.body
    return title, body


def build_resolver(
    hook_input: HookInput,
    settings: Config,
    env: Optional[EnvironmentProvider] = None,
) -> ThemeResolver:
    """Create the resolver for one invocation (loads config.json)."""
    user_config = load_user_config(settings.config_file)
    store = SessionStore(hook_input.session_id, settings.session_dir)
    return ThemeResolver(
        user_config,
        store,
        cwd=hook_input.cwd or os.getcwd(),
        legacy_theme_file=settings.legacy_theme_file,
        env=env,
    )


def _theme_icon(theme_dir: Path) -> Optional[Path]:
    icon = theme_dir / ThemeConstants.ICON_FILE
    return icon if icon.is_file() else None


def _skip_playback(sound_path: Path) -> bool:
    logger.debug(f"Sound effects silenced, skipping {sound_path.name}")
    return False


async def _run_blocking(func, *args):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args))


async def process_hook_event(
    hook_input: HookInput,
    settings: Optional[Config] = None,
    env: Optional[EnvironmentProvider] = None,
    play: Optional[PlayFn] = None,
    notify: Optional[NotifyFn] = None,
    startup_delay: Optional[float] = None,
) -> Optional[DispatchResult]:
    """
    Process one hook event.

    Returns:
        DispatchResult, or None when the resolved theme has no manifest
        (nothing to do)
    """
    settings = settings or default_config
    play = play or partial(play_sound, volume=settings.volume)
    notify = notify or send_notification

    hook_event_name = hook_input.hook_event_name
    session_id = hook_input.session_id

    if not is_valid_hook_event(hook_event_name):
        logger.info(f"Unknown hook event received: {hook_event_name} (session: {session_id or '-'})")

    resolver = build_resolver(hook_input, settings, env)
    theme, theme_source = resolver.resolve_with_source()
    try:
        theme_dir = settings.theme_dir(theme)
    except UnknownThemeError as e:
        logger.warning(f"Ignoring theme from {theme_source}: {e}")
        return None

    manifest = load_manifest(theme_dir)
    if manifest is None:
        logger.info(f"Theme '{theme}' ({theme_source}) has no manifest, nothing to do")
        return None

    result = DispatchResult(theme=theme)
    action = map_event(
        hook_event_name,
        hook_input.source,
        hook_input.notification_type,
        language=settings.language,
    )
    result.action = action

    if action.session_start_type is not None:
        if settings.silent_effects:
            play = _skip_playback
        coordinator = SessionStartCoordinator(resolver, play)
        if startup_delay is not None:
            coordinator.delay = startup_delay
        if action.session_start_type == SessionStartSource.STARTUP.value:
            resolver.session_store.cleanup_stale_files()
        result.startup_outcome = await coordinator.handle(
            action.session_start_type, theme, manifest, theme_dir
        )
        result.played = result.startup_outcome is StartupOutcome.PLAYED
        return result

    pick = pick_sound(manifest, action.category) if action.category else None
    title, body = compose_text(action, manifest, pick)
    result.sound, result.title, result.body = pick, title, body

    logger.info(
        f"Session {session_id or '-'}: {hook_event_name} -> {action.category} "
        f"(theme: {theme}, sound: {pick.file if pick else 'none'})"
    )

    # Prepare notification and sound for parallel execution
    tasks = {}
    if not action.skip_notify and not settings.silent_notifications:
        tasks["notify"] = _run_blocking(notify, title, body, _theme_icon(theme_dir))
    if pick is not None and not settings.silent_effects:
        sound_path = resolve_sound_path(theme_dir, pick.file)
        if sound_path is not None:
            tasks["play"] = _run_blocking(play, sound_path)

    if tasks:
        results = await asyncio.gather(*tasks.values(), return_exceptions=True)
        for name, outcome in zip(tasks, results):
            if isinstance(outcome, Exception):
                logger.warning(f"{name} failed: {outcome}")
                continue
            if name == "notify":
                result.notified = outcome is not False
            else:
                result.played = bool(outcome)

    return result


def preview_category(
    theme: str,
    category: str,
    settings: Optional[Config] = None,
    play: Optional[PlayFn] = None,
    notify: Optional[NotifyFn] = None,
) -> DispatchResult:
    """
    Play and show one category of a theme (the `test` command).

    Raises:
        UnknownThemeError: theme is not installed or has no valid manifest
        UnknownCategoryError: manifest has no such category
    """
    settings = settings or default_config
    play = play or partial(play_sound, volume=settings.volume)
    notify = notify or send_notification

    theme_dir = settings.theme_dir(theme)
    manifest = load_manifest(theme_dir)
    if manifest is None:
        raise UnknownThemeError(theme)
    if category not in manifest.categories:
        raise UnknownCategoryError(theme, category, manifest.categories.keys())

    pick = pick_sound(manifest, category)
    cat_title, cat_body = category_text(manifest, category)
    title = cat_title or manifest.display_name or theme
    body = pick.line if pick and pick.line is not None else (cat_body or category)

    result = DispatchResult(theme=theme, sound=pick, title=title, body=body)
    result.notified = notify(title, body, _theme_icon(theme_dir)) is not False
    if pick is not None:
        sound_path = resolve_sound_path(theme_dir, pick.file)
        if sound_path is not None:
            result.played = bool(play(sound_path))
    return result
