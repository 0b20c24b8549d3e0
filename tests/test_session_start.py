from __future__ import annotations

import asyncio
import os
import time
from pathlib import Path

import pytest

from app.manifest import Manifest, load_manifest
from app.session_start import SessionStartCoordinator, StartupOutcome
from app.session_state import SessionStore, session_key
from app.theme_resolver import ThemeResolver
from utils.config_loader import UserConfig
from utils.environment import MappingEnvironment

from conftest import Recorder, write_theme


def make_coordinator(tmp_path: Path, recorder: Recorder, session_id: str = "s1", delay: float = 0.05):
    resolver = ThemeResolver(
        UserConfig(),
        SessionStore(session_id, tmp_path / "sessions"),
        cwd="/tmp",
        env=MappingEnvironment(),
    )
    return SessionStartCoordinator(resolver, recorder.play, delay=delay)


@pytest.fixture
def theme(tmp_path: Path) -> tuple[Manifest, Path]:
    theme_dir = write_theme(
        tmp_path / "themes",
        "peon",
        {"greeting": {"sounds": [{"file": "ready.wav", "line": "Ready to work"}]}},
    )
    return load_manifest(theme_dir), theme_dir


def test_startup_without_resume_plays_once_and_clears_flag(tmp_path, recorder, theme) -> None:
    manifest, theme_dir = theme
    coordinator = make_coordinator(tmp_path, recorder)

    outcome = asyncio.run(coordinator.handle("startup", "peon", manifest, theme_dir))

    assert outcome is StartupOutcome.PLAYED
    assert [p.name for p in recorder.played] == ["ready.wav"]
    assert not coordinator.store.flag_exists()


def test_startup_persists_theme_for_the_session(tmp_path, recorder, theme) -> None:
    manifest, theme_dir = theme
    coordinator = make_coordinator(tmp_path, recorder)

    asyncio.run(coordinator.handle("startup", "peon", manifest, theme_dir))

    assert SessionStore("s1", tmp_path / "sessions").read_theme() == "peon"


def test_resume_before_delay_cancels_startup_sound(tmp_path, recorder, theme) -> None:
    manifest, theme_dir = theme
    startup = make_coordinator(tmp_path, recorder, delay=0.3)
    # Separate objects: the resume arrives from another invocation
    resume = make_coordinator(tmp_path, Recorder())

    async def scenario():
        pending = asyncio.create_task(startup.handle("startup", "peon", manifest, theme_dir))
        await asyncio.sleep(0.05)
        assert startup.store.flag_exists()
        cleared = await resume.handle("resume", "peon", manifest, theme_dir)
        return await pending, cleared

    outcome, resume_outcome = asyncio.run(scenario())

    assert outcome is StartupOutcome.CANCELLED
    assert resume_outcome is StartupOutcome.CLEARED
    assert recorder.played == []
    assert not startup.store.flag_exists()


def test_resume_alone_plays_nothing(tmp_path, recorder, theme) -> None:
    manifest, theme_dir = theme
    coordinator = make_coordinator(tmp_path, recorder)

    outcome = asyncio.run(coordinator.handle("resume", "peon", manifest, theme_dir))

    assert outcome is StartupOutcome.CLEARED
    assert recorder.played == []


@pytest.mark.parametrize("source", ["clear", "compact", None])
def test_other_sources_are_noop(tmp_path, recorder, theme, source) -> None:
    manifest, theme_dir = theme
    coordinator = make_coordinator(tmp_path, recorder)

    outcome = asyncio.run(coordinator.handle(source, "peon", manifest, theme_dir))

    assert outcome is StartupOutcome.IGNORED
    assert not coordinator.store.flag_exists()
    assert coordinator.store.read_theme() is None


def test_startup_with_empty_greeting_is_silent(tmp_path, recorder) -> None:
    theme_dir = write_theme(tmp_path / "themes", "quiet", {"greeting": {"sounds": []}})
    coordinator = make_coordinator(tmp_path, recorder)

    outcome = asyncio.run(coordinator.handle("startup", "quiet", load_manifest(theme_dir), theme_dir))

    assert outcome is StartupOutcome.SILENT
    assert recorder.played == []
    assert not coordinator.store.flag_exists()


def test_sound_is_picked_before_the_delay(tmp_path, recorder, theme, monkeypatch) -> None:
    manifest, theme_dir = theme
    coordinator = make_coordinator(tmp_path, recorder, delay=0.1)
    calls = []

    import app.session_start as session_start

    original = session_start.pick_sound

    def tracking_pick(*args, **kwargs):
        calls.append(coordinator.store.flag_exists())
        return original(*args, **kwargs)

    monkeypatch.setattr(session_start, "pick_sound", tracking_pick)
    asyncio.run(coordinator.handle("startup", "peon", manifest, theme_dir))

    # Picked exactly once, while the flag was up and before firing
    assert calls == [True]


def test_playback_failure_still_clears_flag(tmp_path, theme) -> None:
    manifest, theme_dir = theme

    def broken_player(path):
        raise RuntimeError("no audio device")

    coordinator = make_coordinator(tmp_path, Recorder())
    coordinator.play = broken_player

    outcome = asyncio.run(coordinator.handle("startup", "peon", manifest, theme_dir))

    assert outcome is StartupOutcome.SILENT
    assert not coordinator.store.flag_exists()


def test_flag_creation_error_propagates(tmp_path, recorder, theme) -> None:
    manifest, theme_dir = theme
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    resolver = ThemeResolver(UserConfig(), SessionStore("s1", blocker), cwd="/", env=MappingEnvironment())
    coordinator = SessionStartCoordinator(resolver, recorder.play, delay=0)

    with pytest.raises(OSError):
        asyncio.run(coordinator.handle("startup", "peon", manifest, theme_dir))


def test_session_key_sanitizes_ids(tmp_path) -> None:
    assert session_key("abc-123_x.y") == "abc-123_x.y"
    assert session_key("../../etc").startswith(".._.._etc-")
    store = SessionStore("a/b", tmp_path)
    assert store.flag_file.parent == tmp_path


def test_distinct_ids_never_share_session_files(tmp_path) -> None:
    assert session_key("a/b") != session_key("a_b")
    assert session_key("a/b") != session_key("a:b")
    assert session_key("a/b") == session_key("a/b")

    slashed = SessionStore("a/b", tmp_path)
    plain = SessionStore("a_b", tmp_path)
    slashed.create_flag()
    plain.write_theme("aoe2")

    assert not plain.flag_exists()
    assert plain.clear_flag() is False
    assert slashed.flag_exists()
    assert slashed.read_theme() is None


def test_empty_session_uses_default_flag_key(tmp_path) -> None:
    store = SessionStore("", tmp_path)
    assert store.flag_file.name == ".claude-startup-default"
    store.create_flag()
    assert store.flag_exists()
    assert store.clear_flag() is True
    assert store.clear_flag() is False


def test_cleanup_removes_only_stale_files_of_other_sessions(tmp_path) -> None:
    store = SessionStore("current", tmp_path)
    store.write_theme("peon")
    old = tmp_path / ".claude-theme-old"
    old.write_text("aoe2")
    fresh = tmp_path / ".claude-startup-fresh"
    fresh.write_text("")
    two_days_ago = time.time() - 48 * 3600
    os.utime(old, (two_days_ago, two_days_ago))
    os.utime(store.theme_file, (two_days_ago, two_days_ago))

    assert store.cleanup_stale_files() == 1
    assert not old.exists()
    assert fresh.exists()
    assert store.theme_file.exists()
