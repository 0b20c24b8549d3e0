from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from config import Config
from utils.constants import EnvVars


def write_theme(themes_dir: Path, name: str, categories: dict[str, Any], display_name: str = "") -> Path:
    """Create <themes_dir>/<name>/manifest.json and empty sound files it references."""
    theme_dir = themes_dir / name
    sounds_dir = theme_dir / "sounds"
    sounds_dir.mkdir(parents=True, exist_ok=True)
    manifest = {
        "name": name,
        "display_name": display_name or name.title(),
        "categories": categories,
    }
    (theme_dir / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")
    for category in categories.values():
        for sound in category.get("sounds", []):
            (sounds_dir / sound["file"]).write_bytes(b"RIFF....")
    return theme_dir


@pytest.fixture(autouse=True)
def _no_theme_override(monkeypatch: Any) -> None:
    monkeypatch.delenv(EnvVars.THEME, raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> Config:
    return Config(
        config_dir=tmp_path / "config",
        data_dir=tmp_path / "themes",
        session_dir=tmp_path / "sessions",
        legacy_theme_file=tmp_path / "legacy" / "theme",
    )


class Recorder:
    """Stands in for the audio and notification collaborators."""

    def __init__(self, play_result: bool = True) -> None:
        self.played: list[Path] = []
        self.notifications: list[tuple[str, str]] = []
        self.play_result = play_result

    def play(self, path: Path) -> bool:
        self.played.append(path)
        return self.play_result

    def notify(self, title: str, body: str, icon: Path | None = None) -> bool:
        self.notifications.append((title, body))
        return True


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
