# Theme manifest model
# Declarative mapping of categories to sounds and override text, plus selection helpers

import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from utils.colored_logger import setup_logger
from utils.constants import ThemeConstants

logger = setup_logger(__name__)


class Sound(BaseModel):
    """One audio file of a category, optionally with the line spoken in it."""

    file: str
    line: Optional[str] = None


class Category(BaseModel):
    """Semantic bucket of sounds with optional title/body overrides."""

    title: Optional[str] = None
    body: Optional[str] = None
    sounds: List[Sound] = Field(default_factory=list)


class Manifest(BaseModel):
    """Contents of a theme's manifest.json."""

    name: str = ""
    display_name: str = ""
    categories: Dict[str, Category] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class SoundPick:
    """A sound chosen from a category."""

    file: str
    line: Optional[str] = None


def load_manifest(theme_dir: Path) -> Optional[Manifest]:
    """
    Load <theme_dir>/manifest.json.

    Returns:
        Manifest or None when the file is missing or malformed
    """
    manifest_path = theme_dir / ThemeConstants.MANIFEST_FILE
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug(f"No manifest at {manifest_path}")
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Unreadable manifest {manifest_path}: {e}")
        return None

    try:
        return Manifest.model_validate_json(content)
    except ValidationError as e:
        logger.warning(f"Invalid manifest {manifest_path}: {e.error_count()} error(s)")
        return None


def save_manifest(manifest: Manifest, theme_dir: Path) -> Path:
    """Write manifest.json into theme_dir and return its path."""
    theme_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = theme_dir / ThemeConstants.MANIFEST_FILE
    data = manifest.model_dump(exclude_none=True)
    manifest_path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    return manifest_path


def pick_sound(
    manifest: Manifest, category: str, rng: Optional[random.Random] = None
) -> Optional[SoundPick]:
    """
    Pick a random sound from a category.

    Every entry has the same chance, so a file listed twice is picked twice
    as often. Calls are independent; repeats are expected.

    Returns:
        SoundPick, or None if the category is missing or has no sounds
    """
    cat = manifest.categories.get(category)
    if cat is None or not cat.sounds:
        return None
    sound = (rng or random).choice(cat.sounds)
    return SoundPick(file=sound.file, line=sound.line)


def category_text(manifest: Manifest, category: str) -> Tuple[Optional[str], Optional[str]]:
    """Get the category-level (title, body) overrides; None where unset."""
    cat = manifest.categories.get(category)
    if cat is None:
        return None, None
    return cat.title, cat.body


def resolve_sound_path(theme_dir: Path, sound_file: str) -> Optional[Path]:
    """
    Resolve a manifest `file` entry under <theme_dir>/sounds.

    Returns:
        Absolute path, or None when the entry escapes the sounds directory
    """
    sounds_dir = (theme_dir / ThemeConstants.SOUNDS_DIR).resolve()
    candidate = (sounds_dir / sound_file).resolve()
    if candidate != sounds_dir and sounds_dir in candidate.parents:
        return candidate
    logger.warning(f"Sound file outside of {sounds_dir}: {sound_file}")
    return None
