"""
Theme package installation and Claude Code hook registration.

A theme package is a zip archive with exactly one top-level directory (the
theme name) containing manifest.json and a sounds/ directory. It can be
installed from a local path or downloaded from an http(s) URL.
"""

import json
import os
import shutil
import tempfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional

import requests

from utils.colored_logger import setup_logger
from utils.constants import PathConstants, ThemeConstants
from utils.errors import ThemeInstallError
from utils.hooks_constants import get_all_hook_events

logger = setup_logger(__name__)

DOWNLOAD_TIMEOUT_SECONDS = 30
DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def _safe_member_path(name: str) -> Optional[PurePosixPath]:
    """Relative path of a zip member, None when it is absolute or climbs out with '..'."""
    path = PurePosixPath(name.replace("\\", "/"))
    if path.is_absolute() or ".." in path.parts or not path.parts:
        return None
    return path


def zip_theme_name(archive: zipfile.ZipFile) -> str:
    """
    Find the single top-level directory of a theme archive.

    Raises:
        ThemeInstallError: archive is empty or has more than one top-level entry
    """
    top_dirs = set()
    for info in archive.infolist():
        path = _safe_member_path(info.filename)
        if path is None:
            continue
        if len(path.parts) == 1 and not info.is_dir():
            raise ThemeInstallError(
                f"zip must contain exactly one top-level directory, found file: {path}"
            )
        top_dirs.add(path.parts[0])

    if not top_dirs:
        raise ThemeInstallError("zip is empty or contains no files")
    if len(top_dirs) > 1:
        raise ThemeInstallError(
            f"zip must contain exactly one top-level directory, "
            f"found {len(top_dirs)}: {', '.join(sorted(top_dirs))}"
        )
    return top_dirs.pop()


def extract_zip(archive: zipfile.ZipFile, dest_parent: Path) -> None:
    """Extract every safe member of the archive under dest_parent."""
    for info in archive.infolist():
        rel_path = _safe_member_path(info.filename)
        if rel_path is None:
            logger.warning(f"Skipping unsafe zip entry: {info.filename}")
            continue
        out_path = dest_parent.joinpath(*rel_path.parts)
        if info.is_dir():
            out_path.mkdir(parents=True, exist_ok=True)
            continue
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with archive.open(info) as src, open(out_path, "wb") as dst:
            shutil.copyfileobj(src, dst)


def download_to_file(url: str, dest: Path) -> None:
    """Stream an http(s) resource into dest."""
    logger.info(f"Downloading theme from {url}")
    try:
        with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT_SECONDS) as response:
            response.raise_for_status()
            with open(dest, "wb") as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
    except requests.exceptions.RequestException as e:
        raise ThemeInstallError(f"download failed: {e}") from e


def install_theme(source: str, themes_dir: Path, force: bool = False) -> str:
    """
    Install a theme from a local zip path or an http(s):// URL.

    Args:
        source: Path of a zip file or URL to download
        themes_dir: Directory holding one sub-directory per theme
        force: Replace an already installed theme of the same name

    Returns:
        str: Installed theme name

    Raises:
        ThemeInstallError: invalid archive layout, theme already installed
            (without force), or no manifest.json after extraction
    """
    with tempfile.TemporaryDirectory(prefix="ringring-") as tmp:
        if _is_url(source):
            zip_path = Path(tmp) / "theme.zip"
            download_to_file(source, zip_path)
        else:
            zip_path = Path(source).expanduser()

        try:
            archive = zipfile.ZipFile(zip_path)
        except FileNotFoundError as e:
            raise ThemeInstallError(f"no such file: {zip_path}") from e
        except zipfile.BadZipFile as e:
            raise ThemeInstallError(f"not a zip archive: {zip_path}") from e

        with archive:
            theme_name = zip_theme_name(archive)
            dest = themes_dir / theme_name
            if dest.exists():
                if not force:
                    raise ThemeInstallError(
                        f"theme '{theme_name}' already exists; use --force to overwrite"
                    )
                shutil.rmtree(dest)

            themes_dir.mkdir(parents=True, exist_ok=True)
            extract_zip(archive, themes_dir)

    # Validate manifest exists; clean up if not
    if not (dest / ThemeConstants.MANIFEST_FILE).is_file():
        shutil.rmtree(dest, ignore_errors=True)
        raise ThemeInstallError(
            f"theme '{theme_name}' has no {ThemeConstants.MANIFEST_FILE}"
        )

    logger.info(f"Installed theme '{theme_name}' into {dest}")
    return theme_name


def _has_command(entries: list, command: str) -> bool:
    for entry in entries:
        hooks = entry.get("hooks") if isinstance(entry, dict) else None
        if isinstance(hooks, list) and any(
            isinstance(h, dict) and h.get("command") == command for h in hooks
        ):
            return True
    return False


def register_hooks(
    settings_path: Path,
    command: str = PathConstants.HOOK_COMMAND,
    events: Optional[Iterable[str]] = None,
) -> list:
    """
    Merge ringring hook entries into a Claude Code settings.json.

    Existing keys and hooks are preserved; events that already run `command`
    are left alone. The file is replaced atomically.

    Returns:
        list: Event names an entry was added for
    """
    try:
        root = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        root = {}
    if not isinstance(root, dict):
        root = {}
    if not isinstance(root.get("hooks"), dict):
        root["hooks"] = {}

    added = []
    for event in events or get_all_hook_events():
        entries = root["hooks"].get(event)
        if not isinstance(entries, list):
            entries = root["hooks"][event] = []
        if _has_command(entries, command):
            continue
        entries.append(
            {"matcher": "", "hooks": [{"type": "command", "command": command}]}
        )
        added.append(event)

    # Atomic write: write to .tmp then rename
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = settings_path.with_name(settings_path.name + ".tmp")
    tmp_path.write_text(json.dumps(root, indent=2) + "\n", encoding="utf-8")
    os.replace(tmp_path, settings_path)

    return added
