from __future__ import annotations

import json
import random
from pathlib import Path

from app.manifest import (
    Category,
    Manifest,
    Sound,
    category_text,
    load_manifest,
    pick_sound,
    resolve_sound_path,
    save_manifest,
)


def sample_manifest() -> Manifest:
    return Manifest.model_validate_json(
        json.dumps(
            {
                "name": "test",
                "display_name": "Test Theme",
                "categories": {
                    "greeting": {
                        "title": "Hello",
                        "sounds": [
                            {"file": "hello.wav", "line": "Hello there!"},
                            {"file": "hi.wav"},
                        ],
                    },
                    "empty": {"title": "Empty", "sounds": []},
                },
            }
        )
    )


def test_pick_from_valid_category_returns_a_member() -> None:
    manifest = sample_manifest()
    for _ in range(50):
        pick = pick_sound(manifest, "greeting")
        assert pick is not None
        assert pick.file in {"hello.wav", "hi.wav"}
        if pick.file == "hello.wav":
            assert pick.line == "Hello there!"
        else:
            assert pick.line is None


def test_pick_from_empty_category_returns_none() -> None:
    assert pick_sound(sample_manifest(), "empty") is None


def test_pick_from_missing_category_returns_none() -> None:
    assert pick_sound(sample_manifest(), "nonexistent") is None


def test_pick_has_no_memory_and_repeats() -> None:
    manifest = Manifest(categories={"c": Category(sounds=[Sound(file="a.wav"), Sound(file="b.wav")])})
    rng = random.Random(1234)
    picks = [pick_sound(manifest, "c", rng=rng).file for _ in range(50)]
    assert any(a == b for a, b in zip(picks, picks[1:]))


def test_duplicate_files_are_legal() -> None:
    manifest = Manifest(categories={"c": Category(sounds=[Sound(file="a.wav")] * 3)})
    assert pick_sound(manifest, "c").file == "a.wav"


def test_category_text_returns_overrides() -> None:
    title, body = category_text(sample_manifest(), "greeting")
    assert title == "Hello"
    assert body is None


def test_category_text_missing_category() -> None:
    assert category_text(sample_manifest(), "nope") == (None, None)


def test_load_manifest_from_file(tmp_path: Path) -> None:
    (tmp_path / "manifest.json").write_text('{"name":"t","display_name":"T","categories":{}}')
    manifest = load_manifest(tmp_path)
    assert manifest is not None
    assert manifest.name == "t"


def test_load_manifest_without_name_fields(tmp_path: Path) -> None:
    (tmp_path / "manifest.json").write_text('{"display_name":"Test","categories":{}}')
    manifest = load_manifest(tmp_path)
    assert manifest is not None
    assert manifest.name == ""


def test_load_missing_manifest_returns_none(tmp_path: Path) -> None:
    assert load_manifest(tmp_path) is None


def test_load_malformed_manifest_returns_none(tmp_path: Path) -> None:
    (tmp_path / "manifest.json").write_text('{"categories": {"a": {"sounds": [{"line": "no file"}]}}}')
    assert load_manifest(tmp_path) is None


def test_save_and_load_manifest_are_structurally_identical(tmp_path: Path) -> None:
    manifest = sample_manifest()
    save_manifest(manifest, tmp_path / "theme")
    assert load_manifest(tmp_path / "theme") == manifest


def test_resolve_sound_path_stays_under_sounds_dir(tmp_path: Path) -> None:
    assert resolve_sound_path(tmp_path, "a/b.wav") == (tmp_path / "sounds" / "a" / "b.wav").resolve()
    assert resolve_sound_path(tmp_path, "../manifest.json") is None
    assert resolve_sound_path(tmp_path, "/etc/passwd") is None


def test_load_non_utf8_manifest_returns_none(tmp_path: Path) -> None:
    (tmp_path / "manifest.json").write_bytes(b'{"name": "\xff\xfe", "categories": {}}')
    assert load_manifest(tmp_path) is None
