from __future__ import annotations

import pytest

from app.event_mapper import EVENT_RULES, FALLBACK_TEXTS, map_event


@pytest.mark.parametrize(
    ("event", "source", "notification_type", "category", "skip_notify"),
    [
        ("SessionStart", "startup", None, "greeting", True),
        ("SessionStart", "resume", None, "greeting", True),
        ("SessionStart", "clear", None, None, True),
        ("SessionStart", None, None, None, True),
        ("PermissionRequest", None, None, "permission", True),
        ("Stop", None, None, "complete", False),
        ("Notification", None, "permission_prompt", "permission", False),
        ("Notification", None, "idle_prompt", "annoyed", False),
        ("Notification", None, "auth_success", "acknowledge", False),
        ("Notification", None, "elicitation_dialog", "permission", False),
        ("Notification", None, "some_new_thing", "greeting", False),
        ("Notification", None, None, "greeting", False),
        ("Foo", None, None, "resource_limit", False),
        ("unknown", None, None, "resource_limit", False),
    ],
)
def test_mapping_table(event, source, notification_type, category, skip_notify) -> None:
    action = map_event(event, source, notification_type)
    assert action.category == category
    assert action.skip_notify is skip_notify


def test_stop_uses_default_text() -> None:
    action = map_event("Stop")
    assert (action.title, action.body) == ("Hotovo", "Okie dokie.")


def test_unknown_event_default_text() -> None:
    action = map_event("Foo")
    assert (action.title, action.body) == ("Neznámá událost", "Why not?")
    assert action.session_start_type is None


def test_session_start_surfaces_source() -> None:
    assert map_event("SessionStart", "startup").session_start_type == "startup"
    assert map_event("SessionStart", "compact").session_start_type == "compact"
    assert map_event("SessionStart").session_start_type == "unknown"


def test_session_start_has_no_text() -> None:
    action = map_event("SessionStart", "startup")
    assert (action.title, action.body) == ("", "")


def test_secondary_field_of_other_events_is_ignored() -> None:
    assert map_event("Stop", "startup", "idle_prompt") == map_event("Stop")
    assert map_event("SessionStart", "startup", "idle_prompt") == map_event("SessionStart", "startup")


def test_mapping_is_pure() -> None:
    for event, sub_key in EVENT_RULES:
        first = map_event(event, sub_key, sub_key)
        assert all(map_event(event, sub_key, sub_key) == first for _ in range(5))


def test_english_texts() -> None:
    action = map_event("Notification", notification_type="idle_prompt", language="en")
    assert action.title == "Waiting for you"


def test_unknown_language_uses_default_texts() -> None:
    assert map_event("Stop", language="xx") == map_event("Stop")


def test_every_language_covers_every_text_key() -> None:
    keys = {rule.text_key for rule in EVENT_RULES.values() if rule.text_key}
    keys.add("unknown_event")
    for texts in FALLBACK_TEXTS.values():
        assert keys <= set(texts)
