# Event mapping for hook events
# Maps a hook event to a theme category, fallback notification text and notify behavior

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from app.types import EventAction
from utils.hooks_constants import HookEvent, NotificationType, SessionStartSource

DEFAULT_LANGUAGE = "cs"


@dataclass(frozen=True)
class EventRule:
    """Category, notify behavior and fallback text key for one table entry."""

    category: Optional[str]
    skip_notify: bool = False
    text_key: Optional[str] = None  # None: empty title/body


# Format: (hook_event_name, sub_key) : EventRule
# sub_key is `source` for SessionStart and `notification_type` for Notification;
# (event, None) is the fallback for an event whose sub_key has no own entry.
EVENT_RULES: Dict[Tuple[str, Optional[str]], EventRule] = {
    # SessionStart: sound only, handled by the session-start coordinator
    (HookEvent.SESSION_START.value, SessionStartSource.STARTUP.value): EventRule(
        "greeting", skip_notify=True
    ),
    (HookEvent.SESSION_START.value, SessionStartSource.RESUME.value): EventRule(
        "greeting", skip_notify=True
    ),
    (HookEvent.SESSION_START.value, None): EventRule(None, skip_notify=True),
    # Permission dialogs already draw attention in the terminal
    (HookEvent.PERMISSION_REQUEST.value, None): EventRule(
        "permission", skip_notify=True, text_key="permission_request"
    ),
    (HookEvent.STOP.value, None): EventRule("complete", text_key="stop"),
    # Notification events
    (HookEvent.NOTIFICATION.value, NotificationType.PERMISSION_PROMPT.value): EventRule(
        "permission", text_key="permission_prompt"
    ),
    (HookEvent.NOTIFICATION.value, NotificationType.IDLE_PROMPT.value): EventRule(
        "annoyed", text_key="idle_prompt"
    ),
    (HookEvent.NOTIFICATION.value, NotificationType.AUTH_SUCCESS.value): EventRule(
        "acknowledge", text_key="auth_success"
    ),
    (HookEvent.NOTIFICATION.value, NotificationType.ELICITATION_DIALOG.value): EventRule(
        "permission", text_key="elicitation_dialog"
    ),
    (HookEvent.NOTIFICATION.value, None): EventRule(
        "greeting", text_key="notification"
    ),
}

# Any event name without an entry above
UNKNOWN_EVENT_RULE = EventRule("resource_limit", text_key="unknown_event")

# Fallback (title, body) per language, used when the manifest has no override
FALLBACK_TEXTS: Dict[str, Dict[str, Tuple[str, str]]] = {
    "cs": {
        "permission_request": ("Potřebuju povolení", "Something need doing?"),
        "stop": ("Hotovo", "Okie dokie."),
        "permission_prompt": ("Chtěl bych trochu pozornosti", "Hmm?"),
        "idle_prompt": ("Čekám na tebe", "Nudím se, pojď makat."),
        "auth_success": ("Přihlášení úspěšné", "Be happy to."),
        "elicitation_dialog": ("Mám otázku", "What you want?"),
        "notification": ("Chtěl bych trochu pozornosti", "Yes?"),
        "unknown_event": ("Neznámá událost", "Why not?"),
    },
    "en": {
        "permission_request": ("Permission needed", "Something need doing?"),
        "stop": ("Done", "Okie dokie."),
        "permission_prompt": ("Needs your attention", "Hmm?"),
        "idle_prompt": ("Waiting for you", "I'm bored, let's get to work."),
        "auth_success": ("Logged in", "Be happy to."),
        "elicitation_dialog": ("I have a question", "What you want?"),
        "notification": ("Needs your attention", "Yes?"),
        "unknown_event": ("Unknown event", "Why not?"),
    },
}


def _sub_key(hook_event_name: str, source, notification_type) -> Optional[str]:
    if hook_event_name == HookEvent.SESSION_START.value:
        return source
    if hook_event_name == HookEvent.NOTIFICATION.value:
        return notification_type
    return None


def get_event_rule(
    hook_event_name: str,
    source: Optional[str] = None,
    notification_type: Optional[str] = None,
) -> EventRule:
    """Look up the table entry for an event, falling back per event, then globally."""
    sub_key = _sub_key(hook_event_name, source, notification_type)
    rule = EVENT_RULES.get((hook_event_name, sub_key))
    if rule is None:
        rule = EVENT_RULES.get((hook_event_name, None), UNKNOWN_EVENT_RULE)
    return rule


def get_fallback_text(text_key: Optional[str], language: str = DEFAULT_LANGUAGE) -> Tuple[str, str]:
    """(title, body) for a text key; unknown languages use the default table."""
    if text_key is None:
        return "", ""
    texts = FALLBACK_TEXTS.get(language) or FALLBACK_TEXTS[DEFAULT_LANGUAGE]
    return texts[text_key]


def map_event(
    hook_event_name: str,
    source: Optional[str] = None,
    notification_type: Optional[str] = None,
    language: str = DEFAULT_LANGUAGE,
) -> EventAction:
    """
    Map a hook event to an EventAction.

    Pure and total: unknown event names map to the "resource_limit" catch-all.
    For SessionStart the raw source ("unknown" when missing) is surfaced as
    session_start_type for the session-start coordinator.
    """
    rule = get_event_rule(hook_event_name, source, notification_type)
    title, body = get_fallback_text(rule.text_key, language)

    session_start_type = None
    if hook_event_name == HookEvent.SESSION_START.value:
        session_start_type = source if source is not None else "unknown"

    return EventAction(
        category=rule.category,
        title=title,
        body=body,
        skip_notify=rule.skip_notify,
        session_start_type=session_start_type,
    )
