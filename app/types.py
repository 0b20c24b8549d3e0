"""Type definitions for the application."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from utils.hooks_constants import UNKNOWN_EVENT


class HookInput(BaseModel):
    """Hook event JSON read from stdin. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    hook_event_name: str = UNKNOWN_EVENT
    session_id: str = ""
    source: Optional[str] = None
    notification_type: Optional[str] = None
    cwd: Optional[str] = None

    @field_validator("hook_event_name", mode="before")
    @classmethod
    def _default_event_name(cls, value):
        return UNKNOWN_EVENT if value is None else value

    @field_validator("session_id", mode="before")
    @classmethod
    def _default_session_id(cls, value):
        return "" if value is None else value


@dataclass(frozen=True)
class EventAction:
    """Result of mapping a hook event to display/sound parameters."""

    category: Optional[str]
    title: str
    body: str
    skip_notify: bool
    # For SessionStart: "startup", "resume", or the raw source value
    session_start_type: Optional[str] = None
