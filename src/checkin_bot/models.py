from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


FRIEND_CATEGORIES = ("friend", "family", "work", "partner", "flirt")
DEFAULT_CATEGORY = "friend"


@dataclass(frozen=True)
class Friend:
    id: str
    name: str
    birthday: str
    last_contact_at: str
    frequency_days: int | None = None
    category: str = DEFAULT_CATEGORY
    notes: str = ""


@dataclass(frozen=True)
class NewFriend:
    name: str
    birthday: str
    last_contact_at: str
    frequency_days: int | None = None
    category: str = DEFAULT_CATEGORY
    notes: str = ""


@dataclass(frozen=True)
class AppConfig:
    timezone: str
    notification_window_start: int
    friends: list[Friend]


@dataclass(frozen=True)
class NotificationContent:
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PlannedNotification:
    kind: str
    recipients: tuple[Friend, ...]
    send_at: datetime
    content: NotificationContent


MOODS = ("awful", "bad", "okay", "good", "great")


@dataclass(frozen=True)
class JournalEntry:
    id: str
    date: str
    content: str
    mood: str | None
    created_at: str
    updated_at: str
