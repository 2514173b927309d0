from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path


@dataclass
class NotificationState:
    last_birthday_date: str | None = None
    catch_up_sent: dict[str, str] = field(default_factory=dict)
    notifications_enabled: bool = True


def load_state(path: Path) -> NotificationState:
    if not path.exists():
        return NotificationState()

    with path.open("r", encoding="utf-8") as file_obj:
        data = json.load(file_obj)

    last_birthday_date = data.get("last_birthday_date")
    catch_up_sent = data.get("catch_up_sent", {})
    if not isinstance(catch_up_sent, dict):
        catch_up_sent = {}

    return NotificationState(
        last_birthday_date=str(last_birthday_date) if last_birthday_date else None,
        catch_up_sent={str(key): str(value) for key, value in catch_up_sent.items()},
        notifications_enabled=bool(data.get("notifications_enabled", True)),
    )


def save_state_atomic(path: Path, state: NotificationState) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "last_birthday_date": state.last_birthday_date,
        "catch_up_sent": dict(sorted(state.catch_up_sent.items())),
        "notifications_enabled": state.notifications_enabled,
    }

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        delete=False,
    ) as temp_file:
        json.dump(payload, temp_file, indent=2)
        temp_file.write("\n")
        temp_name = temp_file.name

    os.replace(temp_name, path)


def record_birthday_sent(state: NotificationState, send_date: date) -> None:
    state.last_birthday_date = send_date.isoformat()


def record_catch_up_sent(state: NotificationState, friend_id: str, send_date: date) -> None:
    state.catch_up_sent[friend_id] = send_date.isoformat()


def prune_removed_friends(state: NotificationState, friend_ids: set[str]) -> None:
    state.catch_up_sent = {
        friend_id: sent_on for friend_id, sent_on in state.catch_up_sent.items() if friend_id in friend_ids
    }


class StateDedup:
    """Answers "already notified?" for the occurrence on ``target_date``."""

    def __init__(self, state: NotificationState, target_date: date) -> None:
        self._state = state
        self._target_date = target_date

    def should_send_birthday(self) -> bool:
        return self._state.last_birthday_date != self._target_date.isoformat()

    def should_send_catch_up(self, friend_id: str, frequency_days: int) -> bool:
        sent_on = self._state.catch_up_sent.get(friend_id)
        if sent_on is None:
            return True
        try:
            sent_date = date.fromisoformat(sent_on)
        except ValueError:
            return True
        return (self._target_date - sent_date).days >= frequency_days
