from __future__ import annotations

import os
import tempfile
import tomllib
import uuid
from dataclasses import replace
from datetime import date
from pathlib import Path

from checkin_bot.date_logic import InvalidBirthdayError, InvalidDateFormatError, parse_birthday, parse_iso_date
from checkin_bot.models import DEFAULT_CATEGORY, FRIEND_CATEGORIES, AppConfig, Friend, NewFriend
from checkin_bot.notification_planner import LATEST_WINDOW_START_HOUR

DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_WINDOW_START = 9

_TOML_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _toml_escape(value: str) -> str:
    pieces: list[str] = []
    for char in value:
        if char in _TOML_SHORT_ESCAPES:
            pieces.append(_TOML_SHORT_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            pieces.append(f"\\u{ord(char):04X}")
        else:
            pieces.append(char)
    return "".join(pieces)


def _validate_friend(friend: Friend) -> Friend:
    friend_id = friend.id.strip()
    if not friend_id:
        raise ValueError("friend id must not be empty")

    name = friend.name.strip()
    if not name:
        raise ValueError("friend name must not be empty")

    try:
        parse_birthday(friend.birthday)
    except InvalidBirthdayError as exc:
        raise ValueError(f"{name}: {exc}") from exc

    try:
        last_contact = parse_iso_date(friend.last_contact_at)
    except InvalidDateFormatError as exc:
        raise ValueError(f"{name}: last_contact_at {exc}") from exc

    if friend.frequency_days is not None:
        if not isinstance(friend.frequency_days, int) or friend.frequency_days <= 0:
            raise ValueError(f"{name}: frequency_days must be a positive integer")

    category = friend.category.strip().lower()
    if category not in FRIEND_CATEGORIES:
        raise ValueError(f"{name}: category must be one of {list(FRIEND_CATEGORIES)}")

    return Friend(
        id=friend_id,
        name=name,
        birthday=friend.birthday.strip(),
        last_contact_at=last_contact.isoformat(),
        frequency_days=friend.frequency_days,
        category=category,
        notes=friend.notes,
    )


def validate_config(config: AppConfig) -> AppConfig:
    timezone = config.timezone.strip()
    if not timezone:
        raise ValueError("timezone must not be empty")

    window_start = config.notification_window_start
    if window_start < 0 or window_start > LATEST_WINDOW_START_HOUR:
        raise ValueError(
            f"notification_window_start must be an hour between 0 and {LATEST_WINDOW_START_HOUR}"
        )

    validated_friends: list[Friend] = []
    seen_ids: set[str] = set()
    for friend in config.friends:
        validated = _validate_friend(friend)
        if validated.id in seen_ids:
            raise ValueError(f"Duplicate friend id: {validated.id}")
        seen_ids.add(validated.id)
        validated_friends.append(validated)

    return AppConfig(
        timezone=timezone,
        notification_window_start=window_start,
        friends=validated_friends,
    )


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("rb") as file_obj:
        data = tomllib.load(file_obj)

    friends: list[Friend] = []
    for row in data.get("friends", []):
        friends.append(
            Friend(
                id=str(row.get("id", "")),
                name=str(row.get("name", "")),
                birthday=str(row.get("birthday", "")),
                last_contact_at=str(row.get("last_contact_at", "")),
                frequency_days=int(row["frequency_days"]) if row.get("frequency_days") is not None else None,
                category=str(row.get("category", DEFAULT_CATEGORY)),
                notes=str(row.get("notes", "")),
            )
        )

    config = AppConfig(
        timezone=str(data.get("timezone", "")),
        notification_window_start=int(data.get("notification_window_start", DEFAULT_WINDOW_START)),
        friends=friends,
    )
    return validate_config(config)


def render_config(config: AppConfig) -> str:
    validated = validate_config(config)

    lines: list[str] = [
        f'timezone = "{_toml_escape(validated.timezone)}"',
        f"notification_window_start = {validated.notification_window_start}",
        "",
    ]

    for friend in validated.friends:
        lines.append("[[friends]]")
        lines.append(f'id = "{_toml_escape(friend.id)}"')
        lines.append(f'name = "{_toml_escape(friend.name)}"')
        lines.append(f'birthday = "{friend.birthday}"')
        if friend.frequency_days is not None:
            lines.append(f"frequency_days = {friend.frequency_days}")
        lines.append(f'last_contact_at = "{friend.last_contact_at}"')
        lines.append(f'category = "{friend.category}"')
        if friend.notes:
            lines.append(f'notes = "{_toml_escape(friend.notes)}"')
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def save_config_atomic(path: Path, config: AppConfig) -> None:
    rendered = render_config(config)
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        delete=False,
    ) as temp_file:
        temp_file.write(rendered)
        temp_name = temp_file.name

    os.replace(temp_name, path)


def ensure_default_config(path: Path) -> None:
    if path.exists():
        return

    default_config = AppConfig(
        timezone=DEFAULT_TIMEZONE,
        notification_window_start=DEFAULT_WINDOW_START,
        friends=[],
    )
    save_config_atomic(path, default_config)


def _with_friends(config: AppConfig, friends: list[Friend]) -> AppConfig:
    return replace(config, friends=friends)


def has_friend(config: AppConfig, name: str) -> bool:
    normalized = name.strip().lower()
    return any(friend.name.lower() == normalized for friend in config.friends)


def get_friend_by_id(config: AppConfig, friend_id: str) -> Friend | None:
    for friend in config.friends:
        if friend.id == friend_id:
            return friend
    return None


def add_friend(path: Path, new_friend: NewFriend) -> Friend:
    config = load_config(path)
    friend = Friend(
        id=str(uuid.uuid4()),
        name=new_friend.name,
        birthday=new_friend.birthday,
        last_contact_at=new_friend.last_contact_at,
        frequency_days=new_friend.frequency_days,
        category=new_friend.category,
        notes=new_friend.notes,
    )
    save_config_atomic(path, _with_friends(config, [*config.friends, friend]))
    return friend


def update_friend(path: Path, updated: Friend) -> AppConfig:
    config = load_config(path)
    if get_friend_by_id(config, updated.id) is None:
        raise KeyError(updated.id)

    friends = [updated if friend.id == updated.id else friend for friend in config.friends]
    new_config = _with_friends(config, friends)
    save_config_atomic(path, new_config)
    return new_config


def remove_friend(path: Path, friend_id: str) -> bool:
    config = load_config(path)
    remaining = [friend for friend in config.friends if friend.id != friend_id]
    if len(remaining) == len(config.friends):
        return False
    save_config_atomic(path, _with_friends(config, remaining))
    return True


def log_catch_up(path: Path, friend_id: str, today: date) -> str | None:
    """Set last contact to today and return the previous date, or None if unknown."""
    config = load_config(path)
    friend = get_friend_by_id(config, friend_id)
    if friend is None:
        return None

    update_friend(path, replace(friend, last_contact_at=today.isoformat()))
    return friend.last_contact_at


def undo_catch_up(path: Path, friend_id: str, previous_date: str) -> None:
    config = load_config(path)
    friend = get_friend_by_id(config, friend_id)
    if friend is None:
        return
    update_friend(path, replace(friend, last_contact_at=previous_date))
