from __future__ import annotations

import json
import os
import tempfile
import uuid
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

from checkin_bot.date_logic import is_past_or_today, parse_iso_date
from checkin_bot.models import MOODS, JournalEntry

_UNSET = object()


def validate_mood(mood: str | None) -> str | None:
    if mood is None:
        return None
    normalized = mood.strip().lower()
    if normalized not in MOODS:
        raise ValueError(f"Mood must be one of: {', '.join(MOODS)}")
    return normalized


def _entry_from_dict(raw: dict) -> JournalEntry:
    mood = raw.get("mood")
    return JournalEntry(
        id=str(raw["id"]),
        date=parse_iso_date(str(raw["date"])).isoformat(),
        content=str(raw.get("content", "")),
        mood=validate_mood(str(mood)) if mood else None,
        created_at=str(raw["created_at"]),
        updated_at=str(raw["updated_at"]),
    )


def _entry_to_dict(entry: JournalEntry) -> dict:
    return {
        "id": entry.id,
        "date": entry.date,
        "content": entry.content,
        "mood": entry.mood,
        "created_at": entry.created_at,
        "updated_at": entry.updated_at,
    }


def load_journal(path: Path) -> dict[str, JournalEntry]:
    """Journal entries keyed by their ISO date."""
    if not path.exists():
        return {}

    with path.open("r", encoding="utf-8") as file_obj:
        data = json.load(file_obj)

    raw_entries = data.get("entries", [])
    if not isinstance(raw_entries, list):
        raise ValueError("Journal file must contain an 'entries' list")

    entries: dict[str, JournalEntry] = {}
    for raw in raw_entries:
        if not isinstance(raw, dict):
            raise ValueError("Each journal entry must be a table")
        entry = _entry_from_dict(raw)
        if entry.date in entries:
            raise ValueError(f"Duplicate journal entry for {entry.date}")
        entries[entry.date] = entry
    return entries


def save_journal_atomic(path: Path, entries: dict[str, JournalEntry]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"entries": [_entry_to_dict(entries[key]) for key in sorted(entries)]}

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


def get_entry(path: Path, entry_date: str | date) -> JournalEntry | None:
    return load_journal(path).get(parse_iso_date(entry_date).isoformat())


def _writable_date(entry_date: str | date, now: datetime) -> str:
    parsed = parse_iso_date(entry_date)
    if not is_past_or_today(parsed, now.date()):
        raise ValueError("Journal entries cannot be written for future dates")
    return parsed.isoformat()


def upsert_entry(
    path: Path,
    entry_date: str | date,
    content: str,
    now: datetime,
    mood: str | None | object = _UNSET,
) -> JournalEntry:
    """Create or replace the entry for a day.

    Leaving ``mood`` out keeps whatever mood the day already has.
    """
    key = _writable_date(entry_date, now)
    timestamp = now.isoformat()
    entries = load_journal(path)
    existing = entries.get(key)

    if existing is None:
        entry = JournalEntry(
            id=str(uuid.uuid4()),
            date=key,
            content=content.strip(),
            mood=None if mood is _UNSET else validate_mood(mood),  # type: ignore[arg-type]
            created_at=timestamp,
            updated_at=timestamp,
        )
    else:
        entry = replace(
            existing,
            content=content.strip(),
            mood=existing.mood if mood is _UNSET else validate_mood(mood),  # type: ignore[arg-type]
            updated_at=timestamp,
        )

    entries[key] = entry
    save_journal_atomic(path, entries)
    return entry


def set_mood(path: Path, entry_date: str | date, mood: str | None, now: datetime) -> JournalEntry:
    existing = get_entry(path, entry_date)
    content = existing.content if existing is not None else ""
    return upsert_entry(path, entry_date, content, now, mood=mood)
