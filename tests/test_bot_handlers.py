from dataclasses import dataclass
from datetime import date
from pathlib import Path

import pytest

from checkin_bot.bot_handlers import (
    FriendListRow,
    _render_list_message,
    _render_journal_entry,
    build_list_rows,
    command_argument_text,
    is_authorized,
    parse_birthday_text,
    parse_category_text,
    parse_frequency_text,
    parse_journal_text,
    parse_last_contact_text,
    parse_mood_text,
    parse_selection,
    parse_toggle_text,
)
from checkin_bot.models import Friend, JournalEntry
from checkin_bot.settings import Settings

TODAY = date(2026, 10, 19)


def test_parse_birthday_text_full_date() -> None:
    assert parse_birthday_text("1990-03-14") == "1990-03-14"


def test_parse_birthday_text_short_date() -> None:
    assert parse_birthday_text(" 03-14 ") == "03-14"


def test_parse_birthday_text_invalid_real_date() -> None:
    with pytest.raises(ValueError):
        parse_birthday_text("2025-02-29")


def test_parse_frequency_text() -> None:
    assert parse_frequency_text("14") == 14
    assert parse_frequency_text("skip") is None
    assert parse_frequency_text("  ") is None
    with pytest.raises(ValueError):
        parse_frequency_text("0")
    with pytest.raises(ValueError):
        parse_frequency_text("weekly")


def test_parse_last_contact_text() -> None:
    assert parse_last_contact_text("today", TODAY) == "2026-10-19"
    assert parse_last_contact_text("2026-10-01", TODAY) == "2026-10-01"
    with pytest.raises(ValueError):
        parse_last_contact_text("2026-10-20", TODAY)
    with pytest.raises(ValueError):
        parse_last_contact_text("last week", TODAY)


def test_parse_category_text() -> None:
    assert parse_category_text(" Family ") == "family"
    with pytest.raises(ValueError):
        parse_category_text("rival")


def test_parse_selection() -> None:
    assert parse_selection("2", 3) == 1
    with pytest.raises(ValueError):
        parse_selection("4", 3)
    with pytest.raises(ValueError):
        parse_selection("two", 3)


def test_command_argument_text_keeps_line_breaks() -> None:
    assert command_argument_text("/journal") == ""
    assert command_argument_text("/journal  Met Bob\nthen walked home ") == "Met Bob\nthen walked home"


def test_parse_toggle_text() -> None:
    assert parse_toggle_text("") is None
    assert parse_toggle_text(" ON ") is True
    assert parse_toggle_text("off") is False
    with pytest.raises(ValueError):
        parse_toggle_text("sometimes")


def test_parse_journal_text() -> None:
    assert parse_journal_text("", TODAY) == ("2026-10-19", "")
    assert parse_journal_text("Coffee with Dad", TODAY) == ("2026-10-19", "Coffee with Dad")
    assert parse_journal_text("2026-10-01 Hiked", TODAY) == ("2026-10-01", "Hiked")
    assert parse_journal_text("2026-10-01", TODAY) == ("2026-10-01", "")
    with pytest.raises(ValueError):
        parse_journal_text("2026-10-20 Plans", TODAY)


def test_parse_mood_text() -> None:
    assert parse_mood_text("Great", TODAY) == ("2026-10-19", "great")
    assert parse_mood_text("2026-10-18 bad", TODAY) == ("2026-10-18", "bad")
    assert parse_mood_text("clear", TODAY) == ("2026-10-19", None)
    with pytest.raises(ValueError):
        parse_mood_text("meh", TODAY)
    with pytest.raises(ValueError):
        parse_mood_text("", TODAY)


def test_render_journal_entry() -> None:
    entry = JournalEntry(
        id="x",
        date="2026-10-19",
        content="Coffee with Dad",
        mood="good",
        created_at="2026-10-19T09:00:00+00:00",
        updated_at="2026-10-19T09:00:00+00:00",
    )

    assert _render_journal_entry(entry, "2026-10-19", TODAY) == (
        "Journal for 2026-10-19\nMood: good\n\nCoffee with Dad\n\n74 days left in 2026."
    )
    assert _render_journal_entry(None, "2026-10-19", TODAY) == (
        "Journal for 2026-10-19\nNothing written yet. Send /journal <text> to write.\n\n74 days left in 2026."
    )


def test_build_list_rows_sorted_by_urgency() -> None:
    friends = [
        Friend(id="1", name="Nik Hold", birthday="05-14", last_contact_at="2026-10-18", frequency_days=14),
        Friend(id="2", name="Dad", birthday="1959-10-19", last_contact_at="2026-09-01", frequency_days=30, category="family"),
    ]

    rows = build_list_rows(friends, TODAY)

    assert rows == [
        FriendListRow(
            name="Dad",
            category="family",
            status_label="18 days overdue",
            last_contact_label="1 month ago",
            days_until_birthday=0,
        ),
        FriendListRow(
            name="Nik Hold",
            category="friend",
            status_label="13 days",
            last_contact_label="Yesterday",
            days_until_birthday=207,
        ),
    ]


def test_render_list_message_structured_output() -> None:
    message = _render_list_message(
        [
            FriendListRow(
                name="Dad",
                category="family",
                status_label="18 days overdue",
                last_contact_label="1 month ago",
                days_until_birthday=0,
            ),
            FriendListRow(
                name="Nik Hold",
                category="friend",
                status_label=None,
                last_contact_label="Yesterday",
                days_until_birthday=207,
            ),
        ]
    )

    assert message == (
        "Friends (2)\n"
        "Most overdue first:\n"
        "1. Dad (family)\n"
        "   18 days overdue | Last contact 1 month ago | Birthday today 🎂\n"
        "\n"
        "2. Nik Hold (friend)\n"
        "   Last contact Yesterday | Birthday in 207d"
    )


@dataclass
class FakeUser:
    id: int


@dataclass
class FakeChat:
    id: int


@dataclass
class FakeUpdate:
    effective_user: FakeUser
    effective_chat: FakeChat


def _settings() -> Settings:
    return Settings(
        telegram_bot_token="token",
        telegram_allowed_user_id=111,
        telegram_allowed_chat_id=222,
        friends_config_path=Path("config/friends.toml"),
        notification_state_path=Path("data/notification_state.json"),
        journal_path=Path("data/journal.json"),
    )


def test_is_authorized_true() -> None:
    update = FakeUpdate(effective_user=FakeUser(id=111), effective_chat=FakeChat(id=222))
    assert is_authorized(update, _settings()) is True


def test_is_authorized_false() -> None:
    update = FakeUpdate(effective_user=FakeUser(id=111), effective_chat=FakeChat(id=999))
    assert is_authorized(update, _settings()) is False
