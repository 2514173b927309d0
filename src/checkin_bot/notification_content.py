from __future__ import annotations

from datetime import date

from checkin_bot.date_logic import days_since
from checkin_bot.models import Friend, NotificationContent

KIND_BIRTHDAY = "birthday"
KIND_CATCH_UP = "catchup"

BIRTHDAY_BODY = "Send wishes, make their day!"


def first_name(name: str) -> str:
    return name.split(" ")[0]


def format_birthday_title(friends: list[Friend]) -> str:
    if not friends:
        return ""

    names = [first_name(friend.name) for friend in friends]
    if len(names) == 1:
        return f"It's {names[0]}'s birthday 🎉"
    if len(names) == 2:
        return f"It's {names[0]} and {names[1]}'s birthday 🎉"

    others_count = len(names) - 2
    others_text = "1 other's" if others_count == 1 else f"{others_count} others'"
    return f"It's {names[0]}, {names[1]} and {others_text} birthday 🎉"


def format_catch_up_title(friend: Friend) -> str:
    return f"Catch'up with {friend.name}"


def format_catch_up_body(days_since_last_contact: int) -> str:
    if days_since_last_contact == 0:
        return "You last checked in today"
    day_word = "day" if days_since_last_contact == 1 else "days"
    return f"You last checked in {days_since_last_contact} {day_word} ago"


def birthday_content(friends: list[Friend]) -> NotificationContent:
    return NotificationContent(
        title=format_birthday_title(friends),
        body=BIRTHDAY_BODY,
        data={"type": KIND_BIRTHDAY, "friend_ids": [friend.id for friend in friends]},
    )


def catch_up_content(friend: Friend, today: date) -> NotificationContent:
    return NotificationContent(
        title=format_catch_up_title(friend),
        body=format_catch_up_body(days_since(friend.last_contact_at, today)),
        data={"type": KIND_CATCH_UP, "friend_id": friend.id},
    )
