from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from checkin_bot.date_logic import days_remaining
from checkin_bot.models import Friend

STATUS_OVERDUE = "overdue"
STATUS_DUE_TODAY = "due-today"
STATUS_DUE_SOON = "due-soon"
STATUS_ON_TRACK = "on-track"

DUE_SOON_DAYS = 3


@dataclass(frozen=True)
class CheckInInfo:
    status: str
    label: str
    days_remaining: int


def classify(remaining: int) -> CheckInInfo:
    if remaining < 0:
        return CheckInInfo(status=STATUS_OVERDUE, label=f"{abs(remaining)} days overdue", days_remaining=remaining)
    if remaining == 0:
        return CheckInInfo(status=STATUS_DUE_TODAY, label="Check in today", days_remaining=remaining)
    if remaining <= DUE_SOON_DAYS:
        return CheckInInfo(status=STATUS_DUE_SOON, label=f"{remaining} days", days_remaining=remaining)
    return CheckInInfo(status=STATUS_ON_TRACK, label=f"{remaining} days", days_remaining=remaining)


def check_in_info(friend: Friend, today: date) -> CheckInInfo | None:
    if friend.frequency_days is None:
        return None
    return classify(days_remaining(friend.last_contact_at, friend.frequency_days, today))


def is_due(friend: Friend, today: date) -> bool:
    info = check_in_info(friend, today)
    return info is not None and info.days_remaining <= 0


def sort_by_urgency(friends: list[Friend], today: date) -> list[Friend]:
    """Most overdue first; friends without a cadence go last."""

    def sort_key(friend: Friend) -> tuple[int, int, str]:
        if friend.frequency_days is None:
            return (1, 0, friend.name.lower())
        remaining = days_remaining(friend.last_contact_at, friend.frequency_days, today)
        return (0, remaining, friend.name.lower())

    return sorted(friends, key=sort_key)
