from __future__ import annotations

import re
from datetime import date, timedelta

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_MONTH_DAY_RE = re.compile(r"(\d{2})-(\d{2})")


class InvalidDateFormatError(ValueError):
    pass


class InvalidBirthdayError(ValueError):
    pass


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def parse_iso_date(value: str | date) -> date:
    if isinstance(value, date):
        return value

    match = _ISO_DATE_RE.fullmatch(value.strip())
    if not match:
        raise InvalidDateFormatError(f"Expected YYYY-MM-DD, got {value!r}")
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError as exc:
        raise InvalidDateFormatError(f"Not a calendar date: {value!r}") from exc


def days_since(last_contact_at: str | date, today: date) -> int:
    return (today - parse_iso_date(last_contact_at)).days


def days_remaining(last_contact_at: str | date, frequency_days: int, today: date) -> int:
    """Days until the next check-in is due; negative when overdue."""
    return frequency_days - days_since(last_contact_at, today)


def _plural(count: int, unit: str) -> str:
    suffix = "" if count == 1 else "s"
    return f"{count} {unit}{suffix} ago"


def relative_label(last_contact_at: str | date, today: date) -> str:
    """Coarse human label for how long ago the last contact was.

    Months are 30 days and years are 365 days. The coarser buckets win, so
    28 and 29 days still read as "4 weeks ago".
    """
    contact_date = parse_iso_date(last_contact_at)
    days_ago = (today - contact_date).days

    if days_ago <= 0:
        return "Today"
    if days_ago == 1:
        return "Yesterday"
    if days_ago < 7:
        return WEEKDAY_NAMES[contact_date.weekday()]
    if days_ago < 14:
        return f"Last {WEEKDAY_NAMES[contact_date.weekday()]}"
    if days_ago >= 365:
        return _plural(days_ago // 365, "year")
    if days_ago >= 30:
        return _plural(days_ago // 30, "month")
    return f"{days_ago // 7} weeks ago"


def validate_month_day(month: int, day: int, *, allow_feb_29: bool = True) -> None:
    if month < 1 or month > 12:
        raise InvalidBirthdayError(f"Invalid month: {month}")

    if day < 1 or day > 31:
        raise InvalidBirthdayError(f"Invalid day: {day}")

    year = 2000 if allow_feb_29 else 2001
    try:
        date(year, month, day)
    except ValueError as exc:
        raise InvalidBirthdayError(f"Invalid month/day combination: {month:02d}-{day:02d}") from exc


def parse_birthday(value: str) -> tuple[int, int, int | None]:
    text = value.strip()

    if len(text) <= 5:
        match = _MONTH_DAY_RE.fullmatch(text)
        if not match:
            raise InvalidBirthdayError("Birthday must use YYYY-MM-DD or MM-DD")
        month, day = int(match.group(1)), int(match.group(2))
        validate_month_day(month, day, allow_feb_29=True)
        return month, day, None

    match = _ISO_DATE_RE.fullmatch(text)
    if not match:
        raise InvalidBirthdayError("Birthday must use YYYY-MM-DD or MM-DD")
    year, month, day = int(match.group(1)), int(match.group(2)), int(match.group(3))
    validate_month_day(month, day, allow_feb_29=True)
    try:
        date(year, month, day)
    except ValueError as exc:
        raise InvalidBirthdayError(f"Invalid birthday: {text}") from exc
    return month, day, year


def format_birthday(month: int, day: int, year: int | None) -> str:
    if year is None:
        return f"{month:02d}-{day:02d}"
    return f"{year:04d}-{month:02d}-{day:02d}"


def birthday_date_for_year(birthday: str, year: int) -> date:
    month, day, _ = parse_birthday(birthday)
    if month == 2 and day == 29 and not is_leap_year(year):
        return date(year, 2, 28)
    return date(year, month, day)


def is_birthday_on_date(birthday: str, on_date: date) -> bool:
    return birthday_date_for_year(birthday, on_date.year) == on_date


def next_birthday(birthday: str, today: date) -> date:
    this_year = birthday_date_for_year(birthday, today.year)
    if this_year >= today:
        return this_year
    return birthday_date_for_year(birthday, today.year + 1)


def days_until_birthday(birthday: str, today: date) -> int:
    return (next_birthday(birthday, today) - today).days


def tomorrow_of(today: date) -> date:
    return today + timedelta(days=1)


def days_remaining_in_year(today: date) -> int:
    """Days left in the year, counting today."""
    return (date(today.year, 12, 31) - today).days + 1


def is_past_or_today(value: str | date, today: date) -> bool:
    return parse_iso_date(value) <= today
