from __future__ import annotations

import asyncio
import enum
import logging
import random
from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from typing import Any, Callable, Protocol

from checkin_bot.check_in import is_due
from checkin_bot.date_logic import is_birthday_on_date, tomorrow_of
from checkin_bot.models import Friend, NotificationContent, PlannedNotification
from checkin_bot.notification_content import KIND_BIRTHDAY, KIND_CATCH_UP, birthday_content, catch_up_content

LOGGER = logging.getLogger(__name__)

DEFAULT_WINDOW_START_HOUR = 9
WINDOW_LENGTH_HOURS = 1
# The daily run must fall after the window on the same day, otherwise its
# cancel-all removes the notifications it planned the day before.
LATEST_WINDOW_START_HOUR = 23 - WINDOW_LENGTH_HOURS


class TransportFailure(RuntimeError):
    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class NotificationTransport(Protocol):
    async def request_permission(self) -> bool: ...

    async def cancel_all_scheduled(self) -> None: ...

    async def schedule_one(self, content: NotificationContent, send_at: datetime) -> str: ...

    def add_response_listener(self, callback: Callable[[dict[str, Any]], Any]) -> Any: ...


class NotificationDedup(Protocol):
    def should_send_birthday(self) -> bool: ...

    def should_send_catch_up(self, friend_id: str, frequency_days: int) -> bool: ...


class PlannerState(enum.Enum):
    IDLE = "idle"
    PLANNING = "planning"
    SCHEDULED = "scheduled"


@dataclass
class PlanResult:
    scheduled: list[tuple[PlannedNotification, str]] = field(default_factory=list)
    failures: list[tuple[PlannedNotification, TransportFailure]] = field(default_factory=list)


def random_time_in_window(day: date, start_hour: int, rng: random.Random, tz: tzinfo | None = None) -> datetime:
    minute = rng.randrange(60)
    return datetime.combine(day, time(hour=start_hour, minute=minute, second=0), tzinfo=tz)


def daily_planning_time(window_start_hour: int) -> time:
    if window_start_hour < 0 or window_start_hour > LATEST_WINDOW_START_HOUR:
        raise ValueError(f"Window start must be between 0 and {LATEST_WINDOW_START_HOUR}")
    return time(hour=window_start_hour + WINDOW_LENGTH_HOURS)


class NotificationPlanner:
    """Recomputes tomorrow's birthday and catch-up notifications from scratch.

    Every run cancels everything the transport has scheduled before
    scheduling again, so the transport's queue is owned by this planner.
    Runs are serialised per planner instance.
    """

    def __init__(
        self,
        transport: NotificationTransport,
        *,
        window_start_hour: int = DEFAULT_WINDOW_START_HOUR,
        rng: random.Random | None = None,
    ) -> None:
        self._transport = transport
        self._window_start_hour = window_start_hour
        self._rng = rng or random.Random()
        self._lock = asyncio.Lock()
        self.state = PlannerState.IDLE

    def plan(self, friends: list[Friend], dedup: NotificationDedup, now: datetime) -> list[PlannedNotification]:
        if not friends:
            return []

        today = now.date()
        tomorrow = tomorrow_of(today)

        birthday_friends = [
            friend for friend in friends if friend.birthday and is_birthday_on_date(friend.birthday, tomorrow)
        ]
        birthday_ids = {friend.id for friend in birthday_friends}

        catch_up_friends = [
            friend
            for friend in friends
            if friend.id not in birthday_ids
            and friend.frequency_days is not None
            and is_due(friend, today)
            and dedup.should_send_catch_up(friend.id, friend.frequency_days)
        ]

        planned: list[PlannedNotification] = []
        if birthday_friends and dedup.should_send_birthday():
            planned.append(
                PlannedNotification(
                    kind=KIND_BIRTHDAY,
                    recipients=tuple(birthday_friends),
                    send_at=random_time_in_window(tomorrow, self._window_start_hour, self._rng, now.tzinfo),
                    content=birthday_content(birthday_friends),
                )
            )

        for friend in catch_up_friends:
            planned.append(
                PlannedNotification(
                    kind=KIND_CATCH_UP,
                    recipients=(friend,),
                    send_at=random_time_in_window(tomorrow, self._window_start_hour, self._rng, now.tzinfo),
                    content=catch_up_content(friend, today),
                )
            )

        return planned

    async def schedule_all(self, friends: list[Friend], dedup: NotificationDedup, now: datetime) -> PlanResult:
        """Cancel everything, then schedule tomorrow's plan.

        The state stays SCHEDULED after a successful run until the next run
        starts; a failed run drops back to IDLE.
        """
        async with self._lock:
            self.state = PlannerState.PLANNING
            try:
                result = await self._run(friends, dedup, now)
            except BaseException:
                self.state = PlannerState.IDLE
                raise
            self.state = PlannerState.SCHEDULED
            return result

    async def _run(self, friends: list[Friend], dedup: NotificationDedup, now: datetime) -> PlanResult:
        try:
            await self._transport.cancel_all_scheduled()
        except Exception as exc:
            failure = TransportFailure("cancel_all_scheduled", exc)
            LOGGER.error("Aborting notification planning: %s", failure)
            raise failure from exc

        result = PlanResult()
        planned = self.plan(friends, dedup, now)

        for notification in planned:
            try:
                notification_id = await self._transport.schedule_one(notification.content, notification.send_at)
            except Exception as exc:
                failure = TransportFailure("schedule_one", exc)
                LOGGER.exception("Could not schedule %s notification: %s", notification.kind, notification.content.title)
                result.failures.append((notification, failure))
                continue
            result.scheduled.append((notification, notification_id))

        LOGGER.info(
            "Planned notifications for %s: %s scheduled, %s failed",
            tomorrow_of(now.date()).isoformat(),
            len(result.scheduled),
            len(result.failures),
        )
        return result
