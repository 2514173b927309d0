from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from checkin_bot.models import NotificationContent
from checkin_bot.telegram_transport import (
    NOTIFICATION_JOB_PREFIX,
    TelegramNotificationTransport,
    build_reply_markup,
    parse_callback_data,
)

SEND_AT = datetime(2026, 10, 20, 9, 17, tzinfo=ZoneInfo("UTC"))
CATCH_UP = NotificationContent(
    title="Catch'up with Alice",
    body="You last checked in 14 days ago",
    data={"type": "catchup", "friend_id": "friend-1"},
)


@dataclass
class FakeJob:
    name: str
    callback: Any = None
    data: Any = None
    removed: bool = False

    def schedule_removal(self) -> None:
        self.removed = True


@dataclass
class FakeJobQueue:
    scheduled: list[FakeJob] = field(default_factory=list)

    def run_once(self, callback, when, data=None, name=None) -> FakeJob:
        job = FakeJob(name=name, callback=callback, data=data)
        self.scheduled.append(job)
        return job

    def jobs(self) -> tuple[FakeJob, ...]:
        return tuple(job for job in self.scheduled if not job.removed)


@dataclass
class FakeBot:
    sent_messages: list[tuple[int, str, Any]] = field(default_factory=list)

    async def send_message(self, chat_id: int, text: str, reply_markup=None) -> None:
        self.sent_messages.append((chat_id, text, reply_markup))

    async def get_chat(self, chat_id: int) -> None:
        return None


@dataclass
class FakeContext:
    job: FakeJob


def _transport(job_queue: FakeJobQueue, bot: FakeBot, **kwargs) -> TelegramNotificationTransport:
    return TelegramNotificationTransport(bot=bot, job_queue=job_queue, chat_id=100, **kwargs)


def test_cancel_only_removes_notification_jobs() -> None:
    job_queue = FakeJobQueue()
    planning_job = FakeJob(name="daily-notification-planning")
    job_queue.scheduled.append(planning_job)
    transport = _transport(job_queue, FakeBot())

    notification_id = asyncio.run(transport.schedule_one(CATCH_UP, SEND_AT))
    asyncio.run(transport.cancel_all_scheduled())

    assert notification_id.startswith(NOTIFICATION_JOB_PREFIX)
    assert [job.name for job in job_queue.jobs()] == ["daily-notification-planning"]


def test_delivery_sends_message_and_reports() -> None:
    job_queue = FakeJobQueue()
    bot = FakeBot()
    delivered: list[tuple[NotificationContent, date]] = []

    async def on_delivered(content: NotificationContent, sent_on: date) -> None:
        delivered.append((content, sent_on))

    transport = _transport(job_queue, bot, on_delivered=on_delivered)
    asyncio.run(transport.schedule_one(CATCH_UP, SEND_AT))
    job = job_queue.scheduled[0]

    asyncio.run(job.callback(FakeContext(job=job)))

    chat_id, text, markup = bot.sent_messages[0]
    assert chat_id == 100
    assert text == "Catch'up with Alice\nYou last checked in 14 days ago"
    assert markup is not None
    assert delivered == [(CATCH_UP, date(2026, 10, 20))]


def test_birthday_messages_have_no_button() -> None:
    content = NotificationContent(title="t", body="b", data={"type": "birthday", "friend_ids": ["1"]})

    assert build_reply_markup(content) is None


def test_response_listeners_can_unsubscribe() -> None:
    transport = _transport(FakeJobQueue(), FakeBot())
    received: list[dict[str, Any]] = []

    async def listener(data: dict[str, Any]) -> None:
        received.append(data)

    subscription = transport.add_response_listener(listener)
    asyncio.run(transport.dispatch_response({"type": "catchup", "friend_id": "1"}))
    subscription.remove()
    asyncio.run(transport.dispatch_response({"type": "catchup", "friend_id": "2"}))

    assert received == [{"type": "catchup", "friend_id": "1"}]


def test_parse_callback_data() -> None:
    assert parse_callback_data("caughtup:friend-1") == {"type": "catchup", "friend_id": "friend-1"}
    assert parse_callback_data("caughtup:") is None
    assert parse_callback_data("other") is None
    assert parse_callback_data(None) is None


def test_request_permission_when_chat_reachable() -> None:
    assert asyncio.run(_transport(FakeJobQueue(), FakeBot()).request_permission()) is True
