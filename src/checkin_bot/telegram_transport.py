from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Awaitable, Callable

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.error import TelegramError
from telegram.ext import CallbackContext, JobQueue

from checkin_bot.models import NotificationContent
from checkin_bot.notification_content import KIND_CATCH_UP

LOGGER = logging.getLogger(__name__)

NOTIFICATION_JOB_PREFIX = "checkin-notification:"
CALLBACK_PREFIX = "caughtup:"

DeliveryHook = Callable[[NotificationContent, date], Awaitable[None]]
ResponseCallback = Callable[[dict[str, Any]], Awaitable[None]]


@dataclass
class ResponseSubscription:
    transport: "TelegramNotificationTransport"
    callback: ResponseCallback

    def remove(self) -> None:
        self.transport.remove_response_listener(self.callback)


def render_message(content: NotificationContent) -> str:
    return f"{content.title}\n{content.body}"


def build_reply_markup(content: NotificationContent) -> InlineKeyboardMarkup | None:
    if content.data.get("type") != KIND_CATCH_UP:
        return None
    button = InlineKeyboardButton("Caught up ✅", callback_data=f"{CALLBACK_PREFIX}{content.data['friend_id']}")
    return InlineKeyboardMarkup([[button]])


def parse_callback_data(raw: str | None) -> dict[str, Any] | None:
    if not raw or not raw.startswith(CALLBACK_PREFIX):
        return None
    friend_id = raw[len(CALLBACK_PREFIX):]
    if not friend_id:
        return None
    return {"type": KIND_CATCH_UP, "friend_id": friend_id}


class TelegramNotificationTransport:
    """Schedules notifications as one-shot jobs that message the owner's chat."""

    def __init__(
        self,
        *,
        bot: Bot,
        job_queue: JobQueue,
        chat_id: int,
        on_delivered: DeliveryHook | None = None,
    ) -> None:
        self._bot = bot
        self._job_queue = job_queue
        self._chat_id = chat_id
        self._on_delivered = on_delivered
        self._listeners: list[ResponseCallback] = []

    def set_delivery_hook(self, hook: DeliveryHook | None) -> None:
        self._on_delivered = hook

    async def request_permission(self) -> bool:
        try:
            await self._bot.get_chat(chat_id=self._chat_id)
        except TelegramError as exc:
            LOGGER.warning("Chat %s is not reachable: %s", self._chat_id, exc)
            return False
        return True

    async def cancel_all_scheduled(self) -> None:
        removed = 0
        for job in self._job_queue.jobs():
            if job.name and job.name.startswith(NOTIFICATION_JOB_PREFIX):
                job.schedule_removal()
                removed += 1
        LOGGER.debug("Cancelled %s scheduled notifications", removed)

    async def schedule_one(self, content: NotificationContent, send_at: datetime) -> str:
        name = f"{NOTIFICATION_JOB_PREFIX}{uuid.uuid4().hex}"
        self._job_queue.run_once(
            self._deliver,
            when=send_at,
            data={"content": content, "send_at": send_at},
            name=name,
        )
        return name

    async def _deliver(self, context: CallbackContext) -> None:
        content: NotificationContent = context.job.data["content"]
        send_at: datetime = context.job.data["send_at"]

        await self._bot.send_message(
            chat_id=self._chat_id,
            text=render_message(content),
            reply_markup=build_reply_markup(content),
        )
        LOGGER.info("Delivered %s notification: %s", content.data.get("type"), content.title)

        if self._on_delivered is not None:
            await self._on_delivered(content, send_at.date())

    def add_response_listener(self, callback: ResponseCallback) -> ResponseSubscription:
        self._listeners.append(callback)
        return ResponseSubscription(transport=self, callback=callback)

    def remove_response_listener(self, callback: ResponseCallback) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    async def dispatch_response(self, data: dict[str, Any]) -> None:
        for callback in list(self._listeners):
            await callback(data)
