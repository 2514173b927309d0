from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable
from zoneinfo import ZoneInfo

from checkin_bot.date_logic import tomorrow_of
from checkin_bot.friend_store import load_config, log_catch_up
from checkin_bot.models import NotificationContent
from checkin_bot.notification_content import KIND_BIRTHDAY, KIND_CATCH_UP
from checkin_bot.notification_planner import NotificationPlanner, PlanResult
from checkin_bot.notification_state import (
    StateDedup,
    load_state,
    prune_removed_friends,
    record_birthday_sent,
    record_catch_up_sent,
    save_state_atomic,
)

LOGGER = logging.getLogger(__name__)


def now_in_timezone(timezone_name: str) -> datetime:
    tz = ZoneInfo(timezone_name)
    return datetime.now(tz)


class CheckInService:
    def __init__(
        self,
        *,
        planner: NotificationPlanner,
        config_path: Path,
        notification_state_path: Path,
        clock: Callable[[str], datetime] = now_in_timezone,
    ) -> None:
        self._planner = planner
        self._config_path = config_path
        self._notification_state_path = notification_state_path
        self._clock = clock

    def current_time(self) -> datetime:
        config = load_config(self._config_path)
        return self._clock(config.timezone)

    async def plan_notifications(self, now: datetime | None = None) -> PlanResult:
        config = load_config(self._config_path)
        if now is None:
            now = self._clock(config.timezone)

        state = load_state(self._notification_state_path)
        prune_removed_friends(state, {friend.id for friend in config.friends})
        save_state_atomic(self._notification_state_path, state)

        dedup = StateDedup(state, tomorrow_of(now.date()))
        if not state.notifications_enabled:
            # An empty friend list still clears whatever was scheduled before.
            LOGGER.info("Notifications are turned off; clearing scheduled notifications")
            return await self._planner.schedule_all([], dedup, now)
        return await self._planner.schedule_all(config.friends, dedup, now)

    def notifications_enabled(self) -> bool:
        return load_state(self._notification_state_path).notifications_enabled

    async def set_notifications_enabled(self, enabled: bool) -> PlanResult:
        state = load_state(self._notification_state_path)
        state.notifications_enabled = enabled
        save_state_atomic(self._notification_state_path, state)
        LOGGER.info("Notifications turned %s", "on" if enabled else "off")
        return await self.plan_notifications()

    async def record_delivery(self, content: NotificationContent, sent_on: date) -> None:
        state = load_state(self._notification_state_path)
        kind = content.data.get("type")

        if kind == KIND_BIRTHDAY:
            record_birthday_sent(state, sent_on)
        elif kind == KIND_CATCH_UP:
            record_catch_up_sent(state, str(content.data["friend_id"]), sent_on)
        else:
            LOGGER.warning("Ignoring delivery of unknown notification type %r", kind)
            return

        save_state_atomic(self._notification_state_path, state)

    async def handle_notification_response(self, data: dict[str, Any]) -> str | None:
        if data.get("type") != KIND_CATCH_UP:
            return None

        friend_id = str(data["friend_id"])
        now = self.current_time()
        previous = log_catch_up(self._config_path, friend_id, now.date())
        if previous is None:
            LOGGER.info("Notification response for unknown friend %s", friend_id)
            return None

        LOGGER.info("Logged catch-up for %s from notification", friend_id)
        await self.plan_notifications(now)
        return previous
