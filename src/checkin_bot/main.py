from __future__ import annotations

import logging
from pathlib import Path
from zoneinfo import ZoneInfo

from telegram.ext import Application, CallbackContext

from checkin_bot.bot_handlers import HandlerDependencies, build_handlers
from checkin_bot.checkin_service import CheckInService
from checkin_bot.friend_store import ensure_default_config, load_config
from checkin_bot.notification_planner import NotificationPlanner, daily_planning_time
from checkin_bot.settings import load_settings
from checkin_bot.telegram_transport import TelegramNotificationTransport

LOGGER = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


async def scheduled_planning_callback(context: CallbackContext) -> None:
    service: CheckInService = context.application.bot_data["checkin_service"]
    await service.plan_notifications()


async def startup_planning(application: Application) -> None:
    transport: TelegramNotificationTransport = application.bot_data["transport"]
    if not await transport.request_permission():
        LOGGER.warning("Owner chat is not reachable; notifications will not be planned until the next run")
        return

    service: CheckInService = application.bot_data["checkin_service"]
    await service.plan_notifications()


def main() -> None:
    configure_logging()

    settings = load_settings()
    for path in settings.writable_paths():
        _ensure_parent(path)

    ensure_default_config(settings.friends_config_path)
    config = load_config(settings.friends_config_path)
    tz = ZoneInfo(config.timezone)

    application = Application.builder().token(settings.telegram_bot_token).build()

    transport = TelegramNotificationTransport(
        bot=application.bot,
        job_queue=application.job_queue,
        chat_id=settings.telegram_allowed_chat_id,
    )
    planner = NotificationPlanner(transport, window_start_hour=config.notification_window_start)
    service = CheckInService(
        planner=planner,
        config_path=settings.friends_config_path,
        notification_state_path=settings.notification_state_path,
    )
    transport.set_delivery_hook(service.record_delivery)
    transport.add_response_listener(service.handle_notification_response)

    application.bot_data["settings"] = settings
    application.bot_data["transport"] = transport
    application.bot_data["checkin_service"] = service
    application.bot_data["handler_deps"] = HandlerDependencies(
        settings=settings,
        service=service,
        transport=transport,
    )

    for handler in build_handlers(settings):
        application.add_handler(handler)

    application.job_queue.run_daily(
        scheduled_planning_callback,
        time=daily_planning_time(config.notification_window_start).replace(tzinfo=tz),
        name="daily-notification-planning",
    )

    application.post_init = startup_planning
    application.run_polling()


if __name__ == "__main__":
    main()
