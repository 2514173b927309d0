from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from telegram import Update
from telegram.ext import (
    CallbackContext,
    CallbackQueryHandler,
    CommandHandler,
    ConversationHandler,
    MessageHandler,
    filters,
)

from checkin_bot.check_in import check_in_info, sort_by_urgency
from checkin_bot.checkin_service import CheckInService
from checkin_bot.date_logic import (
    InvalidDateFormatError,
    days_remaining_in_year,
    days_until_birthday,
    format_birthday,
    parse_birthday,
    parse_iso_date,
    relative_label,
)
from checkin_bot.friend_store import (
    add_friend,
    has_friend,
    load_config,
    log_catch_up,
    remove_friend,
    undo_catch_up,
)
from checkin_bot.journal_store import get_entry, set_mood, upsert_entry
from checkin_bot.models import FRIEND_CATEGORIES, MOODS, Friend, JournalEntry, NewFriend
from checkin_bot.settings import Settings
from checkin_bot.telegram_transport import CALLBACK_PREFIX, TelegramNotificationTransport, parse_callback_data

LOGGER = logging.getLogger(__name__)

(
    STATE_ADD_NAME,
    STATE_ADD_BIRTHDAY,
    STATE_ADD_FREQUENCY,
    STATE_ADD_LAST_CONTACT,
    STATE_ADD_CATEGORY,
    STATE_ADD_CONFIRM,
    STATE_CHECKIN_SELECT,
    STATE_REMOVE_SELECT,
    STATE_REMOVE_CONFIRM,
) = range(9)

PENDING_ADD_KEY = "pending_add_friend"
PENDING_REMOVE_KEY = "pending_remove_friend"
LAST_CATCH_UP_KEY = "last_catch_up"


@dataclass(frozen=True)
class HandlerDependencies:
    settings: Settings
    service: CheckInService
    transport: TelegramNotificationTransport


@dataclass(frozen=True)
class FriendListRow:
    name: str
    category: str
    status_label: str | None
    last_contact_label: str
    days_until_birthday: int


def is_authorized(update: Update, settings: Settings) -> bool:
    effective_user = update.effective_user
    effective_chat = update.effective_chat
    if effective_user is None or effective_chat is None:
        return False
    return (
        effective_user.id == settings.telegram_allowed_user_id
        and effective_chat.id == settings.telegram_allowed_chat_id
    )


async def _deny_unauthorized(update: Update) -> None:
    if update.effective_message:
        await update.effective_message.reply_text("This bot is restricted to its configured owner.")


def parse_birthday_text(raw_text: str) -> str:
    month, day, year = parse_birthday(raw_text)
    return format_birthday(month, day, year)


def parse_frequency_text(raw_text: str) -> int | None:
    text = raw_text.strip().lower()
    if not text or text in {"skip", "none"}:
        return None
    if not text.isdigit() or int(text) <= 0:
        raise ValueError("Cadence must be a positive number of days")
    return int(text)


def parse_last_contact_text(raw_text: str, today: date) -> str:
    text = raw_text.strip().lower()
    if text == "today":
        return today.isoformat()
    try:
        last_contact = parse_iso_date(text)
    except InvalidDateFormatError as exc:
        raise ValueError("Last contact must be YYYY-MM-DD or today") from exc
    if last_contact > today:
        raise ValueError("Last contact cannot be in the future")
    return last_contact.isoformat()


def parse_category_text(raw_text: str) -> str:
    text = raw_text.strip().lower()
    if text not in FRIEND_CATEGORIES:
        raise ValueError(f"Category must be one of: {', '.join(FRIEND_CATEGORIES)}")
    return text


def parse_selection(raw_text: str, count: int) -> int:
    text = raw_text.strip()
    if not text.isdigit():
        raise ValueError("Please send the number shown in the list")
    selected = int(text)
    if selected < 1 or selected > count:
        raise ValueError(f"Number must be between 1 and {count}")
    return selected - 1


def command_argument_text(raw_text: str) -> str:
    """Everything after the command word, with line breaks kept."""
    parts = raw_text.strip().split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def parse_toggle_text(raw_text: str) -> bool | None:
    text = raw_text.strip().lower()
    if not text:
        return None
    if text in {"on", "yes", "enable"}:
        return True
    if text in {"off", "no", "disable"}:
        return False
    raise ValueError("Send /notifications on or /notifications off")


def _split_leading_date(raw_text: str, today: date) -> tuple[str, str]:
    parts = raw_text.strip().split(maxsplit=1)
    if parts:
        try:
            entry_date = parse_iso_date(parts[0])
        except InvalidDateFormatError:
            pass
        else:
            if entry_date > today:
                raise ValueError("Journal entries cannot be written for future dates")
            rest = parts[1].strip() if len(parts) > 1 else ""
            return entry_date.isoformat(), rest
    return today.isoformat(), raw_text.strip()


def parse_journal_text(raw_text: str, today: date) -> tuple[str, str]:
    """Split ``[YYYY-MM-DD] text`` into the entry date and its content."""
    return _split_leading_date(raw_text, today)


def parse_mood_text(raw_text: str, today: date) -> tuple[str, str | None]:
    entry_date, rest = _split_leading_date(raw_text, today)
    mood = rest.lower()
    if mood in {"clear", "none"}:
        return entry_date, None
    if mood not in MOODS:
        raise ValueError(f"Mood must be one of: {', '.join(MOODS)}")
    return entry_date, mood


def _render_journal_entry(entry: JournalEntry | None, entry_date: str, today: date) -> str:
    lines = [f"Journal for {entry_date}"]
    if entry is None or (not entry.content and entry.mood is None):
        lines.append("Nothing written yet. Send /journal <text> to write.")
    else:
        if entry.mood is not None:
            lines.append(f"Mood: {entry.mood}")
        if entry.content:
            lines.append("")
            lines.append(entry.content)
    lines.append("")
    lines.append(f"{days_remaining_in_year(today)} days left in {today.year}.")
    return "\n".join(lines)


def _render_help() -> str:
    return (
        "Commands:\n"
        "/add - Add a friend\n"
        "/list - Show friends, most overdue first\n"
        "/checkin - Log a catch-up with a friend\n"
        "/undo - Undo the last logged catch-up\n"
        "/remove - Remove a friend\n"
        "/notifications [on|off] - Show or toggle notifications\n"
        "/journal [YYYY-MM-DD] [text] - Show or write a journal entry\n"
        "/mood [YYYY-MM-DD] <mood> - Set the mood for a day\n"
        "/help - Show this help message\n"
        "/cancel - Cancel the active wizard\n\n"
        "Birthday format examples:\n"
        "- 1990-03-14\n"
        "- 03-14"
    )


def build_list_rows(friends: list[Friend], today: date) -> list[FriendListRow]:
    rows: list[FriendListRow] = []
    for friend in sort_by_urgency(friends, today):
        info = check_in_info(friend, today)
        rows.append(
            FriendListRow(
                name=friend.name,
                category=friend.category,
                status_label=info.label if info is not None else None,
                last_contact_label=relative_label(friend.last_contact_at, today),
                days_until_birthday=days_until_birthday(friend.birthday, today),
            )
        )
    return rows


def _render_list_message(rows: list[FriendListRow]) -> str:
    lines = [f"Friends ({len(rows)})", "Most overdue first:"]

    for index, row in enumerate(rows, start=1):
        lines.append(f"{index}. {row.name} ({row.category})")
        details = []
        if row.status_label is not None:
            details.append(row.status_label)
        details.append(f"Last contact {row.last_contact_label}")
        if row.days_until_birthday == 0:
            details.append("Birthday today 🎂")
        else:
            details.append(f"Birthday in {row.days_until_birthday}d")
        lines.append(f"   {' | '.join(details)}")
        lines.append("")

    return "\n".join(lines).rstrip()


def _render_selection(title: str, friends: list[Friend]) -> str:
    lines = [title]
    for index, friend in enumerate(friends, start=1):
        lines.append(f"{index}. {friend.name}")
    return "\n".join(lines)


def _render_add_summary(pending: dict[str, Any]) -> str:
    frequency = pending.get("frequency_days")
    frequency_text = f"every {frequency} days" if frequency is not None else "(not tracked)"
    return (
        "Step 6/6: Confirm this friend:\n"
        f"Name: {pending.get('name')}\n"
        f"Birthday: {pending.get('birthday')}\n"
        f"Cadence: {frequency_text}\n"
        f"Last contact: {pending.get('last_contact_at')}\n"
        f"Category: {pending.get('category')}\n\n"
        "Reply with yes to save, or no to cancel."
    )


def _deps(context: CallbackContext) -> HandlerDependencies:
    return context.application.bot_data["handler_deps"]


async def help_command(update: Update, context: CallbackContext) -> None:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return
    await update.effective_message.reply_text(_render_help())


async def list_command(update: Update, context: CallbackContext) -> None:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return

    config = load_config(settings.friends_config_path)
    if not config.friends:
        await update.effective_message.reply_text("No friends yet. Send /add to add your first friend.")
        return

    today = deps.service.current_time().date()
    await update.effective_message.reply_text(_render_list_message(build_list_rows(config.friends, today)))


async def add_start(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    context.user_data[PENDING_ADD_KEY] = {}
    await update.effective_message.reply_text(
        "Add friend wizard started.\nStep 1/6: Send your friend's name."
    )
    return STATE_ADD_NAME


async def add_name(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    name = (update.effective_message.text or "").strip()
    if not name:
        await update.effective_message.reply_text("Name cannot be empty. Please send a name.")
        return STATE_ADD_NAME

    config = load_config(deps.settings.friends_config_path)
    if has_friend(config, name):
        await update.effective_message.reply_text(f"{name} is already in your list. Send another name.")
        return STATE_ADD_NAME

    context.user_data[PENDING_ADD_KEY] = {"name": name}
    await update.effective_message.reply_text("Step 2/6: Send birthday as YYYY-MM-DD or MM-DD.")
    return STATE_ADD_BIRTHDAY


async def add_birthday(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    try:
        birthday = parse_birthday_text(update.effective_message.text or "")
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}. Please send YYYY-MM-DD or MM-DD.")
        return STATE_ADD_BIRTHDAY

    pending = context.user_data.get(PENDING_ADD_KEY, {})
    pending["birthday"] = birthday
    context.user_data[PENDING_ADD_KEY] = pending

    await update.effective_message.reply_text(
        "Step 3/6: How often do you want to check in, in days (e.g., 14)?\n"
        "Send skip to not track a cadence."
    )
    return STATE_ADD_FREQUENCY


async def add_frequency(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    try:
        frequency_days = parse_frequency_text(update.effective_message.text or "")
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}. Send a number like 14, or skip.")
        return STATE_ADD_FREQUENCY

    pending = context.user_data.get(PENDING_ADD_KEY, {})
    pending["frequency_days"] = frequency_days
    context.user_data[PENDING_ADD_KEY] = pending

    await update.effective_message.reply_text(
        "Step 4/6: When did you last catch up? Send YYYY-MM-DD or today."
    )
    return STATE_ADD_LAST_CONTACT


async def add_last_contact(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    today = deps.service.current_time().date()
    try:
        last_contact_at = parse_last_contact_text(update.effective_message.text or "", today)
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}.")
        return STATE_ADD_LAST_CONTACT

    pending = context.user_data.get(PENDING_ADD_KEY, {})
    pending["last_contact_at"] = last_contact_at
    context.user_data[PENDING_ADD_KEY] = pending

    await update.effective_message.reply_text(
        f"Step 5/6: Pick a category: {', '.join(FRIEND_CATEGORIES)}."
    )
    return STATE_ADD_CATEGORY


async def add_category(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    try:
        category = parse_category_text(update.effective_message.text or "")
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}.")
        return STATE_ADD_CATEGORY

    pending = context.user_data.get(PENDING_ADD_KEY, {})
    pending["category"] = category
    context.user_data[PENDING_ADD_KEY] = pending

    await update.effective_message.reply_text(_render_add_summary(pending))
    return STATE_ADD_CONFIRM


async def add_confirm(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    decision = (update.effective_message.text or "").strip().lower()
    if decision not in {"yes", "y", "no", "n"}:
        await update.effective_message.reply_text("Please reply with yes or no.")
        return STATE_ADD_CONFIRM

    if decision in {"no", "n"}:
        context.user_data.pop(PENDING_ADD_KEY, None)
        await update.effective_message.reply_text("Canceled. No changes were made.")
        return ConversationHandler.END

    pending = context.user_data.get(PENDING_ADD_KEY, {})
    friend = add_friend(
        settings.friends_config_path,
        NewFriend(
            name=str(pending["name"]),
            birthday=str(pending["birthday"]),
            last_contact_at=str(pending["last_contact_at"]),
            frequency_days=pending.get("frequency_days"),
            category=str(pending["category"]),
        ),
    )
    context.user_data.pop(PENDING_ADD_KEY, None)

    await update.effective_message.reply_text(f"{friend.name} added.")
    LOGGER.info("Added friend %s", friend.id)
    await deps.service.plan_notifications()
    return ConversationHandler.END


async def checkin_start(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    config = load_config(settings.friends_config_path)
    if not config.friends:
        await update.effective_message.reply_text("No friends yet. Send /add to add your first friend.")
        return ConversationHandler.END

    today = deps.service.current_time().date()
    friends = sort_by_urgency(config.friends, today)
    context.user_data["checkin_choices"] = [friend.id for friend in friends]
    await update.effective_message.reply_text(
        _render_selection("Who did you catch up with? Reply with a number:", friends)
    )
    return STATE_CHECKIN_SELECT


async def checkin_select(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    choices: list[str] = context.user_data.get("checkin_choices") or []
    try:
        selected = parse_selection(update.effective_message.text or "", len(choices))
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}.")
        return STATE_CHECKIN_SELECT

    friend_id = choices[selected]
    today = deps.service.current_time().date()
    previous = log_catch_up(settings.friends_config_path, friend_id, today)
    context.user_data.pop("checkin_choices", None)
    if previous is None:
        await update.effective_message.reply_text("That friend no longer exists. Send /checkin to try again.")
        return ConversationHandler.END

    context.user_data[LAST_CATCH_UP_KEY] = {"friend_id": friend_id, "previous": previous}
    await update.effective_message.reply_text("Caught up! Send /undo to revert.")
    await deps.service.plan_notifications()
    return ConversationHandler.END


async def undo_command(update: Update, context: CallbackContext) -> None:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return

    last = context.user_data.pop(LAST_CATCH_UP_KEY, None)
    if not last:
        await update.effective_message.reply_text("Nothing to undo.")
        return

    undo_catch_up(settings.friends_config_path, last["friend_id"], last["previous"])
    await update.effective_message.reply_text(f"Restored last contact to {last['previous']}.")
    await deps.service.plan_notifications()


async def remove_start(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    config = load_config(settings.friends_config_path)
    if not config.friends:
        await update.effective_message.reply_text("No friends yet.")
        return ConversationHandler.END

    context.user_data[PENDING_REMOVE_KEY] = {"choices": [friend.id for friend in config.friends]}
    await update.effective_message.reply_text(
        _render_selection("Who should be removed? Reply with a number:", config.friends)
    )
    return STATE_REMOVE_SELECT


async def remove_select(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    pending = context.user_data.get(PENDING_REMOVE_KEY)
    if not isinstance(pending, dict) or "choices" not in pending:
        await update.effective_message.reply_text("Remove session expired. Send /remove to start again.")
        return ConversationHandler.END

    try:
        selected = parse_selection(update.effective_message.text or "", len(pending["choices"]))
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}.")
        return STATE_REMOVE_SELECT

    pending["friend_id"] = pending["choices"][selected]
    context.user_data[PENDING_REMOVE_KEY] = pending
    await update.effective_message.reply_text("Reply with yes to remove, or no to cancel.")
    return STATE_REMOVE_CONFIRM


async def remove_confirm(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    decision = (update.effective_message.text or "").strip().lower()
    if decision not in {"yes", "y", "no", "n"}:
        await update.effective_message.reply_text("Please reply with yes or no.")
        return STATE_REMOVE_CONFIRM

    pending = context.user_data.pop(PENDING_REMOVE_KEY, None) or {}
    if decision in {"no", "n"}:
        await update.effective_message.reply_text("Canceled. No changes were made.")
        return ConversationHandler.END

    if not remove_friend(settings.friends_config_path, str(pending.get("friend_id", ""))):
        await update.effective_message.reply_text("That friend was already removed.")
        return ConversationHandler.END

    await update.effective_message.reply_text("Friend removed.")
    LOGGER.info("Removed friend %s", pending.get("friend_id"))
    await deps.service.plan_notifications()
    return ConversationHandler.END


async def cancel_command(update: Update, context: CallbackContext) -> int:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return ConversationHandler.END

    context.user_data.pop(PENDING_ADD_KEY, None)
    context.user_data.pop(PENDING_REMOVE_KEY, None)
    context.user_data.pop("checkin_choices", None)
    await update.effective_message.reply_text("Wizard canceled.")
    return ConversationHandler.END


async def notifications_command(update: Update, context: CallbackContext) -> None:
    deps = _deps(context)
    if not is_authorized(update, deps.settings):
        await _deny_unauthorized(update)
        return

    try:
        enabled = parse_toggle_text(command_argument_text(update.effective_message.text or ""))
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}.")
        return

    if enabled is None:
        status = "on" if deps.service.notifications_enabled() else "off"
        await update.effective_message.reply_text(f"Notifications are {status}.")
        return

    if enabled and not await deps.transport.request_permission():
        await update.effective_message.reply_text("I can't reach this chat, so notifications stay off.")
        return

    await deps.service.set_notifications_enabled(enabled)
    await update.effective_message.reply_text(f"Notifications turned {'on' if enabled else 'off'}.")


async def journal_command(update: Update, context: CallbackContext) -> None:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return

    now = deps.service.current_time()
    today = now.date()
    try:
        entry_date, content = parse_journal_text(
            command_argument_text(update.effective_message.text or ""), today
        )
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}.")
        return

    if not content:
        entry = get_entry(settings.journal_path, entry_date)
        await update.effective_message.reply_text(_render_journal_entry(entry, entry_date, today))
        return

    upsert_entry(settings.journal_path, entry_date, content, now)
    LOGGER.info("Saved journal entry for %s", entry_date)
    await update.effective_message.reply_text(f"Saved journal entry for {entry_date}.")


async def mood_command(update: Update, context: CallbackContext) -> None:
    deps = _deps(context)
    settings = deps.settings
    if not is_authorized(update, settings):
        await _deny_unauthorized(update)
        return

    now = deps.service.current_time()
    try:
        entry_date, mood = parse_mood_text(
            command_argument_text(update.effective_message.text or ""), now.date()
        )
    except ValueError as exc:
        await update.effective_message.reply_text(f"{exc}.")
        return

    set_mood(settings.journal_path, entry_date, mood, now)
    if mood is None:
        await update.effective_message.reply_text(f"Cleared the mood for {entry_date}.")
    else:
        await update.effective_message.reply_text(f"Mood for {entry_date} set to {mood}.")


async def notification_response(update: Update, context: CallbackContext) -> None:
    deps = _deps(context)
    query = update.callback_query
    if not is_authorized(update, deps.settings):
        await query.answer()
        return

    data = parse_callback_data(query.data)
    if data is None:
        await query.answer()
        return

    await deps.transport.dispatch_response(data)
    await query.answer("Caught up!")
    await query.edit_message_reply_markup(reply_markup=None)


def build_handlers(settings: Settings) -> list:
    text_only = filters.TEXT & ~filters.COMMAND

    add_conversation = ConversationHandler(
        entry_points=[CommandHandler("add", add_start)],
        states={
            STATE_ADD_NAME: [MessageHandler(text_only, add_name)],
            STATE_ADD_BIRTHDAY: [MessageHandler(text_only, add_birthday)],
            STATE_ADD_FREQUENCY: [MessageHandler(text_only, add_frequency)],
            STATE_ADD_LAST_CONTACT: [MessageHandler(text_only, add_last_contact)],
            STATE_ADD_CATEGORY: [MessageHandler(text_only, add_category)],
            STATE_ADD_CONFIRM: [MessageHandler(text_only, add_confirm)],
        },
        fallbacks=[CommandHandler("cancel", cancel_command)],
        name="add_friend_conversation",
        persistent=False,
    )

    checkin_conversation = ConversationHandler(
        entry_points=[CommandHandler("checkin", checkin_start)],
        states={
            STATE_CHECKIN_SELECT: [MessageHandler(text_only, checkin_select)],
        },
        fallbacks=[CommandHandler("cancel", cancel_command)],
        name="checkin_conversation",
        persistent=False,
    )

    remove_conversation = ConversationHandler(
        entry_points=[CommandHandler("remove", remove_start)],
        states={
            STATE_REMOVE_SELECT: [MessageHandler(text_only, remove_select)],
            STATE_REMOVE_CONFIRM: [MessageHandler(text_only, remove_confirm)],
        },
        fallbacks=[CommandHandler("cancel", cancel_command)],
        name="remove_friend_conversation",
        persistent=False,
    )

    return [
        CommandHandler("help", help_command),
        CommandHandler("list", list_command),
        CommandHandler("undo", undo_command),
        CommandHandler("notifications", notifications_command),
        CommandHandler("journal", journal_command),
        CommandHandler("mood", mood_command),
        CommandHandler("cancel", cancel_command),
        CallbackQueryHandler(notification_response, pattern=f"^{CALLBACK_PREFIX}"),
        add_conversation,
        checkin_conversation,
        remove_conversation,
    ]
