from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    telegram_allowed_user_id: int
    telegram_allowed_chat_id: int
    friends_config_path: Path
    notification_state_path: Path
    journal_path: Path

    def writable_paths(self) -> tuple[Path, ...]:
        return (self.friends_config_path, self.notification_state_path, self.journal_path)


def _required_env(env: Mapping[str, str], name: str) -> str:
    value = env.get(name)
    if value is None or not value.strip():
        raise ValueError(f"Missing required environment variable: {name}")
    return value.strip()


def _required_int_env(env: Mapping[str, str], name: str) -> int:
    value = _required_env(env, name)
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a Telegram numeric id, got {value!r}") from exc


def _path_env(env: Mapping[str, str], name: str, default: Path) -> Path:
    value = env.get(name)
    if value is None or not value.strip():
        return default
    return Path(value.strip()).expanduser()


def load_settings(env: Mapping[str, str] | None = None, root: Path | None = None) -> Settings:
    """Read settings from the environment.

    ``CHECKIN_DATA_DIR`` moves the state and journal files together; the
    per-file variables still win over it.
    """
    if env is None:
        env = os.environ
    if root is None:
        root = Path.cwd()

    data_dir = _path_env(env, "CHECKIN_DATA_DIR", root / "data")

    return Settings(
        telegram_bot_token=_required_env(env, "TELEGRAM_BOT_TOKEN"),
        telegram_allowed_user_id=_required_int_env(env, "TELEGRAM_ALLOWED_USER_ID"),
        telegram_allowed_chat_id=_required_int_env(env, "TELEGRAM_ALLOWED_CHAT_ID"),
        friends_config_path=_path_env(env, "FRIENDS_CONFIG_PATH", root / "config" / "friends.toml"),
        notification_state_path=_path_env(
            env, "NOTIFICATION_STATE_PATH", data_dir / "notification_state.json"
        ),
        journal_path=_path_env(env, "JOURNAL_PATH", data_dir / "journal.json"),
    )
