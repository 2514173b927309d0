from pathlib import Path

import pytest

from checkin_bot.settings import load_settings

BASE_ENV = {
    "TELEGRAM_BOT_TOKEN": " token ",
    "TELEGRAM_ALLOWED_USER_ID": "111",
    "TELEGRAM_ALLOWED_CHAT_ID": "-222",
}


def test_defaults_live_under_root(tmp_path: Path) -> None:
    settings = load_settings(BASE_ENV, root=tmp_path)

    assert settings.telegram_bot_token == "token"
    assert settings.telegram_allowed_user_id == 111
    assert settings.telegram_allowed_chat_id == -222
    assert settings.friends_config_path == tmp_path / "config" / "friends.toml"
    assert settings.notification_state_path == tmp_path / "data" / "notification_state.json"
    assert settings.journal_path == tmp_path / "data" / "journal.json"


def test_data_dir_moves_state_and_journal(tmp_path: Path) -> None:
    env = dict(BASE_ENV, CHECKIN_DATA_DIR=str(tmp_path / "var"), JOURNAL_PATH=str(tmp_path / "journal.json"))

    settings = load_settings(env, root=tmp_path)

    assert settings.notification_state_path == tmp_path / "var" / "notification_state.json"
    assert settings.journal_path == tmp_path / "journal.json"
    assert settings.writable_paths()[0] == tmp_path / "config" / "friends.toml"


def test_missing_token_rejected(tmp_path: Path) -> None:
    env = dict(BASE_ENV, TELEGRAM_BOT_TOKEN="   ")

    with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
        load_settings(env, root=tmp_path)


def test_non_numeric_ids_rejected(tmp_path: Path) -> None:
    env = dict(BASE_ENV, TELEGRAM_ALLOWED_CHAT_ID="@me")

    with pytest.raises(ValueError, match="TELEGRAM_ALLOWED_CHAT_ID"):
        load_settings(env, root=tmp_path)
