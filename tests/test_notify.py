"""Tests for Telegram notifications."""

import pytest
import requests

from resumeup.errors import NotificationError
from resumeup.telegram.notify import (
    BotApiNotifier,
    LogNotifier,
    TelegramNotifier,
    build_notifier,
    parse_chat_id,
)

from conftest import FakeResponse, FakeSession


class FakeTelegramClient:
    def __init__(self, fail=False):
        self.fail = fail
        self.bot_token = None
        self.sent = []
        self.disconnected = False

    async def start(self, bot_token=None):
        self.bot_token = bot_token
        return self

    async def send_message(self, entity, text):
        if self.fail:
            raise RuntimeError("chat not found")
        self.sent.append((entity, text))

    async def disconnect(self):
        self.disconnected = True


def make_notifier(tmp_path, monkeypatch, fake):
    notifier = TelegramNotifier(
        api_id=1,
        api_hash="hash",
        bot_token="123:abc",
        chat_id=42,
        session_dir=str(tmp_path / "session"),
    )
    monkeypatch.setattr(notifier, "_make_client", lambda: fake)
    return notifier


def test_send_delivers_and_disconnects(tmp_path, monkeypatch):
    fake = FakeTelegramClient()
    notifier = make_notifier(tmp_path, monkeypatch, fake)

    notifier.send("Успешно поднято Dev")

    assert fake.bot_token == "123:abc"
    assert fake.sent == [(42, "Успешно поднято Dev")]
    assert fake.disconnected
    assert (tmp_path / "session").is_dir()


def test_send_failure_raises_notification_error(tmp_path, monkeypatch):
    fake = FakeTelegramClient(fail=True)
    notifier = make_notifier(tmp_path, monkeypatch, fake)

    with pytest.raises(NotificationError):
        notifier.send("hello")

    assert fake.disconnected


@pytest.mark.parametrize(
    "raw,expected",
    [("42", 42), ("-1001234567890", -1001234567890), (" 7 ", 7), ("@my_channel", "@my_channel")],
)
def test_parse_chat_id(raw, expected):
    assert parse_chat_id(raw) == expected


def test_build_notifier_with_full_config(tmp_path):
    notifier = build_notifier(
        {
            "TELEGRAM_TOKEN": "123:abc",
            "TELEGRAM_CHAT_ID": "-100500",
            "TG_API_ID": "12345",
            "TG_API_HASH": "hash",
            "TG_SESSION_DIR": str(tmp_path / "tg"),
        }
    )

    assert isinstance(notifier, TelegramNotifier)
    assert notifier.api_id == 12345
    assert notifier.chat_id == -100500
    assert notifier.session_file.startswith(str(tmp_path / "tg"))


@pytest.mark.parametrize(
    "values",
    [
        {},
        {"TELEGRAM_CHAT_ID": "42", "TG_API_ID": "1", "TG_API_HASH": "hash"},
        {"TELEGRAM_TOKEN": "", "TELEGRAM_CHAT_ID": "42", "TG_API_ID": "1", "TG_API_HASH": "hash"},
        {"TELEGRAM_TOKEN": "123:abc", "TELEGRAM_CHAT_ID": ""},
    ],
)
def test_build_notifier_falls_back_to_logging(values):
    assert isinstance(build_notifier(values), LogNotifier)


@pytest.mark.parametrize(
    "values",
    [
        {"TELEGRAM_TOKEN": "123:abc", "TELEGRAM_CHAT_ID": "42"},
        {"TELEGRAM_TOKEN": "123:abc", "TELEGRAM_CHAT_ID": "42", "TG_API_ID": "1"},
        {"TELEGRAM_TOKEN": "123:abc", "TELEGRAM_CHAT_ID": "42", "TG_API_ID": "x", "TG_API_HASH": "hash"},
    ],
)
def test_build_notifier_uses_bot_api_without_mtproto_keys(values):
    notifier = build_notifier(values, timeout=4)

    assert isinstance(notifier, BotApiNotifier)
    assert notifier.bot_token == "123:abc"
    assert notifier.chat_id == 42
    assert notifier.timeout == 4


def test_bot_api_notifier_posts_send_message():
    session = FakeSession([FakeResponse({"ok": True, "result": {"message_id": 1}})])
    notifier = BotApiNotifier("123:abc", 42, session=session, timeout=4)

    notifier.send("Успешно поднято Dev")

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.telegram.org/bot123:abc/sendMessage"
    assert call["data"] == {"chat_id": 42, "text": "Успешно поднято Dev"}
    assert call["timeout"] == 4


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({"ok": False, "description": "Bad Request: chat not found"}, status=400),
        FakeResponse({"ok": False, "description": "chat not found"}),
        FakeResponse(None, text="<html>bad gateway</html>"),
        requests.ConnectionError("no route"),
    ],
)
def test_bot_api_notifier_failures_raise_notification_error(response):
    notifier = BotApiNotifier("123:abc", 42, session=FakeSession([response]))

    with pytest.raises(NotificationError):
        notifier.send("hello")


def test_log_notifier_never_raises(caplog):
    with caplog.at_level("INFO", logger="resumeup"):
        LogNotifier().send("Успешно поднято Dev")
    assert "Успешно поднято Dev" in caplog.text
