"""
Telegram notifications for resumeup.

Delivers outcome messages to a chat with a bot token, through Telethon
when MTProto keys are configured and through the HTTPS Bot API otherwise.
Delivery is best-effort: callers catch NotificationError and log it.
"""

import asyncio
import logging
from pathlib import Path
from typing import Mapping, Optional, Union

import requests
from telethon import TelegramClient

from ..errors import NotificationError


logger = logging.getLogger(__name__)

DEFAULT_SESSION_DIR = "./data/telegram_session"
SESSION_NAME = "resumeup_bot"
BOT_API_URL = "https://api.telegram.org"


def parse_chat_id(value: str) -> Union[int, str]:
    """
    Convert TELEGRAM_CHAT_ID to what Telethon expects.

    Numeric ids (including negative group/channel ids) become int,
    anything else (e.g. @username) is passed through.
    """
    value = value.strip()
    if value.lstrip("-").isdigit():
        return int(value)
    return value


class LogNotifier:
    """Fallback notifier used when Telegram is not configured."""

    def send(self, text: str) -> None:
        logger.info("Notification (Telegram not configured): %s", text)


class TelegramNotifier:
    """
    Sends messages through a Telegram bot.

    Each send opens a short-lived Telethon session, delivers one message
    and disconnects, so the rest of the program stays synchronous.
    """

    def __init__(
        self,
        api_id: int,
        api_hash: str,
        bot_token: str,
        chat_id: Union[int, str],
        session_dir: str = DEFAULT_SESSION_DIR,
    ):
        """
        Initialize the notifier.

        Args:
            api_id: Telegram API ID from my.telegram.org
            api_hash: Telegram API hash from my.telegram.org
            bot_token: Bot token from @BotFather
            chat_id: Target chat id or @username
            session_dir: Directory to store the bot session file
        """
        self.api_id = api_id
        self.api_hash = api_hash
        self.bot_token = bot_token
        self.chat_id = chat_id

        session_path = Path(session_dir)
        session_path.mkdir(parents=True, exist_ok=True)
        self.session_file = str(session_path / SESSION_NAME)

    def _make_client(self) -> TelegramClient:
        return TelegramClient(self.session_file, self.api_id, self.api_hash)

    async def _deliver(self, text: str) -> None:
        client = self._make_client()
        try:
            await client.start(bot_token=self.bot_token)
            await client.send_message(self.chat_id, text)
        finally:
            await client.disconnect()

    def send(self, text: str) -> None:
        """
        Deliver one message.

        Raises:
            NotificationError: If anything goes wrong during delivery
        """
        try:
            asyncio.run(self._deliver(text))
        except Exception as e:
            raise NotificationError(f"Error sending telegram message: {e}") from e

        logger.info("Telegram message sent to %s", self.chat_id)


class BotApiNotifier:
    """
    Sends messages through the plain Telegram Bot API over HTTPS.

    Only needs the bot token and chat id, so it works with a credential
    file that has no MTProto (TG_API_ID / TG_API_HASH) keys.
    """

    def __init__(
        self,
        bot_token: str,
        chat_id: Union[int, str],
        api_url: str = BOT_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, text: str) -> None:
        """
        Deliver one message via sendMessage.

        Raises:
            NotificationError: On network failure, non-200 status or ok=false
        """
        url = f"{self.api_url}/bot{self.bot_token}/sendMessage"
        data = {"chat_id": self.chat_id, "text": text}

        try:
            resp = self.session.post(url, data=data, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationError(f"Error sending telegram message: {e}") from e

        if resp.status_code != 200:
            raise NotificationError(f"Telegram status code error {resp.status_code}: {resp.text}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise NotificationError(f"Error decoding telegram JSON: {resp.text}") from e

        if not isinstance(payload, dict) or payload.get("ok") is not True:
            raise NotificationError(f"Telegram rejected message: {resp.text}")

        logger.info("Telegram message sent to %s", self.chat_id)


def build_notifier(
    values: Mapping[str, str],
    session: Optional[requests.Session] = None,
    timeout: float = 30,
) -> Union[TelegramNotifier, BotApiNotifier, LogNotifier]:
    """
    Build a notifier from credential-file values.

    - TELEGRAM_TOKEN + TELEGRAM_CHAT_ID + TG_API_ID + TG_API_HASH: Telethon
    - TELEGRAM_TOKEN + TELEGRAM_CHAT_ID only: Bot API over HTTPS
    - otherwise: LogNotifier

    TG_SESSION_DIR is optional. An invalid TG_API_ID falls back to the
    Bot API rather than disabling notifications.
    """
    bot_token = values.get("TELEGRAM_TOKEN")
    chat_id = values.get("TELEGRAM_CHAT_ID")
    api_id: Optional[str] = values.get("TG_API_ID")
    api_hash = values.get("TG_API_HASH")

    if not bot_token or not chat_id:
        logger.warning(
            "Telegram is not configured (need TELEGRAM_TOKEN and TELEGRAM_CHAT_ID); "
            "notifications will only be logged"
        )
        return LogNotifier()

    if api_id and api_hash:
        try:
            parsed_api_id = int(api_id)
        except ValueError:
            logger.warning("Invalid TG_API_ID %r: must be an integer; using the Bot API", api_id)
        else:
            return TelegramNotifier(
                api_id=parsed_api_id,
                api_hash=api_hash,
                bot_token=bot_token,
                chat_id=parse_chat_id(chat_id),
                session_dir=values.get("TG_SESSION_DIR") or DEFAULT_SESSION_DIR,
            )

    return BotApiNotifier(
        bot_token=bot_token,
        chat_id=parse_chat_id(chat_id),
        session=session,
        timeout=timeout,
    )
