"""
Telegram module for resumeup.

Handles delivery of outcome messages through a Telegram bot.
"""

from .notify import TelegramNotifier, BotApiNotifier, LogNotifier, build_notifier, parse_chat_id

__all__ = [
    "TelegramNotifier",
    "BotApiNotifier",
    "LogNotifier",
    "build_notifier",
    "parse_chat_id",
]
