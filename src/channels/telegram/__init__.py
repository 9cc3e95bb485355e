"""
Telegram Channel Module.

Handles Telegram bot integration for notifications.
"""

from src.channels.telegram.bot import TelegramBot
from src.channels.telegram.formatter import TelegramFormatter
from src.channels.telegram.notifier import TelegramNotifier

__all__ = [
    "TelegramBot",
    "TelegramFormatter",
    "TelegramNotifier",
]
