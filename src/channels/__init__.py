"""
Notification Channels Module.

Notifier interface, background dispatcher and the Telegram channel.
"""

from src.channels.base import BaseNotifier, DeliveryResult, Notification
from src.channels.dispatcher import NotificationDispatcher
from src.channels.telegram import TelegramBot, TelegramFormatter, TelegramNotifier

__all__ = [
    # Base classes
    "BaseNotifier",
    "DeliveryResult",
    "Notification",
    "NotificationDispatcher",
    # Telegram
    "TelegramBot",
    "TelegramFormatter",
    "TelegramNotifier",
]
