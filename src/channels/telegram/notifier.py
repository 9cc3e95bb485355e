"""
Telegram Notifier Module.

Delivers match notifications to the Telegram chat bound to a user.
"""

from typing import Any

from loguru import logger

from src.channels.base import BaseNotifier, DeliveryResult
from src.channels.telegram.bot import TelegramBot
from src.channels.telegram.formatter import TelegramFormatter
from src.matching.errors import UnavailableError
from src.modules.users import UserRepository

tg_notify_log = logger.bind(module="TelegramNotify")


class TelegramNotifier(BaseNotifier):
    """Notifier backed by a Telegram bot."""

    service_name = "telegram"

    def __init__(
        self,
        bot: TelegramBot,
        users: UserRepository,
        formatter: TelegramFormatter | None = None,
    ):
        """
        Initialize notifier.

        Args:
            bot: Telegram bot wrapper
            users: Profile store used to resolve the chat of a user
            formatter: Message formatter
        """
        self._bot = bot
        self._users = users
        self._formatter = formatter or TelegramFormatter()

    async def notify(
        self,
        target_uid: str,
        title: str,
        body: str,
        metadata: dict[str, Any] | None = None,
    ) -> DeliveryResult:
        """
        Send a notification to the Telegram chat of a user.

        Raises:
            UnavailableError: If Telegram rejected or failed the send
        """
        if not self._bot.is_configured:
            return DeliveryResult.skipped("not_configured")

        target = await self._users.get_notification_target(target_uid)
        if target is None or not target.telegram_chat_id:
            tg_notify_log.debug(f"No Telegram chat bound for user {target_uid}")
            return DeliveryResult.skipped("no_binding")

        if not target.notifications_enabled:
            tg_notify_log.debug(f"Notifications disabled for user {target_uid}")
            return DeliveryResult.skipped("disabled")

        text = self._formatter.format_notification(title, body, metadata)
        sent = await self._bot.send_message(target.telegram_chat_id, text)
        if not sent:
            raise UnavailableError(f"Telegram send failed for user {target_uid}")

        return DeliveryResult.ok()

    async def close(self) -> None:
        """Close the bot session."""
        await self._bot.close()
