"""
Telegram Bot Module.

Wraps the Telegram bot instance used for sending messages.
"""

from loguru import logger
from telegram import Bot
from telegram.constants import ParseMode

tg_log = logger.bind(module="TelegramBot")


class TelegramBot:
    """Telegram bot wrapper for sending messages."""

    def __init__(self, token: str = ""):
        """
        Initialize the bot.

        Args:
            token: Telegram bot token; an empty token leaves the bot unconfigured
        """
        self._bot: Bot | None = None
        if not token:
            tg_log.warning("TELEGRAM_BOT_TOKEN not set, notifications disabled")
            return

        self._bot = Bot(token=token)
        tg_log.info("Telegram bot initialized")

    @property
    def bot(self) -> Bot | None:
        """Get the underlying Bot instance."""
        return self._bot

    @property
    def is_configured(self) -> bool:
        """Check if bot is configured."""
        return self._bot is not None

    async def send_message(
        self,
        chat_id: int | str,
        text: str,
        parse_mode: str = ParseMode.HTML,
    ) -> bool:
        """
        Send a text message.

        Args:
            chat_id: Target chat ID
            text: Message text
            parse_mode: Parse mode (Markdown, HTML)

        Returns:
            True if sent successfully
        """
        if not self._bot:
            tg_log.warning("Bot not configured, cannot send message")
            return False

        try:
            await self._bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=parse_mode,
            )
            return True
        except Exception as e:
            tg_log.error(f"Failed to send message to {chat_id}: {e}")
            return False

    async def close(self) -> None:
        """Shut down the underlying HTTP session."""
        if self._bot:
            await self._bot.shutdown()
            tg_log.info("Telegram bot closed")
