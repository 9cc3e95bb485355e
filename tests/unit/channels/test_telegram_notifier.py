"""
Unit tests for src/channels/telegram/notifier.py
"""

import asyncio

import pytest

from src.channels.telegram.bot import TelegramBot
from src.channels.telegram.notifier import TelegramNotifier
from src.matching.errors import UnavailableError


class FakeBot:
    """Stand-in for TelegramBot that records sent messages."""

    def __init__(self, configured: bool = True, succeed: bool = True):
        self.is_configured = configured
        self.succeed = succeed
        self.sent: list[tuple] = []
        self.closed = False

    async def send_message(self, chat_id, text, parse_mode="HTML") -> bool:
        self.sent.append((chat_id, text))
        return self.succeed

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def bot():
    return FakeBot()


@pytest.fixture
def telegram_notifier(bot, users):
    return TelegramNotifier(bot, users)


# ============================================================
# notify tests
# ============================================================


class TestNotify:
    """Tests for TelegramNotifier.notify."""

    def test_sends_to_bound_chat(self, telegram_notifier, bot):
        """Bound user receives the formatted message."""
        result = asyncio.run(
            telegram_notifier.notify("bora", "It's a Match!", "You and Alice Sok matched!", {"type": "match"})
        )

        assert result.delivered is True
        chat_id, text = bot.sent[0]
        assert chat_id == "1002"
        assert text.startswith("🎉 <b>It's a Match!</b>")

    def test_unbound_user_skipped(self, telegram_notifier, bot):
        """User without a chat is skipped without sending."""
        result = asyncio.run(telegram_notifier.notify("chan", "Title", "Body"))

        assert result.reason == "no_binding"
        assert bot.sent == []

    def test_unknown_user_skipped(self, telegram_notifier):
        """Unknown user is skipped."""
        result = asyncio.run(telegram_notifier.notify("ghost", "Title", "Body"))
        assert result.reason == "no_binding"

    def test_disabled_user_skipped(self, telegram_notifier, db, bot):
        """User who switched notifications off is skipped."""
        db.users["bora"]["notifications_enabled"] = False
        result = asyncio.run(telegram_notifier.notify("bora", "Title", "Body"))

        assert result.reason == "disabled"
        assert bot.sent == []

    def test_unconfigured_bot_skipped(self, users):
        """No token means nothing is sent."""
        notifier = TelegramNotifier(FakeBot(configured=False), users)
        result = asyncio.run(notifier.notify("bora", "Title", "Body"))
        assert result.reason == "not_configured"

    def test_failed_send_raises(self, users):
        """A failed send is transient and raises for retry."""
        notifier = TelegramNotifier(FakeBot(succeed=False), users)
        with pytest.raises(UnavailableError):
            asyncio.run(notifier.notify("bora", "Title", "Body"))

    def test_close_closes_bot(self, telegram_notifier, bot):
        """close shuts the bot down."""
        asyncio.run(telegram_notifier.close())
        assert bot.closed is True


class TestTelegramBot:
    """Tests for TelegramBot without a token."""

    def test_empty_token_is_unconfigured(self):
        """Empty token leaves the bot unconfigured."""
        bot = TelegramBot("")
        assert bot.is_configured is False
        assert bot.bot is None

    def test_unconfigured_send_returns_false(self):
        """Sending without a bot returns False."""
        assert asyncio.run(TelegramBot("").send_message("1", "hi")) is False
