"""
User Repository.

Profile store access: display enrichment and notification targeting.
"""

from typing import Optional

from asyncpg import Pool
from loguru import logger

from src.modules.users.models import NotificationTarget, UserProfile

users_log = logger.bind(module="Users")


class UserRepository:
    """Repository for user profile database operations."""

    def __init__(self, pool: Pool):
        """
        Initialize repository with database connection pool.

        Args:
            pool: asyncpg connection pool
        """
        self._pool = pool

    async def get_profile(self, uid: str) -> Optional[UserProfile]:
        """
        Get display fields of a user.

        Args:
            uid: User ID

        Returns:
            UserProfile or None if not found
        """
        query = "SELECT uid, first_name, last_name, image_url FROM users WHERE uid = $1"
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(query, uid)
            return UserProfile(**dict(row)) if row else None

    async def get_notification_target(self, uid: str) -> Optional[NotificationTarget]:
        """
        Get notification channel info of a user.

        Args:
            uid: User ID

        Returns:
            NotificationTarget or None if not found
        """
        query = """
        SELECT uid, telegram_chat_id, notifications_enabled
        FROM users WHERE uid = $1
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(query, uid)
            return NotificationTarget(**dict(row)) if row else None

    async def set_telegram_chat(self, uid: str, chat_id: Optional[str]) -> None:
        """
        Bind (or unbind with None) a Telegram chat to a user.

        Creates a bare profile row when the user has none yet.

        Args:
            uid: User ID
            chat_id: Telegram chat ID or None
        """
        query = """
        INSERT INTO users (uid, telegram_chat_id)
        VALUES ($1, $2)
        ON CONFLICT (uid) DO UPDATE SET
            telegram_chat_id = EXCLUDED.telegram_chat_id,
            updated_at = NOW()
        """
        async with self._pool.acquire() as conn:
            await conn.execute(query, uid, chat_id)
        users_log.info(f"Telegram chat {'bound' if chat_id else 'unbound'} for user {uid}")

    async def set_notifications_enabled(self, uid: str, enabled: bool) -> bool:
        """
        Switch notifications on or off.

        Args:
            uid: User ID
            enabled: New value

        Returns:
            True if updated, False if user not found
        """
        query = """
        UPDATE users SET notifications_enabled = $2, updated_at = NOW()
        WHERE uid = $1
        RETURNING uid
        """
        async with self._pool.acquire() as conn:
            result = await conn.fetchrow(query, uid, enabled)
            return result is not None
