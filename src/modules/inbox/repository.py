"""
Inbox Repository.

Data access layer for stored notifications. Entries are written whether or
not the push delivery succeeds.
"""

import json
from typing import Any, Optional

from asyncpg import Pool
from loguru import logger

from src.modules.inbox.models import InboxEntry

inbox_log = logger.bind(module="Inbox")


class InboxRepository:
    """Repository for notification inbox operations."""

    # Entries returned per listing
    LIST_LIMIT = 50

    def __init__(self, pool: Pool):
        """
        Initialize repository with database connection pool.

        Args:
            pool: asyncpg connection pool
        """
        self._pool = pool

    async def create(
        self,
        recipient_uid: str,
        sender_uid: Optional[str],
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> int:
        """
        Store a notification.

        Args:
            recipient_uid: User the notification is for
            sender_uid: User who caused it
            title: Headline
            message: Body text
            data: Metadata; ``type`` is copied to its own column

        Returns:
            New entry ID
        """
        data = data or {}
        query = """
        INSERT INTO notifications (recipient_uid, sender_uid, title, message, type, data)
        VALUES ($1, $2, $3, $4, $5, $6::jsonb)
        RETURNING id
        """
        async with self._pool.acquire() as conn:
            entry_id = await conn.fetchval(
                query,
                recipient_uid,
                sender_uid,
                title,
                message,
                data.get("type", "general"),
                json.dumps(data),
            )
            inbox_log.debug(f"Stored notification {entry_id} for {recipient_uid}")
            return entry_id

    async def list_for_user(self, uid: str, limit: int = LIST_LIMIT) -> list[InboxEntry]:
        """
        Get the newest notifications of a user with sender display fields.

        Args:
            uid: Recipient user ID
            limit: Maximum entries

        Returns:
            Entries, newest first
        """
        query = """
        SELECT
            n.*,
            TRIM(CONCAT_WS(' ', u.first_name, u.last_name)) AS sender_name,
            u.image_url AS sender_image_url
        FROM notifications n
        LEFT JOIN users u ON u.uid = n.sender_uid
        WHERE n.recipient_uid = $1
        ORDER BY n.created_at DESC, n.id DESC
        LIMIT $2
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(query, uid, limit)
            return [InboxEntry(**dict(row)) for row in rows]

    async def get_recipient(self, entry_id: int) -> Optional[str]:
        """
        Get the recipient of an entry.

        Returns:
            Recipient user ID or None if not found
        """
        query = "SELECT recipient_uid FROM notifications WHERE id = $1"
        async with self._pool.acquire() as conn:
            return await conn.fetchval(query, entry_id)

    async def mark_read(self, entry_id: int) -> bool:
        """
        Mark an entry as read.

        Returns:
            True if updated, False if not found
        """
        query = "UPDATE notifications SET is_read = TRUE WHERE id = $1 RETURNING id"
        async with self._pool.acquire() as conn:
            result = await conn.fetchrow(query, entry_id)
            return result is not None

    async def delete(self, entry_id: int) -> bool:
        """
        Delete an entry.

        Returns:
            True if deleted, False if not found
        """
        query = "DELETE FROM notifications WHERE id = $1 RETURNING id"
        async with self._pool.acquire() as conn:
            result = await conn.fetchrow(query, entry_id)
            return result is not None
