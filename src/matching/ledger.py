"""
Interest Ledger.

Records likes and passes. Reciprocity is resolved inside the like write;
the liked user is notified after commit on a background task.
"""

from functools import partial
from typing import Any

from loguru import logger

from src.channels.dispatcher import NotificationDispatcher
from src.matching.errors import InvalidArgumentError
from src.modules.inbox import InboxRepository
from src.modules.interests import InterestRepository, LikeResult
from src.modules.users import UserRepository

ledger_log = logger.bind(module="Ledger")

FALLBACK_NAME = "Someone"


def build_like_message(liker_uid: str, liker_name: str, mutual: bool) -> tuple[str, str, dict[str, Any]]:
    """
    Build the notification sent to the liked user.

    Args:
        liker_uid: User who liked
        liker_name: Display name of the liker
        mutual: True if the like completed a match

    Returns:
        (title, body, metadata) tuple
    """
    name = liker_name or FALLBACK_NAME
    if mutual:
        title = "It's a Match!"
        body = f"You and {name} matched! Start chatting now."
    else:
        title = "Someone likes you!"
        body = f"{name} likes your profile. Like them back to match!"

    metadata = {
        "type": "match" if mutual else "like",
        "from_uid": liker_uid,
        "from_name": name,
    }
    return title, body, metadata


class InterestLedger:
    """Idempotent like / pass recording."""

    def __init__(
        self,
        interests: InterestRepository,
        users: UserRepository,
        dispatcher: NotificationDispatcher | None = None,
        inbox: InboxRepository | None = None,
    ):
        """
        Initialize ledger.

        Args:
            interests: Like / pass store
            users: Profile store, for the liker's display name
            dispatcher: Notification dispatcher (None disables notifications)
            inbox: Notification inbox (None skips storing notifications)
        """
        self._interests = interests
        self._users = users
        self._dispatcher = dispatcher
        self._inbox = inbox

    async def record_like(self, liker_uid: str, liked_uid: str) -> LikeResult:
        """
        Record a like.

        A repeated like returns the stored mutual flag and writes nothing.
        Returns as soon as the like is committed; the notification is
        composed and sent in the background.

        Args:
            liker_uid: User giving the like
            liked_uid: User receiving the like

        Returns:
            LikeResult

        Raises:
            InvalidArgumentError: If a user likes themselves
        """
        if liker_uid == liked_uid:
            raise InvalidArgumentError("Cannot like yourself")

        result = await self._interests.record_like(liker_uid, liked_uid)

        if not result.created:
            ledger_log.debug(f"{liker_uid} already liked {liked_uid}")
            return result

        if result.mutual:
            ledger_log.info(f"Mutual match created: {liker_uid} <-> {liked_uid}")
        else:
            ledger_log.info(f"Like recorded: {liker_uid} -> {liked_uid}")

        self._notify_like(liker_uid, liked_uid, result.mutual)
        return result

    async def record_pass(self, user_uid: str, passed_uid: str) -> None:
        """
        Record a pass. Repeats are no-ops.

        Raises:
            InvalidArgumentError: If a user passes themselves
        """
        if user_uid == passed_uid:
            raise InvalidArgumentError("Cannot pass yourself")

        created = await self._interests.record_pass(user_uid, passed_uid)
        if created:
            ledger_log.info(f"Pass recorded: {user_uid} -> {passed_uid}")
        else:
            ledger_log.debug(f"{user_uid} already passed {passed_uid}")

    def _notify_like(self, liker_uid: str, liked_uid: str, mutual: bool) -> None:
        """Schedule the like / match notification. Never raises or waits."""
        if self._dispatcher is None:
            return

        try:
            self._dispatcher.dispatch(
                liked_uid, partial(self._compose_like, liker_uid, liked_uid, mutual)
            )
        except Exception as e:
            ledger_log.error(f"Failed to dispatch notification to {liked_uid}: {e}")

    async def _compose_like(
        self, liker_uid: str, liked_uid: str, mutual: bool
    ) -> tuple[str, str, dict[str, Any]]:
        """Look up the liker's name, build the message and store it in the inbox."""
        liker_name = ""
        try:
            profile = await self._users.get_profile(liker_uid)
            if profile:
                liker_name = profile.display_name
        except Exception as e:
            ledger_log.warning(f"Profile lookup for {liker_uid} failed: {e}")

        title, body, metadata = build_like_message(liker_uid, liker_name, mutual)

        # Stored even when the push is skipped or fails
        if self._inbox is not None:
            try:
                await self._inbox.create(liked_uid, liker_uid, title, body, metadata)
            except Exception as e:
                ledger_log.error(f"Failed to store notification for {liked_uid}: {e}")

        return title, body, metadata
