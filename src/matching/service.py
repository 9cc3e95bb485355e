"""
Matching Service.

Transport-agnostic boundary of the roommate matching core. Every operation
takes the acting (authenticated) user, checks ownership and arguments
before touching the store, and runs under a request-scoped timeout.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

import asyncpg
from loguru import logger

from config.settings import Settings
from src.channels.base import BaseNotifier
from src.channels.dispatcher import NotificationDispatcher
from src.connections.postgres import PostgresConnection
from src.matching.errors import (
    ForbiddenError,
    InvalidArgumentError,
    MatchingError,
    NotFoundError,
    RequestTimeoutError,
    UnavailableError,
)
from src.matching.ledger import InterestLedger
from src.matching.resolver import MatchResolver
from src.matching.selector import CandidateSelector
from src.modules.inbox import InboxEntry, InboxRepository
from src.modules.interests import InterestRepository, LikeResult, MatchView, ResetResult
from src.modules.preferences import (
    CandidateFilters,
    CandidateView,
    PreferenceRepository,
    PreferenceUpsert,
    UserPreference,
)
from src.modules.users import UserRepository

service_log = logger.bind(module="Matching")

T = TypeVar("T")

# Errors meaning the store could not be reached or the transaction failed
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class MatchingService:
    """Boundary operations of the matching core."""

    def __init__(
        self,
        preferences: PreferenceRepository,
        interests: InterestRepository,
        users: UserRepository,
        dispatcher: NotificationDispatcher | None = None,
        inbox: InboxRepository | None = None,
        candidate_limit: int = CandidateSelector.DEFAULT_LIMIT,
        request_timeout: float = 10.0,
    ):
        """
        Initialize service.

        Args:
            preferences: Preference store
            interests: Like / pass store
            users: Profile store
            dispatcher: Notification dispatcher (None disables notifications)
            inbox: Notification inbox (None disables the inbox operations)
            candidate_limit: Maximum candidates per request
            request_timeout: Seconds allowed per operation
        """
        self._preferences = preferences
        self._users = users
        self._dispatcher = dispatcher
        self._inbox = inbox
        self._request_timeout = request_timeout

        self.selector = CandidateSelector(preferences, candidate_limit)
        self.ledger = InterestLedger(interests, users, dispatcher, inbox)
        self.resolver = MatchResolver(interests)

    # ========== Guards ==========

    @staticmethod
    def _require_uid(value: Optional[str], field: str) -> str:
        """Reject missing or blank user IDs."""
        if not value or not value.strip():
            raise InvalidArgumentError(f"{field} is required")
        return value

    def _authorize(self, acting_uid: str, owner_uid: str) -> None:
        """Acting user must own the resource."""
        self._require_uid(owner_uid, "uid")
        if acting_uid != owner_uid:
            raise ForbiddenError("You do not have permission to access this resource")

    async def _run(self, operation: str, call: Awaitable[T]) -> T:
        """
        Run a store-backed call under the request timeout.

        A timeout cancels the call, which rolls back any open transaction.

        Raises:
            RequestTimeoutError: If the call exceeded the request timeout
            UnavailableError: If the store failed
        """
        try:
            return await asyncio.wait_for(call, timeout=self._request_timeout)
        except MatchingError:
            raise
        except asyncio.TimeoutError:
            service_log.warning(f"{operation}: timed out after {self._request_timeout}s")
            raise RequestTimeoutError(f"{operation} timed out") from None
        except STORE_ERRORS as e:
            service_log.error(f"{operation}: store error: {e}")
            raise UnavailableError("Storage is unavailable") from e

    # ========== Preferences ==========

    async def upsert_preference(
        self, acting_uid: str, uid: str, data: PreferenceUpsert
    ) -> UserPreference:
        """Create or replace the preference record of a user."""
        self._authorize(acting_uid, uid)
        preference = await self._run("upsert_preference", self._preferences.upsert(uid, data))
        service_log.info(f"Saved preferences for {uid}")
        return preference

    async def get_preference(self, acting_uid: str, uid: str) -> UserPreference:
        """Get the preference record of a user."""
        self._authorize(acting_uid, uid)
        preference = await self._run("get_preference", self._preferences.get_by_uid(uid))
        if preference is None:
            raise NotFoundError("No preferences found")
        return preference

    async def delete_preference(self, acting_uid: str, uid: str) -> None:
        """Delete the preference record of a user. Like / pass history is kept."""
        self._authorize(acting_uid, uid)
        deleted = await self._run("delete_preference", self._preferences.delete(uid))
        if not deleted:
            raise NotFoundError("No preferences found")
        service_log.info(f"Deleted preferences for {uid}")

    # ========== Candidates ==========

    async def get_candidates(
        self, acting_uid: str, uid: str, filters: CandidateFilters | None = None
    ) -> list[CandidateView]:
        """Random sample of candidates for a user."""
        self._authorize(acting_uid, uid)
        return await self._run("get_candidates", self.selector.find_candidates(uid, filters))

    # ========== Likes / passes ==========

    async def like(self, acting_uid: str, liker_uid: str, liked_uid: str) -> LikeResult:
        """Record a like from the acting user."""
        self._authorize(acting_uid, liker_uid)
        self._require_uid(liked_uid, "liked_uid")
        if liker_uid == liked_uid:
            raise InvalidArgumentError("Cannot like yourself")
        return await self._run("like", self.ledger.record_like(liker_uid, liked_uid))

    async def pass_user(self, acting_uid: str, user_uid: str, passed_uid: str) -> None:
        """Record a pass from the acting user."""
        self._authorize(acting_uid, user_uid)
        self._require_uid(passed_uid, "passed_uid")
        if user_uid == passed_uid:
            raise InvalidArgumentError("Cannot pass yourself")
        await self._run("pass", self.ledger.record_pass(user_uid, passed_uid))

    # ========== Matches ==========

    async def get_matches(self, acting_uid: str, uid: str) -> list[MatchView]:
        """Mutual matches of a user, newest first."""
        self._authorize(acting_uid, uid)
        return await self._run("get_matches", self.resolver.list_matches(uid))

    async def check_match(self, acting_uid: str, uid_a: str, uid_b: str) -> bool:
        """Whether two users are matched. The acting user must be one of them."""
        self._require_uid(uid_a, "uid_a")
        self._require_uid(uid_b, "uid_b")
        if acting_uid not in (uid_a, uid_b):
            raise ForbiddenError("You do not have permission to access this resource")
        return await self._run("check_match", self.resolver.check_match(uid_a, uid_b))

    async def unmatch(self, acting_uid: str, uid_a: str, uid_b: str) -> None:
        """Dissolve a pair. The acting user must be one of them."""
        self._require_uid(uid_a, "uid_a")
        self._require_uid(uid_b, "uid_b")
        if acting_uid not in (uid_a, uid_b):
            raise ForbiddenError("You do not have permission to access this resource")
        if uid_a == uid_b:
            raise InvalidArgumentError("Cannot unmatch yourself")
        await self._run("unmatch", self.resolver.unmatch(uid_a, uid_b))

    async def reset_matches(self, acting_uid: str, uid: str) -> ResetResult:
        """Delete all likes involving the user and all of their passes."""
        self._authorize(acting_uid, uid)
        return await self._run("reset_matches", self.resolver.reset_all(uid))

    # ========== Notification settings ==========

    async def set_notification_binding(self, acting_uid: str, chat_id: Optional[str]) -> None:
        """Bind (or unbind with None) the acting user's Telegram chat."""
        self._require_uid(acting_uid, "uid")
        await self._run(
            "set_notification_binding", self._users.set_telegram_chat(acting_uid, chat_id)
        )

    async def set_notifications_enabled(self, acting_uid: str, enabled: bool) -> None:
        """Switch the acting user's notifications on or off."""
        self._require_uid(acting_uid, "uid")
        updated = await self._run(
            "set_notifications_enabled",
            self._users.set_notifications_enabled(acting_uid, enabled),
        )
        if not updated:
            raise NotFoundError("User not found")

    # ========== Notification inbox ==========

    def _require_inbox(self) -> InboxRepository:
        if self._inbox is None:
            raise UnavailableError("Notification inbox is not configured")
        return self._inbox

    async def list_notifications(self, acting_uid: str, uid: str) -> list[InboxEntry]:
        """Newest stored notifications of a user."""
        self._authorize(acting_uid, uid)
        inbox = self._require_inbox()
        return await self._run("list_notifications", inbox.list_for_user(uid))

    async def _authorize_entry(self, acting_uid: str, entry_id: int) -> InboxRepository:
        """Entry must exist and belong to the acting user."""
        inbox = self._require_inbox()
        recipient = await self._run("get_notification", inbox.get_recipient(entry_id))
        if recipient is None:
            raise NotFoundError("Notification not found")
        if recipient != acting_uid:
            raise ForbiddenError("You do not have permission to access this resource")
        return inbox

    async def mark_notification_read(self, acting_uid: str, entry_id: int) -> None:
        """Mark one of the acting user's notifications as read."""
        inbox = await self._authorize_entry(acting_uid, entry_id)
        if not await self._run("mark_notification_read", inbox.mark_read(entry_id)):
            raise NotFoundError("Notification not found")

    async def delete_notification(self, acting_uid: str, entry_id: int) -> None:
        """Delete one of the acting user's notifications."""
        inbox = await self._authorize_entry(acting_uid, entry_id)
        if not await self._run("delete_notification", inbox.delete(entry_id)):
            raise NotFoundError("Notification not found")
        service_log.info(f"Deleted notification {entry_id} of {acting_uid}")

    # ========== Lifecycle ==========

    async def close(self, timeout: float = 5.0) -> None:
        """Flush pending notifications and close the notifier."""
        if self._dispatcher is not None:
            await self._dispatcher.close(timeout)


def build_matching_service(
    postgres: PostgresConnection,
    settings: Settings,
    notifier: BaseNotifier | None = None,
) -> MatchingService:
    """
    Wire repositories, dispatcher and service on a connected pool.

    Args:
        postgres: Connected PostgreSQL connection
        settings: Application settings
        notifier: Notification channel; None disables notifications

    Returns:
        MatchingService
    """
    pool = postgres.pool
    matching = settings.matching

    dispatcher = None
    if notifier is not None:
        dispatcher = NotificationDispatcher(
            notifier,
            timeout=matching.notify_timeout,
            max_retries=matching.notify_max_retries,
            retry_delay=matching.notify_retry_delay,
        )

    return MatchingService(
        preferences=PreferenceRepository(pool),
        interests=InterestRepository(pool),
        users=UserRepository(pool),
        dispatcher=dispatcher,
        inbox=InboxRepository(pool),
        candidate_limit=matching.candidate_limit,
        request_timeout=matching.request_timeout,
    )
