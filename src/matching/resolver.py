"""
Match Resolver.

Lists, verifies and dissolves mutual matches.
"""

from loguru import logger

from src.matching.errors import InvalidArgumentError
from src.modules.interests import InterestRepository, MatchView, ResetResult

resolver_log = logger.bind(module="Resolver")


class MatchResolver:
    """Read and delete side of the match relation."""

    def __init__(self, interests: InterestRepository):
        self._interests = interests

    async def list_matches(self, uid: str) -> list[MatchView]:
        """Mutual matches of a user, most recent match first."""
        matches = await self._interests.list_matches(uid)
        resolver_log.debug(f"Found {len(matches)} matches for {uid}")
        return matches

    async def check_match(self, uid_a: str, uid_b: str) -> bool:
        """
        Check whether two users are matched.

        Both directional rows are read; one mutual row alone is not a match.
        """
        if uid_a == uid_b:
            return False
        return await self._interests.is_mutual(uid_a, uid_b)

    async def unmatch(self, uid_a: str, uid_b: str) -> None:
        """
        Remove both like rows of a pair, returning it to unseen.

        Idempotent when no rows exist.

        Raises:
            InvalidArgumentError: If both users are the same
        """
        if uid_a == uid_b:
            raise InvalidArgumentError("Cannot unmatch yourself")

        deleted = await self._interests.delete_pair(uid_a, uid_b)
        resolver_log.info(f"Unmatched {uid_a} and {uid_b} ({deleted} rows deleted)")

    async def reset_all(self, uid: str) -> ResetResult:
        """Delete every like involving a user and every pass they made."""
        result = await self._interests.reset_user(uid)
        resolver_log.info(
            f"Reset {uid}: deleted {result.deleted_matches} likes, "
            f"{result.deleted_passes} passes"
        )
        return result
