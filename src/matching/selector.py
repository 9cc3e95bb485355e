"""
Candidate Selector.

Returns a bounded random sample of eligible roommate candidates.
"""

from loguru import logger

from src.matching.errors import NotFoundError
from src.modules.preferences import CandidateFilters, CandidateView, PreferenceRepository

selector_log = logger.bind(module="Selector")


class CandidateSelector:
    """Selects candidates for a requester from the preference store."""

    DEFAULT_LIMIT = 50

    def __init__(self, preferences: PreferenceRepository, limit: int = DEFAULT_LIMIT):
        """
        Initialize selector.

        Args:
            preferences: Preference store
            limit: Maximum candidates returned per call
        """
        self._preferences = preferences
        self._limit = limit

    async def find_candidates(
        self, uid: str, filters: CandidateFilters | None = None
    ) -> list[CandidateView]:
        """
        Find candidates for a user.

        Self, liked, passed and incomplete records never appear. The order
        is random and repeated calls may return different subsets.

        Args:
            uid: Requesting user
            filters: Optional filters

        Returns:
            Up to ``limit`` candidates

        Raises:
            NotFoundError: If the requester has no completed preferences
        """
        filters = filters or CandidateFilters()

        requester = await self._preferences.get_by_uid(uid)
        if requester is None or not requester.completed:
            raise NotFoundError("User preferences not found")

        candidates = await self._preferences.find_candidates(uid, filters, self._limit)
        described = "none" if filters.is_empty else filters.model_dump(exclude_none=True)
        selector_log.info(f"Found {len(candidates)} candidates for {uid} (filters: {described})")
        return candidates
