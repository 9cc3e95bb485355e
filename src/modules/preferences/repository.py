"""
Preference Repository.

Data access layer for roommate matching preferences.
"""

from typing import Optional

from asyncpg import Pool

from src.modules.preferences.filters import CandidateFilters
from src.modules.preferences.models import CandidateView, PreferenceUpsert, UserPreference


def build_candidate_query(
    uid: str, filters: CandidateFilters, limit: int
) -> tuple[str, list]:
    """
    Build the candidate search query.

    Self, already liked, already passed and incomplete records are always
    excluded. Filters add further conditions.

    Args:
        uid: Requesting user
        filters: Optional filters
        limit: Sample size cap

    Returns:
        (query, params) tuple
    """
    conditions = [
        "rm.uid <> $1",
        "rm.completed = TRUE",
        "NOT EXISTS (SELECT 1 FROM likes l WHERE l.liker_uid = $1 AND l.liked_uid = rm.uid)",
        "NOT EXISTS (SELECT 1 FROM passes p WHERE p.user_uid = $1 AND p.passed_uid = rm.uid)",
    ]
    params: list = [uid]

    if filters.location is not None:
        params.append(filters.location)
        conditions.append(f"rm.location = ${len(params)}")

    if filters.budget_range is not None:
        # Intervals intersect
        low, high = filters.budget_range
        params.append(high)
        conditions.append(f"rm.min_budget <= ${len(params)}")
        params.append(low)
        conditions.append(f"rm.max_budget >= ${len(params)}")

    if filters.gender is not None:
        params.append(filters.gender.value)
        conditions.append(f"rm.gender = ${len(params)}")

    if filters.age_range is not None:
        params.extend(filters.age_range)
        conditions.append(f"rm.age BETWEEN ${len(params) - 1} AND ${len(params)}")

    params.append(limit)
    query = f"""
    SELECT
        rm.*,
        TRIM(CONCAT_WS(' ', u.first_name, u.last_name)) AS name,
        u.image_url
    FROM roommate_preferences rm
    LEFT JOIN users u ON u.uid = rm.uid
    WHERE {" AND ".join(conditions)}
    ORDER BY random()
    LIMIT ${len(params)}
    """
    return query, params


class PreferenceRepository:
    """Repository for preference database operations."""

    def __init__(self, pool: Pool):
        """
        Initialize repository with database connection pool.

        Args:
            pool: asyncpg connection pool
        """
        self._pool = pool

    async def upsert(self, uid: str, data: PreferenceUpsert) -> UserPreference:
        """
        Create or replace the preference record of a user.

        Args:
            uid: Owner user ID
            data: Validated preference data

        Returns:
            Stored preference record
        """
        query = """
        INSERT INTO roommate_preferences (
            uid, age, gender, description, lifestyles, interests,
            location, min_budget, max_budget, completed, updated_at
        ) VALUES (
            $1, $2, $3, $4, $5, $6, $7, $8, $9, $10, NOW()
        )
        ON CONFLICT (uid) DO UPDATE SET
            age = EXCLUDED.age,
            gender = EXCLUDED.gender,
            description = EXCLUDED.description,
            lifestyles = EXCLUDED.lifestyles,
            interests = EXCLUDED.interests,
            location = EXCLUDED.location,
            min_budget = EXCLUDED.min_budget,
            max_budget = EXCLUDED.max_budget,
            completed = EXCLUDED.completed,
            updated_at = NOW()
        RETURNING *
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                query,
                uid,
                data.age,
                data.gender.value,
                data.description,
                data.lifestyles,
                data.interests,
                data.location,
                data.min_budget,
                data.max_budget,
                data.completed,
            )
            return UserPreference(**dict(row))

    async def get_by_uid(self, uid: str) -> Optional[UserPreference]:
        """
        Get preference record by user ID.

        Args:
            uid: User ID

        Returns:
            UserPreference or None if not found
        """
        query = "SELECT * FROM roommate_preferences WHERE uid = $1"
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(query, uid)
            return UserPreference(**dict(row)) if row else None

    async def delete(self, uid: str) -> bool:
        """
        Delete the preference record of a user.

        Like and pass history is left in place.

        Returns:
            True if deleted, False if not found
        """
        query = "DELETE FROM roommate_preferences WHERE uid = $1 RETURNING uid"
        async with self._pool.acquire() as conn:
            result = await conn.fetchrow(query, uid)
            return result is not None

    async def find_candidates(
        self, uid: str, filters: CandidateFilters, limit: int
    ) -> list[CandidateView]:
        """
        Get a random sample of eligible candidates for a user.

        Args:
            uid: Requesting user
            filters: Optional filters
            limit: Sample size cap

        Returns:
            Candidate records, unordered
        """
        query, params = build_candidate_query(uid, filters, limit)
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(query, *params)
            return [CandidateView(**dict(row)) for row in rows]
