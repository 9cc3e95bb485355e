"""
Interest Repository.

Data access layer for likes and passes. A like and its reverse row are
written in one transaction serialized per unordered pair.
"""

from asyncpg import Pool

from src.modules.interests.models import LikeResult, MatchView, ResetResult


def pair_lock_key(uid_a: str, uid_b: str) -> str:
    """
    Key identifying an unordered user pair.

    Examples:
        ("bob", "alice") -> "alice|bob"
        ("alice", "bob") -> "alice|bob"
    """
    return "|".join(sorted((uid_a, uid_b)))


class InterestRepository:
    """Repository for like / pass database operations."""

    def __init__(self, pool: Pool):
        """
        Initialize repository with database connection pool.

        Args:
            pool: asyncpg connection pool
        """
        self._pool = pool

    async def record_like(self, liker_uid: str, liked_uid: str) -> LikeResult:
        """
        Record a like and resolve reciprocity atomically.

        Args:
            liker_uid: User giving the like
            liked_uid: User receiving the like

        Returns:
            LikeResult with the stored mutual flag
        """
        select_query = "SELECT mutual FROM likes WHERE liker_uid = $1 AND liked_uid = $2"
        insert_query = """
        INSERT INTO likes (liker_uid, liked_uid, mutual, matched_at)
        VALUES ($1, $2, $3, CASE WHEN $3::BOOLEAN THEN NOW() END)
        ON CONFLICT (liker_uid, liked_uid) DO NOTHING
        """
        flip_query = """
        UPDATE likes
        SET mutual = TRUE, matched_at = NOW()
        WHERE liker_uid = $1 AND liked_uid = $2
        """

        async with self._pool.acquire() as conn:
            async with conn.transaction():
                # Opposite-direction likes for the same pair queue here
                await conn.execute(
                    "SELECT pg_advisory_xact_lock(hashtext($1))",
                    pair_lock_key(liker_uid, liked_uid),
                )

                existing = await conn.fetchrow(select_query, liker_uid, liked_uid)
                if existing:
                    return LikeResult(mutual=existing["mutual"], created=False)

                reverse = await conn.fetchrow(select_query, liked_uid, liker_uid)
                mutual = reverse is not None

                await conn.execute(insert_query, liker_uid, liked_uid, mutual)
                if mutual:
                    await conn.execute(flip_query, liked_uid, liker_uid)

                return LikeResult(mutual=mutual, created=True)

    async def record_pass(self, user_uid: str, passed_uid: str) -> bool:
        """
        Record a pass.

        Returns:
            True if inserted, False if it already existed
        """
        query = """
        INSERT INTO passes (user_uid, passed_uid)
        VALUES ($1, $2)
        ON CONFLICT (user_uid, passed_uid) DO NOTHING
        RETURNING user_uid
        """
        async with self._pool.acquire() as conn:
            result = await conn.fetchrow(query, user_uid, passed_uid)
            return result is not None

    async def list_matches(self, uid: str) -> list[MatchView]:
        """
        Get all mutual matches of a user, newest first.

        Args:
            uid: User ID

        Returns:
            List of MatchView records
        """
        query = """
        SELECT
            l.liked_uid AS uid,
            COALESCE(l.matched_at, l.created_at) AS matched_at,
            TRIM(CONCAT_WS(' ', u.first_name, u.last_name)) AS name,
            u.image_url,
            rm.age,
            rm.gender,
            rm.description,
            rm.location,
            rm.min_budget,
            rm.max_budget
        FROM likes l
        LEFT JOIN users u ON u.uid = l.liked_uid
        LEFT JOIN roommate_preferences rm ON rm.uid = l.liked_uid
        WHERE l.liker_uid = $1 AND l.mutual = TRUE
        ORDER BY COALESCE(l.matched_at, l.created_at) DESC
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(query, uid)
            return [MatchView(**dict(row)) for row in rows]

    async def is_mutual(self, uid_a: str, uid_b: str) -> bool:
        """
        Check that both directional rows exist and are mutual.

        Args:
            uid_a: First user
            uid_b: Second user

        Returns:
            True if matched
        """
        query = """
        SELECT COUNT(*) FROM likes
        WHERE mutual = TRUE
          AND ((liker_uid = $1 AND liked_uid = $2)
            OR (liker_uid = $2 AND liked_uid = $1))
        """
        async with self._pool.acquire() as conn:
            count = await conn.fetchval(query, uid_a, uid_b)
            return count == 2

    async def delete_pair(self, uid_a: str, uid_b: str) -> int:
        """
        Delete both directional like rows of a pair.

        Returns:
            Number of rows deleted
        """
        query = """
        WITH deleted AS (
            DELETE FROM likes
            WHERE (liker_uid = $1 AND liked_uid = $2)
               OR (liker_uid = $2 AND liked_uid = $1)
            RETURNING 1
        )
        SELECT COUNT(*) FROM deleted
        """
        async with self._pool.acquire() as conn:
            return await conn.fetchval(query, uid_a, uid_b)

    async def reset_user(self, uid: str) -> ResetResult:
        """
        Delete every like involving a user and every pass they made.

        Args:
            uid: User ID

        Returns:
            ResetResult with deleted row counts
        """
        likes_query = """
        WITH deleted AS (
            DELETE FROM likes WHERE liker_uid = $1 OR liked_uid = $1
            RETURNING 1
        )
        SELECT COUNT(*) FROM deleted
        """
        passes_query = """
        WITH deleted AS (
            DELETE FROM passes WHERE user_uid = $1
            RETURNING 1
        )
        SELECT COUNT(*) FROM deleted
        """
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                deleted_matches = await conn.fetchval(likes_query, uid)
                deleted_passes = await conn.fetchval(passes_query, uid)
                return ResetResult(
                    deleted_matches=deleted_matches,
                    deleted_passes=deleted_passes,
                )
