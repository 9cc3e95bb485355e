"""
Unit tests for src/modules/interests/repository.py
"""

import asyncio
from datetime import datetime, timezone

from src.modules.interests import InterestRepository, pair_lock_key
from tests.fixtures.asyncpg import FakeConnection, FakePool


def make_repo(conn: FakeConnection) -> InterestRepository:
    return InterestRepository(FakePool(conn))


# ============================================================
# pair_lock_key tests
# ============================================================


class TestPairLockKey:
    """Tests for pair_lock_key function."""

    def test_order_independent(self):
        assert pair_lock_key("bora", "alice") == pair_lock_key("alice", "bora") == "alice|bora"


# ============================================================
# record_like tests
# ============================================================


class TestRecordLike:
    """Tests for InterestRepository.record_like."""

    def test_first_like_one_sided(self):
        """No reverse row: insert a non-mutual like."""
        conn = FakeConnection(fetchrow=[None, None])
        result = asyncio.run(make_repo(conn).record_like("alice", "bora"))

        assert result.mutual is False
        assert result.created is True
        assert conn.log[0] == "BEGIN"
        assert conn.log[-1] == "COMMIT"
        assert not any(q.startswith("UPDATE likes") for q in conn.queries)

    def test_lock_taken_before_reads(self):
        """The pair lock is the first statement of the transaction."""
        conn = FakeConnection(fetchrow=[None, None])
        asyncio.run(make_repo(conn).record_like("bora", "alice"))

        query, args = conn.log[1]
        assert "pg_advisory_xact_lock" in query
        assert args == ("alice|bora",)

    def test_reverse_like_makes_mutual(self):
        """Existing reverse row: insert mutual and flip the reverse row."""
        conn = FakeConnection(fetchrow=[None, {"mutual": False}])
        result = asyncio.run(make_repo(conn).record_like("bora", "alice"))

        assert result.mutual is True
        assert result.created is True

        insert = next(entry for entry in conn.log if isinstance(entry, tuple) and entry[0].startswith("INSERT"))
        assert insert[1] == ("bora", "alice", True)

        flip = next(entry for entry in conn.log if isinstance(entry, tuple) and entry[0].startswith("UPDATE"))
        assert flip[1] == ("alice", "bora")
        assert conn.log[-1] == "COMMIT"

    def test_repeat_like_writes_nothing(self):
        """Existing row: return its flag without insert."""
        conn = FakeConnection(fetchrow=[{"mutual": True}])
        result = asyncio.run(make_repo(conn).record_like("alice", "bora"))

        assert result.mutual is True
        assert result.created is False
        assert not any(q.startswith("INSERT") for q in conn.queries)


# ============================================================
# Other operations
# ============================================================


class TestInterestQueries:
    """Tests for pass, match and reset queries."""

    def test_record_pass_duplicate(self):
        """ON CONFLICT returning no row means already passed."""
        conn = FakeConnection(fetchrow=[None])
        assert asyncio.run(make_repo(conn).record_pass("alice", "bora")) is False

    def test_record_pass_new(self):
        conn = FakeConnection(fetchrow=[{"user_uid": "alice"}])
        assert asyncio.run(make_repo(conn).record_pass("alice", "bora")) is True

    def test_is_mutual_needs_both_rows(self):
        """One mutual row is not a match."""
        conn = FakeConnection(fetchval=[1, 2])
        repo = make_repo(conn)

        assert asyncio.run(repo.is_mutual("alice", "bora")) is False
        assert asyncio.run(repo.is_mutual("alice", "bora")) is True

    def test_list_matches_maps_rows(self):
        """Rows become MatchView records."""
        matched_at = datetime(2026, 3, 1, tzinfo=timezone.utc)
        row = {
            "uid": "bora",
            "matched_at": matched_at,
            "name": "Bora Chea",
            "image_url": None,
            "age": 27,
            "gender": "male",
            "description": "Quiet",
            "location": "Phnom Penh",
            "min_budget": None,
            "max_budget": None,
        }
        conn = FakeConnection(fetch=[[row]])
        matches = asyncio.run(make_repo(conn).list_matches("alice"))

        assert [m.uid for m in matches] == ["bora"]
        assert matches[0].matched_at == matched_at
        assert "ORDER BY COALESCE(l.matched_at, l.created_at) DESC" in conn.queries[0]

    def test_reset_counts_in_one_transaction(self):
        """Both deletes run in one transaction and report counts."""
        conn = FakeConnection(fetchval=[3, 1])
        result = asyncio.run(make_repo(conn).reset_user("alice"))

        assert result.deleted_matches == 3
        assert result.deleted_passes == 1
        assert conn.log[0] == "BEGIN"
        assert conn.log[-1] == "COMMIT"
