"""
Unit tests for src/matching/selector.py
"""

import asyncio

import pytest
from loguru import logger

from src.matching.errors import NotFoundError
from src.matching.selector import CandidateSelector
from src.modules.preferences import CandidateFilters
from tests.fixtures.preferences import make_preference


@pytest.fixture
def log_lines():
    """Collect loguru messages for the duration of a test."""
    lines: list[str] = []
    handler_id = logger.add(lambda message: lines.append(message.record["message"]), level="INFO")
    yield lines
    logger.remove(handler_id)


@pytest.fixture
def seeded(preferences):
    async def seed():
        await preferences.upsert("alice", make_preference())
        await preferences.upsert("bora", make_preference(location="Phnom Penh"))

    asyncio.run(seed())
    return preferences


class TestCandidateSelector:
    """Tests for CandidateSelector.find_candidates."""

    def test_no_filters_logged_as_none(self, seeded, log_lines):
        selector = CandidateSelector(seeded, limit=10)
        candidates = asyncio.run(selector.find_candidates("alice"))

        assert [c.uid for c in candidates] == ["bora"]
        assert "Found 1 candidates for alice (filters: none)" in log_lines

    def test_filters_logged_without_unset_fields(self, seeded, log_lines):
        selector = CandidateSelector(seeded, limit=10)
        filters = CandidateFilters(location="Phnom Penh")
        asyncio.run(selector.find_candidates("alice", filters))

        assert "Found 1 candidates for alice (filters: {'location': 'Phnom Penh'})" in log_lines

    def test_requester_without_record(self, preferences):
        with pytest.raises(NotFoundError):
            asyncio.run(CandidateSelector(preferences).find_candidates("ghost"))
