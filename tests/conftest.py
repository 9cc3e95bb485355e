"""
Shared pytest fixtures for all tests.
"""

import pytest

from src.channels.dispatcher import NotificationDispatcher
from src.matching.service import MatchingService
from tests.fixtures.store import (
    FakeDatabase,
    FakeInboxRepository,
    FakeInterestRepository,
    FakePreferenceRepository,
    FakeUserRepository,
    RecordingNotifier,
)


# ============================================================
# Store Fixtures
# ============================================================


@pytest.fixture
def db() -> FakeDatabase:
    """Empty in-memory database with a few profiles."""
    database = FakeDatabase()
    database.add_user("alice", "Alice", "Sok", telegram_chat_id="1001")
    database.add_user("bora", "Bora", "Chea", telegram_chat_id="1002")
    database.add_user("chan", "Chan", "Dara")
    return database


@pytest.fixture
def preferences(db) -> FakePreferenceRepository:
    return FakePreferenceRepository(db)


@pytest.fixture
def interests(db) -> FakeInterestRepository:
    return FakeInterestRepository(db)


@pytest.fixture
def users(db) -> FakeUserRepository:
    return FakeUserRepository(db)


@pytest.fixture
def inbox(db) -> FakeInboxRepository:
    return FakeInboxRepository(db)


# ============================================================
# Notification Fixtures
# ============================================================


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Notifier that records every call."""
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier) -> NotificationDispatcher:
    """Dispatcher without backoff delay."""
    return NotificationDispatcher(notifier, timeout=1.0, max_retries=2, retry_delay=0)


# ============================================================
# Service Fixtures
# ============================================================


@pytest.fixture
def service(preferences, interests, users, dispatcher, inbox) -> MatchingService:
    """Matching service over the in-memory store."""
    return MatchingService(
        preferences=preferences,
        interests=interests,
        users=users,
        dispatcher=dispatcher,
        inbox=inbox,
        candidate_limit=50,
        request_timeout=1.0,
    )
