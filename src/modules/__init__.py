"""Modules package - Domain modules with repository pattern."""

from src.modules.inbox import InboxEntry, InboxListResponse, InboxRepository
from src.modules.interests import InterestRepository, LikeResult, MatchView, ResetResult
from src.modules.preferences import (
    CandidateFilters,
    CandidateView,
    Gender,
    PreferenceRepository,
    PreferenceUpsert,
    UserPreference,
)
from src.modules.users import IdentityProvider, UserProfile, UserRepository

__all__ = [
    # Preferences
    "CandidateFilters",
    "CandidateView",
    "Gender",
    "PreferenceRepository",
    "PreferenceUpsert",
    "UserPreference",
    # Interests
    "InterestRepository",
    "LikeResult",
    "MatchView",
    "ResetResult",
    # Inbox
    "InboxEntry",
    "InboxListResponse",
    "InboxRepository",
    # Users
    "IdentityProvider",
    "UserProfile",
    "UserRepository",
]
