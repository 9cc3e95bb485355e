"""Preferences module."""

from src.modules.preferences.filters import CandidateFilters
from src.modules.preferences.models import (
    CandidateListResponse,
    CandidateView,
    Gender,
    PreferenceResponse,
    PreferenceUpsert,
    UserPreference,
)
from src.modules.preferences.repository import PreferenceRepository, build_candidate_query

__all__ = [
    "CandidateFilters",
    "CandidateListResponse",
    "CandidateView",
    "Gender",
    "PreferenceResponse",
    "PreferenceUpsert",
    "UserPreference",
    "PreferenceRepository",
    "build_candidate_query",
]
