"""Interests module - likes, passes and derived matches."""

from src.modules.interests.models import (
    LikeRequest,
    LikeResponse,
    LikeResult,
    MatchListResponse,
    MatchView,
    PassRequest,
    ResetRequest,
    ResetResponse,
    ResetResult,
    UnmatchRequest,
)
from src.modules.interests.repository import InterestRepository, pair_lock_key

__all__ = [
    "LikeRequest",
    "LikeResponse",
    "LikeResult",
    "MatchListResponse",
    "MatchView",
    "PassRequest",
    "ResetRequest",
    "ResetResponse",
    "ResetResult",
    "UnmatchRequest",
    "InterestRepository",
    "pair_lock_key",
]
