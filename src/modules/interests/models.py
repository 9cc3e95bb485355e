"""
Interest Models.

Pydantic models for likes, passes and derived matches.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class LikeResult(BaseModel):
    """Outcome of recording a like."""

    mutual: bool
    created: bool = Field(description="False when the like already existed")


class ResetResult(BaseModel):
    """Counts of rows removed by a reset."""

    deleted_matches: int = 0
    deleted_passes: int = 0


class MatchView(BaseModel):
    """A mutual match enriched with the other user's display fields."""

    uid: str
    name: str = ""
    image_url: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    min_budget: Optional[Decimal] = None
    max_budget: Optional[Decimal] = None
    matched_at: datetime


# ========== Requests ==========


class LikeRequest(BaseModel):
    """Request model for a like."""

    liker_uid: str = Field(..., min_length=1)
    liked_uid: str = Field(..., min_length=1)


class PassRequest(BaseModel):
    """Request model for a pass."""

    user_uid: str = Field(..., min_length=1)
    passed_uid: str = Field(..., min_length=1)


class UnmatchRequest(BaseModel):
    """Request model for an unmatch."""

    user_uid: str = Field(..., min_length=1)
    matched_uid: str = Field(..., min_length=1)


class ResetRequest(BaseModel):
    """Request model for resetting all likes and passes."""

    user_uid: str = Field(..., min_length=1)


# ========== Responses ==========


class LikeResponse(BaseModel):
    """Response model for a like."""

    success: bool = True
    is_match: bool
    message: str


class MatchListResponse(BaseModel):
    """Response model for the match list."""

    success: bool = True
    count: int
    matches: list[MatchView]


class ResetResponse(BaseModel):
    """Response model for a reset."""

    success: bool = True
    deleted_matches: int
    deleted_passes: int
