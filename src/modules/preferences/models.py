"""
Preference Models.

Pydantic models for the roommate matching preference record.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class Gender(str, Enum):
    """Gender values accepted on a preference record."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class PreferenceBase(BaseModel):
    """Base preference model with common fields."""

    age: int = Field(..., ge=16, le=120, description="Age in years")
    gender: Gender
    description: str = Field(..., min_length=1, max_length=2000, description="About me")
    lifestyles: list[str] = Field(default_factory=list, description="Lifestyle tags")
    interests: list[str] = Field(default_factory=list, description="Interest tags")
    location: str = Field(..., min_length=1, max_length=200, description="District / khan")
    min_budget: Decimal = Field(..., ge=0, description="Lowest acceptable monthly rent share")
    max_budget: Decimal = Field(..., ge=0, description="Highest acceptable monthly rent share")

    @field_validator("lifestyles", "interests")
    @classmethod
    def dedupe_tags(cls, v: list[str]) -> list[str]:
        """Strip tags, drop blanks and duplicates while keeping order."""
        seen: list[str] = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @model_validator(mode="after")
    def check_budget_range(self) -> "PreferenceBase":
        """Budget range must not be inverted."""
        if self.min_budget > self.max_budget:
            raise ValueError("min_budget must be less than or equal to max_budget")
        return self


class PreferenceUpsert(PreferenceBase):
    """Model for creating or replacing a preference record."""

    completed: bool = True


class UserPreference(PreferenceBase):
    """Preference record from database."""

    uid: str
    completed: bool = True
    updated_at: datetime


class CandidateView(UserPreference):
    """Candidate preference enriched with display fields."""

    name: str = ""
    image_url: Optional[str] = None


class PreferenceResponse(BaseModel):
    """Response model for a single preference record."""

    success: bool = True
    preferences: UserPreference


class CandidateListResponse(BaseModel):
    """Response model for a candidate sample."""

    success: bool = True
    count: int
    candidates: list[CandidateView]
