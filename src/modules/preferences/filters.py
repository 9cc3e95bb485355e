"""
Candidate Filters.

Explicit filter configuration for candidate searches, plus the permissive
parser used for raw query-string input. A value that cannot be parsed is
treated as if the filter was not sent.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from src.modules.preferences.models import Gender

# Values some clients send for an unset field
PLACEHOLDER_VALUES = {"", "undefined", "null", "none", "not set", "select khan"}


def clean_text(value: Any) -> Optional[str]:
    """
    Normalize a raw filter value.

    Returns:
        Stripped string, or None for missing / placeholder values

    Examples:
        " Phnom Penh " -> "Phnom Penh"
        "undefined"    -> None
        None           -> None
    """
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in PLACEHOLDER_VALUES:
        return None
    return text


def parse_decimal(value: Any) -> Optional[Decimal]:
    """Parse a non-negative finite decimal, None when malformed."""
    text = clean_text(value)
    if text is None:
        return None
    try:
        number = Decimal(text.replace(",", ""))
    except InvalidOperation:
        return None
    if not number.is_finite() or number < 0:
        return None
    return number


def parse_int(value: Any) -> Optional[int]:
    """Parse a non-negative integer, None when malformed."""
    text = clean_text(value)
    if text is None:
        return None
    try:
        number = int(text)
    except ValueError:
        return None
    return number if number >= 0 else None


def parse_gender(value: Any) -> Optional[Gender]:
    """Parse a gender value case-insensitively, None when unknown."""
    text = clean_text(value)
    if text is None:
        return None
    try:
        return Gender(text.lower())
    except ValueError:
        return None


class CandidateFilters(BaseModel):
    """Optional, independently applicable candidate filters."""

    location: Optional[str] = None
    budget_range: Optional[tuple[Decimal, Decimal]] = None
    gender: Optional[Gender] = None
    age_range: Optional[tuple[int, int]] = None

    @field_validator("budget_range", "age_range")
    @classmethod
    def validate_range(cls, v):
        """Range bounds must be ordered."""
        if v is not None and v[0] > v[1]:
            raise ValueError("range lower bound must not exceed upper bound")
        return v

    @classmethod
    def from_query(
        cls,
        location: Any = None,
        min_budget: Any = None,
        max_budget: Any = None,
        gender: Any = None,
        min_age: Any = None,
        max_age: Any = None,
    ) -> "CandidateFilters":
        """
        Build filters from raw query values.

        Ranges apply only when both ends parse and are ordered.

        Args:
            location: Exact location
            min_budget: Lower budget bound
            max_budget: Upper budget bound
            gender: Gender to show
            min_age: Lowest age (inclusive)
            max_age: Highest age (inclusive)

        Returns:
            CandidateFilters with malformed parts dropped
        """
        budget_low = parse_decimal(min_budget)
        budget_high = parse_decimal(max_budget)
        budget_range = None
        if budget_low is not None and budget_high is not None and budget_low <= budget_high:
            budget_range = (budget_low, budget_high)

        age_low = parse_int(min_age)
        age_high = parse_int(max_age)
        age_range = None
        if age_low is not None and age_high is not None and age_low <= age_high:
            age_range = (age_low, age_high)

        return cls(
            location=clean_text(location),
            budget_range=budget_range,
            gender=parse_gender(gender),
            age_range=age_range,
        )

    @property
    def is_empty(self) -> bool:
        """True when no filter is set."""
        return (
            self.location is None
            and self.budget_range is None
            and self.gender is None
            and self.age_range is None
        )
