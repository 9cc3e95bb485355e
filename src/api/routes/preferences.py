"""Roommate preference and candidate routes."""

from typing import Optional

from fastapi import APIRouter
from loguru import logger

from src.api.dependencies import CurrentUid, Matching
from src.modules.preferences import (
    CandidateFilters,
    CandidateListResponse,
    PreferenceResponse,
    PreferenceUpsert,
)

prefs_log = logger.bind(module="Preferences")

router = APIRouter(prefix="/users", tags=["Preferences"])


@router.put("/{uid}/preference", response_model=PreferenceResponse)
async def upsert_preference(
    uid: str,
    data: PreferenceUpsert,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """
    Create or replace roommate preferences.

    Requires authentication as ``uid``.
    """
    preference = await matching.upsert_preference(current_uid, uid, data)
    return {"success": True, "preferences": preference}


@router.get("/{uid}/preference", response_model=PreferenceResponse)
async def get_preference(
    uid: str,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Get roommate preferences."""
    preference = await matching.get_preference(current_uid, uid)
    return {"success": True, "preferences": preference}


@router.delete("/{uid}/preference")
async def delete_preference(
    uid: str,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Delete roommate preferences. Like / pass history is kept."""
    await matching.delete_preference(current_uid, uid)
    return {"success": True, "message": "Preferences deleted"}


@router.get("/{uid}/candidates", response_model=CandidateListResponse)
async def get_candidates(
    uid: str,
    current_uid: CurrentUid,
    matching: Matching,
    location: Optional[str] = None,
    min_budget: Optional[str] = None,
    max_budget: Optional[str] = None,
    gender: Optional[str] = None,
    min_age: Optional[str] = None,
    max_age: Optional[str] = None,
) -> dict:
    """
    Get a random sample of roommate candidates.

    Filters arrive as raw strings; unparseable values are ignored.

    Args:
        location: Exact location
        min_budget: Lower budget bound (needs max_budget)
        max_budget: Upper budget bound (needs min_budget)
        gender: Gender to show
        min_age: Lowest age (needs max_age)
        max_age: Highest age (needs min_age)
    """
    filters = CandidateFilters.from_query(
        location=location,
        min_budget=min_budget,
        max_budget=max_budget,
        gender=gender,
        min_age=min_age,
        max_age=max_age,
    )
    prefs_log.debug(f"Candidate filters for {uid}: {filters.model_dump(exclude_none=True)}")

    candidates = await matching.get_candidates(current_uid, uid, filters)
    return {"success": True, "count": len(candidates), "candidates": candidates}
