"""Like, pass and match routes."""

from fastapi import APIRouter

from src.api.dependencies import CurrentUid, Matching
from src.modules.interests import (
    LikeRequest,
    LikeResponse,
    MatchListResponse,
    PassRequest,
    ResetRequest,
    ResetResponse,
    UnmatchRequest,
)

router = APIRouter(tags=["Matches"])


@router.post("/matches/like", response_model=LikeResponse)
async def like(
    data: LikeRequest,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """
    Record a like.

    Liking the same user again returns the stored result.
    """
    result = await matching.like(current_uid, data.liker_uid, data.liked_uid)

    if not result.created:
        message = "Already liked"
    elif result.mutual:
        message = "Mutual match created!"
    else:
        message = "Like recorded"

    return {"success": True, "is_match": result.mutual, "message": message}


@router.post("/matches/pass")
async def pass_user(
    data: PassRequest,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Record a pass."""
    await matching.pass_user(current_uid, data.user_uid, data.passed_uid)
    return {"success": True, "message": "Pass recorded"}


@router.get("/matches/check")
async def check_match(
    uid_a: str,
    uid_b: str,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Check whether two users are matched."""
    is_match = await matching.check_match(current_uid, uid_a, uid_b)
    return {"success": True, "is_match": is_match}


@router.post("/matches/unmatch")
async def unmatch(
    data: UnmatchRequest,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Unmatch with a user. Removes the likes in both directions."""
    await matching.unmatch(current_uid, data.user_uid, data.matched_uid)
    return {"success": True, "message": "Unmatched successfully"}


@router.post("/matches/reset", response_model=ResetResponse)
async def reset_matches(
    data: ResetRequest,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Reset all likes and passes of the current user."""
    result = await matching.reset_matches(current_uid, data.user_uid)
    return {
        "success": True,
        "deleted_matches": result.deleted_matches,
        "deleted_passes": result.deleted_passes,
    }


@router.get("/users/{uid}/matches", response_model=MatchListResponse)
async def list_matches(
    uid: str,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """List mutual matches, newest first."""
    matches = await matching.get_matches(current_uid, uid)
    return {"success": True, "count": len(matches), "matches": matches}
