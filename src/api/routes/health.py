"""Health check routes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health(request: Request):
    """Health check endpoint. Reports 503 when the database does not answer."""
    try:
        database = await request.app.state.postgres.ping()
    except Exception as e:
        logger.warning(f"Health check database ping failed: {e}")
        database = False

    if not database:
        return JSONResponse(status_code=503, content={"status": False, "database": False})
    return {"status": True, "database": True}
