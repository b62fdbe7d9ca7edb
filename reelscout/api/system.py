"""System API routes (health, logs)"""

from fastapi import APIRouter, Query, Request

from ..services.log_service import log_service

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/health")
async def health(request: Request):
    """Which upstream clients are configured"""
    return {
        "status": "ok",
        "catalog": getattr(request.app.state, "tmdb", None) is not None,
        "trending": getattr(request.app.state, "trending", None) is not None,
    }


@router.get("/logs")
async def get_logs(
    log_type: str = Query("error", pattern="^(error|info|debug)$"),
    limit: int = Query(100, ge=1, le=1000),
):
    """Tail of a log file"""
    return {"log_type": log_type, "lines": log_service.get_logs(log_type, limit)}
