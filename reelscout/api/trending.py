"""Trending searches API routes"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..exceptions import ReelScoutError
from ..schemas.trending import TrendingRecord
from ..services.log_service import log_service
from ..services.trending_service import TrendingService
from .dependencies import get_trending_service

router = APIRouter(prefix="/api/trending", tags=["trending"])


@router.get("", response_model=List[TrendingRecord])
async def trending_searches(
    limit: Optional[int] = Query(None, ge=1, le=100),
    trending: Optional[TrendingService] = Depends(get_trending_service),
):
    """Most searched terms, highest count first"""
    if trending is None:
        return []

    try:
        return await trending.get_trending_movies(limit)
    except ReelScoutError as e:
        log_service.error(f"Error fetching trending searches: {e}")
        return []
