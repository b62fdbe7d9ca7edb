"""Shared route dependencies"""

from typing import Optional

from fastapi import HTTPException, Request

from ..config import Settings
from ..services.tmdb_service import TMDBService
from ..services.trending_service import TrendingService


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with"""
    return request.app.state.settings


def get_tmdb_service(request: Request) -> TMDBService:
    """Get TMDB service instance"""
    tmdb = getattr(request.app.state, "tmdb", None)
    if tmdb is None:
        raise HTTPException(status_code=400, detail="TMDB API key not configured")
    return tmdb


def get_trending_service(request: Request) -> Optional[TrendingService]:
    """Trending store client, or None when the store is not configured"""
    return getattr(request.app.state, "trending", None)
