"""Typeahead suggestion API routes"""

from typing import List

from fastapi import APIRouter, Depends, Query

from ..config import Settings
from ..exceptions import ReelScoutError
from ..schemas.search import Suggestion
from ..services.log_service import log_service
from ..services.tmdb_service import TMDBService
from .dependencies import get_app_settings, get_tmdb_service

router = APIRouter(prefix="/api/suggestions", tags=["search"])


@router.get("", response_model=List[Suggestion])
async def suggestions(
    query: str = Query(""),
    settings: Settings = Depends(get_app_settings),
    tmdb: TMDBService = Depends(get_tmdb_service),
):
    """Dropdown entries for the text typed so far; empty on short input or failure"""
    term = query.strip()
    if len(term) < settings.SUGGESTION_MIN_CHARS:
        return []

    try:
        data = await tmdb.search_movies(term, 1)
    except ReelScoutError as e:
        log_service.debug(f"Suggestion lookup for '{term}' failed: {e}")
        return []

    return [
        Suggestion(
            id=movie.id,
            title=movie.title,
            year=movie.year,
            poster_url=tmdb.poster_url(movie.poster_path),
        )
        for movie in data.results[: settings.SUGGESTION_LIMIT]
    ]
