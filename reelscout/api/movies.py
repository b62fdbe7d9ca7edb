"""Movie list and detail API routes"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..exceptions import NotFound, ReelScoutError
from ..schemas.movie import MovieDetail, Video
from ..schemas.search import MovieListResponse
from ..services.content_filter import filter_movies
from ..services.detail_service import DetailService
from ..services.log_service import log_service
from ..services.pagination_controller import ERROR_MESSAGE
from ..services.tmdb_service import TMDBService
from ..services.trending_service import TrendingService
from .dependencies import get_tmdb_service, get_trending_service

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.get("", response_model=MovieListResponse)
async def list_movies(
    query: str = Query(""),
    page: int = Query(1, ge=1),
    tmdb: TMDBService = Depends(get_tmdb_service),
    trending: Optional[TrendingService] = Depends(get_trending_service),
):
    """Search results for query, or popular movies when query is empty"""
    try:
        data = await tmdb.fetch_movies(query, page)
    except ReelScoutError as e:
        log_service.error(f"Error fetching movies for '{query}' page {page}: {e}")
        raise HTTPException(status_code=502, detail=ERROR_MESSAGE)

    if trending is not None:
        await trending.record_search(query, page, data.results)

    return MovieListResponse(
        query=query,
        results=filter_movies(data.results),
        page=page,
        total_pages=data.total_pages,
        has_more=data.has_more,
    )


@router.get("/{movie_id}", response_model=MovieDetail)
async def movie_detail(movie_id: int, tmdb: TMDBService = Depends(get_tmdb_service)):
    """Detail page for one movie"""
    detail = await DetailService(tmdb).load(movie_id)
    if not detail.found:
        raise HTTPException(status_code=404, detail="Movie not found.")
    return detail


@router.get("/{movie_id}/videos", response_model=List[Video])
async def movie_videos(movie_id: int, tmdb: TMDBService = Depends(get_tmdb_service)):
    """Trailers and clips for one movie"""
    try:
        return await tmdb.get_movie_videos(movie_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Movie not found.")
    except ReelScoutError as e:
        log_service.error(f"Error fetching videos for movie {movie_id}: {e}")
        raise HTTPException(status_code=502, detail=ERROR_MESSAGE)
