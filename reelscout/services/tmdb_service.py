"""TMDB API service"""

from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import ConfigurationError, LogicalFailure, NotFound, TransportError
from ..schemas.movie import Movie, MoviePage, Video
from .log_service import log_service


def is_logical_failure(data) -> bool:
    """True when an otherwise-2xx body reports failure"""
    if not isinstance(data, dict):
        return False
    return data.get("success") is False or data.get("Response") == "False"


class TMDBService:
    """The Movie Database API integration"""

    def __init__(self, settings: Settings, client: httpx.AsyncClient = None):
        if not settings.TMDB_API_KEY:
            raise ConfigurationError("TMDB_API_KEY is not configured")

        self.base_url = settings.TMDB_BASE_URL.rstrip("/")
        self.image_base_url = settings.TMDB_IMAGE_BASE_URL.rstrip("/")
        self.headers = {
            "accept": "application/json",
            "Authorization": f"Bearer {settings.TMDB_API_KEY}",
        }
        self.client = client or httpx.AsyncClient(timeout=settings.API_TIMEOUT)

    async def _request(self, endpoint: str, params: Dict = None) -> Dict:
        """Make request to TMDB API"""
        url = f"{self.base_url}/{endpoint}"

        try:
            response = await self.client.get(url, params=params, headers=self.headers)
        except httpx.HTTPError as e:
            log_service.error(f"TMDB API error: {e}")
            raise TransportError(f"Request to {endpoint} failed: {e}") from e

        if response.status_code == 404:
            raise NotFound(f"{endpoint} not found")
        if response.is_error:
            log_service.error(f"TMDB API error: {endpoint} returned {response.status_code}")
            raise TransportError(
                f"{endpoint} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"{endpoint} returned invalid JSON") from e

        if is_logical_failure(data):
            message = data.get("status_message") or data.get("Error") or "Request failed"
            log_service.error(f"TMDB API failure on {endpoint}: {message}")
            raise LogicalFailure(message, payload=data)

        log_service.debug(f"TMDB {endpoint} {params or {}} -> {response.status_code}")
        return data

    def _parse(self, endpoint: str, build):
        """Run build(); a payload that does not fit the schema is a logical failure"""
        try:
            return build()
        except (ValidationError, AttributeError, TypeError) as e:
            log_service.error(f"TMDB API returned an unexpected payload on {endpoint}: {e}")
            raise LogicalFailure(f"Unexpected payload from {endpoint}") from e

    def _parse_page(self, endpoint: str, data: Dict, page: int) -> MoviePage:
        return self._parse(
            endpoint,
            lambda: MoviePage(
                results=[Movie.model_validate(item) for item in data.get("results") or []],
                page=data.get("page") or page,
                total_pages=data.get("total_pages") or 0,
                total_results=data.get("total_results") or 0,
            ),
        )

    async def search_movies(self, query: str, page: int = 1) -> MoviePage:
        """Search for movies"""
        data = await self._request("search/movie", {"query": query, "page": page})
        return self._parse_page("search/movie", data, page)

    async def discover_movies(self, page: int = 1) -> MoviePage:
        """Most popular movies first"""
        data = await self._request(
            "discover/movie", {"sort_by": "popularity.desc", "page": page}
        )
        return self._parse_page("discover/movie", data, page)

    async def fetch_movies(self, query: str, page: int = 1) -> MoviePage:
        """Search when there is a query, otherwise discover by popularity"""
        query = (query or "").strip()
        if not query:
            return await self.discover_movies(page)
        return await self.search_movies(query, page)

    async def get_movie_details(self, movie_id: int) -> Movie:
        """Get movie details"""
        endpoint = f"movie/{movie_id}"
        data = await self._request(endpoint)
        return self._parse(endpoint, lambda: Movie.model_validate(data))

    async def get_movie_videos(self, movie_id: int) -> List[Video]:
        """Get trailers, teasers and clips for a movie"""
        endpoint = f"movie/{movie_id}/videos"
        data = await self._request(endpoint)
        return self._parse(
            endpoint,
            lambda: [Video.model_validate(item) for item in data.get("results") or []],
        )

    def poster_url(self, poster_path: Optional[str]) -> Optional[str]:
        if not poster_path:
            return None
        return f"{self.image_base_url}/{poster_path.lstrip('/')}"

    @staticmethod
    def pick_trailer(videos: List[Video]) -> Optional[Video]:
        """Prefer a YouTube trailer, then any YouTube video"""
        youtube = [v for v in videos if v.site == "YouTube"]
        for video in youtube:
            if video.type == "Trailer":
                return video
        return youtube[0] if youtube else None

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
