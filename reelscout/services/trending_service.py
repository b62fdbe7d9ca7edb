"""Trending search store (Appwrite document collection)"""

import json
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import ConfigurationError, LogicalFailure, ReelScoutError, TransportError
from ..schemas.movie import Movie
from ..schemas.trending import TrendingRecord
from .log_service import log_service


def _query(method: str, attribute: str = None, values: list = None) -> str:
    """Encode one Appwrite query"""
    query = {"method": method}
    if attribute is not None:
        query["attribute"] = attribute
    if values is not None:
        query["values"] = values
    return json.dumps(query)


class TrendingService:
    """Counts how often each search term is issued.

    The increment is read-then-write with no optimistic check, so two
    sessions bumping the same term at once can lose one of the updates.
    The counts only drive an approximate popularity ranking.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient = None):
        missing = [
            name
            for name in (
                "APPWRITE_PROJECT_ID",
                "APPWRITE_DATABASE_ID",
                "APPWRITE_COLLECTION_ID",
            )
            if not getattr(settings, name)
        ]
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} not configured")

        self.documents_url = (
            f"{settings.APPWRITE_ENDPOINT.rstrip('/')}"
            f"/databases/{settings.APPWRITE_DATABASE_ID}"
            f"/collections/{settings.APPWRITE_COLLECTION_ID}/documents"
        )
        self.image_base_url = settings.TMDB_IMAGE_BASE_URL.rstrip("/")
        self.headers = {
            "Content-Type": "application/json",
            "X-Appwrite-Project": settings.APPWRITE_PROJECT_ID,
        }
        if settings.APPWRITE_API_KEY:
            self.headers["X-Appwrite-Key"] = settings.APPWRITE_API_KEY
        self.default_limit = settings.TRENDING_LIMIT
        self.client = client or httpx.AsyncClient(timeout=settings.API_TIMEOUT)

    async def _request(self, method: str, url: str, **kwargs) -> Dict:
        try:
            response = await self.client.request(method, url, headers=self.headers, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"Trending store request failed: {e}") from e

        if response.is_error:
            raise TransportError(
                f"Trending store returned {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise TransportError("Trending store returned invalid JSON") from e

    def _parse(self, build):
        """Run build(); a document that does not fit TrendingRecord is a logical failure"""
        try:
            return build()
        except (ValidationError, AttributeError, TypeError) as e:
            raise LogicalFailure(f"Unexpected payload from trending store: {e}") from e

    async def _list(self, queries: List[str]) -> List[TrendingRecord]:
        data = await self._request(
            "GET", self.documents_url, params={"queries[]": queries}
        )
        return self._parse(
            lambda: [TrendingRecord.model_validate(doc) for doc in data.get("documents") or []]
        )

    async def find_by_term(self, search_term: str) -> Optional[TrendingRecord]:
        """Look up the counter document for a search term"""
        records = await self._list(
            [
                _query("equal", "searchTerm", [search_term]),
                _query("limit", values=[1]),
            ]
        )
        return records[0] if records else None

    async def update_search_count(self, search_term: str, movie: Movie) -> TrendingRecord:
        """Increment the counter for search_term, creating it on first use"""
        existing = await self.find_by_term(search_term)

        if existing:
            data = await self._request(
                "PATCH",
                f"{self.documents_url}/{existing.id}",
                json={"data": {"count": existing.count + 1}},
            )
            return self._parse(lambda: TrendingRecord.model_validate(data))

        # movie_id and poster_url are captured here only, never refreshed
        poster_url = (
            f"{self.image_base_url}/{movie.poster_path.lstrip('/')}"
            if movie.poster_path
            else None
        )
        data = await self._request(
            "POST",
            self.documents_url,
            json={
                "documentId": "unique()",
                "data": {
                    "searchTerm": search_term,
                    "count": 1,
                    "movie_id": movie.id,
                    "poster_url": poster_url,
                },
            },
        )
        return self._parse(lambda: TrendingRecord.model_validate(data))

    async def get_trending_movies(self, limit: int = None) -> List[TrendingRecord]:
        """Top search terms by count, highest first"""
        return await self._list(
            [
                _query("orderDesc", "count"),
                _query("limit", values=[limit or self.default_limit]),
            ]
        )

    async def record_search(self, query: str, page: int, movies: List[Movie]) -> bool:
        """Count a first-page search hit.

        Only page 1 of a non-empty query with at least one result counts;
        the top result is attached to a newly created record. Store failures
        are logged and never reach the caller.
        """
        term = (query or "").strip()
        if page != 1 or not term or not movies:
            return False

        try:
            await self.update_search_count(term, movies[0])
        except ReelScoutError as e:
            log_service.error(f"Failed to record search '{term}': {e}")
            return False

        log_service.info(f"Recorded search '{term}'")
        return True

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
