"""Shared fixtures: settings and in-memory stand-ins for the catalog and store APIs"""

import asyncio
import json
import re
from typing import Dict, List, Optional

import httpx
import pytest

from reelscout.config import Settings
from reelscout.services.log_service import log_service
from reelscout.services.tmdb_service import TMDBService
from reelscout.services.trending_service import TrendingService


def movie_payload(movie_id: int, title: str, overview: str = "", **extra) -> dict:
    payload = {
        "id": movie_id,
        "title": title,
        "overview": overview,
        "poster_path": f"/poster{movie_id}.jpg",
        "vote_average": 7.25,
        "release_date": "2021-10-22",
        "original_language": "en",
    }
    payload.update(extra)
    return payload


class FakeTMDB:
    """Catalog API behind httpx.MockTransport.

    List endpoints return per_page movies per page with ids page*100+i and
    titles "<query> <page>-<i>" ("popular" for discover).
    """

    def __init__(self, total_pages: int = 5, per_page: int = 20):
        self.total_pages = total_pages
        self.per_page = per_page
        self.requests: List[httpx.Request] = []
        self.failures: Dict[str, object] = {}  # path -> status code, "network" or "sentinel"
        self.gates: Dict[str, asyncio.Event] = {}  # query text -> release event
        self.overrides: Dict[str, dict] = {}  # path -> JSON body
        self.details: Dict[int, dict] = {}
        self.videos: Dict[int, list] = {}

    def hold(self, query: str) -> asyncio.Event:
        """Keep list requests for query in flight until the event is set"""
        self.gates[query] = asyncio.Event()
        return self.gates[query]

    def list_requests(self) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if r.url.path.endswith(("/search/movie", "/discover/movie"))
        ]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.split("/3/", 1)[-1]
        params = request.url.params

        gate = self.gates.get(params.get("query", ""))
        if gate is not None and path in ("search/movie", "discover/movie"):
            await gate.wait()

        failure = self.failures.get(path)
        if failure == "network":
            raise httpx.ConnectError("connection refused", request=request)
        if failure == "sentinel":
            return httpx.Response(
                200,
                json={"success": False, "status_code": 7, "status_message": "Invalid API key"},
            )
        if failure:
            return httpx.Response(failure, json={"status_message": "upstream error"})

        if path in self.overrides:
            return httpx.Response(200, json=self.overrides[path])

        if path in ("search/movie", "discover/movie"):
            page = int(params.get("page", 1))
            label = params.get("query", "popular")
            results = [
                movie_payload(page * 100 + i, f"{label} {page}-{i}")
                for i in range(self.per_page)
            ]
            return httpx.Response(
                200,
                json={
                    "page": page,
                    "results": results,
                    "total_pages": self.total_pages,
                    "total_results": self.total_pages * self.per_page,
                },
            )

        match = re.fullmatch(r"movie/(\d+)(/videos)?", path)
        if match:
            movie_id = int(match.group(1))
            if match.group(2):
                if movie_id not in self.videos:
                    return httpx.Response(404, json={"success": False, "status_code": 34})
                return httpx.Response(200, json={"id": movie_id, "results": self.videos[movie_id]})
            if movie_id not in self.details:
                return httpx.Response(404, json={"success": False, "status_code": 34})
            return httpx.Response(200, json=self.details[movie_id])

        return httpx.Response(404, json={"success": False})


class FakeAppwrite:
    """Appwrite document collection behind httpx.MockTransport"""

    def __init__(self):
        self.documents: Dict[str, dict] = {}
        self.requests: List[httpx.Request] = []
        self.fail_status: Optional[int] = None
        # method -> (status, body) returned instead of the normal reply
        self.replies: Dict[str, tuple] = {}
        self._next_id = 1

    @property
    def writes(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method in ("POST", "PATCH")]

    def seed(self, search_term: str, count: int, movie_id: int = 1, poster_url: str = None) -> str:
        doc_id = f"doc{self._next_id}"
        self._next_id += 1
        self.documents[doc_id] = {
            "$id": doc_id,
            "searchTerm": search_term,
            "count": count,
            "movie_id": movie_id,
            "poster_url": poster_url,
        }
        return doc_id

    def by_term(self, search_term: str) -> Optional[dict]:
        for doc in self.documents.values():
            if doc["searchTerm"] == search_term:
                return doc
        return None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status:
            return httpx.Response(self.fail_status, json={"message": "store unavailable"})
        if request.method in self.replies:
            status, body = self.replies[request.method]
            return httpx.Response(status, json=body)

        if request.method == "GET":
            docs = list(self.documents.values())
            limit = None
            for raw in request.url.params.get_list("queries[]"):
                query = json.loads(raw)
                if query["method"] == "equal":
                    docs = [d for d in docs if d[query["attribute"]] in query["values"]]
                elif query["method"] == "orderDesc":
                    docs.sort(key=lambda d: d[query["attribute"]], reverse=True)
                elif query["method"] == "limit":
                    limit = query["values"][0]
            if limit is not None:
                docs = docs[:limit]
            return httpx.Response(200, json={"total": len(docs), "documents": docs})

        body = json.loads(request.content)
        if request.method == "POST":
            data = body["data"]
            doc_id = self.seed(data["searchTerm"], data["count"], data["movie_id"], data["poster_url"])
            return httpx.Response(201, json=self.documents[doc_id])
        if request.method == "PATCH":
            doc_id = request.url.path.rsplit("/", 1)[-1]
            self.documents[doc_id].update(body["data"])
            return httpx.Response(200, json=self.documents[doc_id])

        return httpx.Response(405)


@pytest.fixture(autouse=True)
def _isolated_logs(tmp_path):
    log_service.configure(tmp_path / "logs")
    yield


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        TMDB_API_KEY="test-token",
        APPWRITE_PROJECT_ID="reelscout",
        APPWRITE_DATABASE_ID="main",
        APPWRITE_COLLECTION_ID="searches",
        SEARCH_DEBOUNCE_MS=50,
        LOGS_DIR=tmp_path / "logs",
    )


@pytest.fixture
def fake_tmdb():
    return FakeTMDB()


@pytest.fixture
def fake_store():
    return FakeAppwrite()


@pytest.fixture
def make_tmdb(settings, fake_tmdb):
    def factory() -> TMDBService:
        return TMDBService(
            settings, client=httpx.AsyncClient(transport=httpx.MockTransport(fake_tmdb))
        )

    return factory


@pytest.fixture
def make_trending(settings, fake_store):
    def factory() -> TrendingService:
        return TrendingService(
            settings, client=httpx.AsyncClient(transport=httpx.MockTransport(fake_store))
        )

    return factory
