"""Infinite-scroll result list"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..exceptions import ReelScoutError
from ..schemas.movie import Movie, MoviePage
from .content_filter import filter_movies
from .log_service import log_service
from .tmdb_service import TMDBService
from .trending_service import TrendingService

ERROR_MESSAGE = "Error fetching movies. Please try again later."


class PaginationStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class FetchMode(str, Enum):
    REPLACE = "replace"  # page 1, discard previous results
    APPEND = "append"  # page > 1, extend previous results


@dataclass
class ScrollPosition:
    """Viewport geometry reported by the view layer"""

    scroll_y: float
    viewport_height: float
    document_height: float

    def near_bottom(self, threshold: float) -> bool:
        return self.scroll_y + self.viewport_height >= self.document_height - threshold


class PaginationController:
    """Keeps the result list in step with the effective query and page cursor.

    Results are not de-duplicated across pages, and the content filter is
    applied after pagination, so a page can render short.
    """

    def __init__(
        self,
        tmdb: TMDBService,
        trending: Optional[TrendingService] = None,
        scroll_threshold: float = 300,
    ):
        self.tmdb = tmdb
        self.trending = trending
        self.scroll_threshold = scroll_threshold

        self.query = ""
        self.page = 1
        self.total_pages: Optional[int] = None
        self.has_more = True
        self.movies: List[Movie] = []
        self.status = PaginationStatus.IDLE
        self.error_message: Optional[str] = None

        self._seq = 0
        self._task: Optional[asyncio.Task] = None
        self._scroll_scheduled = False
        self._last_scroll: Optional[ScrollPosition] = None

    @property
    def loading(self) -> bool:
        return self.status is PaginationStatus.LOADING

    @property
    def visible_movies(self) -> List[Movie]:
        return filter_movies(self.movies)

    def set_query(self, query: str):
        """Effective query changed: start over from page 1.

        A fetch still in flight for the previous query is superseded and
        its response dropped.
        """
        self.query = query
        self.page = 1
        self.total_pages = None
        self.has_more = True
        self._start(FetchMode.REPLACE)

    def load_more(self) -> bool:
        """Advance the cursor by one page"""
        if self.status not in (PaginationStatus.IDLE, PaginationStatus.LOADED):
            return False
        if not self.has_more:
            return False

        self.page += 1
        self._start(FetchMode.APPEND)
        return True

    def on_scroll(self, position: ScrollPosition):
        """Coalesce a burst of scroll events into one check on the next loop turn"""
        self._last_scroll = position
        if self._scroll_scheduled:
            return
        self._scroll_scheduled = True
        asyncio.get_running_loop().call_soon(self._check_scroll)

    def _check_scroll(self):
        self._scroll_scheduled = False
        position = self._last_scroll
        if position is not None and position.near_bottom(self.scroll_threshold):
            self.load_more()

    def _start(self, mode: FetchMode):
        self._seq += 1
        self.status = PaginationStatus.LOADING
        self.error_message = None
        self._task = asyncio.get_running_loop().create_task(
            self._fetch(self._seq, self.query, self.page, mode)
        )

    async def _fetch(self, seq: int, query: str, page: int, mode: FetchMode):
        try:
            result = await self.tmdb.fetch_movies(query, page)
        except ReelScoutError as e:
            if seq == self._seq:
                log_service.error(f"Error fetching movies for '{query}' page {page}: {e}")
                self._fail(mode)
            return
        except Exception:
            if seq == self._seq:
                self._fail(mode)
            raise

        if seq != self._seq:
            log_service.debug(f"Dropped stale results for '{query}' page {page}")
            return

        self._apply(result, mode)

        if mode is FetchMode.REPLACE and self.trending is not None:
            await self.trending.record_search(query, page, result.results)

    def _apply(self, result: MoviePage, mode: FetchMode):
        if mode is FetchMode.REPLACE:
            self.movies = list(result.results)
        else:
            self.movies = self.movies + list(result.results)

        self.total_pages = result.total_pages
        self.has_more = self.page < result.total_pages
        self.status = PaginationStatus.LOADED

    def _fail(self, mode: FetchMode):
        # A failed "load more" keeps what is already on screen
        if mode is FetchMode.REPLACE:
            self.movies = []
        self.error_message = ERROR_MESSAGE
        self.status = PaginationStatus.ERROR

    async def wait_idle(self):
        """Wait until the latest fetch (and its trending write) has finished"""
        while self._task is not None and not self._task.done():
            await asyncio.wait([self._task])

    def close(self):
        """Drop any fetch in flight"""
        self._seq += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        if self.loading:
            self.status = PaginationStatus.IDLE
