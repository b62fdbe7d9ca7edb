"""Search box and result list wired together"""

from typing import Optional

from ..config import Settings
from .pagination_controller import PaginationController
from .search_controller import SearchController
from .tmdb_service import TMDBService
from .trending_service import TrendingService


class SearchSession:
    """One viewer's search state: every effective query feeds the result list"""

    def __init__(
        self,
        settings: Settings,
        tmdb: TMDBService,
        trending: Optional[TrendingService] = None,
    ):
        self.search = SearchController(
            tmdb,
            debounce=settings.debounce_seconds,
            min_chars=settings.SUGGESTION_MIN_CHARS,
            limit=settings.SUGGESTION_LIMIT,
        )
        self.results = PaginationController(
            tmdb, trending, scroll_threshold=settings.SCROLL_THRESHOLD_PX
        )
        self.search.subscribe(self.results.set_query)

    def start(self):
        """Initial load: popular movies for the empty query"""
        self.results.set_query(self.search.effective_query)

    async def wait_idle(self):
        await self.search.wait_idle()
        await self.results.wait_idle()

    def close(self):
        self.search.close()
        self.results.close()
