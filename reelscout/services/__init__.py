"""Services layer"""

from .content_filter import filter_movies, is_blocked
from .debouncer import Debouncer
from .detail_service import DetailService
from .log_service import LogService
from .pagination_controller import PaginationController, PaginationStatus, ScrollPosition
from .search_controller import SearchController
from .session import SearchSession
from .tmdb_service import TMDBService
from .trending_service import TrendingService

__all__ = [
    "Debouncer",
    "DetailService",
    "LogService",
    "PaginationController",
    "PaginationStatus",
    "ScrollPosition",
    "SearchController",
    "SearchSession",
    "TMDBService",
    "TrendingService",
    "filter_movies",
    "is_blocked",
]
