"""Pydantic schemas for validation"""

from .movie import Genre, Movie, MovieDetail, MoviePage, Video
from .search import MovieListResponse, Suggestion
from .trending import TrendingRecord

__all__ = [
    "Genre",
    "Movie",
    "MovieDetail",
    "MoviePage",
    "Video",
    "MovieListResponse",
    "Suggestion",
    "TrendingRecord",
]
