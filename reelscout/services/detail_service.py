"""Movie detail page loader"""

import asyncio
from typing import List, Optional

from ..exceptions import ReelScoutError
from ..schemas.movie import Genre, MovieDetail
from .log_service import log_service
from .tmdb_service import TMDBService


def format_rating(vote_average: Optional[float]) -> str:
    return f"{vote_average:.1f}" if vote_average is not None else "N/A"


def format_genres(genres: List[Genre]) -> str:
    return ", ".join(genre.name for genre in genres)


def format_runtime(runtime: Optional[int]) -> Optional[str]:
    return f"{runtime} min" if runtime else None


class DetailService:
    """Builds the detail page view state; failures become a not-found page"""

    def __init__(self, tmdb: TMDBService):
        self.tmdb = tmdb

    async def load(self, movie_id: int) -> MovieDetail:
        movie_result, videos_result = await asyncio.gather(
            self.tmdb.get_movie_details(movie_id),
            self.tmdb.get_movie_videos(movie_id),
            return_exceptions=True,
        )

        if isinstance(movie_result, ReelScoutError):
            log_service.info(f"Movie {movie_id} not available: {movie_result}")
            return MovieDetail(movie_id=movie_id, found=False)
        if isinstance(movie_result, BaseException):
            raise movie_result

        trailer = None
        if isinstance(videos_result, ReelScoutError):
            log_service.info(f"No videos for movie {movie_id}: {videos_result}")
        elif isinstance(videos_result, BaseException):
            raise videos_result
        else:
            trailer = self.tmdb.pick_trailer(videos_result)

        movie = movie_result
        return MovieDetail(
            movie_id=movie_id,
            found=True,
            movie=movie,
            trailer=trailer,
            poster_url=self.tmdb.poster_url(movie.poster_path),
            rating=format_rating(movie.vote_average),
            year=str(movie.year) if movie.year else "N/A",
            genres=format_genres(movie.genres),
            runtime=format_runtime(movie.runtime),
        )
