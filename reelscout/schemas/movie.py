"""Catalog schemas"""

from typing import List, Optional

from pydantic import BaseModel, computed_field, field_validator


class Genre(BaseModel):
    """Genre attached to a detail payload"""

    id: int
    name: str


class Movie(BaseModel):
    """Movie as returned by the catalog (list or detail payload)"""

    id: int
    title: str = ""
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    vote_average: Optional[float] = None
    release_date: Optional[str] = None
    original_language: Optional[str] = None
    genre_ids: List[int] = []
    genres: List[Genre] = []
    runtime: Optional[int] = None

    @field_validator("release_date", "overview", "poster_path", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        # TMDB sends "" for unknown dates and missing overviews
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def year(self) -> Optional[int]:
        if not self.release_date:
            return None
        try:
            return int(self.release_date.split("-")[0])
        except ValueError:
            return None


class MoviePage(BaseModel):
    """One page of list results"""

    results: List[Movie] = []
    page: int = 1
    total_pages: int = 1
    total_results: int = 0

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages


class Video(BaseModel):
    """Related video (trailer, teaser, clip)"""

    id: Optional[str] = None
    key: str
    name: str = ""
    site: str = ""
    type: str = ""
    official: bool = False

    @computed_field
    @property
    def url(self) -> Optional[str]:
        if self.site == "YouTube":
            return f"https://www.youtube.com/watch?v={self.key}"
        return None


class MovieDetail(BaseModel):
    """Detail page view state"""

    movie_id: int
    found: bool
    movie: Optional[Movie] = None
    trailer: Optional[Video] = None
    poster_url: Optional[str] = None
    rating: str = "N/A"
    year: str = "N/A"
    genres: str = ""
    runtime: Optional[str] = None
