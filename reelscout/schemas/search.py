"""Search and discovery response schemas"""

from typing import List, Optional

from pydantic import BaseModel

from .movie import Movie


class Suggestion(BaseModel):
    """Dropdown entry"""

    id: int
    title: str
    year: Optional[int] = None
    poster_url: Optional[str] = None


class MovieListResponse(BaseModel):
    """Results page as handed to the view layer"""

    query: str
    results: List[Movie]
    page: int
    total_pages: int
    has_more: bool
