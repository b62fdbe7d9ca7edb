"""Trending store schemas"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TrendingRecord(BaseModel):
    """One search-term counter document"""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="$id")
    search_term: str = Field(alias="searchTerm")
    count: int = 1
    movie_id: Optional[int] = None
    poster_url: Optional[str] = None
