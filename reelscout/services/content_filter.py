"""Display-time keyword denylist"""

from typing import Iterable, List

from ..schemas.movie import Movie

BLOCKED_TERMS = ("porn", "porno", "adult", "av", "jav", "erotic", "xxx", "sex")


def is_blocked(movie: Movie, terms: Iterable[str] = BLOCKED_TERMS) -> bool:
    """True when the title or overview contains a denylisted substring.

    Plain substring match: short terms such as "av" also hit ordinary
    words ("Avatar", "have").
    """
    text = f"{movie.title or ''} {movie.overview or ''}".lower()
    return any(term in text for term in terms)


def filter_movies(movies: Iterable[Movie]) -> List[Movie]:
    """Drop blocked movies, keep the rest in order"""
    return [movie for movie in movies if not is_blocked(movie)]
