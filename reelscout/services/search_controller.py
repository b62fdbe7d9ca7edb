"""Search box: debounced query and typeahead dropdown"""

import asyncio
from typing import Callable, List, Optional

from ..exceptions import ReelScoutError
from ..schemas.movie import Movie
from .debouncer import Debouncer
from .log_service import log_service
from .tmdb_service import TMDBService

QueryListener = Callable[[str], None]


class SearchController:
    """Owns the raw/effective query pair and the suggestion dropdown.

    Every keystroke restarts the debounce timer and fires a suggestion
    lookup. Suggestion responses that arrive after a newer keystroke are
    dropped, so the dropdown never shows results for older input.
    """

    def __init__(
        self,
        tmdb: TMDBService,
        debounce: float = 0.5,
        min_chars: int = 2,
        limit: int = 6,
    ):
        self.tmdb = tmdb
        self.min_chars = min_chars
        self.limit = limit

        self.raw_query = ""
        self.effective_query = ""
        self.suggestions: List[Movie] = []
        self.dropdown_visible = False

        self._debouncer = Debouncer(debounce, self._commit)
        self._listeners: List[QueryListener] = []
        self._seq = 0
        self._suggestion_task: Optional[asyncio.Task] = None

    def subscribe(self, listener: QueryListener):
        """Call listener with every new effective query"""
        self._listeners.append(listener)

    def set_query(self, text: str):
        """Keystroke: update raw text, restart the debounce, refresh suggestions"""
        if text == self.raw_query:
            return
        self.raw_query = text
        self._debouncer.push(text)
        self._refresh_suggestions(text)

    def _commit(self, text: str):
        if text == self.effective_query:
            return
        self.effective_query = text
        log_service.debug(f"Effective query -> '{text}'")
        for listener in self._listeners:
            listener(text)

    def _refresh_suggestions(self, text: str):
        self._seq += 1
        term = text.strip()
        if len(term) < self.min_chars:
            self.suggestions = []
            self.dropdown_visible = False
            return

        self._suggestion_task = asyncio.get_running_loop().create_task(
            self._fetch_suggestions(self._seq, term)
        )

    async def _fetch_suggestions(self, seq: int, term: str):
        try:
            page = await self.tmdb.search_movies(term, 1)
        except ReelScoutError as e:
            if seq == self._seq:
                log_service.debug(f"Suggestion lookup for '{term}' failed: {e}")
                self.suggestions = []
                self.dropdown_visible = False
            return

        if seq != self._seq:
            return
        self.suggestions = page.results[: self.limit]
        self.dropdown_visible = bool(self.suggestions)

    def focus(self):
        if self.suggestions:
            self.dropdown_visible = True

    def blur(self):
        """Interaction outside the search box"""
        self.dropdown_visible = False

    def select_suggestion(self, movie: Movie):
        """Take a dropdown entry as the query and commit it right away"""
        self._seq += 1  # any lookup in flight is now stale
        self._debouncer.cancel()
        self.raw_query = movie.title
        self.dropdown_visible = False
        self._commit(movie.title)

    async def wait_idle(self):
        """Wait for the pending debounce commit and suggestion lookup"""
        while self._debouncer.pending:
            await self._debouncer.wait()
        task = self._suggestion_task
        if task is not None and not task.done():
            await asyncio.wait([task])

    def close(self):
        self._debouncer.cancel()
        self._seq += 1
        if self._suggestion_task is not None and not self._suggestion_task.done():
            self._suggestion_task.cancel()
