from __future__ import annotations
from typing import Callable, List, Optional

from popcorn.settings import WATCHED_DEDUP
from popcorn.utils import log_debug
from popcorn.metadata.core.models import MovieDetail, WatchedEntry
from popcorn.metadata.core.repo import WatchedRepoProtocol
from popcorn.metadata.core.watched import WatchedCollection
from popcorn.metadata.analytics.stats import WatchedSummary, summarize
from popcorn.metadata.api_clients.omdb_client import OMDBClient
from popcorn.metadata.fetchers import (
    DetailSession, DetailState, Runner, SearchSession, SearchState,
)


class AppController:
    """
    Top-level state of the window: query, selection and watched list.

    No Qt in here. The window sets the ``on_*`` hooks and calls the
    ``handle_*`` methods from its slots; tests drive it with a
    synchronous runner.
    """

    def __init__(
        self,
        client: OMDBClient,
        repo: WatchedRepoProtocol,
        runner: Runner,
        dedup: str = WATCHED_DEDUP,
    ):
        self.repo = repo
        self.watched = WatchedCollection(repo.load(), dedup=dedup)
        self.watched.subscribe(self._persist)

        self.on_search_change:  Optional[Callable[[SearchState], None]] = None
        self.on_detail_change:  Optional[Callable[[DetailState], None]] = None
        self.on_watched_change: Optional[Callable[[List[WatchedEntry]], None]] = None

        self.search  = SearchSession(client, runner, on_change=self._search_changed)
        self.details = DetailSession(client, runner, on_change=self._detail_changed)

    # ── hooks ────────────────────────────────────────────────────────────
    def _persist(self, entries: List[WatchedEntry]) -> None:
        self.repo.save(entries)
        if self.on_watched_change is not None:
            self.on_watched_change(entries)

    def _search_changed(self, state: SearchState) -> None:
        if self.on_search_change is not None:
            self.on_search_change(state)

    def _detail_changed(self, state: DetailState) -> None:
        if self.on_detail_change is not None:
            self.on_detail_change(state)

    # ── user actions ─────────────────────────────────────────────────────
    def handle_query(self, query: str) -> None:
        self.search.set_query(query)

    def handle_movie_select(self, imdb_id: str) -> None:
        """Clicking the selected row again closes it."""
        if imdb_id == self.details.selected_id:
            self.details.select(None)
        else:
            self.details.select(imdb_id)

    def handle_movie_close(self) -> None:
        self.details.select(None)

    def handle_add_watched(self, detail: MovieDetail, user_rating: int) -> WatchedEntry:
        """Build the entry, store it, close the detail panel."""
        entry = WatchedEntry.from_detail(detail, user_rating)
        if not self.watched.add(entry):
            log_debug(f"watched: {entry.imdb_id} already listed, kept existing")
        self.handle_movie_close()
        return entry

    def handle_delete_watched(self, imdb_id: str) -> int:
        return self.watched.remove(imdb_id)

    # ── queries ──────────────────────────────────────────────────────────
    def watched_entry(self, imdb_id: str | None) -> WatchedEntry | None:
        return None if imdb_id is None else self.watched.get(imdb_id)

    def summary(self) -> WatchedSummary:
        return summarize(self.watched)

    def shutdown(self) -> None:
        self.search.close()
        self.details.close()
