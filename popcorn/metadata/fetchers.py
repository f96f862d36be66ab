"""
metadata.fetchers
~~~~~~~~~~~~~~~~~
Request lifecycle for the two OMDb lookups the GUI drives.

A session owns the *state* one view renders (results / detail, loading flag,
error string) and republishes it through ``on_change`` every time it moves.
The network call itself runs wherever the injected *runner* puts it; the
runner hands the outcome back on the owning thread through ``done``.

Each request is stamped with a generation number. Only the outcome whose
generation is still the newest may touch the state, so a slow response for
an older query or selection is dropped no matter when it lands.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Protocol, Tuple

from popcorn.settings import MIN_QUERY_LENGTH
from popcorn.utils import log_debug
from popcorn.metadata.core.models import MovieDetail, MovieSummary
from popcorn.metadata.api_clients.cancel import CancelToken
from popcorn.metadata.api_clients.errors import (
    FetchError, MovieNotFound, RequestCancelled,
)
from popcorn.metadata.api_clients.omdb_client import FETCH_PROBLEM_MESSAGE, OMDBClient

GENERIC_ERROR_MESSAGE = "Something went wrong"


class Runner(Protocol):
    """Runs *job* somewhere and calls *done(result)* back on the caller's thread."""
    def submit(self, job: Callable[[], Any], done: Callable[[Any], None]) -> None: ...


@dataclass(slots=True, frozen=True)
class _Outcome:
    generation: int
    value: Any = None
    error: Exception | None = None


def _guarded(generation: int, call: Callable[[], Any]) -> _Outcome:
    # runs on the worker thread; never lets an exception escape into the runner
    try:
        return _Outcome(generation, value=call())
    except Exception as exc:
        return _Outcome(generation, error=exc)


def _error_message(exc: Exception) -> str:
    if isinstance(exc, MovieNotFound):
        return str(exc)
    if isinstance(exc, FetchError):
        return FETCH_PROBLEM_MESSAGE
    return GENERIC_ERROR_MESSAGE


# ───────────────────────────── search ──────────────────────────────────
@dataclass(slots=True, frozen=True)
class SearchState:
    results: Tuple[MovieSummary, ...] = ()
    loading: bool = False
    error: str | None = None


class SearchSession:
    """Keeps the results list in step with the query box."""

    def __init__(
        self,
        client: OMDBClient,
        runner: Runner,
        on_change: Callable[[SearchState], None] | None = None,
        min_length: int = MIN_QUERY_LENGTH,
    ):
        self.client = client
        self.runner = runner
        self.on_change = on_change
        self.min_length = min_length

        self.query = ""
        self.state = SearchState()
        self._generation = 0
        self._token: Optional[CancelToken] = None
        self._closed = False

    # ----------------------------------------------------------------
    def set_query(self, query: str) -> None:
        """Start (or skip) the lookup for *query*, aborting the previous one."""
        if self._closed:
            return
        self.query = query
        self._abort()
        self._generation += 1

        if len(query) < self.min_length:
            self._publish(SearchState())
            return

        gen   = self._generation
        token = self._token = CancelToken()
        self._publish(replace(self.state, loading=True, error=None))
        self.runner.submit(
            lambda: _guarded(gen, lambda: self.client.search(query, cancel=token)),
            self._apply,
        )

    def close(self) -> None:
        """View teardown: abort whatever is in flight and stop publishing."""
        self._abort()
        self._generation += 1
        self._closed = True

    # ----------------------------------------------------------------
    def _abort(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None

    def _apply(self, outcome: _Outcome) -> None:
        if outcome.generation != self._generation or self._closed:
            log_debug(f"search: dropping stale result (gen {outcome.generation})")
            return

        self._token = None
        err = outcome.error
        if isinstance(err, RequestCancelled):
            log_debug(f"search “{self.query}” cancelled")
            self._publish(replace(self.state, loading=False))
            return
        if err is not None:
            log_debug(f"search “{self.query}” failed: {err!r}")
            self._publish(SearchState(results=(), loading=False, error=_error_message(err)))
            return

        self._publish(SearchState(results=tuple(outcome.value), loading=False, error=None))

    def _publish(self, state: SearchState) -> None:
        self.state = state
        if self.on_change is not None and not self._closed:
            self.on_change(state)


# ───────────────────────────── detail ──────────────────────────────────
@dataclass(slots=True, frozen=True)
class DetailState:
    imdb_id: str | None = None
    detail: MovieDetail | None = None
    loading: bool = False
    error: str | None = None


class DetailSession:
    """Loads the full record for the selected id."""

    def __init__(
        self,
        client: OMDBClient,
        runner: Runner,
        on_change: Callable[[DetailState], None] | None = None,
    ):
        self.client = client
        self.runner = runner
        self.on_change = on_change

        self.state = DetailState()
        self._generation = 0
        self._token: Optional[CancelToken] = None

    @property
    def selected_id(self) -> str | None:
        return self.state.imdb_id

    def select(self, imdb_id: str | None) -> None:
        """Show *imdb_id* (or nothing). Re-selecting the current id is a no-op."""
        if imdb_id == self.state.imdb_id:
            return
        self._abort()
        self._generation += 1

        if imdb_id is None:
            self._publish(DetailState())
            return

        gen   = self._generation
        token = self._token = CancelToken()
        self._publish(DetailState(imdb_id=imdb_id, loading=True))
        self.runner.submit(
            lambda: _guarded(gen, lambda: self.client.details(imdb_id, cancel=token)),
            self._apply,
        )

    def close(self) -> None:
        self.select(None)

    def _abort(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None

    def _apply(self, outcome: _Outcome) -> None:
        if outcome.generation != self._generation:
            log_debug(f"detail: dropping stale result (gen {outcome.generation})")
            return

        self._token = None
        err = outcome.error
        if isinstance(err, RequestCancelled):
            log_debug(f"detail {self.state.imdb_id} cancelled")
            self._publish(replace(self.state, loading=False))
            return
        if err is not None:
            log_debug(f"detail {self.state.imdb_id} failed: {err!r}")
            self._publish(replace(self.state, loading=False, error=_error_message(err)))
            return

        self._publish(replace(self.state, detail=outcome.value, loading=False, error=None))

    def _publish(self, state: DetailState) -> None:
        self.state = state
        if self.on_change is not None:
            self.on_change(state)
