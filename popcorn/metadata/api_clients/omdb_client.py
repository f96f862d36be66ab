# popcorn/metadata/api_clients/omdb_client.py
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import requests

from popcorn.settings import OMDB_API_KEY, OMDB_URL, OMDB_TIMEOUT
from popcorn.utils import log_debug
from popcorn.metadata.core.models import MovieDetail, MovieSummary
from popcorn.metadata.api_clients.cancel import CancelToken
from popcorn.metadata.api_clients.errors import (
    FetchError, MovieNotFound, RequestCancelled,
)

NOT_FOUND_MESSAGE = "Movie not found!"
FETCH_PROBLEM_MESSAGE = "Problem in fetching the movies"


class OMDBClient:
    """
    Thin wrapper around omdbapi.com exposing the two lookups the app needs:
    free-text search (``?s=``) and detail by IMDb id (``?i=``).

    Every call accepts an optional :class:`CancelToken`. Cancelling closes
    the live response, and any failure that happens after cancellation is
    reported as :class:`RequestCancelled` instead of :class:`FetchError`.
    """

    # ────────────────────────────────────────────────────────────────
    # Construction
    # ────────────────────────────────────────────────────────────────
    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = OMDB_URL,
        timeout: float | None = OMDB_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key or OMDB_API_KEY
        if not self.api_key:
            raise RuntimeError("OMDB_API_KEY not set and no api_key passed")
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    # ────────────────────────────────────────────────────────────────
    # Public lookups
    # ────────────────────────────────────────────────────────────────
    def search(self, query: str, cancel: CancelToken | None = None) -> List[MovieSummary]:
        """Return the first page of matches for *query*."""
        data = self._payload({"s": query}, cancel)
        if data.get("Response") == "False":
            log_debug(f"OMDb search “{query}” → {data.get('Error', 'no results')}")
            raise MovieNotFound(NOT_FOUND_MESSAGE)

        results = []
        for blob in data.get("Search") or []:
            try:
                results.append(MovieSummary.from_omdb(blob))
            except (KeyError, TypeError) as exc:
                log_debug(f"OMDb search: skipping malformed row {blob!r}: {exc!r}")
        return results

    def details(self, imdb_id: str, cancel: CancelToken | None = None) -> MovieDetail:
        data = self._payload({"i": imdb_id}, cancel)
        if data.get("Response") == "False":
            raise MovieNotFound(data.get("Error") or NOT_FOUND_MESSAGE)
        try:
            return MovieDetail.from_omdb(data)
        except (KeyError, TypeError) as exc:
            raise FetchError(f"Malformed detail payload for {imdb_id}") from exc

    # ────────────────────────────────────────────────────────────────
    # Internal – one GET, streamed so a cancel can cut it short
    # ────────────────────────────────────────────────────────────────
    def _payload(self, params: Dict[str, Any], cancel: Optional[CancelToken]) -> dict:
        if cancel is not None:
            cancel.raise_if_cancelled()

        params = {**params, "apikey": self.api_key}
        chunks: List[bytes] = []
        try:
            with self.session.get(
                self.base_url, params=params, timeout=self.timeout, stream=True
            ) as resp:
                if cancel is not None:
                    cancel.on_cancel(resp.close)
                    cancel.raise_if_cancelled()

                if not resp.ok:
                    raise FetchError(f"{FETCH_PROBLEM_MESSAGE} (HTTP {resp.status_code})")

                for chunk in resp.iter_content(chunk_size=8192):
                    if cancel is not None:
                        cancel.raise_if_cancelled()
                    chunks.append(chunk)
        except (RequestCancelled, FetchError):
            raise
        except Exception as exc:
            # a closed socket surfaces as whatever urllib3 happens to raise
            if cancel is not None and cancel.cancelled:
                raise RequestCancelled("request cancelled") from exc
            if isinstance(exc, requests.RequestException):
                raise FetchError(FETCH_PROBLEM_MESSAGE) from exc
            raise

        try:
            data = json.loads(b"".join(chunks))
        except ValueError as exc:
            raise FetchError(f"{FETCH_PROBLEM_MESSAGE} (bad JSON)") from exc
        if not isinstance(data, dict):
            raise FetchError(f"{FETCH_PROBLEM_MESSAGE} (unexpected payload)")
        return data
