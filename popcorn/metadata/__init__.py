"""
metadata
~~~~~~~~
Everything below the GUI:

* core        – dataclasses, watched list, persistence
* api_clients – OMDb wrapper, errors, cancel token
* analytics   – averages for the watched summary
* fetchers    – search / detail request lifecycle
"""

# ── core objects ──────────────────────────────────────────────────────────
from popcorn.metadata.core.models  import MovieSummary, MovieDetail, WatchedEntry
from popcorn.metadata.core.repo    import KeyValueStore, WatchedRepo
from popcorn.metadata.core.watched import WatchedCollection

# ── API client ────────────────────────────────────────────────────────────
from popcorn.metadata.api_clients  import OMDBClient, CancelToken

# ── analytics / fetch lifecycle ───────────────────────────────────────────
from popcorn.metadata.analytics    import average, summarize, format_stat
from popcorn.metadata.fetchers     import (
    SearchSession, SearchState, DetailSession, DetailState,
)

__all__ = [
    "MovieSummary", "MovieDetail", "WatchedEntry",
    "KeyValueStore", "WatchedRepo", "WatchedCollection",
    "OMDBClient", "CancelToken",
    "average", "summarize", "format_stat",
    "SearchSession", "SearchState", "DetailSession", "DetailState",
]
