"""
popcorn
~~~~~~~

Top-level package for the usePopcorn movie search & watched-list app.

Exports:
  - Core records: MovieSummary, MovieDetail, WatchedEntry
  - Persistence: KeyValueStore, WatchedRepo
  - Helpers: average, summarize, log_debug
  - GUI entrypoint lives in popcorn.main (console script `popcorn`)
"""

# core records / persistence
from popcorn.metadata.core.models import MovieSummary, MovieDetail, WatchedEntry
from popcorn.metadata.core.repo   import KeyValueStore, WatchedRepo

# helpers
from popcorn.metadata.analytics   import average, summarize
from popcorn.utils                import log_debug

__version__ = "0.1.0"

__all__ = [
    "MovieSummary", "MovieDetail", "WatchedEntry",
    "KeyValueStore", "WatchedRepo",
    "average", "summarize", "log_debug",
]
