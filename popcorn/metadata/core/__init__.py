from popcorn.metadata.core.models  import MovieSummary, MovieDetail, WatchedEntry
from popcorn.metadata.core.repo    import KeyValueStore, WatchedRepo, MemoryWatchedRepo
from popcorn.metadata.core.watched import WatchedCollection

__all__ = [
    "MovieSummary", "MovieDetail", "WatchedEntry",
    "KeyValueStore", "WatchedRepo", "MemoryWatchedRepo",
    "WatchedCollection",
]
