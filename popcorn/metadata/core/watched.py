# ordered watched list + change listeners
from __future__ import annotations
from typing import Callable, Iterator, List, Optional, Sequence

from popcorn.metadata.core.models import WatchedEntry
from popcorn.settings import DEDUP_POLICIES

Listener = Callable[[List[WatchedEntry]], None]


class WatchedCollection:
    """
    The user's watched list.

    *dedup* decides what ``add`` does with an id that is already present:

    ``allow``    append anyway (the list may hold the same id twice)
    ``ignore``   keep the existing entry, drop the new one
    ``replace``  overwrite the existing entry in place

    Every mutation that changes the list calls the listeners with a copy of
    the new list; the app hooks the repository's ``save`` in here.
    """

    def __init__(self, entries: Sequence[WatchedEntry] = (), dedup: str = "allow"):
        if dedup not in DEDUP_POLICIES:
            raise ValueError(f"Unknown dedup policy: {dedup!r}")
        self._entries: List[WatchedEntry] = list(entries)
        self.dedup = dedup
        self._listeners: List[Listener] = []

    # ───────────────────────────── listeners ────────────────────────
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _changed(self) -> None:
        snapshot = list(self._entries)
        for listener in list(self._listeners):
            listener(snapshot)

    # ───────────────────────────── writers ──────────────────────────
    def add(self, entry: WatchedEntry) -> bool:
        """Return True if the list changed."""
        idx = self._index_of(entry.imdb_id)
        if idx is not None and self.dedup == "ignore":
            return False
        if idx is not None and self.dedup == "replace":
            self._entries[idx] = entry
        else:
            self._entries.append(entry)
        self._changed()
        return True

    def remove(self, imdb_id: str) -> int:
        """Drop every entry with *imdb_id*; returns how many went."""
        kept = [e for e in self._entries if e.imdb_id != imdb_id]
        removed = len(self._entries) - len(kept)
        if removed:
            self._entries = kept
            self._changed()
        return removed

    # ───────────────────────────── readers ──────────────────────────
    def _index_of(self, imdb_id: str) -> Optional[int]:
        for i, e in enumerate(self._entries):
            if e.imdb_id == imdb_id:
                return i
        return None

    def get(self, imdb_id: str) -> Optional[WatchedEntry]:
        idx = self._index_of(imdb_id)
        return None if idx is None else self._entries[idx]

    def entries(self) -> List[WatchedEntry]:
        return list(self._entries)

    def __contains__(self, imdb_id: object) -> bool:
        return isinstance(imdb_id, str) and self._index_of(imdb_id) is not None

    def __iter__(self) -> Iterator[WatchedEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
