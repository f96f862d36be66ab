"""metadata.core.repo
Persistence for the watched list.

``KeyValueStore`` is a JSON object on disk that behaves like browser local
storage: string keys, string values, whole-file rewrite on every ``set``.
``WatchedRepo`` keeps the watched list under one fixed key in such a store.
Nothing here is a global; the app builds one repo and hands it around.
"""

from __future__ import annotations
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from popcorn.metadata.core.models import WatchedEntry
from popcorn.settings import WATCHED_KEY
from popcorn.utils import log_debug


class KeyValueStore:
    """File-backed string→string map."""

    def __init__(self, path: Path):
        self.path = Path(path)

    # ───────────────────────────── readers ──────────────────────────
    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            log_debug(f"store: cannot read {self.path}: {exc}")
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            log_debug(f"store: {self.path} is not valid JSON ({exc}); treating as empty")
            return {}
        if not isinstance(data, dict):
            log_debug(f"store: {self.path} does not hold a JSON object; treating as empty")
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    # ───────────────────────────── writers ──────────────────────────
    def set(self, key: str, value: str) -> None:
        """Overwrite *key*; the file is replaced atomically."""
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp = tempfile.mkstemp(prefix=".storage-", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


class WatchedRepoProtocol(Protocol):
    def load(self) -> List[WatchedEntry]: ...
    def save(self, entries: Sequence[WatchedEntry]) -> None: ...


class WatchedRepo:
    """Full-overwrite persistence of the ordered watched list."""

    def __init__(self, store: KeyValueStore, key: str = WATCHED_KEY):
        self.store = store
        self.key = key

    def load(self) -> List[WatchedEntry]:
        """
        Return the stored list, or ``[]`` when nothing usable is stored.

        A malformed value never raises: bad JSON drops the whole list,
        a bad element drops only that element.
        """
        raw = self.store.get(self.key)
        if raw is None:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as exc:
            log_debug(f"watched: stored value is not JSON ({exc}); starting empty")
            return []
        if not isinstance(items, list):
            log_debug("watched: stored value is not a list; starting empty")
            return []

        entries: List[WatchedEntry] = []
        for i, item in enumerate(items):
            try:
                entries.append(WatchedEntry.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                log_debug(f"watched: skipping malformed entry #{i}: {exc!r}")
        return entries

    def save(self, entries: Sequence[WatchedEntry]) -> None:
        self.store.set(self.key, json.dumps([e.to_dict() for e in entries], ensure_ascii=False))


class MemoryWatchedRepo:
    """In-process repo; handy for tests and for running without a data dir."""

    def __init__(self, entries: Sequence[WatchedEntry] = ()):
        self.saved: List[WatchedEntry] = list(entries)
        self.save_count = 0

    def load(self) -> List[WatchedEntry]:
        return list(self.saved)

    def save(self, entries: Sequence[WatchedEntry]) -> None:
        self.saved = list(entries)
        self.save_count += 1
