# average(), summarize() for the watched-list summary
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

from popcorn.metadata.core.models import WatchedEntry


def average(values: Iterable[float | int | None] | None) -> Optional[float]:
    """
    Arithmetic mean of *values*, skipping ``None`` members.

    ``None`` input, an empty sequence, or a sequence of only ``None`` gives
    ``None``. No rounding here; see :func:`format_stat`.
    """
    if values is None:
        return None
    nums = [v for v in values if v is not None]
    if not nums:
        return None
    return sum(nums) / len(nums)


@dataclass(slots=True, frozen=True)
class WatchedSummary:
    count: int
    avg_imdb_rating: float | None
    avg_user_rating: float | None
    avg_runtime: float | None


def summarize(entries: Iterable[WatchedEntry]) -> WatchedSummary:
    entries = list(entries)
    return WatchedSummary(
        count=len(entries),
        avg_imdb_rating=average(e.imdb_rating for e in entries),
        avg_user_rating=average(e.user_rating for e in entries),
        avg_runtime=average(e.runtime_minutes for e in entries),
    )


def format_stat(value: float | None) -> str:
    return "NA" if value is None else f"{value:.2f}"
