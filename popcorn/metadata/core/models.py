# MovieSummary / MovieDetail / WatchedEntry dataclasses
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from popcorn.settings import MAX_RATING
from popcorn.utils import na_to_none, parse_float, parse_minutes


@dataclass(slots=True, frozen=True)
class MovieSummary:
    """One row of an OMDb ``Search`` array."""
    imdb_id: str
    title: str
    year: str | None = None
    poster_url: str | None = None

    @classmethod
    def from_omdb(cls, blob: Dict[str, Any]) -> MovieSummary:
        return cls(
            imdb_id=blob["imdbID"],
            title=blob.get("Title") or "",
            year=na_to_none(blob.get("Year")),
            poster_url=na_to_none(blob.get("Poster")),
        )


@dataclass(slots=True, frozen=True)
class MovieDetail:
    imdb_id: str
    title: str
    year: str | None = None
    poster_url: str | None = None
    plot: str | None = None
    genre: str | None = None
    actors: str | None = None
    director: str | None = None
    runtime: str | None = None
    runtime_minutes: int | None = None
    imdb_rating: float | None = None
    released: str | None = None

    @classmethod
    def from_omdb(cls, blob: Dict[str, Any]) -> MovieDetail:
        runtime = na_to_none(blob.get("Runtime"))
        return cls(
            imdb_id=blob["imdbID"],
            title=blob.get("Title") or "",
            year=na_to_none(blob.get("Year")),
            poster_url=na_to_none(blob.get("Poster")),
            plot=na_to_none(blob.get("Plot")),
            genre=na_to_none(blob.get("Genre")),
            actors=na_to_none(blob.get("Actors")),
            director=na_to_none(blob.get("Director")),
            runtime=runtime,
            runtime_minutes=parse_minutes(runtime),
            imdb_rating=parse_float(blob.get("imdbRating")),
            released=na_to_none(blob.get("Released")),
        )


@dataclass(slots=True, frozen=True)
class WatchedEntry:
    """
    A rated movie on the watched list.

    Stored with the keys ``imdbId, Title, Year, Poster, runtime, imdbRating,
    userRating`` so lists written by older builds still load.
    """
    imdb_id: str
    title: str
    user_rating: int
    year: str | None = None
    poster_url: str | None = None
    runtime_minutes: int | None = None
    imdb_rating: float | None = None

    def __post_init__(self) -> None:
        if isinstance(self.user_rating, bool) or not isinstance(self.user_rating, int):
            raise ValueError(f"user_rating must be an int, got {self.user_rating!r}")
        if not 1 <= self.user_rating <= MAX_RATING:
            raise ValueError(f"user_rating must be 1–{MAX_RATING}, got {self.user_rating}")

    @classmethod
    def from_detail(cls, detail: MovieDetail, user_rating: int) -> WatchedEntry:
        return cls(
            imdb_id=detail.imdb_id,
            title=detail.title,
            user_rating=user_rating,
            year=detail.year,
            poster_url=detail.poster_url,
            runtime_minutes=detail.runtime_minutes,
            imdb_rating=detail.imdb_rating,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "imdbId":     self.imdb_id,
            "Title":      self.title,
            "Year":       self.year,
            "Poster":     self.poster_url,
            "runtime":    self.runtime_minutes,
            "imdbRating": self.imdb_rating,
            "userRating": self.user_rating,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> WatchedEntry:
        """Inverse of :meth:`to_dict`; raises KeyError / ValueError on junk."""
        return cls(
            imdb_id=d["imdbId"],
            title=d.get("Title") or "",
            user_rating=d["userRating"],
            year=d.get("Year"),
            poster_url=d.get("Poster"),
            runtime_minutes=parse_minutes(d.get("runtime")),
            imdb_rating=parse_float(d.get("imdbRating")),
        )
