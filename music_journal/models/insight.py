"""
Derived insight models: recommendation suggestions and year-in-music stats.

Both are produced on demand by pure functions
(``recommendations.engine`` and ``stats.year_in_music``) and never persisted
in the store.  They are frozen like every other model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from music_journal.models.album import Album
from music_journal.models.review import Review
from music_journal.taxonomy.album_taxonomy import SuggestionKind


class Suggestion(BaseModel):
    """One ranked recommendation entry.

    Attributes:
        genre: Genre the suggestion points at, or ``"Various"``.
        reason: Human-readable explanation.
        score: Match score on a 1–5 scale; genre-affinity scores are true
            means, every other kind uses a fixed constant.
        kind: Rule that produced the entry.
    """

    model_config = ConfigDict(frozen=True)

    genre: str
    reason: str
    score: float
    kind: SuggestionKind


class RatedAlbum(BaseModel):
    """An album paired with its review (``YearStats.top_rated``)."""

    model_config = ConfigDict(frozen=True)

    album: Album
    review: Review


class ListenCount(BaseModel):
    """An album paired with its in-year listen count."""

    model_config = ConfigDict(frozen=True)

    album: Album
    count: int


class GenreCount(BaseModel):
    """Number of in-year reviewed albums for one genre."""

    model_config = ConfigDict(frozen=True)

    genre: str
    count: int


class MonthBucket(BaseModel):
    """In-year reviews dated in one calendar month, with their albums."""

    model_config = ConfigDict(frozen=True)

    month: str
    albums: list[Album] = []
    reviews: list[Review] = []


class YearStats(BaseModel):
    """Aggregate "year in music" summary for one calendar year.

    A year with no data still yields a fully populated object: zero counts,
    ``average_rating == 0.0``, empty lists and twelve empty month buckets.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    total_albums_reviewed: int = 0
    total_listens: int = 0
    average_rating: float = 0.0
    top_rated: list[RatedAlbum] = []
    most_listened: list[ListenCount] = []
    top_genres: list[GenreCount] = []
    monthly_data: list[MonthBucket] = []

    def month(self, label: str) -> MonthBucket:
        """Return the bucket for a month label such as ``"Dec"``.

        Raises:
            KeyError: If ``label`` is not one of the twelve month labels.
        """
        for bucket in self.monthly_data:
            if bucket.month == label:
                return bucket
        raise KeyError(label)
