"""Domain models: catalog, reviews, listen log and derived insights."""

from music_journal.models.album import Album, new_album_id
from music_journal.models.insight import (
    GenreCount,
    ListenCount,
    MonthBucket,
    RatedAlbum,
    Suggestion,
    YearStats,
)
from music_journal.models.review import FavoriteTrack, ListenEvent, Review

__all__ = [
    "Album",
    "FavoriteTrack",
    "GenreCount",
    "ListenCount",
    "ListenEvent",
    "MonthBucket",
    "RatedAlbum",
    "Review",
    "Suggestion",
    "YearStats",
    "new_album_id",
]
