"""
Catalog queries: search, filter and sort the album list.

These back the ``list-albums`` command and the "waiting for review" /
"top rated" lists shown next to recommendations.  All functions are pure and
return new lists.

Sort orders (``AlbumSort``):
  recent  date_added, newest first
  rating  review rating, highest first (unreviewed albums count as 0)
  artist  artist name, case-insensitive A→Z
  year    release_year, newest first
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from music_journal.models.album import Album
from music_journal.models.review import Review
from music_journal.utils.time_utils import to_utc


class AlbumSort(StrEnum):
    RECENT = "recent"
    RATING = "rating"
    ARTIST = "artist"
    YEAR = "year"


def _ratings_by_album(reviews: list[Review]) -> dict[str, int]:
    ratings: dict[str, int] = {}
    for review in reviews:
        ratings.setdefault(review.album_id, review.rating)
    return ratings


def filter_albums(
    albums: list[Album],
    reviews: list[Review],
    *,
    search: str = "",
    genre: Optional[str] = None,
    year: Optional[int] = None,
    artist: Optional[str] = None,
    sort_by: AlbumSort = AlbumSort.RECENT,
) -> list[Album]:
    """Return albums matching every given filter, in ``sort_by`` order.

    ``search`` is a case-insensitive substring match on title or artist;
    ``genre`` and ``artist`` are exact matches.
    """
    needle = search.strip().lower()

    def matches(album: Album) -> bool:
        if needle and needle not in album.title.lower() and needle not in album.artist.lower():
            return False
        if genre and album.genre != genre:
            return False
        if year is not None and album.release_year != year:
            return False
        if artist and album.artist != artist:
            return False
        return True

    selected = [a for a in albums if matches(a)]

    sort_by = AlbumSort(sort_by)
    if sort_by is AlbumSort.RECENT:
        return sorted(selected, key=lambda a: to_utc(a.date_added), reverse=True)
    if sort_by is AlbumSort.RATING:
        ratings = _ratings_by_album(reviews)
        return sorted(selected, key=lambda a: -ratings.get(a.id, 0))
    if sort_by is AlbumSort.ARTIST:
        return sorted(selected, key=lambda a: a.artist.casefold())
    return sorted(selected, key=lambda a: -a.release_year)


def distinct_genres(albums: list[Album]) -> list[str]:
    """Non-empty genres in first-seen order."""
    return [g for g in dict.fromkeys(a.genre for a in albums) if g]


def distinct_years(albums: list[Album]) -> list[int]:
    """Release years, newest first."""
    return sorted({a.release_year for a in albums}, reverse=True)


def distinct_artists(albums: list[Album]) -> list[str]:
    """Artist names, alphabetical."""
    return sorted({a.artist for a in albums}, key=str.casefold)


def unreviewed_albums(albums: list[Album], reviews: list[Review]) -> list[Album]:
    """Albums with no review, in catalog order."""
    reviewed = {r.album_id for r in reviews}
    return [a for a in albums if a.id not in reviewed]


def top_rated_albums(
    albums: list[Album],
    reviews: list[Review],
    threshold: int = 4,
) -> list[tuple[Album, Review]]:
    """Reviewed albums rated at least ``threshold``, highest rating first."""
    by_album: dict[str, Review] = {}
    for review in reviews:
        by_album.setdefault(review.album_id, review)
    pairs = [
        (album, by_album[album.id])
        for album in albums
        if album.id in by_album and by_album[album.id].rating >= threshold
    ]
    return sorted(pairs, key=lambda pair: -pair[1].rating)
