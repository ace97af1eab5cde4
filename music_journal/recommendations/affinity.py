"""
Affinity aggregations over the review collection.

Every function here is a pure, single pass over in-memory lists — no store
access, no mutation of inputs.  Groupings use insertion-ordered dicts and all
rankings use Python's stable ``sorted`` so that ties keep the order in which
keys were first seen.

Definitions
-----------
reviewed albums:
    Albums (in catalog order) that have a review.  Reviews whose album is not
    in the catalog are ignored here.

liked pair:
    A reviewed album together with its review when ``rating >= threshold``.

genre / artist affinity:
    Mean rating and count of liked pairs grouped by ``album.genre`` /
    ``album.artist``, ranked by mean descending.

mood tally:
    Frequency of each emotional tag over every liked review in the review
    list, ranked by count descending.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from music_journal.models.album import Album
from music_journal.models.review import Review

DEFAULT_LIKE_THRESHOLD = 4


@dataclass
class GenreAffinity:
    """Liked-review statistics for one genre.

    Attributes:
        genre:      Genre label as stored on the albums.
        avg_rating: Arithmetic mean rating of liked reviews.
        count:      Number of liked reviews.
    """

    genre:      str
    avg_rating: float
    count:      int


@dataclass
class ArtistAffinity:
    """Liked-review statistics for one artist."""

    artist:     str
    avg_rating: float
    count:      int


def _review_index(reviews: Iterable[Review]) -> dict[str, Review]:
    """Map album id to its first review."""
    index: dict[str, Review] = {}
    for review in reviews:
        index.setdefault(review.album_id, review)
    return index


def reviewed_albums(
    albums: list[Album],
    reviews: list[Review],
) -> list[tuple[Album, Review]]:
    """Return ``(album, review)`` for every catalog album that has a review."""
    index = _review_index(reviews)
    return [(album, index[album.id]) for album in albums if album.id in index]


def liked_pairs(
    pairs: list[tuple[Album, Review]],
    threshold: int = DEFAULT_LIKE_THRESHOLD,
) -> list[tuple[Album, Review]]:
    """Keep the pairs whose review rating is at least ``threshold``."""
    return [(album, review) for album, review in pairs if review.rating >= threshold]


def _grouped_means(keyed_ratings: Iterable[tuple[str, int]]) -> list[tuple[str, float, int]]:
    totals: dict[str, list[int]] = {}
    for key, rating in keyed_ratings:
        acc = totals.setdefault(key, [0, 0])
        acc[0] += rating
        acc[1] += 1
    means = [(key, total / count, count) for key, (total, count) in totals.items()]
    return sorted(means, key=lambda m: -m[1])


def genre_affinities(liked: list[tuple[Album, Review]]) -> list[GenreAffinity]:
    """Rank genres of liked albums by mean rating (descending, stable)."""
    ranked = _grouped_means((album.genre, review.rating) for album, review in liked)
    return [GenreAffinity(genre=g, avg_rating=avg, count=n) for g, avg, n in ranked]


def artist_affinities(liked: list[tuple[Album, Review]]) -> list[ArtistAffinity]:
    """Rank artists of liked albums by mean rating (descending, stable)."""
    ranked = _grouped_means((album.artist, review.rating) for album, review in liked)
    return [ArtistAffinity(artist=a, avg_rating=avg, count=n) for a, avg, n in ranked]


def mood_tally(
    reviews: list[Review],
    threshold: int = DEFAULT_LIKE_THRESHOLD,
) -> list[tuple[str, int]]:
    """Count emotional tags over liked reviews, most frequent first.

    Ties keep first-encountered order.
    """
    counts: dict[str, int] = {}
    for review in reviews:
        if review.rating < threshold:
            continue
        for tag in review.emotional_tags:
            counts[tag] = counts.get(tag, 0) + 1
    return sorted(counts.items(), key=lambda kv: -kv[1])


def unexplored_genres(
    albums: list[Album],
    pairs: list[tuple[Album, Review]],
) -> list[str]:
    """Catalog genres (first-seen order) with no reviewed album."""
    explored = {album.genre for album, _ in pairs}
    all_genres = dict.fromkeys(album.genre for album in albums)
    return [genre for genre in all_genres if genre not in explored]


def recent_unreviewed(
    albums: list[Album],
    reviews: list[Review],
    current_year: int,
    window_years: int = 2,
) -> list[Album]:
    """Albums released in ``[current_year - window_years, ...]`` with no review."""
    reviewed_ids = {review.album_id for review in reviews}
    cutoff = current_year - window_years
    return [
        album
        for album in albums
        if album.release_year >= cutoff and album.id not in reviewed_ids
    ]
