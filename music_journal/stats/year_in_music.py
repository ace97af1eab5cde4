"""
Year-in-music aggregator.

``compute_year_stats()`` summarises one calendar year of the journal:

  total_albums_reviewed  distinct catalog albums with an in-year review
  total_listens          in-year listen events (not deduplicated)
  average_rating         mean in-year rating, one decimal (0.0 if none)
  top_rated              (album, review) by rating desc, top N
  most_listened          (album, count) by count desc, top N
  top_genres             (genre, count) of in-year reviewed albums, top N
  monthly_data           12 buckets Jan..Dec keyed on date_reviewed

Year containment is a parsed-value comparison (see
``utils.time_utils.in_year``): review dates are calendar dates, listen
timestamps are compared in UTC.  Entries whose album is no longer in the
catalog are dropped from the album-bearing lists rather than reported empty.
All rankings are stable, so ties keep review-list / first-seen order.

An empty year is not an error: the result is fully populated with zeros,
empty lists and twelve empty month buckets.
"""

from __future__ import annotations

import logging
from typing import Optional

from music_journal.models.album import Album
from music_journal.models.insight import (
    GenreCount,
    ListenCount,
    MonthBucket,
    RatedAlbum,
    YearStats,
)
from music_journal.models.review import ListenEvent, Review
from music_journal.utils.time_utils import (
    MONTH_LABELS,
    in_year,
    parse_year,
    round_half_up,
    today,
)

logger = logging.getLogger(__name__)


def _album_index(albums: list[Album]) -> dict[str, Album]:
    index: dict[str, Album] = {}
    for album in albums:
        index.setdefault(album.id, album)
    return index


def _albums_for(albums: list[Album], reviews: list[Review]) -> list[Album]:
    ids = {r.album_id for r in reviews}
    return [a for a in albums if a.id in ids]


def compute_year_stats(
    albums: list[Album],
    reviews: list[Review],
    listen_events: list[ListenEvent],
    year: int | str,
    *,
    top_rated_limit: int = 10,
    most_listened_limit: int = 10,
    top_genres_limit: int = 5,
) -> YearStats:
    """Compute the ``YearStats`` summary for ``year``.

    Args:
        albums:              Full album catalog.
        reviews:             Full review collection.
        listen_events:       Full listen log.
        year:                Target calendar year (``2023`` or ``"2023"``).
        top_rated_limit:     Length cap of ``top_rated``.
        most_listened_limit: Length cap of ``most_listened``.
        top_genres_limit:    Length cap of ``top_genres``.

    Returns:
        A populated ``YearStats``.

    Raises:
        ValueError: If ``year`` is not a whole number.
    """
    target = parse_year(year)
    index = _album_index(albums)

    year_reviews = [r for r in reviews if in_year(r.date_reviewed, target)]
    year_albums = _albums_for(albums, year_reviews)
    year_listens = [e for e in listen_events if in_year(e.timestamp, target)]

    average = (
        round_half_up(sum(r.rating for r in year_reviews) / len(year_reviews), 1)
        if year_reviews
        else 0.0
    )

    rated = [
        RatedAlbum(album=index[r.album_id], review=r)
        for r in year_reviews
        if r.album_id in index
    ]
    top_rated = sorted(rated, key=lambda item: -item.review.rating)[:top_rated_limit]

    listen_counts: dict[str, int] = {}
    for event in year_listens:
        listen_counts[event.album_id] = listen_counts.get(event.album_id, 0) + 1
    most_listened = sorted(
        (
            ListenCount(album=index[album_id], count=count)
            for album_id, count in listen_counts.items()
            if album_id in index
        ),
        key=lambda item: -item.count,
    )[:most_listened_limit]

    genre_counts: dict[str, int] = {}
    for album in year_albums:
        genre_counts[album.genre] = genre_counts.get(album.genre, 0) + 1
    top_genres = sorted(
        (GenreCount(genre=g, count=n) for g, n in genre_counts.items()),
        key=lambda item: -item.count,
    )[:top_genres_limit]

    monthly_data: list[MonthBucket] = []
    for month_number, label in enumerate(MONTH_LABELS, start=1):
        month_reviews = [r for r in year_reviews if r.date_reviewed.month == month_number]
        monthly_data.append(
            MonthBucket(
                month=label,
                albums=_albums_for(albums, month_reviews),
                reviews=month_reviews,
            )
        )

    logger.debug(
        "Year %d: %d reviews, %d listens, %d albums.",
        target, len(year_reviews), len(year_listens), len(year_albums),
    )

    return YearStats(
        year=target,
        total_albums_reviewed=len(year_albums),
        total_listens=len(year_listens),
        average_rating=average,
        top_rated=top_rated,
        most_listened=most_listened,
        top_genres=top_genres,
        monthly_data=monthly_data,
    )


def available_years(reviews: list[Review], current: Optional[int] = None) -> list[int]:
    """Years that have reviews, plus the current year, newest first."""
    if current is None:
        current = today().year
    years = {r.date_reviewed.year for r in reviews}
    years.add(current)
    return sorted(years, reverse=True)
