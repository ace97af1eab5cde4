"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept already-computed models (``Suggestion``, ``YearStats``,
``Album``) and return plain multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Ratings are drawn as five-character star bars (``****-`` for a 4) so tables
stay aligned in any terminal font.
"""

from __future__ import annotations

from typing import Optional

from music_journal.models.album import Album
from music_journal.models.insight import Suggestion, YearStats
from music_journal.models.review import MAX_RATING, Review
from music_journal.utils.time_utils import format_one_decimal


def _stars(rating: int) -> str:
    return "*" * rating + "-" * (MAX_RATING - rating)


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


# ── Album list ────────────────────────────────────────────────────────────────


def format_album_list(
    albums: list[Album],
    reviews: list[Review],
    title: str = "Albums",
    listen_counts: Optional[dict[str, int]] = None,
) -> str:
    """Format the album catalog as an ASCII table.

    Args:
        albums:        Albums in display order.
        reviews:       Review collection, used for the rating column.
        title:         Section header.
        listen_counts: Optional album id -> listen count map.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {title} ===")

    if not albums:
        lines.append("")
        lines.append("  (no albums -- add one with 'add-album' or run 'seed')")
        return "\n".join(lines)

    ratings = {}
    for review in reviews:
        ratings.setdefault(review.album_id, review.rating)
    counts = listen_counts or {}

    lines.append("")
    header = (
        f"  {'Artist':<24}  {'Title':<28}  {'Year':>4}  {'Genre':<14}  "
        f"{'Rating':<6}  {'Plays':>5}  {'Id':<12}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for album in albums:
        rating = ratings.get(album.id)
        rating_str = _stars(rating) if rating is not None else "new"
        lines.append(
            f"  {_clip(album.artist, 24):<24}  {_clip(album.title, 28):<28}  "
            f"{album.release_year:>4}  {_clip(album.genre, 14):<14}  "
            f"{rating_str:<6}  {counts.get(album.id, 0):>5}  {_clip(album.id, 12):<12}"
        )

    lines.append("")
    lines.append(f"  {len(albums)} album(s), {sum(1 for a in albums if a.id in ratings)} reviewed")
    return "\n".join(lines)


def format_filter_values(
    genres: list[str],
    years: list[int],
    artists: list[str],
) -> str:
    """List the values accepted by the ``--genre``, ``--year`` and ``--artist`` filters."""
    lines: list[str] = ["", "=== Filter values ==="]
    if not (genres or years or artists):
        lines.append("")
        lines.append("  (catalog is empty -- nothing to filter yet)")
        return "\n".join(lines)

    lines.append("")
    lines.append(f"  Genres  : {', '.join(genres) or '-'}")
    lines.append(f"  Years   : {', '.join(str(y) for y in years) or '-'}")
    lines.append(f"  Artists : {', '.join(artists) or '-'}")
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations(
    suggestions: list[Suggestion],
    unreviewed: Optional[list[Album]] = None,
    top_rated: Optional[list[tuple[Album, Review]]] = None,
) -> str:
    """Format ranked suggestions plus the optional reference lists.

    Args:
        suggestions: Output of ``generate_recommendations()``.
        unreviewed:  Albums waiting for a review.
        top_rated:   ``(album, review)`` pairs to show as "your top rated".

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Recommendations ===")

    if not suggestions:
        lines.append("")
        lines.append("  (no recommendations yet -- review a few albums first)")
    else:
        lines.append("")
        header = f"  {'#':>2}  {'Score':>5}  {'Genre':<14}  Reason"
        lines.append(header)
        lines.append("  " + "-" * 72)
        for rank, s in enumerate(suggestions, start=1):
            lines.append(
                f"  {rank:>2}  {format_one_decimal(s.score):>5}  "
                f"{_clip(s.genre, 14):<14}  {s.reason}"
            )

    if unreviewed:
        lines.append("")
        lines.append("  ---- Waiting for review ----")
        for album in unreviewed:
            lines.append(f"  - {album.artist} - {album.title} ({album.release_year})")

    if top_rated:
        lines.append("")
        lines.append("  ---- Your top rated ----")
        for album, review in top_rated:
            lines.append(f"  {_stars(review.rating)}  {album.artist} - {album.title}")

    return "\n".join(lines)


# ── Year in music ─────────────────────────────────────────────────────────────


def format_year_stats(stats: YearStats) -> str:
    """Format a ``YearStats`` summary as headline numbers and ranked lists."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {stats.year} in Music ===")
    lines.append("")
    lines.append(f"  Albums reviewed : {stats.total_albums_reviewed}")
    lines.append(f"  Total listens   : {stats.total_listens}")
    lines.append(f"  Average rating  : {format_one_decimal(stats.average_rating)}/5")

    if stats.total_albums_reviewed == 0 and stats.total_listens == 0:
        lines.append("")
        lines.append(f"  (no reviews or listens recorded in {stats.year})")
        return "\n".join(lines)

    lines.append("")
    lines.append("  ---- Top rated ----")
    if not stats.top_rated:
        lines.append("  (none)")
    for rank, item in enumerate(stats.top_rated, start=1):
        lines.append(
            f"  {rank:>2}. {_stars(item.review.rating)}  "
            f"{item.album.artist} - {item.album.title}"
        )

    lines.append("")
    lines.append("  ---- Most listened ----")
    if not stats.most_listened:
        lines.append("  (none)")
    for rank, item in enumerate(stats.most_listened, start=1):
        lines.append(
            f"  {rank:>2}. {item.count:>3}x  {item.album.artist} - {item.album.title}"
        )

    lines.append("")
    lines.append("  ---- Top genres ----")
    if not stats.top_genres:
        lines.append("  (none)")
    for rank, item in enumerate(stats.top_genres, start=1):
        lines.append(f"  {rank:>2}. {item.genre:<20} {item.count:>3}")

    lines.append("")
    lines.append("  ---- Reviews by month ----")
    for bucket in stats.monthly_data:
        count = len(bucket.reviews)
        lines.append(f"  {bucket.month:<3}  {'#' * count:<20} {count:>3}")

    return "\n".join(lines)
