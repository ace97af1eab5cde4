"""
Export helpers for recommendations and year-in-music summaries.

All writers create missing parent directories and return the written
``Path``.  They accept generic ``list[dict]`` / ``dict`` data so that the
adapters below are the only place that knows the model shapes.

CSV exports are flat (no nested values) so they open directly in a
spreadsheet.  JSON exports keep the nested structure and use the same
camelCase keys as the store.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from music_journal.models.insight import Suggestion, YearStats
from music_journal.utils.time_utils import round_half_up

SUGGESTION_FIELDS = ["rank", "score", "genre", "kind", "reason"]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.  An empty ``records`` list writes the header
        only when ``fieldnames`` is given, otherwise an empty file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records and not fieldnames:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def suggestions_to_records(suggestions: list[Suggestion]) -> list[dict[str, Any]]:
    """Flatten suggestions into ranked CSV rows."""
    return [
        {
            "rank":   rank,
            "score":  s.score,
            "genre":  s.genre,
            "kind":   str(s.kind),
            "reason": s.reason,
        }
        for rank, s in enumerate(suggestions, start=1)
    ]


def year_stats_to_dict(stats: YearStats) -> dict[str, Any]:
    """Serialise a ``YearStats`` for JSON export (camelCase album/review keys)."""
    return {
        "year":                stats.year,
        "totalAlbumsReviewed": stats.total_albums_reviewed,
        "totalListens":        stats.total_listens,
        "averageRating":       stats.average_rating,
        "topRated": [
            {
                "album":  item.album.model_dump(mode="json", by_alias=True),
                "review": item.review.model_dump(mode="json", by_alias=True),
            }
            for item in stats.top_rated
        ],
        "mostListened": [
            {"album": item.album.model_dump(mode="json", by_alias=True), "count": item.count}
            for item in stats.most_listened
        ],
        "topGenres": [{"genre": g.genre, "count": g.count} for g in stats.top_genres],
        "monthlyData": [
            {
                "month":   bucket.month,
                "albums":  [a.id for a in bucket.albums],
                "reviews": len(bucket.reviews),
            }
            for bucket in stats.monthly_data
        ],
    }


def year_stats_to_records(stats: YearStats) -> list[dict[str, Any]]:
    """Flatten the monthly breakdown of a ``YearStats`` into CSV rows."""
    return [
        {
            "year":    stats.year,
            "month":   bucket.month,
            "reviews": len(bucket.reviews),
            "albums":  len(bucket.albums),
            "avg_rating": (
                round_half_up(sum(r.rating for r in bucket.reviews) / len(bucket.reviews), 2)
                if bucket.reviews
                else ""
            ),
        }
        for bucket in stats.monthly_data
    ]
