"""Tests for music_journal.reporting.export."""

from __future__ import annotations

import csv
import json
from datetime import date
from pathlib import Path

from music_journal.models.insight import Suggestion
from music_journal.models.review import Review
from music_journal.reporting.export import (
    SUGGESTION_FIELDS,
    export_to_csv,
    export_to_json,
    suggestions_to_records,
    year_stats_to_dict,
    year_stats_to_records,
)
from music_journal.stats.year_in_music import compute_year_stats
from music_journal.taxonomy.album_taxonomy import SuggestionKind


def _suggestions() -> list[Suggestion]:
    return [
        Suggestion(genre="Jazz", reason="You've rated 2 Jazz albums highly (avg 4.5/5)",
                   score=4.5, kind=SuggestionKind.GENRE_AFFINITY),
        Suggestion(genre="Various", reason="Explore more from X - your favorite artists",
                   score=5.0, kind=SuggestionKind.ARTIST_AFFINITY),
    ]


# ── export_to_csv ─────────────────────────────────────────────────────────────


def test_export_to_csv_basic(tmp_path: Path) -> None:
    """Writes a valid CSV with correct headers and values."""
    out = tmp_path / "recs.csv"
    result = export_to_csv(suggestions_to_records(_suggestions()), out)

    assert result == out
    with out.open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert rows[0]["genre"] == "Jazz"
    assert rows[1]["kind"] == "artist_affinity"


def test_export_to_csv_custom_fieldnames(tmp_path: Path) -> None:
    """Custom fieldnames control column order; extra keys are ignored."""
    out = tmp_path / "cols.csv"
    export_to_csv([{"a": 1, "b": 2, "c": 3}], out, fieldnames=["c", "a"])
    assert out.read_text(encoding="utf-8").splitlines()[0] == "c,a"


def test_export_to_csv_empty_records(tmp_path: Path) -> None:
    """Empty records write an empty file, or just the header when fieldnames are given."""
    bare = export_to_csv([], tmp_path / "empty.csv")
    assert bare.read_text(encoding="utf-8") == ""

    headed = export_to_csv([], tmp_path / "headed.csv", SUGGESTION_FIELDS)
    assert headed.read_text(encoding="utf-8").strip() == ",".join(SUGGESTION_FIELDS)


def test_export_to_csv_creates_parent_dirs(tmp_path: Path) -> None:
    """Parent directories are created if they don't exist."""
    out = tmp_path / "nested" / "dir" / "output.csv"
    export_to_csv([{"x": 1}], out)
    assert out.exists()


# ── export_to_json ────────────────────────────────────────────────────────────


def test_export_to_json_list(tmp_path: Path) -> None:
    """Handles list payloads and creates parent dirs."""
    out = tmp_path / "a" / "b" / "recs.json"
    export_to_json(suggestions_to_records(_suggestions()), out)
    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert [r["rank"] for r in loaded] == [1, 2]


def test_export_to_json_non_serialisable_uses_default_str(tmp_path: Path) -> None:
    """Dates are written as strings."""
    out = tmp_path / "d.json"
    export_to_json({"when": date(2024, 1, 2)}, out)
    assert json.loads(out.read_text(encoding="utf-8"))["when"] == "2024-01-02"


# ── Adapters ──────────────────────────────────────────────────────────────────


def test_suggestions_to_records_keeps_order() -> None:
    """Rank follows list order, not score."""
    records = suggestions_to_records(_suggestions())
    assert [(r["rank"], r["genre"]) for r in records] == [(1, "Jazz"), (2, "Various")]
    assert list(records[0]) == SUGGESTION_FIELDS


def test_year_stats_to_dict(sample_albums, sample_reviews, sample_listens) -> None:
    """Nested export uses camelCase keys and album ids per month."""
    stats = compute_year_stats(sample_albums, sample_reviews, sample_listens, 2023)
    data = year_stats_to_dict(stats)

    assert data["year"] == 2023
    assert data["totalAlbumsReviewed"] == 3
    assert data["averageRating"] == 4.0
    assert data["topRated"][0]["album"]["releaseYear"] == 1959
    assert data["mostListened"][0] == {
        "album": data["mostListened"][0]["album"],
        "count": 3,
    }
    march = next(m for m in data["monthlyData"] if m["month"] == "Mar")
    assert march["albums"] == ["a1", "a2"]
    assert march["reviews"] == 2
    json.dumps(data)


def test_year_stats_to_records(sample_albums, sample_reviews) -> None:
    """One flat row per month, blank average for empty months."""
    stats = compute_year_stats(sample_albums, sample_reviews, [], 2023)
    rows = year_stats_to_records(stats)

    assert len(rows) == 12
    march = rows[2]
    assert march["month"] == "Mar"
    assert march["avg_rating"] == 4.0
    assert rows[0]["avg_rating"] == ""


def test_year_stats_records_round_half_up() -> None:
    """A month averaging exactly 4.125 exports as 4.13, not the banker's 4.12."""
    ratings = [5, 5, 4, 4, 4, 4, 4, 3]
    reviews = [
        Review(album_id=f"m{i}", rating=r, personal_notes="x", date_reviewed=date(2023, 5, i + 1))
        for i, r in enumerate(ratings)
    ]
    rows = year_stats_to_records(compute_year_stats([], reviews, [], 2023))

    may = rows[4]
    assert may["month"] == "May"
    assert may["reviews"] == 8
    assert may["avg_rating"] == 4.13
