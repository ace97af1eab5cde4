"""
Sample library loader and first-run bootstrap.

Responsibilities
----------------
1. Load ``config/sample/sample_library.json`` (or any file of the same shape)
   into validated ``Album`` / ``Review`` models.
2. Write them into a ``RecordStore`` only when the catalog is empty.
3. Gate the whole first-run flow behind the store's welcome flag so it runs
   at most once.

File format
-----------
::

    {
      "albums":  [ {"id": "sample-1", "artist": ..., "releaseYear": 2023, ...} ],
      "reviews": [ {"albumId": "sample-1", "rating": 5, ...} ]
    }

Reviews without ``dateReviewed`` default to the load date, and albums without
``dateAdded`` to the load time, so freshly seeded data shows up in the current
year's stats.

Validation rules
----------------
- Duplicate album ids are rejected.
- A review must reference an album id present in the same file.
- At most one review per album id.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from music_journal.models.album import Album
from music_journal.models.review import Review
from music_journal.store.record_store import RecordStore

log = logging.getLogger(__name__)


def _validate_library(raw: dict[str, Any]) -> None:
    """Raise ValueError for structural problems in a sample library document."""
    albums = raw.get("albums")
    reviews = raw.get("reviews", [])
    if not isinstance(albums, list):
        raise ValueError("Sample library must contain an 'albums' array.")
    if not isinstance(reviews, list):
        raise ValueError("'reviews' must be an array when present.")

    seen_ids: set[str] = set()
    for i, rec in enumerate(albums):
        album_id = rec.get("id") if isinstance(rec, dict) else None
        if not album_id:
            raise ValueError(f"Album at index {i} is missing 'id'.")
        if album_id in seen_ids:
            raise ValueError(f"Duplicate album id '{album_id}' at index {i}.")
        seen_ids.add(album_id)

    reviewed: set[str] = set()
    for i, rec in enumerate(reviews):
        album_id = (rec.get("albumId") or rec.get("album_id")) if isinstance(rec, dict) else None
        if not album_id:
            raise ValueError(f"Review at index {i} is missing 'albumId'.")
        if album_id not in seen_ids:
            raise ValueError(f"Review at index {i} references unknown album '{album_id}'.")
        if album_id in reviewed:
            raise ValueError(f"Duplicate review for album '{album_id}' at index {i}.")
        reviewed.add(album_id)


def load_sample_library(path: Path) -> tuple[list[Album], list[Review]]:
    """Parse and validate a sample library file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On malformed JSON or structural violations.
        pydantic.ValidationError: If a record fails model validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sample library not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Sample library {path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError("Sample library must be a JSON object.")

    _validate_library(raw)
    albums = [Album.model_validate(rec) for rec in raw["albums"]]
    reviews = [Review.model_validate(rec) for rec in raw.get("reviews", [])]
    return albums, reviews


def load_sample_data_if_empty(store: RecordStore, path: Path) -> bool:
    """Seed ``store`` from ``path`` when it holds no albums.

    Returns:
        ``True`` if sample data was written, ``False`` if the user already has
        albums.
    """
    if not store.is_empty():
        log.info("Catalog already has albums; sample data not loaded.")
        return False

    albums, reviews = load_sample_library(path)
    for album in albums:
        store.upsert_album(album)
    for review in reviews:
        store.upsert_review(review)
    log.info("Loaded sample library: %d albums, %d reviews.", len(albums), len(reviews))
    return True


def bootstrap(store: RecordStore, path: Path, with_sample_data: bool = True) -> bool:
    """Run the first-run flow once.

    Does nothing when the welcome flag is already set.  Otherwise seeds the
    store (if ``with_sample_data`` and the catalog is empty) and sets the flag.

    Returns:
        ``True`` if sample data was written during this call.
    """
    if store.welcome_seen():
        log.debug("First-run bootstrap already completed.")
        return False

    loaded = load_sample_data_if_empty(store, path) if with_sample_data else False
    store.mark_welcome_seen()
    return loaded
