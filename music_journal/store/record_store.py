"""
Record Store: typed access to the journal's three persisted collections.

Persisted layout (one key-value entry each, value = JSON array of flat records):

  ``music_journal_albums``   — ``Album`` records
  ``music_journal_reviews``  — ``Review`` records, at most one per ``albumId``
  ``music_journal_history``  — ``ListenEvent`` records, append-only

plus the boolean first-run flag ``music_journal_welcome_seen`` stored outside
the three collections.

The store never resolves cross-references: a review whose album has been
removed by some other means simply stays in the reviews array.  Deleting an
album through the store cascades to its reviews and listen events.

Reads are tolerant: a missing key reads as an empty collection, and records
that fail validation are logged and skipped.  Writes are not: every mutation
rewrites a whole collection, so it first re-reads that collection strictly and
raises ``StoreIntegrityError`` if the stored value is unreadable or holds a
record that would be dropped.  The damaged value is left untouched for the
user to repair.  Writes also propagate backend errors.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from music_journal.models.album import Album
from music_journal.models.review import ListenEvent, Review
from music_journal.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

ALBUMS_KEY = "music_journal_albums"
REVIEWS_KEY = "music_journal_reviews"
HISTORY_KEY = "music_journal_history"
WELCOME_SEEN_KEY = "music_journal_welcome_seen"

_M = TypeVar("_M", bound=BaseModel)


class StoreIntegrityError(RuntimeError):
    """Raised when a write would overwrite a damaged stored collection.

    Attributes:
        key:    The key-value entry holding the collection.
        detail: What is wrong with the stored value.
    """

    def __init__(self, key: str, detail: str) -> None:
        self.key    = key
        self.detail = detail
        super().__init__(
            f"Stored collection '{key}' is damaged ({detail}).  "
            "Refusing to overwrite it; repair or delete the entry first."
        )


class KeyValueBackend(Protocol):
    """Minimal string key-value storage the record store is written against."""

    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> bool: ...


def _to_raw(model: BaseModel) -> dict[str, Any]:
    raw = model.model_dump(mode="json", by_alias=True, exclude_none=True)
    if raw.get("favoriteTrack") == []:
        del raw["favoriteTrack"]
    return raw


class RecordStore:
    """Repository over albums, reviews and the listen log.

    Args:
        backend: Any ``KeyValueBackend``, usually a ``KeyValueRepository``.
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self.backend = backend

    # ── Albums ────────────────────────────────────────────────────────────────

    def list_albums(self) -> list[Album]:
        """Return all albums in stored order."""
        return self._read(ALBUMS_KEY, Album)

    def get_album(self, album_id: str) -> Optional[Album]:
        """Return the album with ``album_id``, or ``None``."""
        for album in self.list_albums():
            if album.id == album_id:
                return album
        return None

    def upsert_album(self, album: Album) -> None:
        """Replace the album with the same id in place, or append it."""
        albums = {a.id: a for a in self._read(ALBUMS_KEY, Album, strict=True)}
        action = "Updated" if album.id in albums else "Added"
        albums[album.id] = album
        self._write(ALBUMS_KEY, albums.values())
        logger.info("%s album %s (%s - %s)", action, album.id, album.artist, album.title)

    def delete_album(self, album_id: str) -> bool:
        """Delete an album and cascade to its reviews and listen events.

        Returns:
            ``True`` if the album existed.
        """
        albums = self._read(ALBUMS_KEY, Album, strict=True)
        reviews = self._read(REVIEWS_KEY, Review, strict=True)
        events = self._read(HISTORY_KEY, ListenEvent, strict=True)

        kept = [a for a in albums if a.id != album_id]
        existed = len(kept) != len(albums)
        self._write(ALBUMS_KEY, kept)

        kept_reviews = [r for r in reviews if r.album_id != album_id]
        self._write(REVIEWS_KEY, kept_reviews)

        kept_events = [e for e in events if e.album_id != album_id]
        self._write(HISTORY_KEY, kept_events)

        logger.info(
            "Deleted album %s (existed=%s) | reviews removed=%d | listens removed=%d",
            album_id,
            existed,
            len(reviews) - len(kept_reviews),
            len(events) - len(kept_events),
        )
        return existed

    def is_empty(self) -> bool:
        """``True`` when the catalog has no albums."""
        return not self.list_albums()

    # ── Reviews ───────────────────────────────────────────────────────────────

    def list_reviews(self) -> list[Review]:
        """Return all reviews in stored order."""
        return self._read(REVIEWS_KEY, Review)

    def get_review(self, album_id: str) -> Optional[Review]:
        """Return the review for ``album_id``, or ``None``."""
        for review in self.list_reviews():
            if review.album_id == album_id:
                return review
        return None

    def upsert_review(self, review: Review) -> None:
        """Insert or replace the review keyed by ``review.album_id``.

        A replaced review keeps its position in the stored array; a new one is
        appended.
        """
        by_album: dict[str, Review] = {}
        for existing in self._read(REVIEWS_KEY, Review, strict=True):
            by_album[existing.album_id] = existing
        by_album[review.album_id] = review
        self._write(REVIEWS_KEY, by_album.values())
        logger.info("Saved review for album %s (rating=%d)", review.album_id, review.rating)

    def submit_review(self, review: Review, at: Optional[datetime] = None) -> ListenEvent:
        """Save ``review`` and log one listen of its album.

        Returns:
            The listen event appended for this submission.
        """
        self._read(HISTORY_KEY, ListenEvent, strict=True)
        self.upsert_review(review)
        return self.append_listen_event(review.album_id, at=at)

    # ── Listen log ────────────────────────────────────────────────────────────

    def list_listen_events(self) -> list[ListenEvent]:
        """Return the full listen log in append order."""
        return self._read(HISTORY_KEY, ListenEvent)

    def append_listen_event(
        self, album_id: str, at: Optional[datetime] = None
    ) -> ListenEvent:
        """Append a listen of ``album_id`` timestamped ``at`` (default: now, UTC)."""
        event = ListenEvent(album_id=album_id, timestamp=at or utcnow())
        events = self._read(HISTORY_KEY, ListenEvent, strict=True)
        events.append(event)
        self._write(HISTORY_KEY, events)
        logger.debug("Logged listen for album %s at %s", album_id, event.timestamp)
        return event

    def listen_events_for_album(self, album_id: str) -> list[ListenEvent]:
        """Return the listen events of one album."""
        return [e for e in self.list_listen_events() if e.album_id == album_id]

    def count_listens(self, album_id: str) -> int:
        """Return how many listens are logged for ``album_id``."""
        return len(self.listen_events_for_album(album_id))

    # ── First-run flag ────────────────────────────────────────────────────────

    def welcome_seen(self) -> bool:
        """``True`` once the first-run bootstrap has completed."""
        return self.backend.get(WELCOME_SEEN_KEY) == "true"

    def mark_welcome_seen(self) -> None:
        self.backend.put(WELCOME_SEEN_KEY, "true")

    # ── Serialization ─────────────────────────────────────────────────────────

    def _read(self, key: str, model: type[_M], strict: bool = False) -> list[_M]:
        """Decode one collection.

        With ``strict=True`` (used before every write) damage raises
        ``StoreIntegrityError`` instead of being logged and skipped.
        """
        data = self.backend.get(key)
        if not data:
            return []
        try:
            raw_items = json.loads(data)
        except json.JSONDecodeError as exc:
            if strict:
                raise StoreIntegrityError(key, f"not valid JSON: {exc}") from exc
            logger.warning("Ignoring unreadable collection %s: %s", key, exc)
            return []
        if not isinstance(raw_items, list):
            if strict:
                raise StoreIntegrityError(key, "expected a JSON array")
            logger.warning("Ignoring collection %s: expected a JSON array.", key)
            return []

        out: list[_M] = []
        for index, raw in enumerate(raw_items):
            try:
                out.append(model.model_validate(raw))
            except ValidationError as exc:
                msg = exc.errors()[0].get("msg", exc)
                if strict:
                    raise StoreIntegrityError(
                        key, f"invalid {model.__name__} record #{index}: {msg}"
                    ) from exc
                logger.warning(
                    "Skipping invalid %s record #%d in %s: %s",
                    model.__name__, index, key, msg,
                )
        return out

    def _write(self, key: str, records) -> None:
        payload = [_to_raw(r) for r in records]
        self.backend.put(key, json.dumps(payload, ensure_ascii=False))
