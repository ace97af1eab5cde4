"""
Shared pytest fixtures for the Music Journal test suite.

Provides:
  - ``in_memory_db``: A fresh in-memory SQLite connection with the schema
    applied. Created anew for each test that requests it.
  - ``store``: A ``RecordStore`` backed by ``in_memory_db``.
  - Sample albums / reviews / listen events shared by several test modules.
"""

from __future__ import annotations

import sqlite3
from datetime import date, datetime, timezone
from typing import Generator

import pytest

from music_journal.db.repositories.kv_repo import KeyValueRepository
from music_journal.db.schema import apply_schema
from music_journal.models.album import Album
from music_journal.models.review import FavoriteTrack, ListenEvent, Review
from music_journal.store.record_store import RecordStore
from music_journal.taxonomy.album_taxonomy import DiscoverySource, ReleaseType


# ── Database fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the schema applied.

    Connection is closed after the test.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    apply_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def store(in_memory_db: sqlite3.Connection) -> RecordStore:
    """An empty ``RecordStore`` on the in-memory database."""
    return RecordStore(KeyValueRepository(in_memory_db))


# ── Sample domain objects ─────────────────────────────────────────────────────

@pytest.fixture
def sample_albums() -> list[Album]:
    """Four albums across three genres, added on consecutive days."""
    return [
        Album(
            id="a1",
            artist="Miles Davis",
            title="Kind of Blue",
            release_year=1959,
            genre="Jazz",
            discovery_source=DiscoverySource.FRIEND,
            date_added=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
        Album(
            id="a2",
            artist="Radiohead",
            title="OK Computer",
            release_year=1997,
            genre="Rock",
            date_added=datetime(2024, 1, 2, tzinfo=timezone.utc),
        ),
        Album(
            id="a3",
            artist="John Coltrane",
            title="A Love Supreme",
            release_year=1965,
            genre="Jazz",
            release_type=ReleaseType.STUDIO,
            date_added=datetime(2024, 1, 3, tzinfo=timezone.utc),
        ),
        Album(
            id="a4",
            artist="Burial",
            title="Untrue",
            release_year=2007,
            genre="Electronic",
            date_added=datetime(2024, 1, 4, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def sample_reviews() -> list[Review]:
    """Reviews for a1..a3 in 2023; a4 stays unreviewed."""
    return [
        Review(
            album_id="a1",
            rating=5,
            date_reviewed=date(2023, 3, 10),
            personal_notes="Timeless.",
            emotional_tags=["Calm", "Nostalgic"],
            favorite_tracks=[FavoriteTrack(name="So What", timestamp="1:30")],
        ),
        Review(
            album_id="a2",
            rating=3,
            date_reviewed=date(2023, 3, 20),
            personal_notes="Good, not my favourite.",
            emotional_tags=["Dark"],
        ),
        Review(
            album_id="a3",
            rating=4,
            date_reviewed=date(2023, 7, 4),
            personal_notes="Spiritual.",
            emotional_tags=["Calm", "Intense"],
        ),
    ]


@pytest.fixture
def sample_listens() -> list[ListenEvent]:
    """Three listens of a1 and one of a2 in 2023, one of a1 in 2024."""
    return [
        ListenEvent(album_id="a1", timestamp=datetime(2023, 3, 10, 20, 0, tzinfo=timezone.utc)),
        ListenEvent(album_id="a1", timestamp=datetime(2023, 4, 1, 9, 0, tzinfo=timezone.utc)),
        ListenEvent(album_id="a2", timestamp=datetime(2023, 3, 20, 21, 0, tzinfo=timezone.utc)),
        ListenEvent(album_id="a1", timestamp=datetime(2023, 12, 31, 23, 59, 59, tzinfo=timezone.utc)),
        ListenEvent(album_id="a1", timestamp=datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)),
    ]
