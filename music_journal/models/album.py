"""
Album catalog model.

``Album`` is the unit of the journal's catalog. It is created by the
add-album flow, replaced wholesale by id on edit, and deleted explicitly (the
store cascades the delete to the album's review and listen events).

Persisted JSON uses camelCase keys (``releaseYear``, ``coverUrl``,
``dateAdded``, ...) so data exported from the browser version of the journal loads
unchanged; Python code uses the snake_case attribute names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from music_journal.taxonomy.album_taxonomy import DiscoverySource, ReleaseType
from music_journal.utils.time_utils import utcnow


def new_album_id() -> str:
    """Return a fresh, unique album id."""
    return uuid4().hex


class Album(BaseModel):
    """A catalogued album.

    Attributes:
        id: Unique identifier (string). Reviews and listen events reference it.
        artist: Performing artist.
        title: Album title.
        release_year: Year of release.
        genre: Free-text genre label; grouping is exact-match on this string.
        release_type: Studio, Live or Compilation.
        cover_url: Cover image URI; may be empty.
        song_url: Optional link to a representative track.
        discovery_source: Optional ``DiscoverySource``.
        discovery_notes: Optional free-form note on how it was discovered.
        date_added: UTC timestamp of catalog entry.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    artist: str
    title: str
    release_year: int
    genre: str
    release_type: ReleaseType = ReleaseType.STUDIO
    cover_url: str = ""
    song_url: Optional[str] = None
    discovery_source: Optional[DiscoverySource] = None
    discovery_notes: Optional[str] = None
    date_added: datetime = Field(default_factory=utcnow)

    @field_validator("id", "artist", "title")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be a non-empty string.")
        return v.strip()

    @field_validator("release_year")
    @classmethod
    def validate_release_year(cls, v: int) -> int:
        if not 1000 <= v <= 9999:
            raise ValueError(f"release_year must be a four-digit year, got {v}.")
        return v

    @field_validator("song_url", "discovery_notes", "discovery_source", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
