"""
Review and listen-log models.

``Review`` is keyed by ``album_id``: an album has at most one review, and
saving a review for an album that already has one replaces it.  The store does
not enforce that ``album_id`` refers to an existing album; consumers drop
dangling reviews where an album is needed.

``ListenEvent`` is one entry of the append-only listen log.  The number of
events for an album is its listen count.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from music_journal.utils.time_utils import today

MIN_RATING = 1
MAX_RATING = 5


def _coerce_calendar_date(v: Any) -> Any:
    """Accept full ISO timestamps for date fields by keeping the date part."""
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str) and "T" in v:
        return datetime.fromisoformat(v.strip()).date()
    return v


def _clean_album_id(v: str) -> str:
    """Album ids are stored stripped, matching ``Album.id``."""
    if not v or not v.strip():
        raise ValueError("album_id must be a non-empty string.")
    return v.strip()


class FavoriteTrack(BaseModel):
    """A highlighted track within a review.

    ``timestamp`` is a free-text position marker such as ``"2:34"``; it is
    never parsed as a duration.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    timestamp: str = ""
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Favorite track name must be non-empty.")
        return v


class Review(BaseModel):
    """A user's review of one album.

    Attributes:
        album_id: Id of the reviewed album (natural key).
        rating: Star rating, 1–5 inclusive.
        date_first_listened: Date the album was first heard, if known.
        date_reviewed: Date the review was written; defaults to today.
        favorite_tracks: Ordered highlighted tracks (persisted as
            ``favoriteTrack``).
        personal_notes: Required free-text review body.
        emotional_tags: Ordered mood labels; duplicates are dropped keeping
            the first occurrence.  Any string is accepted.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    album_id: str
    rating: int
    date_first_listened: Optional[date] = None
    date_reviewed: date = Field(default_factory=today)
    favorite_tracks: list[FavoriteTrack] = Field(default_factory=list, alias="favoriteTrack")
    personal_notes: str
    emotional_tags: list[str] = Field(default_factory=list)

    @field_validator("album_id")
    @classmethod
    def validate_album_id(cls, v: str) -> str:
        return _clean_album_id(v)

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: int) -> int:
        if not MIN_RATING <= v <= MAX_RATING:
            raise ValueError(
                f"rating must be between {MIN_RATING} and {MAX_RATING}, got {v}."
            )
        return v

    @field_validator("personal_notes")
    @classmethod
    def validate_notes(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("personal_notes must be non-empty.")
        return v

    @field_validator("date_first_listened", mode="before")
    @classmethod
    def parse_first_listened(cls, v: Any) -> Any:
        if v == "":
            return None
        return _coerce_calendar_date(v)

    @field_validator("date_reviewed", mode="before")
    @classmethod
    def parse_date_reviewed(cls, v: Any) -> Any:
        return _coerce_calendar_date(v)

    @field_validator("favorite_tracks", mode="before")
    @classmethod
    def null_tracks_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("emotional_tags")
    @classmethod
    def dedupe_tags(cls, v: list[str]) -> list[str]:
        seen: dict[str, None] = {}
        for tag in v:
            tag = tag.strip()
            if tag:
                seen.setdefault(tag, None)
        return list(seen)


class ListenEvent(BaseModel):
    """One logged listen of an album."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    album_id: str
    timestamp: datetime

    @field_validator("album_id")
    @classmethod
    def validate_album_id(cls, v: str) -> str:
        return _clean_album_id(v)
