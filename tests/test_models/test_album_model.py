"""Tests for the Album catalog model."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from music_journal.models.album import Album, new_album_id
from music_journal.taxonomy.album_taxonomy import DiscoverySource, ReleaseType


def _album(**overrides) -> Album:
    fields = dict(id="x1", artist="Björk", title="Homogenic", release_year=1997, genre="Electronic")
    fields.update(overrides)
    return Album(**fields)


class TestAlbum:
    def test_valid_construction_defaults(self):
        album = _album()
        assert album.release_type is ReleaseType.STUDIO
        assert album.cover_url == ""
        assert album.song_url is None
        assert album.discovery_source is None
        assert album.date_added.tzinfo is not None

    def test_is_frozen(self):
        album = _album()
        with pytest.raises(ValidationError):
            album.title = "Vespertine"

    @pytest.mark.parametrize("field", ["id", "artist", "title"])
    def test_blank_required_text_raises(self, field):
        with pytest.raises(ValidationError):
            _album(**{field: "   "})

    def test_required_text_is_stripped(self):
        assert _album(artist="  Björk ").artist == "Björk"

    @pytest.mark.parametrize("year", [999, 10000])
    def test_release_year_out_of_range_raises(self, year):
        with pytest.raises(ValidationError, match="release_year"):
            _album(release_year=year)

    def test_blank_optional_strings_become_none(self):
        album = _album(song_url=" ", discovery_notes="", discovery_source="")
        assert album.song_url is None
        assert album.discovery_notes is None
        assert album.discovery_source is None

    def test_unknown_discovery_source_raises(self):
        with pytest.raises(ValidationError):
            _album(discovery_source="Billboard")


class TestAlbumSerialization:
    def test_accepts_camel_case_keys(self):
        album = Album.model_validate(
            {
                "id": "s1",
                "artist": "A",
                "title": "T",
                "releaseYear": 2022,
                "genre": "Jazz",
                "releaseType": "Live",
                "coverUrl": "https://example.com/c.png",
                "discoverySource": "Social Media",
                "dateAdded": "2024-05-01T10:00:00.000Z",
            }
        )
        assert album.release_year == 2022
        assert album.release_type is ReleaseType.LIVE
        assert album.discovery_source is DiscoverySource.SOCIAL_MEDIA
        assert album.date_added == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_dumps_camel_case_keys(self):
        raw = _album().model_dump(mode="json", by_alias=True)
        assert "releaseYear" in raw
        assert "dateAdded" in raw
        assert raw["releaseType"] == "Studio"


class TestNewAlbumId:
    def test_ids_are_unique_hex(self):
        ids = {new_album_id() for _ in range(50)}
        assert len(ids) == 50
        assert all(len(i) == 32 and int(i, 16) >= 0 for i in ids)
