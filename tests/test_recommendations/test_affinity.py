"""Tests for the affinity aggregations behind the recommendation rules."""

from __future__ import annotations

import pytest

from music_journal.models.album import Album
from music_journal.models.review import Review
from music_journal.recommendations.affinity import (
    artist_affinities,
    genre_affinities,
    liked_pairs,
    mood_tally,
    recent_unreviewed,
    reviewed_albums,
    unexplored_genres,
)


def _album(album_id: str, genre: str = "Jazz", artist: str = "Artist", year: int = 2000) -> Album:
    return Album(id=album_id, artist=artist, title=f"T-{album_id}", release_year=year, genre=genre)


def _review(album_id: str, rating: int, tags=()) -> Review:
    return Review(album_id=album_id, rating=rating, personal_notes="n", emotional_tags=list(tags))


class TestReviewedAlbums:
    def test_catalog_order_and_dangling_ignored(self, sample_albums, sample_reviews):
        reviews = [_review("ghost", 5)] + list(reversed(sample_reviews))
        pairs = reviewed_albums(sample_albums, reviews)
        assert [album.id for album, _ in pairs] == ["a1", "a2", "a3"]

    def test_liked_pairs_threshold(self, sample_albums, sample_reviews):
        pairs = reviewed_albums(sample_albums, sample_reviews)
        assert [a.id for a, _ in liked_pairs(pairs)] == ["a1", "a3"]
        assert [a.id for a, _ in liked_pairs(pairs, threshold=5)] == ["a1"]


class TestGroupedAffinities:
    def test_genre_mean_and_count(self, sample_albums, sample_reviews):
        liked = liked_pairs(reviewed_albums(sample_albums, sample_reviews))
        prefs = genre_affinities(liked)
        assert len(prefs) == 1
        assert prefs[0].genre == "Jazz"
        assert prefs[0].avg_rating == pytest.approx(4.5)
        assert prefs[0].count == 2

    def test_ties_keep_first_seen_order(self):
        albums = [_album("1", "Rock"), _album("2", "Jazz"), _album("3", "Folk")]
        reviews = [_review("1", 4), _review("2", 5), _review("3", 4)]
        prefs = genre_affinities(liked_pairs(reviewed_albums(albums, reviews)))
        assert [p.genre for p in prefs] == ["Jazz", "Rock", "Folk"]

    def test_artist_affinities(self):
        albums = [
            _album("1", artist="Nina Simone"),
            _album("2", artist="Bill Evans"),
            _album("3", artist="Nina Simone"),
        ]
        reviews = [_review("1", 4), _review("2", 5), _review("3", 5)]
        ranked = artist_affinities(liked_pairs(reviewed_albums(albums, reviews)))
        assert [(a.artist, a.avg_rating, a.count) for a in ranked] == [
            ("Bill Evans", 5.0, 1),
            ("Nina Simone", 4.5, 2),
        ]


class TestMoodTally:
    def test_counts_liked_reviews_only(self, sample_reviews):
        assert mood_tally(sample_reviews) == [("Calm", 2), ("Nostalgic", 1), ("Intense", 1)]

    def test_ties_by_first_encounter(self):
        reviews = [_review("1", 5, ["Dreamy", "Dark"]), _review("2", 4, ["Dark", "Happy"])]
        assert [t for t, _ in mood_tally(reviews)] == ["Dark", "Dreamy", "Happy"]

    def test_includes_reviews_without_album(self):
        assert mood_tally([_review("ghost", 5, ["Sad"])]) == [("Sad", 1)]


class TestUnexploredAndRecent:
    def test_unexplored_genres_first_seen_order(self, sample_albums, sample_reviews):
        pairs = reviewed_albums(sample_albums, sample_reviews)
        assert unexplored_genres(sample_albums, pairs) == ["Electronic"]

    def test_all_genres_explored(self, sample_albums, sample_reviews):
        reviews = sample_reviews + [_review("a4", 2)]
        pairs = reviewed_albums(sample_albums, reviews)
        assert unexplored_genres(sample_albums, pairs) == []

    def test_recent_unreviewed_window(self):
        albums = [_album("old", year=2020), _album("edge", year=2022), _album("new", year=2024)]
        reviews = [_review("new", 3)]
        recent = recent_unreviewed(albums, reviews, current_year=2024)
        assert [a.id for a in recent] == ["edge"]
