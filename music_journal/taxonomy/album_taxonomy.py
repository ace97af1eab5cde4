"""
Fixed vocabularies for the music journal.

Three enumerations describe catalog entries and reviews:
  - ``ReleaseType``     — the *format* of an album (studio, live, compilation).
  - ``DiscoverySource`` — *how* the user came across the album.
  - ``MoodTag``         — the emotional labels offered when reviewing.

``MoodTag`` is advisory: reviews accept any tag string, the enum only lists the
labels offered by default.  ``SuggestionKind`` names the rule that produced a
recommendation entry.

This module has NO imports from any other ``music_journal`` package.
"""

from enum import StrEnum


class ReleaseType(StrEnum):
    """Album release format."""

    STUDIO = "Studio"
    LIVE = "Live"
    COMPILATION = "Compilation"


class DiscoverySource(StrEnum):
    """Where the album was discovered."""

    FRIEND = "Friend"
    ALGORITHM = "Algorithm"
    RADIO = "Radio"
    CONCERT = "Concert"
    SOCIAL_MEDIA = "Social Media"
    RANDOM_DISCOVERY = "Random Discovery"
    OTHER = "Other"


class MoodTag(StrEnum):
    """Default emotional-association labels (15)."""

    HAPPY = "Happy"
    SAD = "Sad"
    ENERGETIC = "Energetic"
    CALM = "Calm"
    ANGRY = "Angry"
    NOSTALGIC = "Nostalgic"
    UPLIFTING = "Uplifting"
    MELANCHOLIC = "Melancholic"
    ROMANTIC = "Romantic"
    INTROSPECTIVE = "Introspective"
    CHILL = "Chill"
    INTENSE = "Intense"
    HOPEFUL = "Hopeful"
    DARK = "Dark"
    DREAMY = "Dreamy"


class SuggestionKind(StrEnum):
    """Rule that emitted a recommendation entry."""

    GENRE_AFFINITY = "genre_affinity"
    """Top genres by mean rating among liked reviews."""

    ARTIST_AFFINITY = "artist_affinity"
    """Favourite artists by mean rating among liked reviews."""

    MOOD_AFFINITY = "mood_affinity"
    """Most frequent emotional tags among liked reviews."""

    UNEXPLORED_GENRE = "unexplored_genre"
    """A catalog genre with no review yet."""

    RECENT_RELEASE = "recent_release"
    """Recently released albums still waiting for a review."""
