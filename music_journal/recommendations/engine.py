"""
Rule-based recommendation engine.

``generate_recommendations(albums, reviews)`` turns the catalog and review
collections into a ranked list of ``Suggestion`` records.  It is a pure
function: no I/O, inputs are never mutated, and given the same inputs and
``current_year`` the output is identical.

Rules (applied in this order, then merged)
------------------------------------------
    0. No reviewed album at all        -> return [] immediately.
    1. Genre affinity   score = mean   up to ``max_genre_suggestions`` entries
    2. Artist affinity  score = 5.0    one entry naming up to 3 artists
    3. Mood affinity    score = 4.5    one entry naming up to 3 tags
    4. Unexplored genre score = 3.5    one entry for the first such genre
    5. Recent releases  score = 4.0    one entry if any recent album is unreviewed

The merged list is sorted by score descending with a stable sort, so equal
scores keep rule order (and, within rule 1, genre ranking order).  Scores are
never clamped or normalised: a genre mean of 5.0 ties with the artist rule,
while typical means interleave with the fixed constants.
"""

from __future__ import annotations

import logging
from typing import Optional

from music_journal.models.album import Album
from music_journal.models.insight import Suggestion
from music_journal.models.review import Review
from music_journal.recommendations.affinity import (
    DEFAULT_LIKE_THRESHOLD,
    artist_affinities,
    genre_affinities,
    liked_pairs,
    mood_tally,
    recent_unreviewed,
    reviewed_albums,
    unexplored_genres,
)
from music_journal.taxonomy.album_taxonomy import SuggestionKind
from music_journal.utils.time_utils import format_one_decimal, today

logger = logging.getLogger(__name__)

VARIOUS = "Various"

ARTIST_AFFINITY_SCORE = 5.0
MOOD_AFFINITY_SCORE = 4.5
RECENT_RELEASE_SCORE = 4.0
UNEXPLORED_GENRE_SCORE = 3.5

TOP_ARTISTS = 3
TOP_MOODS = 3


def generate_recommendations(
    albums: list[Album],
    reviews: list[Review],
    *,
    current_year: Optional[int] = None,
    like_threshold: int = DEFAULT_LIKE_THRESHOLD,
    max_genre_suggestions: int = 3,
    recent_window_years: int = 2,
) -> list[Suggestion]:
    """Build the ranked suggestion list.

    Args:
        albums:                Full album catalog.
        reviews:               Full review collection.
        current_year:          Year used by the recent-release rule; defaults
                               to the current calendar year.
        like_threshold:        Minimum rating counted as "liked".
        max_genre_suggestions: Cap on genre-affinity entries.
        recent_window_years:   Width of the recent-release window.

    Returns:
        Suggestions sorted by score descending (stable).
    """
    pairs = reviewed_albums(albums, reviews)
    if not pairs:
        logger.debug("No reviewed albums; no recommendations generated.")
        return []

    if current_year is None:
        current_year = today().year

    liked = liked_pairs(pairs, like_threshold)
    suggestions: list[Suggestion] = []

    for pref in genre_affinities(liked)[:max_genre_suggestions]:
        plural = "s" if pref.count > 1 else ""
        suggestions.append(
            Suggestion(
                genre=pref.genre,
                reason=(
                    f"You've rated {pref.count} {pref.genre} album{plural} highly "
                    f"(avg {format_one_decimal(pref.avg_rating)}/5)"
                ),
                score=pref.avg_rating,
                kind=SuggestionKind.GENRE_AFFINITY,
            )
        )

    top_artists = artist_affinities(liked)[:TOP_ARTISTS]
    if top_artists:
        names = ", ".join(a.artist for a in top_artists)
        suggestions.append(
            Suggestion(
                genre=VARIOUS,
                reason=f"Explore more from {names} - your favorite artists",
                score=ARTIST_AFFINITY_SCORE,
                kind=SuggestionKind.ARTIST_AFFINITY,
            )
        )

    top_moods = [tag for tag, _ in mood_tally(reviews, like_threshold)[:TOP_MOODS]]
    if top_moods:
        suggestions.append(
            Suggestion(
                genre=VARIOUS,
                reason=(
                    f"You enjoy {', '.join(top_moods).lower()} music - "
                    "explore albums with similar vibes"
                ),
                score=MOOD_AFFINITY_SCORE,
                kind=SuggestionKind.MOOD_AFFINITY,
            )
        )

    unexplored = unexplored_genres(albums, pairs)
    if unexplored:
        genre = unexplored[0]
        suggestions.append(
            Suggestion(
                genre=genre,
                reason=f"Expand your horizons - you haven't reviewed any {genre} albums yet",
                score=UNEXPLORED_GENRE_SCORE,
                kind=SuggestionKind.UNEXPLORED_GENRE,
            )
        )

    if recent_unreviewed(albums, reviews, current_year, recent_window_years):
        suggestions.append(
            Suggestion(
                genre=VARIOUS,
                reason=(
                    f"Check out recent releases from "
                    f"{current_year - recent_window_years}-{current_year} "
                    "that you haven't reviewed"
                ),
                score=RECENT_RELEASE_SCORE,
                kind=SuggestionKind.RECENT_RELEASE,
            )
        )

    ranked = sorted(suggestions, key=lambda s: -s.score)
    logger.debug(
        "Generated %d suggestions from %d reviewed albums (%d liked).",
        len(ranked), len(pairs), len(liked),
    )
    return ranked
