"""
Recommendation engine: turns the catalog and its reviews into ranked
suggestions with human-readable reasons.

Modules
-------
affinity : GenreAffinity / ArtistAffinity dataclasses and the pure grouping,
           tally and set-difference passes the rules are built on.
engine   : generate_recommendations() — applies the five rules and ranks.
"""
