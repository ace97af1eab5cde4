"""Music Journal: a local-first personal album journal with ratings, listen logs,
year-in-music statistics and rule-based recommendations."""

__version__ = "0.1.0"
