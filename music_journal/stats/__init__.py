"""
music_journal.stats — aggregate summaries over the journal.

Modules:
  year_in_music — compute_year_stats() and available_years().
"""
