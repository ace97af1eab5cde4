"""
music_journal.reporting — Terminal formatting and flat-file export.

Modules:
  formatters — ASCII tables for the album list, recommendations and
               year-in-music commands.
  export     — CSV/JSON writers plus model-to-record adapters.
"""
