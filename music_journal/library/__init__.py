"""music_journal.library — search, filter and sort over the album catalog."""
