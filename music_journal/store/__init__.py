"""
music_journal.store — persistence of the journal's collections.

Modules:
  record_store — RecordStore over a key-value backend (albums, reviews, listens).
  seed         — first-run bootstrap and sample library loading.
"""
