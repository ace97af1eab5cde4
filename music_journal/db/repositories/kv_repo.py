"""
Repository for the ``kv_store`` table — string values keyed by name.

``KeyValueRepository`` satisfies ``music_journal.store.record_store.KeyValueBackend``
and is the default backend of ``RecordStore``.
"""

from __future__ import annotations

import logging
from typing import Optional

from music_journal.db.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class KeyValueRepository(BaseRepository):
    """Read/write access to the ``kv_store`` table."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value for ``key``, or ``None`` if absent."""
        row = self.fetchone("SELECT value FROM kv_store WHERE key = ?;", (key,))
        return row["value"] if row else None

    def put(self, key: str, value: str) -> None:
        """Insert or replace the value stored under ``key``."""
        self.execute(
            """
            INSERT INTO kv_store (key, value)
            VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value      = excluded.value,
                updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now');
            """,
            (key, value),
        )

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns ``True`` if a row was deleted."""
        cur = self.execute("DELETE FROM kv_store WHERE key = ?;", (key,))
        return cur.rowcount > 0
