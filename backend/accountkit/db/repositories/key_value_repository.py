import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

from accountkit.db.database import Database, get_db
from accountkit.core.exceptions import StoreError

logger = logging.getLogger(__name__)

# Opening the database can fail with OSError (unusable path) as well as sqlite3.Error
STORE_ERRORS = (sqlite3.Error, OSError)


class KeyValueRepository:
    """SQLite-backed Credential Store over the kv_store table"""

    def __init__(self, database: Optional[Database] = None):
        self.db = database or get_db()

    async def get(self, key: str) -> Optional[str]:
        """Get raw value by key"""
        try:
            row = await self.db.fetch_one(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            )
        except STORE_ERRORS as e:
            logger.error(f"Error reading {key}: {e}")
            raise StoreError(f"Failed to read {key}") from e
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        """Set value (create or replace)"""
        try:
            await self.db.execute(
                """INSERT INTO kv_store (key, value, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET
                       value = excluded.value,
                       updated_at = excluded.updated_at""",
                (key, value, datetime.now().isoformat())
            )
            await self.db.commit()
        except STORE_ERRORS as e:
            logger.error(f"Error writing {key}: {e}")
            await self._rollback()
            raise StoreError(f"Failed to write {key}") from e

    async def remove(self, key: str) -> None:
        """Delete a value. Removing an absent key is not an error."""
        try:
            await self.db.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            await self.db.commit()
        except STORE_ERRORS as e:
            logger.error(f"Error removing {key}: {e}")
            await self._rollback()
            raise StoreError(f"Failed to remove {key}") from e

    async def keys(self, prefix: str = "") -> List[str]:
        """List stored keys starting with prefix"""
        try:
            rows = await self.db.fetch_all(
                "SELECT key FROM kv_store WHERE substr(key, 1, ?) = ? ORDER BY key",
                (len(prefix), prefix)
            )
        except STORE_ERRORS as e:
            raise StoreError(f"Failed to list keys with prefix {prefix!r}") from e
        return [row["key"] for row in rows]

    async def _rollback(self):
        try:
            await self.db.rollback()
        except sqlite3.Error:
            logger.warning("Rollback failed after store error", exc_info=True)


# Singleton instance
_credential_store = None

def get_credential_store() -> KeyValueRepository:
    """Get singleton SQLite-backed Credential Store"""
    global _credential_store
    if _credential_store is None:
        _credential_store = KeyValueRepository()
    return _credential_store
