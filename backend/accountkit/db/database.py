import logging
import os
from typing import Optional

import aiosqlite

from accountkit.core.config import settings
from accountkit.db.schema import ALL_TABLES, INDEXES

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or settings.database_path
        self._connection: Optional[aiosqlite.Connection] = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    async def connect(self):
        """Create database connection"""
        if not self._connection:
            directory = os.path.dirname(self.db_path)
            if directory and self.db_path != ":memory:":
                os.makedirs(directory, exist_ok=True)
            self._connection = await aiosqlite.connect(self.db_path)
            self._connection.row_factory = aiosqlite.Row

    async def disconnect(self):
        """Close database connection"""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def execute(self, query: str, params: tuple = ()):
        """Execute a query"""
        if not self._connection:
            await self.connect()
        return await self._connection.execute(query, params)

    async def fetch_one(self, query: str, params: tuple = ()):
        """Fetch one row"""
        cursor = await self.execute(query, params)
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def fetch_all(self, query: str, params: tuple = ()):
        """Fetch all rows"""
        cursor = await self.execute(query, params)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def commit(self):
        """Commit transaction"""
        if self._connection:
            await self._connection.commit()

    async def rollback(self):
        """Rollback transaction"""
        if self._connection:
            await self._connection.rollback()

    async def create_tables(self):
        """Create all database tables"""
        for table_sql in ALL_TABLES:
            await self.execute(table_sql)

        for index_sql in INDEXES:
            await self.execute(index_sql)

        await self.commit()


# Global database instance
db = Database()


def get_db() -> Database:
    """Get the current database instance"""
    return db


async def init_db(database: Optional[Database] = None) -> Database:
    """Initialize database with schema"""
    database = database or db
    await database.connect()
    await database.create_tables()
    logger.info(f"Database initialized at {database.db_path}")
    return database
